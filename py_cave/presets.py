"""
Named cave presets.

Each preset is a plain dictionary of CaveConfig fields so it can be
tweaked before validation, e.g. ``CaveConfig(**{**get_preset("default"), "width": 80})``.
"""

from typing import Any, Dict, List

from .exceptions import ConfigurationError

PRESETS: Dict[str, Dict[str, Any]] = {
    "default": {
        "name": "default",
        "width": 50,
        "height": 50,
        "fill_threshold": 45,
        "smoothing_iterations": 5,
        "smoothing_threshold": 4,
        "region_threshold": 10,
        "path_radius": 1,
    },
    # Low fill, wide corridors: large open chambers
    "open_caverns": {
        "name": "open_caverns",
        "width": 50,
        "height": 50,
        "fill_threshold": 38,
        "smoothing_iterations": 6,
        "smoothing_threshold": 4,
        "region_threshold": 20,
        "path_radius": 2,
    },
    # Dense fill, thin corridors
    "tight_tunnels": {
        "name": "tight_tunnels",
        "width": 50,
        "height": 50,
        "fill_threshold": 52,
        "smoothing_iterations": 3,
        "smoothing_threshold": 4,
        "region_threshold": 6,
        "path_radius": 0,
    },
    "sparse_pockets": {
        "name": "sparse_pockets",
        "width": 40,
        "height": 40,
        "fill_threshold": 48,
        "smoothing_iterations": 4,
        "smoothing_threshold": 5,
        "region_threshold": 4,
        "path_radius": 1,
    },
    "large_halls": {
        "name": "large_halls",
        "width": 96,
        "height": 96,
        "fill_threshold": 44,
        "smoothing_iterations": 8,
        "smoothing_threshold": 4,
        "region_threshold": 40,
        "path_radius": 2,
    },
}


def get_preset(name: str) -> Dict[str, Any]:
    """
    Return a copy of the named preset.

    Raises:
        ConfigurationError: if no preset has that name
    """
    if name not in PRESETS:
        raise ConfigurationError(f"Unknown cave preset '{name}'. Available: {', '.join(list_presets())}")
    return dict(PRESETS[name])


def list_presets() -> List[str]:
    """Return the names of all built-in presets."""
    return list(PRESETS.keys())
