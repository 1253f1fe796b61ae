"""Procedural cave generation: cellular-automaton caves stitched into tiled maps."""

from .core import (
    Cave,
    CaveConfig,
    CaveGenerator,
    CaveMap,
    Exit,
    Side,
    FLOOR,
    WALL,
    generate_cave,
    generate_cave_map,
)
from .exceptions import ConfigurationError
from .presets import get_preset, list_presets

__version__ = "0.1.0"

__all__ = [
    "Cave",
    "CaveConfig",
    "CaveGenerator",
    "CaveMap",
    "Exit",
    "Side",
    "FLOOR",
    "WALL",
    "generate_cave",
    "generate_cave_map",
    "ConfigurationError",
    "get_preset",
    "list_presets",
]
