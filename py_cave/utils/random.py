"""
Random number generation utilities.

Every generation run owns its own Alea PRNG; nothing here keeps
process-wide state. Python's random and NumPy's random are not used so
that a seed reproduces the same cave on every platform.
"""

import time
from typing import Optional, Union

import structlog

from ..config import settings
from ..core.alea_prng import AleaPRNG
from ..exceptions import ConfigurationError

logger = structlog.get_logger()

Seed = Union[str, int]


def _is_blank(seed: Optional[Seed]) -> bool:
    return seed is None or (isinstance(seed, str) and seed.strip() == "")


def resolve_seed(*candidates: Optional[Seed]) -> Seed:
    """
    Return the first usable seed among the candidates.

    Candidates are checked in order, then ``settings.default_seed``. When
    none is usable the wall clock is used, which breaks reproducibility,
    so a warning is logged. With ``settings.require_seed`` enabled the
    fallback is refused instead.

    Args:
        candidates: Seeds in priority order, ``None`` or blank strings are skipped

    Returns:
        The chosen seed
    """
    for seed in candidates:
        if not _is_blank(seed):
            return seed

    if not _is_blank(settings.default_seed):
        return settings.default_seed

    if settings.require_seed:
        raise ConfigurationError("No seed supplied and PY_CAVE_REQUIRE_SEED is enabled")

    seed = repr(time.time())
    logger.warning("No seed supplied, falling back to wall clock; output is not reproducible", seed=seed)
    return seed


def create_prng(seed: Seed) -> AleaPRNG:
    """Create a fresh Alea PRNG for one generation run."""
    return AleaPRNG(seed)
