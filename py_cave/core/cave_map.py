"""
Multi-cell cave maps.

Caves are generated one cell at a time in raster order (rows from the
bottom, cells left to right). Each cell copies the exits of the cave on
its left and the cave below it, so shared edges open at the same
offsets. Edges on the map boundary stay closed.
"""

from typing import Any, List, Mapping, Optional, Sequence, Union

import numpy as np
import structlog

from ..config import settings
from ..exceptions import ConfigurationError
from ..presets import get_preset
from ..utils.random import Seed, create_prng, resolve_seed
from .cave_generator import Cave, CaveConfig, CaveGenerator, coerce_config
from .exits import Exit

logger = structlog.get_logger()

PresetLike = Union[CaveConfig, Mapping[str, Any], str]


def _load_preset(preset: PresetLike) -> CaveConfig:
    if isinstance(preset, str):
        return coerce_config(get_preset(preset))
    return coerce_config(preset)


class CaveMap:
    """
    A width x height arrangement of caves with matching exits.

    ``caves[x][y]`` holds the cave of cell (x, y); y grows upward, matching
    the top/bottom convention of exits.
    """

    def __init__(
        self,
        width: int,
        height: int,
        presets: Optional[Sequence[PresetLike]] = None,
        seed: Optional[Seed] = None,
    ):
        """
        Initialize the map.

        Args:
            width: Number of cells horizontally
            height: Number of cells vertically
            presets: Non-empty pool of configs, mappings or preset names,
                defaults to the preset named by settings.default_preset
            seed: Map seed; each cell gets a sub-seed drawn from it

        Raises:
            ConfigurationError: on empty pools, bad sizes or invalid presets
        """
        if width < 1 or height < 1:
            raise ConfigurationError(f"Cave map size must be positive, got {width}x{height}")
        if width * height > settings.max_map_cells:
            raise ConfigurationError(
                f"Cave map of {width * height} cells exceeds the maximum of {settings.max_map_cells}"
            )
        if presets is None:
            presets = [settings.default_preset]
        if not presets:
            raise ConfigurationError("Cave map needs at least one preset")

        self.width = width
        self.height = height
        self.generators = [CaveGenerator(_load_preset(p)) for p in presets]
        self.seed = seed
        self.caves: List[List[Optional[Cave]]] = [[None] * height for _ in range(width)]

    def cave_at(self, x: int, y: int) -> Optional[Cave]:
        return self.caves[x][y]

    def _constraints(self, x: int, y: int) -> Exit:
        """Build the exit constraints of cell (x, y) from its placed neighbours."""
        top = None if y == self.height - 1 else ()
        right = None if x == self.width - 1 else ()
        bottom = None if y == 0 else self.caves[x][y - 1].exits.top
        left = None if x == 0 else self.caves[x - 1][y].exits.right
        return Exit(top=top, right=right, bottom=bottom, left=left)

    def generate(self) -> List[List[Cave]]:
        """
        Generate every cell.

        The map seed drives a single PRNG stream. For each cell it first
        picks a preset uniformly from the whole pool, then draws the cell's
        sub-seed.

        Returns:
            ``caves[x][y]`` for every cell
        """
        self.seed = resolve_seed(self.seed)
        rng = create_prng(self.seed)
        self.caves = [[None] * self.height for _ in range(self.width)]

        logger.info("Generating cave map", width=self.width, height=self.height, seed=self.seed)

        for y in range(self.height):
            for x in range(self.width):
                exits = self._constraints(x, y)
                generator = rng.choice(self.generators)
                cell_seed = rng.derive_seed()
                self.caves[x][y] = generator.generate(seed=cell_seed, exits=exits)

        logger.info("Cave map generated", cells=self.width * self.height)
        return self.caves

    def to_array(self) -> np.ndarray:
        """
        Stitch all caves into one ``(total_width, total_height)`` array.

        Raises:
            ConfigurationError: if cells differ in size or were not generated
        """
        sizes = {cave.size for column in self.caves for cave in column if cave is not None}
        if any(cave is None for column in self.caves for cave in column):
            raise ConfigurationError("Cave map has not been generated")
        if len(sizes) != 1:
            raise ConfigurationError(f"Cannot stitch caves of different sizes: {sorted(sizes)}")

        cell_w, cell_h = sizes.pop()
        stitched = np.empty((cell_w * self.width, cell_h * self.height), dtype=np.int8)
        for x in range(self.width):
            for y in range(self.height):
                stitched[x * cell_w:(x + 1) * cell_w, y * cell_h:(y + 1) * cell_h] = self.caves[x][y].tiles
        return stitched


def generate_cave_map(
    width: int,
    height: int,
    presets: Optional[Sequence[PresetLike]] = None,
    seed: Optional[Seed] = None,
) -> CaveMap:
    """Build and generate a cave map in one call."""
    cave_map = CaveMap(width, height, presets, seed=seed)
    cave_map.generate()
    return cave_map
