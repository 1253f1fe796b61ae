"""
Single cave generation.

This module ties the pipeline together:

1. Random fill
2. Exit resolution and carving
3. First smoothing pass
4. Small wall regions absorbed into floor
5. Small floor regions filled in, surviving floor regions kept
6. Corridors carved between surviving floor regions
7. Small wall regions absorbed again
8. Remaining smoothing passes

A run is a pure function of its configuration, seed and exit
constraints. There are no retries.
"""

from dataclasses import dataclass
from typing import Any, List, Mapping, Optional, Tuple, Union

import numpy as np
import structlog
from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from ..config import settings
from ..exceptions import ConfigurationError
from ..utils.random import Seed, create_prng, resolve_seed
from .alea_prng import AleaPRNG
from .connector import Connection, connect_regions
from .exits import Exit, resolve_exits
from .grid import FLOOR, WALL, Grid
from .regions import Region, filter_regions
from .smoothing import fill_map, smooth

logger = structlog.get_logger()


class CaveConfig(BaseModel):
    """
    Parameters for generating one cave.

    Building the model directly raises pydantic's ``ValidationError`` on bad
    values; ``coerce_config`` turns that into ``ConfigurationError`` for
    mapping input. Both derive from ``ValueError``.
    """

    model_config = ConfigDict(frozen=True)

    name: Optional[str] = Field(None, description="Preset name, informational only")
    width: int = Field(50, ge=5, description="Cave width in tiles")
    height: int = Field(50, ge=5, description="Cave height in tiles")
    seed: Optional[Union[str, int]] = Field(None, description="Fallback seed when generate() gets none")
    fill_threshold: int = Field(45, ge=0, le=100, description="Percent chance an interior tile starts as wall")
    smoothing_iterations: int = Field(5, ge=1, description="Total number of smoothing passes")
    smoothing_threshold: int = Field(4, ge=1, le=8, description="Wall count that leaves a tile unchanged")
    region_threshold: int = Field(10, ge=0, description="Minimum size of an isolated region")
    path_radius: int = Field(1, ge=0, description="Corridor brush radius")

    @model_validator(mode="after")
    def _check_limits(self):
        if self.width > settings.max_cave_width or self.height > settings.max_cave_height:
            raise ValueError(
                f"cave size {self.width}x{self.height} exceeds the maximum "
                f"{settings.max_cave_width}x{settings.max_cave_height}"
            )
        return self

    @property
    def size(self) -> Tuple[int, int]:
        return self.width, self.height


def coerce_config(config: Union[CaveConfig, Mapping[str, Any]]) -> CaveConfig:
    """
    Validate a config given as a model or a plain mapping.

    Raises:
        ConfigurationError: if any value is out of range
    """
    if isinstance(config, CaveConfig):
        return config
    try:
        return CaveConfig(**dict(config))
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid cave configuration: {exc}") from exc


@dataclass(frozen=True, eq=False)
class Cave:
    """A finished cave: read-only tiles plus the exits carved into them."""

    tiles: np.ndarray
    width: int
    height: int
    exits: Exit
    seed: Seed
    preset: Optional[str] = None

    @property
    def size(self) -> Tuple[int, int]:
        return self.width, self.height

    def is_floor(self, x: int, y: int) -> bool:
        return self.tiles[x, y] == FLOOR

    def is_wall(self, x: int, y: int) -> bool:
        return self.tiles[x, y] == WALL

    @property
    def floor_count(self) -> int:
        return int(np.count_nonzero(self.tiles == FLOOR))


class GenerationSession:
    """
    State owned by one generation run.

    Holds the grid, the PRNG stream and the validated configuration. Each
    pipeline step is a method operating on this state, so concurrent runs
    never share anything.
    """

    def __init__(self, config: CaveConfig, seed: Seed):
        self.config = config
        self.seed = seed
        self.rng: AleaPRNG = create_prng(seed)
        self.grid = Grid(config.width, config.height)
        self.exits: Optional[Exit] = None
        self.floor_regions: List[Region] = []
        self.connections: List[Connection] = []

    def fill(self) -> None:
        fill_map(self.grid, self.rng, self.config.fill_threshold)

    def open_exits(self, exits: Optional[Exit]) -> None:
        self.exits = resolve_exits(self.grid, self.rng, exits)

    def smooth(self) -> None:
        smooth(self.grid, self.rng, self.config.smoothing_threshold)

    def filter_walls(self) -> List[Region]:
        return filter_regions(self.grid, WALL, FLOOR, self.config.region_threshold)

    def filter_floors(self) -> List[Region]:
        self.floor_regions = filter_regions(self.grid, FLOOR, WALL, self.config.region_threshold)
        return self.floor_regions

    def connect(self) -> None:
        self.connections = connect_regions(self.grid, self.floor_regions, self.config.path_radius)

    def run(self, exits: Optional[Exit] = None) -> Cave:
        """Execute the pipeline and return the finished cave."""
        self.fill()
        self.open_exits(exits)
        self.smooth()

        self.filter_walls()
        self.filter_floors()
        self.connect()
        self.filter_walls()

        for _ in range(1, self.config.smoothing_iterations):
            self.smooth()

        tiles = self.grid.tiles.copy()
        tiles.setflags(write=False)
        return Cave(
            tiles=tiles,
            width=self.grid.width,
            height=self.grid.height,
            exits=self.exits,
            seed=self.seed,
            preset=self.config.name,
        )


class CaveGenerator:
    """Generates caves from one validated configuration."""

    def __init__(self, config: Union[CaveConfig, Mapping[str, Any]]):
        """
        Initialize the generator.

        Args:
            config: Cave parameters, validated up front

        Raises:
            ConfigurationError: if a mapping config is invalid. A CaveConfig
                instance was validated when it was built, so its
                ``ValidationError`` is raised at that call site instead.
        """
        self.config = coerce_config(config)

    def generate(self, seed: Optional[Seed] = None, exits: Optional[Exit] = None) -> Cave:
        """
        Generate a cave.

        Args:
            seed: Seed for this run, falls back to the config seed, then the
                settings default, then the wall clock
            exits: Exit constraints, ``None`` leaves all four sides free

        Returns:
            Finished Cave
        """
        seed = resolve_seed(seed, self.config.seed)
        session = GenerationSession(self.config, seed)
        cave = session.run(exits)

        logger.info(
            "Cave generated",
            preset=self.config.name,
            seed=seed,
            width=cave.width,
            height=cave.height,
            floor=cave.floor_count,
            regions=len(session.floor_regions),
            corridors=len(session.connections),
            rng_calls=session.rng.call_count,
        )
        return cave


def generate_cave(
    config: Union[CaveConfig, Mapping[str, Any]],
    seed: Optional[Seed] = None,
    exits: Optional[Exit] = None,
) -> Cave:
    """Convenience wrapper around ``CaveGenerator(config).generate()``."""
    return CaveGenerator(config).generate(seed=seed, exits=exits)
