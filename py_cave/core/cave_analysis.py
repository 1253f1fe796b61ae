"""
Cave statistics and structural checks.

Used by the demo script and the test suite to verify connectivity,
border integrity and exit shapes of generated caves.
"""

from typing import Dict, List, Sequence, Tuple, Union

import numpy as np

from .cave_generator import Cave
from .exits import Side, side_position
from .grid import FLOOR, WALL, Grid
from .regions import get_regions

CaveLike = Union[Cave, Grid, np.ndarray]


def _as_grid(cave: CaveLike) -> Grid:
    if isinstance(cave, Grid):
        return cave
    if isinstance(cave, Cave):
        return Grid.from_array(cave.tiles)
    return Grid.from_array(np.asarray(cave))


def count_components(cave: CaveLike, tile_type: int = FLOOR) -> int:
    """Count 4-connected components of ``tile_type``."""
    return len(get_regions(_as_grid(cave), tile_type))


def floor_components(cave: CaveLike) -> List[List[Tuple[int, int]]]:
    """Return the tiles of every floor component."""
    return [region.tiles for region in get_regions(_as_grid(cave), FLOOR)]


def opening_runs(offsets: Sequence[int]) -> List[Tuple[int, int]]:
    """
    Split offsets into contiguous runs.

    Returns:
        List of (first, last) inclusive offset pairs
    """
    runs = []
    for offset in sorted(set(offsets)):
        if runs and offset == runs[-1][1] + 1:
            runs[-1] = (runs[-1][0], offset)
        else:
            runs.append((offset, offset))
    return runs


def border_violations(cave: Cave) -> List[Tuple[int, int]]:
    """
    Return border floor tiles that no exit accounts for.

    An empty list means every edge tile is wall except the exit openings.
    """
    grid = _as_grid(cave)
    allowed = set()
    for side in Side:
        offsets = cave.exits.get(side) or ()
        for offset in offsets:
            allowed.add(side_position(grid, side, offset))

    open_edges = [(int(x), int(y)) for x, y in np.argwhere(grid.border_mask() & (grid.tiles == FLOOR))]
    return [tile for tile in open_edges if tile not in allowed]


def cave_statistics(cave: Cave) -> Dict[str, object]:
    """Summary numbers for logging and reports."""
    total = cave.width * cave.height
    floor = cave.floor_count
    return {
        "width": cave.width,
        "height": cave.height,
        "floor_tiles": floor,
        "wall_tiles": int(np.count_nonzero(cave.tiles == WALL)),
        "floor_ratio": floor / total,
        "floor_components": count_components(cave, FLOOR),
        "exits": {
            name: (len(opening_runs(offsets)) if offsets is not None else None)
            for name, offsets in cave.exits.as_dict().items()
        },
    }
