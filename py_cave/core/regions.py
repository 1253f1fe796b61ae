"""
Region extraction and filtering.

A region is a maximal set of same-valued tiles joined by orthogonal
adjacency. Regions are recomputed whenever they are needed and never
cached between steps.
"""

from collections import deque
from dataclasses import dataclass, field
from typing import List

import numpy as np
import structlog

from .grid import NEIGHBORS_4, Grid, Position

logger = structlog.get_logger()


@dataclass
class Region:
    """A connected group of tiles sharing one tile value."""

    id: int
    tile_type: int
    tiles: List[Position] = field(default_factory=list)
    border: bool = False  # touches grid edge

    @property
    def size(self) -> int:
        return len(self.tiles)


def _flood_region(grid: Grid, start_x: int, start_y: int, claimed: np.ndarray, region_id: int) -> Region:
    """Collect the region containing (start_x, start_y), claiming its tiles."""
    tile_type = int(grid.tiles[start_x, start_y])
    region = Region(id=region_id, tile_type=tile_type)

    claimed[start_x, start_y] = True
    queue = deque([(start_x, start_y)])

    while queue:
        x, y = queue.popleft()
        region.tiles.append((x, y))
        if not region.border and grid.is_border(x, y):
            region.border = True

        for dx, dy in NEIGHBORS_4:
            nx, ny = x + dx, y + dy
            if not grid.in_bounds(nx, ny):
                continue
            if claimed[nx, ny] or grid.tiles[nx, ny] != tile_type:
                continue
            claimed[nx, ny] = True
            queue.append((nx, ny))

    return region


def get_regions(grid: Grid, tile_type: int) -> List[Region]:
    """
    Return all regions of the given tile type in discovery order.

    Tiles are scanned x-outer, y-inner; every unclaimed tile of
    ``tile_type`` starts a new region.
    """
    claimed = np.zeros((grid.width, grid.height), dtype=bool)
    regions = []

    for x in range(grid.width):
        for y in range(grid.height):
            if claimed[x, y] or grid.tiles[x, y] != tile_type:
                continue
            regions.append(_flood_region(grid, x, y, claimed, len(regions)))

    return regions


def filter_regions(grid: Grid, original_tile: int, new_tile: int, threshold: int) -> List[Region]:
    """
    Rewrite small regions of ``original_tile`` to ``new_tile``.

    A region survives when it has at least ``threshold`` tiles or touches
    the border.

    Args:
        grid: Grid to modify in place
        original_tile: Tile type whose regions are filtered
        new_tile: Replacement value for removed regions
        threshold: Minimum surviving region size

    Returns:
        Surviving regions
    """
    regions = get_regions(grid, original_tile)
    survivors = []
    removed = 0

    for region in regions:
        if region.size >= threshold or region.border:
            survivors.append(region)
            continue
        for x, y in region.tiles:
            grid.tiles[x, y] = new_tile
        removed += 1

    logger.debug(
        "Regions filtered",
        tile_type=original_tile,
        found=len(regions),
        removed=removed,
    )
    return survivors
