"""
Region connection by straight carved corridors.

Every pair of floor regions gets its own corridor between the closest
pair of their border tiles. With R regions this carves R * (R - 1) / 2
corridors, more than a spanning tree needs, but every region ends up
joined to every other.
"""

from typing import List, Optional, Sequence, Tuple

import structlog

from .grid import FLOOR, WALL, Grid, Position
from .regions import Region

logger = structlog.get_logger()

Connection = Tuple[Position, Position]


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


def get_region_border(grid: Grid, region: Region) -> List[Position]:
    """Return the tiles of ``region`` that have an orthogonal wall neighbour."""
    border = []
    for x, y in region.tiles:
        for nx, ny in grid.neighbors4(x, y):
            if grid.tiles[nx, ny] == WALL:
                border.append((x, y))
                break
    return border


def closest_tiles(border_a: Sequence[Position], border_b: Sequence[Position]) -> Optional[Connection]:
    """
    Find the pair of tiles with the smallest squared distance.

    Ties keep the first pair found. Returns None when either side is empty.
    """
    best = None
    distance = None
    for ax, ay in border_a:
        for bx, by in border_b:
            d = (ax - bx) ** 2 + (ay - by) ** 2
            if distance is not None and d >= distance:
                continue
            distance = d
            best = ((ax, ay), (bx, by))
    return best


def get_connections(grid: Grid, regions: Sequence[Region]) -> List[Connection]:
    """
    Compute one connection for every unordered pair of regions.

    Borders are taken from the grid as it is before any corridor is carved.
    """
    borders = [get_region_border(grid, region) for region in regions]
    connections = []

    for i in range(len(regions)):
        for j in range(i + 1, len(regions)):
            connection = closest_tiles(borders[i], borders[j])
            if connection is None:
                logger.debug("Region pair has no border tiles", a=regions[i].id, b=regions[j].id)
                continue
            connections.append(connection)

    return connections


def get_path(start: Position, end: Position) -> List[Position]:
    """
    Rasterize a straight line between two tiles.

    Integer Bresenham stepping: the dominant axis advances every step and
    the minor axis advances whenever the accumulated error reaches the
    dominant length. Both endpoints are included, so the path has
    ``max(|dx|, |dy|) + 1`` tiles and consecutive tiles are 8-connected.
    """
    x, y = start
    dx = end[0] - start[0]
    dy = end[1] - start[1]

    inverted = False
    step = _sign(dx)
    gradient_step = _sign(dy)
    longest = abs(dx)
    shortest = abs(dy)

    if longest < shortest:
        inverted = True
        step = _sign(dy)
        gradient_step = _sign(dx)
        longest, shortest = shortest, longest

    path = [(x, y)]
    gradient_accumulation = longest // 2
    for _ in range(longest):
        if inverted:
            y += step
        else:
            x += step

        gradient_accumulation += shortest
        if gradient_accumulation >= longest:
            if inverted:
                x += gradient_step
            else:
                y += gradient_step
            gradient_accumulation -= longest

        path.append((x, y))

    return path


def brush_offsets(radius: int) -> List[Position]:
    """Offsets covered by a disk brush of the given radius."""
    return [
        (bx, by)
        for bx in range(-radius, radius + 1)
        for by in range(-radius, radius + 1)
        if bx * bx + by * by <= radius * radius
    ]


def apply_path(grid: Grid, path: Sequence[Position], radius: int) -> int:
    """
    Carve floor along ``path`` with a disk brush.

    Tiles off the grid or on its border are left alone.

    Returns:
        Number of tiles turned from wall into floor
    """
    offsets = brush_offsets(radius)
    carved = 0
    for x, y in path:
        for bx, by in offsets:
            px, py = x + bx, y + by
            if not grid.in_bounds(px, py) or grid.is_border(px, py):
                continue
            if grid.tiles[px, py] == WALL:
                carved += 1
            grid.tiles[px, py] = FLOOR
    return carved


def connect_regions(grid: Grid, regions: Sequence[Region], radius: int) -> List[Connection]:
    """
    Carve a corridor between every pair of regions.

    Args:
        grid: Grid to carve in place
        regions: Surviving floor regions
        radius: Corridor brush radius

    Returns:
        The carved connections as (start, end) pairs
    """
    if len(regions) < 2:
        logger.debug("Fewer than two floor regions, nothing to connect", regions=len(regions))
        return []

    connections = get_connections(grid, regions)
    carved = 0
    for start, end in connections:
        carved += apply_path(grid, get_path(start, end), radius)

    logger.debug("Regions connected", regions=len(regions), corridors=len(connections), carved=carved)
    return connections
