"""
Random fill and cellular-automaton smoothing.

Smoothing is a single in-place relaxation pass driven by a flood fill
from a random tile near the middle of the grid. A tile updated early in
the pass already influences the wall counts of tiles visited later.
"""

from collections import deque

import numpy as np
import structlog

from .alea_prng import AleaPRNG
from .grid import FLOOR, NEIGHBORS_4, WALL, Grid

logger = structlog.get_logger()


def fill_map(grid: Grid, rng: AleaPRNG, fill_threshold: int) -> None:
    """
    Fill the grid randomly.

    Border tiles become walls. Each interior tile becomes a wall when a
    draw from [0, 100) is below ``fill_threshold``. Draws are taken in
    x-outer, y-inner order.

    Args:
        grid: Grid to fill in place
        rng: Generation PRNG
        fill_threshold: Wall probability in percent (0-100)
    """
    for x in range(grid.width):
        for y in range(grid.height):
            if grid.is_border(x, y):
                grid.tiles[x, y] = WALL
            else:
                grid.tiles[x, y] = WALL if rng.next_int(0, 100) < fill_threshold else FLOOR


def smooth(grid: Grid, rng: AleaPRNG, smoothing_threshold: int) -> int:
    """
    Run one smoothing pass over the interior reachable from a random start.

    The start tile is drawn from the middle third of the grid. The flood
    spreads orthogonally and never enters border tiles. Each visited tile
    with more walls around it than ``smoothing_threshold`` becomes a wall,
    fewer makes it floor, and a tie leaves it as it is.

    Args:
        grid: Grid to smooth in place
        rng: Generation PRNG
        smoothing_threshold: Wall count tie value (1-8)

    Returns:
        Number of tiles visited
    """
    min_x, min_y = grid.width // 3, grid.height // 3
    start_x = rng.next_int(min_x, min_x * 2)
    start_y = rng.next_int(min_y, min_y * 2)

    visited = np.zeros((grid.width, grid.height), dtype=bool)
    visited[start_x, start_y] = True
    queue = deque([(start_x, start_y)])
    count = 0

    while queue:
        x, y = queue.popleft()
        count += 1

        for dx, dy in NEIGHBORS_4:
            nx, ny = x + dx, y + dy
            if not grid.in_bounds(nx, ny) or visited[nx, ny]:
                continue
            if grid.is_border(nx, ny):
                continue
            visited[nx, ny] = True
            queue.append((nx, ny))

        walls = grid.count_walls(x, y)
        if walls > smoothing_threshold:
            grid.tiles[x, y] = WALL
        elif walls < smoothing_threshold:
            grid.tiles[x, y] = FLOOR

    logger.debug("Smoothing pass complete", start=(start_x, start_y), visited=count)
    return count
