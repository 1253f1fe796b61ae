"""Tile buffer shared by every generation step."""

from typing import Iterator, Tuple

import numpy as np

# Tile values
FLOOR = 0
WALL = 1

Position = Tuple[int, int]

# Orthogonal neighbour offsets, in the order flood fills visit them
NEIGHBORS_4 = ((-1, 0), (0, -1), (0, 1), (1, 0))


class Grid:
    """
    Mutable 2D tile buffer indexed ``tiles[x, y]``.

    The array has shape ``(width, height)`` so iterating it in natural
    order is the x-outer, y-inner scan every pipeline step relies on.
    """

    def __init__(self, width: int, height: int):
        self.width = width
        self.height = height
        self.tiles = np.zeros((width, height), dtype=np.int8)

    @classmethod
    def from_array(cls, tiles: np.ndarray) -> "Grid":
        """Wrap a copy of an existing ``(width, height)`` array."""
        grid = cls(tiles.shape[0], tiles.shape[1])
        grid.tiles[:, :] = tiles
        return grid

    @property
    def size(self) -> Tuple[int, int]:
        return self.width, self.height

    def in_bounds(self, x: int, y: int) -> bool:
        """Check that (x, y) lies on the grid."""
        return 0 <= x < self.width and 0 <= y < self.height

    def is_border(self, x: int, y: int) -> bool:
        """Check that (x, y) lies on the outer edge of the grid."""
        return x == 0 or x == self.width - 1 or y == 0 or y == self.height - 1

    def count_walls(self, x: int, y: int) -> int:
        """
        Count walls among the 8 neighbours of (x, y).

        Off-grid neighbours count as walls.
        """
        count = 0
        for nx in range(x - 1, x + 2):
            for ny in range(y - 1, y + 2):
                if nx == x and ny == y:
                    continue
                if not self.in_bounds(nx, ny):
                    count += 1
                else:
                    count += int(self.tiles[nx, ny])
        return count

    def neighbors4(self, x: int, y: int) -> Iterator[Position]:
        """Yield in-bounds orthogonal neighbours of (x, y)."""
        for dx, dy in NEIGHBORS_4:
            nx, ny = x + dx, y + dy
            if 0 <= nx < self.width and 0 <= ny < self.height:
                yield nx, ny

    def border_mask(self) -> np.ndarray:
        """Boolean mask that is True on every edge tile."""
        mask = np.zeros((self.width, self.height), dtype=bool)
        mask[0, :] = True
        mask[-1, :] = True
        mask[:, 0] = True
        mask[:, -1] = True
        return mask
