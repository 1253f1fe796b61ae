"""Tests for corridor carving between regions."""

import pytest

from py_cave.core.cave_analysis import count_components
from py_cave.core.connector import (
    apply_path,
    brush_offsets,
    closest_tiles,
    connect_regions,
    get_connections,
    get_path,
    get_region_border,
)
from py_cave.core.grid import FLOOR, WALL, Grid
from py_cave.core.regions import get_regions

from cave_test_utils import make_grid


class TestGetPath:
    """Test line rasterization."""

    def test_reference_line(self):
        assert get_path((2, 2), (8, 5)) == [
            (2, 2), (3, 3), (4, 3), (5, 4), (6, 4), (7, 5), (8, 5)
        ]

    def test_steep_line(self):
        assert get_path((0, 0), (1, 4)) == [(0, 0), (0, 1), (1, 2), (1, 3), (1, 4)]

    def test_single_point(self):
        assert get_path((3, 3), (3, 3)) == [(3, 3)]

    @pytest.mark.parametrize("start,end", [
        ((2, 2), (8, 5)),
        ((8, 5), (2, 2)),
        ((10, 1), (1, 7)),
        ((4, 12), (6, 0)),
        ((0, 0), (9, 9)),
        ((5, 5), (5, 14)),
        ((7, 3), (0, 3)),
    ])
    def test_path_properties(self, start, end):
        """Endpoints match, tiles are 8-connected and each axis is monotonic."""
        path = get_path(start, end)
        dx, dy = end[0] - start[0], end[1] - start[1]

        assert path[0] == start
        assert path[-1] == end
        assert len(path) == max(abs(dx), abs(dy)) + 1

        for (ax, ay), (bx, by) in zip(path, path[1:]):
            assert max(abs(bx - ax), abs(by - ay)) == 1
            assert (bx - ax) * dx >= 0
            assert (by - ay) * dy >= 0


class TestBrush:
    """Test the disk brush."""

    def test_radius_zero(self):
        assert brush_offsets(0) == [(0, 0)]

    def test_radius_one_is_plus(self):
        assert sorted(brush_offsets(1)) == sorted([(0, 0), (1, 0), (-1, 0), (0, 1), (0, -1)])

    def test_radius_two(self):
        assert len(brush_offsets(2)) == 13

    def test_apply_path_skips_border(self):
        grid = Grid(7, 7)
        grid.tiles[:, :] = WALL
        carved = apply_path(grid, get_path((0, 3), (6, 3)), 1)
        assert carved == 15
        assert grid.tiles[0, 3] == WALL
        assert grid.tiles[6, 3] == WALL
        for x in range(1, 6):
            for y in (2, 3, 4):
                assert grid.tiles[x, y] == FLOOR

    def test_apply_path_off_grid(self):
        grid = Grid(5, 5)
        grid.tiles[:, :] = WALL
        carved = apply_path(grid, [(-3, -3), (10, 2)], 2)
        assert carved == 0


class TestConnections:
    """Test border tiles and closest pair search."""

    @pytest.fixture
    def two_rooms(self):
        return make_grid([
            "###########",
            "#...###...#",
            "#...###...#",
            "#...###...#",
            "###########",
        ])

    def test_region_border(self):
        grid = make_grid([
            "#####",
            "#...#",
            "#...#",
            "#...#",
            "#####",
        ])
        region = get_regions(grid, FLOOR)[0]
        border = get_region_border(grid, region)
        assert len(border) == 8
        assert (2, 2) not in border

    def test_closest_tiles(self):
        assert closest_tiles([(0, 0), (5, 5)], [(6, 6), (9, 9)]) == ((5, 5), (6, 6))

    def test_closest_tiles_tie_keeps_first(self):
        assert closest_tiles([(0, 0)], [(1, 0), (0, 1)]) == ((0, 0), (1, 0))

    def test_closest_tiles_empty(self):
        assert closest_tiles([], [(1, 1)]) is None

    def test_connection_between_rooms(self, two_rooms):
        regions = get_regions(two_rooms, FLOOR)
        connections = get_connections(two_rooms, regions)
        assert len(connections) == 1
        (ax, ay), (bx, by) = connections[0]
        assert ax == 3
        assert bx == 7
        assert ay == by

    def test_one_connection_per_pair(self):
        grid = make_grid([
            "###########",
            "#.#.#.#.#.#",
            "###########",
        ])
        regions = get_regions(grid, FLOOR)
        assert len(get_connections(grid, regions)) == 10

    def test_connect_joins_rooms(self, two_rooms):
        regions = get_regions(two_rooms, FLOOR)
        connect_regions(two_rooms, regions, 1)
        assert count_components(two_rooms, FLOOR) == 1

    def test_connect_many_pockets(self):
        grid = make_grid([
            "#############",
            "#..#######..#",
            "#..#######..#",
            "#############",
            "#####..######",
            "#####..######",
            "#############",
            "#..#######..#",
            "#############",
        ])
        regions = get_regions(grid, FLOOR)
        connections = connect_regions(grid, regions, 1)
        assert len(connections) == len(regions) * (len(regions) - 1) // 2
        assert count_components(grid, FLOOR) == 1

    def test_fewer_than_two_regions(self, two_rooms):
        regions = get_regions(two_rooms, FLOOR)[:1]
        before = two_rooms.tiles.copy()
        assert connect_regions(two_rooms, regions, 1) == []
        assert (two_rooms.tiles == before).all()
