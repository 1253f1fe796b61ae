#!/usr/bin/env python3
"""
Simple demo script showing cave generation capabilities.
"""

import sys

from py_cave import CaveConfig, generate_cave, generate_cave_map, get_preset, list_presets
from py_cave.core.cave_analysis import cave_statistics
from py_cave.logging_config import configure_logging


def print_tiles(tiles):
    """Print a tile array with y = 0 at the bottom."""
    width, height = tiles.shape
    for y in range(height - 1, -1, -1):
        print("".join("#" if tiles[x, y] else "." for x in range(width)))


def main():
    """Demonstrate single caves and a small tiled map."""
    seed = sys.argv[1] if len(sys.argv) > 1 else "demo123"
    configure_logging(level="WARNING", fmt="plain")

    print("Py-Cave Generation Demo")
    print("=" * 40)

    config = CaveConfig(
        width=40,
        height=24,
        fill_threshold=45,
        smoothing_iterations=5,
        smoothing_threshold=4,
        region_threshold=10,
        path_radius=1,
    )
    cave = generate_cave(config, seed=seed)
    print(f"\nSingle cave ({cave.width}x{cave.height}, seed={seed}):")
    print_tiles(cave.tiles)
    for key, value in cave_statistics(cave).items():
        print(f"  {key}: {value}")

    print("\nPresets:")
    for name in list_presets():
        preset = get_preset(name)
        print(f"  {name}: {preset['width']}x{preset['height']}, fill {preset['fill_threshold']}%")

    small = {**get_preset("default"), "width": 24, "height": 16}
    cave_map = generate_cave_map(2, 2, [small], seed=seed)
    print("\n2x2 cave map:")
    print_tiles(cave_map.to_array())
    for y in range(cave_map.height):
        for x in range(cave_map.width):
            exits = cave_map.cave_at(x, y).exits
            print(f"  cell ({x},{y}) exits: {exits.as_dict()}")


if __name__ == "__main__":
    main()
