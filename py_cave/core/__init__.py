"""
Core cave generation functionality.
"""

from .alea_prng import AleaPRNG
from .grid import Grid, FLOOR, WALL
from .exits import Exit, Side
from .regions import Region, get_regions, filter_regions
from .cave_generator import Cave, CaveConfig, CaveGenerator, GenerationSession, coerce_config, generate_cave
from .cave_map import CaveMap, generate_cave_map

__all__ = ['AleaPRNG', 'Grid', 'FLOOR', 'WALL', 'Exit', 'Side',
           'Region', 'get_regions', 'filter_regions',
           'Cave', 'CaveConfig', 'CaveGenerator', 'GenerationSession', 'coerce_config', 'generate_cave',
           'CaveMap', 'generate_cave_map']
