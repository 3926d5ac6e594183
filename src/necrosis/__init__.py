"""Turtle-carved procedural dungeon generator for voxel worlds."""

from .builder import DungeonBuilder, Placement, generate
from .config import Config, default_config, load_config
from .generator import DungeonGenerator
from .layout import Cell, DungeonLayout, GenerationStats, Room
from .params import GenerationParameters, InvalidParameter, validate_parameters
from .random_source import RandomSource, make_random

__all__ = [
    "Cell",
    "Config",
    "DungeonBuilder",
    "DungeonGenerator",
    "DungeonLayout",
    "GenerationParameters",
    "GenerationStats",
    "InvalidParameter",
    "Placement",
    "RandomSource",
    "Room",
    "default_config",
    "generate",
    "load_config",
    "make_random",
    "validate_parameters",
]
