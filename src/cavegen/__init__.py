"""Cellular cave generation with guaranteed room connectivity.

Seeds a random grid, smooths it with a cellular automaton, prunes small
regions, turns the remaining ground into rooms and carves passages until
every room is reachable from the largest one.
"""

from .classification import CellKind, classify_costs
from .config import CaveConfig, HeightMapConfig, TerrainBand, load_config
from .exceptions import CaveGenError, ConfigError, NoSurvivingRoomsError
from .generator import CaveGenerator, GenerationResult, generate_cave
from .grid import Grid
from .heightmap import classify_heights, generate_height_map
from .rooms import Room, RoomGraph
from .types import GROUND, VOID, Cell, Coord, WorldPoint
from .validation import ValidationResult, validate_cave

__all__ = [
    "GROUND",
    "VOID",
    "CaveConfig",
    "CaveGenError",
    "CaveGenerator",
    "Cell",
    "CellKind",
    "ConfigError",
    "Coord",
    "GenerationResult",
    "Grid",
    "HeightMapConfig",
    "NoSurvivingRoomsError",
    "Room",
    "RoomGraph",
    "TerrainBand",
    "ValidationResult",
    "WorldPoint",
    "classify_costs",
    "classify_heights",
    "generate_cave",
    "generate_height_map",
    "load_config",
    "validate_cave",
]
