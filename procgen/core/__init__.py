"""Core data models: enums, coordinates, grids, rooms, patterns."""

from procgen.core.enums import Direction, Domain, DungeonAlgorithm, RoomKind, TileKind
from procgen.core.grid import NoiseMap, TileGrid
from procgen.core.models import Rect, Vector2
from procgen.core.patterns import TilePattern, WfcCell
from procgen.core.rooms import PartitionNode, Room

__all__ = [
    "Direction",
    "Domain",
    "DungeonAlgorithm",
    "NoiseMap",
    "PartitionNode",
    "Rect",
    "Room",
    "RoomKind",
    "TileGrid",
    "TileKind",
    "TilePattern",
    "Vector2",
    "WfcCell",
]
