"""Enumerations used throughout the generators."""

from __future__ import annotations

from enum import IntEnum, unique


@unique
class TileKind(IntEnum):
    """Tile kinds stored in a TileGrid."""

    EMPTY = 0
    WALL = 1
    FLOOR = 2
    CORRIDOR = 3
    DOOR = 4
    STAIRS = 5
    WATER = 6
    LAVA = 7
    TRAP = 8

    @property
    def walkable(self) -> bool:
        return self in WALKABLE_TILES

    @property
    def glyph(self) -> str:
        return TILE_GLYPHS[self]


WALKABLE_TILES = frozenset({TileKind.FLOOR, TileKind.CORRIDOR, TileKind.DOOR})

TILE_GLYPHS: dict[TileKind, str] = {
    TileKind.EMPTY: " ",
    TileKind.WALL: "#",
    TileKind.FLOOR: ".",
    TileKind.CORRIDOR: ",",
    TileKind.DOOR: "+",
    TileKind.STAIRS: ">",
    TileKind.WATER: "~",
    TileKind.LAVA: "^",
    TileKind.TRAP: "!",
}


@unique
class RoomKind(IntEnum):
    """Gameplay role tag attached to a Room."""

    NORMAL = 0
    START = 1
    END = 2
    BOSS = 3
    TREASURE = 4
    SHOP = 5
    SECRET = 6


@unique
class Direction(IntEnum):
    """Cardinal directions (y grows downward)."""

    NORTH = 0
    EAST = 1
    SOUTH = 2
    WEST = 3

    @property
    def opposite(self) -> Direction:
        return Direction((self.value + 2) % 4)


@unique
class Domain(IntEnum):
    """RNG domains for deterministic randomness isolation."""

    NOISE = 0
    WORLEY = 1
    BSP = 2
    RANDOM_WALK = 3
    CAVE = 4
    WFC = 5
    EROSION = 6
    NAMES = 7
    LOOT = 8
    NOISE_LATTICE = 9


@unique
class DungeonAlgorithm(IntEnum):
    """Carving strategy used to build a dungeon."""

    BSP = 0
    RANDOM_WALK = 1
    CAVE = 2
