"""Dungeon generation entry points.

Each call builds its own RandomStream and TileGrid, runs one carving
strategy, and returns a DungeonResult owning the grid and the room list.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from procgen.core.enums import Domain, DungeonAlgorithm, RoomKind, TileKind, WALKABLE_TILES
from procgen.core.grid import TileGrid, require_dimensions
from procgen.core.models import Rect
from procgen.core.params import BSPParams, CaveParams, DungeonParams, RandomWalkParams
from procgen.core.rooms import PartitionNode, Room
from procgen.systems.bsp import BSPCarver, SpacePartitioner
from procgen.systems.cellular import CellularAutomatonSmoother
from procgen.systems.connectivity import ConnectivityAnalyzer
from procgen.systems.random_walk import RandomWalkCarver
from procgen.systems.rng import RandomStream

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class DungeonResult:
    """A carved tile grid plus its rooms (ids are indexes into ``rooms``)."""

    grid: TileGrid
    rooms: list[Room]
    algorithm: DungeonAlgorithm
    seed: int
    root: PartitionNode | None = None
    stats: dict[str, int] = field(default_factory=dict)

    def room_by_id(self, room_id: int) -> Room | None:
        if 0 <= room_id < len(self.rooms):
            return self.rooms[room_id]
        return None

    def rooms_of_kind(self, kind: RoomKind) -> list[Room]:
        return [r for r in self.rooms if r.kind == kind]

    @property
    def start_room(self) -> Room | None:
        found = self.rooms_of_kind(RoomKind.START)
        return found[0] if found else None

    @property
    def boss_room(self) -> Room | None:
        found = self.rooms_of_kind(RoomKind.BOSS)
        return found[0] if found else None

    @property
    def walkable_count(self) -> int:
        return sum(self.grid.count(kind) for kind in WALKABLE_TILES)


def _summary(result: DungeonResult) -> DungeonResult:
    result.stats = {
        "rooms": len(result.rooms),
        "floor": result.grid.count(TileKind.FLOOR),
        "corridor": result.grid.count(TileKind.CORRIDOR),
        "wall": result.grid.count(TileKind.WALL),
    }
    logger.info(
        "%s dungeon %dx%d seed=%d: %d rooms, %d walkable tiles",
        result.algorithm.name, result.grid.width, result.grid.height,
        result.seed, len(result.rooms), result.walkable_count,
    )
    return result


def generate_bsp_dungeon(
    width: int,
    height: int,
    min_room_size: int,
    max_room_size: int,
    iterations: int,
    seed: int,
) -> DungeonResult:
    """Rooms in space-partition leaves, linked by L-shaped corridors."""
    require_dimensions(width, height)
    if min_room_size <= 0 or max_room_size <= 0:
        raise ValueError("room sizes must be positive")

    rng = RandomStream(seed, Domain.BSP)
    grid = TileGrid(width, height, default=TileKind.WALL)

    root = SpacePartitioner(min_room_size, rng).build(Rect(0, 0, width, height), iterations)
    carver = BSPCarver(grid, rng, min_room_size, max_room_size)
    carver.carve_rooms(root)
    carver.connect(root)
    carver.assign_room_kinds()

    return _summary(DungeonResult(grid=grid, rooms=carver.rooms, algorithm=DungeonAlgorithm.BSP,
                                  seed=seed, root=root))


def generate_random_walk_dungeon(
    width: int,
    height: int,
    walk_length: int,
    num_walkers: int,
    seed: int,
) -> DungeonResult:
    """Overlapping random walks from the centre; rooms found by flood fill."""
    require_dimensions(width, height)
    if walk_length < 0 or num_walkers < 0:
        raise ValueError("walk_length and num_walkers must be non-negative")

    rng = RandomStream(seed, Domain.RANDOM_WALK)
    grid = TileGrid(width, height, default=TileKind.WALL)
    RandomWalkCarver(grid, rng).carve(walk_length, num_walkers)
    rooms = ConnectivityAnalyzer(grid).detect_rooms()

    return _summary(DungeonResult(grid=grid, rooms=rooms, algorithm=DungeonAlgorithm.RANDOM_WALK, seed=seed))


def generate_cave_dungeon(
    width: int,
    height: int,
    fill_probability: float,
    smooth_iterations: int,
    seed: int,
) -> DungeonResult:
    """Random wall fill smoothed by a cellular automaton; rooms found by flood fill."""
    require_dimensions(width, height)
    if smooth_iterations < 0:
        raise ValueError("smooth_iterations must be non-negative")

    rng = RandomStream(seed, Domain.CAVE)
    grid = TileGrid(width, height, default=TileKind.WALL)
    smoother = CellularAutomatonSmoother(grid, rng)
    smoother.randomize(fill_probability)
    smoother.smooth(smooth_iterations)
    rooms = ConnectivityAnalyzer(grid).detect_rooms()

    return _summary(DungeonResult(grid=grid, rooms=rooms, algorithm=DungeonAlgorithm.CAVE, seed=seed))


def generate_dungeon(params: DungeonParams) -> DungeonResult:
    """Dispatch on the parameter record type."""
    match params:
        case BSPParams():
            return generate_bsp_dungeon(params.width, params.height, params.min_room_size,
                                        params.max_room_size, params.iterations, params.seed)
        case RandomWalkParams():
            return generate_random_walk_dungeon(params.width, params.height, params.walk_length,
                                                params.num_walkers, params.seed)
        case CaveParams():
            return generate_cave_dungeon(params.width, params.height, params.fill_probability,
                                         params.smooth_iterations, params.seed)
    raise TypeError(f"unsupported dungeon parameters: {type(params).__name__}")
