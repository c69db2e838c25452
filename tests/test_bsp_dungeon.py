"""Tests for BSP partitioning, room carving and corridor linking."""

import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from collections import deque

import pytest

from procgen.core.enums import Domain, DungeonAlgorithm, RoomKind, TileKind
from procgen.core.grid import TileGrid
from procgen.core.models import Rect, Vector2
from procgen.core.params import BSPParams
from procgen.systems.bsp import BSPCarver, SpacePartitioner
from procgen.systems.connectivity import ConnectivityAnalyzer
from procgen.systems.dungeon import generate_bsp_dungeon, generate_dungeon
from procgen.systems.rng import RandomStream


def _reachable_ids(rooms, start_id: int) -> set[int]:
    seen = {start_id}
    queue = deque([start_id])
    while queue:
        rid = queue.popleft()
        for nid in rooms[rid].connections:
            if nid not in seen:
                seen.add(nid)
                queue.append(nid)
    return seen


# ---------------------------------------------------------------------------
# Scenario: 20x20, rooms 4..8, two splits, seed 7
# ---------------------------------------------------------------------------

class TestSmallBSPDungeon:
    def setup_method(self):
        self.result = generate_bsp_dungeon(20, 20, 4, 8, 2, 7)

    def test_room_count(self):
        assert 2 <= len(self.result.rooms) <= 4

    def test_start_and_boss(self):
        rooms = self.result.rooms
        assert rooms[0].kind == RoomKind.START
        assert rooms[-1].kind == RoomKind.BOSS
        assert self.result.start_room is rooms[0]
        assert self.result.boss_room is rooms[-1]

    def test_every_room_reachable_in_corridor_graph(self):
        rooms = self.result.rooms
        assert _reachable_ids(rooms, 0) == {r.room_id for r in rooms}

    def test_every_room_reachable_on_grid(self):
        analyzer = ConnectivityAnalyzer(self.result.grid)
        start = self.result.rooms[0].center
        for room in self.result.rooms[1:]:
            assert analyzer.is_connected(start, room.center)

    def test_deterministic(self):
        again = generate_bsp_dungeon(20, 20, 4, 8, 2, 7)
        assert again.grid == self.result.grid
        assert [r.bounds for r in again.rooms] == [r.bounds for r in self.result.rooms]


class TestBSPInvariants:
    @pytest.mark.parametrize("seed", [0, 1, 2, 3, 17, 99])
    def test_rooms_do_not_overlap(self, seed):
        result = generate_bsp_dungeon(64, 48, 5, 12, 4, seed)
        rooms = result.rooms
        for i, a in enumerate(rooms):
            for b in rooms[i + 1:]:
                assert not a.intersects(b), f"rooms {a.room_id} and {b.room_id} overlap"

    @pytest.mark.parametrize("seed", [0, 5, 42])
    def test_corridor_graph_connected(self, seed):
        result = generate_bsp_dungeon(64, 48, 5, 12, 4, seed)
        assert _reachable_ids(result.rooms, 0) == set(range(len(result.rooms)))

    @pytest.mark.parametrize("seed", [0, 5, 42])
    def test_single_walkable_component(self, seed):
        result = generate_bsp_dungeon(64, 48, 5, 12, 4, seed)
        assert len(ConnectivityAnalyzer(result.grid).components()) == 1

    def test_rooms_inside_their_leaves(self):
        result = generate_bsp_dungeon(64, 48, 5, 12, 4, 13)
        for leaf in result.root.leaves():
            assert leaf.room is not None
            b = leaf.room.bounds
            assert leaf.bounds.x <= b.x and b.x_max <= leaf.bounds.x_max
            assert leaf.bounds.y <= b.y and b.y_max <= leaf.bounds.y_max

    def test_room_tiles_are_floor(self):
        result = generate_bsp_dungeon(40, 40, 5, 10, 3, 4)
        for room in result.rooms:
            assert all(result.grid.get(p) == TileKind.FLOOR for p in room.tiles)

    def test_no_splits_yields_one_room(self):
        result = generate_bsp_dungeon(30, 30, 5, 10, 0, 1)
        assert len(result.rooms) == 1
        assert result.rooms[0].kind == RoomKind.START
        assert result.boss_room is None

    def test_small_map_stops_splitting(self):
        result = generate_bsp_dungeon(9, 9, 5, 10, 6, 1)
        assert result.root.is_leaf
        assert len(result.rooms) == 1

    def test_invalid_arguments(self):
        with pytest.raises(ValueError):
            generate_bsp_dungeon(0, 20, 4, 8, 2, 1)
        with pytest.raises(ValueError):
            generate_bsp_dungeon(20, 20, 0, 8, 2, 1)

    def test_dispatch_from_params(self):
        params = BSPParams(width=20, height=20, min_room_size=4, max_room_size=8, iterations=2, seed=7)
        result = generate_dungeon(params)
        assert result.algorithm == DungeonAlgorithm.BSP
        assert result.grid == generate_bsp_dungeon(20, 20, 4, 8, 2, 7).grid
        assert result.stats["rooms"] == len(result.rooms)


class TestBSPComponents:
    def test_partitioner_respects_min_size(self):
        rng = RandomStream(3, Domain.BSP)
        root = SpacePartitioner(6, rng).build(Rect(0, 0, 60, 60), 5)
        for leaf in root.leaves():
            assert leaf.bounds.width >= 6
            assert leaf.bounds.height >= 6
        assert sum(leaf.bounds.area for leaf in root.leaves()) == 3600

    def test_corridor_is_l_shaped(self):
        grid = TileGrid(10, 10)
        carver = BSPCarver(grid, RandomStream(0, Domain.BSP), 3, 5)
        carver.carve_corridor(Vector2(1, 1), Vector2(4, 6))
        corridor = set(grid.positions(TileKind.CORRIDOR))
        expected = {Vector2(x, 1) for x in range(1, 5)} | {Vector2(4, y) for y in range(1, 7)}
        assert corridor == expected

    def test_corridor_keeps_floor(self):
        grid = TileGrid(10, 3)
        grid.set_xy(4, 1, TileKind.FLOOR)
        carver = BSPCarver(grid, RandomStream(0, Domain.BSP), 3, 5)
        carver.carve_corridor(Vector2(1, 1), Vector2(8, 1))
        assert grid.get_xy(4, 1) == TileKind.FLOOR
        assert grid.get_xy(5, 1) == TileKind.CORRIDOR

    def test_treasure_rooms_are_interior(self):
        for seed in range(10):
            rooms = generate_bsp_dungeon(80, 60, 5, 10, 5, seed).rooms
            treasure = [r.room_id for r in rooms if r.kind == RoomKind.TREASURE]
            assert len(treasure) <= max(1, len(rooms) // 5)
            assert all(0 < rid < len(rooms) - 1 for rid in treasure)
