"""Tests for TileGrid / NoiseMap buffers and the core value types."""

import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest

from procgen.core.enums import Direction, TileKind
from procgen.core.grid import NoiseMap, TileGrid
from procgen.core.models import DIRECTION_OFFSETS, Rect, Vector2
from procgen.core.rooms import PartitionNode, Room


class TestTileGrid:
    def test_defaults_to_wall(self):
        g = TileGrid(4, 3)
        assert g.count(TileKind.WALL) == 12

    def test_rejects_non_positive_dimensions(self):
        with pytest.raises(ValueError):
            TileGrid(0, 5)
        with pytest.raises(ValueError):
            TileGrid(5, -1)

    def test_out_of_bounds_read_is_empty(self):
        g = TileGrid(3, 3)
        assert g.get_xy(-1, 0) == TileKind.EMPTY
        assert g.get(Vector2(3, 1)) == TileKind.EMPTY

    def test_out_of_bounds_write_is_ignored(self):
        g = TileGrid(3, 3)
        before = g.copy()
        g.set_xy(5, 5, TileKind.FLOOR)
        g.set(Vector2(-1, 2), TileKind.FLOOR)
        assert g == before

    def test_walkable(self):
        g = TileGrid(3, 3)
        g.set_xy(1, 1, TileKind.CORRIDOR)
        assert g.is_walkable(Vector2(1, 1))
        assert not g.is_walkable(Vector2(0, 0))
        assert not g.is_walkable(Vector2(9, 9))

    def test_border_positions(self):
        g = TileGrid(4, 4)
        border = list(g.border_positions())
        assert len(border) == 12
        assert all(g.is_border(p) for p in border)
        assert not g.is_border(Vector2(1, 1))

    def test_rle_round_trip_counts(self):
        g = TileGrid(5, 2)
        g.set_xy(1, 0, TileKind.FLOOR)
        g.set_xy(2, 0, TileKind.FLOOR)
        rle = g.run_length_encode()
        assert rle == [1, 1, 2, 2, 1, 7]
        assert sum(rle[1::2]) == 10

    def test_rows_use_glyphs(self):
        g = TileGrid(3, 1)
        g.set_xy(1, 0, TileKind.FLOOR)
        assert g.rows() == ["#.#"]

    def test_copy_is_independent(self):
        g = TileGrid(2, 2)
        c = g.copy()
        c.set_xy(0, 0, TileKind.FLOOR)
        assert g.get_xy(0, 0) == TileKind.WALL


class TestNoiseMap:
    def test_normalize_range(self):
        m = NoiseMap(3, 1)
        m.set(0, 0, -2.0)
        m.set(1, 0, 0.0)
        m.set(2, 0, 2.0)
        m.normalize()
        assert m.values() == [0.0, 0.5, 1.0]

    def test_normalize_constant_map(self):
        m = NoiseMap(2, 2, fill=0.7)
        m.normalize()
        assert m.values() == [0.0] * 4

    def test_to_lists_is_row_major(self):
        m = NoiseMap(2, 2)
        m.set(1, 0, 0.25)
        assert m.to_lists() == [[0.0, 0.25], [0.0, 0.0]]


class TestValueTypes:
    def test_direction_offsets(self):
        assert DIRECTION_OFFSETS[Direction.NORTH] == Vector2(0, -1)
        assert Direction.EAST.opposite == Direction.WEST

    def test_rect_geometry(self):
        r = Rect(2, 3, 4, 5)
        assert (r.x_max, r.y_max, r.area) == (6, 8, 20)
        assert r.center == Vector2(4, 5)
        assert r.contains(Vector2(5, 7))
        assert not r.contains(Vector2(6, 7))

    def test_rect_intersects(self):
        a = Rect(0, 0, 4, 4)
        assert a.intersects(Rect(3, 3, 2, 2))
        assert not a.intersects(Rect(4, 0, 2, 2))
        assert a.intersects(Rect(4, 0, 2, 2), spacing=1)

    def test_room_connect_is_symmetric_and_idempotent(self):
        a = Room(0, Rect(0, 0, 2, 2))
        b = Room(1, Rect(5, 5, 2, 2))
        a.connect(b)
        a.connect(b)
        assert a.connections == [1]
        assert b.connections == [0]

    def test_partition_leaves(self):
        root = PartitionNode(Rect(0, 0, 10, 10))
        assert root.is_leaf and root.depth() == 0
        root.left = PartitionNode(Rect(0, 0, 5, 10))
        root.right = PartitionNode(Rect(5, 0, 5, 10))
        assert [n.bounds.x for n in root.leaves()] == [0, 5]
        assert root.depth() == 1
