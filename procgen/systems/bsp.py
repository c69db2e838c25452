"""Binary space partitioning: tree construction, room carving, corridors.

Pipeline (all draws from one RandomStream, in this order):
  1. split     - recursive split of the full map rectangle
  2. carve     - one room per leaf, left-to-right
  3. connect   - post-order L-shaped corridors between sibling subtrees
  4. tag       - Start / Boss / Treasure room kinds
"""

from __future__ import annotations

import logging

from procgen.core.enums import RoomKind, TileKind
from procgen.core.grid import TileGrid
from procgen.core.models import Rect, Vector2
from procgen.core.rooms import PartitionNode, Room
from procgen.systems.rng import RandomStream

logger = logging.getLogger(__name__)

# A side longer than this factor times the other forces the split axis
ASPECT_FORCE_RATIO = 1.25


class SpacePartitioner:
    """Recursive binary rectangle splitter."""

    __slots__ = ("_min_size", "_rng")

    def __init__(self, min_size: int, rng: RandomStream) -> None:
        self._min_size = min_size
        self._rng = rng

    def build(self, bounds: Rect, iterations: int) -> PartitionNode:
        root = PartitionNode(bounds)
        self.split(root, iterations)
        return root

    def split(self, node: PartitionNode, iterations: int) -> None:
        min_size = self._min_size
        b = node.bounds
        if iterations <= 0 or b.width < min_size * 2 or b.height < min_size * 2:
            return

        horizontal = self._rng.random() > 0.5
        if b.width > b.height * ASPECT_FORCE_RATIO:
            horizontal = False
        elif b.height > b.width * ASPECT_FORCE_RATIO:
            horizontal = True

        axis_length = b.height if horizontal else b.width
        upper = axis_length - min_size
        if upper <= min_size:
            return

        cut = self._rng.randrange(min_size, upper)
        if horizontal:
            node.left = PartitionNode(Rect(b.x, b.y, b.width, cut))
            node.right = PartitionNode(Rect(b.x, b.y + cut, b.width, b.height - cut))
        else:
            node.left = PartitionNode(Rect(b.x, b.y, cut, b.height))
            node.right = PartitionNode(Rect(b.x + cut, b.y, b.width - cut, b.height))

        self.split(node.left, iterations - 1)
        self.split(node.right, iterations - 1)


class BSPCarver:
    """Carves rooms into partition leaves and links them with corridors."""

    __slots__ = ("_grid", "_rng", "_min_room", "_max_room", "rooms")

    def __init__(self, grid: TileGrid, rng: RandomStream, min_room: int, max_room: int) -> None:
        self._grid = grid
        self._rng = rng
        self._min_room = min_room
        self._max_room = max_room
        self.rooms: list[Room] = []

    # -- rooms --

    def _room_extent(self, leaf_extent: int) -> int:
        """Room side length for a leaf side, leaving a one-cell margin."""
        room_max = min(leaf_extent - 2, self._max_room)
        if room_max < 1:
            return 1
        return self._rng.randint(min(self._min_room, room_max), room_max)

    def carve_rooms(self, node: PartitionNode) -> None:
        if not node.is_leaf:
            for child in (node.left, node.right):
                if child is not None:
                    self.carve_rooms(child)
            return

        leaf = node.bounds
        room_w = self._room_extent(leaf.width)
        room_h = self._room_extent(leaf.height)
        room_x = self._rng.randrange(leaf.x + 1, leaf.x_max - room_w)
        room_y = self._rng.randrange(leaf.y + 1, leaf.y_max - room_h)
        # tiny leaves cannot keep the margin; stay inside the leaf regardless
        room_x = max(leaf.x, min(room_x, leaf.x_max - room_w))
        room_y = max(leaf.y, min(room_y, leaf.y_max - room_h))

        bounds = Rect(room_x, room_y, room_w, room_h)
        room = Room(room_id=len(self.rooms), bounds=bounds, tiles=bounds.cells())
        for pos in room.tiles:
            self._grid.set(pos, TileKind.FLOOR)
        node.room = room
        self.rooms.append(room)

    # -- corridors --

    def representative(self, node: PartitionNode | None) -> Room | None:
        """One room standing in for a whole subtree (random pick when both sides have one)."""
        if node is None:
            return None
        if node.room is not None:
            return node.room
        left = self.representative(node.left)
        right = self.representative(node.right)
        if left is None:
            return right
        if right is None:
            return left
        return left if self._rng.random() > 0.5 else right

    def connect(self, node: PartitionNode) -> None:
        if node.is_leaf:
            return
        if node.left is not None:
            self.connect(node.left)
        if node.right is not None:
            self.connect(node.right)

        left_room = self.representative(node.left)
        right_room = self.representative(node.right)
        if left_room is not None and right_room is not None:
            self.carve_corridor(left_room.center, right_room.center)
            left_room.connect(right_room)

    def carve_corridor(self, start: Vector2, end: Vector2) -> None:
        """L-shaped corridor: along x first, then along y. Floor is left untouched."""
        x, y = start.x, start.y
        self._mark(x, y)
        step_x = 1 if end.x > x else -1
        while x != end.x:
            x += step_x
            self._mark(x, y)
        step_y = 1 if end.y > y else -1
        while y != end.y:
            y += step_y
            self._mark(x, y)

    def _mark(self, x: int, y: int) -> None:
        if self._grid.get_xy(x, y) != TileKind.FLOOR:
            self._grid.set_xy(x, y, TileKind.CORRIDOR)

    # -- room kinds --

    def assign_room_kinds(self) -> None:
        rooms = self.rooms
        if not rooms:
            return
        rooms[0].kind = RoomKind.START
        if len(rooms) > 1:
            rooms[-1].kind = RoomKind.BOSS

        # Collisions are skipped, not retried, so fewer treasure rooms may result.
        treasure_target = max(1, len(rooms) // 5)
        if len(rooms) <= 3:
            return
        for _ in range(treasure_target):
            idx = self._rng.randrange(1, len(rooms) - 1)
            if rooms[idx].kind == RoomKind.NORMAL:
                rooms[idx].kind = RoomKind.TREASURE
