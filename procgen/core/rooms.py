"""Room and space-partition tree data model.

Rooms live in a flat list owned by the generation result; a room's
``connections`` hold ids into that list rather than references to other
Room objects, so the room graph never forms reference cycles.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from procgen.core.enums import RoomKind
from procgen.core.models import Rect, Vector2


@dataclass(slots=True)
class Room:
    """A carved or detected walkable area."""

    room_id: int
    bounds: Rect
    tiles: list[Vector2] = field(default_factory=list)
    kind: RoomKind = RoomKind.NORMAL
    connections: list[int] = field(default_factory=list)

    @property
    def center(self) -> Vector2:
        return self.bounds.center

    @property
    def size(self) -> int:
        return len(self.tiles)

    def connect(self, other: Room) -> None:
        """Record an undirected edge between this room and *other*."""
        if other.room_id not in self.connections:
            self.connections.append(other.room_id)
        if self.room_id not in other.connections:
            other.connections.append(self.room_id)

    def intersects(self, other: Room, spacing: int = 0) -> bool:
        return self.bounds.intersects(other.bounds, spacing)


@dataclass(slots=True)
class PartitionNode:
    """Node of the binary space-partition tree.

    Children are owned exclusively by their parent. ``room`` is only set on
    leaves that received a carved room.
    """

    bounds: Rect
    left: PartitionNode | None = None
    right: PartitionNode | None = None
    room: Room | None = None

    @property
    def is_leaf(self) -> bool:
        return self.left is None and self.right is None

    def leaves(self) -> list[PartitionNode]:
        """Leaf nodes in left-to-right order."""
        if self.is_leaf:
            return [self]
        out: list[PartitionNode] = []
        for child in (self.left, self.right):
            if child is not None:
                out.extend(child.leaves())
        return out

    def depth(self) -> int:
        if self.is_leaf:
            return 0
        return 1 + max(child.depth() for child in (self.left, self.right) if child is not None)
