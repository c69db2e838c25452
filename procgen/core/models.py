"""Core value types: Vector2, Rect."""

from __future__ import annotations

from dataclasses import dataclass

from procgen.core.enums import Direction


@dataclass(frozen=True, slots=True)
class Vector2:
    """Immutable 2D integer coordinate."""

    x: int = 0
    y: int = 0

    def __add__(self, other: Vector2) -> Vector2:
        return Vector2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Vector2) -> Vector2:
        return Vector2(self.x - other.x, self.y - other.y)

    def manhattan(self, other: Vector2) -> int:
        return abs(self.x - other.x) + abs(self.y - other.y)

    def distance(self, other: Vector2) -> float:
        return ((self.x - other.x) ** 2 + (self.y - other.y) ** 2) ** 0.5

    def __repr__(self) -> str:
        return f"({self.x}, {self.y})"


# Direction offsets mapped to Direction enum values
DIRECTION_OFFSETS: dict[Direction, Vector2] = {
    Direction.NORTH: Vector2(0, -1),
    Direction.EAST: Vector2(1, 0),
    Direction.SOUTH: Vector2(0, 1),
    Direction.WEST: Vector2(-1, 0),
}


@dataclass(frozen=True, slots=True)
class Rect:
    """Integer rectangle; ``x_max``/``y_max`` are exclusive."""

    x: int
    y: int
    width: int
    height: int

    @property
    def x_max(self) -> int:
        return self.x + self.width

    @property
    def y_max(self) -> int:
        return self.y + self.height

    @property
    def area(self) -> int:
        return self.width * self.height

    @property
    def center(self) -> Vector2:
        return Vector2(self.x + self.width // 2, self.y + self.height // 2)

    def contains(self, pos: Vector2) -> bool:
        return self.x <= pos.x < self.x_max and self.y <= pos.y < self.y_max

    def intersects(self, other: Rect, spacing: int = 0) -> bool:
        """True when the rectangles overlap, after growing both by *spacing*."""
        return (
            self.x - spacing < other.x_max + spacing
            and self.x_max + spacing > other.x - spacing
            and self.y - spacing < other.y_max + spacing
            and self.y_max + spacing > other.y - spacing
        )

    def cells(self) -> list[Vector2]:
        """All covered positions in raster order (row by row)."""
        return [
            Vector2(x, y)
            for y in range(self.y, self.y_max)
            for x in range(self.x, self.x_max)
        ]
