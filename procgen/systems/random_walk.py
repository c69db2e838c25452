"""Multi-walker random-walk carving."""

from __future__ import annotations

import logging

from procgen.core.enums import TileKind
from procgen.core.grid import TileGrid
from procgen.core.models import DIRECTION_OFFSETS, Vector2
from procgen.systems.rng import RandomStream

logger = logging.getLogger(__name__)


class RandomWalkCarver:
    """Carves FLOOR along independent random walks from the grid centre.

    Positions are clamped to stay one cell inside the border.
    """

    __slots__ = ("_grid", "_rng")

    def __init__(self, grid: TileGrid, rng: RandomStream) -> None:
        self._grid = grid
        self._rng = rng

    def _clamp(self, pos: Vector2) -> Vector2:
        w, h = self._grid.width, self._grid.height
        x = min(max(pos.x, 1), max(1, w - 2))
        y = min(max(pos.y, 1), max(1, h - 2))
        return Vector2(x, y)

    def walk(self, start: Vector2, length: int) -> list[Vector2]:
        """One walk: *length* recorded positions, the first being *start*."""
        path: list[Vector2] = []
        pos = start
        for _ in range(length):
            path.append(pos)
            pos = self._clamp(pos + DIRECTION_OFFSETS[self._rng.direction()])
        return path

    def carve(self, walk_length: int, num_walkers: int) -> set[Vector2]:
        start = self._clamp(Vector2(self._grid.width // 2, self._grid.height // 2))
        floor: set[Vector2] = set()
        for _ in range(num_walkers):
            floor.update(self.walk(start, walk_length))
        for pos in floor:
            self._grid.set(pos, TileKind.FLOOR)
        logger.debug("Random walk carved %d floor tiles (%d walkers x %d steps)",
                     len(floor), num_walkers, walk_length)
        return floor
