"""Flood-fill extraction of connected walkable regions.

Cells are scanned row by row; each unvisited walkable cell seeds a
4-neighbour breadth-first fill. Components of more than
``MIN_ROOM_TILES`` tiles become Rooms, smaller ones are dropped.
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass, field

from procgen.core.enums import WALKABLE_TILES
from procgen.core.grid import TileGrid
from procgen.core.models import Rect, Vector2
from procgen.core.rooms import Room

logger = logging.getLogger(__name__)

MIN_ROOM_TILES = 9

# Cardinal directions (no diagonals)
_DIRS = ((1, 0), (-1, 0), (0, 1), (0, -1))


@dataclass(slots=True)
class Component:
    """A connected walkable region, before it is promoted to a Room."""

    tiles: list[Vector2] = field(default_factory=list)
    bounds: Rect = Rect(0, 0, 0, 0)

    @property
    def size(self) -> int:
        return len(self.tiles)


class ConnectivityAnalyzer:
    """Flood-fill analysis over a TileGrid (read-only)."""

    __slots__ = ("_grid", "_min_tiles")

    def __init__(self, grid: TileGrid, min_tiles: int = MIN_ROOM_TILES) -> None:
        self._grid = grid
        self._min_tiles = min_tiles

    def _flood(self, sx: int, sy: int, visited: list[bool]) -> Component:
        grid = self._grid
        w = grid.width
        tiles: list[Vector2] = []
        min_x = max_x = sx
        min_y = max_y = sy
        visited[sy * w + sx] = True
        queue: deque[tuple[int, int]] = deque([(sx, sy)])
        while queue:
            x, y = queue.popleft()
            tiles.append(Vector2(x, y))
            if x < min_x:
                min_x = x
            elif x > max_x:
                max_x = x
            if y < min_y:
                min_y = y
            elif y > max_y:
                max_y = y
            for dx, dy in _DIRS:
                nx, ny = x + dx, y + dy
                if not grid.in_bounds_xy(nx, ny):
                    continue
                idx = ny * w + nx
                if visited[idx] or grid.get_xy(nx, ny) not in WALKABLE_TILES:
                    continue
                visited[idx] = True
                queue.append((nx, ny))
        bounds = Rect(min_x, min_y, max_x - min_x + 1, max_y - min_y + 1)
        return Component(tiles=tiles, bounds=bounds)

    def components(self) -> list[Component]:
        """Every walkable component, including ones too small to be rooms."""
        grid = self._grid
        visited = [False] * (grid.width * grid.height)
        out: list[Component] = []
        for y in range(grid.height):
            for x in range(grid.width):
                if visited[y * grid.width + x] or grid.get_xy(x, y) not in WALKABLE_TILES:
                    continue
                out.append(self._flood(x, y, visited))
        return out

    def detect_rooms(self) -> list[Room]:
        """Rooms for every component with more than ``min_tiles`` tiles, ids in scan order."""
        rooms: list[Room] = []
        discarded = 0
        for comp in self.components():
            if comp.size > self._min_tiles:
                rooms.append(Room(room_id=len(rooms), bounds=comp.bounds, tiles=comp.tiles))
            else:
                discarded += 1
        logger.debug("Detected %d rooms (%d small components discarded)", len(rooms), discarded)
        return rooms

    def is_connected(self, a: Vector2, b: Vector2) -> bool:
        """True when *a* and *b* are both walkable and 4-connected."""
        grid = self._grid
        if not (grid.is_walkable(a) and grid.is_walkable(b)):
            return False
        visited = [False] * (grid.width * grid.height)
        self._flood(a.x, a.y, visited)
        return visited[b.y * grid.width + b.x]
