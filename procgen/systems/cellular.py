"""Cellular-automaton cave generation."""

from __future__ import annotations

import logging

from procgen.core.enums import TileKind
from procgen.core.grid import TileGrid
from procgen.systems.rng import RandomStream

logger = logging.getLogger(__name__)

# More walls than this among the 8 neighbours turns a cell into wall;
# fewer turns it into floor; exactly this many leaves it unchanged.
WALL_THRESHOLD = 4


class CellularAutomatonSmoother:
    """Random fill followed by majority-rule smoothing passes."""

    __slots__ = ("_grid", "_rng")

    def __init__(self, grid: TileGrid, rng: RandomStream) -> None:
        self._grid = grid
        self._rng = rng

    def randomize(self, fill_probability: float) -> None:
        """Border cells become WALL; interior cells WALL with *fill_probability*.

        Draws are taken in row-major order over interior cells only.
        """
        grid = self._grid
        w, h = grid.width, grid.height
        for y in range(h):
            for x in range(w):
                if x == 0 or y == 0 or x == w - 1 or y == h - 1:
                    grid.set_xy(x, y, TileKind.WALL)
                elif self._rng.chance(fill_probability):
                    grid.set_xy(x, y, TileKind.WALL)
                else:
                    grid.set_xy(x, y, TileKind.FLOOR)

    @staticmethod
    def count_wall_neighbors(grid: TileGrid, x: int, y: int) -> int:
        """Walls in the Moore neighbourhood; off-grid neighbours count as walls."""
        count = 0
        for ny in range(y - 1, y + 2):
            for nx in range(x - 1, x + 2):
                if nx == x and ny == y:
                    continue
                if not grid.in_bounds_xy(nx, ny) or grid.get_xy(nx, ny) == TileKind.WALL:
                    count += 1
        return count

    def smooth_once(self) -> None:
        """One pass, every cell computed from the previous pass's snapshot."""
        grid = self._grid
        snapshot = grid.copy()
        for y in range(grid.height):
            for x in range(grid.width):
                walls = self.count_wall_neighbors(snapshot, x, y)
                if walls > WALL_THRESHOLD:
                    grid.set_xy(x, y, TileKind.WALL)
                elif walls < WALL_THRESHOLD:
                    grid.set_xy(x, y, TileKind.FLOOR)

    def smooth(self, iterations: int) -> None:
        for i in range(iterations):
            self.smooth_once()
            logger.debug("Cave smoothing pass %d: %d floor tiles", i + 1, self._grid.count(TileKind.FLOOR))
