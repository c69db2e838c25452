"""Tile grid and noise map buffers."""

from __future__ import annotations

from collections.abc import Iterator

from procgen.core.enums import TileKind, WALKABLE_TILES
from procgen.core.models import Vector2


def require_dimensions(width: int, height: int) -> None:
    """Raise ``ValueError`` unless both dimensions are positive."""
    if width <= 0 or height <= 0:
        raise ValueError(f"grid dimensions must be positive, got {width}x{height}")


class TileGrid:
    """2D tile grid backed by a flat list for cache-friendly access.

    Reads outside the grid return ``TileKind.EMPTY`` and writes outside the
    grid are ignored, so neighbour probes near the border never fail.
    """

    __slots__ = ("width", "height", "_tiles")

    def __init__(self, width: int, height: int, default: TileKind = TileKind.WALL) -> None:
        require_dimensions(width, height)
        self.width = width
        self.height = height
        self._tiles: list[TileKind] = [default] * (width * height)

    # -- access --

    def _idx(self, x: int, y: int) -> int:
        return y * self.width + x

    def in_bounds(self, pos: Vector2) -> bool:
        return 0 <= pos.x < self.width and 0 <= pos.y < self.height

    def get(self, pos: Vector2) -> TileKind:
        return self.get_xy(pos.x, pos.y)

    def set(self, pos: Vector2, kind: TileKind) -> None:
        self.set_xy(pos.x, pos.y, kind)

    def is_walkable(self, pos: Vector2) -> bool:
        return self.get_xy(pos.x, pos.y) in WALKABLE_TILES

    def is_border(self, pos: Vector2) -> bool:
        return pos.x == 0 or pos.y == 0 or pos.x == self.width - 1 or pos.y == self.height - 1

    # -- fast raw-coordinate access (no Vector2 alloc, for hot loops) --

    def in_bounds_xy(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def get_xy(self, x: int, y: int) -> TileKind:
        if 0 <= x < self.width and 0 <= y < self.height:
            return self._tiles[y * self.width + x]
        return TileKind.EMPTY

    def set_xy(self, x: int, y: int, kind: TileKind) -> None:
        if 0 <= x < self.width and 0 <= y < self.height:
            self._tiles[y * self.width + x] = kind

    # -- bulk --

    def fill(self, kind: TileKind) -> None:
        self._tiles = [kind] * (self.width * self.height)

    def count(self, kind: TileKind) -> int:
        return self._tiles.count(kind)

    def positions(self, kind: TileKind) -> Iterator[Vector2]:
        """Yield every position holding *kind*, in raster order."""
        w = self.width
        for idx, tile in enumerate(self._tiles):
            if tile == kind:
                yield Vector2(idx % w, idx // w)

    def border_positions(self) -> Iterator[Vector2]:
        for y in range(self.height):
            for x in range(self.width):
                if x == 0 or y == 0 or x == self.width - 1 or y == self.height - 1:
                    yield Vector2(x, y)

    def to_lists(self) -> list[list[int]]:
        """Row-major nested lists of raw tile values."""
        w = self.width
        return [[int(t) for t in self._tiles[y * w:(y + 1) * w]] for y in range(self.height)]

    def rows(self) -> list[str]:
        """Text dump, one string per row."""
        w = self.width
        return ["".join(t.glyph for t in self._tiles[y * w:(y + 1) * w]) for y in range(self.height)]

    def run_length_encode(self) -> list[int]:
        """RLE encode the flat buffer as ``[value, count, value, count, ...]``."""
        rle: list[int] = []
        tiles = self._tiles
        cur_val = int(tiles[0])
        cur_count = 1
        for tile in tiles[1:]:
            v = int(tile)
            if v == cur_val:
                cur_count += 1
            else:
                rle.append(cur_val)
                rle.append(cur_count)
                cur_val = v
                cur_count = 1
        rle.append(cur_val)
        rle.append(cur_count)
        return rle

    # -- copy --

    def copy(self) -> TileGrid:
        new = TileGrid.__new__(TileGrid)
        new.width = self.width
        new.height = self.height
        new._tiles = list(self._tiles)
        return new

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TileGrid):
            return NotImplemented
        return self.width == other.width and self.height == other.height and self._tiles == other._tiles

    __hash__ = None  # type: ignore[assignment]


class NoiseMap:
    """width x height float buffer produced by the noise generators."""

    __slots__ = ("width", "height", "_values")

    def __init__(self, width: int, height: int, fill: float = 0.0) -> None:
        require_dimensions(width, height)
        self.width = width
        self.height = height
        self._values: list[float] = [fill] * (width * height)

    def get(self, x: int, y: int) -> float:
        return self._values[y * self.width + x]

    def set(self, x: int, y: int, value: float) -> None:
        self._values[y * self.width + x] = value

    def values(self) -> list[float]:
        return list(self._values)

    def min(self) -> float:
        return min(self._values)

    def max(self) -> float:
        return max(self._values)

    def normalize(self) -> None:
        """Rescale in place so the minimum maps to 0.0 and the maximum to 1.0.

        A constant map has no range and becomes all zeros.
        """
        lo = min(self._values)
        hi = max(self._values)
        span = hi - lo
        if span <= 0.0:
            self._values = [0.0] * len(self._values)
            return
        self._values = [(v - lo) / span for v in self._values]

    def map_values(self, fn) -> None:
        self._values = [fn(v) for v in self._values]

    def to_lists(self) -> list[list[float]]:
        w = self.width
        return [self._values[y * w:(y + 1) * w] for y in range(self.height)]

    def rows(self, ramp: str = " .:-=+*#%@") -> list[str]:
        """Text dump using *ramp* from low to high values."""
        top = len(ramp) - 1
        w = self.width
        return [
            "".join(ramp[max(0, min(top, int(v * top + 0.5)))] for v in self._values[y * w:(y + 1) * w])
            for y in range(self.height)
        ]

    def copy(self) -> NoiseMap:
        new = NoiseMap.__new__(NoiseMap)
        new.width = self.width
        new.height = self.height
        new._values = list(self._values)
        return new

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, NoiseMap):
            return NotImplemented
        return self.width == other.width and self.height == other.height and self._values == other._values

    __hash__ = None  # type: ignore[assignment]
