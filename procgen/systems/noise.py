"""Scalar noise fields: fractal gradient noise, Worley noise, ridged noise.

The smooth primitive is classic 2D Perlin gradient noise on an integer
lattice. Lattice gradients are picked by hashing the corner coordinates
with a fixed salt, so ``gradient_noise`` is a fixed function of (x, y)
and the seed only enters through the per-octave domain offsets.
"""

from __future__ import annotations

import logging
import math

from procgen.core.enums import Domain
from procgen.core.grid import NoiseMap, require_dimensions
from procgen.systems.rng import DeterministicRNG, RandomStream

logger = logging.getLogger(__name__)

MIN_SCALE = 0.0001
OCTAVE_OFFSET_RANGE = 100_000

_LATTICE = DeterministicRNG(0x5EED_C0DE)

# Eight unit-ish gradient directions
_GRADIENTS: tuple[tuple[float, float], ...] = (
    (1.0, 0.0), (-1.0, 0.0), (0.0, 1.0), (0.0, -1.0),
    (0.7071067811865476, 0.7071067811865476), (-0.7071067811865476, 0.7071067811865476),
    (0.7071067811865476, -0.7071067811865476), (-0.7071067811865476, -0.7071067811865476),
)


def _fade(t: float) -> float:
    """6t^5 - 15t^4 + 10t^3"""
    return t * t * t * (t * (t * 6.0 - 15.0) + 10.0)


def _lerp(a: float, b: float, t: float) -> float:
    return a + t * (b - a)


def _corner(ix: int, iy: int, dx: float, dy: float) -> float:
    gx, gy = _GRADIENTS[_LATTICE.hash(Domain.NOISE_LATTICE, ix, iy) & 7]
    return gx * dx + gy * dy


def perlin(x: float, y: float) -> float:
    """Gradient noise in roughly [0, 1], 0.5 at every lattice point."""
    x0 = math.floor(x)
    y0 = math.floor(y)
    xf = x - x0
    yf = y - y0
    u = _fade(xf)
    v = _fade(yf)
    n00 = _corner(x0, y0, xf, yf)
    n10 = _corner(x0 + 1, y0, xf - 1.0, yf)
    n01 = _corner(x0, y0 + 1, xf, yf - 1.0)
    n11 = _corner(x0 + 1, y0 + 1, xf - 1.0, yf - 1.0)
    value = _lerp(_lerp(n00, n10, u), _lerp(n01, n11, u), v)
    # raw range is about +-0.7071 for unit gradients
    return min(1.0, max(0.0, value * 0.7071067811865476 + 0.5))


def gradient_noise(x: float, y: float) -> float:
    """Smooth noise primitive mapped to [-1, 1]."""
    return perlin(x, y) * 2.0 - 1.0


def simplex_like(x: float, y: float, z: float = 0.0) -> float:
    """Cheap layered blend of three primitive samples, in [0, 1]."""
    value = perlin(x, y) * 0.5
    value += perlin(x + 1.2, y + 0.8) * 0.25
    value += perlin(x + z * 0.5, y + z * 0.5) * 0.25
    return value


def octave_offsets(seed: int, octaves: int, offset: tuple[float, float] = (0.0, 0.0)) -> list[tuple[float, float]]:
    """Per-octave domain offsets, drawn from their own stream."""
    stream = RandomStream(seed, Domain.NOISE)
    out: list[tuple[float, float]] = []
    for _ in range(octaves):
        ox = stream.randrange(-OCTAVE_OFFSET_RANGE, OCTAVE_OFFSET_RANGE) + offset[0]
        oy = stream.randrange(-OCTAVE_OFFSET_RANGE, OCTAVE_OFFSET_RANGE) + offset[1]
        out.append((ox, oy))
    return out


def fractal_noise(
    width: int,
    height: int,
    scale: float,
    octaves: int,
    persistence: float,
    lacunarity: float,
    offset: tuple[float, float] = (0.0, 0.0),
    seed: int = 0,
) -> NoiseMap:
    """Multi-octave gradient noise, min-max normalised into [0, 1]."""
    require_dimensions(width, height)
    if octaves < 0:
        raise ValueError(f"octaves must be non-negative, got {octaves}")
    if scale <= 0:
        scale = MIN_SCALE

    offsets = octave_offsets(seed, octaves, offset)
    half_w = width / 2.0
    half_h = height / 2.0
    noise_map = NoiseMap(width, height)

    for y in range(height):
        for x in range(width):
            amplitude = 1.0
            frequency = 1.0
            total = 0.0
            for ox, oy in offsets:
                sx = (x - half_w + ox) / scale * frequency
                sy = (y - half_h + oy) / scale * frequency
                total += gradient_noise(sx, sy) * amplitude
                amplitude *= persistence
                frequency *= lacunarity
            noise_map.set(x, y, total)

    noise_map.normalize()
    logger.debug("Fractal noise %dx%d (octaves=%d, seed=%d)", width, height, octaves, seed)
    return noise_map


def worley_noise(width: int, height: int, num_points: int, seed: int = 0, invert: bool = False) -> NoiseMap:
    """Distance to the nearest of *num_points* random sites over the grid diagonal."""
    require_dimensions(width, height)
    if num_points < 0:
        raise ValueError(f"num_points must be non-negative, got {num_points}")

    stream = RandomStream(seed, Domain.WORLEY)
    points = [(stream.randrange(0, width), stream.randrange(0, height)) for _ in range(num_points)]
    max_dist = math.hypot(width, height)
    noise_map = NoiseMap(width, height)

    for y in range(height):
        for x in range(width):
            if points:
                nearest = min(math.hypot(x - px, y - py) for px, py in points)
                value = nearest / max_dist
            else:
                value = 1.0
            noise_map.set(x, y, 1.0 - value if invert else value)

    logger.debug("Worley noise %dx%d (points=%d, seed=%d)", width, height, num_points, seed)
    return noise_map


def ridged_noise(
    width: int,
    height: int,
    scale: float,
    octaves: int,
    persistence: float,
    lacunarity: float,
    offset: tuple[float, float] = (0.0, 0.0),
    seed: int = 0,
) -> NoiseMap:
    """Fractal noise folded so the mid value becomes the ridge peak."""
    noise_map = fractal_noise(width, height, scale, octaves, persistence, lacunarity, offset, seed)
    noise_map.map_values(lambda v: 1.0 - abs(v * 2.0 - 1.0))
    return noise_map
