"""Terrain helpers: height maps, biome classification, droplet erosion.

All generation is deterministic; erosion draws from its own RandomStream.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field

from procgen.core.enums import Domain
from procgen.core.grid import NoiseMap
from procgen.core.params import TerrainParams
from procgen.systems.noise import fractal_noise
from procgen.systems.rng import RandomStream

logger = logging.getLogger(__name__)

EROSION_MAX_STEPS = 30
WATER_RETENTION = 0.99


@dataclass(frozen=True, slots=True)
class TerrainSettings:
    noise_scale: float = 50.0
    octaves: int = 4
    persistence: float = 0.5
    lacunarity: float = 2.0
    offset: tuple[float, float] = (0.0, 0.0)
    seed: int = 12345


@dataclass(frozen=True, slots=True)
class BiomeType:
    """Inclusive height/moisture window that classifies a cell."""

    name: str
    min_height: float
    max_height: float
    min_moisture: float
    max_moisture: float
    glyph: str = "?"

    def matches(self, height: float, moisture: float) -> bool:
        return (self.min_height <= height <= self.max_height
                and self.min_moisture <= moisture <= self.max_moisture)


DEFAULT_BIOMES: tuple[BiomeType, ...] = (
    BiomeType("ocean", 0.0, 0.3, 0.0, 1.0, "~"),
    BiomeType("beach", 0.3, 0.35, 0.0, 1.0, ":"),
    BiomeType("desert", 0.35, 0.7, 0.0, 0.3, "."),
    BiomeType("grassland", 0.35, 0.7, 0.3, 0.6, ","),
    BiomeType("forest", 0.35, 0.7, 0.6, 1.0, "T"),
    BiomeType("hills", 0.7, 0.85, 0.0, 1.0, "n"),
    BiomeType("mountain", 0.85, 1.0, 0.0, 1.0, "^"),
)


def generate_height_map(width: int, height: int, settings: TerrainSettings) -> NoiseMap:
    return fractal_noise(
        width, height,
        settings.noise_scale,
        settings.octaves,
        settings.persistence,
        settings.lacunarity,
        settings.offset,
        settings.seed,
    )


def generate_biome_map(
    height_map: NoiseMap,
    moisture_map: NoiseMap,
    biomes: tuple[BiomeType, ...] | list[BiomeType] = DEFAULT_BIOMES,
) -> list[list[int]]:
    """Row-major biome indices; first matching biome wins, 0 when none match."""
    if (height_map.width, height_map.height) != (moisture_map.width, moisture_map.height):
        raise ValueError("height and moisture maps must have the same dimensions")
    out: list[list[int]] = []
    for y in range(height_map.height):
        row: list[int] = []
        for x in range(height_map.width):
            h = height_map.get(x, y)
            m = moisture_map.get(x, y)
            row.append(next((i for i, b in enumerate(biomes) if b.matches(h, m)), 0))
        out.append(row)
    return out


def apply_erosion(height_map: NoiseMap, iterations: int, erosion_strength: float, seed: int) -> None:
    """Hydraulic droplet erosion, mutating *height_map* in place.

    Each droplet starts at a random interior cell and walks to its lowest
    Moore neighbour, eroding as it goes, until it reaches a pit (where it
    deposits its sediment), the border, or the step limit.
    """
    w, h = height_map.width, height_map.height
    if w < 3 or h < 3:
        return
    rng = RandomStream(seed, Domain.EROSION)

    for _ in range(iterations):
        x = rng.randrange(1, w - 1)
        y = rng.randrange(1, h - 1)
        sediment = 0.0
        speed = 1.0
        water = 1.0

        for _step in range(EROSION_MAX_STEPS):
            if x <= 0 or x >= w - 1 or y <= 0 or y >= h - 1:
                break
            current = height_map.get(x, y)
            low_x, low_y, lowest = x, y, current
            for dy in (-1, 0, 1):
                for dx in (-1, 0, 1):
                    if dx == 0 and dy == 0:
                        continue
                    nh = height_map.get(x + dx, y + dy)
                    if nh < lowest:
                        lowest = nh
                        low_x, low_y = x + dx, y + dy

            diff = current - lowest
            if diff <= 0:
                height_map.set(x, y, current + sediment)
                break

            amount = min(diff, erosion_strength * speed * water)
            height_map.set(x, y, current - amount)
            sediment += amount
            x, y = low_x, low_y
            speed = math.sqrt(speed * speed + diff)
            water *= WATER_RETENTION


@dataclass(slots=True)
class TerrainResult:
    height_map: NoiseMap
    moisture_map: NoiseMap
    biome_map: list[list[int]]
    biomes: tuple[BiomeType, ...] = field(default=DEFAULT_BIOMES)

    def rows(self) -> list[str]:
        return ["".join(self.biomes[i].glyph for i in row) for row in self.biome_map]


def generate_terrain(params: TerrainParams, biomes: tuple[BiomeType, ...] = DEFAULT_BIOMES) -> TerrainResult:
    """Height map (optionally eroded) + moisture map + biome classification."""
    settings = TerrainSettings(
        noise_scale=params.scale,
        octaves=params.octaves,
        persistence=params.persistence,
        lacunarity=params.lacunarity,
        offset=params.offset,
        seed=params.seed,
    )
    height_map = generate_height_map(params.width, params.height, settings)
    if params.erosion_iterations:
        apply_erosion(height_map, params.erosion_iterations, params.erosion_strength, params.seed)
        height_map.normalize()
    moisture_settings = TerrainSettings(
        noise_scale=params.scale,
        octaves=params.octaves,
        persistence=params.persistence,
        lacunarity=params.lacunarity,
        offset=params.offset,
        seed=params.seed + params.moisture_seed_offset,
    )
    moisture_map = generate_height_map(params.width, params.height, moisture_settings)
    biome_map = generate_biome_map(height_map, moisture_map, biomes)
    logger.info("Terrain %dx%d seed=%d generated", params.width, params.height, params.seed)
    return TerrainResult(height_map=height_map, moisture_map=moisture_map, biome_map=biome_map, biomes=biomes)
