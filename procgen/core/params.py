"""Pydantic parameter records accepted by the generators and the API."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


# Upper bounds on per-request work that grid size alone does not limit
MAX_OCTAVES = 16
MAX_POINTS = 4096
MAX_SPLIT_ITERATIONS = 32
MAX_WALK_LENGTH = 100_000
MAX_WALKERS = 1_000
MAX_SMOOTH_ITERATIONS = 100
MAX_EROSION_ITERATIONS = 200_000


class _Params(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")


class GridSize(_Params):
    width: int = Field(gt=0)
    height: int = Field(gt=0)


# --- Noise ---

class FractalNoiseParams(GridSize):
    kind: Literal["fractal", "ridged"] = "fractal"
    scale: float = 20.0
    octaves: int = Field(4, ge=0, le=MAX_OCTAVES)
    persistence: float = 0.5
    lacunarity: float = 2.0
    offset: tuple[float, float] = (0.0, 0.0)
    seed: int = 0


class WorleyNoiseParams(GridSize):
    num_points: int = Field(8, ge=0, le=MAX_POINTS)
    seed: int = 0
    invert: bool = False


# --- Dungeons ---

class BSPParams(GridSize):
    algorithm: Literal["bsp"] = "bsp"
    min_room_size: int = Field(4, gt=0)
    max_room_size: int = Field(10, gt=0)
    iterations: int = Field(4, ge=0, le=MAX_SPLIT_ITERATIONS)
    seed: int = 0


class RandomWalkParams(GridSize):
    algorithm: Literal["random_walk"] = "random_walk"
    walk_length: int = Field(200, ge=0, le=MAX_WALK_LENGTH)
    num_walkers: int = Field(4, ge=0, le=MAX_WALKERS)
    seed: int = 0


class CaveParams(GridSize):
    algorithm: Literal["cave"] = "cave"
    fill_probability: float = Field(0.45, ge=0.0, le=1.0)
    smooth_iterations: int = Field(5, ge=0, le=MAX_SMOOTH_ITERATIONS)
    seed: int = 0


DungeonParams = BSPParams | RandomWalkParams | CaveParams


# --- Wave function collapse ---

class PatternSpec(_Params):
    pattern_id: int
    name: str = ""
    weight: float = Field(1.0, ge=0.0)
    north: list[int] = Field(default_factory=list)
    east: list[int] = Field(default_factory=list)
    south: list[int] = Field(default_factory=list)
    west: list[int] = Field(default_factory=list)


class WfcParams(GridSize):
    patterns: list[PatternSpec] = Field(min_length=1)
    seed: int = 0


# --- Terrain ---

class TerrainParams(GridSize):
    scale: float = 50.0
    octaves: int = Field(4, ge=0, le=MAX_OCTAVES)
    persistence: float = 0.5
    lacunarity: float = 2.0
    offset: tuple[float, float] = (0.0, 0.0)
    seed: int = 12345
    moisture_seed_offset: int = 7919
    erosion_iterations: int = Field(0, ge=0, le=MAX_EROSION_ITERATIONS)
    erosion_strength: float = Field(0.1, ge=0.0)
