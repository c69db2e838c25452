"""Pydantic response models for the REST API.

Request bodies are the parameter records from ``procgen.core.params``.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


# --- Noise ---

class NoiseMapResponse(BaseModel):
    width: int
    height: int
    seed: int
    min: float
    max: float
    values: list[list[float]] = Field(description="Row-major noise values in [0, 1]")


# --- Dungeon ---

class RectSchema(BaseModel):
    x: int
    y: int
    width: int
    height: int


class RoomSchema(BaseModel):
    id: int
    kind: str
    bounds: RectSchema
    center_x: int
    center_y: int
    size: int
    connections: list[int] = Field(default_factory=list)


class DungeonResponse(BaseModel):
    algorithm: str
    seed: int
    width: int
    height: int
    grid: list[int] = Field(description="RLE-encoded TileKind values: [value, count, value, count, ...]")
    rooms: list[RoomSchema]
    stats: dict[str, int] = Field(default_factory=dict)


# --- WFC ---

class WfcResponse(BaseModel):
    width: int
    height: int
    seed: int
    success: bool
    contradiction_x: int | None = None
    contradiction_y: int | None = None
    iterations: int = 0
    grid: list[list[int | None]] = Field(description="Collapsed pattern ids; null where uncollapsed")


# --- Terrain ---

class BiomeSchema(BaseModel):
    index: int
    name: str
    glyph: str


class TerrainResponse(BaseModel):
    width: int
    height: int
    seed: int
    biomes: list[BiomeSchema]
    biome_map: list[list[int]]
    height_map: list[list[float]]


# --- Names ---

class NamesResponse(BaseModel):
    seed: int
    names: list[str]
    towns: list[str]


# --- Config / history ---

class GenerationConfigResponse(BaseModel):
    seed: int
    width: int
    height: int
    noise_scale: float
    noise_octaves: int
    bsp_min_room_size: int
    bsp_max_room_size: int
    bsp_iterations: int
    walk_length: int
    num_walkers: int
    cave_fill_probability: float
    cave_smooth_iterations: int
    wfc_retry_attempts: int
    max_grid_cells: int


class HistoryEntrySchema(BaseModel):
    sequence: int
    kind: str
    seed: int
    width: int
    height: int
    elapsed_ms: float
    ok: bool
    detail: str = ""


class HistoryResponse(BaseModel):
    entries: list[HistoryEntrySchema]


# --- Metadata ---

class EnumEntry(BaseModel):
    id: int
    name: str


class TileKindEntry(BaseModel):
    id: int
    name: str
    glyph: str
    walkable: bool


class EnumsResponse(BaseModel):
    tile_kinds: list[TileKindEntry]
    room_kinds: list[EnumEntry]
    directions: list[EnumEntry]
    algorithms: list[EnumEntry]
