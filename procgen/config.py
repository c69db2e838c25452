"""Generation configuration with sensible defaults."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class GenerationConfig:
    """Immutable defaults for every generator and the API service."""

    # World
    seed: int = 42
    width: int = 64
    height: int = 48

    # Noise
    noise_scale: float = 20.0
    noise_octaves: int = 4
    noise_persistence: float = 0.5
    noise_lacunarity: float = 2.0
    worley_points: int = 12

    # BSP dungeon
    bsp_min_room_size: int = 5
    bsp_max_room_size: int = 12
    bsp_iterations: int = 4

    # Random-walk dungeon
    walk_length: int = 400
    num_walkers: int = 6

    # Cave dungeon
    cave_fill_probability: float = 0.45
    cave_smooth_iterations: int = 5

    # Wave function collapse
    wfc_retry_attempts: int = 1

    # Terrain
    terrain_scale: float = 30.0
    erosion_iterations: int = 0
    erosion_strength: float = 0.1

    # API limits
    max_grid_cells: int = 512 * 512
    history_size: int = 200

    # Logging
    log_level: str = "INFO"
