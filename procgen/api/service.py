"""GeneratorService: stateless generation calls plus a request history.

Each request builds its own RNG and buffers inside the generator call;
the service only holds immutable configuration and the history log.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from typing import TYPE_CHECKING, TypeVar

from procgen.core.grid import NoiseMap
from procgen.core.params import (
    DungeonParams, FractalNoiseParams, TerrainParams, WfcParams, WorleyNoiseParams,
)
from procgen.systems.dungeon import DungeonResult, generate_dungeon
from procgen.systems.names import NameGenerator
from procgen.systems.noise import fractal_noise, ridged_noise, worley_noise
from procgen.systems.terrain import TerrainResult, generate_terrain
from procgen.systems.wfc import WfcResult, patterns_from_params, solve_with_retries
from procgen.utils.history import GenerationLog

if TYPE_CHECKING:
    from procgen.config import GenerationConfig

logger = logging.getLogger(__name__)

R = TypeVar("R")


class GridTooLargeError(ValueError):
    """Requested grid exceeds the configured cell limit."""


class GeneratorService:
    """Validates request size, runs a generator, and records the call."""

    def __init__(self, config: GenerationConfig) -> None:
        self.config = config
        self._history = GenerationLog(config.history_size)

    @property
    def history(self) -> GenerationLog:
        return self._history

    def _check_size(self, width: int, height: int) -> None:
        if width * height > self.config.max_grid_cells:
            raise GridTooLargeError(
                f"{width}x{height} exceeds the limit of {self.config.max_grid_cells} cells"
            )

    def _timed(self, kind: str, seed: int, width: int, height: int, fn: Callable[[], R]) -> R:
        self._check_size(width, height)
        started = time.perf_counter()
        try:
            result = fn()
        except ValueError as exc:
            self._history.record(kind, seed, width, height,
                                 (time.perf_counter() - started) * 1000.0, ok=False, detail=str(exc))
            raise
        elapsed = (time.perf_counter() - started) * 1000.0
        self._history.record(kind, seed, width, height, elapsed)
        logger.debug("%s %dx%d seed=%d served in %.1f ms", kind, width, height, seed, elapsed)
        return result

    # -- generators --

    def fractal(self, params: FractalNoiseParams) -> NoiseMap:
        fn = ridged_noise if params.kind == "ridged" else fractal_noise
        return self._timed(
            f"noise/{params.kind}", params.seed, params.width, params.height,
            lambda: fn(params.width, params.height, params.scale, params.octaves,
                       params.persistence, params.lacunarity, params.offset, params.seed),
        )

    def worley(self, params: WorleyNoiseParams) -> NoiseMap:
        return self._timed(
            "noise/worley", params.seed, params.width, params.height,
            lambda: worley_noise(params.width, params.height, params.num_points, params.seed, params.invert),
        )

    def dungeon(self, params: DungeonParams) -> DungeonResult:
        return self._timed(
            f"dungeon/{params.algorithm}", params.seed, params.width, params.height,
            lambda: generate_dungeon(params),
        )

    def wfc(self, params: WfcParams) -> WfcResult:
        patterns = patterns_from_params(params)
        attempts = max(1, self.config.wfc_retry_attempts)
        return self._timed(
            "wfc", params.seed, params.width, params.height,
            lambda: solve_with_retries(params.width, params.height, patterns, params.seed, attempts),
        )

    def terrain(self, params: TerrainParams) -> TerrainResult:
        return self._timed(
            "terrain", params.seed, params.width, params.height,
            lambda: generate_terrain(params),
        )

    def names(self, seed: int, count: int, towns: int) -> tuple[list[str], list[str]]:
        gen = NameGenerator(seed)
        people = gen.names(count)
        places = [gen.town_name() for _ in range(towns)]
        self._history.record("names", seed, 0, 0, 0.0)
        return people, places
