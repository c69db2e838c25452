"""Generators: RNG, noise, dungeon carving, connectivity, WFC, terrain."""

from procgen.systems.connectivity import ConnectivityAnalyzer
from procgen.systems.dungeon import (
    DungeonResult,
    generate_bsp_dungeon,
    generate_cave_dungeon,
    generate_dungeon,
    generate_random_walk_dungeon,
)
from procgen.systems.noise import fractal_noise, ridged_noise, worley_noise
from procgen.systems.rng import DeterministicRNG, RandomStream
from procgen.systems.wfc import WaveFunctionCollapseSolver, WfcResult

__all__ = [
    "ConnectivityAnalyzer",
    "DeterministicRNG",
    "DungeonResult",
    "RandomStream",
    "WaveFunctionCollapseSolver",
    "WfcResult",
    "fractal_noise",
    "generate_bsp_dungeon",
    "generate_cave_dungeon",
    "generate_dungeon",
    "generate_random_walk_dungeon",
    "ridged_noise",
    "worley_noise",
]
