#!/usr/bin/env python3
"""Generator profiler.

Usage:
    python scripts/profile_generation.py --runs 20 --size 128
    python scripts/profile_generation.py --runs 5 --size 256 --cprofile gen.prof

Reports:
    - Per-generator timing statistics (min, mean, p95, max)
    - Optional: cProfile dump for flame graph generation
"""

from __future__ import annotations

import argparse
import cProfile
import io
import os
import pstats
import statistics
import sys
import time
from typing import Callable

# Ensure project root is on path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from procgen.core.params import TerrainParams
from procgen.core.patterns import TilePattern
from procgen.systems.dungeon import (
    generate_bsp_dungeon, generate_cave_dungeon, generate_random_walk_dungeon,
)
from procgen.systems.noise import fractal_noise, ridged_noise, worley_noise
from procgen.systems.terrain import generate_terrain
from procgen.systems.wfc import solve


def _generators(size: int) -> dict[str, Callable[[int], object]]:
    patterns = [TilePattern.permissive(i, range(3)) for i in range(3)]
    return {
        "fractal": lambda s: fractal_noise(size, size, 20.0, 4, 0.5, 2.0, seed=s),
        "ridged": lambda s: ridged_noise(size, size, 20.0, 4, 0.5, 2.0, seed=s),
        "worley": lambda s: worley_noise(size, size, 16, s),
        "bsp": lambda s: generate_bsp_dungeon(size, size, 5, 12, 4, s),
        "random_walk": lambda s: generate_random_walk_dungeon(size, size, size * 4, 6, s),
        "cave": lambda s: generate_cave_dungeon(size, size, 0.45, 5, s),
        "wfc": lambda s: solve(min(size, 48), min(size, 48), patterns, s),
        "terrain": lambda s: generate_terrain(TerrainParams(width=size, height=size, seed=s)),
    }


def _percentile(data: list[float], p: float) -> float:
    """Simple percentile calculation."""
    if not data:
        return 0.0
    sorted_data = sorted(data)
    k = (len(sorted_data) - 1) * (p / 100.0)
    f = int(k)
    c = f + 1
    if c >= len(sorted_data):
        return sorted_data[f]
    return sorted_data[f] + (k - f) * (sorted_data[c] - sorted_data[f])


def _print_report(timings: dict[str, list[float]]) -> None:
    print("\n" + "=" * 70)
    print("  GENERATOR PERFORMANCE REPORT")
    print("=" * 70)
    print(f"\n  {'Generator':<14} {'Min (ms)':>10} {'Mean (ms)':>10} {'P95 (ms)':>10} {'Max (ms)':>10}")
    print(f"  {'-' * 14} {'-' * 10} {'-' * 10} {'-' * 10} {'-' * 10}")
    for name, times in timings.items():
        print(f"  {name:<14} {min(times) * 1000:>10.2f} {statistics.mean(times) * 1000:>10.2f} "
              f"{_percentile(times, 95) * 1000:>10.2f} {max(times) * 1000:>10.2f}")
    print("\n" + "=" * 70)


def main() -> None:
    parser = argparse.ArgumentParser(description="Profile the procedural generators")
    parser.add_argument("--runs", type=int, default=10, help="Runs per generator")
    parser.add_argument("--size", type=int, default=128, help="Grid size (NxN)")
    parser.add_argument("--seed", type=int, default=42, help="First seed; run i uses seed + i")
    parser.add_argument("--only", type=str, default=None, help="Profile a single generator")
    parser.add_argument("--cprofile", type=str, default=None, help="Save cProfile output to file")
    args = parser.parse_args()

    generators = _generators(args.size)
    if args.only:
        generators = {args.only: generators[args.only]}

    print(f"Profiling: {args.runs} runs, size={args.size}x{args.size}, seed={args.seed}")

    profiler = None
    if args.cprofile:
        profiler = cProfile.Profile()
        profiler.enable()

    timings: dict[str, list[float]] = {}
    for name, fn in generators.items():
        times: list[float] = []
        for i in range(args.runs):
            started = time.perf_counter()
            fn(args.seed + i)
            times.append(time.perf_counter() - started)
        timings[name] = times

    if profiler:
        profiler.disable()

    _print_report(timings)

    if profiler and args.cprofile:
        profiler.dump_stats(args.cprofile)
        print(f"\n  cProfile data saved to: {args.cprofile}")
        print(f"\n  Top 20 functions by cumulative time:")
        stream = io.StringIO()
        ps = pstats.Stats(profiler, stream=stream)
        ps.sort_stats("cumulative")
        ps.print_stats(20)
        print(stream.getvalue())


if __name__ == "__main__":
    main()
