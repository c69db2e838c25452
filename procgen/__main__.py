"""Entry point: ``python -m procgen``.

Supports two modes:
  - ``python -m procgen``                → Launch the FastAPI generation server
  - ``python -m procgen <generator>``    → Generate once and print a text dump
"""

from __future__ import annotations

import argparse
import logging
import sys

logger = logging.getLogger(__name__)

_LOG_LEVELS = ["DEBUG", "INFO", "WARNING"]


def _build_parser() -> argparse.ArgumentParser:
    from procgen.config import GenerationConfig

    defaults = GenerationConfig()
    parser = argparse.ArgumentParser(description="Deterministic Procedural Generation Engine")
    sub = parser.add_subparsers(dest="command")

    # --- Server mode (default) ---
    srv = sub.add_parser("serve", help="Start the FastAPI generation server (default)")
    srv.add_argument("--host", type=str, default="127.0.0.1")
    srv.add_argument("--port", type=int, default=8000)
    srv.add_argument("--seed", type=int, default=defaults.seed)
    srv.add_argument("--max-cells", type=int, default=defaults.max_grid_cells)
    srv.add_argument("--log-level", type=str, default=defaults.log_level, choices=_LOG_LEVELS)

    def _grid_parser(name: str, help_text: str) -> argparse.ArgumentParser:
        p = sub.add_parser(name, help=help_text)
        p.add_argument("--seed", type=int, default=defaults.seed)
        p.add_argument("--width", type=int, default=defaults.width)
        p.add_argument("--height", type=int, default=defaults.height)
        p.add_argument("--log-level", type=str, default="WARNING", choices=_LOG_LEVELS)
        return p

    dng = _grid_parser("dungeon", "Generate a dungeon and print it")
    dng.add_argument("--algorithm", choices=["bsp", "random_walk", "cave"], default="bsp")
    dng.add_argument("--min-room", type=int, default=defaults.bsp_min_room_size)
    dng.add_argument("--max-room", type=int, default=defaults.bsp_max_room_size)
    dng.add_argument("--iterations", type=int, default=defaults.bsp_iterations)
    dng.add_argument("--walk-length", type=int, default=defaults.walk_length)
    dng.add_argument("--walkers", type=int, default=defaults.num_walkers)
    dng.add_argument("--fill", type=float, default=defaults.cave_fill_probability)
    dng.add_argument("--smooth", type=int, default=defaults.cave_smooth_iterations)

    nse = _grid_parser("noise", "Generate a noise map and print it as ASCII shades")
    nse.add_argument("--kind", choices=["fractal", "ridged", "worley"], default="fractal")
    nse.add_argument("--scale", type=float, default=defaults.noise_scale)
    nse.add_argument("--octaves", type=int, default=defaults.noise_octaves)
    nse.add_argument("--persistence", type=float, default=defaults.noise_persistence)
    nse.add_argument("--lacunarity", type=float, default=defaults.noise_lacunarity)
    nse.add_argument("--points", type=int, default=defaults.worley_points)
    nse.add_argument("--invert", action="store_true")

    wfc = _grid_parser("wfc", "Collapse a land/coast/sea tile set and print it")
    wfc.add_argument("--attempts", type=int, default=5)

    ter = _grid_parser("terrain", "Generate a biome map and print it")
    ter.add_argument("--scale", type=float, default=defaults.terrain_scale)
    ter.add_argument("--erosion", type=int, default=defaults.erosion_iterations)
    ter.add_argument("--erosion-strength", type=float, default=defaults.erosion_strength)

    nms = sub.add_parser("names", help="Print generated names")
    nms.add_argument("--seed", type=int, default=defaults.seed)
    nms.add_argument("--count", type=int, default=10)
    nms.add_argument("--towns", type=int, default=0)

    return parser


def _run_server(args: argparse.Namespace) -> None:
    import uvicorn

    from procgen.api.app import create_app
    from procgen.config import GenerationConfig

    config = GenerationConfig(seed=args.seed, max_grid_cells=args.max_cells, log_level=args.log_level)
    app = create_app(config)
    uvicorn.run(app, host=args.host, port=args.port, log_level=args.log_level.lower())


def _run_dungeon(args: argparse.Namespace) -> None:
    from procgen.systems.dungeon import (
        generate_bsp_dungeon, generate_cave_dungeon, generate_random_walk_dungeon,
    )

    if args.algorithm == "bsp":
        result = generate_bsp_dungeon(args.width, args.height, args.min_room, args.max_room,
                                      args.iterations, args.seed)
    elif args.algorithm == "random_walk":
        result = generate_random_walk_dungeon(args.width, args.height, args.walk_length,
                                              args.walkers, args.seed)
    else:
        result = generate_cave_dungeon(args.width, args.height, args.fill, args.smooth, args.seed)

    print("\n".join(result.grid.rows()))
    for room in result.rooms:
        print(f"room {room.room_id:3d} {room.kind.name.lower():9s} at {room.center} "
              f"size={room.size} links={room.connections}")


def _run_noise(args: argparse.Namespace) -> None:
    from procgen.systems.noise import fractal_noise, ridged_noise, worley_noise

    if args.kind == "worley":
        noise_map = worley_noise(args.width, args.height, args.points, args.seed, args.invert)
    else:
        fn = ridged_noise if args.kind == "ridged" else fractal_noise
        noise_map = fn(args.width, args.height, args.scale, args.octaves,
                       args.persistence, args.lacunarity, seed=args.seed)
    print("\n".join(noise_map.rows()))


def _run_wfc(args: argparse.Namespace) -> None:
    from procgen.core.patterns import TilePattern
    from procgen.systems.wfc import solve_with_retries

    # 0 land, 1 coast, 2 sea: land never touches sea directly
    patterns = [
        TilePattern.build(0, weight=3.0, name="land",
                          north=[0, 1], east=[0, 1], south=[0, 1], west=[0, 1]),
        TilePattern.build(1, weight=1.0, name="coast",
                          north=[0, 1, 2], east=[0, 1, 2], south=[0, 1, 2], west=[0, 1, 2]),
        TilePattern.build(2, weight=3.0, name="sea",
                          north=[1, 2], east=[1, 2], south=[1, 2], west=[1, 2]),
    ]
    glyphs = {0: "#", 1: ".", 2: "~", None: "?"}
    result = solve_with_retries(args.width, args.height, patterns, args.seed, args.attempts)
    for row in result.grid:
        print("".join(glyphs[v] for v in row))
    if not result.success:
        print(f"contradiction at {result.contradiction_at} after {result.iterations} iterations")


def _run_terrain(args: argparse.Namespace) -> None:
    from procgen.core.params import TerrainParams
    from procgen.systems.terrain import generate_terrain

    params = TerrainParams(width=args.width, height=args.height, scale=args.scale,
                           seed=args.seed, erosion_iterations=args.erosion,
                           erosion_strength=args.erosion_strength)
    print("\n".join(generate_terrain(params).rows()))


def _run_names(args: argparse.Namespace) -> None:
    from procgen.systems.names import NameGenerator

    gen = NameGenerator(args.seed)
    for name in gen.names(args.count):
        print(name)
    for _ in range(args.towns):
        print(gen.town_name())


_COMMANDS = {
    "dungeon": _run_dungeon,
    "noise": _run_noise,
    "wfc": _run_wfc,
    "terrain": _run_terrain,
    "names": _run_names,
}


def main() -> None:
    parser = _build_parser()
    args = parser.parse_args()

    # Default to serve mode if no subcommand given
    if args.command is None or args.command == "serve":
        if args.command is None:
            args = parser.parse_args(["serve"])
        _run_server(args)
        return

    from procgen.utils.logging import setup_logging

    setup_logging(getattr(args, "log_level", "WARNING"), stream=sys.stderr)
    try:
        _COMMANDS[args.command](args)
    except ValueError as exc:
        parser.error(str(exc))
    logger.info("%s finished (seed=%d)", args.command, args.seed)


if __name__ == "__main__":
    main()
