"""Tests for the REST layer: route functions are called directly with a service."""

import unittest

from fastapi import HTTPException
from pydantic import ValidationError

from procgen.api.app import create_app
from procgen.api.dependencies import get_generator_service, set_generator_service
from procgen.api.routes import config as config_routes
from procgen.api.routes import dungeon as dungeon_routes
from procgen.api.routes import metadata as metadata_routes
from procgen.api.routes import noise as noise_routes
from procgen.api.routes import terrain as terrain_routes
from procgen.api.routes import wfc as wfc_routes
from procgen.api.service import GeneratorService
from procgen.config import GenerationConfig
from procgen.core.enums import TileKind
from procgen.core.params import (
    BSPParams,
    CaveParams,
    MAX_WALK_LENGTH,
    MAX_WALKERS,
    FractalNoiseParams,
    PatternSpec,
    RandomWalkParams,
    TerrainParams,
    WfcParams,
    WorleyNoiseParams,
)
from procgen.systems.dungeon import generate_bsp_dungeon


class TestNoiseRoutes(unittest.TestCase):

    def setUp(self):
        self.svc = GeneratorService(GenerationConfig())

    def test_fractal(self):
        resp = noise_routes.fractal(FractalNoiseParams(width=8, height=6, seed=3), self.svc)
        self.assertEqual(len(resp.values), 6)
        self.assertEqual(len(resp.values[0]), 8)
        self.assertEqual((resp.min, resp.max), (0.0, 1.0))

    def test_ridged_overrides_kind(self):
        params = FractalNoiseParams(width=8, height=8, seed=3)
        fractal = noise_routes.fractal(params, self.svc)
        ridged = noise_routes.ridged(params, self.svc)
        self.assertNotEqual(fractal.values, ridged.values)
        self.assertEqual(self.svc.history.latest(1)[0].kind, "noise/ridged")

    def test_worley(self):
        resp = noise_routes.worley(WorleyNoiseParams(width=5, height=5, num_points=0), self.svc)
        self.assertEqual(resp.values, [[1.0] * 5] * 5)


class TestDungeonRoutes(unittest.TestCase):

    def setUp(self):
        self.svc = GeneratorService(GenerationConfig())

    def test_bsp_matches_generator(self):
        params = BSPParams(width=20, height=20, min_room_size=4, max_room_size=8, iterations=2, seed=7)
        resp = dungeon_routes.bsp(params, self.svc)
        direct = generate_bsp_dungeon(20, 20, 4, 8, 2, 7)
        self.assertEqual(resp.grid, direct.grid.run_length_encode())
        self.assertEqual(sum(resp.grid[1::2]), 400)
        self.assertEqual(resp.rooms[0].kind, "start")
        self.assertEqual(resp.rooms[-1].kind, "boss")
        self.assertEqual(resp.algorithm, "bsp")

    def test_random_walk_and_cave(self):
        walk = dungeon_routes.random_walk(RandomWalkParams(width=30, height=20, seed=1), self.svc)
        cave = dungeon_routes.cave(CaveParams(width=30, height=20, seed=1), self.svc)
        self.assertEqual(walk.algorithm, "random_walk")
        self.assertEqual(cave.algorithm, "cave")
        # first run is the top-left border wall
        self.assertEqual(cave.grid[0], int(TileKind.WALL))

    def test_oversized_grid_is_413(self):
        svc = GeneratorService(GenerationConfig(max_grid_cells=100))
        with self.assertRaises(HTTPException) as ctx:
            dungeon_routes.cave(CaveParams(width=20, height=20), svc)
        self.assertEqual(ctx.exception.status_code, 413)

    def test_params_reject_bad_values(self):
        with self.assertRaises(ValidationError):
            CaveParams(width=10, height=10, fill_probability=1.5)
        with self.assertRaises(ValidationError):
            BSPParams(width=0, height=10)

    def test_params_cap_unbounded_work(self):
        with self.assertRaises(ValidationError):
            RandomWalkParams(width=10, height=10, walk_length=10**9)
        with self.assertRaises(ValidationError):
            RandomWalkParams(width=10, height=10, num_walkers=10**6)
        with self.assertRaises(ValidationError):
            TerrainParams(width=10, height=10, erosion_iterations=10**9)
        RandomWalkParams(width=10, height=10, walk_length=MAX_WALK_LENGTH, num_walkers=MAX_WALKERS)


class TestWfcRoute(unittest.TestCase):

    def setUp(self):
        self.svc = GeneratorService(GenerationConfig())

    def test_success(self):
        params = WfcParams(width=3, height=3, seed=2, patterns=[
            PatternSpec(pattern_id=0, north=[0, 1], east=[0, 1], south=[0, 1], west=[0, 1]),
            PatternSpec(pattern_id=1, north=[0, 1], east=[0, 1], south=[0, 1], west=[0, 1]),
        ])
        resp = wfc_routes.wfc(params, self.svc)
        self.assertTrue(resp.success)
        self.assertIsNone(resp.contradiction_x)
        self.assertEqual(len(resp.grid), 3)

    def test_contradiction_is_reported(self):
        params = WfcParams(width=2, height=1, patterns=[PatternSpec(pattern_id=0)])
        resp = wfc_routes.wfc(params, self.svc)
        self.assertFalse(resp.success)
        self.assertEqual((resp.contradiction_x, resp.contradiction_y), (1, 0))
        self.assertEqual(resp.grid, [[0, None]])

    def test_unknown_pattern_is_400(self):
        params = WfcParams(width=2, height=2, patterns=[PatternSpec(pattern_id=0, east=[5])])
        with self.assertRaises(HTTPException) as ctx:
            wfc_routes.wfc(params, self.svc)
        self.assertEqual(ctx.exception.status_code, 400)
        self.assertFalse(self.svc.history.latest(1)[0].ok)


class TestTerrainAndNames(unittest.TestCase):

    def setUp(self):
        self.svc = GeneratorService(GenerationConfig())

    def test_terrain(self):
        resp = terrain_routes.terrain(TerrainParams(width=10, height=8, scale=5.0), self.svc)
        self.assertEqual(len(resp.biome_map), 8)
        self.assertEqual(resp.biomes[0].name, "ocean")

    def test_names(self):
        resp = terrain_routes.names(seed=4, count=5, towns=2, service=self.svc)
        self.assertEqual(len(resp.names), 5)
        self.assertEqual(len(resp.towns), 2)


class TestConfigAndMetadata(unittest.TestCase):

    def test_config(self):
        svc = GeneratorService(GenerationConfig(seed=9))
        self.assertEqual(config_routes.get_config(service=svc).seed, 9)

    def test_history_tracks_requests(self):
        svc = GeneratorService(GenerationConfig())
        noise_routes.worley(WorleyNoiseParams(width=4, height=4), svc)
        dungeon_routes.cave(CaveParams(width=12, height=12), svc)
        entries = config_routes.get_history(count=10, service=svc).entries
        self.assertEqual([e.kind for e in entries], ["noise/worley", "dungeon/cave"])

    def test_enums(self):
        resp = metadata_routes.get_enums()
        names = {t.name: t for t in resp.tile_kinds}
        self.assertTrue(names["floor"].walkable)
        self.assertFalse(names["wall"].walkable)
        self.assertEqual([d.name for d in resp.directions], ["north", "east", "south", "west"])


class TestAppFactory(unittest.TestCase):

    def test_routes_published(self):
        paths = create_app(GenerationConfig()).openapi()["paths"]
        expected = {
            "/api/v1/noise/fractal": "post", "/api/v1/noise/ridged": "post",
            "/api/v1/noise/worley": "post", "/api/v1/dungeon/bsp": "post",
            "/api/v1/dungeon/random-walk": "post", "/api/v1/dungeon/cave": "post",
            "/api/v1/wfc": "post", "/api/v1/terrain": "post", "/api/v1/names": "get",
            "/api/v1/config": "get", "/api/v1/history": "get", "/api/v1/metadata/enums": "get",
        }
        for path, method in expected.items():
            self.assertIn(path, paths)
            self.assertIn(method, paths[path])

    def test_service_missing_is_503(self):
        set_generator_service(None)
        try:
            with self.assertRaises(HTTPException) as ctx:
                get_generator_service()
            self.assertEqual(ctx.exception.status_code, 503)
        finally:
            set_generator_service(GeneratorService(GenerationConfig()))

    def test_service_installed(self):
        create_app(GenerationConfig(seed=5))
        self.assertEqual(get_generator_service().config.seed, 5)


if __name__ == "__main__":
    unittest.main()
