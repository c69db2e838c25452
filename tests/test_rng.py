"""Tests for the seeded random streams."""

import unittest

from procgen.core.enums import Domain
from procgen.systems.rng import DeterministicRNG, RandomStream


class TestDeterministicRNG(unittest.TestCase):

    def test_pure_function_of_inputs(self):
        a = DeterministicRNG(42)
        b = DeterministicRNG(42)
        self.assertEqual(a.hash(Domain.BSP, 3, 7), b.hash(Domain.BSP, 3, 7))

    def test_domains_are_separated(self):
        rng = DeterministicRNG(42)
        self.assertNotEqual(rng.hash(Domain.BSP, 0, 0), rng.hash(Domain.CAVE, 0, 0))

    def test_next_int_inclusive_bounds(self):
        rng = DeterministicRNG(1)
        values = {rng.next_int(Domain.NOISE, 0, i, 0, 3) for i in range(500)}
        self.assertEqual(values, {0, 1, 2, 3})

    def test_next_float_range(self):
        rng = DeterministicRNG(9)
        for i in range(200):
            f = rng.next_float(Domain.WFC, 0, i)
            self.assertGreaterEqual(f, 0.0)
            self.assertLess(f, 1.0)


class TestRandomStream(unittest.TestCase):

    def test_same_seed_same_sequence(self):
        a = RandomStream(5, Domain.CAVE)
        b = RandomStream(5, Domain.CAVE)
        self.assertEqual([a.random() for _ in range(20)], [b.random() for _ in range(20)])

    def test_interleaved_streams_do_not_interfere(self):
        solo = RandomStream(5, Domain.CAVE)
        expected = [solo.random() for _ in range(10)]

        a = RandomStream(5, Domain.CAVE)
        other = RandomStream(5, Domain.CAVE)
        got = []
        for _ in range(10):
            got.append(a.random())
            other.random()
        self.assertEqual(got, expected)

    def test_draw_counter(self):
        s = RandomStream(0, Domain.NAMES)
        s.random()
        s.randint(1, 6)
        s.randrange(3, 3)
        self.assertEqual(s.draws, 3)

    def test_randrange_empty_returns_low(self):
        s = RandomStream(0, Domain.BSP)
        self.assertEqual(s.randrange(4, 2), 4)

    def test_randint_empty_raises(self):
        with self.assertRaises(ValueError):
            RandomStream(0, Domain.BSP).randint(3, 2)

    def test_choice_empty_raises(self):
        with self.assertRaises(ValueError):
            RandomStream(0, Domain.BSP).choice([])

    def test_weighted_index_skips_zero_weights(self):
        s = RandomStream(3, Domain.WFC)
        picks = {s.weighted_index([0.0, 1.0, 0.0]) for _ in range(50)}
        self.assertEqual(picks, {1})

    def test_weighted_index_all_zero_falls_back_to_uniform(self):
        s = RandomStream(3, Domain.WFC)
        picks = {s.weighted_index([0.0, 0.0]) for _ in range(100)}
        self.assertEqual(picks, {0, 1})

    def test_fork_uses_same_seed(self):
        s = RandomStream(11, Domain.NOISE)
        fork = s.fork(Domain.LOOT)
        self.assertEqual(fork.random(), RandomStream(11, Domain.LOOT).random())


if __name__ == "__main__":
    unittest.main()
