"""Tests for fractal, ridged and Worley noise."""

import pytest

from procgen.systems.noise import (
    fractal_noise,
    gradient_noise,
    octave_offsets,
    perlin,
    ridged_noise,
    simplex_like,
    worley_noise,
)


def _fractal(seed: int, **kw):
    args = dict(width=4, height=4, scale=10, octaves=1, persistence=0.5, lacunarity=2,
                offset=(0, 0), seed=seed)
    args.update(kw)
    return fractal_noise(**args)


class TestFractalNoise:
    def test_same_seed_identical(self):
        assert _fractal(42).to_lists() == _fractal(42).to_lists()

    def test_different_seed_differs(self):
        assert _fractal(42).to_lists() != _fractal(43).to_lists()

    def test_normalized_extremes(self):
        m = fractal_noise(24, 16, 8.0, 4, 0.5, 2.0, seed=3)
        values = m.values()
        assert all(0.0 <= v <= 1.0 for v in values)
        assert min(values) == 0.0
        assert max(values) == 1.0

    def test_single_cell_is_degenerate(self):
        m = fractal_noise(1, 1, 10.0, 3, 0.5, 2.0, seed=1)
        assert m.values() == [0.0]

    def test_zero_scale_is_clamped(self):
        m = fractal_noise(6, 6, 0.0, 2, 0.5, 2.0, seed=5)
        assert all(0.0 <= v <= 1.0 for v in m.values())

    def test_invalid_dimensions(self):
        with pytest.raises(ValueError):
            fractal_noise(0, 4, 10.0, 1, 0.5, 2.0)

    def test_negative_octaves(self):
        with pytest.raises(ValueError):
            fractal_noise(4, 4, 10.0, -1, 0.5, 2.0)

    def test_offset_shifts_field(self):
        a = fractal_noise(8, 8, 5.0, 2, 0.5, 2.0, offset=(0.0, 0.0), seed=2)
        b = fractal_noise(8, 8, 5.0, 2, 0.5, 2.0, offset=(3.5, 1.25), seed=2)
        assert a.to_lists() != b.to_lists()


class TestPrimitives:
    def test_perlin_lattice_point(self):
        assert perlin(3.0, -2.0) == pytest.approx(0.5)
        assert gradient_noise(3.0, -2.0) == pytest.approx(0.0)

    def test_perlin_is_fixed_function(self):
        assert perlin(1.37, 8.21) == perlin(1.37, 8.21)

    def test_ranges(self):
        for i in range(50):
            x, y = i * 0.37, i * 0.19
            assert 0.0 <= perlin(x, y) <= 1.0
            assert -1.0 <= gradient_noise(x, y) <= 1.0
            assert 0.0 <= simplex_like(x, y, 2.0) <= 1.0

    def test_octave_offsets_per_seed(self):
        assert octave_offsets(1, 3) == octave_offsets(1, 3)
        assert octave_offsets(1, 3) != octave_offsets(2, 3)
        assert len(octave_offsets(1, 0)) == 0


class TestRidgedNoise:
    def test_range_and_determinism(self):
        a = ridged_noise(12, 12, 6.0, 3, 0.5, 2.0, seed=9)
        b = ridged_noise(12, 12, 6.0, 3, 0.5, 2.0, seed=9)
        assert a == b
        assert all(0.0 <= v <= 1.0 for v in a.values())

    def test_folds_fractal_values(self):
        base = fractal_noise(8, 8, 6.0, 2, 0.5, 2.0, seed=4)
        ridged = ridged_noise(8, 8, 6.0, 2, 0.5, 2.0, seed=4)
        for v, r in zip(base.values(), ridged.values()):
            assert r == pytest.approx(1.0 - abs(v * 2.0 - 1.0))


class TestWorleyNoise:
    def test_range_and_determinism(self):
        a = worley_noise(16, 10, 5, seed=3)
        assert a == worley_noise(16, 10, 5, seed=3)
        assert all(0.0 <= v <= 1.0 for v in a.values())

    def test_sites_are_zero(self):
        m = worley_noise(16, 16, 4, seed=8)
        assert m.min() == 0.0

    def test_invert(self):
        plain = worley_noise(10, 10, 3, seed=1)
        inverted = worley_noise(10, 10, 3, seed=1, invert=True)
        for p, i in zip(plain.values(), inverted.values()):
            assert i == pytest.approx(1.0 - p)

    def test_no_points(self):
        assert worley_noise(3, 3, 0).values() == [1.0] * 9
        assert worley_noise(3, 3, 0, invert=True).values() == [0.0] * 9

    def test_negative_points(self):
        with pytest.raises(ValueError):
            worley_noise(3, 3, -1)
