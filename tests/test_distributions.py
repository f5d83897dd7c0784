"""Tests for the float32 input distributions."""

from __future__ import annotations

import math
from typing import List

import numpy as np
import pytest

from sineprec.core.names import DistributionKind
from sineprec.core.precision import widen
from sineprec.stats.distributions import (
    DISTRIBUTIONS,
    HALF_PI_CEIL_BITS,
    HALF_PI_SCALED,
    BiasedSmall,
    UniformFull,
    UniformSmall,
    bits_to_float32,
)

N_SAMPLES = 5000


class ScriptedRng:
    """Stands in for a Generator, returning scripted integers in order."""

    def __init__(self, values: List[int]) -> None:
        self.values = list(values)
        self.calls = 0

    def integers(self, low, high, dtype=np.int64):
        self.calls += 1
        value = self.values.pop(0)
        assert low <= value < high
        return dtype(value)


def draw(kind: DistributionKind, rng: np.random.Generator, n: int = N_SAMPLES):
    dist = DISTRIBUTIONS[kind]
    return [dist.sample(rng) for _ in range(n)]


class TestRegistry:
    def test_every_kind_has_one_distribution(self) -> None:
        assert list(DISTRIBUTIONS) == list(DistributionKind)
        for kind, dist in DISTRIBUTIONS.items():
            assert dist.kind is kind
            assert dist.name == kind.value


class TestConstants:
    def test_half_pi_ceil_bits_is_smallest_float_above_half_pi(self, ctx) -> None:
        half_pi = ctx.pi / 2
        assert widen(bits_to_float32(HALF_PI_CEIL_BITS), ctx) >= half_pi
        assert widen(bits_to_float32(HALF_PI_CEIL_BITS - 1), ctx) < half_pi

    def test_half_pi_scaled_is_rounded_grid_size(self, ctx) -> None:
        assert HALF_PI_SCALED == int(ctx.nint(ctx.pi / 2 * 2**23))
        assert ctx.mpf(HALF_PI_SCALED - 1) / 2**23 < ctx.pi / 2
        assert ctx.mpf(HALF_PI_SCALED) / 2**23 > ctx.pi / 2


class TestAllDistributions:
    @pytest.mark.parametrize("kind", list(DistributionKind))
    def test_samples_are_finite_float32(self, kind, rng) -> None:
        for x in draw(kind, rng):
            assert isinstance(x, np.float32)
            assert np.isfinite(x)

    @pytest.mark.parametrize("kind", list(DistributionKind))
    def test_reproducible_from_seed(self, kind) -> None:
        a = draw(kind, np.random.default_rng(42), 200)
        b = draw(kind, np.random.default_rng(42), 200)
        assert [x.view(np.uint32) for x in a] == [x.view(np.uint32) for x in b]


class TestSmallDistributions:
    @pytest.mark.parametrize(
        "kind", [DistributionKind.BIASED_SMALL, DistributionKind.UNIFORM_SMALL]
    )
    def test_range_is_zero_to_half_pi(self, kind, rng) -> None:
        for x in draw(kind, rng):
            assert not np.signbit(x)
            assert 0.0 <= float(x) < math.pi / 2

    def test_uniform_small_on_2_pow_minus_23_grid(self, rng) -> None:
        for x in draw(DistributionKind.UNIFORM_SMALL, rng):
            assert (float(x) * 2**23).is_integer()

    def test_uniform_small_is_roughly_uniform(self, rng) -> None:
        xs = np.array(draw(DistributionKind.UNIFORM_SMALL, rng), dtype=np.float64)
        assert abs(xs.mean() - math.pi / 4) < 0.05

    def test_biased_small_favours_small_magnitudes(self, rng) -> None:
        xs = np.array(draw(DistributionKind.BIASED_SMALL, rng), dtype=np.float64)
        # Bit patterns below 2**-10 make up ~92% of [0, bits(pi/2)).
        assert (xs < 2.0**-10).mean() > 0.85

    def test_biased_small_extremes(self) -> None:
        dist = BiasedSmall()
        assert dist.sample(ScriptedRng([0])) == np.float32(0.0)
        top = dist.sample(ScriptedRng([HALF_PI_CEIL_BITS - 1]))
        assert float(top) < math.pi / 2

    def test_uniform_small_extremes(self) -> None:
        dist = UniformSmall()
        top = dist.sample(ScriptedRng([HALF_PI_SCALED - 1]))
        assert float(top) == (HALF_PI_SCALED - 1) / 2**23
        assert float(top) < math.pi / 2


class TestUniformFull:
    def test_redraws_nan_and_infinity(self) -> None:
        rng = ScriptedRng([0x7FC00000, 0x7F800000, 0xFF800000, 0x3F800000])
        assert UniformFull().sample(rng) == np.float32(1.0)
        assert rng.calls == 4

    def test_keeps_denormals(self) -> None:
        x = UniformFull().sample(ScriptedRng([0x00000001]))
        assert x == bits_to_float32(1)
        assert 0 < abs(float(x)) < np.finfo(np.float32).tiny

    def test_keeps_negative_values(self) -> None:
        assert UniformFull().sample(ScriptedRng([0xBF800000])) == np.float32(-1.0)

    def test_covers_both_signs_and_wide_exponents(self, rng) -> None:
        xs = np.array(draw(DistributionKind.UNIFORM_FULL, rng), dtype=np.float64)
        assert (xs < 0).any() and (xs > 0).any()
        assert np.abs(xs).max() > 1e30
