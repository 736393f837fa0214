"""Tests for the difficulty curve."""

import random

import pytest

from pukullalat.sim.difficulty import DifficultyCurve, interval
from pukullalat.sim.variates import RandomVariate
from tests.conftest import ConstantNormal


class TestInterval:
    @pytest.mark.parametrize(
        "base,half_life",
        [(3000, 90000), (700, 200000), (7000, 150000), (1, 3)],
    )
    def test_nominal_at_time_zero(self, base, half_life):
        """With zero stdev the scaling factor is exactly 1 at t=0."""
        v = RandomVariate(random.Random(1))
        assert interval(0, base, 0, half_life, v) == base

    def test_halved_after_one_half_life(self):
        assert interval(90000, 3000, 0, 90000, ConstantNormal()) == 1500.0

    def test_shrinks_over_time(self):
        v = ConstantNormal()
        values = [interval(t, 700, 0, 200000, v) for t in (0, 10000, 100000, 1000000, 10000000)]
        assert values == sorted(values, reverse=True)
        assert values[-1] > 0
        assert values[-1] < 20

    def test_noise_is_scaled_by_stdev(self):
        assert interval(0, 3000, 700, 90000, ConstantNormal(1.0)) == pytest.approx(3700.0)
        assert interval(0, 3000, 700, 90000, ConstantNormal(-2.0)) == pytest.approx(1600.0)

    def test_negative_interval_is_returned_as_is(self):
        """Deep normal tails give negative intervals; callers treat them as 'due now'."""
        assert interval(0, 100, 50, 1000, ConstantNormal(-5.0)) == pytest.approx(-150.0)


class TestDifficultyCurve:
    def test_sample_uses_interval(self, constant_normal):
        curve = DifficultyCurve(3000, 0, 90000)
        assert curve.sample(90000, constant_normal) == 1500.0

    def test_flat_curve_ignores_time(self):
        curve = DifficultyCurve(3000, 0, 90000, scaling=False)
        assert curve.sample(10 ** 7, ConstantNormal()) == 3000

    def test_mean_at(self):
        assert DifficultyCurve(7000, 1000, 150000).mean_at(150000) == pytest.approx(3500.0)
        assert DifficultyCurve(7000, 1000, 150000, scaling=False).mean_at(150000) == 7000.0
