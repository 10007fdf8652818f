"""Tests for garden_sim.simulation.sampler."""

from __future__ import annotations

import math

import numpy as np
import pytest

from garden_sim.simulation.parameters import (
    ClimateSeverity,
    NormalSpec,
    PoissonSpec,
    SimulationParameters,
)
from garden_sim.simulation.sampler import make_rng, sample_metrics

ITERATIONS = 500


def _params(**overrides) -> SimulationParameters:
    fields = dict(
        harvest=NormalSpec(360.0, 108.0),
        investment=NormalSpec(400.0, 40.0),
        heat_yield=NormalSpec(240.0, 96.0),
        cool_yield=NormalSpec(120.0, 48.0),
        perennial_yield=NormalSpec(0.0, 0.0),
        stress_days=PoissonSpec(15.0),
        freeze_events=PoissonSpec(8.0),
        rainfall=NormalSpec(40.0, 8.0),
        size_multiplier=1.0,
        severity=ClimateSeverity(1.0, 1.0, 1.0),
    )
    fields.update(overrides)
    return SimulationParameters(**fields)


class _ConstantRng:
    """Random source returning the distribution mean for every draw."""

    def normal(self, loc, scale, size):
        return np.full(size, loc, dtype=float)

    def poisson(self, lam, size):
        return np.full(size, round(lam), dtype=np.int64)


# ---------------------------------------------------------------------------
# Shape and types
# ---------------------------------------------------------------------------


class TestSampleShape:
    def test_every_metric_sampled(self):
        samples = sample_metrics(_params(), ITERATIONS, make_rng(1))
        assert set(samples) == set(_params().metrics())
        for arr in samples.values():
            assert len(arr) == ITERATIONS

    def test_count_metrics_are_integers(self):
        samples = sample_metrics(_params(), ITERATIONS, make_rng(1))
        assert np.issubdtype(samples["stressDays"].dtype, np.integer)
        assert np.issubdtype(samples["freezeEvents"].dtype, np.integer)
        assert np.issubdtype(samples["harvest"].dtype, np.floating)

    @pytest.mark.parametrize("iterations", [0, -5])
    def test_non_positive_iterations_give_empty_arrays(self, iterations):
        samples = sample_metrics(_params(), iterations, make_rng(1))
        assert all(len(arr) == 0 for arr in samples.values())

    def test_unseeded_generator_created_when_omitted(self):
        samples = sample_metrics(_params(), 10)
        assert len(samples["harvest"]) == 10


# ---------------------------------------------------------------------------
# Clamping
# ---------------------------------------------------------------------------


class TestClamping:
    def test_financial_values_never_negative(self):
        params = _params(harvest=NormalSpec(10.0, 100.0), investment=NormalSpec(5.0, 50.0))
        samples = sample_metrics(params, ITERATIONS, make_rng(3))
        assert samples["harvest"].min() >= 0.0
        assert samples["investment"].min() >= 0.0
        # Wide spread around a small mean must actually hit the floor
        assert (samples["harvest"] == 0.0).any()

    def test_rainfall_floor(self):
        params = _params(rainfall=NormalSpec(5.0, 20.0))
        samples = sample_metrics(params, ITERATIONS, make_rng(3))
        assert samples["rainfall"].min() >= 10.0

    def test_zero_std_gives_constant_samples(self):
        samples = sample_metrics(_params(), 50, make_rng(3))
        assert np.all(samples["perennialYield"] == 0.0)

    def test_zero_rate_gives_zero_counts(self):
        params = _params(freeze_events=PoissonSpec(0.0))
        samples = sample_metrics(params, 50, make_rng(3))
        assert np.all(samples["freezeEvents"] == 0)


# ---------------------------------------------------------------------------
# Invalid distributions
# ---------------------------------------------------------------------------


class TestInvalidDistributions:
    def test_negative_std_raises(self):
        params = _params(harvest=NormalSpec(100.0, -1.0))
        with pytest.raises(ValueError, match="Invalid Normal parameters for metric 'harvest'"):
            sample_metrics(params, 10, make_rng(0))

    def test_nan_mean_raises(self):
        params = _params(investment=NormalSpec(math.nan, 1.0))
        with pytest.raises(ValueError, match="investment"):
            sample_metrics(params, 10, make_rng(0))

    def test_negative_rate_raises(self):
        params = _params(stress_days=PoissonSpec(-2.0))
        with pytest.raises(ValueError, match="Invalid Poisson rate for metric 'stressDays'"):
            sample_metrics(params, 10, make_rng(0))


# ---------------------------------------------------------------------------
# Random source
# ---------------------------------------------------------------------------


class TestRandomSource:
    def test_same_seed_same_samples(self):
        a = sample_metrics(_params(), 100, make_rng(42))
        b = sample_metrics(_params(), 100, make_rng(42))
        for name in a:
            np.testing.assert_array_equal(a[name], b[name])

    def test_different_seeds_differ(self):
        a = sample_metrics(_params(), 100, make_rng(1))
        b = sample_metrics(_params(), 100, make_rng(2))
        assert not np.array_equal(a["harvest"], b["harvest"])

    def test_injected_source_is_used(self):
        samples = sample_metrics(_params(), 4, _ConstantRng())
        np.testing.assert_array_equal(samples["harvest"], [360.0] * 4)
        np.testing.assert_array_equal(samples["stressDays"], [15] * 4)

    def test_sample_moments_match_parameters(self):
        samples = sample_metrics(_params(), 20_000, make_rng(11))
        assert samples["investment"].mean() == pytest.approx(400.0, rel=0.01)
        assert samples["investment"].std() == pytest.approx(40.0, rel=0.05)
        assert samples["stressDays"].mean() == pytest.approx(15.0, rel=0.03)
