"""Unit tests for garden_sim.simulation.parameters.

Covers:
- climate_severity(): per-axis multipliers, unknown scenarios
- stress_days_rate() / freeze_events_rate(): scaling with site intensity
- derive_parameters(): reference values, size scaling, unknown categories,
  custom catalog and coefficients, input validation
- UncertaintyCoefficients validation
"""

from __future__ import annotations

import math
from dataclasses import replace

import pytest

from garden_sim.catalog.crops import CropCatalog, CropCategory
from garden_sim.config.loader import LocationConfig
from garden_sim.simulation.parameters import (
    ClimateSeverity,
    NormalSpec,
    PoissonSpec,
    UncertaintyCoefficients,
    climate_severity,
    derive_parameters,
    freeze_events_rate,
    stress_days_rate,
)

REFERENCE_PORTFOLIO = {"heatSpecialists": 50.0, "coolSeason": 50.0, "perennials": 0.0}


def _derive(location: LocationConfig, **overrides):
    kwargs = dict(
        portfolio=dict(REFERENCE_PORTFOLIO),
        base_investment=400.0,
        portfolio_multiplier=1.0,
        location=location,
        selected_summer="normal",
        selected_winter="mild",
    )
    kwargs.update(overrides)
    return derive_parameters(**kwargs)


# ---------------------------------------------------------------------------
# Climate severity
# ---------------------------------------------------------------------------


class TestClimateSeverity:
    def test_normal_mild_is_neutral(self):
        assert climate_severity("normal", "mild") == ClimateSeverity(1.0, 1.0, 1.0)

    def test_extreme_traditional(self):
        sev = climate_severity("extreme", "traditional")
        assert sev.heat == pytest.approx(0.7)
        assert sev.cool == pytest.approx(0.63)
        assert sev.perennial == pytest.approx(0.7)

    def test_perennial_takes_worse_season(self):
        """Perennials are limited by the harsher of summer and winter."""
        sev = climate_severity("catastrophic", "none")
        assert sev.heat == pytest.approx(0.4)
        assert sev.cool == pytest.approx(0.48)
        assert sev.perennial == pytest.approx(0.4)

    def test_unknown_summer_raises(self):
        with pytest.raises(ValueError, match="Unknown summer scenario"):
            climate_severity("scorching", "mild")

    def test_unknown_winter_raises(self):
        with pytest.raises(ValueError, match="Unknown winter scenario"):
            climate_severity("normal", "polar")

    def test_for_axis(self):
        sev = ClimateSeverity(heat=0.5, cool=0.6, perennial=0.7)
        assert sev.for_axis("heat") == 0.5
        assert sev.for_axis("cool") == 0.6
        assert sev.for_axis("perennial") == 0.7


# ---------------------------------------------------------------------------
# Weather event rates
# ---------------------------------------------------------------------------


class TestEventRates:
    def test_stress_days_at_reference_level(self):
        assert stress_days_rate("normal", 3) == pytest.approx(15.0)

    def test_stress_days_scale_with_heat_intensity(self):
        assert stress_days_rate("extreme", 6) == pytest.approx(70.0)
        assert stress_days_rate("mild", 1.5) == pytest.approx(2.5)

    def test_freeze_events_scale_with_winter_severity(self):
        assert freeze_events_rate("traditional", 3) == pytest.approx(20.0)
        assert freeze_events_rate("traditional", 1.5) == pytest.approx(10.0)

    def test_no_winter_has_zero_freeze_rate(self):
        assert freeze_events_rate("none", 5) == 0.0

    def test_unknown_scenarios_raise(self):
        with pytest.raises(ValueError, match="Unknown summer scenario"):
            stress_days_rate("hot", 3)
        with pytest.raises(ValueError, match="Unknown winter scenario"):
            freeze_events_rate("cold", 3)


# ---------------------------------------------------------------------------
# derive_parameters
# ---------------------------------------------------------------------------


class TestDeriveParameters:
    def test_reference_harvest(self, reference_location):
        """50 % heat + 50 % cool on 100 sq ft → 240 + 120 = 360."""
        params = _derive(reference_location)
        assert params.harvest.mean == pytest.approx(360.0)
        assert params.harvest.std == pytest.approx(108.0)

    def test_reference_investment(self, reference_location):
        params = _derive(reference_location)
        assert params.investment.mean == pytest.approx(400.0)
        assert params.investment.std == pytest.approx(40.0)

    def test_reference_category_yields(self, reference_location):
        params = _derive(reference_location)
        assert params.heat_yield.mean == pytest.approx(240.0)
        assert params.heat_yield.std == pytest.approx(96.0)
        assert params.cool_yield.mean == pytest.approx(120.0)
        assert params.cool_yield.std == pytest.approx(48.0)
        assert params.perennial_yield == NormalSpec(0.0, 0.0)

    def test_reference_weather(self, reference_location):
        params = _derive(reference_location)
        assert isinstance(params.stress_days, PoissonSpec)
        assert params.stress_days.rate == pytest.approx(15.0)
        assert params.freeze_events.rate == pytest.approx(8.0)
        assert params.rainfall.mean == pytest.approx(40.0)
        assert params.rainfall.std == pytest.approx(8.0)

    def test_size_multiplier_scales_harvest(self, reference_location):
        big = replace(reference_location, garden_size_sq_ft=250.0)
        params = _derive(big)
        assert params.size_multiplier == pytest.approx(2.5)
        assert params.harvest.mean == pytest.approx(900.0)
        # Investment does not depend on garden size
        assert params.investment.mean == pytest.approx(400.0)

    def test_severity_applied_per_axis(self, reference_location):
        params = _derive(
            reference_location,
            portfolio={"perennials": 100.0},
            selected_summer="extreme",
            selected_winter="traditional",
        )
        # 100 × 6 × 2.5 = 1500, perennial severity 0.7
        assert params.harvest.mean == pytest.approx(1050.0)
        # Yield values are reported before severity
        assert params.perennial_yield.mean == pytest.approx(1500.0)

    def test_portfolio_multiplier_scales_investment(self, reference_location):
        params = _derive(reference_location, portfolio_multiplier=1.15)
        assert params.investment.mean == pytest.approx(460.0)

    def test_unknown_category_contributes_nothing(self, reference_location):
        params = _derive(
            reference_location, portfolio={"heatSpecialists": 50.0, "orchids": 50.0}
        )
        assert params.harvest.mean == pytest.approx(240.0)

    def test_empty_portfolio_gives_zero_harvest(self, reference_location):
        params = _derive(reference_location, portfolio={})
        assert params.harvest == NormalSpec(0.0, 0.0)

    def test_custom_catalog(self, reference_location):
        catalog = CropCatalog.from_categories(
            CropCategory("heatSpecialists", yield_multiplier=1.0, market_price=1.0,
                         severity_axis="heat"),
        )
        params = _derive(reference_location, catalog=catalog)
        assert params.harvest.mean == pytest.approx(50.0)

    def test_custom_coefficients(self, reference_location):
        coeffs = UncertaintyCoefficients(harvest=0.0, investment=0.5)
        params = _derive(reference_location, coefficients=coeffs)
        assert params.harvest.std == 0.0
        assert params.investment.std == pytest.approx(200.0)

    def test_metrics_order(self, reference_location):
        params = _derive(reference_location)
        assert list(params.metrics()) == [
            "harvest",
            "investment",
            "heatYield",
            "coolYield",
            "perennialYield",
            "stressDays",
            "freezeEvents",
            "rainfall",
        ]


class TestDeriveParametersValidation:
    def test_none_portfolio_raises(self, reference_location):
        with pytest.raises(ValueError, match="Portfolio"):
            _derive(reference_location, portfolio=None)

    @pytest.mark.parametrize("allocation", [-1.0, 100.5, math.nan])
    def test_allocation_out_of_range_raises(self, reference_location, allocation):
        with pytest.raises(ValueError, match="Portfolio allocation for 'coolSeason'"):
            _derive(reference_location, portfolio={"coolSeason": allocation})

    @pytest.mark.parametrize("investment", [0.0, -10.0, math.inf])
    def test_non_positive_investment_raises(self, reference_location, investment):
        with pytest.raises(ValueError, match="Base investment must be a positive amount"):
            _derive(reference_location, base_investment=investment)

    def test_negative_multiplier_raises(self, reference_location):
        with pytest.raises(ValueError, match="Portfolio multiplier"):
            _derive(reference_location, portfolio_multiplier=-0.1)

    def test_zero_garden_size_raises(self, reference_location):
        with pytest.raises(ValueError, match="Garden size"):
            _derive(replace(reference_location, garden_size_sq_ft=0.0))

    def test_negative_rainfall_raises(self, reference_location):
        with pytest.raises(ValueError, match="avg_rainfall"):
            _derive(replace(reference_location, avg_rainfall=-1.0))

    def test_unknown_scenario_raises(self, reference_location):
        with pytest.raises(ValueError, match="Unknown summer scenario"):
            _derive(reference_location, selected_summer="tropical")


class TestUncertaintyCoefficients:
    def test_defaults(self):
        c = UncertaintyCoefficients()
        assert c.harvest == pytest.approx(0.30)
        assert c.investment == pytest.approx(0.10)
        assert c.rainfall == pytest.approx(0.20)

    @pytest.mark.parametrize("value", [-0.1, math.inf, math.nan])
    def test_invalid_coefficient_raises(self, value):
        with pytest.raises(ValueError, match="heat_yield"):
            UncertaintyCoefficients(heat_yield=value)

    def test_from_cv(self):
        assert NormalSpec.from_cv(200.0, 0.25) == NormalSpec(200.0, 50.0)
