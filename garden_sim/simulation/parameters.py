"""Derive per-metric distribution parameters from a simulation configuration.

The harvest value of each crop category scales with its portfolio share,
the catalog yield and price constants, the garden area (catalog values are
per 100 sq ft) and a climate-severity multiplier for the season that limits
that category. Weather-event counts scale with the site's heat intensity and
winter severity relative to the reference level 3.

Public API
----------
NormalSpec               – Mean / std of a Normal metric.
PoissonSpec              – Rate of a Poisson count metric.
UncertaintyCoefficients  – Coefficients of variation used for the Normal metrics.
ClimateSeverity          – Harvest multipliers per climate axis.
SimulationParameters     – All distribution parameters for one run.
climate_severity         – Severity triple for a summer / winter pair.
stress_days_rate         – Poisson rate of heat-stress days.
freeze_events_rate       – Poisson rate of freeze events.
derive_parameters        – Main entry point.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping
from dataclasses import dataclass

from garden_sim.catalog.crops import DEFAULT_CATALOG, CropCatalog
from garden_sim.config.defaults import (
    AXIS_COOL,
    AXIS_HEAT,
    AXIS_PERENNIAL,
    BASE_FREEZE_EVENTS,
    BASE_STRESS_DAYS,
    CATEGORY_COOL_SEASON,
    CATEGORY_HEAT_SPECIALISTS,
    CATEGORY_PERENNIALS,
    COOL_YIELD_CV,
    HARVEST_CV,
    HEAT_YIELD_CV,
    INVESTMENT_CV,
    MAX_ALLOCATION_PCT,
    MIN_ALLOCATION_PCT,
    PERENNIAL_YIELD_CV,
    RAINFALL_CV,
    REFERENCE_GARDEN_AREA_SQ_FT,
    REFERENCE_INTENSITY_LEVEL,
    SUMMER_SEVERITY_MULTIPLIERS,
    WINTER_SEVERITY_MULTIPLIERS,
)
from garden_sim.config.loader import LocationConfig

logger = logging.getLogger(__name__)

# Metric names as exposed in SimulationParameters.metrics()
METRIC_HARVEST = "harvest"
METRIC_INVESTMENT = "investment"
METRIC_HEAT_YIELD = "heatYield"
METRIC_COOL_YIELD = "coolYield"
METRIC_PERENNIAL_YIELD = "perennialYield"
METRIC_STRESS_DAYS = "stressDays"
METRIC_FREEZE_EVENTS = "freezeEvents"
METRIC_RAINFALL = "rainfall"


# ---------------------------------------------------------------------------
# Distribution specs
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class NormalSpec:
    """Parameters of a Normal(mean, std) metric."""

    mean: float
    std: float

    @classmethod
    def from_cv(cls, mean: float, cv: float) -> NormalSpec:
        """Build a spec whose std is *cv* times *mean*."""
        return cls(mean=mean, std=mean * cv)


@dataclass(frozen=True)
class PoissonSpec:
    """Parameters of a Poisson(rate) count metric."""

    rate: float


@dataclass(frozen=True)
class UncertaintyCoefficients:
    """Coefficients of variation (std / mean) for the Normal metrics.

    The defaults are not calibrated against observed garden outcomes.
    Override them by passing a custom instance to :func:`derive_parameters`.
    """

    harvest: float = HARVEST_CV
    investment: float = INVESTMENT_CV
    heat_yield: float = HEAT_YIELD_CV
    cool_yield: float = COOL_YIELD_CV
    perennial_yield: float = PERENNIAL_YIELD_CV
    rainfall: float = RAINFALL_CV

    def __post_init__(self) -> None:
        for name in ("harvest", "investment", "heat_yield", "cool_yield",
                     "perennial_yield", "rainfall"):
            value = getattr(self, name)
            if not math.isfinite(value) or value < 0.0:
                raise ValueError(
                    f"Uncertainty coefficient '{name}' must be a finite, "
                    f"non-negative number, got {value}."
                )


DEFAULT_COEFFICIENTS = UncertaintyCoefficients()


@dataclass(frozen=True)
class ClimateSeverity:
    """Harvest multipliers for each climate axis."""

    heat: float
    cool: float
    perennial: float

    def for_axis(self, axis: str) -> float:
        return {AXIS_HEAT: self.heat, AXIS_COOL: self.cool, AXIS_PERENNIAL: self.perennial}[axis]


@dataclass(frozen=True)
class SimulationParameters:
    """Distribution parameters for every sampled metric of one run.

    Attributes
    ----------
    harvest, investment:
        Normal specs of total harvest value and realised investment.
    heat_yield, cool_yield, perennial_yield:
        Normal specs of the per-category yield values.
    stress_days, freeze_events:
        Poisson specs of the weather-event counts.
    rainfall:
        Normal spec of annual rainfall.
    size_multiplier:
        Garden area relative to the 100 sq ft reference.
    severity:
        Climate-severity multipliers applied to the expected harvest.
    """

    harvest: NormalSpec
    investment: NormalSpec
    heat_yield: NormalSpec
    cool_yield: NormalSpec
    perennial_yield: NormalSpec
    stress_days: PoissonSpec
    freeze_events: PoissonSpec
    rainfall: NormalSpec
    size_multiplier: float
    severity: ClimateSeverity

    def metrics(self) -> dict[str, NormalSpec | PoissonSpec]:
        """Return metric name → distribution spec, in sampling order."""
        return {
            METRIC_HARVEST: self.harvest,
            METRIC_INVESTMENT: self.investment,
            METRIC_HEAT_YIELD: self.heat_yield,
            METRIC_COOL_YIELD: self.cool_yield,
            METRIC_PERENNIAL_YIELD: self.perennial_yield,
            METRIC_STRESS_DAYS: self.stress_days,
            METRIC_FREEZE_EVENTS: self.freeze_events,
            METRIC_RAINFALL: self.rainfall,
        }


# ---------------------------------------------------------------------------
# Scenario lookups
# ---------------------------------------------------------------------------


def _lookup(table: Mapping[str, float], key: str, field_name: str) -> float:
    try:
        return table[key]
    except KeyError:
        raise ValueError(
            f"Unknown {field_name} '{key}'. Must be one of {sorted(table)}."
        ) from None


def climate_severity(selected_summer: str, selected_winter: str) -> ClimateSeverity:
    """Return the harvest multipliers for a summer / winter scenario pair.

    Heat crops follow the summer alone, cool-season crops are exposed to
    both seasons, perennials are limited by the worse of the two.

    Raises
    ------
    ValueError
        If either scenario identifier is unknown.
    """
    summer = _lookup(SUMMER_SEVERITY_MULTIPLIERS, selected_summer, "summer scenario")
    winter = _lookup(WINTER_SEVERITY_MULTIPLIERS, selected_winter, "winter scenario")
    return ClimateSeverity(heat=summer, cool=summer * winter, perennial=min(summer, winter))


def stress_days_rate(selected_summer: str, heat_intensity: float) -> float:
    """Expected heat-stress days per year for the scenario and site heat level."""
    base = _lookup(BASE_STRESS_DAYS, selected_summer, "summer scenario")
    return base * (heat_intensity / REFERENCE_INTENSITY_LEVEL)


def freeze_events_rate(selected_winter: str, winter_severity: float) -> float:
    """Expected freeze events per year for the scenario and site winter level."""
    base = _lookup(BASE_FREEZE_EVENTS, selected_winter, "winter scenario")
    return base * (winter_severity / REFERENCE_INTENSITY_LEVEL)


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------


def _validate_inputs(
    portfolio: Mapping[str, float],
    base_investment: float,
    portfolio_multiplier: float,
    location: LocationConfig,
) -> None:
    if portfolio is None:
        raise ValueError("Portfolio must be a mapping of category → allocation percent, got None.")
    for category, allocation in portfolio.items():
        if not math.isfinite(allocation) or not (
            MIN_ALLOCATION_PCT <= allocation <= MAX_ALLOCATION_PCT
        ):
            raise ValueError(
                f"Portfolio allocation for '{category}' must be between "
                f"{MIN_ALLOCATION_PCT:g} and {MAX_ALLOCATION_PCT:g} percent, got {allocation}."
            )
    if not math.isfinite(base_investment) or base_investment <= 0.0:
        raise ValueError(
            f"Base investment must be a positive amount, got {base_investment}."
        )
    if not math.isfinite(portfolio_multiplier) or portfolio_multiplier < 0.0:
        raise ValueError(
            f"Portfolio multiplier must be non-negative, got {portfolio_multiplier}."
        )
    if not math.isfinite(location.garden_size_sq_ft) or location.garden_size_sq_ft <= 0.0:
        raise ValueError(
            f"Garden size must be a positive area in sq ft, got {location.garden_size_sq_ft}."
        )
    for name in ("heat_intensity", "winter_severity", "avg_rainfall"):
        value = getattr(location, name)
        if not math.isfinite(value) or value < 0.0:
            raise ValueError(f"Location '{name}' must be non-negative, got {value}.")


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------


def derive_parameters(
    portfolio: Mapping[str, float],
    base_investment: float,
    portfolio_multiplier: float,
    location: LocationConfig,
    selected_summer: str,
    selected_winter: str,
    *,
    catalog: CropCatalog = DEFAULT_CATALOG,
    coefficients: UncertaintyCoefficients = DEFAULT_COEFFICIENTS,
) -> SimulationParameters:
    """Derive the distribution parameters for one simulation run.

    Parameters
    ----------
    portfolio:
        Crop-category name → allocation percent. Categories missing from
        the portfolio or from the catalog contribute zero.
    base_investment:
        Total annual budget (must be positive).
    portfolio_multiplier:
        Strategy scalar applied to the investment.
    location:
        Site attributes (area, heat intensity, winter severity, rainfall).
    selected_summer, selected_winter:
        Climate scenario identifiers.
    catalog:
        Crop catalog supplying yield multipliers and market prices.
    coefficients:
        Coefficients of variation for the Normal metrics.

    Returns
    -------
    SimulationParameters
        Normal and Poisson parameters for every sampled metric.

    Raises
    ------
    ValueError
        If any input is out of range or a scenario identifier is unknown.
    """
    _validate_inputs(portfolio, base_investment, portfolio_multiplier, location)
    severity = climate_severity(selected_summer, selected_winter)
    size_multiplier = location.garden_size_sq_ft / REFERENCE_GARDEN_AREA_SQ_FT

    # Yield value per category before climate severity
    yield_values: dict[str, float] = {}
    expected_harvest = 0.0
    for category, allocation in portfolio.items():
        crop = catalog.lookup(category)
        if crop is None:
            logger.debug("Category '%s' is not in the crop catalog; ignored.", category)
            continue
        base_yield = allocation * crop.yield_multiplier * size_multiplier
        value = base_yield * crop.market_price
        yield_values[category] = value
        expected_harvest += value * severity.for_axis(crop.severity_axis)

    investment_mean = base_investment * portfolio_multiplier

    params = SimulationParameters(
        harvest=NormalSpec.from_cv(expected_harvest, coefficients.harvest),
        investment=NormalSpec.from_cv(investment_mean, coefficients.investment),
        heat_yield=NormalSpec.from_cv(
            yield_values.get(CATEGORY_HEAT_SPECIALISTS, 0.0), coefficients.heat_yield
        ),
        cool_yield=NormalSpec.from_cv(
            yield_values.get(CATEGORY_COOL_SEASON, 0.0), coefficients.cool_yield
        ),
        perennial_yield=NormalSpec.from_cv(
            yield_values.get(CATEGORY_PERENNIALS, 0.0), coefficients.perennial_yield
        ),
        stress_days=PoissonSpec(rate=stress_days_rate(selected_summer, location.heat_intensity)),
        freeze_events=PoissonSpec(
            rate=freeze_events_rate(selected_winter, location.winter_severity)
        ),
        rainfall=NormalSpec.from_cv(location.avg_rainfall, coefficients.rainfall),
        size_multiplier=size_multiplier,
        severity=severity,
    )

    logger.debug(
        "Derived parameters: harvest=%.2f±%.2f, investment=%.2f±%.2f, "
        "stress_days λ=%.2f, freeze_events λ=%.2f",
        params.harvest.mean,
        params.harvest.std,
        params.investment.mean,
        params.investment.std,
        params.stress_days.rate,
        params.freeze_events.rate,
    )
    return params
