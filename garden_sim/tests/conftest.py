"""Shared pytest fixtures for the garden_sim test suite.

All fixtures are synthetic and deterministic. The reference scenario below is
used throughout to document expected parameter values.

Reference scenario
------------------
Portfolio: heatSpecialists 50 %, coolSeason 50 %, perennials 0 %
Garden 100 sq ft (size multiplier 1.0), heat 3, winter 3, rainfall 40 in
Summer "normal", winter "mild", base investment 400, multiplier 1.0

Severity: heat = 1.0, cool = 1.0 × 1.0 = 1.0, perennial = min(1.0, 1.0) = 1.0
  heat yield value  = 50 × 4 × 1.0 × 1.2 = 240
  cool yield value  = 50 × 3 × 1.0 × 0.8 = 120
  expected harvest  = 240 + 120          = 360   (std 108)
  investment mean   = 400 × 1.0          = 400   (std  40)
  stress days λ     = 15 × 3/3           = 15
  freeze events λ   =  8 × 3/3           =  8
  rainfall          = Normal(40, 8), floored at 10

Net return ≈ Normal(-40, 115): a mix of profitable and losing iterations.
"""

from __future__ import annotations

import copy

import pytest

from garden_sim.config.loader import LocationConfig, SimulationConfig

REFERENCE_PORTFOLIO = {"heatSpecialists": 50.0, "coolSeason": 50.0, "perennials": 0.0}


@pytest.fixture
def reference_location() -> LocationConfig:
    """100 sq ft site at reference heat / winter levels with 40 in of rain."""
    return LocationConfig(
        garden_size_sq_ft=100.0,
        heat_intensity=3,
        winter_severity=3,
        avg_rainfall=40.0,
        hardiness="7b",
    )


@pytest.fixture
def reference_config(reference_location: LocationConfig) -> SimulationConfig:
    """Reference scenario as a validated SimulationConfig."""
    return SimulationConfig(
        portfolio=dict(REFERENCE_PORTFOLIO),
        base_investment=400.0,
        selected_summer="normal",
        selected_winter="mild",
        location=reference_location,
        portfolio_multiplier=1.0,
        name="reference",
    )


@pytest.fixture
def zero_allocation_config(reference_location: LocationConfig) -> SimulationConfig:
    """Every category allocated 0 %: no harvest, investment only."""
    return SimulationConfig(
        portfolio={"heatSpecialists": 0.0, "coolSeason": 0.0, "perennials": 0.0},
        base_investment=400.0,
        selected_summer="normal",
        selected_winter="mild",
        location=reference_location,
        portfolio_multiplier=1.0,
        name="empty",
    )


_REFERENCE_CONFIG_DICT = {
    "name": "reference",
    "portfolio": dict(REFERENCE_PORTFOLIO),
    "baseInvestment": 400,
    "selectedSummer": "normal",
    "selectedWinter": "mild",
    "locationConfig": {
        "name": "Durham, NC",
        "gardenSizeActual": 100,
        "heatIntensity": 3,
        "winterSeverity": 3,
        "avgRainfall": 40,
        "hardiness": "7b",
    },
    "portfolioMultiplier": 1.0,
    "iterations": 200,
    "seed": 7,
}


@pytest.fixture
def reference_config_dict() -> dict:
    """Reference scenario in the JSON (camelCase) configuration form."""
    return copy.deepcopy(_REFERENCE_CONFIG_DICT)
