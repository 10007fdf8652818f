"""Load and validate simulation configuration files.

Public API
----------
LocationConfig                   – Site attributes of the garden.
SimulationConfig                 – Validated simulation inputs.
load_simulation_config(path)     – Parse + validate a configuration JSON file.
load_simulation_config_dict(data) – Validate an already-parsed dictionary.
portfolio_multiplier_for(name)   – Resolve a strategy name to its multiplier.

All error messages name the specific field that caused the problem so the
user can fix the JSON without guessing.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any

from garden_sim.config.defaults import (
    DEFAULT_AVG_RAINFALL,
    DEFAULT_GARDEN_SIZE_SQ_FT,
    DEFAULT_HARDINESS_ZONE,
    DEFAULT_HEAT_INTENSITY,
    DEFAULT_ITERATIONS,
    DEFAULT_PORTFOLIO_STRATEGY,
    DEFAULT_WINTER_SEVERITY,
    PORTFOLIO_MULTIPLIERS,
    REGION_PRESETS,
)
from garden_sim.config.schema import validate_simulation_config

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Typed result containers
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class LocationConfig:
    """Site attributes used by the parameter derivation.

    Attributes
    ----------
    garden_size_sq_ft:
        Planted area in square feet (``gardenSizeActual``).
    heat_intensity:
        Summer heat level, 1 (mild) to 5 (desert).
    winter_severity:
        Winter cold level, 1 (subtropical) to 5 (arctic).
    avg_rainfall:
        Average annual rainfall in inches.
    hardiness:
        USDA hardiness zone, e.g. ``"7b"``.
    name:
        Optional display name of the site.
    """

    garden_size_sq_ft: float = DEFAULT_GARDEN_SIZE_SQ_FT
    heat_intensity: float = DEFAULT_HEAT_INTENSITY
    winter_severity: float = DEFAULT_WINTER_SEVERITY
    avg_rainfall: float = DEFAULT_AVG_RAINFALL
    hardiness: str = DEFAULT_HARDINESS_ZONE
    name: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON form (camelCase keys) of this location."""
        out: dict[str, Any] = {
            "gardenSizeActual": self.garden_size_sq_ft,
            "heatIntensity": self.heat_intensity,
            "winterSeverity": self.winter_severity,
            "avgRainfall": self.avg_rainfall,
            "hardiness": self.hardiness,
        }
        if self.name is not None:
            out["name"] = self.name
        return out


@dataclass(frozen=True)
class SimulationConfig:
    """Fully validated simulation inputs for one run.

    The instance is owned by the caller and is never modified by the engine.

    Attributes
    ----------
    portfolio:
        Crop-category name → allocation percent (0–100). Stored as a
        read-only copy of the mapping passed in.
    base_investment:
        Total annual budget, strictly positive.
    selected_summer:
        Summer climate scenario identifier.
    selected_winter:
        Winter climate scenario identifier.
    location:
        Site description.
    portfolio_multiplier:
        Risk/strategy scalar applied to the investment.
    name:
        Label used for output file names.
    iterations:
        Default iteration count for this configuration.
    seed:
        Optional random seed for reproducible runs.
    path:
        Absolute path to the source JSON file (``None`` if loaded from a dict).
    """

    portfolio: Mapping[str, float]
    base_investment: float
    selected_summer: str
    selected_winter: str
    location: LocationConfig = field(default_factory=LocationConfig)
    portfolio_multiplier: float = PORTFOLIO_MULTIPLIERS[DEFAULT_PORTFOLIO_STRATEGY]
    name: str = "garden"
    iterations: int = DEFAULT_ITERATIONS
    seed: int | None = None
    path: Path | None = field(default=None, repr=False, compare=False)

    def __post_init__(self) -> None:
        if self.portfolio is not None:
            object.__setattr__(self, "portfolio", MappingProxyType(dict(self.portfolio)))

    def to_dict(self) -> dict[str, Any]:
        """Return the canonical JSON form of the simulation inputs.

        Only the fields that influence the simulated distribution are
        included, so the result is suitable as a structural cache key.
        """
        return {
            "portfolio": {k: float(v) for k, v in sorted(self.portfolio.items())},
            "baseInvestment": float(self.base_investment),
            "selectedSummer": self.selected_summer,
            "selectedWinter": self.selected_winter,
            "locationConfig": self.location.to_dict(),
            "portfolioMultiplier": float(self.portfolio_multiplier),
        }


# ---------------------------------------------------------------------------
# Public functions
# ---------------------------------------------------------------------------


def portfolio_multiplier_for(strategy: str) -> float:
    """Return the investment multiplier for a portfolio *strategy* name.

    Raises
    ------
    ValueError
        If *strategy* is not a known strategy.
    """
    try:
        return PORTFOLIO_MULTIPLIERS[strategy]
    except KeyError:
        raise ValueError(
            f"Unknown portfolio strategy '{strategy}'. "
            f"Must be one of {sorted(PORTFOLIO_MULTIPLIERS)}."
        ) from None


def load_simulation_config(path: str | Path) -> SimulationConfig:
    """Load and validate a simulation configuration JSON file.

    Parameters
    ----------
    path:
        Path to the configuration ``.json`` file.

    Returns
    -------
    SimulationConfig
        Validated and parsed configuration.

    Raises
    ------
    FileNotFoundError
        When *path* does not exist.
    json.JSONDecodeError
        When the file contains invalid JSON.
    jsonschema.ValidationError
        When the JSON does not conform to the configuration schema.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(
            f"Simulation config file not found: '{path}'. "
            "Check that the path is correct and the file exists."
        )

    logger.debug("Loading simulation config from '%s'", path)

    try:
        with path.open("r", encoding="utf-8") as fh:
            data = json.load(fh)
    except json.JSONDecodeError as exc:
        raise json.JSONDecodeError(
            f"Invalid JSON in simulation config file '{path}': {exc.msg}",
            exc.doc,
            exc.pos,
        ) from exc

    config = _build_config(data, default_name=path.stem, path=path.resolve())

    logger.info(
        "Loaded simulation config '%s' (summer=%s, winter=%s, investment=%.2f) from '%s'",
        config.name,
        config.selected_summer,
        config.selected_winter,
        config.base_investment,
        path,
    )
    return config


def load_simulation_config_dict(data: dict) -> SimulationConfig:
    """Validate and wrap an already-parsed configuration dictionary.

    Useful for testing or when the caller has already loaded the JSON.

    Raises
    ------
    jsonschema.ValidationError
        When *data* does not conform to the configuration schema.
    """
    return _build_config(data, default_name="garden", path=None)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _build_config(data: dict, default_name: str, path: Path | None) -> SimulationConfig:
    validate_simulation_config(data)

    if "portfolioMultiplier" in data:
        multiplier = float(data["portfolioMultiplier"])
    else:
        multiplier = portfolio_multiplier_for(
            data.get("portfolioStrategy", DEFAULT_PORTFOLIO_STRATEGY)
        )

    return SimulationConfig(
        portfolio={k: float(v) for k, v in data["portfolio"].items()},
        base_investment=float(data["baseInvestment"]),
        selected_summer=data["selectedSummer"],
        selected_winter=data["selectedWinter"],
        location=_build_location(data.get("locationConfig", {})),
        portfolio_multiplier=multiplier,
        name=data.get("name", default_name),
        iterations=int(data.get("iterations", DEFAULT_ITERATIONS)),
        seed=data.get("seed"),
        path=path,
    )


def _build_location(raw: dict) -> LocationConfig:
    """Merge an optional region preset with explicit location fields."""
    merged: dict[str, Any] = {}
    region = raw.get("region")
    if region is not None:
        merged.update(REGION_PRESETS[region])
    merged.update({k: v for k, v in raw.items() if k != "region"})

    return LocationConfig(
        garden_size_sq_ft=float(merged.get("gardenSizeActual", DEFAULT_GARDEN_SIZE_SQ_FT)),
        heat_intensity=float(merged.get("heatIntensity", DEFAULT_HEAT_INTENSITY)),
        winter_severity=float(merged.get("winterSeverity", DEFAULT_WINTER_SEVERITY)),
        avg_rainfall=float(merged.get("avgRainfall", DEFAULT_AVG_RAINFALL)),
        hardiness=merged.get("hardiness", DEFAULT_HARDINESS_ZONE),
        name=merged.get("name"),
    )
