"""JSON schema definition and validation for simulation configuration files.

The schema mirrors the configuration object the garden UI hands to the
simulation engine (camelCase field names). Validation uses the
``jsonschema`` library (Draft 7).

Usage::

    from garden_sim.config.schema import validate_simulation_config
    validate_simulation_config(data)   # raises jsonschema.ValidationError on failure
"""

from __future__ import annotations

import copy

import jsonschema

from garden_sim.config.defaults import (
    HARDINESS_ZONE_PATTERN,
    MAX_ALLOCATION_PCT,
    MAX_INTENSITY_LEVEL,
    MIN_ALLOCATION_PCT,
    MIN_INTENSITY_LEVEL,
    PORTFOLIO_MULTIPLIERS,
    REGION_PRESETS,
    SUMMER_SCENARIOS,
    WINTER_SCENARIOS,
)

# ---------------------------------------------------------------------------
# Re-usable sub-schemas
# ---------------------------------------------------------------------------

_ALLOCATION_PCT = {
    "type": "number",
    "minimum": MIN_ALLOCATION_PCT,
    "maximum": MAX_ALLOCATION_PCT,
}

_INTENSITY_LEVEL = {
    "type": "number",
    "minimum": MIN_INTENSITY_LEVEL,
    "maximum": MAX_INTENSITY_LEVEL,
}

_PORTFOLIO = {
    "type": "object",
    "minProperties": 1,
    "additionalProperties": _ALLOCATION_PCT,
}

_LOCATION = {
    "type": "object",
    "properties": {
        "name": {"type": "string", "minLength": 1},
        "region": {"type": "string", "enum": sorted(REGION_PRESETS)},
        "gardenSizeActual": {"type": "number", "exclusiveMinimum": 0},
        "heatIntensity": _INTENSITY_LEVEL,
        "winterSeverity": _INTENSITY_LEVEL,
        "avgRainfall": {"type": "number", "minimum": 0},
        "hardiness": {"type": "string", "pattern": HARDINESS_ZONE_PATTERN},
    },
    "additionalProperties": False,
}

# ---------------------------------------------------------------------------
# Top-level schema
# ---------------------------------------------------------------------------

SIMULATION_CONFIG_SCHEMA: dict = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "title": "Garden Portfolio Simulation Configuration",
    "type": "object",
    "required": ["portfolio", "baseInvestment", "selectedSummer", "selectedWinter"],
    "properties": {
        "name": {"type": "string", "minLength": 1},
        "portfolio": _PORTFOLIO,
        "baseInvestment": {"type": "number", "exclusiveMinimum": 0},
        "selectedSummer": {"type": "string", "enum": list(SUMMER_SCENARIOS)},
        "selectedWinter": {"type": "string", "enum": list(WINTER_SCENARIOS)},
        "locationConfig": _LOCATION,
        "portfolioMultiplier": {"type": "number", "minimum": 0},
        "portfolioStrategy": {"type": "string", "enum": sorted(PORTFOLIO_MULTIPLIERS)},
        "iterations": {"type": "integer", "minimum": 0},
        "seed": {"type": ["integer", "null"], "minimum": 0},
    },
    "additionalProperties": False,
}


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def validate_simulation_config(data: dict) -> None:
    """Validate a simulation configuration dictionary against the JSON schema.

    Raises a ``jsonschema.ValidationError`` with a descriptive message
    (including the JSON path to the failing field) if validation fails.

    Parameters
    ----------
    data:
        Parsed configuration dictionary (e.g. from ``json.load``).

    Raises
    ------
    jsonschema.ValidationError
        When *data* does not conform to the schema.
    jsonschema.SchemaError
        When the schema itself is malformed (should never happen in production).
    """
    validator = jsonschema.Draft7Validator(SIMULATION_CONFIG_SCHEMA)
    errors = sorted(validator.iter_errors(data), key=lambda e: list(map(str, e.absolute_path)))

    if errors:
        first = errors[0]
        path_str = " → ".join(str(p) for p in first.absolute_path) or "(root)"
        raise jsonschema.ValidationError(
            f"Simulation config validation failed at '{path_str}': {first.message}",
            path=first.absolute_path,
            schema_path=first.absolute_schema_path,
            validator=first.validator,
            validator_value=first.validator_value,
            instance=first.instance,
            schema=first.schema,
            cause=first.cause,
        )


def get_schema() -> dict:
    """Return a deep copy of the simulation configuration JSON schema dictionary."""
    return copy.deepcopy(SIMULATION_CONFIG_SCHEMA)
