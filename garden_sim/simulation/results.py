"""Per-iteration simulation results.

Public API
----------
WeatherSample     – Sampled weather conditions of one iteration.
SimulationResult  – Financial outcome of one iteration.
compute_roi       – Return on investment in percent, 0 for a non-positive investment.
assemble_results  – Zip per-metric sample arrays into result records.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np

from garden_sim.simulation.parameters import (
    METRIC_COOL_YIELD,
    METRIC_FREEZE_EVENTS,
    METRIC_HARVEST,
    METRIC_HEAT_YIELD,
    METRIC_INVESTMENT,
    METRIC_PERENNIAL_YIELD,
    METRIC_RAINFALL,
    METRIC_STRESS_DAYS,
)

_REQUIRED_METRICS = (
    METRIC_HARVEST,
    METRIC_INVESTMENT,
    METRIC_HEAT_YIELD,
    METRIC_COOL_YIELD,
    METRIC_PERENNIAL_YIELD,
    METRIC_STRESS_DAYS,
    METRIC_FREEZE_EVENTS,
    METRIC_RAINFALL,
)


@dataclass(frozen=True)
class WeatherSample:
    """Weather conditions drawn for one iteration.

    Attributes:
        stress_days: Heat-stress days in the season.
        freeze_events: Freeze events in the winter.
        annual_rainfall: Annual rainfall in inches.
    """

    stress_days: int
    freeze_events: int
    annual_rainfall: float


@dataclass(frozen=True)
class SimulationResult:
    """Outcome of a single Monte Carlo iteration.

    Attributes:
        harvest_value: Market value of the total harvest.
        investment: Realised annual investment.
        net_return: ``harvest_value - investment``.
        roi: ``net_return / investment * 100`` (0 when investment is 0 or the
            ratio overflows).
        heat_yield: Yield value of the heat specialists.
        cool_yield: Yield value of the cool-season crops.
        perennial_yield: Yield value of the perennials.
        weather: Sampled weather conditions.
    """

    harvest_value: float
    investment: float
    net_return: float
    roi: float
    heat_yield: float
    cool_yield: float
    perennial_yield: float
    weather: WeatherSample


def compute_roi(net_return: float, investment: float) -> float:
    """Return on investment in percent.

    0.0 when *investment* is not positive, or when it is so small that the
    ratio overflows the float range.
    """
    if investment <= 0.0:
        return 0.0
    roi = net_return / investment * 100.0
    return roi if math.isfinite(roi) else 0.0


def assemble_results(samples: dict[str, np.ndarray]) -> list[SimulationResult]:
    """Build one :class:`SimulationResult` per sample index.

    Result ``i`` uses only index ``i`` of every metric array, so the output
    preserves the sampling order.

    Parameters
    ----------
    samples:
        Metric name → sample array, as returned by :func:`sample_metrics`.

    Returns
    -------
    list[SimulationResult]
        One record per iteration.

    Raises
    ------
    ValueError
        If a metric is missing or the arrays differ in length.
    """
    missing = [m for m in _REQUIRED_METRICS if m not in samples]
    if missing:
        raise ValueError(f"Sample set is missing metric(s): {missing}.")

    lengths = {m: len(samples[m]) for m in _REQUIRED_METRICS}
    if len(set(lengths.values())) > 1:
        raise ValueError(f"Sample arrays differ in length: {lengths}.")

    harvest = samples[METRIC_HARVEST]
    investment = samples[METRIC_INVESTMENT]
    heat = samples[METRIC_HEAT_YIELD]
    cool = samples[METRIC_COOL_YIELD]
    perennial = samples[METRIC_PERENNIAL_YIELD]
    stress = samples[METRIC_STRESS_DAYS]
    freeze = samples[METRIC_FREEZE_EVENTS]
    rainfall = samples[METRIC_RAINFALL]

    results: list[SimulationResult] = []
    for i in range(lengths[METRIC_HARVEST]):
        harvest_value = float(harvest[i])
        invested = float(investment[i])
        net_return = harvest_value - invested
        results.append(
            SimulationResult(
                harvest_value=harvest_value,
                investment=invested,
                net_return=net_return,
                roi=compute_roi(net_return, invested),
                heat_yield=float(heat[i]),
                cool_yield=float(cool[i]),
                perennial_yield=float(perennial[i]),
                weather=WeatherSample(
                    stress_days=int(stress[i]),
                    freeze_events=int(freeze[i]),
                    annual_rainfall=float(rainfall[i]),
                ),
            )
        )
    return results
