"""Reduce per-iteration results to summary statistics and histograms.

Statistics conventions
----------------------
* Standard deviations use the population estimator (``ddof=0``) for every
  metric.
* Percentiles use linear interpolation between order statistics
  (Hyndman–Fan type 7, numpy ``method="linear"``), so the 50th percentile
  equals the median.

Public API
----------
HistogramBin       – One histogram bar.
MetricStatistics   – Mean / median / std of a metric.
Percentiles        – P10 / P25 / P75 / P90 of the net return.
WeatherRiskData    – Histograms of the sampled weather metrics.
SimulationSummary  – Complete deliverable of one simulation run.
build_histogram    – Fixed-bin-count histogram of a value array.
summarize          – Main entry point.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np

from garden_sim.config.defaults import (
    PERCENTILE_METHOD,
    RETURN_HISTOGRAM_BINS,
    STD_DDOF,
    WEATHER_HISTOGRAM_BINS,
)
from garden_sim.investment.requirements import InvestmentAnalysis
from garden_sim.simulation.results import SimulationResult

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Result types
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class HistogramBin:
    """One histogram bar.

    Attributes
    ----------
    x:
        Bin centre.
    value:
        Bar height (equal to ``count``).
    count:
        Number of values falling into the bin.
    """

    x: float
    value: int
    count: int


@dataclass(frozen=True)
class MetricStatistics:
    """Descriptive statistics of a scalar metric across iterations."""

    mean: float = 0.0
    median: float = 0.0
    std: float = 0.0


@dataclass(frozen=True)
class Percentiles:
    """Net-return percentiles (10th through 90th)."""

    p10: float = 0.0
    p25: float = 0.0
    p75: float = 0.0
    p90: float = 0.0


@dataclass(frozen=True)
class WeatherRiskData:
    """Histograms of the sampled weather conditions."""

    stress_days: tuple[HistogramBin, ...] = ()
    freeze_events: tuple[HistogramBin, ...] = ()
    annual_rainfall: tuple[HistogramBin, ...] = ()


@dataclass(frozen=True)
class SimulationSummary:
    """Complete output of one simulation run.

    Attributes
    ----------
    mean, median, std:
        Statistics of the net return.
    percentiles:
        Net-return percentiles.
    roi:
        Statistics of the ROI (percent).
    harvest_value:
        Statistics of the harvest value.
    success_rate:
        Percentage of all iterations (including any excluded as
        non-finite) with a positive net return.
    raw_results:
        Every per-iteration result, in sampling order.
    weather_risk_data:
        Weather histograms.
    return_histogram, roi_histogram:
        Histograms of net return and ROI.
    investment_analysis:
        Required investment and budget sufficiency, when computed.
    """

    mean: float
    median: float
    std: float
    percentiles: Percentiles
    roi: MetricStatistics
    harvest_value: MetricStatistics
    success_rate: float
    raw_results: tuple[SimulationResult, ...]
    weather_risk_data: WeatherRiskData
    return_histogram: tuple[HistogramBin, ...]
    roi_histogram: tuple[HistogramBin, ...]
    investment_analysis: InvestmentAnalysis | None = None


# ---------------------------------------------------------------------------
# Histogram
# ---------------------------------------------------------------------------


def build_histogram(data: Sequence[float] | np.ndarray, bin_count: int) -> tuple[HistogramBin, ...]:
    """Bin *data* into *bin_count* equal-width bins spanning its range.

    Bin ``i`` covers ``[min + i*w, min + (i+1)*w)`` with
    ``w = (max - min) / bin_count``; the maximum falls into the last bin.

    Returns an empty tuple for empty or constant data.

    Raises
    ------
    ValueError
        If *bin_count* is not positive.
    """
    if bin_count <= 0:
        raise ValueError(f"Histogram bin count must be positive, got {bin_count}.")

    values = np.asarray(data, dtype=float)
    if values.size == 0:
        return ()
    lo = float(values.min())
    hi = float(values.max())
    if hi == lo:
        return ()

    width = (hi - lo) / bin_count
    indices = np.clip(np.floor((values - lo) / width).astype(np.int64), 0, bin_count - 1)
    counts = np.bincount(indices, minlength=bin_count)

    return tuple(
        HistogramBin(x=lo + (i + 0.5) * width, value=int(c), count=int(c))
        for i, c in enumerate(counts)
    )


def build_weather_risk_data(
    results: Sequence[SimulationResult],
    bin_count: int = WEATHER_HISTOGRAM_BINS,
) -> WeatherRiskData:
    """Histogram the stress days, freeze events and rainfall of *results*."""
    if not results:
        return WeatherRiskData()
    return WeatherRiskData(
        stress_days=build_histogram([r.weather.stress_days for r in results], bin_count),
        freeze_events=build_histogram([r.weather.freeze_events for r in results], bin_count),
        annual_rainfall=build_histogram([r.weather.annual_rainfall for r in results], bin_count),
    )


# ---------------------------------------------------------------------------
# Statistics helpers
# ---------------------------------------------------------------------------


def _compute_statistics(values: np.ndarray) -> MetricStatistics:
    if values.size == 0:
        return MetricStatistics()
    return MetricStatistics(
        mean=float(np.mean(values)),
        median=float(np.median(values)),
        std=float(np.std(values, ddof=STD_DDOF)),
    )


def _compute_percentiles(values: np.ndarray) -> Percentiles:
    if values.size == 0:
        return Percentiles()
    p10, p25, p75, p90 = np.percentile(values, [10, 25, 75, 90], method=PERCENTILE_METHOD)
    return Percentiles(p10=float(p10), p25=float(p25), p75=float(p75), p90=float(p90))


def _is_finite(result: SimulationResult) -> bool:
    return (
        math.isfinite(result.net_return)
        and math.isfinite(result.roi)
        and math.isfinite(result.harvest_value)
    )


def empty_summary() -> SimulationSummary:
    """Return the all-zero summary of a run without iterations."""
    return SimulationSummary(
        mean=0.0,
        median=0.0,
        std=0.0,
        percentiles=Percentiles(),
        roi=MetricStatistics(),
        harvest_value=MetricStatistics(),
        success_rate=0.0,
        raw_results=(),
        weather_risk_data=WeatherRiskData(),
        return_histogram=(),
        roi_histogram=(),
    )


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------


def summarize(results: Sequence[SimulationResult]) -> SimulationSummary:
    """Reduce per-iteration *results* to a :class:`SimulationSummary`.

    Results with a non-finite net return, ROI or harvest value are kept in
    ``raw_results`` but excluded from statistics and histograms. They still
    count in the success-rate denominator, as unsuccessful iterations.

    Parameters
    ----------
    results:
        Per-iteration results, in sampling order.

    Returns
    -------
    SimulationSummary
        Statistics, success rate and histograms. An empty input yields the
        all-zero summary.
    """
    raw = tuple(results)
    if not raw:
        return empty_summary()

    valid = [r for r in raw if _is_finite(r)]
    if len(valid) < len(raw):
        logger.warning(
            "Excluding %d non-finite result(s) out of %d from statistics.",
            len(raw) - len(valid),
            len(raw),
        )

    net_returns = np.array([r.net_return for r in valid], dtype=float)
    rois = np.array([r.roi for r in valid], dtype=float)
    harvest_values = np.array([r.harvest_value for r in valid], dtype=float)

    net_stats = _compute_statistics(net_returns)
    # Denominator is every iteration, excluded ones included
    success_rate = 100.0 * int(np.count_nonzero(net_returns > 0.0)) / len(raw)

    return SimulationSummary(
        mean=net_stats.mean,
        median=net_stats.median,
        std=net_stats.std,
        percentiles=_compute_percentiles(net_returns),
        roi=_compute_statistics(rois),
        harvest_value=_compute_statistics(harvest_values),
        success_rate=success_rate,
        raw_results=raw,
        weather_risk_data=build_weather_risk_data(valid),
        return_histogram=build_histogram(net_returns, RETURN_HISTOGRAM_BINS),
        roi_histogram=build_histogram(rois, RETURN_HISTOGRAM_BINS),
    )
