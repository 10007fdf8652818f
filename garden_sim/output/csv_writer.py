"""Write simulation results to CSV files.

Three output files are produced per simulation run:

1. ``{name}_summary.csv``     – Single row: key inputs + summary statistics.
2. ``{name}_results.csv``     – One row per Monte Carlo iteration.
3. ``{name}_histograms.csv``  – Long format: one row per histogram bin.

Monetary values are in the budget currency, ROI and success rate in percent,
rainfall in inches. None values are written as empty strings.

Public API
----------
results_to_frame     – Per-iteration results as a pandas DataFrame.
write_summary_csv    – Write the single-row summary file.
write_results_csv    – Write per-iteration results.
write_histograms_csv – Write every histogram of the summary.
"""

from __future__ import annotations

import csv
import logging
from collections.abc import Sequence
from pathlib import Path

import pandas as pd

from garden_sim.config.defaults import CSV_DELIMITER, CURRENCY_PRECISION, FLOAT_PRECISION
from garden_sim.config.loader import SimulationConfig
from garden_sim.output.formatting import fmt_currency, fmt_float, fmt_pct
from garden_sim.simulation.results import SimulationResult
from garden_sim.simulation.summary import HistogramBin, SimulationSummary

logger = logging.getLogger(__name__)

_RESULT_COLUMNS = [
    "iteration",
    "harvest_value",
    "investment",
    "net_return",
    "roi_pct",
    "heat_yield",
    "cool_yield",
    "perennial_yield",
    "stress_days",
    "freeze_events",
    "annual_rainfall_in",
]


# ---------------------------------------------------------------------------
# Summary CSV
# ---------------------------------------------------------------------------


def write_summary_csv(
    path: Path | str,
    config: SimulationConfig,
    summary: SimulationSummary,
    seed: int | None = None,
) -> None:
    """Write the single-row simulation summary CSV.

    Parameters
    ----------
    path:
        Destination file path.
    config:
        Inputs of the run.
    summary:
        Summary produced by the engine.
    seed:
        Random seed of the run (empty when unseeded).
    """
    analysis = summary.investment_analysis
    row = {
        "name": config.name,
        "selected_summer": config.selected_summer,
        "selected_winter": config.selected_winter,
        "base_investment": fmt_currency(config.base_investment),
        "portfolio_multiplier": fmt_float(config.portfolio_multiplier),
        "garden_size_sq_ft": fmt_float(config.location.garden_size_sq_ft),
        "iterations": str(len(summary.raw_results)),
        "seed": str(seed) if seed is not None else "",
        "net_return_mean": fmt_currency(summary.mean),
        "net_return_median": fmt_currency(summary.median),
        "net_return_std": fmt_currency(summary.std),
        "net_return_p10": fmt_currency(summary.percentiles.p10),
        "net_return_p25": fmt_currency(summary.percentiles.p25),
        "net_return_p75": fmt_currency(summary.percentiles.p75),
        "net_return_p90": fmt_currency(summary.percentiles.p90),
        "roi_mean_pct": fmt_pct(summary.roi.mean, already_pct=True),
        "roi_median_pct": fmt_pct(summary.roi.median, already_pct=True),
        "roi_std_pct": fmt_pct(summary.roi.std, already_pct=True),
        "harvest_value_mean": fmt_currency(summary.harvest_value.mean),
        "harvest_value_median": fmt_currency(summary.harvest_value.median),
        "harvest_value_std": fmt_currency(summary.harvest_value.std),
        "success_rate_pct": fmt_pct(summary.success_rate, already_pct=True),
        "required_investment": fmt_currency(analysis.required.total if analysis else None),
        "investment_status": analysis.sufficiency.status if analysis else "",
    }

    _write_dicts(path, [row])
    logger.info("Wrote summary CSV: %s", path)


# ---------------------------------------------------------------------------
# Results CSV
# ---------------------------------------------------------------------------


def results_to_frame(results: Sequence[SimulationResult]) -> pd.DataFrame:
    """Return one DataFrame row per iteration (1-indexed ``iteration`` column)."""
    records = [
        {
            "iteration": i,
            "harvest_value": r.harvest_value,
            "investment": r.investment,
            "net_return": r.net_return,
            "roi_pct": r.roi,
            "heat_yield": r.heat_yield,
            "cool_yield": r.cool_yield,
            "perennial_yield": r.perennial_yield,
            "stress_days": r.weather.stress_days,
            "freeze_events": r.weather.freeze_events,
            "annual_rainfall_in": r.weather.annual_rainfall,
        }
        for i, r in enumerate(results, start=1)
    ]
    return pd.DataFrame.from_records(records, columns=_RESULT_COLUMNS)


def write_results_csv(path: Path | str, results: Sequence[SimulationResult]) -> None:
    """Write per-iteration results, one row per iteration in sampling order."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    df = results_to_frame(results)
    money_cols = ["harvest_value", "investment", "net_return",
                  "heat_yield", "cool_yield", "perennial_yield"]
    df[money_cols] = df[money_cols].round(CURRENCY_PRECISION)
    df[["roi_pct", "annual_rainfall_in"]] = df[["roi_pct", "annual_rainfall_in"]].round(
        FLOAT_PRECISION
    )
    df.to_csv(path, sep=CSV_DELIMITER, index=False)
    logger.info("Wrote results CSV (%d rows): %s", len(df), path)


# ---------------------------------------------------------------------------
# Histograms CSV
# ---------------------------------------------------------------------------


def write_histograms_csv(path: Path | str, summary: SimulationSummary) -> None:
    """Write all histograms of *summary* in long format.

    Columns: ``histogram`` (``net_return``, ``roi``, ``stress_days``,
    ``freeze_events``, ``annual_rainfall``), ``bin``, ``x``, ``value``,
    ``count``.
    """
    histograms: dict[str, tuple[HistogramBin, ...]] = {
        "net_return": summary.return_histogram,
        "roi": summary.roi_histogram,
        "stress_days": summary.weather_risk_data.stress_days,
        "freeze_events": summary.weather_risk_data.freeze_events,
        "annual_rainfall": summary.weather_risk_data.annual_rainfall,
    }

    rows = []
    for name, bins in histograms.items():
        for i, b in enumerate(bins):
            rows.append({
                "histogram": name,
                "bin": str(i),
                "x": fmt_float(b.x),
                "value": str(b.value),
                "count": str(b.count),
            })

    _write_dicts(path, rows)
    logger.info("Wrote histograms CSV (%d rows): %s", len(rows), path)


# ---------------------------------------------------------------------------
# Internal helper
# ---------------------------------------------------------------------------


def _write_dicts(path: Path | str, rows: list[dict]) -> None:
    """Write a list of dicts to a CSV file, creating parent directories.

    Parameters
    ----------
    path:
        Destination file path.
    rows:
        List of row dicts.  All dicts must have the same keys; the first
        dict determines the column order.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    if not rows:
        path.write_text("", encoding="utf-8")
        return

    fieldnames = list(rows[0].keys())
    with path.open("w", newline="", encoding="utf-8") as fh:
        writer = csv.DictWriter(fh, fieldnames=fieldnames, delimiter=CSV_DELIMITER)
        writer.writeheader()
        writer.writerows(rows)
