"""Monte Carlo simulation of a garden portfolio's annual financial outcome.

Each run derives distribution parameters from the configuration, samples
every metric ``iterations`` times, assembles per-iteration results and
reduces them to a summary with histograms. The run is a pure function of
``(config, iterations, seed)``: no state is kept between calls.

Public API
----------
run_complete_simulation  – Main entry point.
"""

from __future__ import annotations

import dataclasses
import logging

import numpy as np

from garden_sim.catalog.crops import DEFAULT_CATALOG, CropCatalog
from garden_sim.config.defaults import DEFAULT_ITERATIONS
from garden_sim.config.loader import SimulationConfig
from garden_sim.investment.requirements import analyse_investment
from garden_sim.simulation.parameters import (
    DEFAULT_COEFFICIENTS,
    UncertaintyCoefficients,
    derive_parameters,
)
from garden_sim.simulation.results import assemble_results
from garden_sim.simulation.sampler import make_rng, sample_metrics
from garden_sim.simulation.summary import SimulationSummary, summarize

logger = logging.getLogger(__name__)


def run_complete_simulation(
    config: SimulationConfig,
    iterations: int = DEFAULT_ITERATIONS,
    seed: int | None = None,
    *,
    rng: np.random.Generator | None = None,
    catalog: CropCatalog = DEFAULT_CATALOG,
    coefficients: UncertaintyCoefficients = DEFAULT_COEFFICIENTS,
) -> SimulationSummary:
    """Run the Monte Carlo simulation for *config*.

    Parameters
    ----------
    config:
        Validated simulation inputs. Not modified.
    iterations:
        Number of Monte Carlo iterations. Zero or negative returns the
        all-zero summary.
    seed:
        Random seed. Two runs with the same config, iterations and seed
        return equal summaries. Ignored when *rng* is given.
    rng:
        Optional random source replacing the seeded numpy generator.
    catalog:
        Crop catalog supplying yield multipliers and market prices.
    coefficients:
        Coefficients of variation for the Normal metrics.

    Returns
    -------
    SimulationSummary
        Statistics, histograms, raw results and investment analysis.

    Raises
    ------
    ValueError
        If the configuration is invalid or a distribution cannot be sampled.
    """
    logger.info(
        "Simulation: %d iterations, summer=%s, winter=%s, seed=%s.",
        iterations,
        config.selected_summer,
        config.selected_winter,
        seed,
    )

    params = derive_parameters(
        config.portfolio,
        config.base_investment,
        config.portfolio_multiplier,
        config.location,
        config.selected_summer,
        config.selected_winter,
        catalog=catalog,
        coefficients=coefficients,
    )

    if rng is None:
        rng = make_rng(seed)
    samples = sample_metrics(params, iterations, rng)
    results = assemble_results(samples)
    summary = summarize(results)

    analysis = analyse_investment(
        config.portfolio,
        params.investment.mean,
        config.selected_summer,
        config.selected_winter,
        params.size_multiplier,
    )
    summary = dataclasses.replace(summary, investment_analysis=analysis)

    if results:
        logger.info(
            "Simulation complete: net return median=%.2f, P10=%.2f, P90=%.2f, success=%.1f %%.",
            summary.median,
            summary.percentiles.p10,
            summary.percentiles.p90,
            summary.success_rate,
        )
    return summary
