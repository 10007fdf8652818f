"""Draw Monte Carlo samples for every metric of a simulation run.

Normal metrics (harvest, investment, per-category yields, rainfall) and
Poisson metrics (stress days, freeze events) are drawn independently from a
``numpy.random.Generator``. No correlation between metrics is modelled.
Samples are clamped to their physical domain after drawing.
"""

from __future__ import annotations

import logging
import math

import numpy as np

from garden_sim.config.defaults import (
    MIN_ANNUAL_RAINFALL,
    MIN_EVENT_COUNT,
    MIN_FINANCIAL_VALUE,
)
from garden_sim.simulation.parameters import (
    METRIC_RAINFALL,
    NormalSpec,
    PoissonSpec,
    SimulationParameters,
)

logger = logging.getLogger(__name__)


def make_rng(seed: int | None = None) -> np.random.Generator:
    """Return a fresh generator, seeded when *seed* is given."""
    return np.random.default_rng(seed)


def _sample_normal(
    rng: np.random.Generator, name: str, spec: NormalSpec, iterations: int
) -> np.ndarray:
    if not (math.isfinite(spec.mean) and math.isfinite(spec.std)) or spec.std < 0.0:
        raise ValueError(
            f"Invalid Normal parameters for metric '{name}': "
            f"mean={spec.mean}, std={spec.std}. std must be finite and non-negative."
        )
    values = np.asarray(rng.normal(spec.mean, spec.std, size=iterations), dtype=float)
    floor = MIN_ANNUAL_RAINFALL if name == METRIC_RAINFALL else MIN_FINANCIAL_VALUE
    return np.maximum(values, floor)


def _sample_poisson(
    rng: np.random.Generator, name: str, spec: PoissonSpec, iterations: int
) -> np.ndarray:
    if not math.isfinite(spec.rate) or spec.rate < 0.0:
        raise ValueError(
            f"Invalid Poisson rate for metric '{name}': {spec.rate}. "
            "Rate must be finite and non-negative."
        )
    values = np.asarray(rng.poisson(spec.rate, size=iterations), dtype=np.int64)
    return np.maximum(values, MIN_EVENT_COUNT)


def sample_metrics(
    parameters: SimulationParameters,
    iterations: int,
    rng: np.random.Generator | None = None,
) -> dict[str, np.ndarray]:
    """Draw *iterations* samples for every metric in *parameters*.

    Parameters
    ----------
    parameters:
        Distribution parameters from :func:`derive_parameters`.
    iterations:
        Number of samples per metric. Zero or negative gives empty arrays.
    rng:
        Random source exposing ``normal(loc, scale, size)`` and
        ``poisson(lam, size)`` like ``numpy.random.Generator``.
        An unseeded generator is created when omitted.

    Returns
    -------
    dict[str, np.ndarray]
        Metric name → sample array of length ``max(iterations, 0)``.
        Normal metrics are float arrays, count metrics are integer arrays.

    Raises
    ------
    ValueError
        If a distribution has a negative or non-finite std / rate.
    """
    if rng is None:
        rng = make_rng()
    n = max(int(iterations), 0)

    samples: dict[str, np.ndarray] = {}
    for name, spec in parameters.metrics().items():
        if isinstance(spec, PoissonSpec):
            samples[name] = _sample_poisson(rng, name, spec, n)
        else:
            samples[name] = _sample_normal(rng, name, spec, n)

    logger.debug("Sampled %d iteration(s) for %d metric(s).", n, len(samples))
    return samples
