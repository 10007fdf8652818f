"""Required annual investment and budget sufficiency for a garden portfolio.

The required budget starts from per-category base costs for a 100 sq ft
garden, scaled by area, then adjusted for the climate scenarios (harsher
summers need more protection, irrigation and fertilizer) and for the
portfolio mix (heat specialists need more protection and water, perennials
more infrastructure).

Public API
----------
RequiredInvestment             – Cost breakdown and total.
CriticalCategory               – A cost category flagged for attention.
InvestmentSufficiency          – Budget vs. requirement assessment.
InvestmentAnalysis             – Requirement plus sufficiency for one run.
calculate_required_investment  – Build the cost breakdown.
calculate_investment_sufficiency – Compare a budget with the requirement.
identify_critical_categories   – Categories to prioritise or cut.
analyse_investment             – Convenience wrapper used by the engine.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping
from dataclasses import dataclass

from garden_sim.config.defaults import (
    BASE_COSTS,
    COST_PRIORITIES,
    CRITICAL_REDUCE_RATIO,
    PORTFOLIO_COST_FACTORS,
    SUFFICIENCY_ABUNDANT_RATIO,
    SUFFICIENCY_ADEQUATE_RATIO,
    SUFFICIENCY_MARGINAL_RATIO,
    SUMMER_COST_FACTORS,
    WINTER_PROTECTION_FACTORS,
)

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Result types
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class RequiredInvestment:
    """Annual cost breakdown required for a portfolio under given conditions.

    Attributes
    ----------
    breakdown:
        Cost category → required amount.
    total:
        Sum of the breakdown.
    summer, winter:
        Scenario identifiers the requirement was computed for.
    summer_factor:
        Protection cost factor of the summer scenario.
    winter_factor:
        Protection cost factor of the winter scenario.
    """

    breakdown: dict[str, float]
    total: float
    summer: str
    winter: str
    summer_factor: float
    winter_factor: float


@dataclass(frozen=True)
class CriticalCategory:
    category: str
    importance: str
    description: str
    action: str
    required: float


@dataclass(frozen=True)
class InvestmentSufficiency:
    """How a planned budget compares with the required investment.

    Attributes
    ----------
    ratio:
        ``actual / required.total``.
    gap:
        Shortfall (0 when the budget covers the requirement).
    surplus:
        Excess budget (0 when there is a shortfall).
    status:
        ``"abundant"``, ``"adequate"``, ``"marginal"`` or ``"insufficient"``.
    level:
        ``"excellent"``, ``"good"``, ``"caution"`` or ``"warning"``.
    recommendations:
        Human-readable advice.
    critical_categories:
        Categories to prioritise or reduce.
    """

    ratio: float
    gap: float
    surplus: float
    status: str
    level: str
    recommendations: tuple[str, ...]
    critical_categories: tuple[CriticalCategory, ...]


@dataclass(frozen=True)
class InvestmentAnalysis:
    required: RequiredInvestment
    sufficiency: InvestmentSufficiency


# ---------------------------------------------------------------------------
# Public functions
# ---------------------------------------------------------------------------


def calculate_required_investment(
    portfolio: Mapping[str, float],
    selected_summer: str,
    selected_winter: str,
    size_multiplier: float,
) -> RequiredInvestment:
    """Compute the annual investment the portfolio needs.

    Parameters
    ----------
    portfolio:
        Crop-category name → allocation percent.
    selected_summer, selected_winter:
        Climate scenario identifiers. Unknown identifiers fall back to the
        neutral (``"normal"`` / factor 1.0) adjustments.
    size_multiplier:
        Garden area relative to 100 sq ft.

    Returns
    -------
    RequiredInvestment
        Cost breakdown and total.
    """
    summer_factors = SUMMER_COST_FACTORS.get(selected_summer, SUMMER_COST_FACTORS["normal"])
    winter_protection = WINTER_PROTECTION_FACTORS.get(selected_winter, 1.0)

    costs = {category: cost * size_multiplier for category, cost in BASE_COSTS.items()}

    costs["protection"] *= max(summer_factors["protection"], winter_protection)
    costs["irrigation"] *= summer_factors["irrigation"]
    costs["fertilizer"] *= summer_factors["heat"]

    for crop, allocation in portfolio.items():
        if allocation <= 0:
            continue
        for category, factor in PORTFOLIO_COST_FACTORS.get(crop, {}).items():
            costs[category] *= 1.0 + (factor - 1.0) * allocation / 100.0

    return RequiredInvestment(
        breakdown=costs,
        total=sum(costs.values()),
        summer=selected_summer,
        winter=selected_winter,
        summer_factor=summer_factors["protection"],
        winter_factor=winter_protection,
    )


def identify_critical_categories(
    actual_investment: float,
    required: RequiredInvestment,
) -> tuple[CriticalCategory, ...]:
    """Return the cost categories that need attention for an underfunded budget.

    Below 60 % funding, low-importance categories are flagged for reduction.
    Between 60 % and 80 %, critical and high-importance categories are
    flagged for priority funding. At 80 % or more nothing is flagged.
    """
    ratio = _ratio(actual_investment, required.total)
    if ratio >= SUFFICIENCY_ADEQUATE_RATIO:
        return ()

    critical: list[CriticalCategory] = []
    for category, importance, description in COST_PRIORITIES:
        if ratio < CRITICAL_REDUCE_RATIO and importance == "low":
            action = "consider reducing"
        elif ratio < SUFFICIENCY_MARGINAL_RATIO and importance in ("critical", "high"):
            action = "prioritize funding"
        else:
            continue
        critical.append(
            CriticalCategory(
                category=category,
                importance=importance,
                description=description,
                action=action,
                required=required.breakdown.get(category, 0.0),
            )
        )
    return tuple(critical)


def calculate_investment_sufficiency(
    actual_investment: float,
    required: RequiredInvestment,
) -> InvestmentSufficiency:
    """Classify a planned budget against the required investment."""
    ratio = _ratio(actual_investment, required.total)
    gap = required.total - actual_investment
    shortfall = math.ceil(gap) if gap > 0 else 0

    if ratio >= SUFFICIENCY_ABUNDANT_RATIO:
        status, level = "abundant", "excellent"
        recommendations = (
            "Investment exceeds requirements - consider premium varieties",
            "Opportunity for infrastructure upgrades",
            "Buffer available for unexpected costs",
        )
    elif ratio >= SUFFICIENCY_ADEQUATE_RATIO:
        status, level = "adequate", "good"
        recommendations = (
            "Investment meets requirements",
            "Consider small buffer for contingencies",
            "Well-positioned for planned portfolio",
        )
    elif ratio >= SUFFICIENCY_MARGINAL_RATIO:
        status, level = "marginal", "caution"
        recommendations = (
            f"Consider increasing investment by ${shortfall}",
            "Focus on essential categories (seeds, soil, protection)",
            "Risk of reduced yields or crop failures",
        )
    else:
        status, level = "insufficient", "warning"
        recommendations = (
            f"Investment shortfall of ${shortfall} may cause significant issues",
            "Prioritize seeds and soil amendments",
            "Consider reducing portfolio complexity",
            "Risk of poor garden performance",
        )

    return InvestmentSufficiency(
        ratio=ratio,
        gap=max(0.0, gap),
        surplus=max(0.0, -gap),
        status=status,
        level=level,
        recommendations=recommendations,
        critical_categories=identify_critical_categories(actual_investment, required),
    )


def analyse_investment(
    portfolio: Mapping[str, float],
    actual_investment: float,
    selected_summer: str,
    selected_winter: str,
    size_multiplier: float,
) -> InvestmentAnalysis:
    """Compute the requirement and the sufficiency of *actual_investment*."""
    required = calculate_required_investment(
        portfolio, selected_summer, selected_winter, size_multiplier
    )
    sufficiency = calculate_investment_sufficiency(actual_investment, required)
    logger.info(
        "Investment %.2f vs. required %.2f (ratio %.2f, %s).",
        actual_investment,
        required.total,
        sufficiency.ratio,
        sufficiency.status,
    )
    return InvestmentAnalysis(required=required, sufficiency=sufficiency)


def _ratio(actual: float, required_total: float) -> float:
    if required_total <= 0.0:
        return 0.0
    return actual / required_total
