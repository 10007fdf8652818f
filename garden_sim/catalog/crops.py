"""Crop-category catalog: yield multipliers, market prices, climate axes.

The catalog is the boundary to the crop database. The simulation only asks
it for the per-category constants it needs; categories the catalog does not
know contribute nothing to the harvest.

Public API
----------
CropCategory     – Constants for one crop category.
CropCatalog      – Lookup table of categories.
DEFAULT_CATALOG  – Catalog built from the values in ``config.defaults``.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from garden_sim.config.defaults import (
    AXIS_COOL,
    AXIS_HEAT,
    AXIS_PERENNIAL,
    BASE_YIELD_MULTIPLIERS,
    CATEGORY_COOL_SEASON,
    CATEGORY_HEAT_SPECIALISTS,
    CATEGORY_PERENNIALS,
    MARKET_PRICES,
)

_VALID_AXES = (AXIS_HEAT, AXIS_COOL, AXIS_PERENNIAL)


@dataclass(frozen=True)
class CropCategory:
    """Catalog constants for one crop category.

    Attributes:
        name: Portfolio key, e.g. ``"heatSpecialists"``.
        yield_multiplier: Yield units per allocation percent per 100 sq ft.
        market_price: Value of one yield unit.
        severity_axis: Climate-severity axis scaling this category's harvest
            (``"heat"``, ``"cool"`` or ``"perennial"``).
    """

    name: str
    yield_multiplier: float
    market_price: float
    severity_axis: str

    def __post_init__(self) -> None:
        if self.severity_axis not in _VALID_AXES:
            raise ValueError(
                f"Crop category '{self.name}' has unknown severity axis "
                f"'{self.severity_axis}'. Expected one of {list(_VALID_AXES)}."
            )
        if self.yield_multiplier < 0.0 or self.market_price < 0.0:
            raise ValueError(
                f"Crop category '{self.name}' must have non-negative yield "
                f"multiplier and market price, got {self.yield_multiplier} "
                f"and {self.market_price}."
            )


@dataclass(frozen=True)
class CropCatalog:
    """Read-only mapping from category name to :class:`CropCategory`."""

    categories: dict[str, CropCategory] = field(default_factory=dict)

    def lookup(self, name: str) -> CropCategory | None:
        """Return the category called *name*, or None if it is not catalogued."""
        return self.categories.get(name)

    def names(self) -> list[str]:
        return list(self.categories)

    @classmethod
    def from_categories(cls, *categories: CropCategory) -> CropCatalog:
        return cls(categories={c.name: c for c in categories})


DEFAULT_CATALOG = CropCatalog.from_categories(
    CropCategory(
        name=CATEGORY_HEAT_SPECIALISTS,
        yield_multiplier=BASE_YIELD_MULTIPLIERS[CATEGORY_HEAT_SPECIALISTS],
        market_price=MARKET_PRICES["heat"],
        severity_axis=AXIS_HEAT,
    ),
    CropCategory(
        name=CATEGORY_COOL_SEASON,
        yield_multiplier=BASE_YIELD_MULTIPLIERS[CATEGORY_COOL_SEASON],
        market_price=MARKET_PRICES["cool"],
        severity_axis=AXIS_COOL,
    ),
    CropCategory(
        name=CATEGORY_PERENNIALS,
        yield_multiplier=BASE_YIELD_MULTIPLIERS[CATEGORY_PERENNIALS],
        market_price=MARKET_PRICES["herbs"],
        severity_axis=AXIS_PERENNIAL,
    ),
)
