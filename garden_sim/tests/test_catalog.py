"""Tests for garden_sim.catalog.crops."""

from __future__ import annotations

import pytest

from garden_sim.catalog.crops import DEFAULT_CATALOG, CropCatalog, CropCategory


class TestDefaultCatalog:
    def test_known_categories(self):
        assert DEFAULT_CATALOG.names() == ["heatSpecialists", "coolSeason", "perennials"]

    @pytest.mark.parametrize(
        ("name", "multiplier", "price", "axis"),
        [
            ("heatSpecialists", 4.0, 1.2, "heat"),
            ("coolSeason", 3.0, 0.8, "cool"),
            ("perennials", 6.0, 2.5, "perennial"),
        ],
    )
    def test_category_constants(self, name, multiplier, price, axis):
        crop = DEFAULT_CATALOG.lookup(name)
        assert crop == CropCategory(name, multiplier, price, axis)

    def test_unknown_lookup_returns_none(self):
        assert DEFAULT_CATALOG.lookup("orchids") is None


class TestCropCategory:
    def test_unknown_axis_raises(self):
        with pytest.raises(ValueError, match="unknown severity axis"):
            CropCategory("rice", 1.0, 1.0, "monsoon")

    def test_negative_price_raises(self):
        with pytest.raises(ValueError, match="non-negative"):
            CropCategory("rice", 1.0, -1.0, "heat")

    def test_from_categories(self):
        catalog = CropCatalog.from_categories(CropCategory("rice", 2.0, 1.0, "heat"))
        assert catalog.names() == ["rice"]
        assert catalog.lookup("rice").yield_multiplier == 2.0
