"""Unit tests for catalog entities."""

from dataclasses import FrozenInstanceError
from decimal import Decimal

import pytest

from cabinet_pricing.domain import (
    CabinetType,
    Color,
    HardwareRequirement,
    PriceRange,
    UnitScope,
)


class TestCabinetType:
    """Tests for CabinetType."""

    def test_numbers_coerced_to_decimal(self) -> None:
        cabinet = CabinetType("base", "Base", 600, 720.5, "560", min_width_mm=300)

        assert cabinet.default_width_mm == Decimal("600")
        assert cabinet.default_height_mm == Decimal("720.5")
        assert cabinet.default_depth_mm == Decimal("560")
        assert cabinet.min_width_mm == Decimal("300")
        assert cabinet.max_width_mm is None

    def test_bounds_and_defaults(self, base_cabinet) -> None:
        assert base_cabinet.bounds("width") == (Decimal(300), Decimal(1200))
        assert base_cabinet.bounds("height") == (None, None)
        assert base_cabinet.default("depth") == Decimal(560)

    def test_immutable(self, base_cabinet) -> None:
        with pytest.raises(FrozenInstanceError):
            base_cabinet.name = "Other"


class TestHardwareRequirement:
    """Tests for unit scaling by scope."""

    @pytest.mark.parametrize(
        "scope, expected",
        [
            (UnitScope.PER_CABINET, 2),
            (UnitScope.PER_DOOR, 4),
            (UnitScope.PER_DRAWER, 6),
        ],
    )
    def test_units_for(self, scope, expected) -> None:
        cabinet = CabinetType("c", "C", 600, 720, 560, door_count=2, drawer_count=3)
        requirement = HardwareRequirement("r", "c", quantity=2, unit_scope=scope)
        assert requirement.units_for(cabinet) == expected

    def test_per_drawer_without_drawers(self, base_cabinet) -> None:
        requirement = HardwareRequirement("r", "base", quantity=2, unit_scope=UnitScope.PER_DRAWER)
        assert requirement.units_for(base_cabinet) == 0


def test_price_range_midpoint() -> None:
    price_range = PriceRange("r", "base", "400-449mm", 400, 449)
    assert price_range.midpoint_mm == Decimal("424.5")


def test_color_default_surcharge() -> None:
    assert Color("c", "ds", "White").surcharge_rate_per_sqm == 0


class TestCatalog:
    """Tests for Catalog lookups."""

    def test_lookup_by_id(self, catalog) -> None:
        assert catalog.door_style("ds-flat").name == "Flat Panel"
        assert catalog.finish("f-hmr").rate_per_sqm == Decimal(50)
        assert catalog.hardware_brand("hb-hettich").name == "Hettich"
        assert catalog.hardware_product("hp-blum-runner").cost_per_unit == Decimal(25)

    def test_lookup_none_or_missing(self, catalog) -> None:
        assert catalog.color(None) is None
        assert catalog.color("c-purple") is None

    def test_hardware_requirements_for(self, catalog) -> None:
        assert [r.id for r in catalog.hardware_requirements_for("drawer-3")] == ["hr-runner"]
