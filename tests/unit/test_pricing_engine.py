"""Unit tests for the cabinet pricing engine.

These tests verify:
- The door/carcass/hardware pricing formula
- Unit price is independent of the ordered quantity
- Larger widths, heights and depths never lower the price
- Only the final total is rounded (half-up, to cents), never the terms
- Missing reference data degrades to a partial price with diagnostics
- Invalid and out-of-range input raises
"""

from dataclasses import replace
from decimal import Decimal

import pytest

from cabinet_pricing.application import CartLineItem
from cabinet_pricing.domain import (
    CabinetPart,
    DiagnosticKind,
    HardwareOption,
    HardwareProduct,
    HardwareRequirement,
    InputOutOfRangeError,
    InvalidPricingInputError,
    PricingEngine,
    PricingRequest,
    PricingSettings,
    UnitScope,
)
from cabinet_pricing.domain.value_objects import round_money


@pytest.fixture
def engine() -> PricingEngine:
    return PricingEngine()


@pytest.fixture
def door_request(base_cabinet, door_part, shaker, white) -> PricingRequest:
    """600 x 720 x 560 with two full-size Shaker White doors."""
    return PricingRequest(
        cabinet_type=base_cabinet,
        width=600,
        height=720,
        depth=560,
        cabinet_parts=[door_part],
        door_style=shaker,
        color=white,
    )


def _with(request: PricingRequest, **changes) -> PricingRequest:
    return replace(request, **changes)


class TestPricingFormula:
    """Tests for the price composition."""

    def test_door_area_priced_at_style_plus_color(self, engine, door_request) -> None:
        """0.864 m2 of doors at $150 + $20 surcharge is $146.88."""
        breakdown = engine.calculate_breakdown(door_request)

        assert breakdown.door_area_m2 == Decimal("0.864")
        assert breakdown.door_rate == Decimal(170)
        assert breakdown.total == Decimal("146.88")
        assert breakdown.diagnostics == ()

    def test_calculate_price_matches_breakdown_total(self, engine, door_request) -> None:
        assert engine.calculate_price(door_request) == Decimal("146.88")

    def test_carcass_priced_at_finish_rate(self, engine, door_request, side_part, hmr_finish) -> None:
        """Sides: 560 x 720 x 2 = 0.8064 m2 at $50."""
        request = _with(
            door_request,
            cabinet_parts=[door_request.cabinet_parts[0], side_part],
            finish=hmr_finish,
        )
        breakdown = engine.calculate_breakdown(request)

        assert breakdown.carcass_area_m2 == Decimal("0.8064")
        assert breakdown.carcass_area_price == Decimal("40.32")
        assert breakdown.total == Decimal("187.20")

    def test_carcass_falls_back_to_settings_rate(self, engine, door_request, side_part) -> None:
        request = _with(
            door_request,
            cabinet_parts=[side_part],
            settings=PricingSettings(carcass_rate_per_sqm=Decimal(40)),
        )
        breakdown = engine.calculate_breakdown(request)

        assert breakdown.carcass_rate == Decimal(40)
        assert breakdown.total == Decimal("32.26")

    def test_carcass_without_any_rate_is_unpriced(self, engine, door_request, side_part) -> None:
        request = _with(door_request, cabinet_parts=[side_part])
        breakdown = engine.calculate_breakdown(request)

        assert breakdown.total == Decimal("0.00")
        assert [d.kind for d in breakdown.diagnostics] == [
            DiagnosticKind.MISSING_REFERENCE_DATA
        ]

    def test_material_multiplier(self, engine, door_request) -> None:
        """10% wastage: 146.88 x 1.1 = 161.568."""
        request = _with(door_request, settings=PricingSettings(wastage_factor=Decimal("0.1")))
        assert engine.calculate_price(request) == Decimal("161.57")

    def test_hardware_added_after_material(self, engine, door_request) -> None:
        product = HardwareProduct(
            id="hinge", name="Hinge", hardware_brand_id="blum", cost_per_unit=Decimal("8.50")
        )
        request = _with(
            door_request,
            settings=PricingSettings(wastage_factor=Decimal("0.1")),
            hardware_brand_id="blum",
            hardware_requirements=[
                HardwareRequirement(
                    id="hinges", cabinet_type_id="base", quantity=2,
                    unit_scope=UnitScope.PER_DOOR,
                )
            ],
            hardware_options=[
                HardwareOption(
                    id="o1", requirement_id="hinges", hardware_brand_id="blum",
                    hardware_product_id="hinge", product=product,
                )
            ],
        )
        breakdown = engine.calculate_breakdown(request)

        assert breakdown.hardware_cost == Decimal("34.00")
        assert breakdown.total == Decimal("195.57")

    def test_hardware_and_foreign_parts_have_no_area(self, engine, door_request) -> None:
        hinge = CabinetPart(
            id="hinge", cabinet_type_id="base", part_name="Hinge", quantity=4, is_hardware=True
        )
        foreign = CabinetPart(
            id="wall-door", cabinet_type_id="wall", part_name="Door",
            width_formula="width", height_formula="height", is_door=True,
        )
        request = _with(
            door_request, cabinet_parts=[*door_request.cabinet_parts, hinge, foreign]
        )
        breakdown = engine.calculate_breakdown(request)

        assert [p.part_id for p in breakdown.part_areas] == ["door"]
        assert breakdown.total == Decimal("146.88")

    def test_formula_variables_use_part_quantity(self, engine, door_request) -> None:
        """`quantity` in a formula binds to the part's quantity, not the order."""
        part = CabinetPart(
            id="strip", cabinet_type_id="base", part_name="Strip", quantity=2,
            width_formula="width / quantity", height_formula="100", is_door=True,
        )
        single = _with(door_request, cabinet_parts=[part])
        triple = _with(single, quantity=3)

        assert engine.calculate_price(single) == engine.calculate_price(triple)


class TestPricingProperties:
    """Properties that hold for every request."""

    @pytest.mark.parametrize("quantity", [1, 2, 3, 10])
    def test_quantity_independence(self, engine, door_request, quantity) -> None:
        request = _with(door_request, quantity=quantity)
        assert engine.calculate_price(request) == Decimal("146.88")

    def test_line_item_for_three_cabinets(self, engine, door_request) -> None:
        unit_price = engine.calculate_price(_with(door_request, quantity=3))
        item = CartLineItem.priced("base", "Base Cabinet", unit_price, 3)

        assert item.unit_price == Decimal("146.88")
        assert item.total_price == Decimal("440.64")

    @pytest.mark.parametrize("smaller,larger", [(300, 301), (450, 600), (600, 1200)])
    def test_monotonic_in_width(self, engine, door_request, smaller, larger) -> None:
        assert engine.calculate_price(_with(door_request, width=smaller)) <= engine.calculate_price(
            _with(door_request, width=larger)
        )

    @pytest.mark.parametrize("smaller,larger", [(600, 601), (720, 900), (900, 2100)])
    def test_monotonic_in_height(
        self, engine, door_request, side_part, hmr_finish, smaller, larger
    ) -> None:
        request = _with(
            door_request,
            cabinet_parts=[door_request.cabinet_parts[0], side_part],
            finish=hmr_finish,
        )
        assert engine.calculate_price(_with(request, height=smaller)) <= engine.calculate_price(
            _with(request, height=larger)
        )

    @pytest.mark.parametrize("smaller,larger", [(300, 301), (560, 600), (600, 900)])
    def test_monotonic_in_depth(
        self, engine, door_request, side_part, hmr_finish, smaller, larger
    ) -> None:
        """Sides are depth x height, so deeper cabinets cost more carcass."""
        request = _with(
            door_request,
            cabinet_parts=[door_request.cabinet_parts[0], side_part],
            finish=hmr_finish,
        )
        shallow = engine.calculate_price(_with(request, depth=smaller))
        deep = engine.calculate_price(_with(request, depth=larger))
        assert shallow < deep

    def test_idempotent(self, engine, door_request) -> None:
        first = engine.calculate_breakdown(door_request)
        second = engine.calculate_breakdown(door_request)
        assert first == second

    def test_rounds_only_the_total(self, engine, door_request) -> None:
        """333 x 720 x 2 = 0.47952 m2 x 170 = 81.5184."""
        breakdown = engine.calculate_breakdown(_with(door_request, width=333))

        assert breakdown.door_area_price == Decimal("81.5184")
        assert breakdown.total == round_money(breakdown.door_area_price) == Decimal("81.52")

    def test_sum_rounded_once_not_per_term(self, engine, door_request) -> None:
        """Doors 0.5 m2 x 170.01 = 85.005, carcass 0.5 m2 x 50.01 = 25.005.

        Rounding each term first would give 85.01 + 25.01 = 110.02.
        """
        door = CabinetPart(
            id="door-panel", cabinet_type_id="base", part_name="Door",
            width_formula="1000", height_formula="500", is_door=True,
        )
        back = CabinetPart(
            id="back-panel", cabinet_type_id="base", part_name="Back",
            width_formula="1000", height_formula="500",
        )
        request = _with(
            door_request,
            cabinet_parts=[door, back],
            color=_with_surcharge(door_request.color, "20.01"),
            settings=PricingSettings(carcass_rate_per_sqm=Decimal("50.01")),
        )
        breakdown = engine.calculate_breakdown(request)

        assert breakdown.door_area_price == Decimal("85.005")
        assert breakdown.carcass_area_price == Decimal("25.005")
        assert round_money(breakdown.door_area_price) + round_money(
            breakdown.carcass_area_price
        ) == Decimal("110.02")
        assert breakdown.total == Decimal("110.01")

    def test_rounds_half_up(self, engine, door_request) -> None:
        """0.5 m2 x 170.01 = 85.005 rounds up to 85.01."""
        part = CabinetPart(
            id="panel", cabinet_type_id="base", part_name="Panel",
            width_formula="1000", height_formula="500", is_door=True,
        )
        request = _with(
            door_request,
            cabinet_parts=[part],
            color=_with_surcharge(door_request.color, "20.01"),
        )
        assert engine.calculate_price(request) == Decimal("85.01")

    def test_float_dimensions_match_decimal(self, engine, door_request) -> None:
        as_float = engine.calculate_price(_with(door_request, width=600.5))
        as_decimal = engine.calculate_price(_with(door_request, width=Decimal("600.5")))
        assert as_float == as_decimal


def _with_surcharge(color, surcharge: str):
    return replace(color, surcharge_rate_per_sqm=Decimal(surcharge))


class TestMissingReferenceData:
    """Missing optional rows degrade to partial prices."""

    def test_missing_color_uses_base_rate(self, engine, door_request) -> None:
        """0.864 m2 x $150 = $129.60."""
        breakdown = engine.calculate_breakdown(_with(door_request, color=None))
        assert breakdown.door_rate == Decimal(150)
        assert breakdown.total == Decimal("129.60")

    def test_missing_door_style_prices_doors_at_zero(self, engine, door_request) -> None:
        breakdown = engine.calculate_breakdown(_with(door_request, door_style=None, color=None))

        assert breakdown.door_area_price == 0
        assert breakdown.total == Decimal("0.00")
        assert breakdown.diagnostics[0].kind == DiagnosticKind.MISSING_REFERENCE_DATA

    def test_bad_formula_reports_diagnostic(self, engine, door_request) -> None:
        broken = CabinetPart(
            id="broken", cabinet_type_id="base", part_name="Broken",
            width_formula="width **", height_formula="height", is_door=True,
        )
        request = _with(door_request, cabinet_parts=[*door_request.cabinet_parts, broken])
        breakdown = engine.calculate_breakdown(request)

        assert breakdown.total == Decimal("146.88")
        assert breakdown.diagnostics[0].kind == DiagnosticKind.FORMULA_EVALUATION
        assert breakdown.diagnostics[0].subject == "broken"

    def test_negative_part_dimension_reports_diagnostic(self, engine, door_request) -> None:
        shrinking = CabinetPart(
            id="shrinking", cabinet_type_id="base", part_name="Filler",
            width_formula="width - 1000", height_formula="height", is_door=True,
        )
        breakdown = engine.calculate_breakdown(_with(door_request, cabinet_parts=[shrinking]))

        assert breakdown.total == Decimal("0.00")
        assert breakdown.diagnostics[0].kind == DiagnosticKind.FORMULA_EVALUATION

    def test_diagnostics_are_logged(self, engine, door_request, caplog) -> None:
        engine.calculate_breakdown(_with(door_request, door_style=None, color=None))
        assert "No door style selected" in caplog.text


class TestInvalidInput:
    """Tests for rejected requests."""

    @pytest.mark.parametrize("width", [0, -600, float("nan"), float("inf"), "abc", None, True])
    def test_invalid_width(self, engine, door_request, width) -> None:
        with pytest.raises(InvalidPricingInputError) as exc_info:
            engine.calculate_price(_with(door_request, width=width))
        assert exc_info.value.field == "width"

    @pytest.mark.parametrize("quantity", [0, -1, 1.5, True, "2"])
    def test_invalid_quantity(self, engine, door_request, quantity) -> None:
        with pytest.raises(InvalidPricingInputError) as exc_info:
            engine.calculate_price(_with(door_request, quantity=quantity))
        assert exc_info.value.field == "quantity"

    def test_width_above_maximum(self, engine, door_request) -> None:
        with pytest.raises(InputOutOfRangeError) as exc_info:
            engine.calculate_price(_with(door_request, width=1500))

        error = exc_info.value
        assert error.dimension == "width"
        assert error.minimum == 300
        assert error.maximum == 1200
        assert str(error) == "Width 1500mm is outside the allowed range 300-1200mm"

    def test_width_below_minimum(self, engine, door_request) -> None:
        with pytest.raises(InputOutOfRangeError):
            engine.calculate_price(_with(door_request, width=299))

    def test_bounds_are_inclusive(self, engine, door_request) -> None:
        assert engine.calculate_price(_with(door_request, width=300)) > 0
        assert engine.calculate_price(_with(door_request, width=1200)) > 0
