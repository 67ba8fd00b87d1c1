"""Unit tests for text and dict formatters."""

import json
from decimal import Decimal

import pytest

from cabinet_pricing.application import ConfigurationRequest, ConfiguratorPreview, PricePreview
from cabinet_pricing.domain import PriceTableGenerator
from cabinet_pricing.domain.services import PriceTable
from cabinet_pricing.infrastructure import (
    MISSING_CELL,
    PriceBreakdownFormatter,
    PriceTableFormatter,
    format_aud,
    preview_to_dict,
    price_table_to_dict,
)


@pytest.fixture
def preview(catalog):
    return ConfiguratorPreview(catalog).preview(
        ConfigurationRequest(
            cabinet_type_id="base-2door",
            door_style_id="ds-shaker",
            color_id="c-white",
            finish_id="f-hmr",
            hardware_brand_id="hb-blum",
            quantity=2,
        )
    )


@pytest.fixture
def price_table(catalog) -> PriceTable:
    return PriceTableGenerator().generate_for_catalog(catalog, "base-2door")


@pytest.mark.parametrize(
    "amount, expected",
    [
        (Decimal("1234.5"), "$1,234.50"),
        (Decimal("0.005"), "$0.01"),
        (Decimal("0"), "$0.00"),
        (Decimal("-5"), "-$5.00"),
        (None, MISSING_CELL),
    ],
)
def test_format_aud(amount, expected) -> None:
    assert format_aud(amount) == expected


class TestPriceBreakdownFormatter:
    """Tests for the text price report."""

    def test_report(self, preview) -> None:
        text = PriceBreakdownFormatter().format(preview)

        assert text.startswith("PRICE: 2 Door Base")
        assert "Dimensions: 600 x 720 x 560 mm" in text
        assert "Doors:    0.4320 m2 @ $170.00 = $73.44" in text
        assert "Hardware: 4 x Blum Clip Top Hinge @ $8.50 = $34.00" in text
        assert "Unit price (ex GST): $163.55" in text
        assert "Total for 2: $327.10" in text
        assert "Warnings:" not in text

    def test_hardware_parts_not_listed(self, preview) -> None:
        text = PriceBreakdownFormatter().format(preview)
        assert "Bottom" in text
        assert "Hinge " not in text.split("Doors:")[0]

    def test_errors(self, catalog) -> None:
        rejected = ConfiguratorPreview(catalog).preview(
            ConfigurationRequest(cabinet_type_id="base-2door", width=5000)
        )
        text = PriceBreakdownFormatter().format(rejected)

        assert "Cannot price this configuration:" in text
        assert "Width 5000mm is outside the allowed range 300-1200mm" in text
        assert "Unit price" not in text

    def test_warnings(self, catalog) -> None:
        preview = ConfiguratorPreview(catalog).preview(
            ConfigurationRequest(cabinet_type_id="base-2door")
        )
        text = PriceBreakdownFormatter().format(preview)
        assert "Warnings:" in text
        assert "No door style selected" in text

    def test_preview_without_breakdown_rejected(self) -> None:
        preview = PricePreview(request=ConfigurationRequest(cabinet_type_id="base-2door"))
        with pytest.raises(ValueError, match="neither errors nor a price breakdown"):
            PriceBreakdownFormatter().format(preview)


class TestPriceTableFormatter:
    """Tests for the fixed-width price grid."""

    def test_grid(self, price_table) -> None:
        lines = PriceTableFormatter().format(price_table).splitlines()

        assert lines[0] == "PRICE TABLE: base-2door"
        assert lines[2].startswith("Width")
        assert lines[-1].startswith("600-900mm")
        assert "$152.11" in lines[-1]
        assert "$119.71" in lines[-1]

    def test_long_labels_truncated(self, price_table) -> None:
        header = PriceTableFormatter(cell_width=8).format(price_table).splitlines()[2]
        assert "Shaker …" in header

    def test_missing_cells(self, price_table) -> None:
        price_table.prices["ctf-flat-black"]["r-600"] = None
        assert MISSING_CELL in PriceTableFormatter().format(price_table)

    def test_empty_table(self) -> None:
        table = PriceTable(cabinet_type_id="drawer-3", columns=(), rows=())
        assert PriceTableFormatter().format(table) == "No price table for drawer-3."


class TestDictFormatters:
    """Tests for JSON-ready dict views."""

    def test_preview_to_dict(self, preview) -> None:
        data = preview_to_dict(preview)

        assert data["unit_price"] == 163.55
        assert data["total_price"] == 327.10
        assert data["dimensions"] == {"width": 600.0, "height": 720.0, "depth": 560.0}
        assert [p["part_id"] for p in data["breakdown"]["parts"]] == [
            "p-door",
            "p-side",
            "p-bottom",
        ]
        assert data["breakdown"]["hardware_lines"][0]["units"] == 4
        json.dumps(data)

    def test_rejected_preview_to_dict(self, catalog) -> None:
        rejected = ConfiguratorPreview(catalog).preview(
            ConfigurationRequest(cabinet_type_id="nope")
        )
        data = preview_to_dict(rejected)

        assert data["unit_price"] is None
        assert data["breakdown"] is None
        assert data["errors"] == ["Unknown cabinet type 'nope'"]

    def test_price_table_to_dict(self, price_table) -> None:
        data = price_table_to_dict(price_table)

        assert data["prices"]["ctf-shaker-white"]["r-600"] == 152.11
        assert data["rows"][0]["priced_width_mm"] == 374.5
        assert data["columns"][1]["door_style_id"] == "ds-flat"
        json.dumps(data)
