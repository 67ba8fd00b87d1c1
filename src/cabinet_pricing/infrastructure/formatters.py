"""Output formatters for prices, breakdowns and price tables."""

from __future__ import annotations

from decimal import Decimal
from typing import Any

from cabinet_pricing.application.configurator import PricePreview
from cabinet_pricing.domain.services import PriceBreakdown, PriceTable
from cabinet_pricing.domain.value_objects import round_money

# Shown in price table cells that could not be priced
MISSING_CELL = "—"


def format_aud(amount: Decimal | None) -> str:
    """Format an amount as Australian dollars, e.g. "$1,234.56".

    None renders as the missing-cell dash.
    """
    if amount is None:
        return MISSING_CELL
    rounded = round_money(amount)
    sign = "-" if rounded < 0 else ""
    return f"{sign}${abs(rounded):,.2f}"


def _money(amount: Decimal | None) -> float | None:
    return None if amount is None else float(round_money(amount))


def breakdown_to_dict(breakdown: PriceBreakdown) -> dict[str, Any]:
    """JSON-ready breakdown including part areas and hardware lines."""
    data = breakdown.to_dict()
    data["parts"] = [
        {
            "part_id": p.part_id,
            "part_name": p.part_name,
            "is_door": p.is_door,
            "quantity": p.quantity,
            "width_mm": float(p.width_mm),
            "height_mm": float(p.height_mm),
            "area_m2": float(p.area_m2),
        }
        for p in breakdown.part_areas
    ]
    data["hardware_lines"] = [
        {
            "requirement_id": line.requirement_id,
            "hardware_type": line.hardware_type,
            "product_name": line.product_name,
            "units": line.units,
            "cost_per_unit": float(line.cost_per_unit),
            "cost": float(round_money(line.cost)),
        }
        for line in breakdown.hardware.lines
    ]
    return data


def preview_to_dict(preview: PricePreview) -> dict[str, Any]:
    """JSON-ready view of a configurator preview."""
    return {
        "cabinet_type_id": preview.request.cabinet_type_id,
        "quantity": preview.request.quantity,
        "dimensions": (
            None
            if preview.dimensions is None
            else dict(zip(("width", "height", "depth"), map(float, preview.dimensions)))
        ),
        "unit_price": _money(preview.unit_price),
        "total_price": _money(preview.total_price),
        "can_add_to_cart": preview.can_add_to_cart,
        "errors": list(preview.errors),
        "diagnostics": [
            {"kind": d.kind.value, "message": d.message, "subject": d.subject}
            for d in preview.diagnostics
        ],
        "breakdown": None if preview.breakdown is None else breakdown_to_dict(preview.breakdown),
    }


def price_table_to_dict(table: PriceTable) -> dict[str, Any]:
    """JSON-ready view of a price table. Missing cells are null."""
    return {
        "cabinet_type_id": table.cabinet_type_id,
        "columns": [
            {
                "id": c.id,
                "label": c.label,
                "door_style_id": c.door_style_id,
                "color_id": c.color_id,
                "finish_id": c.finish_id,
            }
            for c in table.columns
        ],
        "rows": [
            {
                "range_id": r.range_id,
                "label": r.label,
                "min_width_mm": float(r.min_width_mm),
                "max_width_mm": float(r.max_width_mm),
                "priced_width_mm": float(r.priced_width_mm),
            }
            for r in table.rows
        ],
        "prices": {
            column_id: {range_id: _money(price) for range_id, price in cells.items()}
            for column_id, cells in table.prices.items()
        },
        "diagnostics": [str(d) for d in table.diagnostics],
    }


class PriceBreakdownFormatter:
    """Formats a configurator preview as a text report."""

    def format(self, preview: PricePreview) -> str:
        lines = [
            f"PRICE: {preview.cabinet_name or preview.request.cabinet_type_id}",
            "=" * 60,
        ]
        if preview.errors:
            lines.append("Cannot price this configuration:")
            lines.extend(f"  - {error}" for error in preview.errors)
            return "\n".join(lines)

        breakdown = preview.breakdown
        if breakdown is None:
            raise ValueError("Preview has neither errors nor a price breakdown")
        width, height, depth = preview.dimensions or (0, 0, 0)
        lines.append(f"Dimensions: {width} x {height} x {depth} mm")
        lines.append("")
        lines.append(f"{'Part':<24} {'Qty':>4} {'W (mm)':>9} {'H (mm)':>9} {'Area m2':>9}")
        lines.append("-" * 60)
        for part in breakdown.part_areas:
            lines.append(
                f"{part.part_name:<24} {part.quantity:>4} {part.width_mm:>9.1f} "
                f"{part.height_mm:>9.1f} {part.area_m2:>9.4f}"
            )
        lines.append("-" * 60)
        lines.append(
            f"Doors:    {breakdown.door_area_m2:.4f} m2 @ {format_aud(breakdown.door_rate)}"
            f" = {format_aud(breakdown.door_area_price)}"
        )
        lines.append(
            f"Carcass:  {breakdown.carcass_area_m2:.4f} m2 @ "
            f"{format_aud(breakdown.carcass_rate)} = {format_aud(breakdown.carcass_area_price)}"
        )
        if breakdown.material_multiplier != 1:
            lines.append(f"Material multiplier: x{breakdown.material_multiplier}")
        for line in breakdown.hardware.lines:
            lines.append(
                f"Hardware: {line.units} x {line.product_name} @ "
                f"{format_aud(line.cost_per_unit)} = {format_aud(line.cost)}"
            )
        if breakdown.hardware.lines and breakdown.hardware.multiplier != 1:
            lines.append(f"Hardware multiplier: x{breakdown.hardware.multiplier}")
        lines.append("-" * 60)
        lines.append(f"Unit price (ex GST): {format_aud(preview.unit_price)}")
        if preview.request.quantity != 1:
            lines.append(
                f"Total for {preview.request.quantity}: {format_aud(preview.total_price)}"
            )
        if preview.diagnostics:
            lines.append("")
            lines.append("Warnings:")
            lines.extend(f"  - {d}" for d in preview.diagnostics)
        return "\n".join(lines)


class PriceTableFormatter:
    """Formats a price table as a fixed-width text grid."""

    def __init__(self, label_width: int = 14, cell_width: int = 12) -> None:
        self._label_width = label_width
        self._cell_width = cell_width

    def format(self, table: PriceTable) -> str:
        if not table.columns or not table.rows:
            return f"No price table for {table.cabinet_type_id}."

        header = f"{'Width':<{self._label_width}}" + "".join(
            f"{_truncate(c.label, self._cell_width):>{self._cell_width + 1}}"
            for c in table.columns
        )
        lines = [f"PRICE TABLE: {table.cabinet_type_id}", "=" * len(header), header]
        lines.append("-" * len(header))
        for row in table.rows:
            cells = "".join(
                f"{format_aud(table.price(c.id, row.range_id)):>{self._cell_width + 1}}"
                for c in table.columns
            )
            lines.append(f"{row.label:<{self._label_width}}{cells}")
        return "\n".join(lines)


def _truncate(text: str, width: int) -> str:
    return text if len(text) <= width else text[: width - 1] + "…"
