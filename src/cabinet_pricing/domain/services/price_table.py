"""Price table generation.

Builds the finish x width-range matrix shown on the pricing pages by
calling the pricing engine once per cell. Each width range is priced at
its midpoint. Cells that cannot be priced are ``None`` so the page can
render a dash instead of a misleading $0.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from decimal import Decimal

from cabinet_pricing.domain.entities import (
    CabinetPart,
    CabinetType,
    CabinetTypeFinish,
    Catalog,
    Color,
    DoorStyle,
    Finish,
    HardwareOption,
    HardwareRequirement,
    PriceRange,
)
from cabinet_pricing.domain.errors import InputOutOfRangeError, InvalidPricingInputError
from cabinet_pricing.domain.value_objects import DiagnosticKind, PricingDiagnostic

from .pricing_engine import PricingEngine, PricingRequest
from .settings import PricingSettings, parse_global_settings

__all__ = [
    "PriceTable",
    "PriceTableColumn",
    "PriceTableGenerator",
    "PriceTableRow",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PriceTableColumn:
    """A priced door style/color/finish combination (one CabinetTypeFinish)."""

    id: str
    door_style_id: str
    label: str
    color_id: str | None = None
    finish_id: str | None = None


@dataclass(frozen=True)
class PriceTableRow:
    """A width bucket and the width it was priced at."""

    range_id: str
    label: str
    min_width_mm: Decimal
    max_width_mm: Decimal
    priced_width_mm: Decimal


@dataclass(frozen=True)
class PriceTable:
    """Generated price matrix for one cabinet type.

    ``prices[column_id][range_id]`` holds the unit price, or None when the
    combination could not be priced.
    """

    cabinet_type_id: str
    columns: tuple[PriceTableColumn, ...]
    rows: tuple[PriceTableRow, ...]
    prices: dict[str, dict[str, Decimal | None]] = field(default_factory=dict)
    diagnostics: tuple[PricingDiagnostic, ...] = ()

    def price(self, column_id: str, range_id: str) -> Decimal | None:
        return self.prices.get(column_id, {}).get(range_id)

    def by_door_style(self) -> dict[str, dict[str, Decimal | None]]:
        """View the table as ``price[door_style_id][range_id]``.

        When several columns share a door style (different colors), the
        first column in display order wins.
        """
        result: dict[str, dict[str, Decimal | None]] = {}
        for column in self.columns:
            if column.door_style_id not in result:
                result[column.door_style_id] = dict(self.prices[column.id])
        return result


@dataclass(frozen=True)
class _ResolvedColumn:
    column: PriceTableColumn
    door_style: DoorStyle | None
    color: Color | None
    finish: Finish | None
    depth_mm: Decimal | None
    problem: str | None


class PriceTableGenerator:
    """Generates price tables by repeatedly invoking the pricing engine.

    Deterministic and side-effect free: re-running with the same reference
    data yields an equal table, and no input is mutated.
    """

    def __init__(self, engine: PricingEngine | None = None) -> None:
        self.engine = engine or PricingEngine()

    def generate(
        self,
        cabinet_type: CabinetType,
        cabinet_type_finishes: Iterable[CabinetTypeFinish],
        price_ranges: Iterable[PriceRange],
        *,
        door_styles: Iterable[DoorStyle],
        colors: Iterable[Color] = (),
        finishes: Iterable[Finish] = (),
        cabinet_parts: Sequence[CabinetPart] = (),
        settings: PricingSettings | None = None,
        hardware_brand_id: str | None = None,
        hardware_requirements: Sequence[HardwareRequirement] = (),
        hardware_options: Sequence[HardwareOption] = (),
    ) -> PriceTable:
        """Generate the price table for a cabinet type.

        Finish and range rows belonging to other cabinet types, and inactive
        rows, are skipped. Columns follow ``sort_order`` of the finish rows;
        rows follow ``sort_order`` of the ranges.

        Args:
            cabinet_type: Cabinet being tabulated.
            cabinet_type_finishes: Allowed door style/color/finish rows.
            price_ranges: Width buckets.
            door_styles: Door styles available for lookup.
            colors: Colors available for lookup.
            finishes: Carcass finishes available for lookup.
            cabinet_parts: Parts (other cabinet types' parts are ignored).
            settings: Parsed global settings.
            hardware_brand_id: Brand to include hardware for, if any.
            hardware_requirements: Hardware requirements for lookup.
            hardware_options: Hardware options for lookup.

        Returns:
            PriceTable with one cell per (column, row) pair.
        """
        settings = settings or PricingSettings()
        styles_by_id = {s.id: s for s in door_styles}
        colors_by_id = {c.id: c for c in colors}
        finishes_by_id = {f.id: f for f in finishes}
        diagnostics: dict[PricingDiagnostic, None] = {}

        columns = [
            self._resolve_column(row, styles_by_id, colors_by_id, finishes_by_id)
            for row in sorted(
                (
                    f
                    for f in cabinet_type_finishes
                    if f.cabinet_type_id == cabinet_type.id and f.active
                ),
                key=lambda f: f.sort_order,
            )
        ]
        ranges = sorted(
            (
                r
                for r in price_ranges
                if r.cabinet_type_id == cabinet_type.id and r.active
            ),
            key=lambda r: (r.sort_order, r.min_width_mm),
        )
        rows = [
            PriceTableRow(
                range_id=r.id,
                label=r.label,
                min_width_mm=r.min_width_mm,
                max_width_mm=r.max_width_mm,
                priced_width_mm=r.midpoint_mm,
            )
            for r in ranges
        ]

        prices: dict[str, dict[str, Decimal | None]] = {}
        for resolved in columns:
            column_prices: dict[str, Decimal | None] = {}
            if resolved.problem is not None:
                diagnostics[
                    PricingDiagnostic(
                        kind=DiagnosticKind.MISSING_REFERENCE_DATA,
                        message=resolved.problem,
                        subject=resolved.column.id,
                    )
                ] = None
            for row in rows:
                if resolved.problem is not None:
                    column_prices[row.range_id] = None
                    continue
                if row.min_width_mm > row.max_width_mm:
                    diagnostics[
                        PricingDiagnostic(
                            kind=DiagnosticKind.MISSING_REFERENCE_DATA,
                            message="Price range minimum exceeds its maximum",
                            subject=row.range_id,
                        )
                    ] = None
                    column_prices[row.range_id] = None
                    continue

                request = PricingRequest(
                    cabinet_type=cabinet_type,
                    width=row.priced_width_mm,
                    height=cabinet_type.default_height_mm,
                    depth=resolved.depth_mm or cabinet_type.default_depth_mm,
                    cabinet_parts=cabinet_parts,
                    settings=settings,
                    door_style=resolved.door_style,
                    color=resolved.color,
                    finish=resolved.finish,
                    hardware_brand_id=hardware_brand_id,
                    hardware_requirements=hardware_requirements,
                    hardware_options=hardware_options,
                )
                try:
                    breakdown = self.engine.calculate_breakdown(request)
                except (InputOutOfRangeError, InvalidPricingInputError) as e:
                    diagnostics[
                        PricingDiagnostic(
                            kind=DiagnosticKind.MISSING_REFERENCE_DATA,
                            message=str(e),
                            subject=row.range_id,
                        )
                    ] = None
                    column_prices[row.range_id] = None
                    continue
                diagnostics.update(dict.fromkeys(breakdown.diagnostics))
                column_prices[row.range_id] = breakdown.total
            prices[resolved.column.id] = column_prices

        logger.debug(
            "Generated price table for %s: %d columns x %d rows",
            cabinet_type.id,
            len(columns),
            len(rows),
        )
        return PriceTable(
            cabinet_type_id=cabinet_type.id,
            columns=tuple(c.column for c in columns),
            rows=tuple(rows),
            prices=prices,
            diagnostics=tuple(diagnostics),
        )

    def generate_for_catalog(
        self,
        catalog: Catalog,
        cabinet_type_id: str,
        hardware_brand_id: str | None = None,
    ) -> PriceTable:
        """Generate a price table using all reference data in a catalog.

        Raises:
            KeyError: If the cabinet type does not exist in the catalog.
        """
        cabinet_type = catalog.cabinet_type(cabinet_type_id)
        if cabinet_type is None:
            raise KeyError(cabinet_type_id)
        return self.generate(
            cabinet_type,
            catalog.finishes_for(cabinet_type_id),
            catalog.price_ranges_for(cabinet_type_id),
            door_styles=catalog.door_styles,
            colors=catalog.colors,
            finishes=catalog.finishes,
            cabinet_parts=catalog.parts_for(cabinet_type_id),
            settings=parse_global_settings(catalog.global_settings),
            hardware_brand_id=hardware_brand_id,
            hardware_requirements=catalog.hardware_requirements_for(cabinet_type_id),
            hardware_options=catalog.hardware_options,
        )

    @staticmethod
    def _resolve_column(
        row: CabinetTypeFinish,
        styles_by_id: dict[str, DoorStyle],
        colors_by_id: dict[str, Color],
        finishes_by_id: dict[str, Finish],
    ) -> _ResolvedColumn:
        door_style = styles_by_id.get(row.door_style_id)
        color = colors_by_id.get(row.color_id) if row.color_id else None
        finish = finishes_by_id.get(row.finish_id) if row.finish_id else None

        problem = None
        if door_style is None:
            problem = f"Door style {row.door_style_id!r} not found"
        elif row.color_id and color is None:
            problem = f"Color {row.color_id!r} not found"
        elif color is not None and color.door_style_id != door_style.id:
            problem = f"Color {color.id!r} does not belong to door style {door_style.id!r}"
        elif row.finish_id and finish is None:
            problem = f"Finish {row.finish_id!r} not found"

        label = door_style.name if door_style else row.door_style_id
        if color is not None:
            label = f"{label} - {color.name}"
        if finish is not None:
            label = f"{label} ({finish.name})"

        return _ResolvedColumn(
            column=PriceTableColumn(
                id=row.id,
                door_style_id=row.door_style_id,
                label=label,
                color_id=row.color_id,
                finish_id=row.finish_id,
            ),
            door_style=door_style,
            color=color,
            finish=finish,
            depth_mm=row.depth_mm,
            problem=problem,
        )
