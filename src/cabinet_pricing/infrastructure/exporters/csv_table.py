"""CSV price table exporter."""

from __future__ import annotations

import csv
import io
from typing import ClassVar

from cabinet_pricing.domain.services import PriceTable
from cabinet_pricing.infrastructure.exporters.base import BaseExporter, ExporterRegistry


@ExporterRegistry.register("csv")
class CsvPriceTableExporter(BaseExporter):
    """One row per width range, one column per finish combination.

    Prices are plain decimals with two places; cells that could not be
    priced are left empty.
    """

    format_name: ClassVar[str] = "csv"
    file_extension: ClassVar[str] = "csv"

    def export_string(self, table: PriceTable) -> str:
        buffer = io.StringIO()
        writer = csv.writer(buffer)
        writer.writerow(
            ["range_id", "width_range", "priced_width_mm"]
            + [column.label for column in table.columns]
        )
        for row in table.rows:
            cells = []
            for column in table.columns:
                price = table.price(column.id, row.range_id)
                cells.append("" if price is None else f"{price:.2f}")
            writer.writerow(
                [row.range_id, row.label, f"{row.priced_width_mm.normalize():f}"] + cells
            )
        return buffer.getvalue()
