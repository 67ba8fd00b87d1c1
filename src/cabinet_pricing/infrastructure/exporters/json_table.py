"""JSON price table exporter."""

from __future__ import annotations

import json
from typing import ClassVar

from cabinet_pricing.domain.services import PriceTable
from cabinet_pricing.infrastructure.exporters.base import BaseExporter, ExporterRegistry
from cabinet_pricing.infrastructure.formatters import price_table_to_dict


@ExporterRegistry.register("json")
class JsonPriceTableExporter(BaseExporter):
    format_name: ClassVar[str] = "json"
    file_extension: ClassVar[str] = "json"

    def __init__(self, indent: int | None = 2) -> None:
        self.indent = indent

    def export_string(self, table: PriceTable) -> str:
        return json.dumps(price_table_to_dict(table), indent=self.indent, ensure_ascii=False)
