"""Price table exporters.

Registered exporters:
- csv: One row per width range, one column per finish combination
- json: Columns, rows, prices and diagnostics

Usage:
    from cabinet_pricing.infrastructure.exporters import ExportManager, ExporterRegistry

    exporter = ExporterRegistry.get("csv")()
    text = exporter.export_string(table)

    manager = ExportManager(output_dir=Path("./prices"))
    manager.export_all(["csv", "json"], table)
"""

from cabinet_pricing.infrastructure.exporters.base import (
    BaseExporter,
    Exporter,
    ExporterRegistry,
    ExportManager,
)

# Import exporters to trigger registration
from cabinet_pricing.infrastructure.exporters.csv_table import CsvPriceTableExporter
from cabinet_pricing.infrastructure.exporters.json_table import JsonPriceTableExporter

__all__ = [
    "BaseExporter",
    "CsvPriceTableExporter",
    "Exporter",
    "ExportManager",
    "ExporterRegistry",
    "JsonPriceTableExporter",
]
