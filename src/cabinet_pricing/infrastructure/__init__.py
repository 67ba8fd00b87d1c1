"""Infrastructure layer - formatters and exporters."""

from cabinet_pricing.infrastructure.exporters import ExporterRegistry, ExportManager
from cabinet_pricing.infrastructure.formatters import (
    MISSING_CELL,
    PriceBreakdownFormatter,
    PriceTableFormatter,
    breakdown_to_dict,
    format_aud,
    preview_to_dict,
    price_table_to_dict,
)

__all__ = [
    "MISSING_CELL",
    "ExportManager",
    "ExporterRegistry",
    "PriceBreakdownFormatter",
    "PriceTableFormatter",
    "breakdown_to_dict",
    "format_aud",
    "preview_to_dict",
    "price_table_to_dict",
]
