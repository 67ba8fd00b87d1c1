"""Domain services for cabinet pricing."""

from .formula import FORMULA_VARIABLES, evaluate_formula, parse_formula
from .hardware import NO_BRAND, HardwareCost, HardwareCostCalculator, HardwareLine
from .price_table import (
    PriceTable,
    PriceTableColumn,
    PriceTableGenerator,
    PriceTableRow,
)
from .pricing_engine import PartArea, PriceBreakdown, PricingEngine, PricingRequest
from .settings import PricingSettings, parse_global_settings

__all__ = [
    "FORMULA_VARIABLES",
    "HardwareCost",
    "HardwareCostCalculator",
    "HardwareLine",
    "NO_BRAND",
    "PartArea",
    "PriceBreakdown",
    "PriceTable",
    "PriceTableColumn",
    "PriceTableGenerator",
    "PriceTableRow",
    "PricingEngine",
    "PricingRequest",
    "PricingSettings",
    "evaluate_formula",
    "parse_formula",
    "parse_global_settings",
]
