"""Domain layer - catalog entities and the pricing engine."""

from .entities import (
    CabinetPart,
    CabinetType,
    CabinetTypeFinish,
    Catalog,
    Color,
    DoorStyle,
    Finish,
    GlobalSetting,
    HardwareBrand,
    HardwareOption,
    HardwareProduct,
    HardwareRequirement,
    PriceRange,
)
from .errors import (
    FormulaError,
    InputOutOfRangeError,
    InvalidPricingInputError,
    PricingError,
)
from .services import (
    PriceBreakdown,
    PriceTable,
    PriceTableGenerator,
    PricingEngine,
    PricingRequest,
    PricingSettings,
    parse_global_settings,
)
from .value_objects import DiagnosticKind, PricingDiagnostic, UnitScope

__all__ = [
    "CabinetPart",
    "CabinetType",
    "CabinetTypeFinish",
    "Catalog",
    "Color",
    "DiagnosticKind",
    "DoorStyle",
    "Finish",
    "FormulaError",
    "GlobalSetting",
    "HardwareBrand",
    "HardwareOption",
    "HardwareProduct",
    "HardwareRequirement",
    "InputOutOfRangeError",
    "InvalidPricingInputError",
    "PriceBreakdown",
    "PriceRange",
    "PriceTable",
    "PriceTableGenerator",
    "PricingDiagnostic",
    "PricingEngine",
    "PricingError",
    "PricingRequest",
    "PricingSettings",
    "UnitScope",
    "parse_global_settings",
]
