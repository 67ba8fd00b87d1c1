"""Pricing settings parsed from global_settings key/value rows."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from decimal import Decimal

from cabinet_pricing.domain.entities import GlobalSetting
from cabinet_pricing.domain.value_objects import to_decimal

__all__ = ["PricingSettings", "parse_global_settings"]

logger = logging.getLogger(__name__)

# setting_key -> PricingSettings field
SETTING_KEYS: dict[str, str] = {
    "hmr_rate_per_sqm": "carcass_rate_per_sqm",
    "wastage_factor": "wastage_factor",
    "material_cost_multiplier": "material_cost_multiplier",
    "hardware_markup_percentage": "hardware_markup_percentage",
    "hardware_discount_percentage": "hardware_discount_percentage",
    "gst_rate": "gst_rate",
}


@dataclass(frozen=True)
class PricingSettings:
    """Adjustment factors that scale the base pricing formulas.

    Attributes:
        carcass_rate_per_sqm: Fallback carcass material rate used when no
            finish is selected. None means no fallback is configured.
        wastage_factor: Fractional wastage added to material cost (0.05 = 5%).
        material_cost_multiplier: Extra multiplicative factor on material cost.
        hardware_markup_percentage: Markup applied to hardware cost.
        hardware_discount_percentage: Discount applied after markup.
        gst_rate: GST rate applied by cart and order totals, never by the engine.
    """

    carcass_rate_per_sqm: Decimal | None = None
    wastage_factor: Decimal = Decimal(0)
    material_cost_multiplier: Decimal = Decimal(1)
    hardware_markup_percentage: Decimal = Decimal(0)
    hardware_discount_percentage: Decimal = Decimal(0)
    gst_rate: Decimal = Decimal("0.10")

    @property
    def material_multiplier(self) -> Decimal:
        """Combined factor applied to door and carcass material cost."""
        return (1 + self.wastage_factor) * self.material_cost_multiplier

    @property
    def hardware_multiplier(self) -> Decimal:
        """Combined markup and discount factor applied to hardware cost."""
        markup = 1 + self.hardware_markup_percentage / 100
        discount = max(Decimal(0), 1 - self.hardware_discount_percentage / 100)
        return markup * discount


def parse_global_settings(settings: Iterable[GlobalSetting]) -> PricingSettings:
    """Build PricingSettings from global_settings rows.

    Unknown keys are ignored. Values that are not finite, non-negative
    numbers are skipped with a warning so the default applies, as are
    discounts above 100%.
    """
    values: dict[str, Decimal] = {}
    for setting in settings:
        field_name = SETTING_KEYS.get(setting.setting_key)
        if field_name is None:
            continue
        try:
            value = to_decimal(setting.setting_value)
        except ValueError:
            value = None
        if value is None or not value.is_finite() or value < 0:
            logger.warning(
                "Ignoring global setting %s=%r: not a non-negative number",
                setting.setting_key,
                setting.setting_value,
            )
            continue
        if field_name == "hardware_discount_percentage" and value > 100:
            logger.warning(
                "Ignoring global setting %s=%r: discount exceeds 100%%",
                setting.setting_key,
                setting.setting_value,
            )
            continue
        values[field_name] = value
    return PricingSettings(**values)
