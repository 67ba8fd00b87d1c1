"""Hardware cost calculation service.

This module provides HardwareCostCalculator, which resolves the hinges
and runners a cabinet type requires into brand-specific products and
prices them per cabinet.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from decimal import Decimal

from cabinet_pricing.domain.entities import (
    CabinetType,
    HardwareOption,
    HardwareRequirement,
)
from cabinet_pricing.domain.value_objects import (
    ZERO,
    DiagnosticKind,
    PricingDiagnostic,
)

from .settings import PricingSettings

__all__ = ["HardwareCost", "HardwareCostCalculator", "HardwareLine", "NO_BRAND"]

# Brand id the storefront sends when the customer opts out of hardware
NO_BRAND = "none"


@dataclass(frozen=True)
class HardwareLine:
    """One priced hardware requirement."""

    requirement_id: str
    hardware_type: str
    product_name: str
    units: int
    cost_per_unit: Decimal

    @property
    def cost(self) -> Decimal:
        return self.cost_per_unit * self.units


@dataclass(frozen=True)
class HardwareCost:
    """Hardware cost for a single cabinet.

    Attributes:
        lines: Priced requirements, in requirement order.
        multiplier: Markup/discount factor applied to the subtotal.
        diagnostics: Requirements that could not be resolved.
    """

    lines: tuple[HardwareLine, ...] = ()
    multiplier: Decimal = Decimal(1)
    diagnostics: tuple[PricingDiagnostic, ...] = field(default=())

    @property
    def subtotal(self) -> Decimal:
        return sum((line.cost for line in self.lines), ZERO)

    @property
    def total(self) -> Decimal:
        return self.subtotal * self.multiplier


class HardwareCostCalculator:
    """Prices the hardware requirements of a cabinet type for a brand."""

    def calculate(
        self,
        cabinet_type: CabinetType,
        hardware_brand_id: str | None,
        requirements: Iterable[HardwareRequirement],
        options: Iterable[HardwareOption],
        settings: PricingSettings | None = None,
    ) -> HardwareCost:
        """Calculate per-cabinet hardware cost.

        Only active requirements of ``cabinet_type`` are considered. For each
        one, the active option of the selected brand supplies the product.
        A requirement with no resolvable product contributes nothing and is
        reported as a HARDWARE_RESOLUTION diagnostic.

        Args:
            cabinet_type: Cabinet being priced (supplies door/drawer counts).
            hardware_brand_id: Selected brand; None, "" or "none" means no
                hardware, which costs nothing and raises no diagnostics.
            requirements: Candidate requirements (other types are ignored).
            options: Candidate options across brands.
            settings: Supplies markup/discount; defaults apply when None.

        Returns:
            HardwareCost with priced lines and diagnostics.
        """
        multiplier = (settings or PricingSettings()).hardware_multiplier
        if not hardware_brand_id or hardware_brand_id == NO_BRAND:
            return HardwareCost(multiplier=multiplier)

        brand_options: dict[str, HardwareOption] = {}
        for option in options:
            if (
                option.active
                and option.hardware_brand_id == hardware_brand_id
                and option.requirement_id not in brand_options
            ):
                brand_options[option.requirement_id] = option

        lines: list[HardwareLine] = []
        diagnostics: list[PricingDiagnostic] = []
        for requirement in requirements:
            if not requirement.active or requirement.cabinet_type_id != cabinet_type.id:
                continue
            units = requirement.units_for(cabinet_type)
            if units <= 0:
                continue

            option = brand_options.get(requirement.id)
            product = option.product if option else None
            if product is None or not product.active:
                diagnostics.append(
                    PricingDiagnostic(
                        kind=DiagnosticKind.HARDWARE_RESOLUTION,
                        message=(
                            f"No {requirement.hardware_type or 'hardware'} product "
                            f"for brand {hardware_brand_id!r}"
                        ),
                        subject=requirement.id,
                    )
                )
                continue

            lines.append(
                HardwareLine(
                    requirement_id=requirement.id,
                    hardware_type=requirement.hardware_type,
                    product_name=product.name,
                    units=units,
                    cost_per_unit=product.cost_per_unit,
                )
            )

        return HardwareCost(
            lines=tuple(lines),
            multiplier=multiplier,
            diagnostics=tuple(diagnostics),
        )
