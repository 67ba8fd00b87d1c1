"""Cabinet pricing engine.

Computes the ex-GST unit price of one cabinet from its parametric part
formulas, door style and color rates, carcass finish rate, and
brand-scoped hardware costs. The engine is a pure function of its
request: it performs no I/O, holds no mutable state and never rounds
until the final total.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any

from cabinet_pricing.domain.entities import (
    CabinetPart,
    CabinetType,
    Color,
    DoorStyle,
    Finish,
    HardwareOption,
    HardwareRequirement,
)
from cabinet_pricing.domain.errors import (
    FormulaError,
    InputOutOfRangeError,
    InvalidPricingInputError,
)
from cabinet_pricing.domain.value_objects import (
    ZERO,
    DiagnosticKind,
    PricingDiagnostic,
    area_m2,
    round_money,
    to_decimal,
)

from .formula import evaluate_formula
from .hardware import HardwareCost, HardwareCostCalculator
from .settings import PricingSettings

__all__ = ["PartArea", "PriceBreakdown", "PricingEngine", "PricingRequest"]

logger = logging.getLogger(__name__)

DIMENSIONS = ("width", "height", "depth")


@dataclass(frozen=True)
class PricingRequest:
    """Everything the engine needs to price one cabinet configuration.

    Dimensions are in millimetres. ``quantity`` is validated but does not
    change the unit price; callers multiply at the line-item level.
    """

    cabinet_type: CabinetType
    width: Decimal | float | int
    height: Decimal | float | int
    depth: Decimal | float | int
    quantity: int = 1
    cabinet_parts: Sequence[CabinetPart] = ()
    settings: PricingSettings = field(default_factory=PricingSettings)
    door_style: DoorStyle | None = None
    color: Color | None = None
    finish: Finish | None = None
    hardware_brand_id: str | None = None
    hardware_requirements: Sequence[HardwareRequirement] = ()
    hardware_options: Sequence[HardwareOption] = ()


@dataclass(frozen=True)
class PartArea:
    """Evaluated dimensions and material area of one cabinet part."""

    part_id: str
    part_name: str
    is_door: bool
    quantity: int
    width_mm: Decimal
    height_mm: Decimal
    area_m2: Decimal


@dataclass(frozen=True)
class PriceBreakdown:
    """Line-item breakdown of a unit price.

    Intermediate amounts keep full precision; only ``total`` is rounded.
    """

    door_area_m2: Decimal
    door_rate: Decimal
    door_area_price: Decimal
    carcass_area_m2: Decimal
    carcass_rate: Decimal
    carcass_area_price: Decimal
    material_multiplier: Decimal
    hardware: HardwareCost
    total: Decimal
    part_areas: tuple[PartArea, ...] = ()
    diagnostics: tuple[PricingDiagnostic, ...] = ()

    @property
    def material_cost(self) -> Decimal:
        return (self.door_area_price + self.carcass_area_price) * self.material_multiplier

    @property
    def hardware_cost(self) -> Decimal:
        return self.hardware.total

    def to_dict(self) -> dict[str, Any]:
        """Display-friendly view with money rounded to cents."""
        return {
            "door_area_m2": float(self.door_area_m2),
            "door_rate": float(self.door_rate),
            "door_area_price": float(round_money(self.door_area_price)),
            "carcass_area_m2": float(self.carcass_area_m2),
            "carcass_rate": float(self.carcass_rate),
            "carcass_area_price": float(round_money(self.carcass_area_price)),
            "material_multiplier": float(self.material_multiplier),
            "hardware_cost": float(round_money(self.hardware_cost)),
            "total": float(self.total),
            "diagnostics": [str(d) for d in self.diagnostics],
        }


class PricingEngine:
    """Calculates per-cabinet unit prices.

    Safe to share between callers and threads: every call works only on
    its request.
    """

    def __init__(self, hardware_calculator: HardwareCostCalculator | None = None) -> None:
        self.hardware_calculator = hardware_calculator or HardwareCostCalculator()

    def calculate_price(self, request: PricingRequest) -> Decimal:
        """Return the ex-GST unit price rounded to cents."""
        return self.calculate_breakdown(request).total

    def calculate_breakdown(self, request: PricingRequest) -> PriceBreakdown:
        """Price a configuration and explain how the price was reached.

        Raises:
            InvalidPricingInputError: For NaN, infinite, zero or negative
                dimensions, or a quantity that is not a positive integer.
            InputOutOfRangeError: When a dimension is outside the cabinet
                type's configured bounds.
        """
        cabinet_type = request.cabinet_type
        dimensions = self._validated_dimensions(request)
        _validate_quantity(request.quantity)

        diagnostics: list[PricingDiagnostic] = []
        part_areas = self._part_areas(
            cabinet_type, request.cabinet_parts, dimensions, diagnostics
        )
        door_area = sum((p.area_m2 for p in part_areas if p.is_door), ZERO)
        carcass_area = sum((p.area_m2 for p in part_areas if not p.is_door), ZERO)

        door_rate = ZERO
        if request.door_style is not None:
            door_rate = request.door_style.base_rate_per_sqm
            if request.color is not None:
                door_rate += request.color.surcharge_rate_per_sqm
        elif door_area > 0:
            diagnostics.append(
                PricingDiagnostic(
                    kind=DiagnosticKind.MISSING_REFERENCE_DATA,
                    message="No door style selected; door area is not priced",
                    subject=cabinet_type.id,
                )
            )

        carcass_rate = self._carcass_rate(request, carcass_area, diagnostics)

        hardware = self.hardware_calculator.calculate(
            cabinet_type,
            request.hardware_brand_id,
            request.hardware_requirements,
            request.hardware_options,
            request.settings,
        )
        diagnostics.extend(hardware.diagnostics)

        door_area_price = door_area * door_rate
        carcass_area_price = carcass_area * carcass_rate
        multiplier = request.settings.material_multiplier
        unrounded = (door_area_price + carcass_area_price) * multiplier + hardware.total
        total = max(round_money(unrounded), round_money(ZERO))

        for diagnostic in diagnostics:
            logger.warning("Pricing %s: %s", cabinet_type.id, diagnostic)
        logger.debug(
            "Priced %s %sx%sx%s: door %s m2 @ %s, carcass %s m2 @ %s, "
            "multiplier %s, hardware %s, total %s",
            cabinet_type.id,
            *dimensions,
            door_area,
            door_rate,
            carcass_area,
            carcass_rate,
            multiplier,
            hardware.total,
            total,
        )

        return PriceBreakdown(
            door_area_m2=door_area,
            door_rate=door_rate,
            door_area_price=door_area_price,
            carcass_area_m2=carcass_area,
            carcass_rate=carcass_rate,
            carcass_area_price=carcass_area_price,
            material_multiplier=multiplier,
            hardware=hardware,
            total=total,
            part_areas=tuple(part_areas),
            diagnostics=tuple(diagnostics),
        )

    def _validated_dimensions(
        self, request: PricingRequest
    ) -> tuple[Decimal, Decimal, Decimal]:
        values: list[Decimal] = []
        for name in DIMENSIONS:
            raw = getattr(request, name)
            try:
                value = to_decimal(raw)
            except ValueError as e:
                raise InvalidPricingInputError(name, raw, "not a number") from e
            if not value.is_finite():
                raise InvalidPricingInputError(name, raw, "must be a finite number")
            if value <= 0:
                raise InvalidPricingInputError(name, raw, "must be greater than zero")

            minimum, maximum = request.cabinet_type.bounds(name)
            if (minimum is not None and value < minimum) or (
                maximum is not None and value > maximum
            ):
                raise InputOutOfRangeError(name, value, minimum, maximum)
            values.append(value)
        return values[0], values[1], values[2]

    def _part_areas(
        self,
        cabinet_type: CabinetType,
        parts: Sequence[CabinetPart],
        dimensions: tuple[Decimal, Decimal, Decimal],
        diagnostics: list[PricingDiagnostic],
    ) -> list[PartArea]:
        width, height, depth = dimensions
        areas: list[PartArea] = []
        for part in parts:
            if part.cabinet_type_id != cabinet_type.id or part.is_hardware:
                continue
            if part.quantity <= 0:
                continue

            variables = {
                "width": width,
                "height": height,
                "depth": depth,
                "quantity": Decimal(part.quantity),
            }
            try:
                part_width = evaluate_formula(part.width_formula, variables)
                part_height = evaluate_formula(part.height_formula, variables)
                if part_width < 0 or part_height < 0:
                    raise FormulaError(
                        f"{part.width_formula} x {part.height_formula}",
                        "evaluates to a negative dimension",
                    )
            except FormulaError as e:
                diagnostics.append(
                    PricingDiagnostic(
                        kind=DiagnosticKind.FORMULA_EVALUATION,
                        message=str(e),
                        subject=part.id,
                    )
                )
                part_width = part_height = ZERO

            areas.append(
                PartArea(
                    part_id=part.id,
                    part_name=part.part_name,
                    is_door=part.is_door,
                    quantity=part.quantity,
                    width_mm=part_width,
                    height_mm=part_height,
                    area_m2=area_m2(part_width, part_height) * part.quantity,
                )
            )
        return areas

    def _carcass_rate(
        self,
        request: PricingRequest,
        carcass_area: Decimal,
        diagnostics: list[PricingDiagnostic],
    ) -> Decimal:
        if request.finish is not None:
            return request.finish.rate_per_sqm
        if request.settings.carcass_rate_per_sqm is not None:
            return request.settings.carcass_rate_per_sqm
        if carcass_area > 0:
            diagnostics.append(
                PricingDiagnostic(
                    kind=DiagnosticKind.MISSING_REFERENCE_DATA,
                    message=(
                        "No finish selected and no hmr_rate_per_sqm setting; "
                        "carcass area is not priced"
                    ),
                    subject=request.cabinet_type.id,
                )
            )
        return ZERO


def _validate_quantity(quantity: object) -> None:
    if isinstance(quantity, bool) or not isinstance(quantity, int):
        raise InvalidPricingInputError("quantity", quantity, "must be a whole number")
    if quantity < 1:
        raise InvalidPricingInputError("quantity", quantity, "must be at least 1")
