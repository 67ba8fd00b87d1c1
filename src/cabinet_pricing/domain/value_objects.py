"""Value objects for the cabinet pricing domain."""

from __future__ import annotations

import math
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from enum import Enum
from typing import Any

MM2_PER_M2 = Decimal(1_000_000)
CENT = Decimal("0.01")
ZERO = Decimal(0)


class UnitScope(str, Enum):
    """How a hardware requirement's units scale with the cabinet.

    Attributes:
        PER_CABINET: Fixed number of units per cabinet.
        PER_DOOR: Units multiplied by the cabinet type's door count.
        PER_DRAWER: Units multiplied by the cabinet type's drawer count.
    """

    PER_CABINET = "per_cabinet"
    PER_DOOR = "per_door"
    PER_DRAWER = "per_drawer"


class DiagnosticKind(str, Enum):
    """Category of a non-fatal pricing anomaly."""

    FORMULA_EVALUATION = "formula_evaluation"
    MISSING_REFERENCE_DATA = "missing_reference_data"
    HARDWARE_RESOLUTION = "hardware_resolution"


@dataclass(frozen=True)
class PricingDiagnostic:
    """A non-fatal anomaly detected while pricing.

    The affected price term degrades to zero; the diagnostic lets callers
    show why (for example to admins reviewing the catalog).

    Attributes:
        kind: Category of the anomaly.
        message: Human-readable description.
        subject: Identifier of the catalog row involved, if any.
    """

    kind: DiagnosticKind
    message: str
    subject: str | None = None

    def __str__(self) -> str:
        if self.subject:
            return f"[{self.kind.value}] {self.subject}: {self.message}"
        return f"[{self.kind.value}] {self.message}"


def to_decimal(value: Any) -> Decimal:
    """Convert a number (or numeric string) to Decimal.

    Floats go through ``str`` so that 0.1 becomes Decimal("0.1") rather
    than its binary expansion.

    Raises:
        ValueError: If the value is not numeric.
    """
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool):
        raise ValueError(f"Not a number: {value!r}")
    if isinstance(value, float):
        if math.isnan(value):
            return Decimal("NaN")
        return Decimal(repr(value))
    try:
        return Decimal(str(value).strip())
    except (InvalidOperation, TypeError) as e:
        raise ValueError(f"Not a number: {value!r}") from e


def round_money(amount: Decimal) -> Decimal:
    """Round an amount to cents using half-up rounding."""
    return amount.quantize(CENT, rounding=ROUND_HALF_UP)


def area_m2(width_mm: Decimal, height_mm: Decimal) -> Decimal:
    """Area in square metres of a width x height rectangle given in mm."""
    return width_mm * height_mm / MM2_PER_M2
