"""Exceptions raised by the pricing domain.

Only genuinely invalid input raises. Missing or partial reference data
degrades to a partial price plus a ``PricingDiagnostic`` instead.
"""

from __future__ import annotations

from decimal import Decimal


class PricingError(Exception):
    """Base class for hard pricing errors."""


class InvalidPricingInputError(PricingError):
    """Raised for NaN, infinite, zero or negative dimensions and bad quantities."""

    def __init__(self, field: str, value: object, message: str) -> None:
        self.field = field
        self.value = value
        super().__init__(f"Invalid {field} {value!r}: {message}")


class InputOutOfRangeError(PricingError):
    """Raised when a dimension lies outside the cabinet type's bounds.

    Attributes:
        dimension: "width", "height" or "depth".
        value: Requested value in mm.
        minimum: Lower bound in mm, if configured.
        maximum: Upper bound in mm, if configured.
    """

    def __init__(
        self,
        dimension: str,
        value: Decimal,
        minimum: Decimal | None,
        maximum: Decimal | None,
    ) -> None:
        self.dimension = dimension
        self.value = value
        self.minimum = minimum
        self.maximum = maximum
        super().__init__(
            f"{dimension.capitalize()} {_format_bound(value)}mm is outside the allowed range "
            f"{_format_bound(minimum)}-{_format_bound(maximum)}mm"
        )


class FormulaError(PricingError):
    """Raised when a part formula cannot be parsed or evaluated."""

    def __init__(self, formula: str | None, message: str) -> None:
        self.formula = formula
        super().__init__(f"Cannot evaluate formula {formula!r}: {message}")


def _format_bound(bound: Decimal | None) -> str:
    return "?" if bound is None else f"{bound.normalize():f}"
