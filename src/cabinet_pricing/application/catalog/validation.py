"""Catalog consistency checks.

Schema validation guarantees each row is well formed on its own. The
checks here look across rows: default dimensions against bounds, formula
syntax, dangling references, and hardware requirements that no brand can
fulfil. Errors make a catalog unusable for pricing; warnings flag rows that
will price as zero or be left out of price tables.

Catalogs loaded from a snapshot have already had inverted bounds rejected by
the row schemas. The bound-order checks here cover catalogs assembled
directly from domain entities.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from cabinet_pricing.domain.entities import Catalog
from cabinet_pricing.domain.errors import FormulaError
from cabinet_pricing.domain.services.formula import parse_formula


@dataclass
class ValidationError:
    """A blocking catalog problem.

    Attributes:
        path: Location of the row, e.g. "cabinet_types[base-600]"
        message: Human-readable description
        value: The offending value
    """

    path: str
    message: str
    value: Any = None


@dataclass
class ValidationWarning:
    """A non-blocking catalog problem."""

    path: str
    message: str
    suggestion: str | None = None


@dataclass
class ValidationResult:
    """Collected catalog errors and warnings."""

    errors: list[ValidationError] = field(default_factory=list)
    warnings: list[ValidationWarning] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    @property
    def has_warnings(self) -> bool:
        return bool(self.warnings)

    @property
    def exit_code(self) -> int:
        """CLI exit code: 0 clean, 1 errors, 2 warnings only."""
        if self.errors:
            return 1
        if self.warnings:
            return 2
        return 0

    def add_error(self, path: str, message: str, value: Any = None) -> "ValidationResult":
        self.errors.append(ValidationError(path=path, message=message, value=value))
        return self

    def add_warning(
        self, path: str, message: str, suggestion: str | None = None
    ) -> "ValidationResult":
        self.warnings.append(
            ValidationWarning(path=path, message=message, suggestion=suggestion)
        )
        return self


def _check_cabinet_types(catalog: Catalog, result: ValidationResult) -> None:
    for cabinet_type in catalog.cabinet_types:
        path = f"cabinet_types[{cabinet_type.id}]"
        for dimension in ("width", "height", "depth"):
            default = cabinet_type.default(dimension)
            minimum, maximum = cabinet_type.bounds(dimension)
            if minimum is not None and maximum is not None and minimum > maximum:
                result.add_error(
                    f"{path}.min_{dimension}_mm",
                    f"Minimum {dimension} {minimum}mm exceeds maximum {maximum}mm",
                    value=str(minimum),
                )
                continue
            if (minimum is not None and default < minimum) or (
                maximum is not None and default > maximum
            ):
                result.add_error(
                    f"{path}.default_{dimension}_mm",
                    f"Default {dimension} is outside {minimum}-{maximum}mm",
                    value=str(default),
                )
        if cabinet_type.active and not catalog.parts_for(cabinet_type.id):
            result.add_warning(
                path,
                "Cabinet type has no parts; only hardware will be priced",
                suggestion="Add carcass and door parts with dimension formulas",
            )


def _check_parts(catalog: Catalog, result: ValidationResult) -> None:
    for part in catalog.cabinet_parts:
        path = f"cabinet_parts[{part.id}]"
        if catalog.cabinet_type(part.cabinet_type_id) is None:
            result.add_warning(path, f"Unknown cabinet type {part.cabinet_type_id!r}")
        if part.is_hardware:
            continue
        for name in ("width_formula", "height_formula"):
            formula = getattr(part, name)
            try:
                if formula is None:
                    raise FormulaError(formula, "formula is missing")
                parse_formula(formula)
            except FormulaError as e:
                result.add_error(f"{path}.{name}", str(e), value=formula)


def _check_colors(catalog: Catalog, result: ValidationResult) -> None:
    for color in catalog.colors:
        if catalog.door_style(color.door_style_id) is None:
            result.add_warning(
                f"colors[{color.id}]",
                f"Unknown door style {color.door_style_id!r}",
            )


def _check_price_ranges(catalog: Catalog, result: ValidationResult) -> None:
    for price_range in catalog.price_ranges:
        path = f"price_ranges[{price_range.id}]"
        if price_range.min_width_mm > price_range.max_width_mm:
            result.add_error(
                path,
                f"Minimum width {price_range.min_width_mm}mm exceeds "
                f"maximum {price_range.max_width_mm}mm",
            )
            continue
        cabinet_type = catalog.cabinet_type(price_range.cabinet_type_id)
        if cabinet_type is None:
            result.add_warning(path, f"Unknown cabinet type {price_range.cabinet_type_id!r}")
            continue
        minimum, maximum = cabinet_type.bounds("width")
        midpoint = price_range.midpoint_mm
        if (minimum is not None and midpoint < minimum) or (
            maximum is not None and midpoint > maximum
        ):
            result.add_warning(
                path,
                f"Range midpoint {midpoint}mm is outside the cabinet's width bounds; "
                "its price table cells will be empty",
            )


def _check_cabinet_type_finishes(catalog: Catalog, result: ValidationResult) -> None:
    for row in catalog.cabinet_type_finishes:
        path = f"cabinet_type_finishes[{row.id}]"
        if catalog.cabinet_type(row.cabinet_type_id) is None:
            result.add_warning(path, f"Unknown cabinet type {row.cabinet_type_id!r}")
        if catalog.door_style(row.door_style_id) is None:
            result.add_warning(
                path,
                f"Unknown door style {row.door_style_id!r}; column will be empty",
            )
        if row.color_id is not None:
            color = catalog.color(row.color_id)
            if color is None:
                result.add_warning(path, f"Unknown color {row.color_id!r}; column will be empty")
            elif color.door_style_id != row.door_style_id:
                result.add_warning(
                    path,
                    f"Color {row.color_id!r} belongs to door style {color.door_style_id!r}",
                )
        if row.finish_id is not None and catalog.finish(row.finish_id) is None:
            result.add_warning(path, f"Unknown finish {row.finish_id!r}; column will be empty")


def _check_hardware(catalog: Catalog, result: ValidationResult) -> None:
    for requirement in catalog.hardware_requirements:
        if not requirement.active:
            continue
        path = f"hardware_requirements[{requirement.id}]"
        options = [
            o
            for o in catalog.hardware_options
            if o.requirement_id == requirement.id and o.active
        ]
        if not options:
            result.add_warning(
                path,
                "No hardware options; this requirement is never priced",
                suggestion="Add an option per hardware brand",
            )
            continue
        for option in options:
            if option.product is None:
                result.add_warning(
                    f"hardware_options[{option.id}]",
                    f"Unknown hardware product {option.hardware_product_id!r}",
                )


def validate_catalog(catalog: Catalog) -> ValidationResult:
    """Run all cross-row checks on a catalog.

    Args:
        catalog: Domain catalog to check.

    Returns:
        ValidationResult with errors and warnings in table order.
    """
    result = ValidationResult()
    _check_cabinet_types(catalog, result)
    _check_parts(catalog, result)
    _check_colors(catalog, result)
    _check_price_ranges(catalog, result)
    _check_cabinet_type_finishes(catalog, result)
    _check_hardware(catalog, result)
    return result
