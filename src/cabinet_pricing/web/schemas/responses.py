"""Pydantic response schemas for the REST API."""

from typing import Any

from pydantic import BaseModel, Field


class DiagnosticSchema(BaseModel):
    """Non-fatal pricing anomaly."""

    kind: str = Field(..., description="formula_evaluation, missing_reference_data or hardware_resolution")
    message: str = Field(..., description="Human-readable description")
    subject: str | None = Field(default=None, description="Catalog row involved")


class PartAreaSchema(BaseModel):
    part_id: str
    part_name: str
    is_door: bool
    quantity: int
    width_mm: float
    height_mm: float
    area_m2: float


class HardwareLineSchema(BaseModel):
    requirement_id: str
    hardware_type: str
    product_name: str
    units: int
    cost_per_unit: float
    cost: float


class BreakdownSchema(BaseModel):
    """How a unit price was reached. Money amounts are ex GST."""

    door_area_m2: float
    door_rate: float
    door_area_price: float
    carcass_area_m2: float
    carcass_rate: float
    carcass_area_price: float
    material_multiplier: float
    hardware_cost: float
    total: float
    diagnostics: list[str] = Field(default_factory=list)
    parts: list[PartAreaSchema] = Field(default_factory=list)
    hardware_lines: list[HardwareLineSchema] = Field(default_factory=list)


class PricePreviewSchema(BaseModel):
    """Response for pricing a configuration."""

    cabinet_type_id: str
    quantity: int
    dimensions: dict[str, float] | None = Field(default=None, description="Priced dimensions in mm")
    unit_price: float | None = Field(default=None, description="Ex-GST price of one cabinet")
    total_price: float | None = Field(default=None, description="unit_price x quantity")
    can_add_to_cart: bool = False
    errors: list[str] = Field(default_factory=list)
    diagnostics: list[DiagnosticSchema] = Field(default_factory=list)
    breakdown: BreakdownSchema | None = None


class PriceTableColumnSchema(BaseModel):
    id: str
    label: str
    door_style_id: str
    color_id: str | None = None
    finish_id: str | None = None


class PriceTableRowSchema(BaseModel):
    range_id: str
    label: str
    min_width_mm: float
    max_width_mm: float
    priced_width_mm: float


class PriceTableSchema(BaseModel):
    """Response for price table generation.

    ``prices[column_id][range_id]`` is null where the cell could not be priced.
    """

    cabinet_type_id: str
    columns: list[PriceTableColumnSchema] = Field(default_factory=list)
    rows: list[PriceTableRowSchema] = Field(default_factory=list)
    prices: dict[str, dict[str, float | None]] = Field(default_factory=dict)
    diagnostics: list[str] = Field(default_factory=list)


class ValidationResultSchema(BaseModel):
    """Response for catalog validation."""

    is_valid: bool = Field(..., description="Whether the catalog can be used for pricing")
    errors: list[dict[str, Any]] = Field(
        default_factory=list, description="Validation errors"
    )
    warnings: list[dict[str, Any]] = Field(
        default_factory=list, description="Validation warnings"
    )


class ErrorResponseSchema(BaseModel):
    """Standard error response."""

    error: str = Field(..., description="Error message")
    error_type: str = Field(..., description="Error type identifier")
    details: list[dict[str, Any]] | dict[str, Any] | None = Field(
        default=None, description="Additional error details"
    )
