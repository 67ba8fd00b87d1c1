"""Pydantic request schemas for the REST API."""

from typing import Any

from pydantic import BaseModel, Field


class ConfigurationSchema(BaseModel):
    """Configurator selection. Omitted dimensions use the cabinet defaults."""

    cabinet_type_id: str = Field(..., description="Cabinet type id")
    width: float | None = Field(default=None, description="Width in mm")
    height: float | None = Field(default=None, description="Height in mm")
    depth: float | None = Field(default=None, description="Depth in mm")
    door_style_id: str | None = Field(default=None, description="Door style id")
    color_id: str | None = Field(default=None, description="Color id")
    finish_id: str | None = Field(default=None, description="Carcass finish id")
    hardware_brand_id: str | None = Field(
        default=None, description="Hardware brand id, or 'none' for no hardware"
    )
    quantity: int = Field(default=1, description="Number of cabinets")


class PriceRequest(BaseModel):
    """Request for pricing one configuration."""

    catalog: dict[str, Any] = Field(..., description="Catalog snapshot JSON")
    configuration: ConfigurationSchema = Field(..., description="Configurator selection")


class PriceTableRequest(BaseModel):
    """Request for a cabinet type's price table."""

    catalog: dict[str, Any] = Field(..., description="Catalog snapshot JSON")
    cabinet_type_id: str = Field(..., description="Cabinet type id")
    hardware_brand_id: str | None = Field(
        default=None, description="Include hardware from this brand"
    )


class CatalogValidateRequest(BaseModel):
    """Request for validating a catalog snapshot."""

    catalog: dict[str, Any] = Field(..., description="Catalog snapshot JSON")
