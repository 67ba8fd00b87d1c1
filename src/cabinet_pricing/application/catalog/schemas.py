"""Pydantic schemas for catalog snapshots.

A catalog snapshot is a JSON document holding the rows of every catalog
table the pricing engine reads. Rows come straight from the hosted data
store, so unknown columns (``created_at``, ``description``...) are ignored
rather than rejected.
"""

from decimal import Decimal
from typing import Any

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)

from cabinet_pricing.domain.value_objects import UnitScope

# Supported catalog snapshot versions
# Version 1.0: Cabinet types, parts, door styles, colors, finishes, price ranges
# Version 1.1: Hardware brands, products, requirements and options
SUPPORTED_VERSIONS: frozenset[str] = frozenset({"1.0", "1.1"})


class _Row(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class CabinetTypeSchema(_Row):
    """Cabinet type row. Dimensions in millimetres."""

    id: str
    name: str
    category: str = "base"
    default_width_mm: Decimal = Field(..., gt=0)
    default_height_mm: Decimal = Field(..., gt=0)
    default_depth_mm: Decimal = Field(..., gt=0)
    min_width_mm: Decimal | None = Field(default=None, gt=0)
    max_width_mm: Decimal | None = Field(default=None, gt=0)
    min_height_mm: Decimal | None = Field(default=None, gt=0)
    max_height_mm: Decimal | None = Field(default=None, gt=0)
    min_depth_mm: Decimal | None = Field(default=None, gt=0)
    max_depth_mm: Decimal | None = Field(default=None, gt=0)
    door_count: int = Field(default=0, ge=0)
    drawer_count: int = Field(default=0, ge=0)
    active: bool = True

    @model_validator(mode="after")
    def validate_bounds(self) -> "CabinetTypeSchema":
        """Ensure each configured minimum does not exceed its maximum."""
        for dimension in ("width", "height", "depth"):
            minimum = getattr(self, f"min_{dimension}_mm")
            maximum = getattr(self, f"max_{dimension}_mm")
            if minimum is not None and maximum is not None and minimum > maximum:
                raise ValueError(
                    f"min_{dimension}_mm ({minimum}) exceeds max_{dimension}_mm ({maximum})"
                )
        return self


class CabinetPartSchema(_Row):
    id: str
    cabinet_type_id: str
    part_name: str
    quantity: int = Field(default=1, ge=0)
    width_formula: str | None = None
    height_formula: str | None = None
    is_door: bool = False
    is_hardware: bool = False


class DoorStyleSchema(_Row):
    id: str
    name: str
    base_rate_per_sqm: Decimal = Field(..., ge=0)
    active: bool = True


class ColorSchema(_Row):
    id: str
    door_style_id: str
    name: str
    surcharge_rate_per_sqm: Decimal = Field(default=Decimal(0), ge=0)
    hex_code: str | None = None
    active: bool = True


class FinishSchema(_Row):
    id: str
    brand_id: str
    name: str
    finish_type: str = ""
    rate_per_sqm: Decimal = Field(..., ge=0)
    active: bool = True


class PriceRangeSchema(_Row):
    id: str
    cabinet_type_id: str
    label: str
    min_width_mm: Decimal = Field(..., gt=0)
    max_width_mm: Decimal = Field(..., gt=0)
    sort_order: int = 0
    active: bool = True

    @model_validator(mode="after")
    def validate_width_order(self) -> "PriceRangeSchema":
        """Ensure the bucket minimum does not exceed its maximum."""
        if self.min_width_mm > self.max_width_mm:
            raise ValueError(
                f"min_width_mm ({self.min_width_mm}) exceeds max_width_mm ({self.max_width_mm})"
            )
        return self


class CabinetTypeFinishSchema(_Row):
    id: str
    cabinet_type_id: str
    door_style_id: str
    color_id: str | None = None
    finish_id: str | None = None
    depth_mm: Decimal | None = Field(default=None, gt=0)
    sort_order: int = 0
    active: bool = True


class HardwareBrandSchema(_Row):
    id: str
    name: str
    active: bool = True


class HardwareProductSchema(_Row):
    id: str
    name: str
    hardware_brand_id: str
    cost_per_unit: Decimal = Field(..., ge=0)
    active: bool = True


class HardwareRequirementSchema(_Row):
    """Hardware requirement row.

    ``quantity`` is the number of units per scope; the data store calls the
    same column ``units_per_scope``.
    """

    id: str
    cabinet_type_id: str
    hardware_type: str = ""
    unit_scope: UnitScope = UnitScope.PER_CABINET
    quantity: int = Field(
        default=1,
        ge=0,
        validation_alias=AliasChoices("quantity", "units_per_scope"),
    )
    active: bool = True

    @field_validator("hardware_type", mode="before")
    @classmethod
    def flatten_hardware_type(cls, value: Any) -> Any:
        """Accept an embedded hardware_type row and keep its name."""
        if isinstance(value, dict):
            return value.get("name", "")
        return value


class HardwareOptionSchema(_Row):
    id: str
    requirement_id: str
    hardware_brand_id: str
    hardware_product_id: str
    hardware_product: HardwareProductSchema | None = None
    active: bool = True


class GlobalSettingSchema(_Row):
    setting_key: str
    setting_value: str
    description: str | None = None

    @field_validator("setting_value", mode="before")
    @classmethod
    def stringify_value(cls, value: Any) -> Any:
        """Store numeric values as text like the data store does."""
        if isinstance(value, (int, float, Decimal)) and not isinstance(value, bool):
            return str(value)
        return value


class CatalogSnapshot(BaseModel):
    """Root model of a catalog snapshot document.

    Attributes:
        schema_version: Snapshot format version, see SUPPORTED_VERSIONS.
        cabinet_types ... global_settings: Rows of each catalog table.
    """

    model_config = ConfigDict(extra="forbid")

    schema_version: str = "1.1"
    cabinet_types: list[CabinetTypeSchema] = Field(default_factory=list)
    cabinet_parts: list[CabinetPartSchema] = Field(default_factory=list)
    door_styles: list[DoorStyleSchema] = Field(default_factory=list)
    colors: list[ColorSchema] = Field(default_factory=list)
    finishes: list[FinishSchema] = Field(default_factory=list)
    price_ranges: list[PriceRangeSchema] = Field(
        default_factory=list,
        validation_alias=AliasChoices("price_ranges", "cabinet_type_price_ranges"),
    )
    cabinet_type_finishes: list[CabinetTypeFinishSchema] = Field(default_factory=list)
    hardware_brands: list[HardwareBrandSchema] = Field(default_factory=list)
    hardware_products: list[HardwareProductSchema] = Field(default_factory=list)
    hardware_requirements: list[HardwareRequirementSchema] = Field(
        default_factory=list,
        validation_alias=AliasChoices(
            "hardware_requirements", "cabinet_hardware_requirements"
        ),
    )
    hardware_options: list[HardwareOptionSchema] = Field(
        default_factory=list,
        validation_alias=AliasChoices("hardware_options", "cabinet_hardware_options"),
    )
    global_settings: list[GlobalSettingSchema] = Field(default_factory=list)

    @field_validator("schema_version")
    @classmethod
    def validate_schema_version(cls, value: str) -> str:
        if value not in SUPPORTED_VERSIONS:
            supported = ", ".join(sorted(SUPPORTED_VERSIONS))
            raise ValueError(
                f"Unsupported schema version '{value}'. Supported versions: {supported}"
            )
        return value

    @model_validator(mode="after")
    def validate_unique_ids(self) -> "CatalogSnapshot":
        """Reject duplicate ids within a table."""
        for table in (
            "cabinet_types",
            "cabinet_parts",
            "door_styles",
            "colors",
            "finishes",
            "price_ranges",
            "cabinet_type_finishes",
            "hardware_brands",
            "hardware_products",
            "hardware_requirements",
            "hardware_options",
        ):
            seen: set[str] = set()
            for row in getattr(self, table):
                if row.id in seen:
                    raise ValueError(f"Duplicate id '{row.id}' in {table}")
                seen.add(row.id)
        return self
