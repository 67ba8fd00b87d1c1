"""Catalog entities read by the pricing engine.

All entities are immutable snapshots of catalog rows. Numeric fields are
coerced to ``Decimal`` on construction so that pricing arithmetic never
mixes binary floats into money amounts.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal

from .value_objects import UnitScope, to_decimal


def _coerce_decimals(obj: object, *names: str) -> None:
    """Replace the named attributes of a frozen dataclass with Decimals."""
    for name in names:
        value = getattr(obj, name)
        if value is not None:
            object.__setattr__(obj, name, to_decimal(value))


@dataclass(frozen=True)
class CabinetType:
    """A catalog product definition such as "2 Door Base Cabinet".

    Dimensions are in millimetres. Min/max bounds are optional; when
    present the engine rejects requests outside them.
    """

    id: str
    name: str
    default_width_mm: Decimal
    default_height_mm: Decimal
    default_depth_mm: Decimal
    category: str = "base"
    min_width_mm: Decimal | None = None
    max_width_mm: Decimal | None = None
    min_height_mm: Decimal | None = None
    max_height_mm: Decimal | None = None
    min_depth_mm: Decimal | None = None
    max_depth_mm: Decimal | None = None
    door_count: int = 0
    drawer_count: int = 0
    active: bool = True

    def __post_init__(self) -> None:
        _coerce_decimals(
            self,
            "default_width_mm",
            "default_height_mm",
            "default_depth_mm",
            "min_width_mm",
            "max_width_mm",
            "min_height_mm",
            "max_height_mm",
            "min_depth_mm",
            "max_depth_mm",
        )

    def bounds(self, dimension: str) -> tuple[Decimal | None, Decimal | None]:
        """Return the (min, max) bounds for "width", "height" or "depth"."""
        return (
            getattr(self, f"min_{dimension}_mm"),
            getattr(self, f"max_{dimension}_mm"),
        )

    def default(self, dimension: str) -> Decimal:
        """Return the default value for "width", "height" or "depth"."""
        return getattr(self, f"default_{dimension}_mm")


@dataclass(frozen=True)
class CabinetPart:
    """A structural part of a cabinet type.

    The width and height formulas are arithmetic expressions over the
    requested cabinet dimensions, e.g. ``"width - 36"`` or ``"height"``.
    """

    id: str
    cabinet_type_id: str
    part_name: str
    quantity: int = 1
    width_formula: str | None = None
    height_formula: str | None = None
    is_door: bool = False
    is_hardware: bool = False


@dataclass(frozen=True)
class DoorStyle:
    id: str
    name: str
    base_rate_per_sqm: Decimal
    active: bool = True

    def __post_init__(self) -> None:
        _coerce_decimals(self, "base_rate_per_sqm")


@dataclass(frozen=True)
class Color:
    id: str
    door_style_id: str
    name: str
    surcharge_rate_per_sqm: Decimal = Decimal(0)
    hex_code: str | None = None
    active: bool = True

    def __post_init__(self) -> None:
        _coerce_decimals(self, "surcharge_rate_per_sqm")


@dataclass(frozen=True)
class Finish:
    """A brand-specific surface treatment applied to carcass material."""

    id: str
    brand_id: str
    name: str
    rate_per_sqm: Decimal
    finish_type: str = ""
    active: bool = True

    def __post_init__(self) -> None:
        _coerce_decimals(self, "rate_per_sqm")


@dataclass(frozen=True)
class PriceRange:
    """A width bucket used to tabulate prices, e.g. "400-449mm"."""

    id: str
    cabinet_type_id: str
    label: str
    min_width_mm: Decimal
    max_width_mm: Decimal
    sort_order: int = 0
    active: bool = True

    def __post_init__(self) -> None:
        _coerce_decimals(self, "min_width_mm", "max_width_mm")

    @property
    def midpoint_mm(self) -> Decimal:
        """Representative width of the bucket."""
        return (self.min_width_mm + self.max_width_mm) / 2


@dataclass(frozen=True)
class CabinetTypeFinish:
    """An allowed door style (and optional color/finish) for a cabinet type.

    ``depth_mm`` overrides the cabinet type's default depth when pricing
    this combination in a price table.
    """

    id: str
    cabinet_type_id: str
    door_style_id: str
    color_id: str | None = None
    finish_id: str | None = None
    depth_mm: Decimal | None = None
    sort_order: int = 0
    active: bool = True

    def __post_init__(self) -> None:
        _coerce_decimals(self, "depth_mm")


@dataclass(frozen=True)
class HardwareProduct:
    id: str
    name: str
    hardware_brand_id: str
    cost_per_unit: Decimal
    active: bool = True

    def __post_init__(self) -> None:
        _coerce_decimals(self, "cost_per_unit")


@dataclass(frozen=True)
class HardwareRequirement:
    """Hardware a cabinet type needs, e.g. 2 hinges per door."""

    id: str
    cabinet_type_id: str
    quantity: int = 1
    unit_scope: UnitScope = UnitScope.PER_CABINET
    hardware_type: str = ""
    active: bool = True

    def units_for(self, cabinet_type: CabinetType) -> int:
        """Number of units required for one cabinet of the given type."""
        if self.unit_scope == UnitScope.PER_DOOR:
            return self.quantity * cabinet_type.door_count
        if self.unit_scope == UnitScope.PER_DRAWER:
            return self.quantity * cabinet_type.drawer_count
        return self.quantity


@dataclass(frozen=True)
class HardwareOption:
    """Brand-specific product fulfilling a hardware requirement."""

    id: str
    requirement_id: str
    hardware_brand_id: str
    hardware_product_id: str
    product: HardwareProduct | None = None
    active: bool = True


@dataclass(frozen=True)
class HardwareBrand:
    id: str
    name: str
    active: bool = True


@dataclass(frozen=True)
class GlobalSetting:
    setting_key: str
    setting_value: str
    description: str | None = None


@dataclass(frozen=True)
class Catalog:
    """An immutable snapshot of all catalog tables the engine reads.

    Lookups by id are provided for the id-bearing tables; the per-type
    accessors return rows in their display order.
    """

    cabinet_types: tuple[CabinetType, ...] = ()
    cabinet_parts: tuple[CabinetPart, ...] = ()
    door_styles: tuple[DoorStyle, ...] = ()
    colors: tuple[Color, ...] = ()
    finishes: tuple[Finish, ...] = ()
    price_ranges: tuple[PriceRange, ...] = ()
    cabinet_type_finishes: tuple[CabinetTypeFinish, ...] = ()
    hardware_brands: tuple[HardwareBrand, ...] = ()
    hardware_products: tuple[HardwareProduct, ...] = ()
    hardware_requirements: tuple[HardwareRequirement, ...] = ()
    hardware_options: tuple[HardwareOption, ...] = ()
    global_settings: tuple[GlobalSetting, ...] = ()
    _index: dict[str, dict[str, object]] = field(
        default_factory=dict, init=False, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        for table in (
            "cabinet_types",
            "door_styles",
            "colors",
            "finishes",
            "hardware_brands",
            "hardware_products",
        ):
            self._index[table] = {row.id: row for row in getattr(self, table)}

    def _lookup(self, table: str, row_id: str | None) -> object | None:
        if row_id is None:
            return None
        return self._index[table].get(row_id)

    def cabinet_type(self, cabinet_type_id: str | None) -> CabinetType | None:
        return self._lookup("cabinet_types", cabinet_type_id)  # type: ignore[return-value]

    def door_style(self, door_style_id: str | None) -> DoorStyle | None:
        return self._lookup("door_styles", door_style_id)  # type: ignore[return-value]

    def color(self, color_id: str | None) -> Color | None:
        return self._lookup("colors", color_id)  # type: ignore[return-value]

    def finish(self, finish_id: str | None) -> Finish | None:
        return self._lookup("finishes", finish_id)  # type: ignore[return-value]

    def hardware_brand(self, brand_id: str | None) -> HardwareBrand | None:
        return self._lookup("hardware_brands", brand_id)  # type: ignore[return-value]

    def hardware_product(self, product_id: str | None) -> HardwareProduct | None:
        return self._lookup("hardware_products", product_id)  # type: ignore[return-value]

    def parts_for(self, cabinet_type_id: str) -> list[CabinetPart]:
        return [p for p in self.cabinet_parts if p.cabinet_type_id == cabinet_type_id]

    def price_ranges_for(self, cabinet_type_id: str) -> list[PriceRange]:
        return sorted(
            (r for r in self.price_ranges if r.cabinet_type_id == cabinet_type_id),
            key=lambda r: (r.sort_order, r.min_width_mm),
        )

    def finishes_for(self, cabinet_type_id: str) -> list[CabinetTypeFinish]:
        return sorted(
            (
                f
                for f in self.cabinet_type_finishes
                if f.cabinet_type_id == cabinet_type_id
            ),
            key=lambda f: f.sort_order,
        )

    def hardware_requirements_for(
        self, cabinet_type_id: str
    ) -> list[HardwareRequirement]:
        return [
            r
            for r in self.hardware_requirements
            if r.cabinet_type_id == cabinet_type_id
        ]
