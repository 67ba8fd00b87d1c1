"""Adapter converting catalog snapshot schemas to domain entities.

The schemas mirror the data store's row shapes; the domain works with
frozen entities and resolved references. This module is the only place
that knows about both.
"""

from cabinet_pricing.application.catalog.schemas import (
    CatalogSnapshot,
    HardwareOptionSchema,
    HardwareProductSchema,
)
from cabinet_pricing.domain.entities import (
    CabinetPart,
    CabinetType,
    CabinetTypeFinish,
    Catalog,
    Color,
    DoorStyle,
    Finish,
    GlobalSetting,
    HardwareBrand,
    HardwareOption,
    HardwareProduct,
    HardwareRequirement,
    PriceRange,
)


def _product(schema: HardwareProductSchema) -> HardwareProduct:
    return HardwareProduct(**schema.model_dump())


def _option(
    schema: HardwareOptionSchema, products: dict[str, HardwareProduct]
) -> HardwareOption:
    """Resolve an option's product, preferring an embedded product row."""
    if schema.hardware_product is not None:
        product = _product(schema.hardware_product)
    else:
        product = products.get(schema.hardware_product_id)
    return HardwareOption(
        id=schema.id,
        requirement_id=schema.requirement_id,
        hardware_brand_id=schema.hardware_brand_id,
        hardware_product_id=schema.hardware_product_id,
        product=product,
        active=schema.active,
    )


def snapshot_to_catalog(snapshot: CatalogSnapshot) -> Catalog:
    """Convert a validated CatalogSnapshot to a domain Catalog.

    Args:
        snapshot: Validated catalog snapshot.

    Returns:
        Immutable Catalog with hardware options resolved to products.
    """
    products = [_product(p) for p in snapshot.hardware_products]
    products_by_id = {p.id: p for p in products}

    return Catalog(
        cabinet_types=tuple(CabinetType(**t.model_dump()) for t in snapshot.cabinet_types),
        cabinet_parts=tuple(CabinetPart(**p.model_dump()) for p in snapshot.cabinet_parts),
        door_styles=tuple(DoorStyle(**s.model_dump()) for s in snapshot.door_styles),
        colors=tuple(Color(**c.model_dump()) for c in snapshot.colors),
        finishes=tuple(Finish(**f.model_dump()) for f in snapshot.finishes),
        price_ranges=tuple(PriceRange(**r.model_dump()) for r in snapshot.price_ranges),
        cabinet_type_finishes=tuple(
            CabinetTypeFinish(**f.model_dump()) for f in snapshot.cabinet_type_finishes
        ),
        hardware_brands=tuple(
            HardwareBrand(**b.model_dump()) for b in snapshot.hardware_brands
        ),
        hardware_products=tuple(products),
        hardware_requirements=tuple(
            HardwareRequirement(**r.model_dump()) for r in snapshot.hardware_requirements
        ),
        hardware_options=tuple(
            _option(o, products_by_id) for o in snapshot.hardware_options
        ),
        global_settings=tuple(
            GlobalSetting(**s.model_dump()) for s in snapshot.global_settings
        ),
    )
