"""Configurator price preview.

Turns the ids and dimensions a customer picks in the configurator into a
live price. Unknown ids are reported as diagnostics and priced as if they
were not selected; invalid or out-of-range input produces a preview with
errors and no price instead of raising.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any

from cabinet_pricing.application.cart import CartLineItem
from cabinet_pricing.domain.entities import Catalog, Color, DoorStyle, Finish
from cabinet_pricing.domain.errors import (
    InputOutOfRangeError,
    InvalidPricingInputError,
    PricingError,
)
from cabinet_pricing.domain.services import (
    NO_BRAND,
    PriceBreakdown,
    PricingEngine,
    PricingRequest,
    PricingSettings,
    parse_global_settings,
)
from cabinet_pricing.domain.value_objects import (
    DiagnosticKind,
    PricingDiagnostic,
    round_money,
    to_decimal,
)

logger = logging.getLogger(__name__)


@dataclass
class ConfigurationRequest:
    """Input DTO for a configurator selection.

    Dimensions are in millimetres; any left as None fall back to the
    cabinet type's defaults.
    """

    cabinet_type_id: str
    width: Decimal | float | int | None = None
    height: Decimal | float | int | None = None
    depth: Decimal | float | int | None = None
    door_style_id: str | None = None
    color_id: str | None = None
    finish_id: str | None = None
    hardware_brand_id: str | None = None
    quantity: int = 1


@dataclass(frozen=True)
class PricePreview:
    """Result of previewing a configuration.

    Attributes:
        request: The configuration that was priced.
        unit_price: Ex-GST price of one cabinet, None when errors exist.
        total_price: unit_price x quantity, None when errors exist.
        breakdown: Engine breakdown, None when errors exist.
        diagnostics: Non-fatal problems (unknown ids, bad formulas...).
        errors: Validation errors that prevented pricing.
        can_add_to_cart: Whether the configuration may be ordered.
        rejection: The input error behind ``errors``, if any.
    """

    request: ConfigurationRequest
    dimensions: tuple[Decimal, Decimal, Decimal] | None = None
    unit_price: Decimal | None = None
    total_price: Decimal | None = None
    breakdown: PriceBreakdown | None = None
    diagnostics: tuple[PricingDiagnostic, ...] = ()
    errors: tuple[str, ...] = ()
    can_add_to_cart: bool = False
    cabinet_name: str = ""
    rejection: PricingError | None = field(default=None, compare=False)

    def to_line_item(self) -> CartLineItem:
        """Persist this preview's prices as a cart line item.

        Raises:
            ValueError: If the preview cannot be added to the cart.
        """
        if not self.can_add_to_cart or self.unit_price is None or self.dimensions is None:
            reason = "; ".join(self.errors) or "configuration is incomplete"
            raise ValueError(f"Cannot add to cart: {reason}")
        width, height, depth = (f"{d.normalize():f}" for d in self.dimensions)
        return CartLineItem(
            cabinet_type_id=self.request.cabinet_type_id,
            description=f"{self.cabinet_name} {width}x{height}x{depth}mm",
            unit_price=self.unit_price,
            quantity=self.request.quantity,
            total_price=self.total_price if self.total_price is not None else self.unit_price,
            configuration=_configuration_dict(self.request, self.dimensions),
        )


class ConfiguratorPreview:
    """Prices configurator selections against a catalog."""

    def __init__(self, catalog: Catalog, engine: PricingEngine | None = None) -> None:
        self.catalog = catalog
        self.engine = engine or PricingEngine()
        self.settings: PricingSettings = parse_global_settings(catalog.global_settings)

    def preview(self, request: ConfigurationRequest) -> PricePreview:
        """Price a configuration.

        Returns:
            PricePreview; never raises for bad input.
        """
        catalog = self.catalog
        cabinet_type = catalog.cabinet_type(request.cabinet_type_id)
        if cabinet_type is None:
            return PricePreview(
                request=request,
                errors=(f"Unknown cabinet type {request.cabinet_type_id!r}",),
            )

        diagnostics: list[PricingDiagnostic] = []
        door_style: DoorStyle | None = self._lookup(
            catalog.door_style, "door style", request.door_style_id, diagnostics
        )
        color: Color | None = self._lookup(
            catalog.color, "color", request.color_id, diagnostics
        )
        if color is not None and (
            door_style is None or color.door_style_id != door_style.id
        ):
            diagnostics.append(
                PricingDiagnostic(
                    kind=DiagnosticKind.MISSING_REFERENCE_DATA,
                    message="Color does not belong to the selected door style; ignored",
                    subject=color.id,
                )
            )
            color = None
        finish: Finish | None = self._lookup(
            catalog.finish, "finish", request.finish_id, diagnostics
        )
        brand_id = request.hardware_brand_id
        if brand_id and brand_id != NO_BRAND and catalog.hardware_brand(brand_id) is None:
            diagnostics.append(
                PricingDiagnostic(
                    kind=DiagnosticKind.MISSING_REFERENCE_DATA,
                    message="Hardware brand not found",
                    subject=brand_id,
                )
            )

        dimensions = (
            cabinet_type.default_width_mm if request.width is None else request.width,
            cabinet_type.default_height_mm if request.height is None else request.height,
            cabinet_type.default_depth_mm if request.depth is None else request.depth,
        )
        pricing_request = PricingRequest(
            cabinet_type=cabinet_type,
            width=dimensions[0],
            height=dimensions[1],
            depth=dimensions[2],
            quantity=request.quantity,
            cabinet_parts=catalog.parts_for(cabinet_type.id),
            settings=self.settings,
            door_style=door_style,
            color=color,
            finish=finish,
            hardware_brand_id=brand_id,
            hardware_requirements=catalog.hardware_requirements_for(cabinet_type.id),
            hardware_options=catalog.hardware_options,
        )
        try:
            breakdown = self.engine.calculate_breakdown(pricing_request)
        except (InputOutOfRangeError, InvalidPricingInputError) as e:
            logger.info("Configuration for %s rejected: %s", cabinet_type.id, e)
            return PricePreview(
                request=request,
                diagnostics=tuple(diagnostics),
                errors=(str(e),),
                cabinet_name=cabinet_type.name,
                rejection=e,
            )

        diagnostics.extend(breakdown.diagnostics)
        needs_door_style = any(p.is_door for p in breakdown.part_areas)
        return PricePreview(
            request=request,
            dimensions=(
                to_decimal(dimensions[0]),
                to_decimal(dimensions[1]),
                to_decimal(dimensions[2]),
            ),
            unit_price=breakdown.total,
            total_price=round_money(breakdown.total * request.quantity),
            breakdown=breakdown,
            diagnostics=tuple(diagnostics),
            can_add_to_cart=door_style is not None or not needs_door_style,
            cabinet_name=cabinet_type.name,
        )

    @staticmethod
    def _lookup(
        finder: Any,
        label: str,
        row_id: str | None,
        diagnostics: list[PricingDiagnostic],
    ) -> Any:
        if not row_id:
            return None
        row = finder(row_id)
        if row is None:
            diagnostics.append(
                PricingDiagnostic(
                    kind=DiagnosticKind.MISSING_REFERENCE_DATA,
                    message=f"{label.capitalize()} not found",
                    subject=row_id,
                )
            )
        return row


def _configuration_dict(
    request: ConfigurationRequest, dimensions: tuple[Decimal, Decimal, Decimal]
) -> dict[str, object]:
    data: dict[str, object] = {
        "width": dimensions[0],
        "height": dimensions[1],
        "depth": dimensions[2],
    }
    for key in ("door_style_id", "color_id", "finish_id", "hardware_brand_id"):
        value = getattr(request, key)
        if value is not None:
            data[key] = value
    return data
