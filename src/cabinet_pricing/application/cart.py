"""Cart line items and order totals.

Line items persist the unit price and line total calculated when the
configuration was added, so later catalog changes never reprice a cart.
GST is applied here, on the subtotal, never by the pricing engine.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal

from cabinet_pricing.domain.services.settings import PricingSettings
from cabinet_pricing.domain.value_objects import ZERO, round_money, to_decimal


@dataclass(frozen=True)
class CartLineItem:
    """A priced cabinet configuration in the cart.

    Attributes:
        cabinet_type_id: Cabinet type that was configured.
        description: Display text, e.g. "2 Door Base 600x720x560mm".
        unit_price: Ex-GST price of one cabinet.
        quantity: Number of identical cabinets.
        total_price: unit_price x quantity, rounded to cents.
        configuration: Selected ids and dimensions, kept for re-display.
    """

    cabinet_type_id: str
    description: str
    unit_price: Decimal
    quantity: int
    total_price: Decimal
    configuration: dict[str, object] = field(default_factory=dict, compare=False)

    def __post_init__(self) -> None:
        if self.quantity < 1:
            raise ValueError(f"Line item quantity must be at least 1, got {self.quantity}")

    @classmethod
    def priced(
        cls,
        cabinet_type_id: str,
        description: str,
        unit_price: Decimal,
        quantity: int,
        configuration: dict[str, object] | None = None,
    ) -> "CartLineItem":
        """Build a line item, deriving total_price from unit price and quantity."""
        unit_price = round_money(to_decimal(unit_price))
        return cls(
            cabinet_type_id=cabinet_type_id,
            description=description,
            unit_price=unit_price,
            quantity=quantity,
            total_price=round_money(unit_price * quantity),
            configuration=dict(configuration or {}),
        )


@dataclass
class Cart:
    """Collection of line items with GST-inclusive totals."""

    items: list[CartLineItem] = field(default_factory=list)
    gst_rate: Decimal = Decimal("0.10")

    @classmethod
    def from_settings(cls, settings: PricingSettings) -> "Cart":
        return cls(gst_rate=settings.gst_rate)

    def add(self, item: CartLineItem) -> None:
        self.items.append(item)

    def remove(self, index: int) -> CartLineItem:
        return self.items.pop(index)

    def clear(self) -> None:
        self.items.clear()

    @property
    def item_count(self) -> int:
        return sum(item.quantity for item in self.items)

    @property
    def subtotal(self) -> Decimal:
        """Sum of line totals, ex-GST."""
        return round_money(sum((item.total_price for item in self.items), ZERO))

    @property
    def gst(self) -> Decimal:
        return round_money(self.subtotal * self.gst_rate)

    @property
    def total(self) -> Decimal:
        """Subtotal plus GST."""
        return self.subtotal + self.gst
