"""Service factory for dependency injection."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from cabinet_pricing.application.cache import PriceTableCache
    from cabinet_pricing.application.configurator import ConfiguratorPreview
    from cabinet_pricing.domain.entities import Catalog
    from cabinet_pricing.domain.services import PriceTableGenerator, PricingEngine
    from cabinet_pricing.infrastructure.formatters import (
        PriceBreakdownFormatter,
        PriceTableFormatter,
    )


@dataclass
class ServiceFactory:
    """Factory for creating service instances.

    Centralizes service instantiation so the CLI and API share one
    pricing engine and one price table cache, and tests can swap them.
    """

    # Cached instances (use field with init=False for dataclass)
    _pricing_engine: "PricingEngine | None" = field(default=None, init=False, repr=False)
    _price_table_generator: "PriceTableGenerator | None" = field(
        default=None, init=False, repr=False
    )
    _price_table_cache: "PriceTableCache | None" = field(
        default=None, init=False, repr=False
    )

    def get_pricing_engine(self) -> "PricingEngine":
        """Get or create the pricing engine."""
        if self._pricing_engine is None:
            from cabinet_pricing.domain.services import PricingEngine

            self._pricing_engine = PricingEngine()
        return self._pricing_engine

    def get_price_table_generator(self) -> "PriceTableGenerator":
        """Get or create the price table generator."""
        if self._price_table_generator is None:
            from cabinet_pricing.domain.services import PriceTableGenerator

            self._price_table_generator = PriceTableGenerator(self.get_pricing_engine())
        return self._price_table_generator

    def get_price_table_cache(self) -> "PriceTableCache":
        """Get or create the price table cache."""
        if self._price_table_cache is None:
            from cabinet_pricing.application.cache import PriceTableCache

            self._price_table_cache = PriceTableCache(self.get_price_table_generator())
        return self._price_table_cache

    def create_configurator(self, catalog: "Catalog") -> "ConfiguratorPreview":
        """Create a configurator preview bound to a catalog."""
        from cabinet_pricing.application.configurator import ConfiguratorPreview

        return ConfiguratorPreview(catalog, self.get_pricing_engine())

    def get_breakdown_formatter(self) -> "PriceBreakdownFormatter":
        from cabinet_pricing.infrastructure.formatters import PriceBreakdownFormatter

        return PriceBreakdownFormatter()

    def get_table_formatter(self) -> "PriceTableFormatter":
        from cabinet_pricing.infrastructure.formatters import PriceTableFormatter

        return PriceTableFormatter()


# Default factory instance
_default_factory: ServiceFactory | None = None


def get_factory() -> ServiceFactory:
    """Get the default service factory."""
    global _default_factory
    if _default_factory is None:
        _default_factory = ServiceFactory()
    return _default_factory


def set_factory(factory: ServiceFactory | None) -> None:
    """Set a custom factory (for testing)."""
    global _default_factory
    _default_factory = factory


def reset_factory() -> None:
    """Reset the factory to default (for testing cleanup)."""
    global _default_factory
    _default_factory = None
