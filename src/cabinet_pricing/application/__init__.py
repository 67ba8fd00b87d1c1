"""Application layer - catalog loading, configurator preview and cart."""

from .cache import CatalogChangeEvent, PriceTableCache
from .cart import Cart, CartLineItem
from .configurator import ConfigurationRequest, ConfiguratorPreview, PricePreview
from .factory import ServiceFactory, get_factory

__all__ = [
    "Cart",
    "CartLineItem",
    "CatalogChangeEvent",
    "ConfigurationRequest",
    "ConfiguratorPreview",
    "PricePreview",
    "PriceTableCache",
    "ServiceFactory",
    "get_factory",
]
