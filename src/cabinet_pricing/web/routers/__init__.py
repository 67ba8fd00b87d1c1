"""API routers for the REST API."""

from cabinet_pricing.web.routers.price import router as price_router
from cabinet_pricing.web.routers.tables import router as tables_router
from cabinet_pricing.web.routers.validate import router as validate_router

__all__ = [
    "price_router",
    "tables_router",
    "validate_router",
]
