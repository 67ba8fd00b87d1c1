"""FastAPI dependency injection for pricing services.

Catalog snapshots arrive with each request, so only the stateless
services are shared between requests.
"""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends

from cabinet_pricing.application.factory import ServiceFactory, get_factory
from cabinet_pricing.domain.services import PriceTableGenerator


@lru_cache(maxsize=1)
def get_service_factory() -> ServiceFactory:
    """Get cached ServiceFactory instance."""
    return get_factory()


def get_price_table_generator(
    factory: Annotated[ServiceFactory, Depends(get_service_factory)],
) -> PriceTableGenerator:
    return factory.get_price_table_generator()


ServiceFactoryDep = Annotated[ServiceFactory, Depends(get_service_factory)]
PriceTableGeneratorDep = Annotated[PriceTableGenerator, Depends(get_price_table_generator)]
