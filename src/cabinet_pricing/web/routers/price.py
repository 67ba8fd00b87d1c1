"""Configuration pricing endpoint."""

from fastapi import APIRouter, HTTPException

from cabinet_pricing.application import ConfigurationRequest
from cabinet_pricing.application.catalog import load_catalog_from_dict, snapshot_to_catalog
from cabinet_pricing.infrastructure import preview_to_dict
from cabinet_pricing.web.dependencies import ServiceFactoryDep
from cabinet_pricing.web.schemas.requests import PriceRequest
from cabinet_pricing.web.schemas.responses import ErrorResponseSchema, PricePreviewSchema

router = APIRouter(prefix="/price", tags=["price"])


@router.post(
    "",
    response_model=PricePreviewSchema,
    responses={404: {"model": ErrorResponseSchema}, 422: {"model": ErrorResponseSchema}},
)
async def price_configuration(
    request: PriceRequest,
    factory: ServiceFactoryDep,
) -> PricePreviewSchema:
    """Price a cabinet configuration against a catalog snapshot.

    Raises:
        HTTPException: 404 if the cabinet type is not in the catalog.
        CatalogError: If the snapshot is invalid (422).
        InvalidPricingInputError, InputOutOfRangeError: For bad dimensions
            or quantity (422).
    """
    catalog = snapshot_to_catalog(load_catalog_from_dict(request.catalog))
    if catalog.cabinet_type(request.configuration.cabinet_type_id) is None:
        raise HTTPException(
            status_code=404,
            detail={
                "error": f"Cabinet type not found: {request.configuration.cabinet_type_id}",
                "error_type": "not_found",
            },
        )

    preview = factory.create_configurator(catalog).preview(
        ConfigurationRequest(**request.configuration.model_dump())
    )
    if preview.rejection is not None:
        raise preview.rejection
    return PricePreviewSchema.model_validate(preview_to_dict(preview))
