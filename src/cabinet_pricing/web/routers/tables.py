"""Price table endpoint."""

from fastapi import APIRouter, HTTPException

from cabinet_pricing.application.catalog import load_catalog_from_dict, snapshot_to_catalog
from cabinet_pricing.infrastructure import price_table_to_dict
from cabinet_pricing.web.dependencies import PriceTableGeneratorDep
from cabinet_pricing.web.schemas.requests import PriceTableRequest
from cabinet_pricing.web.schemas.responses import ErrorResponseSchema, PriceTableSchema

router = APIRouter(prefix="/price-table", tags=["price-table"])


@router.post(
    "",
    response_model=PriceTableSchema,
    responses={404: {"model": ErrorResponseSchema}, 422: {"model": ErrorResponseSchema}},
)
async def generate_price_table(
    request: PriceTableRequest,
    generator: PriceTableGeneratorDep,
) -> PriceTableSchema:
    """Generate the width-range x finish price table for a cabinet type."""
    catalog = snapshot_to_catalog(load_catalog_from_dict(request.catalog))
    try:
        table = generator.generate_for_catalog(
            catalog, request.cabinet_type_id, request.hardware_brand_id
        )
    except KeyError as e:
        raise HTTPException(
            status_code=404,
            detail={
                "error": f"Cabinet type not found: {request.cabinet_type_id}",
                "error_type": "not_found",
            },
        ) from e
    return PriceTableSchema.model_validate(price_table_to_dict(table))
