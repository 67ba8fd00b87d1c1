"""Catalog validation endpoint."""

from fastapi import APIRouter

from cabinet_pricing.application.catalog import (
    load_catalog_from_dict,
    snapshot_to_catalog,
    validate_catalog,
)
from cabinet_pricing.web.schemas.requests import CatalogValidateRequest
from cabinet_pricing.web.schemas.responses import ErrorResponseSchema, ValidationResultSchema

router = APIRouter(prefix="/validate", tags=["validate"])


@router.post(
    "",
    response_model=ValidationResultSchema,
    responses={422: {"model": ErrorResponseSchema}},
)
async def validate_catalog_snapshot(
    request: CatalogValidateRequest,
) -> ValidationResultSchema:
    """Validate a catalog snapshot without pricing anything.

    Schema problems are reported as a 422 CatalogError response; cross-row
    problems are returned as errors and warnings.
    """
    catalog = snapshot_to_catalog(load_catalog_from_dict(request.catalog))
    result = validate_catalog(catalog)

    return ValidationResultSchema(
        is_valid=result.is_valid,
        errors=[{"message": e.message, "path": e.path} for e in result.errors],
        warnings=[{"message": w.message, "path": w.path} for w in result.warnings],
    )
