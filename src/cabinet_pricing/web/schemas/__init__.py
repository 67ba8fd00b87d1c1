"""Pydantic schemas for the REST API."""

from cabinet_pricing.web.schemas.requests import (
    CatalogValidateRequest,
    ConfigurationSchema,
    PriceRequest,
    PriceTableRequest,
)
from cabinet_pricing.web.schemas.responses import (
    BreakdownSchema,
    DiagnosticSchema,
    ErrorResponseSchema,
    PricePreviewSchema,
    PriceTableSchema,
    ValidationResultSchema,
)

__all__ = [
    # Requests
    "CatalogValidateRequest",
    "ConfigurationSchema",
    "PriceRequest",
    "PriceTableRequest",
    # Responses
    "BreakdownSchema",
    "DiagnosticSchema",
    "ErrorResponseSchema",
    "PricePreviewSchema",
    "PriceTableSchema",
    "ValidationResultSchema",
]
