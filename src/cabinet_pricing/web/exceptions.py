"""Custom exceptions and error handlers for the REST API."""

from fastapi import FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from cabinet_pricing.application.catalog import CatalogError
from cabinet_pricing.domain.errors import InputOutOfRangeError, InvalidPricingInputError


def register_exception_handlers(app: FastAPI) -> None:
    """Register custom exception handlers with the FastAPI app."""

    @app.exception_handler(CatalogError)
    async def catalog_error_handler(request: Request, exc: CatalogError) -> JSONResponse:
        return JSONResponse(
            status_code=422,
            content={
                "error": exc.message,
                "error_type": f"catalog_{exc.error_type}",
                "details": exc.details or None,
            },
        )

    @app.exception_handler(InvalidPricingInputError)
    async def invalid_input_handler(
        request: Request, exc: InvalidPricingInputError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=422,
            content={
                "error": str(exc),
                "error_type": "invalid_input",
                "details": [{"field": exc.field, "value": repr(exc.value)}],
            },
        )

    @app.exception_handler(InputOutOfRangeError)
    async def out_of_range_handler(
        request: Request, exc: InputOutOfRangeError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=422,
            content={
                "error": str(exc),
                "error_type": "out_of_range",
                "details": [
                    {
                        "dimension": exc.dimension,
                        "value": float(exc.value),
                        "minimum": None if exc.minimum is None else float(exc.minimum),
                        "maximum": None if exc.maximum is None else float(exc.maximum),
                    }
                ],
            },
        )


    @app.exception_handler(StarletteHTTPException)
    async def flat_http_error_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        # Routers raise HTTPException(detail={"error": ..., "error_type": ...});
        # send those in the same shape as the 422 errors above.
        if not isinstance(exc.detail, dict) or "error" not in exc.detail:
            return await http_exception_handler(request, exc)
        return JSONResponse(
            status_code=exc.status_code,
            content={"details": None, **exc.detail},
            headers=getattr(exc, "headers", None),
        )
