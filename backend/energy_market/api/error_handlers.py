"""Error Handlers — global exception handlers for the energy market API.

Invariants:
    - EnergyMarketError → structured JSON with error code, message, severity
    - RequestValidationError → same envelope as domain errors, context.field names
      the first offending field, details lists every field
    - Exception (catch-all) → never leaks internal details

Design Decisions:
    - Three-layer handler: domain (EnergyMarketError), validation (Pydantic), catch-all (Exception)
    - Business-rule rejections logged at WARNING, infrastructure failures at ERROR
"""

import logging
from datetime import datetime, timezone

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

from energy_market.core.errors import (
    EnergyMarketError, ErrorCategory, ErrorSeverity,
)

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_market_error_handler(app)
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def _register_market_error_handler(app: FastAPI) -> None:
    """Register market domain/infrastructure error handler."""

    @app.exception_handler(EnergyMarketError)
    async def market_error_handler(request: Request, exc: EnergyMarketError):
        """Handle all energy market domain/infrastructure errors."""
        level = logging.ERROR if exc.http_status >= 500 else logging.WARNING
        logger.log(
            level,
            f"EnergyMarketError: {exc.message}",
            extra={"error_code": exc.code, "path": request.url.path},
        )
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(),
        )


def _register_validation_error_handler(app: FastAPI) -> None:
    """Register Pydantic validation error handler."""

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        """Handle Pydantic validation errors."""
        logger.warning(
            f"Validation error on {request.url.path}: {exc.errors()}",
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=_build_validation_error_response(exc),
        )


def _register_generic_error_handler(app: FastAPI) -> None:
    """Register catch-all error handler."""

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all — never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": {
                    "code": "INTERNAL_ERROR",
                    "message": "An unexpected error occurred",
                    "category": ErrorCategory.INTERNAL.value,
                    "severity": ErrorSeverity.CRITICAL.value,
                    "timestamp": datetime.now(timezone.utc).isoformat(),
                },
            },
        )


_REQUEST_PARTS = ("body", "query", "path")


def _field_name(loc: tuple) -> str:
    """("body", "price_per_kwh") → "price_per_kwh"; whole-body errors → "body"."""
    parts = [str(p) for p in loc]
    if len(parts) > 1 and parts[0] in _REQUEST_PARTS:
        parts = parts[1:]
    return ".".join(parts)


def _build_validation_error_response(exc: RequestValidationError) -> dict:
    """Same envelope as EnergyMarketError.to_response(), context.field = first bad field."""
    details = [
        {"field": _field_name(e["loc"]), "message": e["msg"], "type": e["type"]}
        for e in exc.errors()
    ]
    return {
        "error": {
            "code": "VALIDATION_ERROR",
            "message": "Invalid request data",
            "category": ErrorCategory.VALIDATION.value,
            "severity": ErrorSeverity.ERROR.value,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "context": {
                "producer_id": None,
                "consumer_id": None,
                "field": details[0]["field"] if details else None,
            },
            "details": details,
        },
    }
