"""
Exception handlers for the FastAPI application.

A global handler logs any unhandled exception with an error ID and the
request context. Errors from outbound integrations are mapped to gateway
statuses: a missing credential is 503, a failed upstream call is 502.
"""

import traceback

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from leadsync.core.logging_config import get_logger
from leadsync.integrations.errors import IntegrationError, IntegrationNotConfiguredError

logger = get_logger(__name__)


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Global exception handler to log detailed error information.

    It logs the full error context and returns a JSON response with an error ID
    that clients can use to reference the error when reporting issues.

    Args:
        request: The HTTP request that caused the exception
        exc: The exception that was raised

    Returns:
        JSONResponse with error details and error ID
    """
    error_id = id(exc)

    logger.error(
        f"Unhandled exception [{error_id}] in {request.method} {request.url.path}: {str(exc)}",
        exc_info=exc,
        extra={
            "error_id": error_id,
            "method": request.method,
            "path": request.url.path,
            "query_params": dict(request.query_params),
            "client": request.client.host if request.client else "unknown",
            "error_type": type(exc).__name__,
            "traceback": "".join(traceback.format_exception(type(exc), exc, exc.__traceback__)),
        },
    )

    return JSONResponse(
        status_code=500,
        content={
            "detail": "Internal server error",
            "error_id": error_id,
            "error_type": type(exc).__name__,
        },
    )


async def integration_not_configured_handler(request: Request, exc: IntegrationNotConfiguredError) -> JSONResponse:
    logger.error(f"{request.method} {request.url.path}: {exc}")
    return JSONResponse(status_code=503, content={"detail": str(exc)})


async def integration_error_handler(request: Request, exc: IntegrationError) -> JSONResponse:
    """Report a failed call to Google, Stripe or Resend as a bad gateway."""
    logger.warning(
        f"Upstream error in {request.method} {request.url.path}: {exc} (status={exc.status_code})",
        extra={"upstream_status": exc.status_code, "details": exc.details},
    )
    return JSONResponse(
        status_code=502,
        content={
            "detail": str(exc),
            "error_type": type(exc).__name__,
            "upstream_status": exc.status_code,
        },
    )


def setup_exception_handlers(app: FastAPI) -> None:
    """
    Register exception handlers with the FastAPI application.

    Args:
        app: The FastAPI application instance
    """
    app.add_exception_handler(IntegrationNotConfiguredError, integration_not_configured_handler)
    app.add_exception_handler(IntegrationError, integration_error_handler)
    app.add_exception_handler(Exception, global_exception_handler)
    logger.debug("Exception handlers registered successfully")
