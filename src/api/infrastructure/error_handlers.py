"""JSON error envelopes for domain exceptions.

Bounded contexts raise HTTP-agnostic exceptions. Each context publishes a
mapping from its exception classes to HTTP status codes; this module renders
any mapped exception as ``{"success": false, "error": <message>}``.

Does NOT import from bounded contexts; the mappings are passed in by main.
"""

from __future__ import annotations

from collections.abc import Mapping

import structlog
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from shared_kernel.auth.access_identity import AuthenticationError
from shared_kernel.exceptions import ConfigurationError

ErrorStatusMap = Mapping[type[Exception], int]

SHARED_ERROR_STATUSES: ErrorStatusMap = {
    ConfigurationError: status.HTTP_500_INTERNAL_SERVER_ERROR,
    AuthenticationError: status.HTTP_401_UNAUTHORIZED,
}

INTERNAL_ERROR_MESSAGE = "Internal server error"

logger = structlog.get_logger()


def error_response(status_code: int, message: str) -> JSONResponse:
    """Build the error envelope."""
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "error": message},
    )


def status_for(exc: Exception, statuses: ErrorStatusMap) -> int | None:
    """Find the status for ``exc`` by walking its class hierarchy.

    The most specific mapped class wins.
    """
    for cls in type(exc).__mro__:
        if cls in statuses:
            return statuses[cls]
    return None


def install_error_handlers(app: FastAPI, *maps: ErrorStatusMap) -> None:
    """Register envelope handlers for every mapped exception class.

    Args:
        app: Application to install the handlers on.
        maps: Exception to status mappings, merged left to right.
    """
    statuses: dict[type[Exception], int] = dict(SHARED_ERROR_STATUSES)
    for mapping in maps:
        statuses.update(mapping)

    async def handle_domain_error(request: Request, exc: Exception) -> JSONResponse:
        status_code = status_for(exc, statuses) or status.HTTP_500_INTERNAL_SERVER_ERROR
        if status_code >= 500:
            logger.error(
                "request_failed",
                path=request.url.path,
                error_type=type(exc).__name__,
                error=str(exc),
            )
        return error_response(status_code, str(exc) or INTERNAL_ERROR_MESSAGE)

    async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
        logger.exception(
            "request_failed_unexpectedly",
            path=request.url.path,
            error_type=type(exc).__name__,
        )
        return error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR, INTERNAL_ERROR_MESSAGE
        )

    for exc_class in statuses:
        app.add_exception_handler(exc_class, handle_domain_error)
    app.add_exception_handler(Exception, handle_unexpected_error)
