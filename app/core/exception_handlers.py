"""Exception handlers: one JSON error shape for every failure.

Every error body is ``{"error": <code>, "message": <text>, "details": ...}``
so the flow builder client can show ``message`` verbatim (cycle messages are
written for end users) and read ``details.cycle`` when it wants to highlight
the loop. Register with register_exception_handlers(app).
"""

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.config import get_settings
from app.domain.exceptions import FlowSenseException

logger = logging.getLogger(__name__)

# Domain error_code -> HTTP status. Unlisted codes are client errors (400).
ERROR_CODE_STATUS: dict[str, int] = {
    "RESOURCE_NOT_FOUND": 404,
    "VALIDATION_ERROR": 400,
    "CYCLE_DETECTED": 400,
    "INVALID_TAT_CONFIG": 400,
    "SERVICE_UNAVAILABLE": 503,
}


def _error_body(error: str, message: Any, details: Any = None) -> dict[str, Any]:
    body: dict[str, Any] = {"error": error, "message": message}
    if details is not None:
        body["details"] = details
    return body


def _flowsense_exception_handler(
    request: Request, exc: FlowSenseException
) -> JSONResponse:
    status = ERROR_CODE_STATUS.get(exc.error_code, 400)
    if status >= 500:
        logger.error("%s %s -> %s: %s", request.method, request.url.path, exc.error_code, exc.message)
    else:
        logger.info("%s %s -> %s: %s", request.method, request.url.path, exc.error_code, exc.message)
    return JSONResponse(status_code=status, content=exc.to_dict())


def _validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Malformed request body/query: 422 with pydantic's error list."""
    return JSONResponse(
        status_code=422,
        content=_error_body(
            "VALIDATION_ERROR",
            "Request validation failed",
            jsonable_encoder(exc.errors()),
        ),
    )


def _http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body("HTTP_ERROR", exc.detail),
        headers=getattr(exc, "headers", None),
    )


def _rate_limit_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    """Too many writes from one client: 429 in the common error shape."""
    logger.warning("Rate limit hit on %s %s: %s", request.method, request.url.path, exc.detail)
    return JSONResponse(
        status_code=429,
        content=_error_body("RATE_LIMITED", f"Rate limit exceeded: {exc.detail}"),
    )


def _generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Anything unexpected: 500, with the exception text only in debug mode."""
    logger.exception("Unhandled exception on %s %s", request.method, request.url.path)
    message = str(exc) if get_settings().debug else "Internal server error"
    return JSONResponse(status_code=500, content=_error_body("INTERNAL_ERROR", message))


def register_exception_handlers(app: FastAPI) -> None:
    """Register all handlers on app; call once in create_app()."""
    app.add_exception_handler(FlowSenseException, _flowsense_exception_handler)
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(RateLimitExceeded, _rate_limit_handler)
    app.add_exception_handler(Exception, _generic_exception_handler)
