"""
Exception handlers for the /__i18n endpoints

The routing core raises UnknownLocaleError when asked for a URL in a
locale the site does not serve, and ConfigError when the locale map is
broken. Both, plus FastAPI's own 404/405/422 errors, are rendered in one
envelope that carries the request id set by the logging middleware:

{
    "error": {
        "status_code": 404,
        "type": "Unknown Locale",
        "message": "Locale 'fr' is not configured",
        "details": {"locale": "fr", "available": ["zh-CN", "en-US"]},
        "path": "/__i18n/switch",
        "request_id": "3f2c..."
    }
}
"""

import logging
from typing import Any, Union

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError as PydanticValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from i18n_router.exceptions import I18nRouterError
from i18n_router.middleware.logging import get_request_id

logger = logging.getLogger(__name__)

# Types for errors raised outside the routing core
HTTP_ERROR_TYPES = {
    404: "Not Found",
    405: "Method Not Allowed",
    422: "Invalid Query",
    500: "Internal Server Error",
}


def create_error_response(
    status_code: int,
    message: str,
    error_type: str | None = None,
    details: dict[str, Any] | None = None,
    path: str | None = None,
) -> JSONResponse:
    """Build the error envelope.

    ``error_type`` defaults to the HTTP type for ``status_code``; router
    errors pass their own.
    """
    error: dict[str, Any] = {
        "status_code": status_code,
        "type": error_type or get_error_type(status_code),
        "message": message,
    }
    if details:
        error["details"] = details
    if path:
        error["path"] = path

    request_id = get_request_id()
    if request_id:
        error["request_id"] = request_id

    return JSONResponse(status_code=status_code, content={"error": error})


def get_error_type(status_code: int) -> str:
    return HTTP_ERROR_TYPES.get(status_code, "Error")


async def router_exception_handler(request: Request, exc: I18nRouterError) -> JSONResponse:
    """Render UnknownLocaleError (404) and ConfigError (500).

    A ConfigError at request time means the locale map changed under a
    running app, so it is logged as an error; an unknown locale is a
    client mistake and only warrants a warning.
    """
    log_level = logging.ERROR if exc.status_code >= 500 else logging.WARNING
    logger.log(
        log_level,
        f"{type(exc).__name__}: {exc.message}",
        extra={"status_code": exc.status_code, "path": request.url.path},
    )

    return create_error_response(
        status_code=exc.status_code,
        message=exc.message,
        error_type=exc.error_type,
        details=exc.details or None,
        path=request.url.path,
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    logger.warning(
        f"HTTPException: {exc.detail}",
        extra={"status_code": exc.status_code, "path": request.url.path},
    )

    return create_error_response(
        status_code=exc.status_code,
        message=str(exc.detail),
        path=request.url.path,
    )


async def validation_exception_handler(
    request: Request, exc: Union[RequestValidationError, PydanticValidationError]
) -> JSONResponse:
    """Report bad or missing query parameters (``url``, ``locale``) by name."""
    errors = []
    for error in exc.errors():
        field = ".".join(str(loc) for loc in error["loc"] if loc not in ("body", "query"))
        errors.append({"field": field, "message": error["msg"], "type": error["type"]})

    logger.warning(f"Invalid query on {request.url.path}", extra={"path": request.url.path})

    return create_error_response(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        message="Invalid query parameters",
        details={"validation_errors": errors},
        path=request.url.path,
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Internal details are logged, never returned to the client."""
    logger.error(
        f"Unhandled exception: {str(exc)}",
        exc_info=True,
        extra={"path": request.url.path, "method": request.method},
    )

    return create_error_response(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        message="An unexpected error occurred. Please try again later.",
        path=request.url.path,
    )


def register_exception_handlers(app) -> None:
    app.add_exception_handler(I18nRouterError, router_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(PydanticValidationError, validation_exception_handler)

    # Catch-all for unexpected exceptions
    app.add_exception_handler(Exception, unhandled_exception_handler)

    logger.debug("Exception handlers registered")
