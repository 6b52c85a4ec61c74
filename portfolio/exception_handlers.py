"""
Global Exception Handlers for the portfolio site

Site routes get HTML error pages (the 404 layout for missing pages);
routes under ``/api/`` get a JSON envelope:

{
    "error": {
        "status_code": 404,
        "error_code": "RESOURCE_POST_NOT_FOUND",
        "message": "Post 'hello' not found",
        "type": "Not Found",
        "details": {"resource_type": "Post", "resource_id": "hello"},
        "path": "/api/..."
    }
}
"""

import logging
from typing import Any, Union

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import HTMLResponse, JSONResponse, Response
from markupsafe import escape
from pydantic import ValidationError as PydanticValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from portfolio.exceptions import ErrorCode, PortfolioError

logger = logging.getLogger(__name__)

API_PREFIX = "/api/"


def is_api_request(request: Request) -> bool:
    return request.url.path.startswith(API_PREFIX)


def create_error_response(
    status_code: int,
    message: str,
    error_code: str | ErrorCode | None = None,
    details: dict[str, Any] | None = None,
    path: str | None = None,
) -> JSONResponse:
    """
    Create a standardized error response.

    Args:
        status_code: HTTP status code
        message: Human-readable error message
        error_code: Machine-readable error code
        details: Additional error details
        path: Request path that caused the error

    Returns:
        JSONResponse with standardized error format
    """
    error_response: dict[str, Any] = {
        "error": {
            "status_code": status_code,
            "message": message,
            "type": get_error_type(status_code),
        }
    }

    if error_code:
        error_response["error"]["error_code"] = error_code.value if isinstance(error_code, ErrorCode) else error_code

    if details:
        error_response["error"]["details"] = details

    if path:
        error_response["error"]["path"] = path

    return JSONResponse(status_code=status_code, content=error_response)


def create_error_page(request: Request, status_code: int, message: str) -> HTMLResponse:
    """
    Render an HTML error page.

    404s use the site's 404 page; anything else falls back to a minimal
    page so a broken template or plugin cannot hide the original error.
    """
    if status_code == status.HTTP_404_NOT_FOUND:
        pages = getattr(request.app.state, "pages", None)
        if pages is not None:
            try:
                return HTMLResponse(pages.not_found(request.url.path), status_code=status_code)
            except Exception:
                logger.exception("Rendering the 404 page failed")

    title = f"{status_code} {get_error_type(status_code)}"
    body = (
        f"<!DOCTYPE html><html><head><meta charset=\"utf-8\"/><title>{escape(title)}</title></head>"
        f"<body><h1>{escape(title)}</h1><p>{escape(message)}</p><p><a href=\"/\">Go home</a></p></body></html>"
    )
    return HTMLResponse(body, status_code=status_code)


def get_error_type(status_code: int) -> str:
    """Get a human-readable error type based on status code."""
    error_types = {
        400: "Bad Request",
        404: "Not Found",
        405: "Method Not Allowed",
        422: "Validation Error",
        500: "Internal Server Error",
        502: "Bad Gateway",
        503: "Service Unavailable",
    }
    return error_types.get(status_code, "Error")


def get_http_error_code(status_code: int) -> str:
    """Map HTTP status codes to error codes for HTTPException."""
    error_code_map = {
        400: ErrorCode.VALIDATION_FAILED.value,
        404: ErrorCode.RESOURCE_NOT_FOUND.value,
        422: ErrorCode.VALIDATION_FAILED.value,
        500: ErrorCode.INTERNAL_ERROR.value,
        502: ErrorCode.SERVICE_UNAVAILABLE.value,
        503: ErrorCode.SERVICE_UNAVAILABLE.value,
    }
    return error_code_map.get(status_code, ErrorCode.UNKNOWN_ERROR.value)


async def portfolio_exception_handler(request: Request, exc: PortfolioError) -> Response:
    """Handle custom portfolio exceptions."""
    log = logger.warning if exc.status_code < 500 else logger.error
    log(
        f"PortfolioError: {exc.message}",
        extra={
            "status_code": exc.status_code,
            "error_code": exc.error_code.value,
            "path": request.url.path,
            "details": exc.details,
        },
    )

    if not is_api_request(request):
        return create_error_page(request, exc.status_code, exc.message)

    return create_error_response(
        status_code=exc.status_code,
        message=exc.message,
        error_code=exc.error_code,
        details=exc.details if exc.details else None,
        path=request.url.path,
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> Response:
    """Handle standard HTTP exceptions (unknown routes land here as 404)."""
    logger.warning(
        f"HTTPException: {exc.detail}",
        extra={
            "status_code": exc.status_code,
            "path": request.url.path,
        },
    )

    if not is_api_request(request):
        return create_error_page(request, exc.status_code, str(exc.detail))

    return create_error_response(
        status_code=exc.status_code,
        message=str(exc.detail),
        error_code=get_http_error_code(exc.status_code),
        path=request.url.path,
    )


async def validation_exception_handler(
    request: Request, exc: Union[RequestValidationError, PydanticValidationError]
) -> Response:
    """Handle Pydantic validation errors."""
    errors = []

    if isinstance(exc, RequestValidationError):
        for error in exc.errors():
            field = ".".join(str(loc) for loc in error["loc"] if loc != "body")
            errors.append({"field": field, "message": error["msg"], "type": error["type"]})
    else:
        for error in exc.errors():
            field = ".".join(str(loc) for loc in error["loc"])
            errors.append({"field": field, "message": error["msg"], "type": error["type"]})

    logger.warning(f"Validation error on {request.url.path}", extra={"errors": errors})

    if not is_api_request(request):
        return create_error_page(request, status.HTTP_422_UNPROCESSABLE_ENTITY, "The request could not be processed.")

    return create_error_response(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        message="Validation error",
        error_code=ErrorCode.VALIDATION_FAILED,
        details={"validation_errors": errors},
        path=request.url.path,
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> Response:
    """Handle unexpected exceptions; internal details are not exposed."""
    logger.error(
        f"Unhandled exception: {str(exc)}",
        exc_info=exc,
        extra={"path": request.url.path, "method": request.method},
    )

    message = "An unexpected error occurred. Please try again later."
    if not is_api_request(request):
        return create_error_page(request, status.HTTP_500_INTERNAL_SERVER_ERROR, message)

    return create_error_response(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        message=message,
        error_code=ErrorCode.INTERNAL_ERROR,
        path=request.url.path,
    )


def register_exception_handlers(app) -> None:
    """
    Register all exception handlers with the FastAPI app.

    Args:
        app: The FastAPI application instance
    """
    app.add_exception_handler(PortfolioError, portfolio_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(PydanticValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    logger.info("Exception handlers registered successfully")
