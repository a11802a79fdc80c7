"""
Error handling middleware.

Standardizes all API error responses to include:
- error_code: machine-readable identifier
- message: human-readable description
- hint: suggested recovery action
"""

import traceback
from collections.abc import Awaitable, Callable

import pydantic
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from airos.application.dto.responses import ErrorResponse
from airos.config import get_logger
from airos.core.exceptions import (
    AirosError,
    ConfigurationError,
    ConflictError,
    InsufficientStockError,
    InvalidCredentialsError,
    InvalidStatusError,
    InvalidTokenError,
    NotFoundError,
    OrderNotEditableError,
    PermissionDeniedError,
    StoreUnavailableError,
    ValidationError,
)

logger = get_logger(__name__)


# Map exceptions to HTTP status codes
EXCEPTION_STATUS_MAP: dict[type[Exception], int] = {
    NotFoundError: status.HTTP_404_NOT_FOUND,
    ValidationError: status.HTTP_400_BAD_REQUEST,
    InsufficientStockError: status.HTTP_400_BAD_REQUEST,
    InvalidStatusError: status.HTTP_400_BAD_REQUEST,
    OrderNotEditableError: status.HTTP_400_BAD_REQUEST,
    ConflictError: status.HTTP_400_BAD_REQUEST,
    InvalidTokenError: status.HTTP_401_UNAUTHORIZED,
    InvalidCredentialsError: status.HTTP_401_UNAUTHORIZED,
    PermissionDeniedError: status.HTTP_403_FORBIDDEN,
    StoreUnavailableError: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ConfigurationError: status.HTTP_500_INTERNAL_SERVER_ERROR,
    pydantic.ValidationError: status.HTTP_422_UNPROCESSABLE_ENTITY,
}

# Hint messages per error code
HINT_MAP: dict[str, str] = {
    "PRODUCT_NOT_FOUND": "Check the product ID and try GET /api/products to list products.",
    "ORDER_NOT_FOUND": "Check the order ID and try GET /api/orders to list orders.",
    "SUPPLIER_NOT_FOUND": "Check the supplier ID and try GET /api/suppliers to list suppliers.",
    "USER_NOT_FOUND": "Check the user ID and try GET /api/users to list users.",
    "INSUFFICIENT_STOCK": "Reduce the quantity or restock via PUT /api/products/{id}/stock.",
    "INVALID_STATUS": "Orders move pending -> confirmed -> processing -> shipped -> delivered, or to cancelled.",
    "ORDER_NOT_EDITABLE": "Only pending orders can be edited. Cancel and re-create instead.",
    "DUPLICATE_SKU": "Choose a different SKU.",
    "DUPLICATE_SUPPLIER_CODE": "Choose a different supplier code.",
    "DUPLICATE_EMAIL": "An account with this email already exists. Log in instead.",
    "SUPPLIER_HAS_BALANCE": "Settle the supplier balance via PUT /api/suppliers/{id}/balance first.",
    "VALIDATION_ERROR": "Check the request body against the API schema.",
    "INVALID_TOKEN": "Log in via POST /api/auth/login and send 'Authorization: Bearer <token>'.",
    "INVALID_CREDENTIALS": "Check the email and password.",
    "PERMISSION_DENIED": "Ask an administrator for a role with access to this route.",
    "STORE_UNAVAILABLE": "A database operation failed. Check server logs.",
}

# Default hints by HTTP status code
STATUS_HINTS: dict[int, str] = {
    400: "Check the request parameters and body.",
    401: "Authentication is required.",
    403: "You do not have access to this resource.",
    404: "The requested resource was not found. Verify the ID.",
    422: "The request could not be processed. Check the input format.",
    500: "An internal error occurred. Check server logs.",
}


def _get_hint(error_code: str, status_code: int) -> str:
    """Resolve hint from error code, falling back to status-based hint."""
    return HINT_MAP.get(error_code) or STATUS_HINTS.get(status_code, "")


def _status_for(exc: Exception) -> int:
    for exc_type, code in EXCEPTION_STATUS_MAP.items():
        if isinstance(exc, exc_type):
            return code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def error_response(request: Request, exc: Exception) -> JSONResponse:
    """Convert an exception to a standardized JSON response."""
    status_code = _status_for(exc)
    error_code = exc.code if isinstance(exc, AirosError) else exc.__class__.__name__
    message = exc.message if isinstance(exc, AirosError) else str(exc)
    detail = None
    if isinstance(exc, AirosError) and exc.details:
        detail = ", ".join(f"{k}={v}" for k, v in exc.details.items() if v is not None)

    request_id = getattr(request.state, "request_id", None)
    log = logger.error if status_code >= 500 else logger.warning
    log(
        "request_error",
        request_id=request_id,
        path=request.url.path,
        error_type=error_code,
        error=message,
        traceback=traceback.format_exc() if status_code >= 500 else None,
    )

    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(
            error_code=error_code,
            message=message,
            hint=_get_hint(error_code, status_code),
            detail=detail or None,
            path=request.url.path,
        ).model_dump(mode="json"),
    )


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """
    Global error handling middleware.

    Last line of defence for exceptions no registered handler claimed.
    """

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        """Handle request with error catching."""
        try:
            return await call_next(request)
        except Exception as e:
            return error_response(request, e)


def setup_exception_handlers(app: FastAPI) -> None:
    """Set up FastAPI exception handlers."""
    from fastapi.exceptions import RequestValidationError
    from starlette.exceptions import HTTPException

    @app.exception_handler(AirosError)
    async def domain_exception_handler(request: Request, exc: AirosError) -> JSONResponse:
        """Render domain errors with their mapped status."""
        return error_response(request, exc)

    @app.exception_handler(pydantic.ValidationError)
    async def model_validation_handler(
        request: Request, exc: pydantic.ValidationError
    ) -> JSONResponse:
        """Entity validation failing after a partial update was merged."""
        return error_response(request, exc)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        """Handle Pydantic request validation errors."""
        errors = []
        for error in exc.errors():
            loc = " -> ".join(str(part) for part in error["loc"])
            errors.append(f"{loc}: {error['msg']}")

        return JSONResponse(
            status_code=422,
            content=ErrorResponse(
                error_code="VALIDATION_ERROR",
                message="Request validation failed",
                hint="Check the request body fields and types.",
                detail="; ".join(errors),
                path=request.url.path,
            ).model_dump(mode="json"),
        )

    @app.exception_handler(HTTPException)
    async def http_exception_handler(
        request: Request,
        exc: HTTPException,
    ) -> JSONResponse:
        """Handle HTTP exceptions with standardized format."""
        error_code = _infer_error_code(exc.status_code)
        return JSONResponse(
            status_code=exc.status_code,
            content=ErrorResponse(
                error_code=error_code,
                message=str(exc.detail) if exc.detail else "An error occurred",
                hint=_get_hint(error_code, exc.status_code),
                path=request.url.path,
            ).model_dump(mode="json"),
            headers=getattr(exc, "headers", None),
        )


def _infer_error_code(status_code: int) -> str:
    """Infer a machine-readable error code from an HTTP status."""
    return {
        400: "BAD_REQUEST",
        401: "INVALID_TOKEN",
        403: "PERMISSION_DENIED",
        404: "NOT_FOUND",
        405: "METHOD_NOT_ALLOWED",
        422: "UNPROCESSABLE_ENTITY",
    }.get(status_code, "HTTP_ERROR")
