"""
Custom exceptions and handlers for consistent API error responses.

Every error leaves the API as ``{"status": <code>, "message": <text>,
"error_code": <CODE>}`` with the status code mirrored on the HTTP response.
"""

from fastapi import HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from sqlalchemy.exc import SQLAlchemyError
from typing import Any, Dict, Optional
import logging

logger = logging.getLogger(__name__)


class APIError(HTTPException):
    """Base API error with consistent structure"""

    def __init__(
        self,
        status_code: int,
        detail: str,
        error_code: Optional[str] = None,
        headers: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(status_code=status_code, detail=detail, headers=headers)
        self.error_code = error_code


class NotFoundError(APIError):
    """Resource not found error"""

    def __init__(
        self, detail: str = "Resource not found", error_code: str = "NOT_FOUND"
    ):
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND, detail=detail, error_code=error_code
        )


class ValidationError(APIError):
    """Validation error"""

    def __init__(
        self, detail: str = "Validation failed", error_code: str = "VALIDATION_ERROR"
    ):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=detail,
            error_code=error_code,
        )


class MissingFieldError(ValidationError):
    """A required field is absent or empty"""

    def __init__(self, detail: str, error_code: str = "MISSING_FIELD"):
        super().__init__(detail=detail, error_code=error_code)


class InvalidFormatError(ValidationError):
    """A date, time or number could not be parsed"""

    def __init__(self, detail: str, error_code: str = "INVALID_FORMAT"):
        super().__init__(detail=detail, error_code=error_code)


class InvalidRangeError(ValidationError):
    """A value parsed but falls outside its allowed bounds"""

    def __init__(self, detail: str, error_code: str = "INVALID_RANGE"):
        super().__init__(detail=detail, error_code=error_code)


class BusinessRuleViolation(ValidationError):
    """Closed day, outside opening hours, or a time in the past"""

    def __init__(self, detail: str, error_code: str = "BUSINESS_RULE_VIOLATION"):
        super().__init__(detail=detail, error_code=error_code)


class InvalidStatusError(ValidationError):
    """Unknown or disallowed status value"""

    def __init__(self, detail: str, error_code: str = "INVALID_STATUS"):
        super().__init__(detail=detail, error_code=error_code)


class TerminalStateError(ValidationError):
    """The record is in a state that admits no further change"""

    def __init__(self, detail: str, error_code: str = "TERMINAL_STATE"):
        super().__init__(detail=detail, error_code=error_code)


class ConflictStateError(ValidationError):
    """The current state of a table or reservation forbids the operation"""

    def __init__(self, detail: str, error_code: str = "CONFLICT_STATE"):
        super().__init__(detail=detail, error_code=error_code)


def error_body(status_code: int, message: str, error_code: Optional[str]) -> Dict[str, Any]:
    return {"status": status_code, "message": message, "error_code": error_code}


async def handle_api_error(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """Handle custom API errors and plain HTTP errors (unknown routes, 405s)"""
    error_code = getattr(exc, "error_code", None) or "HTTP_ERROR"
    if exc.status_code < 500:
        logger.warning(
            "%s at %s: %s", error_code, request.url.path, exc.detail
        )
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(exc.status_code, exc.detail, error_code),
        headers=exc.headers,
    )


async def handle_request_validation_error(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Report malformed bodies and bad path/query parameters as 400"""
    errors = exc.errors()
    if errors:
        first = errors[0]
        location = ".".join(str(part) for part in first.get("loc", ()))
        message = f"{location}: {first.get('msg', 'invalid value')}"
    else:
        message = "Invalid request"
    logger.warning(f"RequestValidationError at {request.url.path}: {message}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_body(status.HTTP_400_BAD_REQUEST, message, "VALIDATION_ERROR"),
    )


async def handle_value_error(request: Request, exc: ValueError) -> JSONResponse:
    """Convert ValueError to consistent API response"""
    logger.warning(f"ValueError at {request.url.path}: {str(exc)}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_body(status.HTTP_400_BAD_REQUEST, str(exc), "VALIDATION_ERROR"),
    )


async def handle_database_error(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    """Store failures surface as a generic server error"""
    logger.error(f"Database error at {request.url.path}: {exc}", exc_info=True)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "Internal server error",
            "INTERNAL_ERROR",
        ),
    )


def register_exception_handlers(app):
    """Register all exception handlers with the FastAPI app"""
    app.add_exception_handler(APIError, handle_api_error)
    app.add_exception_handler(StarletteHTTPException, handle_api_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)
    app.add_exception_handler(ValueError, handle_value_error)
    app.add_exception_handler(SQLAlchemyError, handle_database_error)
