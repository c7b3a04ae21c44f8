"""
Global error handling middleware.

WHAT: Translate exceptions to appropriate HTTP responses
WHY: Every failure reaches the client as {"error": ...} with a non-2xx status
HOW: FastAPI exception handlers for domain and provider exceptions
"""

from fastapi import Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from sqlalchemy.exc import SQLAlchemyError
from datetime import datetime

from ..llm.types import (
    ProviderTimeoutError,
    ProviderUnavailableError,
    ProviderDisabledError,
    ProviderResponseError,
)
from ..utils.exceptions import (
    BusinessException,
    ValidationException,
    AuthenticationRequiredException,
    NegotiationNotFoundException,
    ContractNotFoundException,
    ProfileNotFoundException,
)
from ..utils.logger import get_logger

logger = get_logger(__name__)


def _error_body(message: str, code: str, details=None) -> dict:
    return {
        "error": message,
        "code": code,
        "details": details,
        "timestamp": datetime.now().isoformat()
    }


async def provider_disabled_handler(request: Request, exc: ProviderDisabledError):
    """
    Handle ProviderDisabledError.

    WHAT: Upstream credentials are missing
    WHY: Operator needs to set the API key
    HOW: Return 503 with clear error code
    """
    logger.error(f"Provider disabled: {exc}")
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content=_error_body(str(exc), "LLM_PROVIDER_DISABLED")
    )


async def provider_timeout_handler(request: Request, exc: ProviderTimeoutError):
    """Handle ProviderTimeoutError with 503."""
    logger.error(f"Provider timeout: {exc}")
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content=_error_body(str(exc), "LLM_TIMEOUT")
    )


async def provider_unavailable_handler(request: Request, exc: ProviderUnavailableError):
    """Handle ProviderUnavailableError with 503."""
    logger.error(f"Provider unavailable: {exc}")
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content=_error_body(str(exc), "LLM_UNAVAILABLE")
    )


async def provider_response_error_handler(request: Request, exc: ProviderResponseError):
    """
    Handle ProviderResponseError.

    WHAT: Upstream returned a non-success status or a malformed body
    WHY: No status-specific handling; the caller sees one generic failure
    HOW: Return 502 bad gateway
    """
    logger.error(f"Provider response error: {exc}")
    return JSONResponse(
        status_code=status.HTTP_502_BAD_GATEWAY,
        content=_error_body(str(exc), "LLM_BAD_GATEWAY")
    )


async def validation_error_handler(request: Request, exc: RequestValidationError):
    """
    Handle FastAPI RequestValidationError.

    WHAT: Request body or params failed schema validation
    WHY: Invalid request payload
    HOW: Return 400 with field errors
    """
    logger.warning(f"Validation error: {exc.errors()}")

    cleaned_errors = []
    for error in exc.errors():
        cleaned_error = {
            "type": error.get("type"),
            "loc": error.get("loc"),
            "msg": error.get("msg"),
        }
        cleaned_errors.append(cleaned_error)

    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=_error_body("Request validation failed", "VALIDATION_ERROR", cleaned_errors)
    )


async def business_exception_handler(request: Request, exc: BusinessException):
    """
    Handle domain exceptions.

    WHAT: Map exception type to status code
    WHY: Not-found and auth errors need distinct codes from validation
    HOW: isinstance dispatch, default 400
    """
    status_code = status.HTTP_400_BAD_REQUEST

    if isinstance(exc, (NegotiationNotFoundException, ContractNotFoundException, ProfileNotFoundException)):
        status_code = status.HTTP_404_NOT_FOUND
    elif isinstance(exc, AuthenticationRequiredException):
        status_code = status.HTTP_401_UNAUTHORIZED
    elif isinstance(exc, ValidationException):
        status_code = status.HTTP_400_BAD_REQUEST

    logger.warning(f"API exception: {exc.code} - {exc.message}")
    return JSONResponse(
        status_code=status_code,
        content=_error_body(exc.message, exc.code, exc.details)
    )


async def database_error_handler(request: Request, exc: SQLAlchemyError):
    """
    Handle SQLAlchemyError.

    WHAT: Store read or write failed mid-request
    WHY: Failures still reach the client as {"error": ...} JSON
    HOW: Log with traceback, return 500 without driver details
    """
    logger.exception(f"Database error on {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_error_body("A database error occurred", "DATABASE_ERROR")
    )


async def unhandled_exception_handler(request: Request, exc: Exception):
    """Last resort for anything not mapped above."""
    logger.exception(f"Unhandled error on {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_error_body("Internal server error", "INTERNAL_ERROR")
    )


def register_exception_handlers(app):
    """
    Register all exception handlers with FastAPI app.

    Args:
        app: FastAPI application instance
    """
    # LLM Provider exceptions
    app.add_exception_handler(ProviderDisabledError, provider_disabled_handler)
    app.add_exception_handler(ProviderTimeoutError, provider_timeout_handler)
    app.add_exception_handler(ProviderUnavailableError, provider_unavailable_handler)
    app.add_exception_handler(ProviderResponseError, provider_response_error_handler)

    # API exceptions
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(BusinessException, business_exception_handler)

    # Store and unexpected failures
    app.add_exception_handler(SQLAlchemyError, database_error_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    logger.info("Exception handlers registered")
