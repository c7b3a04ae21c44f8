"""
Custom business exceptions for the API.

WHAT: Domain-specific exceptions that map to HTTP status codes
WHY: Consistent error handling across all API endpoints
HOW: Custom exception classes with error codes and messages
"""

from typing import Optional, List, Dict, Any


class BusinessException(Exception):
    """Base class for business logic exceptions."""

    def __init__(self, message: str, code: str, details: Optional[Any] = None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details


class ValidationException(BusinessException):
    """Raised when a required field is missing or blank."""

    def __init__(self, message: str, field_errors: Optional[List[Dict[str, str]]] = None):
        super().__init__(
            message=message,
            code="VALIDATION_ERROR",
            details={"field_errors": field_errors} if field_errors else None
        )


class AuthenticationRequiredException(BusinessException):
    """Raised when a store operation arrives without a caller identity."""

    def __init__(self):
        super().__init__(
            message="Authentication required",
            code="AUTHENTICATION_REQUIRED"
        )


class NegotiationNotFoundException(BusinessException):
    """Raised when a negotiation is missing or owned by someone else."""

    def __init__(self, negotiation_id: str):
        super().__init__(
            message=f"Negotiation not found: {negotiation_id}",
            code="NEGOTIATION_NOT_FOUND",
            details={"negotiation_id": negotiation_id}
        )


class ContractNotFoundException(BusinessException):
    """Raised when a saved contract is missing or owned by someone else."""

    def __init__(self, contract_id: str):
        super().__init__(
            message=f"Contract not found: {contract_id}",
            code="CONTRACT_NOT_FOUND",
            details={"contract_id": contract_id}
        )


class ProfileNotFoundException(BusinessException):
    """Raised when the caller has no profile row."""

    def __init__(self, user_id: str):
        super().__init__(
            message=f"Profile not found for user: {user_id}",
            code="PROFILE_NOT_FOUND",
            details={"user_id": user_id}
        )
