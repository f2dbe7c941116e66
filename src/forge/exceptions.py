"""
Custom exceptions for Forge.

Every exception carries:
- A descriptive message
- An error code for API responses
- HTTP status code mapping
- Optional details for debugging
"""

from enum import Enum
from typing import Any, Dict, Optional


class ErrorCode(str, Enum):
    """Error codes for consistent API error responses."""

    # General errors
    INTERNAL_ERROR = "INTERNAL_ERROR"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"
    UNAUTHORIZED = "UNAUTHORIZED"

    # Auth errors
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
    SESSION_EXPIRED = "SESSION_EXPIRED"

    # Backend errors
    BACKEND_ERROR = "BACKEND_ERROR"
    BACKEND_NOT_CONFIGURED = "BACKEND_NOT_CONFIGURED"


class ForgeError(Exception):
    """
    Base exception for all Forge errors.

    Attributes:
        message: Human-readable error message
        code: Error code from ErrorCode enum
        status_code: HTTP status code for API responses
        details: Optional dictionary with additional error details
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        status_code: int = 500,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code.value}, message={self.message!r})"


# ============================================================================
# Validation Errors (400)
# ============================================================================

class ValidationError(ForgeError):
    """Raised when a required field is missing or a value is out of range."""

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        error_details = details or {}
        if field:
            error_details["field"] = field
        super().__init__(
            message=message,
            code=ErrorCode.VALIDATION_ERROR,
            status_code=400,
            details=error_details,
        )


# ============================================================================
# Auth Errors (401)
# ============================================================================

class AuthenticationError(ForgeError):
    """Raised when sign-in, sign-up or session lookup is rejected."""

    def __init__(
        self,
        message: str = "Not authenticated",
        code: ErrorCode = ErrorCode.UNAUTHORIZED,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message=message,
            code=code,
            status_code=401,
            details=details,
        )


class InvalidCredentialsError(AuthenticationError):
    """Raised when email/password do not match an account."""

    def __init__(self, message: str = "Invalid login credentials") -> None:
        super().__init__(message=message, code=ErrorCode.INVALID_CREDENTIALS)


# ============================================================================
# Not Found Errors (404)
# ============================================================================

class NotFoundError(ForgeError):
    """Raised when a requested record is not found for the current user."""

    def __init__(
        self,
        resource_type: str,
        resource_id: str,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        message = f"{resource_type} with ID '{resource_id}' not found"
        error_details = details or {}
        error_details["resource_type"] = resource_type
        error_details["resource_id"] = resource_id
        super().__init__(
            message=message,
            code=ErrorCode.NOT_FOUND,
            status_code=404,
            details=error_details,
        )


# ============================================================================
# Conflict Errors (409)
# ============================================================================

class ConflictError(ForgeError):
    """Raised when a record collides with an existing one."""

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCode.CONFLICT,
            status_code=409,
            details=details,
        )


# ============================================================================
# Backend Errors (502)
# ============================================================================

class BackendError(ForgeError):
    """Raised when the storage or auth backend rejects a call."""

    def __init__(
        self,
        message: str = "Backend operation failed",
        operation: Optional[str] = None,
        table: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        error_details = details or {}
        if operation:
            error_details["operation"] = operation
        if table:
            error_details["table"] = table
        super().__init__(
            message=message,
            code=ErrorCode.BACKEND_ERROR,
            status_code=502,
            details=error_details,
        )


class BackendNotConfiguredError(ForgeError):
    """Raised when the selected backend is missing its credentials."""

    def __init__(
        self,
        message: str = "Backend is not configured",
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCode.BACKEND_NOT_CONFIGURED,
            status_code=500,
            details=details,
        )
