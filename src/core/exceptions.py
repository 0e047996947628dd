"""Custom exceptions and error codes."""

from enum import StrEnum
from typing import Any


class ErrorCode(StrEnum):
    """Standardized error codes for the API."""

    # Not found errors (404)
    USER_NOT_FOUND = "USER_NOT_FOUND"
    ROUTE_NOT_FOUND = "ROUTE_NOT_FOUND"

    # Validation errors (400)
    VALIDATION_ERROR = "VALIDATION_ERROR"

    # Rate limiting (429)
    RATE_LIMIT_EXCEEDED = "RATE_LIMIT_EXCEEDED"

    # Server errors (500)
    INTERNAL_ERROR = "INTERNAL_ERROR"
    DATABASE_ERROR = "DATABASE_ERROR"
    TRANSPORT_ERROR = "TRANSPORT_ERROR"


class AppException(Exception):
    """Base application exception."""

    def __init__(
        self,
        error_code: ErrorCode,
        message: str,
        status_code: int = 400,
        details: Any | None = None,
    ) -> None:
        self.error_code = error_code
        self.message = message
        self.status_code = status_code
        self.details = details
        super().__init__(self.message)


class UserNotFoundError(AppException):
    """No user record for the identity key."""

    def __init__(self, identity_key: str) -> None:
        super().__init__(
            error_code=ErrorCode.USER_NOT_FOUND,
            message="User not found",
            status_code=404,
            details={"identity_key": identity_key},
        )


class ValidationError(AppException):
    """Request data failed a business rule."""

    def __init__(self, message: str, details: Any | None = None) -> None:
        super().__init__(
            error_code=ErrorCode.VALIDATION_ERROR,
            message=message,
            status_code=400,
            details=details,
        )


class PersistenceError(AppException):
    """The user store rejected or failed a read or write.

    Writes surface as 400, reads as 500.
    """

    def __init__(self, message: str, write: bool = True) -> None:
        super().__init__(
            error_code=ErrorCode.DATABASE_ERROR,
            message=message,
            status_code=400 if write else 500,
        )


class TransportError(AppException):
    """A call from the proxy to the backend did not complete."""

    def __init__(self, message: str = "Internal server error") -> None:
        super().__init__(
            error_code=ErrorCode.TRANSPORT_ERROR,
            message=message,
            status_code=500,
        )
