"""Custom exceptions and error codes."""

from enum import StrEnum
from typing import Any


class ErrorCode(StrEnum):
    """Standardized error codes for the API."""

    # Authentication errors (401)
    UNAUTHORIZED = "UNAUTHORIZED"
    INVALID_TOKEN = "INVALID_TOKEN"
    TOKEN_EXPIRED = "TOKEN_EXPIRED"

    # Authority errors (403)
    UNAUTHORIZED_AUTHORITY = "UNAUTHORIZED_AUTHORITY"

    # Not found errors (404)
    RECORD_NOT_FOUND = "RECORD_NOT_FOUND"
    HANDLE_NOT_FOUND = "HANDLE_NOT_FOUND"

    # Validation errors (400)
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INVALID_ACCOUNT = "INVALID_ACCOUNT"
    HANDLE_TOO_LONG = "HANDLE_TOO_LONG"
    NAME_TOO_LONG = "NAME_TOO_LONG"
    URI_TOO_LONG = "URI_TOO_LONG"
    INVALID_HANDLE = "INVALID_HANDLE"
    INVALID_URI = "INVALID_URI"

    # Conflict errors (409)
    HANDLE_TAKEN = "HANDLE_TAKEN"
    ADDRESS_IN_USE = "ADDRESS_IN_USE"
    COUNTER_OVERFLOW = "COUNTER_OVERFLOW"

    # Rate limiting (429)
    RATE_LIMIT_EXCEEDED = "RATE_LIMIT_EXCEEDED"

    # Server errors (500)
    INTERNAL_ERROR = "INTERNAL_ERROR"
    DATABASE_ERROR = "DATABASE_ERROR"


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


class AuthenticationError(AppException):
    """Authentication failed."""

    def __init__(
        self,
        message: str = "Authentication required",
        error_code: ErrorCode = ErrorCode.UNAUTHORIZED,
    ) -> None:
        super().__init__(
            error_code=error_code,
            message=message,
            status_code=401,
        )


class UnauthorizedError(AppException):
    """The proven key does not control the record, after chain resolution."""

    def __init__(self, address: str, message: str = "Unauthorized access") -> None:
        super().__init__(
            error_code=ErrorCode.UNAUTHORIZED_AUTHORITY,
            message=message,
            status_code=403,
            details={"address": address},
        )


class InvalidAccountError(AppException):
    """A referenced record is missing the expected kind or relationship."""

    def __init__(self, address: str, message: str = "Invalid account") -> None:
        super().__init__(
            error_code=ErrorCode.INVALID_ACCOUNT,
            message=message,
            status_code=400,
            details={"address": address},
        )


class RecordNotFoundError(AppException):
    """No record is stored at the address."""

    def __init__(self, address: str) -> None:
        super().__init__(
            error_code=ErrorCode.RECORD_NOT_FOUND,
            message=f"Record not found: {address}",
            status_code=404,
            details={"address": address},
        )


class HandleNotFoundError(AppException):
    """No name record exists for the handle."""

    def __init__(self, namespace: str, handle: str) -> None:
        super().__init__(
            error_code=ErrorCode.HANDLE_NOT_FOUND,
            message=f"Handle not registered: {handle}",
            status_code=404,
            details={"namespace": namespace, "handle": handle},
        )


class HandleTooLongError(AppException):
    """A username or group name exceeds its byte bound."""

    def __init__(self, field: str, max_length: int) -> None:
        super().__init__(
            error_code=ErrorCode.HANDLE_TOO_LONG,
            message=f"The provided {field} is too long",
            status_code=400,
            details={"field": field, "max_length": max_length},
        )


class NameTooLongError(AppException):
    """A display name exceeds its byte bound."""

    def __init__(self, field: str, max_length: int) -> None:
        super().__init__(
            error_code=ErrorCode.NAME_TOO_LONG,
            message=f"The provided {field} is too long",
            status_code=400,
            details={"field": field, "max_length": max_length},
        )


class UriTooLongError(AppException):
    """A URI exceeds its byte bound."""

    def __init__(self, field: str, max_length: int) -> None:
        super().__init__(
            error_code=ErrorCode.URI_TOO_LONG,
            message=f"The provided {field} is too long",
            status_code=400,
            details={"field": field, "max_length": max_length},
        )


class InvalidHandleError(AppException):
    """A handle is empty or uses characters outside the allowed set."""

    def __init__(self, field: str, value: str) -> None:
        super().__init__(
            error_code=ErrorCode.INVALID_HANDLE,
            message=f"Invalid {field}: only a-z, 0-9, '_' and '-' are allowed",
            status_code=400,
            details={"field": field, "value": value},
        )


class InvalidUriError(AppException):
    """A required URI is empty."""

    def __init__(self, field: str) -> None:
        super().__init__(
            error_code=ErrorCode.INVALID_URI,
            message=f"The provided {field} is invalid",
            status_code=400,
            details={"field": field},
        )


class HandleTakenError(AppException):
    """The handle is already registered in its namespace."""

    def __init__(self, namespace: str, handle: str) -> None:
        super().__init__(
            error_code=ErrorCode.HANDLE_TAKEN,
            message=f"Handle already taken: {handle}",
            status_code=409,
            details={"namespace": namespace, "handle": handle},
        )


class AddressInUseError(AppException):
    """A record already exists at the derived address."""

    def __init__(self, address: str) -> None:
        super().__init__(
            error_code=ErrorCode.ADDRESS_IN_USE,
            message=f"Address already in use: {address}",
            status_code=409,
            details={"address": address},
        )


class CounterOverflowError(AppException):
    """A child sequence has no identifiers left."""

    def __init__(self, address: str) -> None:
        super().__init__(
            error_code=ErrorCode.COUNTER_OVERFLOW,
            message="Child sequence exhausted",
            status_code=409,
            details={"address": address},
        )
