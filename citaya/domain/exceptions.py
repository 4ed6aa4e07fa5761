"""Domain exceptions for the media service.

Presentation layer maps them to HTTP responses in exception handlers;
the media gateway converts CDN failures into OperationResult instead of
letting them escape.
"""

from typing import Any


class CitayaException(Exception):
    """Base exception for all application errors.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. field, file_id).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Response body in the API's {success, error} envelope."""
        return {"success": False, "error": self.message}


class ConfigurationException(CitayaException):
    """Raised at startup when required configuration is missing. Fatal."""

    def __init__(self, message: str, missing: list[str] | None = None) -> None:
        details = {"missing": missing} if missing else {}
        super().__init__(message, "CONFIGURATION_ERROR", details)


class ValidationException(CitayaException):
    """Raised when required request fields are missing or malformed."""

    def __init__(self, message: str, field: str | None = None) -> None:
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class AuthenticationException(CitayaException):
    """Raised when the bearer token is missing, malformed, or invalid."""

    def __init__(self, message: str = "Authentication failed") -> None:
        super().__init__(message, "AUTHENTICATION_ERROR")


class GatewayException(CitayaException):
    """Raised by the CDN client when a call fails (HTTP error or transport).

    Never crosses the media gateway boundary; the gateway turns it into a
    failed OperationResult.
    """

    def __init__(
        self,
        operation: str,
        message: str,
        status_code: int | None = None,
    ) -> None:
        details: dict[str, Any] = {"operation": operation}
        if status_code is not None:
            details["status_code"] = status_code
        super().__init__(message, "GATEWAY_ERROR", details)
        self.operation = operation
        self.status_code = status_code
