"""Error types raised by the DigitalOcean transport layer."""

from typing import Any


class DotsError(Exception):
    """Base exception for all dots-mcp errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


class APIError(DotsError):
    """The API answered with a non-2xx status or an unreadable body."""

    def __init__(
        self,
        status_code: int,
        message: str,
        error_id: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(f"{status_code} {error_id or 'error'}: {message}", details)
        self.status_code = status_code
        self.error_id = error_id
        self.api_message = message


class AuthenticationError(APIError):
    """The token is missing, invalid, or lacks the required scope (401/403)."""


class NotFoundError(APIError):
    """The addressed resource does not exist (404)."""


class RateLimitError(APIError):
    """The account exceeded its request quota (429)."""

    def __init__(
        self,
        status_code: int,
        message: str,
        error_id: str | None = None,
        details: dict[str, Any] | None = None,
        reset_at: int | None = None,
    ) -> None:
        super().__init__(status_code, message, error_id, details)
        self.reset_at = reset_at


class DotsConnectionError(DotsError):
    """The request never produced a response (DNS, TLS, timeout, refused)."""


class ConfigurationError(DotsError):
    """Invalid or incomplete configuration."""


class OperationNotAllowedError(DotsError):
    """Operation blocked by read-only mode or disabled dangerous operations."""

    def __init__(self, operation: str, reason: str) -> None:
        super().__init__(f"Operation '{operation}' not allowed: {reason}")
        self.operation = operation
        self.reason = reason
