"""Utility functions and helpers for the dots-mcp server."""

from dots_mcp.utils.errors import (
    APIError,
    AuthenticationError,
    ConfigurationError,
    DotsConnectionError,
    DotsError,
    NotFoundError,
    OperationNotAllowedError,
    RateLimitError,
)

__all__ = [
    "DotsError",
    "APIError",
    "AuthenticationError",
    "NotFoundError",
    "RateLimitError",
    "DotsConnectionError",
    "ConfigurationError",
    "OperationNotAllowedError",
]
