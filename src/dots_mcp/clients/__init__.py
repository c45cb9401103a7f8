"""API transport and client base classes."""

from dots_mcp.clients.base import BaseModule
from dots_mcp.clients.request_helper import (
    HttpMethod,
    PaginatedRequestOptions,
    RequestHelper,
    RequestOptions,
)

__all__ = [
    "BaseModule",
    "HttpMethod",
    "PaginatedRequestOptions",
    "RequestHelper",
    "RequestOptions",
]
