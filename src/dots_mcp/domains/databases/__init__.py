"""Databases domain - managed database cluster management."""

from dots_mcp.domains.databases.client import DatabasesClient
from dots_mcp.domains.databases.models import (
    AddPoolRequestOptions,
    DatabaseCreateClusterRequest,
    DatabaseEngine,
    DatabaseResizeClusterRequest,
    PoolMode,
)

__all__ = [
    "AddPoolRequestOptions",
    "DatabaseCreateClusterRequest",
    "DatabaseEngine",
    "DatabaseResizeClusterRequest",
    "DatabasesClient",
    "PoolMode",
]
