"""Pytest fixtures for databases domain tests."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from dots_mcp.clients.request_helper import PaginatedRequestOptions
from dots_mcp.domains.databases.client import DatabasesClient


@pytest.fixture
def mock_helper() -> MagicMock:
    """Create a RequestHelper substitute that records its calls."""
    helper = MagicMock()
    helper.execute = AsyncMock(return_value={"ok": True})
    helper.build_paginated_request.side_effect = lambda **kw: PaginatedRequestOptions(**kw)
    return helper


@pytest.fixture
def client(mock_helper: MagicMock) -> DatabasesClient:
    """Create a DatabasesClient with a page size of 25."""
    return DatabasesClient(25, mock_helper)


@pytest.fixture
def cluster_options() -> dict:
    """Sample create-cluster payload."""
    return {
        "name": "backend",
        "engine": "pg",
        "version": "16",
        "region": "nyc3",
        "size": "db-s-2vcpu-4gb",
        "num_nodes": 2,
        "tags": ["production"],
    }
