"""Tests for the /health endpoint."""

from collections.abc import Generator
from http import HTTPStatus
from typing import Any
from unittest.mock import Mock

import pytest
from mcp.server.fastmcp import FastMCP
from starlette.testclient import TestClient

from dots_mcp.config import DotsConfig
from dots_mcp.server import DotsServer


@pytest.fixture
def health_client() -> Generator[tuple[DotsServer, TestClient], Any, None]:
    """Create a server + MCP wired for health-endpoint testing."""
    server = DotsServer(DotsConfig(_env_file=None, api_token="t"))
    mcp = FastMCP(name="test-server")
    server._mcp = mcp
    server._register_health_endpoint(mcp)
    app = mcp.streamable_http_app()
    with TestClient(app) as client:
        yield server, client


def test_health_endpoint_returns_200(
    health_client: tuple[DotsServer, TestClient],
) -> None:
    """Test that /health returns 200 when the API client is open."""
    server, client = health_client

    mock_http = Mock()
    mock_http.is_closed = False
    server._http = mock_http
    server._plugin_manager.load_core_plugins()
    server._plugin_manager.run_health_checks(server)

    response = client.get("/health")

    assert response.status_code == HTTPStatus.OK
    data = response.json()
    assert data["status"] == "healthy"
    assert data["connected"] is True
    assert data["plugins"] == {"total": 1, "healthy": 1}


def test_health_endpoint_with_closed_client(
    health_client: tuple[DotsServer, TestClient],
) -> None:
    """Test health endpoint when the API client has been closed."""
    server, client = health_client

    mock_http = Mock()
    mock_http.is_closed = True
    server._http = mock_http

    response = client.get("/health")

    assert response.status_code == HTTPStatus.SERVICE_UNAVAILABLE
    assert response.json()["status"] == "unhealthy"


def test_health_endpoint_before_startup(
    health_client: tuple[DotsServer, TestClient],
) -> None:
    """Test health endpoint before the server has opened its API client."""
    _server, client = health_client

    response = client.get("/health")

    assert response.status_code == HTTPStatus.SERVICE_UNAVAILABLE
    data = response.json()
    assert data["connected"] is False
    assert data["plugins"] == {"total": 0, "healthy": 0}
