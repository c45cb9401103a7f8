"""Tests for database MCP tools."""

from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest

from dots_mcp.clients.request_helper import HttpMethod
from dots_mcp.config import DotsConfig
from dots_mcp.domains.databases.models import (
    AddPoolRequestOptions,
    DatabaseCreateClusterRequest,
    DatabaseEngine,
)
from dots_mcp.domains.databases.tools import register_tools
from dots_mcp.utils.errors import APIError, DotsConnectionError, NotFoundError


@pytest.fixture
def mock_server(mock_helper: MagicMock) -> MagicMock:
    """Create a mock DotsServer with dangerous operations enabled."""
    server = MagicMock()
    server.config = DotsConfig(api_token="t", page_size=20, enable_dangerous_operations=True)
    server.http = mock_helper
    return server


def _register(server: MagicMock) -> dict[str, Any]:
    tools: dict[str, Any] = {}

    def capture_tool():
        def decorator(f):
            tools[f.__name__] = f
            return f

        return decorator

    mcp = MagicMock()
    mcp.tool = capture_tool
    register_tools(mcp, server)
    return tools


@pytest.fixture
def tools(mock_server: MagicMock) -> dict[str, Any]:
    return _register(mock_server)


def test_register_tools_registers_all_operations(tools: dict[str, Any]) -> None:
    """One tool per database client operation."""
    assert set(tools) == {
        "list_database_clusters",
        "create_database_cluster",
        "get_database_cluster",
        "resize_database_cluster",
        "list_database_users",
        "get_database_user",
        "create_database_user",
        "delete_database_user",
        "list_connection_pools",
        "get_connection_pool",
        "add_connection_pool",
        "delete_connection_pool",
        "list_databases",
        "get_database",
        "add_database",
        "delete_database",
    }


class TestReadTools:
    """Read-only tools."""

    async def test_list_clusters_uses_server_page_size(
        self, tools: dict[str, Any], mock_helper: MagicMock
    ) -> None:
        mock_helper.execute.return_value = {"databases": [{"id": "c1"}]}

        result = await tools["list_database_clusters"]()

        assert result == {"databases": [{"id": "c1"}]}
        options = mock_helper.execute.await_args.args[0]
        assert options.page_size == 20
        assert options.page == 1

    async def test_get_cluster_not_found(
        self, tools: dict[str, Any], mock_helper: MagicMock
    ) -> None:
        mock_helper.execute.side_effect = NotFoundError(
            404, "The resource you were accessing could not be found.", "not_found"
        )

        result = await tools["get_database_cluster"]("missing")

        assert result == {"error": "Not found: The resource you were accessing could not be found."}

    async def test_connection_error_reported(
        self, tools: dict[str, Any], mock_helper: MagicMock
    ) -> None:
        mock_helper.execute.side_effect = DotsConnectionError("GET databases/c1/dbs failed")

        result = await tools["list_databases"]("c1")

        assert result["error"].startswith("Connection failed:")

    async def test_get_user_encodes_name(
        self, tools: dict[str, Any], mock_helper: MagicMock
    ) -> None:
        await tools["get_database_user"]("c1", "team/alice")

        options = mock_helper.execute.await_args.args[0]
        assert options.action_path == "databases/c1/users/team%2Falice"


class TestWriteTools:
    """Tools that create or change resources."""

    async def test_create_cluster_builds_request_model(
        self, tools: dict[str, Any], mock_helper: MagicMock
    ) -> None:
        mock_helper.execute.return_value = {"database": {"id": "new"}}

        result = await tools["create_database_cluster"](
            name="backend", engine="pg", size="db-s-1vcpu-1gb", region="nyc1"
        )

        assert result == {"database": {"id": "new"}}
        options = mock_helper.execute.await_args.args[0]
        assert options.method == HttpMethod.POST
        assert isinstance(options.body, DatabaseCreateClusterRequest)
        assert options.body.engine == DatabaseEngine.POSTGRESQL

    async def test_create_kafka_cluster(
        self, tools: dict[str, Any], mock_helper: MagicMock
    ) -> None:
        mock_helper.execute.return_value = {"database": {"id": "events"}}

        await tools["create_database_cluster"](
            name="events", engine="kafka", size="db-s-2vcpu-2gb", region="fra1", num_nodes=3
        )

        options = mock_helper.execute.await_args.args[0]
        assert options.body.engine == DatabaseEngine.KAFKA
        assert options.body.model_dump(mode="json")["engine"] == "kafka"

    async def test_create_cluster_invalid_engine(
        self, tools: dict[str, Any], mock_helper: MagicMock
    ) -> None:
        result = await tools["create_database_cluster"](
            name="backend", engine="oracle", size="db-s-1vcpu-1gb", region="nyc1"
        )

        assert result["error"].startswith("Invalid cluster options")
        mock_helper.execute.assert_not_awaited()

    async def test_resize_cluster(self, tools: dict[str, Any], mock_helper: MagicMock) -> None:
        mock_helper.execute.return_value = None

        result = await tools["resize_database_cluster"]("c1", "db-s-4vcpu-8gb", 3)

        assert result["cluster_id"] == "c1"
        options = mock_helper.execute.await_args.args[0]
        assert options.action_path == "databases/c1/resize"
        assert options.method == HttpMethod.PUT

    async def test_add_pool(self, tools: dict[str, Any], mock_helper: MagicMock) -> None:
        await tools["add_connection_pool"]("c1", name="pool", db="defaultdb", size=5)

        options = mock_helper.execute.await_args.args[0]
        assert isinstance(options.body, AddPoolRequestOptions)
        assert options.body.mode.value == "transaction"

    async def test_api_error_reported(
        self, tools: dict[str, Any], mock_helper: MagicMock
    ) -> None:
        mock_helper.execute.side_effect = APIError(
            422, "name is already taken", "unprocessable_entity"
        )

        result = await tools["add_database"]("c1", "alpha")

        assert "name is already taken" in result["error"]

    async def test_read_only_mode_blocks_writes(self, mock_helper: MagicMock) -> None:
        server = MagicMock()
        server.config = DotsConfig(api_token="t", read_only_mode=True)
        server.http = mock_helper
        tools = _register(server)

        result = await tools["create_database_user"]("c1", "alice")

        assert "read-only" in result["error"]
        assert result["operation"] == "create"
        mock_helper.execute.assert_not_awaited()

    async def test_read_only_mode_blocks_resize(self, mock_helper: MagicMock) -> None:
        server = MagicMock()
        server.config = DotsConfig(api_token="t", read_only_mode=True)
        server.http = mock_helper
        tools = _register(server)

        result = await tools["resize_database_cluster"]("c1", "db-s-4vcpu-8gb", 3)

        assert result == {
            "error": "Operation 'update' is disabled in read-only mode",
            "operation": "update",
        }
        mock_helper.execute.assert_not_awaited()


class TestDeleteTools:
    """Destructive tools require confirmation and dangerous operations."""

    @pytest.mark.parametrize(
        ("tool", "args"),
        [
            ("delete_database_user", ("c1", "alice")),
            ("delete_connection_pool", ("c1", "pool")),
            ("delete_database", ("c1", "alpha")),
        ],
    )
    async def test_requires_confirm(
        self, tools: dict[str, Any], mock_helper: MagicMock, tool: str, args: tuple
    ) -> None:
        result = await tools[tool](*args)

        assert result["error"] == "Deletion not confirmed"
        mock_helper.execute.assert_not_awaited()

    async def test_delete_user_confirmed(
        self, tools: dict[str, Any], mock_helper: MagicMock
    ) -> None:
        mock_helper.execute.return_value = None

        result = await tools["delete_database_user"]("c1", "alice", confirm=True)

        assert result["deleted"] is True
        options = mock_helper.execute.await_args.args[0]
        assert options.action_path == "databases/c1/users/alice"
        assert options.method == HttpMethod.DELETE

    async def test_dangerous_operations_disabled(self, mock_helper: MagicMock) -> None:
        server = MagicMock()
        server.config = DotsConfig(api_token="t", enable_dangerous_operations=False)
        server.http = mock_helper
        tools = _register(server)

        result = await tools["delete_database"]("c1", "alpha", confirm=True)

        assert "Delete operations are disabled" in result["error"]
        assert result["operation"] == "delete"
        mock_helper.execute.assert_not_awaited()

    async def test_delete_error_reported(
        self, tools: dict[str, Any], mock_helper: MagicMock
    ) -> None:
        mock_helper.execute = AsyncMock(
            side_effect=NotFoundError(404, "pool not found", "not_found")
        )

        result = await tools["delete_connection_pool"]("c1", "pool", confirm=True)

        assert result == {"error": "Not found: pool not found"}
