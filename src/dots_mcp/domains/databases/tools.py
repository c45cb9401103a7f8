"""MCP Tools for managed database operations."""

from typing import TYPE_CHECKING, Any

from mcp.server.fastmcp import FastMCP
from pydantic import ValidationError

from dots_mcp.domains.databases.client import DatabasesClient
from dots_mcp.domains.databases.models import (
    AddPoolRequestOptions,
    DatabaseCreateClusterRequest,
    DatabaseResizeClusterRequest,
)
from dots_mcp.utils.errors import (
    DotsConnectionError,
    DotsError,
    NotFoundError,
    OperationNotAllowedError,
)

if TYPE_CHECKING:
    from dots_mcp.server import DotsServer


def _error(e: DotsError) -> dict[str, Any]:
    if isinstance(e, NotFoundError):
        return {"error": f"Not found: {e.api_message}"}
    if isinstance(e, DotsConnectionError):
        return {"error": f"Connection failed: {e}"}
    if isinstance(e, OperationNotAllowedError):
        return {"error": e.reason, "operation": e.operation}
    return {"error": str(e)}


def _confirm_required(kind: str, name: str, cluster_id: str) -> dict[str, Any]:
    return {
        "error": "Deletion not confirmed",
        "message": (
            f"To delete {kind} '{name}' from cluster '{cluster_id}', set confirm=True. "
            "This cannot be undone."
        ),
    }


def register_tools(mcp: FastMCP, server: "DotsServer") -> None:
    """Register database tools with the MCP server."""

    def _client() -> DatabasesClient:
        return DatabasesClient(server.config.page_size, server.http)

    @mcp.tool()
    async def list_database_clusters(
        tag_name: str | None = None,
        include_all: bool = False,
        page: int = 1,
        page_size: int | None = None,
    ) -> dict[str, Any]:
        """List managed database clusters.

        Args:
            tag_name: Only return clusters with this tag.
            include_all: Fetch every page instead of a single one.
            page: Page number to return (ignored when include_all is set).
            page_size: Clusters per page (defaults to the server's page size).

        Returns:
            API response with a 'databases' list.
        """
        try:
            return await _client().get_all_clusters(tag_name, include_all, page, page_size)
        except DotsError as e:
            return _error(e)

    @mcp.tool()
    async def create_database_cluster(
        name: str,
        engine: str,
        size: str,
        region: str,
        num_nodes: int = 1,
        version: str | None = None,
        tags: list[str] | None = None,
        private_network_uuid: str | None = None,
    ) -> dict[str, Any]:
        """Create a new managed database cluster.

        Args:
            name: Unique cluster name.
            engine: Engine slug - 'pg', 'mysql', 'redis', 'mongodb', 'valkey',
                'kafka' or 'opensearch'.
            size: Node size slug (e.g., 'db-s-1vcpu-1gb').
            region: Region slug (e.g., 'nyc1').
            num_nodes: Number of nodes (1-3).
            version: Engine version (latest if omitted).
            tags: Tags to apply.
            private_network_uuid: VPC to place the cluster in.

        Returns:
            API response with the created 'database'.
        """
        allowed, reason = server.config.is_operation_allowed("create")
        if not allowed:
            return _error(OperationNotAllowedError("create", reason))

        try:
            request = DatabaseCreateClusterRequest(
                name=name,
                engine=engine,
                size=size,
                region=region,
                num_nodes=num_nodes,
                version=version,
                tags=tags,
                private_network_uuid=private_network_uuid,
            )
        except ValidationError as e:
            return {"error": f"Invalid cluster options: {e}"}

        try:
            return await _client().create_cluster(request)
        except DotsError as e:
            return _error(e)

    @mcp.tool()
    async def get_database_cluster(cluster_id: str) -> dict[str, Any]:
        """Get a managed database cluster by ID.

        Returns:
            API response with the 'database' including connection details.
        """
        try:
            return await _client().get_cluster_by_id(cluster_id)
        except DotsError as e:
            return _error(e)

    @mcp.tool()
    async def resize_database_cluster(
        cluster_id: str,
        size: str,
        num_nodes: int,
    ) -> dict[str, Any]:
        """Resize a managed database cluster.

        Args:
            cluster_id: Cluster ID.
            size: New node size slug.
            num_nodes: New number of nodes (1-3).
        """
        allowed, reason = server.config.is_operation_allowed("update")
        if not allowed:
            return _error(OperationNotAllowedError("update", reason))

        try:
            request = DatabaseResizeClusterRequest(size=size, num_nodes=num_nodes)
        except ValidationError as e:
            return {"error": f"Invalid resize configuration: {e}"}

        try:
            await _client().resize_cluster(cluster_id, request)
        except DotsError as e:
            return _error(e)
        return {
            "cluster_id": cluster_id,
            "size": size,
            "num_nodes": num_nodes,
            "message": f"Resize of cluster '{cluster_id}' requested",
        }

    @mcp.tool()
    async def list_database_users(cluster_id: str) -> dict[str, Any]:
        """List the users of a database cluster."""
        try:
            return await _client().get_all_users(cluster_id)
        except DotsError as e:
            return _error(e)

    @mcp.tool()
    async def get_database_user(cluster_id: str, username: str) -> dict[str, Any]:
        """Get a user of a database cluster, including its password."""
        try:
            return await _client().get_user(cluster_id, username)
        except DotsError as e:
            return _error(e)

    @mcp.tool()
    async def create_database_user(cluster_id: str, username: str) -> dict[str, Any]:
        """Create a user on a database cluster."""
        allowed, reason = server.config.is_operation_allowed("create")
        if not allowed:
            return _error(OperationNotAllowedError("create", reason))

        try:
            return await _client().create_user(cluster_id, username)
        except DotsError as e:
            return _error(e)

    @mcp.tool()
    async def delete_database_user(
        cluster_id: str,
        username: str,
        confirm: bool = False,
    ) -> dict[str, Any]:
        """Delete a user from a database cluster.

        Args:
            cluster_id: Cluster ID.
            username: User to delete.
            confirm: Must be True to actually delete.
        """
        allowed, reason = server.config.is_operation_allowed("delete")
        if not allowed:
            return _error(OperationNotAllowedError("delete", reason))
        if not confirm:
            return _confirm_required("user", username, cluster_id)

        try:
            await _client().delete_user(cluster_id, username)
        except DotsError as e:
            return _error(e)
        return {
            "cluster_id": cluster_id,
            "username": username,
            "deleted": True,
            "message": f"User '{username}' deleted",
        }

    @mcp.tool()
    async def list_connection_pools(cluster_id: str) -> dict[str, Any]:
        """List the connection pools of a PostgreSQL cluster."""
        try:
            return await _client().get_all_pools(cluster_id)
        except DotsError as e:
            return _error(e)

    @mcp.tool()
    async def get_connection_pool(cluster_id: str, pool_name: str) -> dict[str, Any]:
        """Get a connection pool of a PostgreSQL cluster."""
        try:
            return await _client().get_pool(cluster_id, pool_name)
        except DotsError as e:
            return _error(e)

    @mcp.tool()
    async def add_connection_pool(
        cluster_id: str,
        name: str,
        db: str,
        size: int,
        mode: str = "transaction",
        user: str | None = None,
    ) -> dict[str, Any]:
        """Add a connection pool to a PostgreSQL cluster.

        Args:
            cluster_id: Cluster ID.
            name: Pool name.
            db: Database the pool connects to.
            size: Number of backend connections.
            mode: Pooling mode - 'session', 'transaction' or 'statement'.
            user: User the pool connects as.
        """
        allowed, reason = server.config.is_operation_allowed("create")
        if not allowed:
            return _error(OperationNotAllowedError("create", reason))

        try:
            request = AddPoolRequestOptions(name=name, db=db, size=size, mode=mode, user=user)
        except ValidationError as e:
            return {"error": f"Invalid pool options: {e}"}

        try:
            return await _client().add_pool(cluster_id, request)
        except DotsError as e:
            return _error(e)

    @mcp.tool()
    async def delete_connection_pool(
        cluster_id: str,
        pool_name: str,
        confirm: bool = False,
    ) -> dict[str, Any]:
        """Delete a connection pool from a PostgreSQL cluster."""
        allowed, reason = server.config.is_operation_allowed("delete")
        if not allowed:
            return _error(OperationNotAllowedError("delete", reason))
        if not confirm:
            return _confirm_required("pool", pool_name, cluster_id)

        try:
            await _client().delete_pool(cluster_id, pool_name)
        except DotsError as e:
            return _error(e)
        return {
            "cluster_id": cluster_id,
            "pool_name": pool_name,
            "deleted": True,
            "message": f"Pool '{pool_name}' deleted",
        }

    @mcp.tool()
    async def list_databases(cluster_id: str) -> dict[str, Any]:
        """List the databases of a cluster."""
        try:
            return await _client().get_all_databases(cluster_id)
        except DotsError as e:
            return _error(e)

    @mcp.tool()
    async def get_database(cluster_id: str, db_name: str) -> dict[str, Any]:
        """Get a database of a cluster."""
        try:
            return await _client().get_database(cluster_id, db_name)
        except DotsError as e:
            return _error(e)

    @mcp.tool()
    async def add_database(cluster_id: str, db_name: str) -> dict[str, Any]:
        """Create a database on a cluster."""
        allowed, reason = server.config.is_operation_allowed("create")
        if not allowed:
            return _error(OperationNotAllowedError("create", reason))

        try:
            return await _client().add_database(cluster_id, db_name)
        except DotsError as e:
            return _error(e)

    @mcp.tool()
    async def delete_database(
        cluster_id: str,
        db_name: str,
        confirm: bool = False,
    ) -> dict[str, Any]:
        """Delete a database from a cluster.

        WARNING: All data in the database is permanently lost.
        """
        allowed, reason = server.config.is_operation_allowed("delete")
        if not allowed:
            return _error(OperationNotAllowedError("delete", reason))
        if not confirm:
            return _confirm_required("database", db_name, cluster_id)

        try:
            await _client().delete_database(cluster_id, db_name)
        except DotsError as e:
            return _error(e)
        return {
            "cluster_id": cluster_id,
            "db_name": db_name,
            "deleted": True,
            "message": f"Database '{db_name}' deleted",
        }
