"""Managed database client operations."""

from typing import TYPE_CHECKING, Any
from urllib.parse import quote

from dots_mcp.clients.base import BaseModule
from dots_mcp.clients.request_helper import HttpMethod, RequestOptions

if TYPE_CHECKING:
    from dots_mcp.domains.databases.models import (
        AddPoolRequestOptions,
        DatabaseCreateClusterRequest,
        DatabaseResizeClusterRequest,
    )

# Characters left unescaped by JavaScript's encodeURIComponent
_UNRESERVED = "-_.!~*'()"


def _encode(segment: str) -> str:
    return quote(segment, safe=_UNRESERVED)


class DatabasesClient(BaseModule):
    """Client for managed database clusters, users, pools, and databases.

    Every method issues exactly one request through the request helper and
    returns the parsed response as-is. Transport errors propagate unchanged.
    """

    base_path = "databases"

    def _cluster_path(self, cluster_id: str) -> str:
        return f"{self.base_path}/{_encode(cluster_id)}"

    # Clusters

    async def get_all_clusters(
        self,
        tag_name: str | None = None,
        include_all: bool = False,
        page: int = 1,
        page_size: int | None = None,
    ) -> Any:
        """List database clusters.

        Args:
            tag_name: Only return clusters carrying this tag.
            include_all: Walk every page and return all clusters.
            page: Page to return when not walking all pages.
            page_size: Items per page (defaults to the client's page size).
        """
        options = self._get_base_paginated_request_options(
            action_path=self.base_path,
            key="databases",
            tag_name=tag_name,
            page_size=self.page_size if page_size is None else page_size,
            page=page,
            include_all=include_all,
        )
        return await self._execute(options)

    async def create_cluster(
        self, cluster_options: "DatabaseCreateClusterRequest | dict[str, Any]"
    ) -> Any:
        """Create a new database cluster."""
        return await self._execute(
            RequestOptions(
                action_path=self.base_path,
                method=HttpMethod.POST,
                body=cluster_options,
            )
        )

    async def get_cluster_by_id(self, cluster_id: str) -> Any:
        """Retrieve a single database cluster by its identifier."""
        return await self._execute(RequestOptions(action_path=self._cluster_path(cluster_id)))

    async def resize_cluster(
        self,
        cluster_id: str,
        configuration: "DatabaseResizeClusterRequest | dict[str, Any]",
    ) -> Any:
        """Resize an existing database cluster."""
        return await self._execute(
            RequestOptions(
                action_path=f"{self._cluster_path(cluster_id)}/resize",
                method=HttpMethod.PUT,
                body=configuration,
            )
        )

    # Users

    async def create_user(self, cluster_id: str, username: str) -> Any:
        """Create a new user on an existing database cluster."""
        return await self._execute(
            RequestOptions(
                action_path=f"{self._cluster_path(cluster_id)}/users",
                method=HttpMethod.POST,
                body={"name": username},
            )
        )

    async def delete_user(self, cluster_id: str, username: str) -> Any:
        """Delete a user from a database cluster."""
        return await self._execute(
            RequestOptions(
                action_path=f"{self._cluster_path(cluster_id)}/users/{_encode(username)}",
                method=HttpMethod.DELETE,
            )
        )

    async def get_user(self, cluster_id: str, username: str) -> Any:
        """Retrieve a single user of a database cluster."""
        return await self._execute(
            RequestOptions(
                action_path=f"{self._cluster_path(cluster_id)}/users/{_encode(username)}",
            )
        )

    async def get_all_users(self, cluster_id: str) -> Any:
        """List all users of a database cluster."""
        return await self._execute(
            RequestOptions(action_path=f"{self._cluster_path(cluster_id)}/users")
        )

    # Connection pools

    async def add_pool(
        self,
        cluster_id: str,
        pool_options: "AddPoolRequestOptions | dict[str, Any]",
    ) -> Any:
        """Add a connection pool to a cluster."""
        return await self._execute(
            RequestOptions(
                action_path=f"{self._cluster_path(cluster_id)}/pools",
                method=HttpMethod.POST,
                body=pool_options,
            )
        )

    async def get_all_pools(self, cluster_id: str) -> Any:
        """List all connection pools of a cluster."""
        return await self._execute(
            RequestOptions(action_path=f"{self._cluster_path(cluster_id)}/pools")
        )

    async def get_pool(self, cluster_id: str, pool_name: str) -> Any:
        """Retrieve a connection pool of a cluster."""
        return await self._execute(
            RequestOptions(
                action_path=f"{self._cluster_path(cluster_id)}/pools/{_encode(pool_name)}",
            )
        )

    async def delete_pool(self, cluster_id: str, pool_name: str) -> Any:
        """Delete a connection pool from a cluster."""
        return await self._execute(
            RequestOptions(
                action_path=f"{self._cluster_path(cluster_id)}/pools/{_encode(pool_name)}",
                method=HttpMethod.DELETE,
            )
        )

    # Logical databases

    async def get_all_databases(self, cluster_id: str) -> Any:
        """List all databases of a cluster."""
        return await self._execute(
            RequestOptions(action_path=f"{self._cluster_path(cluster_id)}/dbs")
        )

    async def add_database(self, cluster_id: str, db_name: str) -> Any:
        """Create a new database on a cluster."""
        return await self._execute(
            RequestOptions(
                action_path=f"{self._cluster_path(cluster_id)}/dbs",
                method=HttpMethod.POST,
                body={"name": db_name},
            )
        )

    async def get_database(self, cluster_id: str, db_name: str) -> Any:
        """Retrieve a database of a cluster."""
        return await self._execute(
            RequestOptions(
                action_path=f"{self._cluster_path(cluster_id)}/dbs/{_encode(db_name)}",
            )
        )

    async def delete_database(self, cluster_id: str, db_name: str) -> Any:
        """Delete a database from a cluster."""
        return await self._execute(
            RequestOptions(
                action_path=f"{self._cluster_path(cluster_id)}/dbs/{_encode(db_name)}",
                method=HttpMethod.DELETE,
            )
        )
