"""Plugin registry for core domains."""

from __future__ import annotations

from typing import TYPE_CHECKING

from dots_mcp.hooks import hookimpl
from dots_mcp.plugin import BasePlugin, PluginMetadata

if TYPE_CHECKING:
    from mcp.server.fastmcp import FastMCP

    from dots_mcp.server import DotsServer


class DatabasesPlugin(BasePlugin):
    """Plugin for managed database clusters, users, pools, and databases."""

    def __init__(self) -> None:
        super().__init__(
            PluginMetadata(
                name="databases",
                version="1.0.0",
                description="Managed database cluster operations",
                maintainer="dots-mcp maintainers",
                requires_token=True,
                api_paths=["databases"],
            )
        )

    @hookimpl
    def dots_register_tools(self, mcp: FastMCP, server: DotsServer) -> None:
        from dots_mcp.domains.databases.tools import register_tools

        register_tools(mcp, server)


def get_core_plugins() -> list[BasePlugin]:
    """Return all core domain plugin instances."""
    return [
        DatabasesPlugin(),
    ]
