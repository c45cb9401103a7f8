"""Hook specifications for dots-mcp plugins.

Domain plugins implement these hooks with ``@hookimpl`` and are registered
with the PluginManager.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pluggy

if TYPE_CHECKING:
    from mcp.server.fastmcp import FastMCP

    from dots_mcp.plugin import PluginMetadata
    from dots_mcp.server import DotsServer

PROJECT_NAME = "dots_mcp"

hookspec = pluggy.HookspecMarker(PROJECT_NAME)
hookimpl = pluggy.HookimplMarker(PROJECT_NAME)


class DotsMCPHookSpec:
    """Hooks a dots-mcp plugin may implement."""

    @hookspec
    def dots_get_plugin_metadata(self) -> PluginMetadata:  # type: ignore[empty-body]
        """Return metadata identifying the plugin."""

    @hookspec
    def dots_register_tools(self, mcp: FastMCP, server: DotsServer) -> None:
        """Register MCP tools."""

    @hookspec
    def dots_register_resources(self, mcp: FastMCP, server: DotsServer) -> None:
        """Register MCP resources."""

    @hookspec
    def dots_health_check(self, server: DotsServer) -> tuple[bool, str]:  # type: ignore[empty-body]
        """Report whether the plugin can serve requests.

        Returns:
            Tuple of (healthy, message).
        """
