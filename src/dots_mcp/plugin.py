"""Plugin interface for dots-mcp components.

This module defines the plugin base class and metadata that all dots-mcp
plugins use to integrate with the server via pluggy hooks.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from dots_mcp.hooks import hookimpl

if TYPE_CHECKING:
    from mcp.server.fastmcp import FastMCP

    from dots_mcp.server import DotsServer


@dataclass
class PluginMetadata:
    """Metadata describing a dots-mcp plugin."""

    name: str
    """Unique plugin name, e.g., 'databases'."""

    version: str
    """Plugin version following semver, e.g., '1.0.0'."""

    description: str
    """Human-readable description of what this plugin provides."""

    maintainer: str
    """Maintainer email or team."""

    requires_token: bool = True
    """Whether the plugin needs an API token to function.

    Plugins that need a token are marked unavailable when none is
    configured, but the server keeps running with the other plugins.
    """

    api_paths: list[str] = field(default_factory=list)
    """API path prefixes the plugin talks to, e.g., ['databases']."""


class BasePlugin:
    """Base implementation of a dots-mcp plugin with common functionality.

    Domain plugins extend this class to get default implementations of the
    hook methods. All hook methods are decorated with @hookimpl to register
    them with pluggy.
    """

    def __init__(self, metadata: PluginMetadata) -> None:
        self._metadata = metadata

    @hookimpl
    def dots_get_plugin_metadata(self) -> PluginMetadata:
        """Return plugin metadata."""
        return self._metadata

    @hookimpl
    def dots_register_tools(self, mcp: FastMCP, server: DotsServer) -> None:
        """Register MCP tools. Override in subclass."""
        pass

    @hookimpl
    def dots_register_resources(self, mcp: FastMCP, server: DotsServer) -> None:
        """Register MCP resources. Override in subclass."""
        pass

    @hookimpl
    def dots_health_check(self, server: DotsServer) -> tuple[bool, str]:
        """Check plugin health.

        Default implementation only verifies that an API token is configured
        when the plugin declares it needs one.
        """
        if not self._metadata.requires_token:
            return True, "No token requirement"

        if not server.config.api_token:
            return False, "No API token configured"

        return True, "API token configured"
