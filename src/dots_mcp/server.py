"""FastMCP server definition for dots-mcp with pluggy-based domain plugins."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator, Callable
from contextlib import AbstractAsyncContextManager, asynccontextmanager
from typing import Any

from mcp.server.fastmcp import FastMCP
from starlette.requests import Request
from starlette.responses import JSONResponse

from dots_mcp import __version__
from dots_mcp.clients.request_helper import RequestHelper
from dots_mcp.config import DotsConfig, get_config
from dots_mcp.plugin_manager import PluginManager

logger = logging.getLogger(__name__)


class DotsServer:
    """dots-mcp server holding the shared API transport and the plugins."""

    def __init__(self, config: DotsConfig | None = None) -> None:
        self._config = config or get_config()
        self._http: RequestHelper | None = None
        self._mcp: FastMCP | None = None
        self._plugin_manager = PluginManager()

    @property
    def config(self) -> DotsConfig:
        """Get server configuration."""
        return self._config

    @property
    def http(self) -> RequestHelper:
        """Get the shared API transport.

        Raises:
            RuntimeError: If server is not running.
        """
        if self._http is None:
            raise RuntimeError("Server not running. API client not available.")
        return self._http

    @property
    def mcp(self) -> FastMCP:
        """Get the MCP server instance.

        Raises:
            RuntimeError: If server is not initialized.
        """
        if self._mcp is None:
            raise RuntimeError("Server not initialized.")
        return self._mcp

    @property
    def plugin_manager(self) -> PluginManager:
        return self._plugin_manager

    def startup(self) -> None:
        """Open the API transport (unless one is already open) and run health checks."""
        if self._http is None or self._http.is_closed:
            self._http = RequestHelper(self._config)
        self._plugin_manager.run_health_checks(self)

        healthy = len(self._plugin_manager.healthy_plugins)
        total = len(self._plugin_manager.registered_plugins)
        logger.info(f"dots-mcp server started with {healthy}/{total} plugins active")

    async def shutdown(self) -> None:
        """Close the API transport."""
        if self._http is not None:
            await self._http.close()
        self._http = None

    def _create_lifespan(self) -> Callable[[Any], AbstractAsyncContextManager[None]]:
        """Create the lifespan context manager for the MCP server."""
        server_self = self

        @asynccontextmanager
        async def lifespan(_app: Any) -> AsyncIterator[None]:
            logger.info("Starting dots-mcp server...")
            server_self.startup()
            try:
                yield
            finally:
                logger.info("Shutting down dots-mcp server...")
                await server_self.shutdown()
                logger.info("dots-mcp server shut down")

        return lifespan

    def create_mcp(self) -> FastMCP:
        """Create and configure the FastMCP server."""
        self._plugin_manager.load_core_plugins()
        self._plugin_manager.load_entrypoint_plugins()

        mcp = FastMCP(
            name="dots-mcp",
            instructions="MCP server for DigitalOcean managed databases - lets AI agents "
            "list, create, resize and inspect database clusters and manage their "
            "users, connection pools and databases.",
            lifespan=self._create_lifespan(),
            host=self._config.host,
            port=self._config.port,
        )
        self._mcp = mcp

        self._plugin_manager.register_all_tools(mcp, self)
        self._plugin_manager.register_all_resources(mcp, self)
        self._register_core_resources(mcp)
        self._register_health_endpoint(mcp)

        return mcp

    def _register_health_endpoint(self, mcp: FastMCP) -> None:
        """Expose /health for HTTP transports."""

        @mcp.custom_route("/health", methods=["GET"])
        async def health(_request: Request) -> JSONResponse:
            connected = self._http is not None and not self._http.is_closed
            body = {
                "status": "healthy" if connected else "unhealthy",
                "version": __version__,
                "connected": connected,
                "plugins": {
                    "total": len(self._plugin_manager.registered_plugins),
                    "healthy": len(self._plugin_manager.healthy_plugins),
                },
            }
            return JSONResponse(body, status_code=200 if connected else 503)

    def _register_core_resources(self, mcp: FastMCP) -> None:
        """Register core MCP resources describing the server."""

        @mcp.resource("dots://server/plugins")
        def server_plugins() -> dict:
            """Get information about loaded plugins and their health status."""
            plugins = {}
            for meta in self._plugin_manager.get_all_metadata():
                plugins[meta.name] = {
                    "version": meta.version,
                    "description": meta.description,
                    "maintainer": meta.maintainer,
                    "api_paths": meta.api_paths,
                    "healthy": meta.name in self._plugin_manager.healthy_plugins,
                }

            return {
                "total_plugins": len(self._plugin_manager.registered_plugins),
                "active_plugins": len(self._plugin_manager.healthy_plugins),
                "plugins": plugins,
            }


def create_server(config: DotsConfig | None = None) -> FastMCP:
    """Create the dots-mcp FastMCP server."""
    server = DotsServer(config)
    return server.create_mcp()
