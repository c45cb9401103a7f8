"""Tests for PluginManager and the core plugin registry."""

from unittest.mock import MagicMock

from dots_mcp.config import DotsConfig
from dots_mcp.domains.registry import DatabasesPlugin, get_core_plugins
from dots_mcp.plugin import BasePlugin, PluginMetadata
from dots_mcp.plugin_manager import PluginManager


def _server(token: str | None) -> MagicMock:
    server = MagicMock()
    server.config = DotsConfig(_env_file=None, api_token=token)
    return server


class TestCorePlugins:
    """The built-in domain plugins."""

    def test_databases_plugin_is_registered(self) -> None:
        pm = PluginManager()

        count = pm.load_core_plugins()

        assert count == 1
        assert isinstance(pm.registered_plugins["databases"], DatabasesPlugin)

    def test_metadata(self) -> None:
        (plugin,) = get_core_plugins()
        meta = plugin.dots_get_plugin_metadata()

        assert meta.name == "databases"
        assert meta.requires_token is True
        assert meta.api_paths == ["databases"]

    def test_register_all_tools_reaches_databases_tools(self) -> None:
        pm = PluginManager()
        pm.load_core_plugins()
        mcp = MagicMock()
        mcp.tool = MagicMock(return_value=lambda f: f)

        pm.register_all_tools(mcp, _server("t"))

        assert mcp.tool.call_count == 16


class TestHealthChecks:
    """Plugin health checks."""

    def test_token_configured(self) -> None:
        pm = PluginManager()
        pm.load_core_plugins()

        results = pm.run_health_checks(_server("t"))

        assert results["databases"] == (True, "API token configured")
        assert "databases" in pm.healthy_plugins

    def test_token_missing(self) -> None:
        pm = PluginManager()
        pm.load_core_plugins()

        results = pm.run_health_checks(_server(None))

        assert results["databases"] == (False, "No API token configured")
        assert pm.healthy_plugins == {}

    def test_plugin_without_token_requirement(self) -> None:
        pm = PluginManager()
        plugin = BasePlugin(
            PluginMetadata(
                name="offline",
                version="1.0.0",
                description="Needs no token",
                maintainer="test@example.com",
                requires_token=False,
            )
        )
        pm.register_plugin(plugin)

        results = pm.run_health_checks(_server(None))

        assert results["offline"] == (True, "No token requirement")

    def test_failing_health_check_is_contained(self) -> None:
        pm = PluginManager()
        plugin = MagicMock()
        plugin.dots_health_check.side_effect = RuntimeError("boom")
        pm._registered_plugins["broken"] = plugin

        results = pm.run_health_checks(_server("t"))

        assert results["broken"] == (False, "Health check error: boom")


class TestRegistration:
    """Registering and unregistering plugins."""

    def test_unregister(self) -> None:
        pm = PluginManager()
        pm.load_core_plugins()

        pm.unregister_plugin("databases")

        assert pm.registered_plugins == {}
        assert pm.get_all_metadata() == []
