"""Typed async client and MCP server for DigitalOcean managed databases."""

__version__ = "0.1.0"
