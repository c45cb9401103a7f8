"""Entry point for the dots-mcp server."""

import argparse
import logging
import sys
from typing import Any

from dots_mcp import __version__
from dots_mcp.config import DotsConfig, LogLevel, TransportMode
from dots_mcp.utils.errors import ConfigurationError


def setup_logging(level: LogLevel) -> None:
    """Configure logging for the server."""
    logging.basicConfig(
        level=level.value,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
    )


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="dots-mcp",
        description="MCP server for DigitalOcean managed databases",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    # Transport options
    parser.add_argument(
        "--transport",
        choices=[mode.value for mode in TransportMode],
        default=None,
        help="Transport mode (default: from config or stdio)",
    )
    parser.add_argument(
        "--host",
        default=None,
        help="Host to bind HTTP server to (default: 127.0.0.1)",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=None,
        help="Port to bind HTTP server to (default: 8000)",
    )

    # API options
    parser.add_argument(
        "--token",
        default=None,
        help="DigitalOcean API token (default: DOTS_MCP_API_TOKEN)",
    )
    parser.add_argument(
        "--api-url",
        default=None,
        help="Base URL of the DigitalOcean v2 API",
    )
    parser.add_argument(
        "--page-size",
        type=int,
        default=None,
        help="Default page size for list operations (default: 10)",
    )

    # Safety options
    parser.add_argument(
        "--read-only",
        action="store_true",
        help="Run in read-only mode (disable all write operations)",
    )
    parser.add_argument(
        "--enable-dangerous",
        action="store_true",
        help="Enable dangerous operations like delete",
    )

    # Logging
    parser.add_argument(
        "--log-level",
        choices=[level.value for level in LogLevel],
        default=None,
        help="Logging level (default: INFO)",
    )

    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> DotsConfig:
    """Build config from args, falling back to environment/defaults."""
    config_kwargs: dict[str, Any] = {}

    if args.transport:
        config_kwargs["transport"] = TransportMode(args.transport)
    if args.host:
        config_kwargs["host"] = args.host
    if args.port:
        config_kwargs["port"] = args.port
    if args.token:
        config_kwargs["api_token"] = args.token
    if args.api_url:
        config_kwargs["api_url"] = args.api_url
    if args.page_size:
        config_kwargs["page_size"] = args.page_size
    if args.read_only:
        config_kwargs["read_only_mode"] = True
    if args.enable_dangerous:
        config_kwargs["enable_dangerous_operations"] = True
    if args.log_level:
        config_kwargs["log_level"] = LogLevel(args.log_level)

    return DotsConfig(**config_kwargs)


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    config = build_config(parse_args(argv))

    setup_logging(config.log_level)

    logger = logging.getLogger(__name__)
    logger.info(f"Starting dots-mcp server v{__version__}")

    try:
        for warning in config.validate_auth_config():
            logger.warning(warning)
    except ConfigurationError as e:
        logger.error(f"Configuration error: {e}")
        return 1

    from dots_mcp.server import create_server

    mcp = create_server(config)

    if config.transport == TransportMode.STDIO:
        logger.info("Running with stdio transport")
    else:
        logger.info(
            f"Running with {config.transport.value} transport on {config.host}:{config.port}"
        )
    mcp.run(transport=config.transport.value)

    return 0


if __name__ == "__main__":
    sys.exit(main())
