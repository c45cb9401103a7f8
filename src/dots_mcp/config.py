"""Configuration for the dots-mcp server and API client."""

from __future__ import annotations

from enum import Enum
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from dots_mcp.utils.errors import ConfigurationError

DEFAULT_API_URL = "https://api.digitalocean.com/v2/"


class TransportMode(str, Enum):
    """MCP transport the server listens on."""

    STDIO = "stdio"
    SSE = "sse"
    STREAMABLE_HTTP = "streamable-http"


class LogLevel(str, Enum):
    """Logging levels accepted by the CLI and environment."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"


class DotsConfig(BaseSettings):
    """Configuration for dots-mcp.

    Loaded from environment variables with DOTS_MCP_ prefix
    or from a .env file.
    """

    model_config = SettingsConfigDict(
        env_prefix="DOTS_MCP_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # API settings
    api_token: str | None = Field(
        default=None,
        description="DigitalOcean personal access token",
    )
    api_url: str = Field(
        default=DEFAULT_API_URL,
        min_length=8,
        description="Base URL of the DigitalOcean v2 API",
    )
    page_size: int = Field(
        default=10,
        ge=1,
        le=200,
        description="Default number of items per page for list operations",
    )
    request_timeout_seconds: float = Field(
        default=15.0,
        gt=0,
        description="Timeout per API request (seconds)",
    )
    user_agent: str = Field(
        default="dots-mcp/0.1",
        min_length=1,
        description="User-Agent header sent with API requests",
    )

    # Server settings
    transport: TransportMode = Field(
        default=TransportMode.STDIO,
        description="MCP transport mode",
    )
    host: str = Field(default="127.0.0.1", description="Host for HTTP transports")
    port: int = Field(default=8000, ge=1, le=65535, description="Port for HTTP transports")

    # Safety settings
    read_only_mode: bool = Field(
        default=False,
        description="Disable all write operations",
    )
    enable_dangerous_operations: bool = Field(
        default=False,
        description="Allow destructive operations such as delete",
    )

    log_level: LogLevel = Field(default=LogLevel.INFO, description="Logging level")

    def is_operation_allowed(self, operation: str) -> tuple[bool, str | None]:
        """Check whether an operation kind is permitted by the safety settings.

        Args:
            operation: One of "read", "create", "update", "delete".

        Returns:
            Tuple of (allowed, reason). Reason is None when allowed.
        """
        if operation == "read":
            return True, None

        if self.read_only_mode:
            return False, f"Operation '{operation}' is disabled in read-only mode"

        if operation == "delete" and not self.enable_dangerous_operations:
            return False, (
                "Delete operations are disabled. "
                "Set DOTS_MCP_ENABLE_DANGEROUS_OPERATIONS=true to enable them."
            )

        return True, None

    def validate_auth_config(self) -> list[str]:
        """Validate authentication settings.

        Returns:
            List of non-fatal warnings.

        Raises:
            ConfigurationError: If no API token is configured.
        """
        if not self.api_token:
            raise ConfigurationError(
                "No API token configured. Set DOTS_MCP_API_TOKEN or pass --token."
            )

        warnings: list[str] = []
        if not self.api_url.startswith("https://"):
            warnings.append(f"API URL {self.api_url} does not use HTTPS")
        if self.enable_dangerous_operations and self.read_only_mode:
            warnings.append("Dangerous operations are enabled but read-only mode overrides them")
        return warnings


@lru_cache
def get_config() -> DotsConfig:
    """Get the process-wide configuration."""
    return DotsConfig()
