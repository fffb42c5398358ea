"""Configuration management for PixelRelay.

This module provides centralized configuration management using Pydantic Settings.
All configuration is loaded from environment variables with the PIXELRELAY_ prefix,
allowing easy customization without code changes.

Environment Variable Loading
-----------------------------
Configuration values are loaded in the following priority order:
1. Environment variables (PIXELRELAY_* prefix)
2. .env file in the project root
3. Default values defined in PixelRelayConfig

Example .env file:
    PIXELRELAY_API_KEY=sk-...
    PIXELRELAY_UPSTREAM_URL=https://api.infip.pro/v1/images/generations
    PIXELRELAY_PROXY_URL=http://127.0.0.1:8888/api/generate
    PIXELRELAY_RATE_LIMIT_REQUESTS=10

Global Configuration Instance
------------------------------
A global `config` instance is created automatically at module import time and
is used by the UI and the server entry points.

The proxy does NOT rely on the global instance for the credential: it calls
:func:`load_config` on every request so a key added to the environment is
picked up without a restart, and a missing key is detected at the moment a
request would have carried it.

Usage Example
-------------
    from pixelrelay.core.config import config

    print(config.upstream_url)
    print(config.rate_limit_requests)
"""

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_UPSTREAM_URL = "https://api.infip.pro/v1/images/generations"


class PixelRelayConfig(BaseSettings):
    """Main configuration for PixelRelay.

    Values are loaded from environment variables with the PIXELRELAY_ prefix,
    with fallback to defaults defined here.

    Attributes
    ----------
    Proxy Settings:
        api_key : SecretStr | None
            Credential attached as a bearer token to upstream requests.
            There is no default; the proxy refuses to forward without it.
        upstream_url : str
            Image generation endpoint the proxy forwards to
        upstream_timeout : float | None
            Upstream request timeout in seconds (None = wait indefinitely)
        server_host : str
            Bind address for the proxy server
        server_port : int
            Port for the proxy server (1024-65535)

    Client Settings:
        proxy_url : str
            Full URL of the proxy's generate endpoint used by the form
        rate_limit_requests : int
            Submissions allowed per rolling window
        rate_limit_window_seconds : float
            Length of the rolling window in seconds

    UI Settings:
        gradio_server_name : str
            Server bind address (0.0.0.0 for local network)
        gradio_server_port : int
            Server port (1024-65535)
        gradio_share : bool
            Create public gradio.live link (keep False for local-only)

    Examples
    --------
    Create a custom configuration:

        >>> custom_config = PixelRelayConfig(
        ...     api_key="test-key",
        ...     rate_limit_requests=3,
        ... )

    Use the global configuration instance:

        >>> from pixelrelay.core.config import config
        >>> print(config.rate_limit_window_seconds)
        60.0
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="PIXELRELAY_",
        case_sensitive=False,
    )

    # Proxy settings
    api_key: SecretStr | None = Field(
        default=None,
        description="Bearer credential for the upstream image generation API",
    )
    upstream_url: str = Field(
        default=DEFAULT_UPSTREAM_URL,
        description="Upstream image generation endpoint",
    )
    upstream_timeout: float | None = Field(
        default=None,
        description="Upstream request timeout in seconds (None disables the timeout)",
        gt=0,
    )
    server_host: str = Field(
        default="0.0.0.0",
        description="Proxy server bind address",
    )
    server_port: int = Field(
        default=8888,
        description="Proxy server port",
        ge=1024,
        le=65535,
    )

    # Client settings
    proxy_url: str = Field(
        default="http://127.0.0.1:8888/api/generate",
        description="Generate endpoint of the proxy, as seen from the form",
    )
    rate_limit_requests: int = Field(
        default=10,
        description="Submissions allowed per rolling window",
        ge=1,
    )
    rate_limit_window_seconds: float = Field(
        default=60.0,
        description="Length of the rolling rate-limit window in seconds",
        gt=0,
    )

    # UI settings
    gradio_server_name: str = Field(
        default="0.0.0.0",
        description="Server bind address (0.0.0.0 for local network)",
    )
    gradio_server_port: int = Field(
        default=7860,
        description="Server port",
        ge=1024,
        le=65535,
    )
    gradio_share: bool = Field(
        default=False,
        description="Create public gradio.live link (keep False for local-only)",
    )

    def get_api_key(self) -> str | None:
        """Return the plain credential, or None when unset or blank."""
        if self.api_key is None:
            return None
        value = self.api_key.get_secret_value().strip()
        return value or None


def load_config() -> PixelRelayConfig:
    """Build a fresh configuration from the current environment."""
    return PixelRelayConfig()


# Global configuration instance
# Loaded once at import time for the UI and server entry points.
config = load_config()
