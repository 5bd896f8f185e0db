# =============================================================================
# core/config.py  —  Connection settings for the XAPIHub backend
# =============================================================================
#
# Two settings are required: the base URL of the XAPIHub API gateway and a
# long-lived bearer token.  Both come from the environment:
#
#   XAPIHUB_BASE_URL   e.g. https://api-dev.xapihub.io
#   XAPIHUB_TOKEN      the bearer token issued by XAPIHub
#
# Entry points (tools/mcp_server.py, main.py, check_connection.py) call
# load_dotenv() first, so a .env file in the working directory works too.
# This module never reads .env itself; it only looks at the mapping it is
# given, which keeps it trivial to test.
# =============================================================================

import os
from dataclasses import dataclass
from typing import Mapping, Optional

BASE_URL_ENV = "XAPIHUB_BASE_URL"
TOKEN_ENV = "XAPIHUB_TOKEN"


class ConfigurationError(Exception):
    """A required setting is missing.  Fatal at startup."""


@dataclass(frozen=True)
class XAPIHubConfig:
    base_url: str
    token: str

    def __repr__(self) -> str:
        # Keep the token out of logs and tracebacks.
        return f"XAPIHubConfig(base_url={self.base_url!r}, token='***')"


def load_config(environ: Optional[Mapping[str, str]] = None) -> XAPIHubConfig:
    """Build the XAPIHub configuration from environment variables.

    Args:
        environ: Mapping to read from.  Defaults to os.environ.

    Returns:
        An XAPIHubConfig with a stripped base URL (no trailing slash).

    Raises:
        ConfigurationError: if the base URL or the token is missing or blank.
    """
    env = os.environ if environ is None else environ

    base_url = (env.get(BASE_URL_ENV) or "").strip().rstrip("/")
    token = (env.get(TOKEN_ENV) or "").strip()

    if not base_url:
        raise ConfigurationError(f"{BASE_URL_ENV} environment variable is required")
    if not token:
        raise ConfigurationError(f"{TOKEN_ENV} environment variable is required")

    return XAPIHubConfig(base_url=base_url, token=token)
