"""Environment-driven settings shared by both entry points."""

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from tripjack_mcp.errors import ConfigError

# Constants
DEFAULT_API_URL = "https://apitest.tripjack.com"
DEFAULT_PORT = 3000
DEFAULT_TIMEOUT = 30.0


@dataclass(frozen=True)
class Settings:
    api_key: str
    api_url: str = DEFAULT_API_URL
    timeout: float = DEFAULT_TIMEOUT


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """Read upstream settings from the environment.

    Raises ConfigError when TRIPJACK_API_KEY is unset.
    """
    env = os.environ if environ is None else environ

    api_key = env.get("TRIPJACK_API_KEY", "").strip()
    if not api_key:
        raise ConfigError("TRIPJACK_API_KEY environment variable is required")

    api_url = env.get("TRIPJACK_API_URL", "").strip() or DEFAULT_API_URL
    return Settings(api_key=api_key, api_url=api_url)


def load_port(environ: Optional[Mapping[str, str]] = None) -> int:
    """Listening port for the HTTP server; only that entry point reads PORT."""
    env = os.environ if environ is None else environ
    raw_port = env.get("PORT", "").strip()
    if not raw_port:
        return DEFAULT_PORT
    try:
        return int(raw_port)
    except ValueError:
        raise ConfigError(f"PORT must be an integer, got {raw_port!r}")
