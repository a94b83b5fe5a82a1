"""
Runtime configuration for the clear sky tools.

Values come from the process environment, optionally seeded from a ``.env``
file in the working directory.
"""

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

load_dotenv()

DEFAULT_API_BASE = "https://api.weather.gov"
# api.weather.gov rejects requests without a descriptive User-Agent
DEFAULT_USER_AGENT = "ClearNightSkyMCP/1.0 (ops@clearnightsky.example)"
DEFAULT_LOG_LEVEL = "INFO"


def _optional_float(raw: Optional[str]) -> Optional[float]:
    if raw is None or not raw.strip():
        return None
    try:
        value = float(raw)
    except ValueError:
        raise ValueError(f"CLEAR_SKY_HTTP_TIMEOUT must be a number of seconds, got {raw!r}")
    return value if value > 0 else None


@dataclass(frozen=True)
class Settings:
    """Settings shared by the NWS client, the MCP server and the CLI."""

    api_base: str = DEFAULT_API_BASE
    user_agent: str = DEFAULT_USER_AGENT
    http_timeout: Optional[float] = None
    log_level: str = DEFAULT_LOG_LEVEL

    @property
    def request_headers(self) -> dict:
        return {
            "User-Agent": self.user_agent or DEFAULT_USER_AGENT,
            "Accept": "application/geo+json",
        }

    @classmethod
    def from_env(cls) -> "Settings":
        """
        Build settings from environment variables.

        Environment:
            NWS_API_BASE: API root (default https://api.weather.gov)
            NWS_USER_AGENT: client identification sent with every request
            CLEAR_SKY_HTTP_TIMEOUT: total seconds per request (unset waits forever)
            CLEAR_SKY_LOG_LEVEL: logging level name (default INFO)
        """
        api_base = os.getenv("NWS_API_BASE", "").strip() or DEFAULT_API_BASE
        user_agent = os.getenv("NWS_USER_AGENT", "").strip() or DEFAULT_USER_AGENT
        log_level = os.getenv("CLEAR_SKY_LOG_LEVEL", "").strip().upper() or DEFAULT_LOG_LEVEL
        return cls(
            api_base=api_base.rstrip("/"),
            user_agent=user_agent,
            http_timeout=_optional_float(os.getenv("CLEAR_SKY_HTTP_TIMEOUT")),
            log_level=log_level,
        )
