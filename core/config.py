# =============================================================================
# core/config.py  —  Runtime Settings (environment-driven)
# =============================================================================
#
# Every knob in this project is an environment variable, optionally loaded
# from a .env file by the entry point (tools/mcp_server.py).
#
#   OPENVERSE_API_BASE     Upstream base address (no trailing slash needed)
#   OPENVERSE_USER_AGENT   Identifying header sent with every request
#   OPENVERSE_LOG_LEVEL    Log level for the MCP server's stderr logging
#
# Nothing here raises on a missing variable; every setting has a default.
# =============================================================================

from dataclasses import dataclass
import os

OPENVERSE_API_BASE = "https://api.openverse.org/v1"
DEFAULT_USER_AGENT = "MCP-Openverse/1.0"
DEFAULT_LOG_LEVEL = "INFO"


@dataclass(frozen=True)
class Settings:
    """Resolved configuration for one process."""

    api_base: str = OPENVERSE_API_BASE
    user_agent: str = DEFAULT_USER_AGENT
    log_level: str = DEFAULT_LOG_LEVEL


def load_settings(environ: dict[str, str] | None = None) -> Settings:
    """Build Settings from the environment.

    Empty values are treated the same as unset ones, so `OPENVERSE_API_BASE=`
    in a .env file falls back to the public endpoint instead of breaking
    every request.
    """
    env = os.environ if environ is None else environ

    def _get(name: str, default: str) -> str:
        return env.get(name, "").strip() or default

    return Settings(
        api_base=_get("OPENVERSE_API_BASE", OPENVERSE_API_BASE).rstrip("/"),
        user_agent=_get("OPENVERSE_USER_AGENT", DEFAULT_USER_AGENT),
        log_level=_get("OPENVERSE_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper(),
    )
