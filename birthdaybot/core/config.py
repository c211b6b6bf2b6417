"""
BirthdayBot - Configuration
===========================

Central configuration from environment variables.

Variables:
    TOKEN               - Bot token (required)
    DSN                 - SQLite database path or file: URI (required, not in-memory)
    BIRTHDAY_ROLE       - Birthday role ID (read but not used yet)
    BIRTHDAY_CHANNEL_ID - Channel for announcements (DMs are sent if unset)
    GUILD_ID            - Sync commands to this guild only
    LOG_DIR             - Directory for log files
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional


ROOT_DIR = Path(__file__).parent.parent.parent
DEFAULT_LOGS_DIR = ROOT_DIR / "logs"


class ConfigError(Exception):
    """Raised when required configuration is missing or malformed."""
    pass


def _get_env_int(env: Mapping[str, str], key: str, default: int = 0) -> int:
    """Get environment variable as int with default."""
    value = env.get(key)
    if value is None or not value.strip():
        return default
    try:
        return int(value)
    except ValueError:
        raise ConfigError(f"{key} must be an integer, got {value!r}")


def _is_memory_dsn(dsn: str) -> bool:
    """True for DSNs that give every connection its own empty database."""
    if dsn == ":memory:":
        return True
    if dsn.startswith("file:"):
        path, _, query = dsn[len("file:"):].partition("?")
        return path in ("", ":memory:") or "mode=memory" in query.split("&")
    return False


@dataclass(frozen=True)
class Config:
    """Bot configuration from environment variables."""

    # Bot settings
    TOKEN: str
    GUILD_ID: int = 0

    # Database
    DSN: str = ""

    # Birthdays
    BIRTHDAY_ROLE: str = ""
    BIRTHDAY_CHANNEL_ID: int = 0

    # Logging
    LOG_DIR: Path = DEFAULT_LOGS_DIR

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "Config":
        """
        Build configuration from the environment.

        Args:
            env: Mapping to read from. Defaults to os.environ.

        Raises:
            ConfigError: If TOKEN or DSN is missing, DSN is in-memory,
                or an ID is not numeric.
        """
        if env is None:
            env = os.environ

        token = env.get("TOKEN", "").strip()
        if not token:
            raise ConfigError("TOKEN not set in environment")

        dsn = env.get("DSN", "").strip()
        if not dsn:
            raise ConfigError("DSN not set in environment")
        # Each database operation opens its own connection
        if _is_memory_dsn(dsn):
            raise ConfigError(f"DSN must name a database file, got {dsn!r}")

        log_dir = env.get("LOG_DIR", "").strip()

        return cls(
            TOKEN=token,
            GUILD_ID=_get_env_int(env, "GUILD_ID"),
            DSN=dsn,
            BIRTHDAY_ROLE=env.get("BIRTHDAY_ROLE", "").strip(),
            BIRTHDAY_CHANNEL_ID=_get_env_int(env, "BIRTHDAY_CHANNEL_ID"),
            LOG_DIR=Path(log_dir) if log_dir else DEFAULT_LOGS_DIR,
        )
