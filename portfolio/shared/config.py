"""
Environment configuration

All settings come from environment variables, optionally seeded from a local
.env file (variables already set in the environment win). The database
location has no fallback value: a process without DATABASE_URL refuses to start.
"""

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv


class ConfigError(RuntimeError):
    """Raised when the environment is missing or has malformed settings."""


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ConfigError(f"{name} must be an integer, got {raw!r}")


@dataclass(frozen=True)
class Settings:
    database_url: str
    port: int = 5000
    environment: str = "development"
    frontend_url: Optional[str] = None
    db_connect_timeout: int = 5
    log_level: str = "INFO"

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @classmethod
    def from_env(cls, env_file: Optional[str] = ".env") -> "Settings":
        """
        Build settings from the current environment.

        Args:
            env_file: .env file to load first; None skips it. A missing file
                is not an error.

        Raises:
            ConfigError: If DATABASE_URL is unset or a numeric value is invalid
        """
        if env_file:
            load_dotenv(env_file)

        database_url = os.getenv("DATABASE_URL")
        if not database_url:
            raise ConfigError("DATABASE_URL is not defined in environment variables")

        return cls(
            database_url=database_url,
            port=_int_env("PORT", 5000),
            environment=os.getenv("ENVIRONMENT", "development"),
            frontend_url=os.getenv("FRONTEND_URL") or None,
            db_connect_timeout=_int_env("DB_CONNECT_TIMEOUT", 5),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )
