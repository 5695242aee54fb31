"""Application settings loaded from environment variables.

Configuration file discovery (in priority order):
1. OS environment variables (always highest priority)
2. GATEKEEP_ENV_FILE environment variable (path to a .env file)
3. config/.env.dev - local development
4. config/.env - production/Docker

Uses pydantic-settings for automatic type coercion and validation.
"""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import SecretStr, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# bcrypt only accepts cost factors in this range
MIN_HASH_ROUNDS = 4
MAX_HASH_ROUNDS = 31


def _find_project_root() -> Path:
    """Find the project root directory."""
    current = Path(__file__).resolve().parent

    for parent in [current, *current.parents]:
        if (parent / "config").is_dir():
            return parent
        if (parent / "pyproject.toml").is_file():
            return parent

    return Path.cwd()


def get_config_dir() -> Path:
    """Get the config directory path."""
    return _find_project_root() / "config"


def _resolve_env_file_path() -> Path | None:
    """Resolve the .env file path.

    Priority:
    1. GATEKEEP_ENV_FILE env var (full or project-relative path)
    2. config/.env.dev (local development)
    3. config/.env (production)
    """
    env_file_path = os.environ.get("GATEKEEP_ENV_FILE")
    if env_file_path:
        path = Path(env_file_path)
        if not path.is_absolute():
            path = _find_project_root() / path
        if path.exists():
            return path

    config_dir = get_config_dir()

    dev_env = config_dir / ".env.dev"
    if dev_env.exists():
        return dev_env

    prod_env = config_dir / ".env"
    if prod_env.exists():
        return prod_env

    return None


class Settings(BaseSettings):
    """Application configuration loaded from environment variables.

    Values are loaded from:
    1. OS environment variables (highest priority)
    2. .env file (config/.env.dev or config/.env)
    3. Default values
    """

    model_config = SettingsConfigDict(
        env_file=_resolve_env_file_path(),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Database
    database_backend: Literal["postgresql", "sqlite"] = "postgresql"

    # PostgreSQL (POSTGRES_ prefix)
    postgres_host: str = "localhost"
    postgres_port: int = 5432
    postgres_user: str = "postgres"
    postgres_password: SecretStr | None = None
    postgres_db: str = "gatekeep"

    # SQLite
    sqlite_path: str = "gatekeep.db"

    # Password hashing
    password_hash_rounds: int = 12

    # Logging (LOG_ prefix)
    log_level: str = "INFO"

    @field_validator("password_hash_rounds")
    @classmethod
    def _validate_hash_rounds(cls, v: int) -> int:
        if not MIN_HASH_ROUNDS <= v <= MAX_HASH_ROUNDS:
            msg = (
                f"password_hash_rounds must be between {MIN_HASH_ROUNDS} "
                f"and {MAX_HASH_ROUNDS}"
            )
            raise ValueError(msg)
        return v

    @field_validator("log_level")
    @classmethod
    def _normalize_log_level(cls, v: str) -> str:
        return v.strip().upper()

    @model_validator(mode="after")
    def _require_postgres_password(self) -> Settings:
        if self.database_backend == "postgresql" and self.postgres_password is None:
            msg = "POSTGRES_PASSWORD must be set when DATABASE_BACKEND=postgresql"
            raise ValueError(msg)
        return self

    # Plain properties keep the password out of repr() and model_dump()
    @property
    def database_url(self) -> str:
        """Construct the database URL from components."""
        if self.database_backend == "sqlite":
            return f"sqlite+aiosqlite:///{self.sqlite_path}"

        password = (
            self.postgres_password.get_secret_value() if self.postgres_password else ""
        )
        return (
            f"postgresql+asyncpg://{self.postgres_user}:{password}"
            f"@{self.postgres_host}:{self.postgres_port}/{self.postgres_db}"
        )

    @property
    def database_url_display(self) -> str:
        """Database location without credentials, safe for logs."""
        if self.database_backend == "sqlite":
            return f"sqlite:///{self.sqlite_path}"
        return (
            f"postgresql://{self.postgres_host}:{self.postgres_port}/{self.postgres_db}"
        )


@lru_cache()
def get_settings() -> Settings:
    """Return cached application settings.

    POSTGRES_PASSWORD must be provided via environment variables or .env
    file unless DATABASE_BACKEND=sqlite.
    """
    return Settings()


def clear_settings_cache() -> None:
    """Clear the settings cache (useful for tests)."""
    get_settings.cache_clear()
