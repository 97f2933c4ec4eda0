"""WMS settings, read from the environment.

Lookup order for each field: OS environment, then the first env file
found among ``$WMS_ENV_FILE``, ``config/.env.dev`` and ``config/.env``,
then the defaults below. The env file is resolved each time
``get_settings`` builds a fresh ``Settings``.
"""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Any

from pydantic import SecretStr, computed_field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_FILE_VARIABLE = "WMS_ENV_FILE"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _project_root() -> Path:
    here = Path(__file__).resolve().parent
    for candidate in (here, *here.parents):
        if (candidate / "config").is_dir() or (candidate / "pyproject.toml").is_file():
            return candidate
    return here.parents[1]


def get_config_dir() -> Path:
    """Directory holding the ``.env`` files."""
    return _project_root() / "config"


def _env_file() -> Path | None:
    candidates: list[Path] = []

    explicit = os.environ.get(ENV_FILE_VARIABLE)
    if explicit:
        path = Path(explicit)
        candidates.append(path if path.is_absolute() else _project_root() / path)

    config_dir = get_config_dir()
    candidates += [config_dir / ".env.dev", config_dir / ".env"]

    return next((path for path in candidates if path.is_file()), None)


class Settings(BaseSettings):
    """Runtime configuration for the API, the CLI and the database.

    ``jwt_secret_key`` and ``postgres_password`` have no default; loading
    fails until both are provided.
    """

    model_config = SettingsConfigDict(
        env_file_encoding="utf-8",
        extra="ignore",
    )

    jwt_secret_key: SecretStr
    postgres_password: SecretStr

    app_name: str = "Warehouse Management System"
    debug: bool = False
    log_level: str = "INFO"

    postgres_host: str = "localhost"
    postgres_port: int = 5432
    postgres_user: str = "wms"
    postgres_db: str = "wms"
    # e.g. sqlite+aiosqlite:///./data/wms.db for local runs
    database_url_override: str | None = None

    api_host: str = "0.0.0.0"
    api_port: int = 8000
    api_debug: bool = False
    # Comma separated; empty disables CORS
    api_cors_origins: str = ""

    jwt_access_token_expire_hours: int = 1
    jwt_refresh_token_expire_days: int = 7

    password_reset_token_expire_minutes: int = 60
    password_bcrypt_rounds: int = 12

    @field_validator("api_cors_origins", mode="before")
    @classmethod
    def _join_origins(cls, value: Any) -> str:
        if isinstance(value, (list, tuple)):
            return ",".join(str(origin) for origin in value)
        return str(value or "")

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalize_log_level(cls, value: Any) -> str:
        level = str(value or "INFO").strip().upper()
        if level not in LOG_LEVELS:
            msg = f"log_level must be one of: {', '.join(LOG_LEVELS)}"
            raise ValueError(msg)
        return level

    @field_validator("password_bcrypt_rounds")
    @classmethod
    def _check_bcrypt_rounds(cls, value: int) -> int:
        if not 4 <= value <= 31:
            msg = "password_bcrypt_rounds must be between 4 and 31"
            raise ValueError(msg)
        return value

    @field_validator(
        "jwt_access_token_expire_hours",
        "jwt_refresh_token_expire_days",
        "password_reset_token_expire_minutes",
    )
    @classmethod
    def _check_positive_lifetime(cls, value: int) -> int:
        if value < 1:
            msg = "token lifetimes must be positive"
            raise ValueError(msg)
        return value

    @computed_field(repr=False)  # type: ignore[prop-decorator]
    @property
    def database_url(self) -> str:
        if self.database_url_override:
            return self.database_url_override
        password = self.postgres_password.get_secret_value()
        return (
            f"postgresql+asyncpg://{self.postgres_user}:{password}"
            f"@{self.postgres_host}:{self.postgres_port}/{self.postgres_db}"
        )

    @computed_field  # type: ignore[prop-decorator]
    @property
    def cors_origins(self) -> list[str]:
        origins = (origin.strip() for origin in self.api_cors_origins.split(","))
        return [origin for origin in origins if origin]


@lru_cache()
def get_settings() -> Settings:
    return Settings(_env_file=_env_file())  # type: ignore[call-arg]


def clear_settings_cache() -> None:
    """Forget the cached settings so the next call re-reads the environment."""
    get_settings.cache_clear()
