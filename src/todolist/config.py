from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

ENVIRONMENTS = ("development", "test", "production")

_DEFAULT_DB_PATHS = {
    "development": "./var/todo.db",
    "test": "./var/todo_test.db",
    "production": "./var/todo.db",
}


def _get_env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError as e:
        raise ValueError(f"Environment variable {name} must be an int, got: {raw!r}") from e
    return value


def _get_env_str(name: str, default: str) -> str:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return raw


@dataclass(frozen=True)
class Settings:
    # Application
    app_name: str
    app_version: str
    environment: str

    # Database
    db_path: Path
    migrations_dir: Path

    # Server (used by the `web` subcommand)
    host: str
    port: int
    log_level: str

    @property
    def is_test(self) -> bool:
        return self.environment == "test"


def load_settings() -> Settings:
    """
    Loads settings from env vars with sane defaults.

    Env vars:
      - TODO_APP_NAME (default: todolist)
      - TODO_APP_VERSION (default: 0.1.0)
      - TODO_ENV (default: development; one of development/test/production)
      - TODO_DB_PATH (default: ./var/todo.db, or ./var/todo_test.db when TODO_ENV=test)
      - TODO_MIGRATIONS_DIR (default: migrations)
      - TODO_HOST (default: 127.0.0.1)
      - TODO_PORT (default: 8000)
      - TODO_LOG_LEVEL (default: info)
    """
    environment = _get_env_str("TODO_ENV", "development").strip().lower()
    if environment not in ENVIRONMENTS:
        raise ValueError(f"TODO_ENV must be one of {', '.join(ENVIRONMENTS)}, got: {environment!r}")

    db_path = Path(_get_env_str("TODO_DB_PATH", _DEFAULT_DB_PATHS[environment])).expanduser()
    migrations_dir = Path(_get_env_str("TODO_MIGRATIONS_DIR", "migrations")).expanduser()

    host = _get_env_str("TODO_HOST", "127.0.0.1")
    port = _get_env_int("TODO_PORT", 8000)
    if not (1 <= port <= 65535):
        raise ValueError("TODO_PORT must be between 1 and 65535")

    log_level = _get_env_str("TODO_LOG_LEVEL", "info").lower()

    return Settings(
        app_name=_get_env_str("TODO_APP_NAME", "todolist"),
        app_version=_get_env_str("TODO_APP_VERSION", "0.1.0"),
        environment=environment,
        db_path=db_path,
        migrations_dir=migrations_dir,
        host=host,
        port=port,
        log_level=log_level,
    )
