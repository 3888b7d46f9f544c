# src/todolist/api/app.py
from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import FastAPI

from todolist.config import Settings, load_settings
from todolist.logging import configure_logging, get_logger
from todolist.storage import MigrationRunner, SQLiteDB

from .routes import router

_LOG = get_logger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Builds the web app around an explicit Settings value.

    When settings is None they are loaded from the environment at startup,
    which is what `uvicorn --factory todolist.api.app:create_app` relies on.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        """
        Responsible for:
        - configuring logging
        - running pending DB migrations
        - exposing settings and the connection factory on app.state
        """
        cfg = settings or load_settings()
        configure_logging(cfg.log_level)

        db = SQLiteDB(cfg.db_path)

        conn = db.connect()
        try:
            MigrationRunner(conn, cfg.migrations_dir).up()
        finally:
            conn.close()

        app.state.settings = cfg
        app.state.db = db

        _LOG.info("Startup complete (%s %s, env=%s).", cfg.app_name, cfg.app_version, cfg.environment)
        try:
            yield
        finally:
            _LOG.info("Shutdown complete.")

    title = settings.app_name if settings else "todolist"
    version = settings.app_version if settings else "0.1.0"
    app = FastAPI(title=title, version=version, lifespan=lifespan)
    app.include_router(router)
    return app
