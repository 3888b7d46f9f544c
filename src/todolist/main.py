from __future__ import annotations

import argparse
import sys
from typing import Optional, Sequence

from todolist.config import Settings, load_settings
from todolist.domain.errors import MigrationError
from todolist.logging import configure_logging, get_logger
from todolist.storage import MigrationRunner, SQLiteDB, TaskRepo


def _build_parser(settings: Settings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=settings.app_name,
        description="Minimal todo list manager.",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {settings.app_version}"
    )
    sub = parser.add_subparsers(dest="command", metavar="{migrate,rollback,web,cli}")
    sub.add_parser("migrate", help="Run database migration", description="Run database migration")
    sub.add_parser(
        "rollback",
        help="Rollback latest database migration",
        description="Rollback latest database migration",
    )
    sub.add_parser("web", help="Start the web app", description="Start the web app")
    sub.add_parser("cli", help="Launch the cli app", description="Launch the cli app")
    return parser


def _migrate(settings: Settings, *, rollback: bool) -> int:
    log = get_logger(__name__)
    conn = SQLiteDB(settings.db_path).connect()
    try:
        runner = MigrationRunner(conn, settings.migrations_dir)
        if rollback:
            runner.down()
        else:
            runner.up()
    except MigrationError as e:
        log.error("%s", e)
        return 1
    finally:
        conn.close()
    return 0


def _web(settings: Settings) -> int:
    log = get_logger(__name__)

    # Import here so config/logging are set before app import side-effects.
    from todolist.api.app import create_app

    try:
        import uvicorn
    except ImportError:
        log.error("uvicorn is not installed. Install with: pip install uvicorn")
        return 1

    log.info("Starting web app on %s:%d with DB path: %s", settings.host, settings.port, settings.db_path)
    uvicorn.run(
        create_app(settings),
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level,
    )
    return 0


def _cli(settings: Settings) -> int:
    from todolist.cli import CLI

    log = get_logger(__name__)
    log.info("Opening task list at %s", settings.db_path)
    conn = SQLiteDB(settings.db_path).connect()
    try:
        CLI(TaskRepo(conn)).run()
    finally:
        conn.close()
    return 0


def main(argv: Optional[Sequence[str]] = None, settings: Optional[Settings] = None) -> int:
    """
    Dispatches one of the subcommands:

      todolist migrate     apply pending migrations
      todolist rollback    revert the latest migration
      todolist web         serve the REST API with uvicorn
      todolist cli         interactive text-mode loop (logs go to stderr)

    Without a subcommand the instructions are printed.
    """
    settings = settings or load_settings()

    parser = _build_parser(settings)
    args = parser.parse_args(argv)

    configure_logging(
        settings.log_level,
        stream=sys.stderr if args.command == "cli" else None,
    )

    if args.command == "migrate":
        return _migrate(settings, rollback=False)
    if args.command == "rollback":
        return _migrate(settings, rollback=True)
    if args.command == "web":
        return _web(settings)
    if args.command == "cli":
        return _cli(settings)

    parser.print_help()
    return 0


def run() -> None:
    raise SystemExit(main())


if __name__ == "__main__":
    run()
