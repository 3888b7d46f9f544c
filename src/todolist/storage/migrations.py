# src/todolist/storage/migrations.py
from __future__ import annotations

import re
import sqlite3
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from todolist.domain.errors import MigrationError
from todolist.logging import get_logger

from .db import commit, rollback

_LOG = get_logger(__name__)


_MIGRATION_RE = re.compile(r"^(?P<version>\d+)_(?P<name>\w+)\.(?P<direction>up|down)\.sql$")


@dataclass(frozen=True)
class Migration:
    version: int
    name: str
    up_path: Path
    down_path: Optional[Path] = None


@dataclass
class MigrationRunner:
    """
    Applies and reverts versioned SQL migrations from migrations_dir.

    Expected migration filenames (one up/down pair per version):
      001_create_tasks.up.sql
      001_create_tasks.down.sql
      002_add_index.up.sql
      ...

    Applied versions are stored in schema_migrations. Each step runs its SQL and
    records/removes its version inside one transaction, so a failing step leaves the
    schema at the previous version and stops the run.

    Usage:
      runner = MigrationRunner(conn, Path("migrations"))
      runner.up()
      runner.down()
    """
    conn: sqlite3.Connection
    migrations_dir: Path
    _migrations: Optional[list[Migration]] = field(default=None, init=False, repr=False)

    def up(self) -> list[int]:
        """
        Applies every pending migration in ascending version order.

        Returns the versions applied (empty when the schema is already current).
        """
        try:
            to_apply = self.pending()
            if not to_apply:
                _LOG.info("No pending migrations.")
                return []

            _LOG.info("Applying %d migration(s)...", len(to_apply))
            for m in to_apply:
                _LOG.info("Applying migration %03d (%s)", m.version, m.name)
                sql = m.up_path.read_text(encoding="utf-8")
                self._run_step(
                    sql,
                    "INSERT INTO schema_migrations(version, name, applied_at) "
                    "VALUES (?, ?, strftime('%s','now')*1000);",
                    (m.version, m.name),
                )
        except (sqlite3.Error, OSError, MigrationError) as e:
            raise MigrationError(f"Error while migration up: {e}") from e

        _LOG.info("Migration successful")
        return [m.version for m in to_apply]

    def down(self) -> Optional[int]:
        """
        Reverts the most recently applied migration.

        Returns the reverted version, or None when nothing has been applied.
        """
        try:
            applied = self.applied_versions()
            if not applied:
                _LOG.info("No migrations to roll back.")
                return None

            latest = applied[-1]
            m = self._by_version().get(latest)
            if m is None or m.down_path is None:
                raise MigrationError(f"No down migration found for version {latest:03d}")

            _LOG.info("Reverting migration %03d (%s)", m.version, m.name)
            sql = m.down_path.read_text(encoding="utf-8")
            self._run_step(sql, "DELETE FROM schema_migrations WHERE version = ?;", (m.version,))
        except (sqlite3.Error, OSError, MigrationError) as e:
            raise MigrationError(f"Error while migration down: {e}") from e

        _LOG.info("Migration successful")
        return latest

    def applied_versions(self) -> list[int]:
        _ensure_migrations_table(self.conn)
        rows = self.conn.execute("SELECT version FROM schema_migrations ORDER BY version;").fetchall()
        return [int(r["version"]) for r in rows]

    def pending(self) -> list[Migration]:
        applied = set(self.applied_versions())
        return [m for m in self._load() if m.version not in applied]

    def _run_step(self, sql: str, bookkeeping: str, params: tuple) -> None:
        # executescript leaves the BEGIN it runs open, so the bookkeeping row joins the same transaction.
        try:
            self.conn.executescript(f"BEGIN;\n{sql}\n;")
            self.conn.execute(bookkeeping, params)
            commit(self.conn)
        except sqlite3.Error:
            rollback(self.conn)
            raise

    def _by_version(self) -> dict[int, Migration]:
        return {m.version: m for m in self._load()}

    def _load(self) -> list[Migration]:
        if self._migrations is None:
            self._migrations = _load_migrations(self.migrations_dir)
        return self._migrations


def _ensure_migrations_table(conn: sqlite3.Connection) -> None:
    conn.executescript(
        """
        CREATE TABLE IF NOT EXISTS schema_migrations(
          version INTEGER PRIMARY KEY,
          name TEXT NOT NULL,
          applied_at INTEGER NOT NULL
        );
        """
    )


def _load_migrations(migrations_dir: Path) -> list[Migration]:
    migrations_dir = migrations_dir.resolve()
    if not migrations_dir.is_dir():
        raise MigrationError(f"Migrations dir not found: {migrations_dir}")

    ups: dict[int, Path] = {}
    downs: dict[int, Path] = {}
    names: dict[int, str] = {}
    for path in sorted(migrations_dir.glob("*.sql")):
        m = _MIGRATION_RE.match(path.name)
        if not m:
            # ignore files that don't match the naming convention
            continue
        version = int(m.group("version"))
        if names.setdefault(version, m.group("name")) != m.group("name"):
            raise MigrationError(f"Conflicting names for migration version {version:03d}")
        target = ups if m.group("direction") == "up" else downs
        target[version] = path

    orphans = sorted(set(downs) - set(ups))
    if orphans:
        raise MigrationError(f"Down migration without matching up migration: {orphans}")

    return [
        Migration(version=v, name=names[v], up_path=ups[v], down_path=downs.get(v))
        for v in sorted(ups)
    ]
