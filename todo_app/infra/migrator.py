"""Versioned schema evolution on top of alembic.

Each alembic revision under ``todo_app/migrations/versions`` is one integer
schema version, counted from the base revision (``0001_create_tasks`` is
version 1). The version lives in alembic's ``alembic_version`` row and, on
SQLite, is mirrored into ``PRAGMA user_version`` so databases written by the
mobile app (which only knows the pragma) can be adopted in place.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from alembic import command
from alembic.config import Config
from alembic.runtime.migration import MigrationContext
from alembic.script import ScriptDirectory
from sqlalchemy import Connection, Engine

from todo_app.errors import SchemaDowngradeError

logger = logging.getLogger(__name__)

MIGRATIONS_DIR = Path(__file__).resolve().parents[1] / "migrations"


def alembic_config(connection: Optional[Connection] = None) -> Config:
    cfg = Config()
    cfg.set_main_option("script_location", str(MIGRATIONS_DIR))
    cfg.set_main_option("path_separator", "os")
    if connection is not None:
        cfg.attributes["connection"] = connection
    return cfg


class SchemaMigrator:
    def __init__(self, bind: Engine) -> None:
        self._engine = bind
        script = ScriptDirectory.from_config(alembic_config())
        self._revisions = [rev.revision for rev in reversed(list(script.walk_revisions()))]

    @property
    def head_version(self) -> int:
        return len(self._revisions)

    def revision_for(self, version: int) -> str:
        if not 1 <= version <= self.head_version:
            raise ValueError(f"unknown schema version {version}")
        return self._revisions[version - 1]

    def current_version(self) -> int:
        with self._engine.connect() as connection:
            return self._read_version(connection)

    def upgrade(self, target: Optional[int] = None) -> int:
        """Apply every missing version step up to ``target`` (default: head).

        Returns the schema version after the call. Raises
        ``SchemaDowngradeError`` when the database is already past ``target``
        or past the newest version this code knows.
        """
        target = self.head_version if target is None else target
        self.revision_for(target)

        with self._engine.begin() as connection:
            current = self._read_version(connection)
            if current > self.head_version:
                raise SchemaDowngradeError(current, self.head_version)
            if current > target:
                raise SchemaDowngradeError(current, target)

            cfg = alembic_config(connection)
            if current and self._alembic_revision(connection) is None:
                logger.info("Adopting unversioned database at schema version %s", current)
                command.stamp(cfg, self.revision_for(current))

            if current == target:
                logger.debug("Schema already at version %s", current)
                return current

            logger.info("Upgrading schema from version %s to %s", current, target)
            command.upgrade(cfg, self.revision_for(target))
            self._write_user_version(connection, target)
        return target

    def _read_version(self, connection: Connection) -> int:
        revision = self._alembic_revision(connection)
        if revision is not None:
            if revision not in self._revisions:
                raise SchemaDowngradeError(revision, self.head_version)
            return self._revisions.index(revision) + 1
        return self._user_version(connection)

    @staticmethod
    def _alembic_revision(connection: Connection) -> Optional[str]:
        return MigrationContext.configure(connection).get_current_revision()

    @staticmethod
    def _user_version(connection: Connection) -> int:
        if connection.dialect.name != "sqlite":
            return 0
        return int(connection.exec_driver_sql("PRAGMA user_version").scalar() or 0)

    @staticmethod
    def _write_user_version(connection: Connection, version: int) -> None:
        if connection.dialect.name != "sqlite":
            return
        connection.exec_driver_sql(f"PRAGMA user_version = {int(version)}")
