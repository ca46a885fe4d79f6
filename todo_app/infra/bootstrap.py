from __future__ import annotations

import logging

from sqlalchemy import Engine, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from todo_app.errors import StorageUnavailableError

from .db import SessionLocal, engine, ensure_database_dir
from .migrator import SchemaMigrator
from .repository import CategoryRepository

logger = logging.getLogger(__name__)


def init_db(bind: Engine = engine, session_factory: sessionmaker = SessionLocal) -> int:
    """Open the database, migrate it to the newest schema and seed categories.

    Returns the schema version. ``SchemaDowngradeError`` aborts startup.
    """
    try:
        ensure_database_dir(bind.url)
        with bind.connect() as connection:
            connection.execute(text("SELECT 1"))
        version = SchemaMigrator(bind).upgrade()
    except (SQLAlchemyError, OSError) as exc:
        logger.error("Cannot open database %s: %s", bind.url, exc)
        raise StorageUnavailableError(
            "cannot open database",
            context={"url": str(bind.url)},
            original_error=exc,
        ) from exc

    CategoryRepository(session_factory).seed_defaults()
    logger.info("Database ready at schema version %s", version)
    return version
