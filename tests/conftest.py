from __future__ import annotations

from pathlib import Path

import pytest
from sqlalchemy import Engine
from sqlalchemy.orm import sessionmaker

from todo_app.infra.bootstrap import init_db
from todo_app.infra.db import create_db_engine, make_session_factory
from todo_app.infra.repository import CategoryRepository, TaskRepository


@pytest.fixture()
def db_url(tmp_path: Path) -> str:
    return f"sqlite:///{tmp_path / 'tasks.db'}"


@pytest.fixture()
def bind(db_url: str) -> Engine:
    engine = create_db_engine(db_url)
    yield engine
    engine.dispose()


@pytest.fixture()
def session_factory(bind: Engine) -> sessionmaker:
    return make_session_factory(bind)


@pytest.fixture()
def initialized(bind: Engine, session_factory: sessionmaker) -> sessionmaker:
    """A migrated and seeded database; real SQLite, one file per test."""
    init_db(bind, session_factory)
    return session_factory


@pytest.fixture()
def task_repo(initialized: sessionmaker) -> TaskRepository:
    return TaskRepository(initialized)


@pytest.fixture()
def category_repo(initialized: sessionmaker) -> CategoryRepository:
    return CategoryRepository(initialized)
