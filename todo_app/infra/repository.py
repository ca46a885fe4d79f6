from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Optional

from sqlalchemy import delete, func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from todo_app.domain.defaults import DEFAULT_CATEGORIES
from todo_app.domain.entities import CategoryEntity, TaskEntity
from todo_app.domain.enums import Priority
from todo_app.errors import DuplicateIdError, StorageUnavailableError

from .db import SessionLocal
from .models import CategoryModel, TaskModel

logger = logging.getLogger(__name__)


def _to_entity(model: TaskModel) -> TaskEntity:
    return TaskEntity(
        id=model.id,
        title=model.title,
        description=model.description or "",
        completed=bool(model.completed),
        priority=Priority.coerce(model.priority),
        created_at=model.created_at,
        due_date=model.due_date,
        category_id=model.category_id,
    )


def _to_category(model: CategoryModel) -> CategoryEntity:
    return CategoryEntity(id=model.id, name=model.name, color=model.color, icon=model.icon)


def _task_values(task: TaskEntity) -> dict:
    return {
        "title": task.title,
        "description": task.description,
        "completed": task.completed,
        "priority": Priority.coerce(task.priority).value,
        "due_date": task.due_date,
        "category_id": task.category_id,
    }


def _category_values(category: CategoryEntity) -> dict:
    return {"name": category.name, "color": category.color, "icon": category.icon}


@contextmanager
def _session_scope(factory: sessionmaker, action: str) -> Iterator[Session]:
    try:
        with factory() as session:
            yield session
    except SQLAlchemyError as exc:
        logger.error("Storage failure during %s: %s", action, exc)
        raise StorageUnavailableError(
            f"storage unavailable during {action}",
            context={"action": action},
            original_error=exc,
        ) from exc


class TaskRepository:
    def __init__(self, session_factory: sessionmaker = SessionLocal) -> None:
        self._session_factory = session_factory

    def list_tasks(self) -> list[TaskEntity]:
        with _session_scope(self._session_factory, "list_tasks") as session:
            stmt = select(TaskModel).order_by(TaskModel.created_at.desc())
            return [_to_entity(task) for task in session.scalars(stmt)]

    def get_task(self, task_id: str) -> Optional[TaskEntity]:
        with _session_scope(self._session_factory, "get_task") as session:
            task = session.get(TaskModel, task_id)
            return _to_entity(task) if task else None

    def create_task(self, task: TaskEntity) -> TaskEntity:
        with _session_scope(self._session_factory, "create_task") as session:
            if session.get(TaskModel, task.id) is not None:
                raise DuplicateIdError("task", task.id)
            session.add(TaskModel(id=task.id, created_at=task.created_at, **_task_values(task)))
            try:
                session.commit()
            except IntegrityError as exc:
                session.rollback()
                raise DuplicateIdError("task", task.id, original_error=exc) from exc
            logger.debug("Created task %s", task.id)
            return task

    def update_task(self, task: TaskEntity) -> int:
        with _session_scope(self._session_factory, "update_task") as session:
            model = session.get(TaskModel, task.id)
            if not model:
                logger.debug("Update skipped, task %s not found", task.id)
                return 0
            # createdAt is never rewritten
            for key, value in _task_values(task).items():
                setattr(model, key, value)
            session.commit()
            logger.debug("Updated task %s", task.id)
            return 1

    def delete_task(self, task_id: str) -> int:
        with _session_scope(self._session_factory, "delete_task") as session:
            result = session.execute(delete(TaskModel).where(TaskModel.id == task_id))
            session.commit()
            logger.debug("Deleted task %s (rows=%s)", task_id, result.rowcount)
            return result.rowcount


class CategoryRepository:
    def __init__(self, session_factory: sessionmaker = SessionLocal) -> None:
        self._session_factory = session_factory

    def list_categories(self) -> list[CategoryEntity]:
        with _session_scope(self._session_factory, "list_categories") as session:
            stmt = select(CategoryModel).order_by(CategoryModel.name.asc())
            return [_to_category(category) for category in session.scalars(stmt)]

    def get_category(self, category_id: str) -> Optional[CategoryEntity]:
        with _session_scope(self._session_factory, "get_category") as session:
            category = session.get(CategoryModel, category_id)
            return _to_category(category) if category else None

    def create_category(self, category: CategoryEntity) -> CategoryEntity:
        with _session_scope(self._session_factory, "create_category") as session:
            if session.get(CategoryModel, category.id) is not None:
                raise DuplicateIdError("category", category.id)
            session.add(CategoryModel(id=category.id, **_category_values(category)))
            try:
                session.commit()
            except IntegrityError as exc:
                session.rollback()
                raise DuplicateIdError("category", category.id, original_error=exc) from exc
            return category

    def update_category(self, category: CategoryEntity) -> int:
        with _session_scope(self._session_factory, "update_category") as session:
            model = session.get(CategoryModel, category.id)
            if not model:
                return 0
            for key, value in _category_values(category).items():
                setattr(model, key, value)
            session.commit()
            return 1

    def delete_category(self, category_id: str) -> int:
        with _session_scope(self._session_factory, "delete_category") as session:
            result = session.execute(delete(CategoryModel).where(CategoryModel.id == category_id))
            session.commit()
            return result.rowcount

    def seed_defaults(self) -> int:
        """Insert the default categories when the table is empty.

        Returns the number of rows inserted; 0 when any category already exists.
        """
        with _session_scope(self._session_factory, "seed_defaults") as session:
            existing = session.scalar(select(func.count()).select_from(CategoryModel)) or 0
            if existing:
                return 0
            session.add_all(
                CategoryModel(id=category.id, **_category_values(category))
                for category in DEFAULT_CATEGORIES
            )
            session.commit()
            logger.info("Seeded %s default categories", len(DEFAULT_CATEGORIES))
            return len(DEFAULT_CATEGORIES)
