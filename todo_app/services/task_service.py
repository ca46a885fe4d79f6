from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date, datetime

from todo_app.domain.entities import CategoryEntity, TaskEntity, new_id
from todo_app.domain.enums import Priority
from todo_app.errors import NotFoundError
from todo_app.infra.repository import CategoryRepository, TaskRepository

logger = logging.getLogger(__name__)


class TaskService:
    def __init__(self, repo: TaskRepository, categories: CategoryRepository) -> None:
        self._repo = repo
        self._categories = categories

    def list_tasks(self) -> list[TaskEntity]:
        return self._repo.list_tasks()

    def get_task(self, task_id: str) -> TaskEntity | None:
        return self._repo.get_task(task_id)

    def create_task(
        self,
        title: str,
        priority: Priority | str = Priority.MEDIUM,
        description: str = "",
        due_date: date | None = None,
        category_id: str | None = None,
    ) -> TaskEntity:
        task = TaskEntity(
            id=new_id(),
            title=self._normalize_title(title),
            description=(description or "").strip(),
            completed=False,
            priority=Priority.coerce(priority),
            created_at=datetime.now(),
            due_date=due_date,
            category_id=category_id or None,
        )
        logger.info("Creating task %s (%s)", task.id, task.priority.value)
        return self._repo.create_task(task)

    def update_task(self, task: TaskEntity) -> int:
        normalized = replace(
            task,
            title=self._normalize_title(task.title),
            priority=Priority.coerce(task.priority),
        )
        return self._repo.update_task(normalized)

    def toggle_task(self, task_id: str) -> TaskEntity:
        task = self._repo.get_task(task_id)
        if task is None:
            raise NotFoundError("task", task_id)
        updated = replace(task, completed=not task.completed)
        self._repo.update_task(updated)
        return updated

    def delete_task(self, task_id: str) -> int:
        deleted = self._repo.delete_task(task_id)
        if deleted:
            logger.info("Deleted task %s", task_id)
        return deleted

    def list_categories(self) -> list[CategoryEntity]:
        return self._categories.list_categories()

    def create_category(self, name: str, color: int, icon: int) -> CategoryEntity:
        category = CategoryEntity(id=new_id(), name=self._normalize_title(name), color=color, icon=icon)
        return self._categories.create_category(category)

    def update_category(self, category: CategoryEntity) -> int:
        return self._categories.update_category(category)

    def delete_category(self, category_id: str) -> int:
        return self._categories.delete_category(category_id)

    @staticmethod
    def _normalize_title(title: str) -> str:
        normalized = (title or "").strip()
        if not normalized:
            raise ValueError("title must not be empty")
        return normalized
