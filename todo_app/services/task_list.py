"""State behind the task list screen.

The controller keeps the last loaded snapshots plus the active filters and
hands out immutable views; every mutation goes through ``TaskService`` and is
followed by a reload so the view always reflects what is stored.
"""
from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, replace
from datetime import date
from typing import Optional

from todo_app.domain.entities import CategoryEntity, TaskEntity
from todo_app.domain.enums import Priority, SortBy, StatusFilter
from todo_app.domain.filters import TaskFilters
from todo_app.domain.query import TaskStats, derive_view, find_category, overdue_count, task_stats

from .task_service import TaskService

ConfirmDelete = Callable[[TaskEntity], bool]


@dataclass(frozen=True)
class TaskListView:
    tasks: tuple[TaskEntity, ...]
    stats: TaskStats
    overdue_count: int
    categories: tuple[CategoryEntity, ...]
    filters: TaskFilters

    def category_for(self, task: TaskEntity) -> CategoryEntity | None:
        return find_category(self.categories, task.category_id)


class TaskListController:
    def __init__(self, service: TaskService, clock: Callable[[], date] = date.today) -> None:
        self._service = service
        self._clock = clock
        self._tasks: tuple[TaskEntity, ...] = ()
        self._categories: tuple[CategoryEntity, ...] = ()
        self.filters = TaskFilters()

    def load_tasks(self) -> tuple[TaskEntity, ...]:
        self._tasks = tuple(self._service.list_tasks())
        return self._tasks

    def load_categories(self) -> tuple[CategoryEntity, ...]:
        self._categories = tuple(self._service.list_categories())
        return self._categories

    def add_task(
        self,
        title: str,
        priority: Priority | str = Priority.MEDIUM,
        description: str = "",
        due_date: Optional[date] = None,
        category_id: str | None = None,
    ) -> TaskEntity:
        task = self._service.create_task(title, priority, description, due_date, category_id)
        self.load_tasks()
        return task

    def toggle_task(self, task_id: str) -> TaskEntity:
        task = self._service.toggle_task(task_id)
        self.load_tasks()
        return task

    def delete_task(self, task_id: str, confirm: ConfirmDelete) -> bool:
        """Delete ``task_id`` only if ``confirm`` approves the loaded task."""
        task = self._service.get_task(task_id)
        if task is None or not confirm(task):
            return False
        deleted = self._service.delete_task(task_id) > 0
        self.load_tasks()
        return deleted

    def set_filter(self, status: StatusFilter | str) -> None:
        self.filters = replace(self.filters, status=StatusFilter.coerce(status))

    def set_category_filter(self, category_id: str | None) -> None:
        self.filters = replace(self.filters, category_id=category_id or None)

    def set_search(self, query: str | None) -> None:
        self.filters = replace(self.filters, search=query or "")

    def set_sort(self, sort_by: SortBy | str) -> None:
        self.filters = replace(self.filters, sort_by=SortBy.coerce(sort_by))

    def current_view(self) -> TaskListView:
        today = self._clock()
        return TaskListView(
            tasks=tuple(derive_view(self._tasks, self.filters, today)),
            stats=task_stats(self._tasks),
            overdue_count=overdue_count(self._tasks, today),
            categories=self._categories,
            filters=self.filters,
        )
