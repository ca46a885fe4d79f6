"""Filtering, ordering and statistics over an in-memory task snapshot.

Nothing here touches storage or mutates its arguments: each call builds and
returns a new list, so the functions are safe to share between callers.
"""
from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from .entities import CategoryEntity, TaskEntity
from .enums import Priority, SortBy, StatusFilter
from .filters import TaskFilters

PRIORITY_RANK = {
    Priority.URGENT: 0,
    Priority.HIGH: 1,
    Priority.MEDIUM: 2,
    Priority.LOW: 3,
}


@dataclass(frozen=True)
class TaskStats:
    total: int
    completed: int
    pending: int


def _as_day(value: date) -> date:
    return value.date() if isinstance(value, datetime) else value


def due_day(task: TaskEntity) -> Optional[date]:
    """Calendar day of the due date; any time of day is dropped."""
    if task.due_date is None:
        return None
    return _as_day(task.due_date)


def is_overdue(task: TaskEntity, today: Optional[date] = None) -> bool:
    if task.due_date is None or task.completed:
        return False
    return due_day(task) < _as_day(today or date.today())


def overdue_count(tasks: Iterable[TaskEntity], today: Optional[date] = None) -> int:
    today = today or date.today()
    return sum(1 for task in tasks if is_overdue(task, today))


def task_stats(tasks: Iterable[TaskEntity]) -> TaskStats:
    total = completed = 0
    for task in tasks:
        total += 1
        if task.completed:
            completed += 1
    return TaskStats(total=total, completed=completed, pending=total - completed)


def find_category(
    categories: Iterable[CategoryEntity], category_id: str | None
) -> CategoryEntity | None:
    if category_id is None:
        return None
    return next((c for c in categories if c.id == category_id), None)


def priority_rank(task: TaskEntity) -> int:
    return PRIORITY_RANK[Priority.coerce(task.priority)]


def _matches_search(task: TaskEntity, needle: str) -> bool:
    return needle in task.title.lower() or needle in (task.description or "").lower()


def filter_tasks(
    tasks: Iterable[TaskEntity],
    filter_status: object = StatusFilter.ALL,
    filter_category_id: str | None = None,
    search_query: str | None = None,
) -> list[TaskEntity]:
    status = StatusFilter.coerce(filter_status)
    result = list(tasks)

    if status is StatusFilter.COMPLETED:
        result = [t for t in result if t.completed]
    elif status is StatusFilter.PENDING:
        result = [t for t in result if not t.completed]

    if filter_category_id is not None:
        result = [t for t in result if t.category_id == filter_category_id]

    if search_query:
        needle = search_query.lower()
        result = [t for t in result if _matches_search(t, needle)]

    return result


def sort_tasks(
    tasks: Iterable[TaskEntity],
    sort_by: object = SortBy.DATE,
    today: Optional[date] = None,
) -> list[TaskEntity]:
    mode = SortBy.coerce(sort_by)
    tasks = list(tasks)

    if mode is SortBy.PRIORITY:
        return sorted(tasks, key=priority_rank)
    if mode is SortBy.TITLE:
        return sorted(tasks, key=lambda t: t.title.lower())

    today = today or date.today()
    dated = [t for t in tasks if t.due_date is not None]
    undated = [t for t in tasks if t.due_date is None]
    dated.sort(key=lambda t: (not is_overdue(t, today), due_day(t)))
    # reverse=True keeps equal created_at values in input order
    undated.sort(key=lambda t: t.created_at, reverse=True)
    return dated + undated


def derive(
    tasks: Sequence[TaskEntity],
    filter_status: object = StatusFilter.ALL,
    filter_category_id: str | None = None,
    search_query: str | None = None,
    sort_by: object = SortBy.DATE,
    today: Optional[date] = None,
) -> list[TaskEntity]:
    """Return the filtered and ordered view of ``tasks``.

    Filters apply as status, then category, then case-insensitive search over
    title and description. Unrecognised ``filter_status``/``sort_by`` tokens
    fall back to ``all``/``date``.
    """
    filtered = filter_tasks(tasks, filter_status, filter_category_id, search_query)
    return sort_tasks(filtered, sort_by, today)


def derive_view(
    tasks: Sequence[TaskEntity], filters: TaskFilters, today: Optional[date] = None
) -> list[TaskEntity]:
    return derive(
        tasks,
        filters.status,
        filters.category_id,
        filters.search,
        filters.sort_by,
        today,
    )
