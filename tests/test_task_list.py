from __future__ import annotations

from datetime import date, timedelta

import pytest

from todo_app.domain.entities import CategoryEntity
from todo_app.domain.enums import Priority, SortBy, StatusFilter
from todo_app.services.task_list import TaskListController
from todo_app.services.task_service import TaskService

from fakes import FakeCategoryRepo, FakeTaskRepo

TODAY = date(2026, 3, 10)


@pytest.fixture()
def controller() -> TaskListController:
    categories = FakeCategoryRepo(
        [CategoryEntity(id="work", name="Work", color=0xFF2196F3, icon=0xEB3F)]
    )
    service = TaskService(FakeTaskRepo(), categories)
    ctrl = TaskListController(service, clock=lambda: TODAY)
    ctrl.load_categories()
    ctrl.load_tasks()
    return ctrl


def test_add_task_reloads_view(controller: TaskListController) -> None:
    task = controller.add_task("Report", priority=Priority.HIGH, category_id="work")

    view = controller.current_view()

    assert view.tasks == (task,)
    assert view.stats.total == 1
    assert view.category_for(task).name == "Work"


def test_view_reports_overdue_and_stats_over_all_tasks(controller: TaskListController) -> None:
    late = controller.add_task("Late", due_date=TODAY - timedelta(days=2))
    done = controller.add_task("Done")
    controller.toggle_task(done.id)

    controller.set_filter(StatusFilter.COMPLETED)
    view = controller.current_view()

    assert [t.id for t in view.tasks] == [done.id]
    assert view.overdue_count == 1
    assert (view.stats.total, view.stats.completed, view.stats.pending) == (2, 1, 1)
    assert late not in view.tasks


def test_filter_setters_fall_back_on_bad_tokens(controller: TaskListController) -> None:
    controller.set_filter("archived")
    controller.set_sort("newest")
    controller.set_category_filter("")
    controller.set_search(None)

    filters = controller.current_view().filters
    assert filters.status is StatusFilter.ALL
    assert filters.sort_by is SortBy.DATE
    assert filters.category_id is None
    assert filters.search == ""


def test_search_and_sort(controller: TaskListController) -> None:
    controller.add_task("buy groceries")
    controller.add_task("Call mom", description="ask about GROCERIES")
    controller.add_task("Answer mail")

    controller.set_search("groc")
    controller.set_sort("title")

    assert [t.title for t in controller.current_view().tasks] == ["buy groceries", "Call mom"]


def test_delete_requires_confirmation(controller: TaskListController) -> None:
    task = controller.add_task("Keep me")
    asked = []

    def decline(candidate):
        asked.append(candidate)
        return False

    assert controller.delete_task(task.id, decline) is False
    assert asked == [task]
    assert controller.current_view().tasks == (task,)

    assert controller.delete_task(task.id, lambda _: True) is True
    assert controller.current_view().tasks == ()


def test_delete_unknown_task_does_not_prompt(controller: TaskListController) -> None:
    def fail(_):
        raise AssertionError("should not ask")

    assert controller.delete_task("ghost", fail) is False


def test_dangling_category_resolves_to_none(controller: TaskListController) -> None:
    task = controller.add_task("Orphan", category_id="deleted")

    assert controller.current_view().category_for(task) is None
