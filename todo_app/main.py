from __future__ import annotations

import click

from todo_app.domain.entities import TaskEntity
from todo_app.domain.enums import Priority
from todo_app.domain.query import is_overdue
from todo_app.errors import TodoError
from todo_app.infra.bootstrap import init_db
from todo_app.infra.db import SessionLocal, create_db_engine, engine, make_session_factory
from todo_app.infra.logging import setup_logging
from todo_app.infra.repository import CategoryRepository, TaskRepository
from todo_app.services.task_list import TaskListController, TaskListView
from todo_app.services.task_service import TaskService

PRIORITY_CHOICES = [p.value for p in Priority]


def build_controller(database_url: str | None = None) -> tuple[TaskListController, int]:
    if database_url:
        bind = create_db_engine(database_url)
        session_factory = make_session_factory(bind)
    else:
        bind, session_factory = engine, SessionLocal
    version = init_db(bind, session_factory)
    service = TaskService(TaskRepository(session_factory), CategoryRepository(session_factory))
    controller = TaskListController(service)
    controller.load_categories()
    controller.load_tasks()
    return controller, version


def _controller(ctx: click.Context) -> TaskListController:
    return ctx.obj["controller"]


def _format_task(task: TaskEntity, view: TaskListView) -> str:
    mark = "x" if task.completed else " "
    parts = [f"[{mark}] {task.title}", f"({task.priority.value})"]
    if task.due_date:
        parts.append(f"due {task.due_date.isoformat()}")
    category = view.category_for(task)
    if category:
        parts.append(f"#{category.name}")
    if is_overdue(task):
        parts.append("OVERDUE")
    parts.append(click.style(task.id, dim=True))
    return "  ".join(parts)


@click.group()
@click.option("--database-url", envvar="DATABASE_URL", default=None, help="SQLAlchemy database URL.")
@click.pass_context
def cli(ctx: click.Context, database_url: str | None) -> None:
    """Personal task list."""
    try:
        controller, version = build_controller(database_url)
    except TodoError as exc:
        raise click.ClickException(exc.message) from exc
    ctx.obj = {"controller": controller, "schema_version": version}


@cli.command("init")
@click.pass_context
def init_command(ctx: click.Context) -> None:
    """Create or migrate the database."""
    click.echo(f"Database ready (schema version {ctx.obj['schema_version']}).")


@cli.command("list")
@click.option("--status", default="all", help="all, pending or completed.")
@click.option("--category", default=None, help="Category id.")
@click.option("--search", default="", help="Text to look for in title or description.")
@click.option("--sort", "sort_by", default="date", help="date, priority or title.")
@click.pass_context
def list_command(
    ctx: click.Context, status: str, category: str | None, search: str, sort_by: str
) -> None:
    """Show tasks."""
    controller = _controller(ctx)
    controller.set_filter(status)
    controller.set_category_filter(category)
    controller.set_search(search)
    controller.set_sort(sort_by)
    view = controller.current_view()

    if view.overdue_count:
        noun = "task" if view.overdue_count == 1 else "tasks"
        click.secho(f"You have {view.overdue_count} overdue {noun}!", fg="red")
    click.echo(
        f"total: {view.stats.total}  pending: {view.stats.pending}  "
        f"completed: {view.stats.completed}"
    )
    if not view.tasks:
        click.echo("No tasks.")
        return
    for task in view.tasks:
        click.echo(_format_task(task, view))


@cli.command("add")
@click.argument("title")
@click.option("--priority", type=click.Choice(PRIORITY_CHOICES), default=Priority.MEDIUM.value)
@click.option("--description", default="")
@click.option("--due", type=click.DateTime(formats=["%Y-%m-%d"]), default=None)
@click.option("--category", default=None, help="Category id.")
@click.pass_context
def add_command(ctx, title, priority, description, due, category) -> None:
    """Create a task."""
    try:
        task = _controller(ctx).add_task(
            title,
            priority=priority,
            description=description,
            due_date=due.date() if due else None,
            category_id=category,
        )
    except ValueError as exc:
        raise click.BadParameter(str(exc), param_hint="TITLE") from exc
    except TodoError as exc:
        raise click.ClickException(exc.message) from exc
    click.echo(f"Created {task.id}")


@cli.command("toggle")
@click.argument("task_id")
@click.pass_context
def toggle_command(ctx: click.Context, task_id: str) -> None:
    """Flip a task between pending and completed."""
    try:
        task = _controller(ctx).toggle_task(task_id)
    except TodoError as exc:
        raise click.ClickException(exc.message) from exc
    state = "completed" if task.completed else "pending"
    click.echo(f"{task.title}: {state}")


@cli.command("delete")
@click.argument("task_id")
@click.option("--yes", is_flag=True, help="Skip the confirmation prompt.")
@click.pass_context
def delete_command(ctx: click.Context, task_id: str, yes: bool) -> None:
    """Delete a task after confirmation."""

    def confirm(task: TaskEntity) -> bool:
        return yes or click.confirm(f'Delete "{task.title}"?', default=False)

    try:
        deleted = _controller(ctx).delete_task(task_id, confirm)
    except TodoError as exc:
        raise click.ClickException(exc.message) from exc
    click.echo("Task deleted." if deleted else "Nothing deleted.")


@cli.command("categories")
@click.pass_context
def categories_command(ctx: click.Context) -> None:
    """List categories."""
    for category in _controller(ctx).load_categories():
        click.echo(f"{category.id}\t{category.name}")


def main() -> None:
    setup_logging()
    cli()


if __name__ == "__main__":
    main()
