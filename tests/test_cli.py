from __future__ import annotations

import re

import pytest
from click.testing import CliRunner

from todo_app.main import cli


@pytest.fixture()
def run(db_url: str):
    runner = CliRunner()

    def invoke(*args: str, input: str | None = None):
        return runner.invoke(cli, ["--database-url", db_url, *args], input=input)

    return invoke


def created_id(output: str) -> str:
    match = re.search(r"Created (\S+)", output)
    assert match, output
    return match.group(1)


def test_init_reports_schema_version(run) -> None:
    result = run("init")

    assert result.exit_code == 0, result.output
    assert "schema version 3" in result.output


def test_categories_lists_defaults(run) -> None:
    result = run("categories")

    assert result.exit_code == 0
    assert [line.split("\t")[0] for line in result.output.splitlines()] == [
        "education", "health", "personal", "shopping", "work",
    ]


def test_add_then_list_shows_overdue_banner(run) -> None:
    assert run("add", "Buy groceries", "--priority", "high", "--due", "2020-01-01",
               "--category", "shopping").exit_code == 0
    assert run("add", "Read book").exit_code == 0

    result = run("list")

    assert result.exit_code == 0
    assert "You have 1 overdue task!" in result.output
    assert "total: 2  pending: 2  completed: 0" in result.output
    lines = [line for line in result.output.splitlines() if line.startswith("[")]
    assert "Buy groceries" in lines[0]
    assert "#Shopping" in lines[0]
    assert "OVERDUE" in lines[0]
    assert "Read book" in lines[1]


def test_list_filters_and_search(run) -> None:
    run("add", "Buy groceries")
    done_id = created_id(run("add", "File taxes").output)
    run("toggle", done_id)

    pending = run("list", "--status", "pending", "--search", "GROC").output
    completed = run("list", "--status", "completed").output

    assert "Buy groceries" in pending and "File taxes" not in pending
    assert "[x] File taxes" in completed and "Buy groceries" not in completed


def test_add_rejects_blank_title(run) -> None:
    result = run("add", "   ")

    assert result.exit_code != 0
    assert "title must not be empty" in result.output


def test_toggle_unknown_task_fails(run) -> None:
    result = run("toggle", "nope")

    assert result.exit_code == 1
    assert "not found" in result.output


def test_delete_asks_for_confirmation(run) -> None:
    task_id = created_id(run("add", "Throwaway").output)

    declined = run("delete", task_id, input="n\n")
    assert "Nothing deleted." in declined.output
    assert "Throwaway" in run("list").output

    accepted = run("delete", task_id, "--yes")
    assert "Task deleted." in accepted.output
    assert "No tasks." in run("list").output


def test_unopenable_database_reports_error(tmp_path) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("")

    result = CliRunner().invoke(
        cli, ["--database-url", f"sqlite:///{blocker / 'tasks.db'}", "list"]
    )

    assert result.exit_code == 1
    assert "cannot open database" in result.output
