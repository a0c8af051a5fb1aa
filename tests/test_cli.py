import builtins
import logging

import pytest

import cli as cli_mod
from cli import CLI
from models import Priority, TodoFilter
from store import TaskStore


@pytest.fixture
def app(sample_store):
    return CLI(sample_store, alt_screen=False)


def titles(store):
    return [t.title for t in store]


def test_inline_add_with_priority(app):
    app.handle_command("add Write report -p high")
    task = app.store.all_tasks()[-1]
    assert task.title == "Write report"
    assert task.priority is Priority.HIGH


def test_inline_add_blank_title_is_ignored(app):
    app.handle_command("add -p low")
    assert len(app.store) == 3
    assert app.message == "Title required."


def test_inline_add_bad_priority(app):
    app.handle_command("add thing -p urgent")
    assert len(app.store) == 3
    assert app.message == "Invalid priority."


def test_prompted_add(app, monkeypatch):
    answers = iter(["  Call mom ", "l"])
    monkeypatch.setattr(builtins, "input", lambda prompt="": next(answers))
    app.handle_command("add")
    task = app.store.all_tasks()[-1]
    assert (task.title, task.priority) == ("Call mom", Priority.LOW)


def test_toggle_by_row(app):
    app.handle_command("t 1")
    assert app.store.all_tasks()[0].is_done is True


def test_rows_follow_filtered_view(app):
    app.handle_command("f ac")
    assert app.store.filter is TodoFilter.ACTIVE
    # row 2 of the active view is "Workout"
    app.handle_command("rm 2")
    assert titles(app.store) == ["Buy milk", "Finish lab"]


def test_bad_row_numbers(app):
    app.handle_command("t 9")
    assert app.message == "No task #9 in view."
    app.handle_command("rm x")
    assert app.message == "Invalid row number."
    app.handle_command("t")
    assert app.message == "Usage: t <n>"
    assert len(app.store) == 3


def test_non_ascii_digit_rows_are_rejected(app):
    app.handle_command("t ²")
    assert app.message == "Invalid row number."
    app.handle_command("rm ²")
    assert app.message == "Invalid row number."
    assert len(app.store) == 3
    assert [t.is_done for t in app.store] == [False, True, False]


def test_stale_row_is_a_noop(app):
    stale = app._shown
    app.store.delete(app.store.all_tasks()[0].id)
    app._shown = stale
    app.handle_command("t 1")
    assert app.message == "Task no longer exists."
    assert titles(app.store) == ["Finish lab", "Workout"]


def test_bulk_commands(app):
    app.handle_command("clear")
    assert app.message == "Cleared 1 completed task(s)."
    app.handle_command("done")
    assert all(t.is_done for t in app.store)
    app.handle_command("sample")
    assert titles(app.store)[-1] == "Task 3"


def test_invalid_filter_and_unknown_command(app):
    app.handle_command("f archived")
    assert app.message == "Invalid filter."
    assert app.store.filter is TodoFilter.ALL
    app.handle_command("frobnicate")
    assert "Unknown command" in app.message


def test_run_loop_until_exit(monkeypatch, capsys):
    answers = iter(["add Write report", "", "exit"])
    monkeypatch.setattr(builtins, "input", lambda prompt="": next(answers))
    app = CLI(TaskStore(), alt_screen=False)
    app.run()
    out = capsys.readouterr().out
    assert "Goodbye." in out
    assert titles(app.store) == ["Write report"]


def test_run_loop_handles_eof(monkeypatch, capsys):
    def fake_input(prompt=""):
        raise EOFError
    monkeypatch.setattr(builtins, "input", fake_input)
    CLI(TaskStore(), alt_screen=False).run()
    assert "Interrupted. Goodbye." in capsys.readouterr().out


@pytest.mark.parametrize("value,expected", [
    (None, True), ("0", False), ("off", False), ("yes", True), ("", False),
])
def test_truthy_env(value, expected):
    assert cli_mod._truthy_env(value, True) is expected


def test_run_loop_survives_non_ascii_digit(monkeypatch, capsys, sample_store):
    answers = iter(["rm ²", "exit"])
    monkeypatch.setattr(builtins, "input", lambda prompt="": next(answers))
    app = CLI(sample_store, alt_screen=False)
    app.run()
    assert "Goodbye." in capsys.readouterr().out
    assert len(app.store) == 3


def test_inline_add_keeps_inner_spacing(app):
    app.handle_command("add Fix  two  spaces")
    assert app.store.all_tasks()[-1].title == "Fix  two  spaces"


def test_inline_add_flag_only_read_when_trailing(app):
    app.handle_command("add Use -p flag with grep")
    task = app.store.all_tasks()[-1]
    assert (task.title, task.priority) == ("Use -p flag with grep", Priority.MEDIUM)
    app.handle_command("add Use -p flag -p h")
    task = app.store.all_tasks()[-1]
    assert (task.title, task.priority) == ("Use -p flag", Priority.HIGH)


def test_session_summary_logged_on_exit(monkeypatch, caplog):
    answers = iter(["add Write report", "exit"])
    monkeypatch.setattr(builtins, "input", lambda prompt="": next(answers))
    caplog.set_level(logging.DEBUG, logger="cli")
    CLI(TaskStore(), alt_screen=False).run()
    assert "session ended: Tasks: 1, Active: 1, Done: 0" in caplog.text
