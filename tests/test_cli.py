"""Tests for the command-line interface."""

from __future__ import annotations

from datetime import date
from pathlib import Path

import pytest

from todotable import todo as todo_module
from todotable import todotxt
from todotable.cli import build_parser, default_path, main


@pytest.fixture(autouse=True)
def fixed_clock(monkeypatch):
    monkeypatch.setattr(todo_module, "current_date", lambda: date(2026, 3, 14))


@pytest.fixture
def todo_file(tmp_path: Path) -> Path:
    path = tmp_path / "todo.txt"
    path.write_text(
        "(A) 2026-03-01 Call mom +family due:2026-03-10\n"
        "2026-03-02 Water plants @home\n"
        "x 2026-03-03 2026-03-01 Pay rent\n",
        encoding="utf-8",
    )
    return path


def run(path: Path, *argv: str) -> None:
    main(["--file", str(path), *argv])


class TestParser:
    """Argument parsing."""

    def test_no_command_exits(self, capsys) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main([])
        assert exc_info.value.code == 1

    def test_priority_choices(self) -> None:
        args = build_parser().parse_args(["add", "Call", "-p", "B"])
        assert args.priority == "B"

        with pytest.raises(SystemExit):
            build_parser().parse_args(["add", "Call", "-p", "b"])

    def test_default_path_from_env(self, monkeypatch) -> None:
        monkeypatch.setenv("TODOTABLE_FILE", "/tmp/elsewhere.txt")
        assert default_path() == "/tmp/elsewhere.txt"

        monkeypatch.delenv("TODOTABLE_FILE")
        assert default_path() == "~/todo.txt"


class TestCommands:
    """Commands against a todo.txt file."""

    def test_list_hides_done(self, todo_file: Path, capsys) -> None:
        run(todo_file, "list", "--format", "compact")
        out = capsys.readouterr().out

        assert "[Todo] (A) 2026-03-01 Call mom +family due:2026-03-10" in out
        assert "[Todo] 2026-03-02 Water plants @home" in out
        assert "Pay rent" not in out

    def test_list_all(self, todo_file: Path, capsys) -> None:
        run(todo_file, "list", "--all", "--format", "compact")
        out = capsys.readouterr().out

        assert "[Done] x 2026-03-03 2026-03-01 Pay rent" in out

    def test_list_due(self, todo_file: Path, capsys) -> None:
        run(todo_file, "list", "--due", "--format", "compact")
        out = capsys.readouterr().out

        assert "Call mom" in out
        assert "Water plants" not in out

    def test_add(self, todo_file: Path, capsys) -> None:
        run(todo_file, "add", "Buy milk @store", "-p", "C", "--due", "2026-03-20")

        assert "✓ Added todo" in capsys.readouterr().out
        lines = todo_file.read_text(encoding="utf-8").splitlines()
        assert lines[-1] == "(C) 2026-03-14 Buy milk @store due:2026-03-20"

    def test_add_keeps_given_creation_date(self, tmp_path: Path) -> None:
        path = tmp_path / "new.txt"
        run(path, "add", "2026-01-01 Plan trip")

        assert path.read_text(encoding="utf-8") == "2026-01-01 Plan trip\n"

    def test_add_completed_keeps_dates_readable(self, tmp_path: Path) -> None:
        path = tmp_path / "new.txt"
        run(path, "add", "x Call mom")

        assert path.read_text(encoding="utf-8") == "x Call mom\n"
        (todo,) = todotxt.load(path)
        assert todo.completed is True
        assert todo.completion_date is None
        assert todo.creation_date is None

    def test_add_bad_line(self, todo_file: Path, capsys) -> None:
        with pytest.raises(SystemExit) as exc_info:
            run(todo_file, "add", "(a) bad priority")

        assert exc_info.value.code == 1
        assert "✗" in capsys.readouterr().out

    def test_done(self, todo_file: Path, capsys) -> None:
        run(todo_file, "done", "Water plants @home")

        assert "✓ Completed todo: Water plants @home" in capsys.readouterr().out
        lines = todo_file.read_text(encoding="utf-8").splitlines()
        assert lines == [
            "(A) 2026-03-01 Call mom +family due:2026-03-10",
            "x 2026-03-03 2026-03-01 Pay rent",
            "x 2026-03-14 2026-03-02 Water plants @home",
        ]

    def test_done_missing(self, todo_file: Path, capsys) -> None:
        with pytest.raises(SystemExit) as exc_info:
            run(todo_file, "done", "Nope")

        assert exc_info.value.code == 1
        assert "✗ Todo 'Nope' not found" in capsys.readouterr().out

    def test_rm(self, todo_file: Path, capsys) -> None:
        run(todo_file, "rm", "Pay rent")

        assert "✓ Deleted todo: Pay rent" in capsys.readouterr().out
        assert "Pay rent" not in todo_file.read_text(encoding="utf-8")

    def test_rm_missing(self, todo_file: Path) -> None:
        with pytest.raises(SystemExit) as exc_info:
            run(todo_file, "rm", "Nope")
        assert exc_info.value.code == 1

    def test_corrupt_file(self, tmp_path: Path, capsys) -> None:
        path = tmp_path / "todo.txt"
        path.write_text("Fine\n2026-02-30 broken\n", encoding="utf-8")

        with pytest.raises(SystemExit):
            run(path, "list")

        assert "line 2:" in capsys.readouterr().out
