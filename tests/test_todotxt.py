"""Tests for todo.txt file reading and writing."""

from __future__ import annotations

from pathlib import Path

import pytest

from todotable import todotxt
from todotable.errors import ParseError
from todotable.todo import Todo

SAMPLE = (
    "(A) 2026-03-01 Call mom +family @phone\n"
    "\n"
    "x 2026-03-02 2026-03-01 Pay rent due:2026-03-05\n"
    "Water plants @home\r\n"
)


class TestParseLines:
    """Per-line parsing."""

    def test_skips_blank_lines_and_strips_newlines(self) -> None:
        todos = todotxt.parse_lines(SAMPLE.splitlines(keepends=True))

        assert [t.to_string() for t in todos] == [
            "(A) 2026-03-01 Call mom +family @phone",
            "x 2026-03-02 2026-03-01 Pay rent due:2026-03-05",
            "Water plants @home",
        ]

    def test_error_reports_line_number(self) -> None:
        with pytest.raises(ParseError) as exc_info:
            todotxt.parse_lines(["Call mom\n", "\n", "(a) bad priority\n"])

        assert exc_info.value.lineno == 3
        assert str(exc_info.value).startswith("line 3:")

    def test_render_lines(self) -> None:
        todos = [Todo.parse("Call mom"), Todo.parse("x Pay rent")]

        assert todotxt.render_lines(todos) == "Call mom\nx Pay rent\n"

    def test_render_empty(self) -> None:
        assert todotxt.render_lines([]) == ""


class TestFiles:
    """load / save / load_table."""

    def test_missing_file_is_empty(self, tmp_path: Path) -> None:
        assert todotxt.load(tmp_path / "nope.txt") == []

    def test_save_then_load(self, tmp_path: Path) -> None:
        path = tmp_path / "sub" / "todo.txt"
        todos = todotxt.parse_lines(SAMPLE.splitlines())

        todotxt.save(path, todos)

        assert path.read_text(encoding="utf-8") == todotxt.render_lines(todos)
        assert todotxt.load(path) == todos

    def test_load_table_single_column(self, tmp_path: Path) -> None:
        path = tmp_path / "todo.txt"
        path.write_text(SAMPLE, encoding="utf-8")

        table = todotxt.load_table(path)

        assert list(table.columns) == ["Todo"]
        assert len(table.col("Todo")) == 3

    def test_load_table_routes_done(self, tmp_path: Path) -> None:
        path = tmp_path / "todo.txt"
        path.write_text(SAMPLE, encoding="utf-8")

        table = todotxt.load_table(path, name="Mine", column="Open", done_column="Done")

        assert table.name == "Mine"
        assert [t.text for t in table.col("Open")] == [
            "Call mom +family @phone",
            "Water plants @home",
        ]
        assert [t.text for t in table.col("Done")] == ["Pay rent due:2026-03-05"]

    def test_save_table(self, tmp_path: Path) -> None:
        source = tmp_path / "todo.txt"
        source.write_text(SAMPLE, encoding="utf-8")
        table = todotxt.load_table(source, done_column="Done")
        target = tmp_path / "out.txt"

        todotxt.save_table(target, table)

        assert target.read_text(encoding="utf-8").splitlines() == [
            "(A) 2026-03-01 Call mom +family @phone",
            "Water plants @home",
            "x 2026-03-02 2026-03-01 Pay rent due:2026-03-05",
        ]
