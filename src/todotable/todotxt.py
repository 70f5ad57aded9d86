"""Read and write todo.txt files one line at a time."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable

from todotable.errors import ParseError
from todotable.table import TodoTable
from todotable.todo import Todo

logger = logging.getLogger(__name__)

DEFAULT_COLUMN = "Todo"


def parse_lines(lines: Iterable[str]) -> list[Todo]:
    """Parse todo.txt lines, skipping blank ones.

    Raises:
        ParseError: Annotated with the 1-based number of the failing line.
    """
    todos = []
    for lineno, line in enumerate(lines, start=1):
        line = line.rstrip("\r\n")
        if not line.strip():
            continue
        try:
            todos.append(Todo.parse(line))
        except ParseError as e:
            raise e.with_lineno(lineno) from e
    return todos


def render_lines(todos: Iterable[Todo]) -> str:
    """Render todos as newline-terminated todo.txt lines."""
    return "".join(f"{todo.to_string()}\n" for todo in todos)


def load(path: str | Path) -> list[Todo]:
    """Load todos from a todo.txt file. A missing file holds no todos."""
    path = Path(path).expanduser()
    if not path.exists():
        logger.info(f"{path} does not exist, starting empty")
        return []
    with open(path, encoding="utf-8") as f:
        todos = parse_lines(f)
    logger.debug(f"Loaded {len(todos)} todos from {path}")
    return todos


def save(path: str | Path, todos: Iterable[Todo]) -> None:
    """Write todos to a todo.txt file, replacing its contents."""
    path = Path(path).expanduser()
    path.parent.mkdir(parents=True, exist_ok=True)
    todos = list(todos)
    with open(path, "w", encoding="utf-8") as f:
        f.write(render_lines(todos))
    logger.debug(f"Saved {len(todos)} todos to {path}")


def load_table(
    path: str | Path,
    name: str | None = None,
    column: str = DEFAULT_COLUMN,
    done_column: str | None = None,
) -> TodoTable:
    """Load a todo.txt file into a table.

    Open todos go to ``column``. Completed ones go to ``done_column`` when it
    is given, otherwise to ``column`` as well.
    """
    table = TodoTable(name)
    table.add_col(column)
    if done_column is not None and done_column != column:
        table.add_col(done_column)
    for todo in load(path):
        if todo.completed and done_column is not None:
            table.add_todo(todo, done_column)
        else:
            table.add_todo(todo, column)
    return table


def save_table(path: str | Path, table: TodoTable) -> None:
    """Write every todo of the table, column by column."""
    save(path, table.all_todos())
