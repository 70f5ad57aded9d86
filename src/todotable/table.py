"""Todo table: named columns holding ordered todos.

Each todo is owned by exactly one column. Moving a todo pops it from the
source column and appends it to the destination; the todo itself is not
touched. Failing operations leave the table unchanged.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Iterator, Mapping

from todotable.errors import ColumnNotFoundError, DuplicateColumnError, NotFoundError
from todotable.todo import Todo

logger = logging.getLogger(__name__)

DEFAULT_TABLE_NAME = "Todos"


class TodoColumn:
    """A titled, ordered list of todos."""

    def __init__(self, title: str):
        self.title = title
        self.todos: list[Todo] = []

    def add(self, todo: Todo) -> None:
        self.todos.append(todo)

    def get(self, title: str) -> Todo | None:
        """Return the first todo whose text equals ``title``."""
        for todo in self.todos:
            if todo.text == title:
                return todo
        return None

    def pop(self, title: str) -> Todo | None:
        """Remove and return the first todo whose text equals ``title``."""
        for i, todo in enumerate(self.todos):
            if todo.text == title:
                return self.todos.pop(i)
        return None

    def find_meta(self, key: str, value: str | None = None) -> Todo | None:
        """Return the first todo carrying metadata ``key`` (and ``value``, if given)."""
        for todo in self.todos:
            found = todo.get_meta(key)
            if found is not None and (value is None or found == value):
                return todo
        return None

    def is_due(self, today: date | None = None) -> bool:
        return any(todo.is_due(today) for todo in self.todos)

    def __iter__(self) -> Iterator[Todo]:
        return iter(self.todos)

    def __len__(self) -> int:
        return len(self.todos)

    def __repr__(self) -> str:
        return f"TodoColumn(title={self.title!r}, todos={len(self.todos)})"


class TodoTable:
    """An ordered set of uniquely named columns.

    Not thread safe: callers sharing a table between threads must guard it
    with one lock of their own.
    """

    def __init__(self, name: str | None = None):
        self.name = name if name is not None else DEFAULT_TABLE_NAME
        self._columns: dict[str, TodoColumn] = {}

    @property
    def columns(self) -> Mapping[str, TodoColumn]:
        return dict(self._columns)

    def col(self, name: str) -> TodoColumn | None:
        return self._columns.get(name)

    def _require_col(self, name: str) -> TodoColumn:
        column = self._columns.get(name)
        if column is None:
            raise ColumnNotFoundError(name)
        return column

    def add_col(self, name: str) -> TodoColumn:
        """Append an empty column.

        Raises:
            DuplicateColumnError: If a column with this name already exists.
        """
        if name in self._columns:
            raise DuplicateColumnError(name)
        column = TodoColumn(name)
        self._columns[name] = column
        logger.debug(f"Added column {name!r} to table {self.name!r}")
        return column

    def add_todo(self, todo: Todo, col: str) -> None:
        """Append ``todo`` to column ``col``.

        Raises:
            ColumnNotFoundError: If the column does not exist.
        """
        self._require_col(col).add(todo)
        logger.debug(f"Added todo {todo.text!r} to column {col!r}")

    def get_todo(self, title: str, col: str) -> Todo | None:
        """Return the first todo titled ``title`` in ``col``, or None.

        A missing column is not an error here; it just has no todos.
        """
        column = self._columns.get(col)
        if column is None:
            return None
        return column.get(title)

    def remove_todo(self, title: str, col: str) -> Todo:
        """Remove and return the first todo titled ``title`` in ``col``.

        Raises:
            ColumnNotFoundError: If the column does not exist.
            NotFoundError: If no todo in the column has this title.
        """
        todo = self._require_col(col).pop(title)
        if todo is None:
            raise NotFoundError(title, col)
        logger.debug(f"Removed todo {title!r} from column {col!r}")
        return todo

    def move_todo(self, title: str, from_col: str, to_col: str) -> Todo:
        """Move the first todo titled ``title`` to the end of ``to_col``.

        Raises:
            ColumnNotFoundError: If either column does not exist.
            NotFoundError: If ``from_col`` has no todo with this title.
        """
        source = self._require_col(from_col)
        destination = self._require_col(to_col)
        todo = source.pop(title)
        if todo is None:
            raise NotFoundError(title, from_col)
        destination.add(todo)
        logger.debug(f"Moved todo {title!r} from {from_col!r} to {to_col!r}")
        return todo

    def find_meta(self, col: str, key: str, value: str | None = None) -> Todo | None:
        column = self._columns.get(col)
        if column is None:
            return None
        return column.find_meta(key, value)

    def all_todos(self) -> list[Todo]:
        return [todo for column in self._columns.values() for todo in column]

    def is_due(self, today: date | None = None) -> bool:
        """True if any todo in any column is due."""
        return any(column.is_due(today) for column in self._columns.values())

    def __iter__(self) -> Iterator[TodoColumn]:
        return iter(self._columns.values())

    def __len__(self) -> int:
        return len(self._columns)

    def __str__(self) -> str:
        counts = ", ".join(f"{c.title}: {len(c)} todos" for c in self._columns.values())
        return f"{self.name} ({counts})" if counts else self.name
