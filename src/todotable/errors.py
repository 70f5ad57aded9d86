"""Exceptions raised by todotable."""

from __future__ import annotations


class TodoError(Exception):
    """Base class for all todotable errors."""


class ParseError(TodoError, ValueError):
    """A todo.txt line could not be parsed.

    Attributes:
        line: The offending line, when known.
        lineno: 1-based line number inside a file, when known.
    """

    def __init__(self, message: str, line: str | None = None, lineno: int | None = None):
        self.message = message
        self.line = line
        self.lineno = lineno
        super().__init__(str(self))

    def __str__(self) -> str:
        if self.lineno is not None:
            return f"line {self.lineno}: {self.message}"
        return self.message

    def with_lineno(self, lineno: int) -> ParseError:
        """Return a copy of this error annotated with a line number."""
        return ParseError(self.message, line=self.line, lineno=lineno)


class TagContainsWhitespaceError(TodoError, ValueError):
    """A project or context tag name contains whitespace."""


class ColumnNotFoundError(TodoError, LookupError):
    """An operation referenced a column that is not in the table."""

    def __init__(self, column: str):
        self.column = column
        super().__init__(f"Column {column!r} not found")


class NotFoundError(TodoError, LookupError):
    """An operation referenced a todo title that is not in the column."""

    def __init__(self, title: str, column: str):
        self.title = title
        self.column = column
        super().__init__(f"Todo {title!r} not found in column {column!r}")


class DuplicateColumnError(TodoError, ValueError):
    """A column with the same name already exists in the table."""

    def __init__(self, column: str):
        self.column = column
        super().__init__(f"Column {column!r} already exists")
