"""In-memory todo tables with todo.txt line parsing and rendering."""

from __future__ import annotations

import importlib.metadata
from pathlib import Path

import tomli

from todotable.errors import (
    ColumnNotFoundError,
    DuplicateColumnError,
    NotFoundError,
    ParseError,
    TagContainsWhitespaceError,
    TodoError,
)
from todotable.table import TodoColumn, TodoTable
from todotable.todo import TagKind, Todo, TodoDate, TodoPriority, TodoTag

__all__ = [
    "__version__",
    "ColumnNotFoundError",
    "DuplicateColumnError",
    "NotFoundError",
    "ParseError",
    "TagContainsWhitespaceError",
    "TagKind",
    "Todo",
    "TodoColumn",
    "TodoDate",
    "TodoError",
    "TodoPriority",
    "TodoTable",
    "TodoTag",
]


def _get_version() -> str:
    """Get version from pyproject.toml or importlib.metadata.

    First tries to read from pyproject.toml for development installs.
    Falls back to importlib.metadata for installed packages.

    Returns:
        Version string.
    """
    pyproject_path = Path(__file__).parent.parent.parent / "pyproject.toml"
    if pyproject_path.exists():
        with open(pyproject_path, "rb") as f:
            pyproject = tomli.load(f)
        version = pyproject.get("project", {}).get("version")
        if version:
            return version

    try:
        return importlib.metadata.version("todotable")
    except importlib.metadata.PackageNotFoundError:
        # Last resort fallback
        return "0.0.0.dev"


__version__ = _get_version()
