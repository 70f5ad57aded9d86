"""Output formatter for todo tables."""

import json
from enum import Enum

from todotable.table import TodoColumn, TodoTable
from todotable.todo import Todo


class FormatType(str, Enum):
    """Output format types."""

    TABLE = "table"
    JSON = "json"
    COMPACT = "compact"


class Formatter:
    """Format todo tables for display."""

    def __init__(self, format_type: FormatType = FormatType.TABLE):
        self.format_type = format_type

    def format(self, table: TodoTable) -> str:
        """Format a table for display."""
        if not table.all_todos():
            return "No todos found."

        if self.format_type == FormatType.JSON:
            return self._format_json(table)
        elif self.format_type == FormatType.COMPACT:
            return self._format_compact(table)
        return self._format_table(table)

    def _format_table(self, table: TodoTable) -> str:
        """Format as one block per column."""
        lines = [f"=== {table.name} ==="]
        for column in table:
            lines.append(f"| {column.title} |")
            lines.append("-" * 80)
            if not len(column):
                lines.append("| (empty)")
            for todo in column:
                lines.append(f"| {self._status_icon(todo)} {todo.to_string()}")
            lines.append("")
        return "\n".join(lines).rstrip("\n")

    def _format_compact(self, table: TodoTable) -> str:
        """Format as compact list."""
        return "\n".join(f"[{column.title}] {todo}" for column in table for todo in column)

    def _format_json(self, table: TodoTable) -> str:
        """Format as JSON."""
        return json.dumps(
            {
                "name": table.name,
                "columns": {column.title: self._column_dicts(column) for column in table},
            },
            indent=2,
        )

    def _column_dicts(self, column: TodoColumn) -> list[dict]:
        return [todo.to_dict() for todo in column]

    def _status_icon(self, todo: Todo) -> str:
        """Get icon for a todo's state."""
        if todo.completed:
            return "[x]"
        if todo.is_due():
            return "[!]"
        return "[ ]"
