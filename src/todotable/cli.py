"""Command-line interface for todo.txt files."""

import argparse
import logging
import os
import sys

from todotable import todo as todo_model
from todotable import todotxt
from todotable.errors import NotFoundError, ParseError, TodoError
from todotable.formatter import Formatter, FormatType
from todotable.table import TodoTable
from todotable.todo import Todo, TodoDate, TodoPriority

logger = logging.getLogger(__name__)

OPEN_COLUMN = "Todo"
DONE_COLUMN = "Done"


def default_path() -> str:
    """Todo file used when --file is not given."""
    return os.environ.get("TODOTABLE_FILE", "~/todo.txt")


class CLI:
    """todo.txt CLI application."""

    def __init__(self, path: str):
        self.path = path

    def _load(self) -> TodoTable:
        return todotxt.load_table(self.path, column=OPEN_COLUMN, done_column=DONE_COLUMN)

    def add(self, args: argparse.Namespace) -> None:
        """Add a new todo."""
        todo = Todo.parse(args.text)
        if args.priority:
            todo.priority = TodoPriority.parse(f"({args.priority})")
        if args.due:
            todo.set_due(TodoDate.parse(args.due))
        if todo.creation_date is None and not todo.completed:
            todo.creation_date = todo_model.current_date()

        todos = todotxt.load(self.path)
        todos.append(todo)
        todotxt.save(self.path, todos)
        print(f"✓ Added todo: {todo}")

    def list(self, args: argparse.Namespace) -> None:
        """List todos."""
        table = self._load()
        shown = TodoTable(table.name)
        for column in table:
            if column.title == DONE_COLUMN and not args.all:
                continue
            shown.add_col(column.title)
            for todo in column:
                if args.due and not todo.is_due():
                    continue
                shown.add_todo(todo, column.title)

        formatter = Formatter(FormatType(args.format) if args.format else FormatType.TABLE)
        print(formatter.format(shown))

    def done(self, args: argparse.Namespace) -> None:
        """Mark a todo as complete."""
        table = self._load()
        todo = table.get_todo(args.title, OPEN_COLUMN)
        if todo is None:
            print(f"✗ Todo {args.title!r} not found")
            sys.exit(1)

        todo.complete()
        table.move_todo(args.title, OPEN_COLUMN, DONE_COLUMN)
        todotxt.save_table(self.path, table)
        print(f"✓ Completed todo: {todo.text}")

    def rm(self, args: argparse.Namespace) -> None:
        """Delete a todo."""
        table = self._load()
        for column in (OPEN_COLUMN, DONE_COLUMN):
            try:
                table.remove_todo(args.title, column)
            except NotFoundError:
                continue
            todotxt.save_table(self.path, table)
            print(f"✓ Deleted todo: {args.title}")
            return
        print(f"✗ Todo {args.title!r} not found")
        sys.exit(1)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="todo.txt table CLI")
    parser.add_argument("-f", "--file", default=None, help="todo.txt file (default: $TODOTABLE_FILE or ~/todo.txt)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Add command
    add_parser = subparsers.add_parser("add", help="Add a new todo")
    add_parser.add_argument("text", help="Todo line, e.g. 'Call mom +family @phone'")
    add_parser.add_argument("-p", "--priority", choices=[p.value for p in TodoPriority if p])
    add_parser.add_argument("--due", help="Due date (YYYY-MM-DD)")

    # List command
    list_parser = subparsers.add_parser("list", help="List todos")
    list_parser.add_argument("-a", "--all", action="store_true", help="Include completed todos")
    list_parser.add_argument("--due", action="store_true", help="Only show todos that are due")
    list_parser.add_argument("--format", choices=[f.value for f in FormatType])

    # Done command
    done_parser = subparsers.add_parser("done", help="Mark todo as complete")
    done_parser.add_argument("title", help="Todo description")

    # Remove command
    rm_parser = subparsers.add_parser("rm", help="Delete a todo")
    rm_parser.add_argument("title", help="Todo description")

    return parser


def main(argv: list[str] | None = None) -> None:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    cli = CLI(args.file or default_path())
    command = getattr(cli, args.command)
    try:
        command(args)
    except ParseError as e:
        logger.error(f"Parse error: {e}")
        print(f"✗ {e}")
        sys.exit(1)
    except (TodoError, OSError) as e:
        logger.error(f"{args.command} failed: {e}")
        print(f"✗ {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
