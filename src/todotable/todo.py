"""Todo item model and the todo.txt line codec."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from functools import total_ordering
from typing import ClassVar

from todotable.errors import ParseError, TagContainsWhitespaceError
from todotable.lexer import DATE_RE, TokenType, classify, tokenize

logger = logging.getLogger(__name__)

_SPACE_SPLIT_RE = re.compile(r"(\s+)")


def current_date() -> date:
    """Clock used by ``complete`` and ``is_due`` when no date is passed in."""
    return date.today()


@total_ordering
class TodoPriority(Enum):
    """todo.txt priority letter. ``A`` is the highest, ``NONE`` the lowest."""

    NONE = ""
    A = "A"
    B = "B"
    C = "C"
    D = "D"
    E = "E"
    F = "F"
    G = "G"
    H = "H"
    I = "I"  # noqa: E741
    J = "J"
    K = "K"
    L = "L"
    M = "M"
    N = "N"
    O = "O"  # noqa: E741
    P = "P"
    Q = "Q"
    R = "R"
    S = "S"
    T = "T"
    U = "U"
    V = "V"
    W = "W"
    X = "X"
    Y = "Y"
    Z = "Z"

    @classmethod
    def parse(cls, text: str) -> TodoPriority:
        """Parse a ``(X)`` priority token.

        Raises:
            ParseError: If the parentheses are missing or the content is not
                exactly one uppercase letter.
        """
        if not (text.startswith("(") and text.endswith(")")):
            raise ParseError(f"Priority {text!r} is missing parentheses", line=text)
        letter = text[1:-1]
        if len(letter) != 1 or not "A" <= letter <= "Z":
            raise ParseError(f"Invalid priority {text!r}: expected one letter A-Z", line=text)
        return cls(letter)

    @property
    def rank(self) -> int:
        """0 for ``NONE``, 1 for ``Z`` up to 26 for ``A``."""
        if self is TodoPriority.NONE:
            return 0
        return ord("Z") - ord(self.value) + 1

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, TodoPriority):
            return NotImplemented
        return self.rank < other.rank

    def __bool__(self) -> bool:
        return self is not TodoPriority.NONE

    def __str__(self) -> str:
        return f"({self.value})" if self else ""


@dataclass(frozen=True)
class TodoDate:
    """A due date: a calendar day, or ``TodoDate.NEVER``."""

    day: date | None = None

    NEVER: ClassVar[TodoDate]

    @classmethod
    def parse(cls, text: str) -> TodoDate:
        """Parse a ``YYYY-MM-DD`` date.

        Raises:
            ParseError: If the text is not shaped like a date or is not a valid
                calendar day.
        """
        if not DATE_RE.fullmatch(text):
            raise ParseError(f"Invalid date {text!r}: expected YYYY-MM-DD", line=text)
        try:
            return cls(date.fromisoformat(text))
        except ValueError as e:
            raise ParseError(f"Invalid date {text!r}: {e}", line=text) from e

    @property
    def is_never(self) -> bool:
        return self.day is None

    def is_due(self, today: date | None = None) -> bool:
        """True if the day is ``today`` or earlier. ``NEVER`` is never due."""
        if self.day is None:
            return False
        return self.day <= (today or current_date())

    def __bool__(self) -> bool:
        return self.day is not None

    def __str__(self) -> str:
        return "" if self.day is None else self.day.isoformat()


TodoDate.NEVER = TodoDate()


class TagKind(str, Enum):
    """Tag sigils."""

    PROJECT = "+"
    CONTEXT = "@"


@dataclass(frozen=True)
class TodoTag:
    """A ``+project`` or ``@context`` tag.

    Build with ``TodoTag.project`` or ``TodoTag.context`` so the name is
    checked for whitespace.
    """

    kind: TagKind
    name: str

    @classmethod
    def project(cls, name: str) -> TodoTag:
        return cls._checked(TagKind.PROJECT, name)

    @classmethod
    def context(cls, name: str) -> TodoTag:
        return cls._checked(TagKind.CONTEXT, name)

    @classmethod
    def _checked(cls, kind: TagKind, name: str) -> TodoTag:
        if any(ch.isspace() for ch in name):
            raise TagContainsWhitespaceError(f"Tag {name!r} contains whitespace")
        return cls(kind, name)

    def __str__(self) -> str:
        return f"{self.kind.value}{self.name}"


@dataclass
class _TagIndex:
    """Tags extracted from a description, in order of first appearance."""

    projects: list[str] = field(default_factory=list)
    contexts: list[str] = field(default_factory=list)
    meta: dict[str, str] = field(default_factory=dict)
    due: TodoDate = TodoDate.NEVER


def _index_description(text: str) -> _TagIndex:
    index = _TagIndex()
    for token in tokenize(text):
        if token.type is TokenType.PROJECT:
            if token.tag not in index.projects:
                index.projects.append(token.tag)
        elif token.type is TokenType.CONTEXT:
            if token.tag not in index.contexts:
                index.contexts.append(token.tag)
        elif token.type is TokenType.KEY_VALUE:
            if token.key == "due":
                try:
                    index.due = TodoDate.parse(token.meta_value)
                except ParseError as e:
                    raise ParseError(f"Invalid due date {token.meta_value!r}", line=text) from e
            else:
                index.meta[token.key] = token.meta_value
    return index


def _rewrite_meta(text: str, key: str, value: str | None) -> str:
    """Replace, drop or append the ``key:value`` words of a description.

    The first matching word takes the new value and later duplicates are
    dropped. A ``None`` value drops every match. Spacing between the words
    that are kept is left untouched.
    """
    out: list[str] = []
    separator = ""
    replaced = False
    for i, part in enumerate(_SPACE_SPLIT_RE.split(text)):
        if i % 2:
            separator = part
            continue
        if classify(part) is TokenType.KEY_VALUE and part.split(":", 1)[0] == key:
            if value is None or replaced:
                continue
            part = f"{key}:{value}"
            replaced = True
        out.append(separator + part if out else part)
        separator = ""
    if value is not None and not replaced:
        out.append(f" {key}:{value}" if out else f"{key}:{value}")
    return "".join(out)


def _check_meta_word(word: str, what: str) -> None:
    if not word or ":" in word or any(ch.isspace() for ch in word):
        raise ParseError(f"Invalid metadata {what} {word!r}: must be non-empty without ':' or whitespace")


def _check_description(text: str) -> None:
    if not text.strip():
        raise ParseError("Todo has no description", line=text)


@dataclass
class Todo:
    """A todo item.

    ``text`` is the description exactly as it appears in the todo.txt line,
    tags included. ``projects``, ``contexts``, ``meta`` and ``due`` are read
    from it on demand, so editing ``text`` directly keeps them in sync.
    """

    text: str
    completed: bool = False
    completion_date: date | None = None
    creation_date: date | None = None
    priority: TodoPriority = TodoPriority.NONE
    _index: _TagIndex | None = field(default=None, init=False, repr=False, compare=False)
    _indexed_text: str | None = field(default=None, init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        self._tags()

    @classmethod
    def new(
        cls,
        text: str,
        due: TodoDate = TodoDate.NEVER,
        priority: TodoPriority = TodoPriority.NONE,
        created: date | None = None,
    ) -> Todo:
        """Create an open todo created on ``created`` (default: today)."""
        todo = cls(text, creation_date=created or current_date(), priority=priority)
        if due:
            todo.set_due(due)
        return todo

    @classmethod
    def parse(cls, line: str) -> Todo:
        """Parse one todo.txt line.

        Grammar: ``[x ][(A) ][completion-date ][creation-date ]description``.
        A completed line may carry two dates (completion then creation), an
        open line only one (creation).

        Raises:
            ParseError: On an empty line, a malformed priority or date, a bad
                ``due:`` value, or a missing description.
        """
        stripped = line.strip()
        if not stripped:
            raise ParseError("Empty todo line", line=line)

        tokens = list(tokenize(stripped))
        pos = 0
        completed = False
        if tokens[pos].type is TokenType.COMPLETED:
            completed = True
            pos += 1

        priority = TodoPriority.NONE
        if pos < len(tokens) and tokens[pos].type is TokenType.PRIORITY:
            try:
                priority = TodoPriority.parse(tokens[pos].value)
            except ParseError as e:
                raise ParseError(e.message, line=line) from e
            pos += 1

        dates: list[date] = []
        max_dates = 2 if completed else 1
        while pos < len(tokens) and len(dates) < max_dates and tokens[pos].type is TokenType.DATE:
            dates.append(_leading_date(tokens[pos].value, line))
            pos += 1

        if pos >= len(tokens):
            raise ParseError("Todo has no description", line=line)

        completion_date = creation_date = None
        if completed:
            if dates:
                completion_date = dates[0]
            if len(dates) > 1:
                creation_date = dates[1]
        elif dates:
            creation_date = dates[0]

        try:
            return cls(
                text=stripped[tokens[pos].start :],
                completed=completed,
                completion_date=completion_date,
                creation_date=creation_date,
                priority=priority,
            )
        except ParseError as e:
            logger.debug(f"Rejected todo line {line!r}: {e}")
            raise ParseError(e.message, line=line) from e

    from_str = parse

    def to_string(self) -> str:
        """Render the todo as a todo.txt line."""
        parts = []
        if self.completed:
            parts.append("x")
        if self.priority:
            parts.append(str(self.priority))
        if self.completed and self.completion_date is not None:
            parts.append(self.completion_date.isoformat())
        if self.creation_date is not None:
            parts.append(self.creation_date.isoformat())
        parts.append(self.text)
        return " ".join(parts)

    def __str__(self) -> str:
        return self.to_string()

    def _tags(self) -> _TagIndex:
        if self._index is None or self._indexed_text != self.text:
            _check_description(self.text)
            self._index = _index_description(self.text)
            self._indexed_text = self.text
        return self._index

    @property
    def projects(self) -> list[str]:
        return list(self._tags().projects)

    @property
    def contexts(self) -> list[str]:
        return list(self._tags().contexts)

    @property
    def meta(self) -> dict[str, str]:
        """``key:value`` tags other than ``due``."""
        return dict(self._tags().meta)

    @property
    def due(self) -> TodoDate:
        return self._tags().due

    @due.setter
    def due(self, value: TodoDate) -> None:
        self.set_due(value)

    def has_project_tag(self, name: str) -> bool:
        return name in self._tags().projects

    def has_context_tag(self, name: str) -> bool:
        return name in self._tags().contexts

    def has_tag(self, tag: TodoTag) -> bool:
        if tag.kind is TagKind.PROJECT:
            return self.has_project_tag(tag.name)
        return self.has_context_tag(tag.name)

    def tags(self) -> set[TodoTag]:
        index = self._tags()
        found = {TodoTag(TagKind.PROJECT, name) for name in index.projects}
        found.update(TodoTag(TagKind.CONTEXT, name) for name in index.contexts)
        return found

    def is_due(self, today: date | None = None) -> bool:
        """True if a due date is set, reached by ``today`` and the todo is open."""
        return not self.completed and self.due.is_due(today)

    def complete(self, today: date | None = None) -> None:
        """Mark the todo as done.

        Stamps ``today`` (default: the current date) as the completion date
        when the todo has a creation date and no completion date yet. Calling
        it again changes nothing.
        """
        self.completed = True
        if self.creation_date is not None and self.completion_date is None:
            self.completion_date = today or current_date()

    def uncomplete(self) -> None:
        self.completed = False
        self.completion_date = None

    def get_meta(self, key: str) -> str | None:
        if key == "due":
            return str(self.due) or None
        return self._tags().meta.get(key)

    def set_meta(self, key: str, value: str) -> None:
        """Set a ``key:value`` tag, editing it in place or appending it."""
        _check_meta_word(key, "key")
        _check_meta_word(value, "value")
        if key == "due":
            TodoDate.parse(value)
        self.text = _rewrite_meta(self.text, key, value)

    def delete_meta(self, key: str) -> None:
        """Drop every ``key:value`` tag with this key.

        Raises:
            ParseError: If the tag is the whole description.
        """
        text = _rewrite_meta(self.text, key, None)
        _check_description(text)
        self.text = text

    def set_due(self, due: TodoDate) -> None:
        if due:
            self.set_meta("due", str(due))
        else:
            self.delete_meta("due")

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "text": self.text,
            "completed": self.completed,
            "priority": self.priority.value or None,
            "completion_date": self.completion_date.isoformat() if self.completion_date else None,
            "creation_date": self.creation_date.isoformat() if self.creation_date else None,
            "due": str(self.due) or None,
            "projects": self.projects,
            "contexts": self.contexts,
            "meta": self.meta,
        }


def _leading_date(text: str, line: str) -> date:
    try:
        return TodoDate.parse(text).day  # type: ignore[return-value]
    except ParseError as e:
        raise ParseError(e.message, line=line) from e
