"""
todo.txt lexer
==============
Splits a todo.txt line into a stream of typed tokens.

The lexer only looks at the shape of each whitespace-delimited word. Whether
a DATE or PRIORITY token actually means a date or a priority depends on its
position in the line, which is decided by the parser in ``todotable.todo``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterator


class TokenType(Enum):
    """Token shapes found in a todo.txt line."""

    COMPLETED = auto()  # x
    PRIORITY = auto()  # (A), also malformed (a) / (AB)
    DATE = auto()  # 2023-01-07, also out of range 2023-13-45
    PROJECT = auto()  # +project
    CONTEXT = auto()  # @context
    KEY_VALUE = auto()  # key:value
    WORD = auto()


@dataclass(frozen=True)
class Token:
    """A single word of a todo.txt line and where it starts."""

    type: TokenType
    value: str
    start: int

    @property
    def end(self) -> int:
        return self.start + len(self.value)

    @property
    def tag(self) -> str:
        """Tag name without its ``+``/``@`` sigil."""
        return self.value[1:]

    @property
    def key(self) -> str:
        return self.value.split(":", 1)[0]

    @property
    def meta_value(self) -> str:
        return self.value.split(":", 1)[1]

    def __repr__(self) -> str:
        return f"Token({self.type.name}, {self.value!r}, @{self.start})"


WORD_RE = re.compile(r"\S+")
PRIORITY_RE = re.compile(r"\([A-Za-z]+\)")
DATE_RE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")
KEY_VALUE_RE = re.compile(r"[^\s:]+:[^\s:]+")


def classify(word: str) -> TokenType:
    """Return the token type for a single whitespace-free word."""
    if word == "x":
        return TokenType.COMPLETED
    if PRIORITY_RE.fullmatch(word):
        return TokenType.PRIORITY
    if DATE_RE.fullmatch(word):
        return TokenType.DATE
    if len(word) > 1 and word[0] == "+":
        return TokenType.PROJECT
    if len(word) > 1 and word[0] == "@":
        return TokenType.CONTEXT
    if KEY_VALUE_RE.fullmatch(word):
        return TokenType.KEY_VALUE
    return TokenType.WORD


def tokenize(line: str) -> Iterator[Token]:
    """Yield the tokens of ``line`` from left to right."""
    for match in WORD_RE.finditer(line):
        word = match.group()
        yield Token(classify(word), word, match.start())
