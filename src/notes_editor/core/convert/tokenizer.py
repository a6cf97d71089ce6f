"""Tokenizer for one line of the persisted markdown dialect."""

import re
from dataclasses import dataclass
from enum import Enum

from notes_editor.config import BULLET


class TokenKind(Enum):
    TEXT = "text"
    STARS = "stars"
    UNDERLINE_OPEN = "underline_open"
    UNDERLINE_CLOSE = "underline_close"


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    text: str


_DELIMITER = re.compile(r"(\*+|<u>|</u>)")


def tokenize_line(line: str) -> list[Token]:
    """Split a line into text, star-run and underline-tag tokens."""
    tokens: list[Token] = []
    for part in _DELIMITER.split(line):
        if not part:
            continue
        if part == "<u>":
            tokens.append(Token(TokenKind.UNDERLINE_OPEN, part))
        elif part == "</u>":
            tokens.append(Token(TokenKind.UNDERLINE_CLOSE, part))
        elif part.startswith("*"):
            tokens.append(Token(TokenKind.STARS, part))
        else:
            tokens.append(Token(TokenKind.TEXT, part))
    return tokens


def split_bullet(line: str) -> tuple[bool, str]:
    """Return (is_bullet, content) for a stripped line.

    ``• text`` is a list item; a bare ``•`` is an empty one.
    """
    if line == BULLET:
        return True, ""
    if line.startswith(BULLET) and line[len(BULLET) : len(BULLET) + 1].isspace():
        return True, line[len(BULLET) :].strip()
    return False, line


def has_delimiter(text: str) -> bool:
    """True when ``text`` would tokenize to something other than plain text."""
    return _DELIMITER.search(text) is not None
