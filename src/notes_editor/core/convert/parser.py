"""Parse persisted markdown text into a document tree."""

from __future__ import annotations

from dataclasses import dataclass, field

from loguru import logger

from notes_editor.core.convert.runs import build_inline, canonical_runs
from notes_editor.core.convert.tokenizer import (
    Token,
    TokenKind,
    has_delimiter,
    split_bullet,
    tokenize_line,
)
from notes_editor.models.node import Document, Format, Line, List, ListItem, Run


@dataclass
class _Span:
    """An open (or closed) delimiter pair and what it encloses."""

    fmt: Format | None
    pieces: list[str | _Span] = field(default_factory=list)


def to_tree(text: str | None) -> Document:
    """Convert persisted text into a document tree.

    Every line becomes a ``Line`` unless it starts with ``• ``; consecutive
    bullet lines are grouped into one ``List``. Malformed delimiters are kept
    as literal text, so this never raises.
    """
    document = Document()
    if not text:
        return document

    current_list: List | None = None
    for raw_line in text.replace("\r\n", "\n").replace("\r", "\n").split("\n"):
        is_bullet, content = split_bullet(raw_line.strip())
        runs = parse_inline(content)
        if is_bullet:
            item = ListItem(build_inline(runs))
            if current_list is None:
                current_list = List()
                document.children.append(current_list)
            current_list.items.append(item)
        else:
            current_list = None
            document.children.append(Line(build_inline(runs)))
    return document


def parse_inline(content: str) -> list[Run]:
    """Parse one line of inline markup into canonical runs.

    A line is formatted only when every delimiter in it pairs up. Otherwise
    the whole line is kept as literal text, which also covers lines whose
    text would spell a delimiter once empty pairs are dropped (``<<u></u>u>``).
    Either way the result emits back to text that parses to the same runs.
    """
    root = _Span(fmt=None)
    stack = [root]

    for token in tokenize_line(content):
        if token.kind is TokenKind.TEXT:
            stack[-1].pieces.append(token.text)
        elif token.kind is TokenKind.STARS:
            _consume_stars(stack, token)
        elif token.kind is TokenKind.UNDERLINE_OPEN:
            stack.append(_Span(fmt=Format.UNDERLINE))
        elif stack[-1].fmt is Format.UNDERLINE:
            _close(stack)
        else:
            return _literal(content, "stray </u>")

    if len(stack) > 1:
        return _literal(content, f"{len(stack) - 1} unclosed delimiter(s)")
    runs = canonical_runs(_flatten(root, frozenset()))
    if any(has_delimiter(run.text) for run in runs):
        return _literal(content, "delimiter left in text")
    return runs


def _literal(content: str, reason: str) -> list[Run]:
    logger.debug("Keeping line as literal text ({}): {!r}", reason, content)
    return [Run(content)] if content else []


def _consume_stars(stack: list[_Span], token: Token) -> None:
    """Spend a star run left to right.

    Each step closes the innermost span if the stars allow it (bold takes
    two, italic one), otherwise opens bold when two stars are left and italic
    when one is. Bold is tried first, so ``**x**`` is bold rather than two
    empty italics, and ``***`` opens or closes both.
    """
    remaining = len(token.text)
    while remaining:
        top = stack[-1].fmt
        if top is Format.BOLD and remaining >= 2:
            _close(stack)
            remaining -= 2
        elif top is Format.ITALIC:
            _close(stack)
            remaining -= 1
        elif remaining >= 2:
            stack.append(_Span(fmt=Format.BOLD))
            remaining -= 2
        else:
            stack.append(_Span(fmt=Format.ITALIC))
            remaining -= 1


def _close(stack: list[_Span]) -> None:
    span = stack.pop()
    stack[-1].pieces.append(span)


def _flatten(span: _Span, formats: frozenset[Format]) -> list[Run]:
    runs: list[Run] = []
    for piece in span.pieces:
        if isinstance(piece, str):
            runs.append(Run(piece, formats))
        elif piece.fmt is not None:
            runs.extend(_flatten(piece, formats | {piece.fmt}))
    return runs
