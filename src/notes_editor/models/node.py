"""Document tree for the note editor."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any


class Format(StrEnum):
    """Inline formats supported by the persisted dialect."""

    BOLD = "bold"
    ITALIC = "italic"
    UNDERLINE = "underline"


# Outermost first when a tree is rebuilt from runs.
FORMAT_ORDER: tuple[Format, ...] = (Format.BOLD, Format.ITALIC, Format.UNDERLINE)


@dataclass
class Text:
    """A plain text leaf."""

    content: str


@dataclass
class Bold:
    children: list[Inline] = field(default_factory=list)


@dataclass
class Italic:
    children: list[Inline] = field(default_factory=list)


@dataclass
class Underline:
    children: list[Inline] = field(default_factory=list)


@dataclass
class Line:
    """One visual row, rendered with a trailing break. May be empty."""

    children: list[Inline] = field(default_factory=list)


@dataclass
class ListItem:
    children: list[Inline] = field(default_factory=list)


@dataclass
class List:
    """A single-level bullet list."""

    items: list[ListItem] = field(default_factory=list)


@dataclass
class Document:
    """Root of the tree. Children are ``Line`` and ``List`` blocks."""

    children: list[Block] = field(default_factory=list)


# Format nodes may also hold ``Line`` children when the editing surface nests a
# break inside a span; the serializer flattens those to a single space.
Inline = Text | Bold | Italic | Underline | Line
Block = Line | List
TextBlock = Line | ListItem
DocumentNode = Text | Bold | Italic | Underline | Line | List | ListItem | Document

FORMAT_NODES: dict[Format, type[Bold] | type[Italic] | type[Underline]] = {
    Format.BOLD: Bold,
    Format.ITALIC: Italic,
    Format.UNDERLINE: Underline,
}


@dataclass(frozen=True)
class Run:
    """A stretch of text sharing one set of inline formats."""

    text: str
    formats: frozenset[Format] = frozenset()

    def with_text(self, text: str) -> Run:
        return Run(text, self.formats)


def node_to_dict(node: DocumentNode) -> dict[str, Any]:
    """Plain JSON-friendly view of a tree, for tooling output."""
    kind = type(node).__name__.lower()
    if isinstance(node, Text):
        return {"type": kind, "content": node.content}
    if isinstance(node, List):
        return {"type": kind, "items": [node_to_dict(item) for item in node.items]}
    if isinstance(node, ListItem):
        kind = "list_item"
    return {"type": kind, "children": [node_to_dict(child) for child in node.children]}
