"""Serialize a document tree into persisted markdown text."""

import io
import re
from collections.abc import Iterator, Sequence

from notes_editor.config import BULLET
from notes_editor.core.convert.parser import to_tree
from notes_editor.core.convert.runs import canonical_runs, inline_runs
from notes_editor.core.convert.tokenizer import split_bullet
from notes_editor.models.node import (
    FORMAT_ORDER,
    Bold,
    Document,
    DocumentNode,
    Format,
    Inline,
    Italic,
    Line,
    List,
    ListItem,
    Run,
    Text,
    Underline,
)

_OPEN = {Format.BOLD: "**", Format.ITALIC: "*", Format.UNDERLINE: "<u>"}
_CLOSE = {Format.BOLD: "**", Format.ITALIC: "*", Format.UNDERLINE: "</u>"}

_BLANK_RUN = re.compile(r"\n{3,}")


def to_persisted(tree: DocumentNode | None) -> str:
    """Convert a document tree into canonical persisted text.

    Lines end with a break and list items are written as ``• content``.
    Formatted spans spanning a nested break are flattened onto one line, empty
    spans emit nothing, runs of blank lines collapse to a single blank line
    and leading/trailing blank lines are dropped.
    """
    if tree is None:
        return ""

    out = io.StringIO()
    for is_item, runs in _rows(tree):
        content = emit_runs(canonical_runs(runs)).strip()
        if not is_item:
            # Text that reads back as a bullet is written as one.
            is_item, content = split_bullet(content)
        if is_item:
            out.write(f"{BULLET} {content}".rstrip() + "\n")
        else:
            out.write(content + "\n")

    return _BLANK_RUN.sub("\n\n", out.getvalue()).strip()


def normalize(text: str | None) -> str:
    """Round-trip text through the tree into its canonical form."""
    return to_persisted(to_tree(text))


def emit_runs(runs: Sequence[Run]) -> str:
    """Write runs with the fewest delimiters, keeping spans in canonical order.

    The open spans always form a prefix of the canonical order of the current
    run's formats; anything else is closed and reopened. This keeps every
    ``***`` unambiguous for the parser.
    """
    out = io.StringIO()
    stack: list[Format] = []
    for run in runs:
        wanted = [fmt for fmt in FORMAT_ORDER if fmt in run.formats]
        keep = 0
        while keep < len(stack) and keep < len(wanted) and stack[keep] == wanted[keep]:
            keep += 1
        for fmt in reversed(stack[keep:]):
            out.write(_CLOSE[fmt])
        del stack[keep:]
        for fmt in wanted[keep:]:
            out.write(_OPEN[fmt])
            stack.append(fmt)
        out.write(run.text)
    for fmt in reversed(stack):
        out.write(_CLOSE[fmt])
    return out.getvalue()


def _rows(node: DocumentNode) -> Iterator[tuple[bool, list[Run]]]:
    """Yield (is_list_item, runs) for every persisted line under node."""
    if isinstance(node, Document):
        for child in node.children:
            yield from _rows(child)
    elif isinstance(node, List):
        for item in node.items:
            yield True, inline_runs(item.children)
    elif isinstance(node, ListItem):
        yield True, inline_runs(node.children)
    elif isinstance(node, Line):
        yield from _line_rows(node.children)
    else:
        yield False, inline_runs([node])


def _line_rows(children: Sequence[Inline | List]) -> Iterator[tuple[bool, list[Run]]]:
    """Split a line at nested blocks; inline content stays on the current row."""
    pending: list[Inline] = []
    split = False
    for child in children:
        if isinstance(child, (Text, Bold, Italic, Underline)):
            pending.append(child)
            continue
        if pending:
            yield False, inline_runs(pending)
            pending = []
        split = True
        yield from _rows(child)
    if pending or not split:
        yield False, inline_runs(pending)
