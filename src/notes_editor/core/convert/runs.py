"""Flatten text blocks into styled runs and rebuild canonical inline trees.

A run is a stretch of text with one set of formats. Both directions of the
markdown conversion, and every editing operation, work on runs: the inline
tree of a block is only ever rebuilt from runs, so it is always canonical
(bold outermost, then italic, then underline, no empty or adjacent duplicate
spans).
"""

import re
from collections.abc import Iterable, Sequence

from notes_editor.models.node import (
    FORMAT_NODES,
    FORMAT_ORDER,
    Bold,
    Format,
    Inline,
    Italic,
    Line,
    Run,
    Text,
    TextBlock,
    Underline,
)

_WHITESPACE = re.compile(r"\s+")

_NODE_FORMATS: dict[type, Format] = {node_type: fmt for fmt, node_type in FORMAT_NODES.items()}


def inline_runs(children: Iterable[Inline], formats: frozenset[Format] = frozenset()) -> list[Run]:
    """Collect the runs of a sequence of inline nodes, depth-first.

    A ``Line`` nested inside inline content is a line break the persisted form
    cannot hold; it becomes a space on both sides. Whitespace inside a format
    node is collapsed to single spaces.
    """
    out: list[Run] = []
    for child in children:
        if isinstance(child, Text):
            text = child.content
            text = _WHITESPACE.sub(" ", text) if formats else text.replace("\n", " ")
            out.append(Run(text, formats))
        elif isinstance(child, Line):
            out.append(Run(" ", formats))
            out.extend(inline_runs(child.children, formats))
            out.append(Run(" ", formats))
        elif isinstance(child, (Bold, Italic, Underline)):
            out.extend(inline_runs(child.children, formats | {_NODE_FORMATS[type(child)]}))
    return out


def block_runs(block: TextBlock) -> list[Run]:
    """Return the merged runs of a ``Line`` or ``ListItem``."""
    return merge_runs(inline_runs(block.children))


def block_text(block: TextBlock) -> str:
    return runs_text(block_runs(block))


def set_block_runs(block: TextBlock, runs: Sequence[Run]) -> None:
    """Replace a block's content with the canonical tree for runs."""
    block.children = build_inline(merge_runs(runs))


def runs_text(runs: Iterable[Run]) -> str:
    return "".join(run.text for run in runs)


def merge_runs(runs: Iterable[Run]) -> list[Run]:
    """Drop empty runs and join neighbours that share formats."""
    merged: list[Run] = []
    for run in runs:
        if not run.text:
            continue
        if merged and merged[-1].formats == run.formats:
            merged[-1] = merged[-1].with_text(merged[-1].text + run.text)
        else:
            merged.append(run)
    return merged


def canonical_runs(runs: Sequence[Run]) -> list[Run]:
    """Normalize runs for persistence.

    Whitespace at the edge of a formatted span only keeps the formats shared
    by the non-blank text on both sides of it, so delimiters never hug
    whitespace and blank-only spans lose their formatting. Remaining
    whitespace inside formatted text collapses to single spaces.
    """
    pieces: list[Run] = []
    for run in merge_runs(runs):
        if not run.formats:
            pieces.append(run)
            continue
        core = run.text.strip()
        if not core:
            pieces.append(Run(run.text, run.formats))
            continue
        lead = run.text[: len(run.text) - len(run.text.lstrip())]
        trail = run.text[len(run.text.rstrip()) :]
        pieces.extend([Run(lead, run.formats), Run(core, run.formats), Run(trail, run.formats)])
    pieces = [piece for piece in pieces if piece.text]

    result: list[Run] = []
    for index, piece in enumerate(pieces):
        if piece.formats and not piece.text.strip():
            left = _neighbour_formats(pieces, index, -1)
            right = _neighbour_formats(pieces, index, 1)
            piece = Run(piece.text, piece.formats & left & right)
        if piece.formats:
            piece = piece.with_text(_WHITESPACE.sub(" ", piece.text))
        result.append(piece)
    return merge_runs(result)


def _neighbour_formats(pieces: Sequence[Run], index: int, step: int) -> frozenset[Format]:
    index += step
    while 0 <= index < len(pieces):
        if pieces[index].text.strip():
            return pieces[index].formats
        index += step
    return frozenset()


def build_inline(runs: Sequence[Run], level: int = 0) -> list[Inline]:
    """Rebuild nested format nodes from runs, outermost format first."""
    if level == len(FORMAT_ORDER):
        return [Text(run.text) for run in merge_runs(runs)]

    fmt = FORMAT_ORDER[level]
    node_type = FORMAT_NODES[fmt]
    nodes: list[Inline] = []
    group: list[Run] = []
    inside = False
    for run in runs:
        run_inside = fmt in run.formats
        if group and run_inside != inside:
            nodes.extend(_wrap(group, inside, node_type, level))
            group = []
        group.append(run)
        inside = run_inside
    if group:
        nodes.extend(_wrap(group, inside, node_type, level))
    return nodes


def _wrap(
    group: list[Run],
    inside: bool,
    node_type: type[Bold] | type[Italic] | type[Underline],
    level: int,
) -> list[Inline]:
    children = build_inline(group, level + 1)
    if not inside:
        return children
    return [node_type(children)] if children else []


def split_runs(runs: Sequence[Run], offset: int) -> tuple[list[Run], list[Run]]:
    """Split runs at a character offset."""
    left: list[Run] = []
    right: list[Run] = []
    position = 0
    for run in runs:
        end = position + len(run.text)
        if end <= offset:
            left.append(run)
        elif position >= offset:
            right.append(run)
        else:
            cut = offset - position
            left.append(run.with_text(run.text[:cut]))
            right.append(run.with_text(run.text[cut:]))
        position = end
    return left, right


def slice_runs(runs: Sequence[Run], start: int, end: int) -> list[Run]:
    _, tail = split_runs(runs, start)
    middle, _ = split_runs(tail, end - start)
    return middle


def formats_before(runs: Sequence[Run], offset: int) -> frozenset[Format]:
    """Formats of the character just before offset (none at offset 0)."""
    left, _ = split_runs(runs, offset)
    left = [run for run in left if run.text]
    return left[-1].formats if left else frozenset()
