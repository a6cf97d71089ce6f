"""The editing surface: a document tree owned by exactly one editor session."""

from __future__ import annotations

import copy
from collections.abc import Iterator

from loguru import logger

from notes_editor.core.convert.runs import block_runs, block_text, set_block_runs
from notes_editor.models.editor import CursorLocator, Selection
from notes_editor.models.node import Document, Line, List, TextBlock

START = CursorLocator((0,), 0)


class EditorSurface:
    """Mutable document plus the current selection.

    The document is kept in editing form: a non-empty sequence of ``Line`` and
    ``List`` blocks whose inline content is canonical. Reads hand out copies
    (``extract``); writes replace the whole tree (``apply``) or mutate it in
    place through the editing functions, which receive ``document``.
    """

    def __init__(self, document: Document | None = None) -> None:
        self._document = _editing_form(document)
        self.selection = Selection.caret(START)
        self.mounted = True
        # The session driving this surface; a surface is never shared.
        self.owner: object | None = None

    @property
    def document(self) -> Document:
        return self._document

    @property
    def cursor(self) -> CursorLocator:
        return self.selection.focus

    def extract(self) -> Document:
        """Return a copy of the current tree."""
        return copy.deepcopy(self._document)

    def apply(self, document: Document) -> None:
        """Replace the whole tree, keeping the selection where it is still valid."""
        self._document = _editing_form(document)
        anchor, focus = self.selection.anchor, self.selection.focus
        if not (is_valid(self._document, anchor) and is_valid(self._document, focus)):
            self.selection = Selection.caret(START)

    def unmount(self) -> None:
        self.mounted = False


def _editing_form(document: Document | None) -> Document:
    result = Document()
    blocks = copy.deepcopy(document.children) if document else []
    for block in blocks:
        if isinstance(block, List):
            if not block.items:
                continue
            for item in block.items:
                set_block_runs(item, block_runs(item))
        elif isinstance(block, Line):
            set_block_runs(block, block_runs(block))
        else:
            block = Line([block])
            set_block_runs(block, block_runs(block))
        result.children.append(block)
    if not result.children:
        result.children.append(Line())
    return result


def resolve_block(document: Document, path: tuple[int, ...]) -> TextBlock | None:
    """Return the ``Line`` or ``ListItem`` a path addresses, or None."""
    if not path or not 0 <= path[0] < len(document.children):
        return None
    block = document.children[path[0]]
    if len(path) == 1:
        return block if isinstance(block, Line) else None
    if len(path) == 2 and isinstance(block, List) and 0 <= path[1] < len(block.items):
        return block.items[path[1]]
    return None


def is_valid(document: Document, cursor: CursorLocator) -> bool:
    block = resolve_block(document, cursor.path)
    return block is not None and 0 <= cursor.offset <= len(block_text(block))


def block_paths(document: Document) -> list[tuple[int, ...]]:
    """Paths of every text block, in document order."""
    paths: list[tuple[int, ...]] = []
    for index, block in enumerate(document.children):
        if isinstance(block, List):
            paths.extend((index, item_index) for item_index in range(len(block.items)))
        else:
            paths.append((index,))
    return paths


def end_of(document: Document, path: tuple[int, ...]) -> CursorLocator:
    block = resolve_block(document, path)
    return CursorLocator(path, len(block_text(block)) if block else 0)


def selected_blocks(
    document: Document, selection: Selection
) -> Iterator[tuple[tuple[int, ...], TextBlock, int, int]]:
    """Yield (path, block, start, end) for each block a selection touches."""
    start, end = selection.start, selection.end
    if not (is_valid(document, start) and is_valid(document, end)):
        logger.debug("Selection {} is outside the document", selection)
        return
    for path in block_paths(document):
        if path < start.path or path > end.path:
            continue
        block = resolve_block(document, path)
        if block is None:
            continue
        low = start.offset if path == start.path else 0
        high = end.offset if path == end.path else len(block_text(block))
        yield path, block, low, high


def remove_block(document: Document, path: tuple[int, ...]) -> None:
    """Delete a text block; a list left without items is removed too."""
    if len(path) == 1:
        del document.children[path[0]]
        return
    block = document.children[path[0]]
    if isinstance(block, List):
        del block.items[path[1]]
        if not block.items:
            del document.children[path[0]]
