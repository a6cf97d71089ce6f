"""Typing, deletion and inline formatting on the document tree."""

from loguru import logger

from notes_editor.core.convert.runs import (
    block_runs,
    formats_before,
    runs_text,
    set_block_runs,
    split_runs,
)
from notes_editor.core.editor.format_state import shared_formats
from notes_editor.core.editor.line_break import handle_line_break
from notes_editor.core.editor.surface import (
    block_paths,
    end_of,
    is_valid,
    remove_block,
    resolve_block,
    selected_blocks,
)
from notes_editor.models.editor import CursorLocator, Selection
from notes_editor.models.node import Document, Format, Line, List, ListItem, Run


def insert_text(
    document: Document,
    selection: Selection,
    text: str,
    *,
    formats: frozenset[Format] | None = None,
) -> CursorLocator:
    """Insert text at the selection, replacing selected content.

    Inserted characters take the formats of the character before the cursor
    unless formats is given. Newlines act as the Enter key.
    """
    cursor = selection.focus if selection.collapsed else delete_range(document, selection)
    if not is_valid(document, cursor):
        logger.debug("Ignoring text insert at invalid cursor {}", cursor)
        return cursor

    for index, segment in enumerate(text.replace("\r\n", "\n").split("\n")):
        if index:
            cursor = handle_line_break(document, cursor)
        if not segment:
            continue
        block = resolve_block(document, cursor.path)
        if block is None:
            break
        runs = block_runs(block)
        segment_formats = formats if formats is not None else formats_before(runs, cursor.offset)
        head, tail = split_runs(runs, cursor.offset)
        set_block_runs(block, [*head, Run(segment, segment_formats), *tail])
        cursor = cursor.moved_to(cursor.offset + len(segment))
    return cursor


def delete_range(document: Document, selection: Selection) -> CursorLocator:
    """Remove the selected content and return the collapsed cursor.

    Across blocks, what follows the selection in the last block joins the
    first block and the blocks in between disappear.
    """
    start, end = selection.start, selection.end
    if selection.collapsed or not (is_valid(document, start) and is_valid(document, end)):
        return selection.focus

    first = resolve_block(document, start.path)
    last = resolve_block(document, end.path)
    if first is None or last is None:
        return selection.focus

    head, _ = split_runs(block_runs(first), start.offset)
    _, tail = split_runs(block_runs(last), end.offset)
    set_block_runs(first, [*head, *tail])

    doomed = [path for path in block_paths(document) if start.path < path <= end.path]
    for path in reversed(doomed):
        remove_block(document, path)
    return start


def delete_backward(document: Document, cursor: CursorLocator) -> CursorLocator:
    """Backspace at a collapsed cursor.

    Inside a block the previous character goes. At the start of a list item
    the item is lifted out of its list into a plain line; at the start of a
    line the line joins the end of the previous block. At the very start of
    the document nothing happens.
    """
    block = resolve_block(document, cursor.path)
    if block is None or not is_valid(document, cursor):
        return cursor

    if cursor.offset > 0:
        return delete_range(document, Selection(cursor.moved_to(cursor.offset - 1), cursor))

    if isinstance(block, ListItem):
        return _lift_item(document, cursor.path)

    paths = block_paths(document)
    position = paths.index(cursor.path)
    if position == 0:
        return cursor
    previous_end = end_of(document, paths[position - 1])
    return delete_range(document, Selection(previous_end, cursor))


def _lift_item(document: Document, path: tuple[int, ...]) -> CursorLocator:
    index, item_index = path
    bullet_list = document.children[index]
    if not isinstance(bullet_list, List):
        return CursorLocator(path, 0)

    before = bullet_list.items[:item_index]
    item = bullet_list.items[item_index]
    after = bullet_list.items[item_index + 1 :]

    replacement: list[Line | List] = []
    if before:
        replacement.append(List(before))
    replacement.append(Line(item.children))
    if after:
        replacement.append(List(after))
    document.children[index : index + 1] = replacement
    return CursorLocator((index + (1 if before else 0),), 0)


def toggle_inline_format(document: Document, selection: Selection, fmt: Format) -> bool:
    """Apply fmt to the selection, or remove it if the selection already has it.

    Returns True when the format ends up applied. Collapsed selections are
    left alone; the session keeps those as pending typing formats.
    """
    if selection.collapsed:
        return False

    segments = list(selected_blocks(document, selection))
    selected: list[Run] = []
    for _, block, start, end in segments:
        _, tail = split_runs(block_runs(block), start)
        middle, _ = split_runs(tail, end - start)
        selected.extend(run for run in middle if run.text.strip())
    if not runs_text(selected):
        return False

    apply = fmt not in shared_formats(selected)
    for _, block, start, end in segments:
        head, rest = split_runs(block_runs(block), start)
        middle, tail = split_runs(rest, end - start)
        changed = [
            Run(run.text, run.formats | {fmt} if apply else run.formats - {fmt}) for run in middle
        ]
        set_block_runs(block, [*head, *changed, *tail])
    logger.debug("{} {} on {}", "Applied" if apply else "Removed", fmt, selection)
    return apply
