"""Compute which toolbar formats are active at the cursor."""

from loguru import logger

from notes_editor.core.convert.runs import block_runs, formats_before, slice_runs
from notes_editor.core.editor.surface import EditorSurface, resolve_block, selected_blocks
from notes_editor.models.editor import INACTIVE, CursorLocator, FormatState, Selection
from notes_editor.models.node import Format, ListItem, Run


def compute_format_state(
    surface: EditorSurface | None,
    cursor: CursorLocator | Selection | None = None,
) -> FormatState:
    """Return the formats active at a cursor or across a selection.

    A collapsed cursor takes the formats of the character before it. For a
    selection a flag is on only when every selected character carries it
    (blank characters are ignored unless nothing else is selected). Anything
    indeterminate, including an unmounted surface or a locator outside the
    document, reports every flag off. Never mutates the surface.
    """
    if surface is None or not surface.mounted:
        return INACTIVE

    if cursor is None:
        selection = surface.selection
    elif isinstance(cursor, CursorLocator):
        selection = Selection.caret(cursor)
    else:
        selection = cursor

    document = surface.document
    if selection.collapsed:
        block = resolve_block(document, selection.focus.path)
        if block is None:
            logger.debug("Cursor {} does not address a block", selection.focus)
            return INACTIVE
        runs = block_runs(block)
        if selection.focus.offset > sum(len(run.text) for run in runs):
            return INACTIVE
        formats = formats_before(runs, selection.focus.offset)
        return _state(formats, bullet_list=isinstance(block, ListItem))

    selected: list[Run] = []
    in_list: list[bool] = []
    for _, block, start, end in selected_blocks(document, selection):
        selected.extend(slice_runs(block_runs(block), start, end))
        in_list.append(isinstance(block, ListItem))
    if not in_list:
        return INACTIVE

    considered = [run for run in selected if run.text.strip()] or selected
    shared = shared_formats(considered)
    return _state(shared, bullet_list=all(in_list))


def shared_formats(runs: list[Run]) -> frozenset[Format]:
    """Formats carried by every run (none for an empty list)."""
    if not runs:
        return frozenset()
    shared = runs[0].formats
    for run in runs[1:]:
        shared &= run.formats
    return shared


def _state(formats: frozenset[Format], *, bullet_list: bool) -> FormatState:
    return FormatState(
        bold=Format.BOLD in formats,
        italic=Format.ITALIC in formats,
        underline=Format.UNDERLINE in formats,
        bullet_list=bullet_list,
    )
