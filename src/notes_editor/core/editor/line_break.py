"""Enter-key handling."""

from loguru import logger

from notes_editor.core.convert.runs import block_runs, set_block_runs, split_runs
from notes_editor.core.editor.lists import exit_list, list_state
from notes_editor.core.editor.surface import is_valid, resolve_block
from notes_editor.models.editor import CursorLocator, ListState
from notes_editor.models.node import Document, Line, List, ListItem


def handle_line_break(document: Document, cursor: CursorLocator) -> CursorLocator:
    """Break the cursor's block and return the cursor in the new block.

    Enter on an empty list item leaves the list exactly like the bullet
    toggle does, so repeated Enter never builds a chain of empty bullets.
    Otherwise a sibling of the same kind is inserted after the block and
    whatever followed the cursor moves into it.
    """
    block = resolve_block(document, cursor.path)
    if block is None or not is_valid(document, cursor):
        logger.debug("Ignoring line break at invalid cursor {}", cursor)
        return cursor

    if list_state(document, cursor) is ListState.IN_LIST_EMPTY_ITEM:
        return exit_list(document, cursor.path)

    head, tail = split_runs(block_runs(block), cursor.offset)
    set_block_runs(block, head)

    index = cursor.path[0]
    parent = document.children[index]
    if isinstance(parent, List):
        item = ListItem()
        set_block_runs(item, tail)
        parent.items.insert(cursor.path[1] + 1, item)
        return CursorLocator((index, cursor.path[1] + 1), 0)

    line = Line()
    set_block_runs(line, tail)
    document.children.insert(index + 1, line)
    return CursorLocator((index + 1,), 0)
