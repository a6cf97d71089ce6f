"""The bullet-list toggle state machine.

States are relative to the block holding the cursor:

=====================  ==========  ============================================
State                  List shape  Toggle
=====================  ==========  ============================================
NOT_IN_LIST            -           wrap the line in a new one-item list
IN_LIST_EMPTY_ITEM     sole item   replace the list with an empty line
IN_LIST_EMPTY_ITEM     otherwise   drop the item, add an empty line after list
IN_LIST_NON_EMPTY_ITEM any         add an empty line after the list
=====================  ==========  ============================================

The cursor always ends up inside the block that was created. Toggling on a
non-empty item never removes items; toggling on an empty item is the usual
"exit list" gesture.
"""

from loguru import logger

from notes_editor.core.convert.runs import block_text
from notes_editor.core.editor.surface import resolve_block
from notes_editor.models.editor import CursorLocator, ListState
from notes_editor.models.node import Document, Line, List, ListItem


def list_state(document: Document, cursor: CursorLocator) -> ListState:
    block = resolve_block(document, cursor.path)
    if not isinstance(block, ListItem):
        return ListState.NOT_IN_LIST
    if block_text(block).strip():
        return ListState.IN_LIST_NON_EMPTY_ITEM
    return ListState.IN_LIST_EMPTY_ITEM


def toggle_bullet_list(document: Document, cursor: CursorLocator) -> CursorLocator:
    """Apply the toggle transition for the cursor's block; return the new cursor.

    A cursor that does not address a block leaves the document untouched.
    """
    block = resolve_block(document, cursor.path)
    if block is None:
        logger.debug("Ignoring bullet toggle at invalid cursor {}", cursor)
        return cursor

    state = list_state(document, cursor)
    index = cursor.path[0]
    logger.debug("Bullet toggle in state {} at {}", state.name, cursor)

    if state is ListState.NOT_IN_LIST:
        document.children[index] = List([ListItem(block.children)])
        return CursorLocator((index, 0), cursor.offset)

    if state is ListState.IN_LIST_EMPTY_ITEM:
        return exit_list(document, cursor.path)

    document.children.insert(index + 1, Line())
    return CursorLocator((index + 1,), 0)


def exit_list(document: Document, path: tuple[int, ...]) -> CursorLocator:
    """Leave a list from its empty item at path."""
    index, item_index = path
    bullet_list = document.children[index]
    if not isinstance(bullet_list, List):
        return CursorLocator(path, 0)

    if len(bullet_list.items) == 1:
        document.children[index] = Line()
        return CursorLocator((index,), 0)

    del bullet_list.items[item_index]
    document.children.insert(index + 1, Line())
    return CursorLocator((index + 1,), 0)
