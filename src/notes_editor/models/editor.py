"""Cursor, selection and format-state values for the editor engine."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True, order=True)
class CursorLocator:
    """A position in the document.

    ``path`` addresses a text block: ``(i,)`` is the top-level ``Line`` at
    index ``i`` and ``(i, j)`` is item ``j`` of the top-level ``List`` at
    index ``i``. ``offset`` counts characters of the block's flattened text.
    """

    path: tuple[int, ...]
    offset: int = 0

    def moved_to(self, offset: int) -> CursorLocator:
        return CursorLocator(self.path, offset)


@dataclass(frozen=True)
class Selection:
    """An anchor/focus pair. Collapsed when both ends coincide."""

    anchor: CursorLocator
    focus: CursorLocator

    @classmethod
    def caret(cls, cursor: CursorLocator) -> Selection:
        return cls(cursor, cursor)

    @property
    def collapsed(self) -> bool:
        return self.anchor == self.focus

    @property
    def start(self) -> CursorLocator:
        return min(self.anchor, self.focus)

    @property
    def end(self) -> CursorLocator:
        return max(self.anchor, self.focus)


@dataclass(frozen=True)
class FormatState:
    """Which toolbar formats are active at the cursor."""

    bold: bool = False
    italic: bool = False
    underline: bool = False
    bullet_list: bool = False


INACTIVE = FormatState()


class ListState(Enum):
    """Position of the cursor relative to the list structure."""

    NOT_IN_LIST = "not_in_list"
    IN_LIST_EMPTY_ITEM = "in_list_empty_item"
    IN_LIST_NON_EMPTY_ITEM = "in_list_non_empty_item"
