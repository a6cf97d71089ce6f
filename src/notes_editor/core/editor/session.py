"""Editor session: surface, derived format state and pending-save buffer."""

from __future__ import annotations

from loguru import logger

from notes_editor.config import DEBOUNCE_SECONDS
from notes_editor.core.convert.html import document_to_html
from notes_editor.core.convert.parser import to_tree
from notes_editor.core.convert.runs import block_runs, formats_before
from notes_editor.core.convert.serializer import normalize, to_persisted
from notes_editor.core.editor.format_state import compute_format_state
from notes_editor.core.editor.line_break import handle_line_break
from notes_editor.core.editor.lists import toggle_bullet_list
from notes_editor.core.editor.surface import EditorSurface, is_valid, resolve_block
from notes_editor.core.editor.sync import DebouncedSync
from notes_editor.core.editor.text_edit import (
    delete_backward,
    delete_range,
    insert_text,
    toggle_inline_format,
)
from notes_editor.models.editor import INACTIVE, CursorLocator, FormatState, Selection
from notes_editor.models.node import Document, Format
from notes_editor.protocols import SchedulerProtocol


class EditorSession:
    """One open note form's editor.

    Content edits update the format state at once and restart the debounced
    conversion into ``pending_content``; cursor moves only update the format
    state. Once closed, or before a surface is mounted, every action is a
    no-op.
    """

    def __init__(
        self,
        surface: EditorSurface | None = None,
        *,
        scheduler: SchedulerProtocol | None = None,
        delay: float = DEBOUNCE_SECONDS,
        committed: str = "",
    ) -> None:
        self.surface: EditorSurface | None = None
        if surface is not None:
            self._claim(surface)
            self.surface = surface
        self.sync = DebouncedSync(self._extract, scheduler, delay=delay)
        self.last_committed = committed
        self.format_state: FormatState = INACTIVE
        # Toolbar toggles made with a collapsed cursor, applied to the next typing.
        self._typing_formats: dict[Format, bool] = {}
        self.closed = False
        self.refresh_format_state()

    @classmethod
    def open(
        cls,
        content: str | None = None,
        *,
        scheduler: SchedulerProtocol | None = None,
        delay: float = DEBOUNCE_SECONDS,
    ) -> EditorSession:
        """Start a session, seeded from a note's persisted content if given."""
        surface = EditorSurface(to_tree(content))
        return cls(surface, scheduler=scheduler, delay=delay, committed=normalize(content))

    # --- Surface lifecycle ---

    def mount(self, surface: EditorSurface) -> None:
        """Attach a surface, releasing the previous one.

        Raises RuntimeError if another session already drives the surface.
        """
        self._claim(surface)
        if self.surface is not None and self.surface is not surface:
            _release(self.surface)
        self.surface = surface
        self.refresh_format_state()

    def _claim(self, surface: EditorSurface) -> None:
        if surface.owner is not None and surface.owner is not self:
            raise RuntimeError("Editor surface already belongs to another session")
        surface.owner = self

    def close(self) -> None:
        """Discard the session: cancel the pending recompute, release the surface."""
        self.sync.cancel()
        if self.surface is not None:
            _release(self.surface)
        self.closed = True
        self.format_state = INACTIVE
        logger.debug("Editor session closed")

    def _live_surface(self, action: str) -> EditorSurface | None:
        if self.closed or self.surface is None or not self.surface.mounted:
            logger.debug("Ignoring {}: no mounted surface", action)
            return None
        return self.surface

    def _extract(self) -> Document | None:
        if self.surface is None or not self.surface.mounted:
            return None
        return self.surface.document

    # --- Derived state ---

    @property
    def pending_content(self) -> str | None:
        """The debounced persisted text; None until first computed."""
        return self.sync.buffer

    @property
    def is_dirty(self) -> bool:
        document = self._extract()
        return document is not None and to_persisted(document) != self.last_committed

    @property
    def html(self) -> str:
        document = self._extract()
        return document_to_html(document) if document is not None else ""

    def refresh_format_state(self) -> FormatState:
        state = compute_format_state(None if self.closed else self.surface)
        if self._typing_formats:
            flags = {
                "bold": self._typing_formats.get(Format.BOLD, state.bold),
                "italic": self._typing_formats.get(Format.ITALIC, state.italic),
                "underline": self._typing_formats.get(Format.UNDERLINE, state.underline),
            }
            state = FormatState(bullet_list=state.bullet_list, **flags)
        self.format_state = state
        return state

    def flush(self) -> str:
        """Latest persisted text, running a pending recompute first."""
        return self.sync.flush()

    def commit(self, content: str) -> None:
        """Record content as saved."""
        self.last_committed = content

    # --- Cursor ---

    def set_cursor(self, cursor: CursorLocator) -> None:
        self.select(cursor, cursor)

    def select(self, anchor: CursorLocator, focus: CursorLocator) -> None:
        surface = self._live_surface("selection change")
        if surface is None:
            return
        if not (is_valid(surface.document, anchor) and is_valid(surface.document, focus)):
            logger.debug("Ignoring selection outside the document: {} -> {}", anchor, focus)
            return
        surface.selection = Selection(anchor, focus)
        self._typing_formats = {}
        self.refresh_format_state()

    # --- Content edits ---

    def insert_text(self, text: str) -> None:
        surface = self._live_surface("text insert")
        if surface is None or not text:
            return
        formats = self._insert_formats(surface)
        cursor = insert_text(surface.document, surface.selection, text, formats=formats)
        surface.selection = Selection.caret(cursor)
        self._typing_formats = {}
        self._after_edit()

    def delete_backward(self) -> None:
        surface = self._live_surface("delete")
        if surface is None:
            return
        if surface.selection.collapsed:
            cursor = delete_backward(surface.document, surface.cursor)
        else:
            cursor = delete_range(surface.document, surface.selection)
        surface.selection = Selection.caret(cursor)
        self._typing_formats = {}
        self._after_edit()

    def toggle_format(self, fmt: Format) -> None:
        """Toolbar bold/italic/underline."""
        surface = self._live_surface(f"{fmt} toggle")
        if surface is None:
            return
        if surface.selection.collapsed:
            active = getattr(self.format_state, fmt.value)
            self._typing_formats[fmt] = not active
            self.refresh_format_state()
            return
        toggle_inline_format(surface.document, surface.selection, fmt)
        self._after_edit()

    def toggle_bullet_list(self) -> None:
        surface = self._live_surface("bullet toggle")
        if surface is None:
            return
        cursor = toggle_bullet_list(surface.document, surface.cursor)
        surface.selection = Selection.caret(cursor)
        self._after_edit()

    def press_enter(self) -> None:
        surface = self._live_surface("line break")
        if surface is None:
            return
        cursor = surface.cursor
        if not surface.selection.collapsed:
            cursor = delete_range(surface.document, surface.selection)
        cursor = handle_line_break(surface.document, cursor)
        surface.selection = Selection.caret(cursor)
        self._typing_formats = {}
        self._after_edit()

    def _insert_formats(self, surface: EditorSurface) -> frozenset[Format] | None:
        if not self._typing_formats:
            return None
        start = surface.selection.start
        block = resolve_block(surface.document, start.path)
        formats = set(formats_before(block_runs(block), start.offset)) if block else set()
        for fmt, on in self._typing_formats.items():
            if on:
                formats.add(fmt)
            else:
                formats.discard(fmt)
        return frozenset(formats)

    def _after_edit(self) -> None:
        self.refresh_format_state()
        self.sync.schedule()


def _release(surface: EditorSurface) -> None:
    surface.unmount()
    surface.owner = None
