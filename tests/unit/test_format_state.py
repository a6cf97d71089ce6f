"""Tests for the toolbar format-state tracker."""

import copy

from notes_editor.core.convert.parser import to_tree
from notes_editor.core.editor.format_state import compute_format_state
from notes_editor.core.editor.surface import EditorSurface
from notes_editor.models.editor import INACTIVE, CursorLocator, FormatState, Selection


def _surface(text: str) -> EditorSurface:
    return EditorSurface(to_tree(text))


def test_start_of_fresh_note_is_inactive() -> None:
    surface = _surface("**bold** and *italic*")
    assert compute_format_state(surface, CursorLocator((0,), 0)) == FormatState(
        bold=False, italic=False, underline=False, bullet_list=False
    )


def test_inside_bold_span() -> None:
    surface = _surface("**bold** and *italic*")
    assert compute_format_state(surface, CursorLocator((0,), 2)) == FormatState(bold=True)


def test_cursor_takes_formats_of_preceding_character() -> None:
    surface = _surface("**bold** and *italic*")
    assert compute_format_state(surface, CursorLocator((0,), 4)).bold
    assert compute_format_state(surface, CursorLocator((0,), 5)) == INACTIVE
    assert compute_format_state(surface, CursorLocator((0,), 10)) == FormatState(italic=True)


def test_selection_reports_shared_formats() -> None:
    surface = _surface("**bold** and *italic*")
    whole_bold = Selection(CursorLocator((0,), 0), CursorLocator((0,), 4))
    mixed = Selection(CursorLocator((0,), 0), CursorLocator((0,), 9))
    assert compute_format_state(surface, whole_bold) == FormatState(bold=True)
    assert compute_format_state(surface, mixed) == INACTIVE


def test_uses_surface_selection_by_default() -> None:
    surface = _surface("<u>under</u>")
    surface.selection = Selection(CursorLocator((0,), 5), CursorLocator((0,), 1))
    assert compute_format_state(surface) == FormatState(underline=True)


def test_list_item_reports_bullet_list() -> None:
    surface = _surface("• item")
    assert compute_format_state(surface, CursorLocator((0, 0), 2)) == FormatState(
        bullet_list=True
    )


def test_selection_across_line_and_list_is_not_bullet_list() -> None:
    surface = _surface("a\n• b")
    selection = Selection(CursorLocator((0,), 0), CursorLocator((1, 0), 1))
    assert compute_format_state(surface, selection) == INACTIVE


def test_unavailable_surface_is_inactive() -> None:
    surface = _surface("**bold**")
    surface.unmount()
    assert compute_format_state(surface, CursorLocator((0,), 2)) == INACTIVE
    assert compute_format_state(None) == INACTIVE


def test_invalid_locator_is_inactive() -> None:
    surface = _surface("**bold**")
    assert compute_format_state(surface, CursorLocator((5,), 0)) == INACTIVE
    assert compute_format_state(surface, CursorLocator((0,), 99)) == INACTIVE


def test_does_not_mutate_surface() -> None:
    surface = _surface("**bold** and *italic*\n• item")
    before = copy.deepcopy(surface.document)
    compute_format_state(surface, Selection(CursorLocator((0,), 1), CursorLocator((1, 0), 2)))
    assert surface.document == before
