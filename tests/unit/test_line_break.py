"""Tests for the Enter-key handler."""

from collections.abc import Callable

from notes_editor.core.convert.serializer import to_persisted
from notes_editor.core.editor.line_break import handle_line_break
from notes_editor.models.editor import CursorLocator
from notes_editor.models.node import Bold, Document, Line, List, ListItem, Text

DocFactory = Callable[[str], Document]


def test_splits_line_at_cursor(editing_document: DocFactory) -> None:
    doc = editing_document("hello world")
    cursor = handle_line_break(doc, CursorLocator((0,), 5))
    assert doc.children == [Line([Text("hello")]), Line([Text(" world")])]
    assert cursor == CursorLocator((1,), 0)


def test_enter_at_end_of_line_appends_empty_line(editing_document: DocFactory) -> None:
    doc = editing_document("hello\nnext")
    cursor = handle_line_break(doc, CursorLocator((0,), 5))
    assert doc.children == [Line([Text("hello")]), Line(), Line([Text("next")])]
    assert cursor == CursorLocator((1,), 0)


def test_enter_in_non_empty_item_adds_sibling(editing_document: DocFactory) -> None:
    doc = editing_document("• one")
    cursor = handle_line_break(doc, CursorLocator((0, 0), 3))
    assert doc.children == [List([ListItem([Text("one")]), ListItem()])]
    assert cursor == CursorLocator((0, 1), 0)


def test_split_keeps_formatting_on_both_sides(editing_document: DocFactory) -> None:
    doc = editing_document("• **ab**")
    handle_line_break(doc, CursorLocator((0, 0), 1))
    assert doc.children == [
        List([ListItem([Bold([Text("a")])]), ListItem([Bold([Text("b")])])])
    ]


def test_enter_on_empty_item_exits_list(editing_document: DocFactory) -> None:
    doc = editing_document("• one\n•")
    cursor = handle_line_break(doc, CursorLocator((0, 1), 0))
    assert doc.children == [List([ListItem([Text("one")])]), Line()]
    assert cursor == CursorLocator((1,), 0)


def test_repeated_enter_never_chains_empty_bullets(editing_document: DocFactory) -> None:
    doc = editing_document("• one")
    cursor = CursorLocator((0, 0), 3)
    for _ in range(3):
        cursor = handle_line_break(doc, cursor)
    assert to_persisted(doc) == "• one"
    assert doc.children == [List([ListItem([Text("one")])]), Line(), Line()]
    assert cursor == CursorLocator((2,), 0)


def test_invalid_cursor_is_ignored(editing_document: DocFactory) -> None:
    doc = editing_document("hello")
    cursor = handle_line_break(doc, CursorLocator((0,), 42))
    assert cursor == CursorLocator((0,), 42)
    assert doc.children == [Line([Text("hello")])]
