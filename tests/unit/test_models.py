"""Tests for the model types."""

import dataclasses

import pytest

from notes_editor.models.editor import CursorLocator, Selection
from notes_editor.models.node import Bold, Document, Line, Text, node_to_dict
from notes_editor.models.note import Note, NoteDraft


def test_cursor_locator_is_frozen() -> None:
    cursor = CursorLocator((0,), 1)
    with pytest.raises(dataclasses.FrozenInstanceError):
        cursor.offset = 2  # type: ignore[misc]


def test_cursor_locators_order_by_document_position() -> None:
    assert CursorLocator((0,), 5) < CursorLocator((1,), 0)
    assert CursorLocator((0, 1), 3) < CursorLocator((0, 2), 0)
    assert CursorLocator((2,), 1) < CursorLocator((2,), 2)


def test_selection_normalizes_backwards_drag() -> None:
    anchor = CursorLocator((1,), 4)
    focus = CursorLocator((0,), 2)
    selection = Selection(anchor, focus)
    assert selection.start == focus
    assert selection.end == anchor
    assert not selection.collapsed
    assert Selection.caret(anchor).collapsed


def test_note_from_api_accepts_mongo_ids() -> None:
    note = Note.from_api({"_id": "x1", "title": "T", "content": "c", "updatedAt": "then"})
    assert note == Note(id="x1", title="T", content="c", updated_at="then")
    assert Note.from_api({"id": 7}).id == "7"


def test_note_draft_payload() -> None:
    assert NoteDraft(title="T", content="c").to_payload() == {"title": "T", "content": "c"}


def test_node_to_dict() -> None:
    tree = Document([Line([Bold([Text("b")])])])
    assert node_to_dict(tree) == {
        "type": "document",
        "children": [
            {
                "type": "line",
                "children": [{"type": "bold", "children": [{"type": "text", "content": "b"}]}],
            }
        ],
    }
