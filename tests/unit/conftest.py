"""Shared test fixtures."""

from collections.abc import Callable

import pytest

from notes_editor.core.convert.parser import to_tree
from notes_editor.core.editor.surface import EditorSurface
from notes_editor.models.node import Document
from tests.unit.fakes import FakeNotesApi, FakeScheduler


@pytest.fixture
def scheduler() -> FakeScheduler:
    return FakeScheduler()


@pytest.fixture
def notes_api() -> FakeNotesApi:
    return FakeNotesApi()


@pytest.fixture
def editing_document() -> Callable[[str], Document]:
    """Build the editing-form document an editor surface holds for some text."""

    def build(text: str) -> Document:
        return EditorSurface(to_tree(text)).document

    return build
