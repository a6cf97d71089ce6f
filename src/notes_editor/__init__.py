"""Rich-text note editor: markup conversion, editing session and notes API client."""

from notes_editor.api import NotesApi, NotesApiError
from notes_editor.core.convert.parser import to_tree
from notes_editor.core.convert.serializer import normalize, to_persisted
from notes_editor.core.editor.session import EditorSession
from notes_editor.core.editor.surface import EditorSurface
from notes_editor.core.form.controller import NoteForm
from notes_editor.protocols import NotesApiProtocol, SchedulerProtocol

__all__ = [
    "EditorSession",
    "EditorSurface",
    "NoteForm",
    "NotesApi",
    "NotesApiError",
    "NotesApiProtocol",
    "SchedulerProtocol",
    "normalize",
    "to_persisted",
    "to_tree",
]
