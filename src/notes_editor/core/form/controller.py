"""Note form: title field, editor session and submission to the Notes API."""

from loguru import logger

from notes_editor.config import DEBOUNCE_SECONDS
from notes_editor.core.editor.session import EditorSession
from notes_editor.core.form.validation import validate_note
from notes_editor.models.note import Note, NoteDraft
from notes_editor.protocols import NotesApiProtocol, SchedulerProtocol


class NoteForm:
    """Create or edit one note.

    The editor session is opened with the form (seeded from the note being
    edited) and discarded on cancel. Submission always flushes the debounced
    conversion first, so the saved content matches the last keystroke.
    """

    def __init__(
        self,
        api: NotesApiProtocol,
        *,
        note: Note | None = None,
        scheduler: SchedulerProtocol | None = None,
        delay: float = DEBOUNCE_SECONDS,
    ) -> None:
        self.api = api
        self.note = note
        self.title = note.title if note else ""
        self.errors: dict[str, str] = {}
        self.session = EditorSession.open(
            note.content if note else None, scheduler=scheduler, delay=delay
        )

    def set_title(self, title: str) -> None:
        self.title = title
        self.errors.pop("title", None)

    def draft(self) -> NoteDraft:
        return NoteDraft(title=self.title, content=self.session.flush())

    def validate(self) -> bool:
        draft = self.draft()
        self.errors = validate_note(draft.title, draft.content)
        return not self.errors

    def submit(self) -> Note | None:
        """Validate and save; returns the stored note, or None on validation errors.

        API errors propagate to the caller, which decides how to report them.
        """
        draft = self.draft()
        self.errors = validate_note(draft.title, draft.content)
        if self.errors:
            logger.debug("Note form has errors: {}", self.errors)
            return None

        if self.note is not None:
            saved = self.api.update_note(self.note.id, draft)
            logger.info("Updated note {}", saved.id)
        else:
            saved = self.api.create_note(draft)
            logger.info("Created note {}", saved.id)

        self.session.commit(draft.content)
        self.note = saved
        return saved

    def cancel(self) -> None:
        self.session.close()
