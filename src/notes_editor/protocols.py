"""Protocols for dependency injection in the editor engine."""

from collections.abc import Callable
from typing import Any, Protocol, runtime_checkable

from notes_editor.models.note import Note, NoteDraft


@runtime_checkable
class TimerHandle(Protocol):
    """A scheduled callback that can be cancelled."""

    def cancel(self) -> None:
        """Prevent the callback from running."""
        ...


@runtime_checkable
class SchedulerProtocol(Protocol):
    """Single-shot delayed callbacks. An asyncio event loop satisfies this."""

    def call_later(self, delay: float, callback: Callable[..., Any], *args: Any) -> TimerHandle:
        """Run callback after delay seconds."""
        ...


@runtime_checkable
class NotesApiProtocol(Protocol):
    """Protocol for Notes API clients used by the note form."""

    def create_note(self, draft: NoteDraft) -> Note:
        """Create a note and return the stored record."""
        ...

    def update_note(self, note_id: str, draft: NoteDraft) -> Note:
        """Replace a note's title and content."""
        ...
