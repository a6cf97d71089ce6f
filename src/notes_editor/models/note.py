"""Note records exchanged with the Notes API."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class NoteDraft:
    """Title and persisted content, as submitted by the note form."""

    title: str
    content: str

    def to_payload(self) -> dict[str, str]:
        return {"title": self.title, "content": self.content}


@dataclass(frozen=True)
class Note:
    """A stored note."""

    id: str
    title: str
    content: str
    created_at: str | None = None
    updated_at: str | None = None

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> Note:
        """Build a note from an API record (``_id`` or ``id``)."""
        return cls(
            id=str(data.get("_id") or data.get("id") or ""),
            title=data.get("title", ""),
            content=data.get("content", ""),
            created_at=data.get("createdAt"),
            updated_at=data.get("updatedAt"),
        )
