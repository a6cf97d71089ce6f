"""Field validation for the note form."""

from notes_editor.config import CONTENT_MAX_LENGTH, TITLE_MAX_LENGTH


def validate_note(title: str, content: str) -> dict[str, str]:
    """Return field-level error messages; empty when the note can be submitted."""
    errors: dict[str, str] = {}

    if not title.strip():
        errors["title"] = "Title is required"
    elif len(title) > TITLE_MAX_LENGTH:
        errors["title"] = f"Title must be less than {TITLE_MAX_LENGTH} characters"

    if not content.strip():
        errors["content"] = "Content is required"
    elif len(content) > CONTENT_MAX_LENGTH:
        errors["content"] = f"Content must be less than {CONTENT_MAX_LENGTH:,} characters"

    return errors
