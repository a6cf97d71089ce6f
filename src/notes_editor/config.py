"""Configuration constants for the notes editor."""

import os
from pathlib import Path

# Quiet period before the persisted text is recomputed after an edit.
DEBOUNCE_SECONDS: float = 1.0

# Form limits, enforced before submission.
TITLE_MAX_LENGTH: int = 200
CONTENT_MAX_LENGTH: int = 10_000

# Bullet marker of the persisted dialect, followed by a space.
BULLET: str = "•"

API_BASE_URL: str = os.environ.get("NOTES_API_URL", "https://notes-backend-wheat.vercel.app")

# API token location. First file found is used.
API_TOKEN_FILES: list[Path] = [
    Path("~/.config/notes-editor-token.txt").expanduser(),
    Path("~/.config/secret/notes-editor-token.txt").expanduser(),
]


def resolve_api_token() -> str | None:
    """Return the API token from NOTES_API_TOKEN or the first token file found."""
    token = os.environ.get("NOTES_API_TOKEN")
    if token:
        return token.strip()
    for token_path in API_TOKEN_FILES:
        try:
            return token_path.read_text(encoding="utf-8").strip()
        except FileNotFoundError:
            pass
    return None
