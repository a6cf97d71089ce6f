"""Tests for NotesApi, the HTTP client for the notes backend."""

from pathlib import Path
from typing import Any
from unittest.mock import MagicMock, patch

import pytest
import requests

from notes_editor.api import NotesApi, NotesApiError
from notes_editor.config import resolve_api_token
from notes_editor.models.note import NoteDraft


@pytest.fixture
def api_with_mock_session(monkeypatch: pytest.MonkeyPatch) -> tuple[NotesApi, MagicMock]:
    """Create a NotesApi with a token from the environment and a mocked requests.Session."""
    monkeypatch.setenv("NOTES_API_TOKEN", "test-token")

    with patch("notes_editor.api.requests.Session") as mock_session_cls:
        mock_session = MagicMock()
        mock_session.headers = {}
        mock_session_cls.return_value = mock_session
        api = NotesApi(base_url="https://notes.example/")

    return api, mock_session


def _make_response(data: dict[str, Any]) -> MagicMock:
    """Create a mock HTTP response with given JSON data."""
    response = MagicMock()
    response.json.return_value = data
    return response


NOTE_RECORD = {
    "_id": "abc123",
    "title": "Groceries",
    "content": "• milk",
    "createdAt": "2024-05-01T10:00:00.000Z",
    "updatedAt": "2024-05-02T10:00:00.000Z",
}


def test_init_sets_auth_header(api_with_mock_session: tuple[NotesApi, MagicMock]) -> None:
    api, session = api_with_mock_session
    assert session.headers["Authorization"] == "Bearer test-token"
    assert session.headers["Content-Type"] == "application/json"
    assert api.base_url == "https://notes.example"


def test_create_note_posts_draft(api_with_mock_session: tuple[NotesApi, MagicMock]) -> None:
    api, session = api_with_mock_session
    session.request.return_value = _make_response(
        {"success": True, "data": {"note": NOTE_RECORD}}
    )

    note = api.create_note(NoteDraft(title="Groceries", content="• milk"))

    session.request.assert_called_once_with(
        "POST",
        "https://notes.example/notes",
        params=None,
        json={"title": "Groceries", "content": "• milk"},
    )
    assert note.id == "abc123"
    assert note.created_at == "2024-05-01T10:00:00.000Z"


def test_update_note_puts_to_note_path(
    api_with_mock_session: tuple[NotesApi, MagicMock],
) -> None:
    api, session = api_with_mock_session
    session.request.return_value = _make_response({"success": True, "data": NOTE_RECORD})

    note = api.update_note("abc123", NoteDraft(title="Groceries", content="• milk"))

    assert session.request.call_args.args == ("PUT", "https://notes.example/notes/abc123")
    assert note.title == "Groceries"


def test_list_notes_passes_search(api_with_mock_session: tuple[NotesApi, MagicMock]) -> None:
    api, session = api_with_mock_session
    session.request.return_value = _make_response(
        {"success": True, "data": {"notes": [NOTE_RECORD, {**NOTE_RECORD, "_id": "def456"}]}}
    )

    notes = api.list_notes(search="milk")

    assert session.request.call_args.kwargs["params"] == {"search": "milk"}
    assert [note.id for note in notes] == ["abc123", "def456"]


def test_failed_envelope_raises(api_with_mock_session: tuple[NotesApi, MagicMock]) -> None:
    api, session = api_with_mock_session
    session.request.return_value = _make_response(
        {"success": False, "message": "Note not found"}
    )

    with pytest.raises(NotesApiError, match="Note not found"):
        api.get_note("missing")


def test_http_error_propagates(api_with_mock_session: tuple[NotesApi, MagicMock]) -> None:
    api, session = api_with_mock_session
    response = _make_response({})
    response.raise_for_status.side_effect = requests.HTTPError("500 Server Error")
    session.request.return_value = response

    with pytest.raises(requests.HTTPError):
        api.delete_note("abc123")


def test_no_token_means_no_auth_header(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.delenv("NOTES_API_TOKEN", raising=False)
    monkeypatch.setattr("notes_editor.config.API_TOKEN_FILES", [tmp_path / "missing.txt"])

    with patch("notes_editor.api.requests.Session") as mock_session_cls:
        mock_session_cls.return_value.headers = {}
        api = NotesApi()

    assert "Authorization" not in api.sess.headers


def test_resolve_api_token_reads_first_existing_file(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.delenv("NOTES_API_TOKEN", raising=False)
    token_file = tmp_path / "token.txt"
    token_file.write_text("file-token\n")
    monkeypatch.setattr(
        "notes_editor.config.API_TOKEN_FILES", [tmp_path / "missing.txt", token_file]
    )
    assert resolve_api_token() == "file-token"


def test_resolve_api_token_prefers_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("NOTES_API_TOKEN", " env-token ")
    assert resolve_api_token() == "env-token"
