"""Notes API client."""

from typing import Any

import requests
from loguru import logger

from notes_editor.config import API_BASE_URL, resolve_api_token
from notes_editor.models.note import Note, NoteDraft


class NotesApiError(RuntimeError):
    """The API answered, but reported failure in its envelope."""


class NotesApi:
    """Thin wrapper over the notes backend's REST endpoints."""

    def __init__(self, *, base_url: str = API_BASE_URL, token: str | None = None) -> None:
        self.base_url = base_url.rstrip("/")
        self.sess = requests.Session()
        self.sess.headers["Content-Type"] = "application/json"
        self.set_auth_token(token if token is not None else resolve_api_token())
        logger.debug(
            "API ready: base_url {!r}, authenticated {!r}",
            self.base_url,
            "Authorization" in self.sess.headers,
        )

    def set_auth_token(self, token: str | None) -> None:
        if token:
            self.sess.headers["Authorization"] = f"Bearer {token}"
        else:
            self.sess.headers.pop("Authorization", None)

    def call(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        body: dict[str, Any] | None = None,
    ) -> Any:
        """Invoke an endpoint and return the ``data`` of its response envelope."""
        logger.debug("Making request: {} {} {}", method, path, repr(params or body)[:32])
        r = self.sess.request(method, f"{self.base_url}{path}", params=params, json=body)
        r.raise_for_status()
        rv: dict[str, Any] = r.json()
        if not rv.get("success", False):
            msg = f"API call failed: ({method} {path!r}) -> {rv.get('message')!r}"
            raise NotesApiError(msg)
        return rv.get("data")

    def list_notes(self, *, search: str | None = None) -> list[Note]:
        params = {"search": search} if search else None
        data = self.call("GET", "/notes", params=params) or {}
        return [Note.from_api(item) for item in data.get("notes", [])]

    def get_note(self, note_id: str) -> Note:
        data = self.call("GET", f"/notes/{note_id}") or {}
        return Note.from_api(data.get("note", data))

    def create_note(self, draft: NoteDraft) -> Note:
        data = self.call("POST", "/notes", body=draft.to_payload()) or {}
        return Note.from_api(data.get("note", data))

    def update_note(self, note_id: str, draft: NoteDraft) -> Note:
        data = self.call("PUT", f"/notes/{note_id}", body=draft.to_payload()) or {}
        return Note.from_api(data.get("note", data))

    def delete_note(self, note_id: str) -> None:
        self.call("DELETE", f"/notes/{note_id}")
