"""CLI for the notes editor (convert, preview, push)."""

import json
import sys
from pathlib import Path
from typing import Annotated

import requests
import typer
from loguru import logger

from notes_editor.api import NotesApi, NotesApiError
from notes_editor.core.convert.html import html_to_document, render_preview
from notes_editor.core.convert.parser import to_tree
from notes_editor.core.convert.serializer import normalize, to_persisted
from notes_editor.core.form.validation import validate_note
from notes_editor.logging_config import configure_logging
from notes_editor.models.node import node_to_dict
from notes_editor.models.note import NoteDraft

app = typer.Typer(help="Notes editor: convert and publish formatted note content.")

_FileArg = Annotated[
    Path | None,
    typer.Argument(help="Input file (reads stdin when omitted or '-')"),
]


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    configure_logging(verbose=verbose)


def _read_input(path: Path | None) -> str:
    if path is None or str(path) == "-":
        return sys.stdin.read()
    if not path.exists():
        logger.error("Input file not found: {}", path)
        raise typer.Exit(1)
    return path.read_text(encoding="utf-8")


@app.command(name="normalize")
def normalize_cmd(file: _FileArg = None) -> None:
    """Print the canonical persisted form of note content."""
    typer.echo(normalize(_read_input(file)))


@app.command()
def preview(
    file: _FileArg = None,
    max_lines: int | None = typer.Option(None, "--max-lines", "-n", help="Clamp to N lines"),
) -> None:
    """Render note content as preview HTML."""
    typer.echo(render_preview(_read_input(file), max_lines=max_lines))


@app.command()
def tree(file: _FileArg = None) -> None:
    """Dump the parsed document tree as JSON."""
    typer.echo(json.dumps(node_to_dict(to_tree(_read_input(file))), indent=2))


@app.command(name="from-html")
def from_html(file: _FileArg = None) -> None:
    """Convert editor HTML into persisted note content."""
    typer.echo(to_persisted(html_to_document(_read_input(file))))


@app.command()
def push(
    title: str = typer.Option(..., "--title", "-t", help="Note title"),
    file: _FileArg = None,
    note_id: Annotated[
        str | None,
        typer.Option("--note-id", help="Update this note instead of creating one"),
    ] = None,
) -> None:
    """Validate note content and save it to the notes backend."""
    draft = NoteDraft(title=title, content=normalize(_read_input(file)))
    errors = validate_note(draft.title, draft.content)
    if errors:
        for field_name, message in errors.items():
            logger.error("{}: {}", field_name, message)
        raise typer.Exit(1)

    api = NotesApi()
    try:
        note = api.update_note(note_id, draft) if note_id else api.create_note(draft)
    except (requests.RequestException, NotesApiError) as e:
        logger.error("Saving note failed: {}", e)
        raise typer.Exit(1) from e
    typer.echo(f"Saved note {note.id} ({note.title})")
