"""MCP server exposing note content conversion tools."""

from typing import Any

from loguru import logger
from mcp.server.fastmcp import FastMCP

from notes_editor.core.convert.html import html_to_document, render_preview
from notes_editor.core.convert.parser import to_tree
from notes_editor.core.convert.serializer import normalize, to_persisted
from notes_editor.models.node import List, node_to_dict

# --- Core functions (testable without MCP context) ---


def normalize_note_content(content: str) -> dict[str, Any]:
    """Canonicalise persisted note content.

    Args:
        content: Note text using ``**bold**``, ``*italic*``, ``<u>underline</u>``
            and ``• `` bullet lines.
    """
    canonical = normalize(content)
    return {"content": canonical, "changed": canonical != content}


def render_note_preview(content: str, max_lines: int | None = None) -> dict[str, Any]:
    """Render note content as preview HTML.

    Args:
        content: Persisted note text.
        max_lines: Optional line clamp for card-style previews.
    """
    if max_lines is not None and max_lines < 1:
        return {"error": "max_lines must be at least 1."}
    return {"html": render_preview(content, max_lines=max_lines)}


def note_structure(content: str) -> dict[str, Any]:
    """Parse note content into its document tree."""
    document = to_tree(content)
    lists = [block for block in document.children if isinstance(block, List)]
    return {
        "tree": node_to_dict(document),
        "block_count": len(document.children),
        "list_item_count": sum(len(block.items) for block in lists),
    }


def html_to_note_content(html: str) -> dict[str, Any]:
    """Convert editor HTML into persisted note content."""
    content = to_persisted(html_to_document(html))
    logger.debug("Converted {} chars of HTML into {} chars", len(html), len(content))
    return {"content": content}


mcp_server = FastMCP(
    "notes-editor",
    instructions="""\
Notes store formatted text in a small markup dialect: **bold**, *italic*,
<u>underline</u>, and bullet lines starting with "• ". There are no escapes.

- normalize_note_content returns the canonical form the editor would save.
- note_structure shows how the editor reads the text (lines, lists, spans).
- render_note_preview returns the HTML used for note cards.
- html_to_note_content turns editor HTML back into note text.
""",
)


# --- MCP Tool Wrappers ---


@mcp_server.tool()
async def normalize_note_content_tool(content: str) -> dict[str, Any]:
    """Canonicalise persisted note content (the form the editor saves).

    Args:
        content: Note text in the markup dialect.
    """
    return normalize_note_content(content)


@mcp_server.tool()
async def render_note_preview_tool(content: str, max_lines: int | None = None) -> dict[str, Any]:
    """Render note content as preview HTML.

    Args:
        content: Note text in the markup dialect.
        max_lines: Optional line clamp (at least 1).
    """
    return render_note_preview(content, max_lines=max_lines)


@mcp_server.tool()
async def note_structure_tool(content: str) -> dict[str, Any]:
    """Parse note content and return its document tree as JSON.

    Args:
        content: Note text in the markup dialect.
    """
    return note_structure(content)


@mcp_server.tool()
async def html_to_note_content_tool(html: str) -> dict[str, Any]:
    """Convert editor HTML (strong/em/u, div lines, ul/li) into note text.

    Args:
        html: Markup produced by the rich-text surface.
    """
    return html_to_note_content(html)


def run_mcp_server() -> None:
    """Run the MCP server with stdio transport."""
    from notes_editor.logging_config import configure_logging

    configure_logging(verbose=False)
    mcp_server.run(transport="stdio")
