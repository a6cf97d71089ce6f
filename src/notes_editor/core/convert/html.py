"""HTML views of a note: the editing surface markup and a read-only preview."""

import html
import io
from collections.abc import Sequence
from html.parser import HTMLParser

from loguru import logger

from notes_editor.core.convert.parser import to_tree
from notes_editor.models.node import (
    Bold,
    Document,
    Inline,
    Italic,
    Line,
    List,
    ListItem,
    Text,
    Underline,
)

_INLINE_TAGS: dict[type, str] = {Bold: "strong", Italic: "em", Underline: "u"}

_FORMAT_TAGS: dict[str, type[Bold] | type[Italic] | type[Underline]] = {
    "b": Bold,
    "strong": Bold,
    "i": Italic,
    "em": Italic,
    "u": Underline,
}

_PREVIEW_CLASSES = "prose prose-sm max-w-none"
_PREVIEW_LIST_CLASSES = "list-disc list-inside my-2 space-y-1"


def inline_to_html(children: Sequence[Inline]) -> str:
    out = io.StringIO()
    for child in children:
        if isinstance(child, Text):
            out.write(html.escape(child.content, quote=False))
        elif isinstance(child, Line):
            out.write("<br>")
            out.write(inline_to_html(child.children))
        else:
            tag = _INLINE_TAGS[type(child)]
            out.write(f"<{tag}>{inline_to_html(child.children)}</{tag}>")
    return out.getvalue()


def document_to_html(document: Document) -> str:
    """Render the editing surface markup: one ``div`` per line, ``ul`` per list."""
    out = io.StringIO()
    for block in document.children:
        if isinstance(block, List):
            out.write("<ul>")
            for item in block.items:
                out.write(f"<li>{inline_to_html(item.children) or '<br>'}</li>")
            out.write("</ul>")
        else:
            out.write(f"<div>{inline_to_html(block.children) or '<br>'}</div>")
    return out.getvalue()


def render_preview(text: str | None, *, max_lines: int | None = None) -> str:
    """Render persisted text as read-only HTML for note listings."""
    classes = _PREVIEW_CLASSES
    if max_lines:
        classes += f" line-clamp-{max_lines}"

    parts: list[tuple[bool, str]] = []
    for block in to_tree(text).children:
        if isinstance(block, List):
            items = "".join(f"<li>{inline_to_html(item.children)}</li>" for item in block.items)
            parts.append((True, f'<ul class="{_PREVIEW_LIST_CLASSES}">{items}</ul>'))
        else:
            parts.append((False, inline_to_html(block.children)))

    out = io.StringIO()
    for index, (is_list, fragment) in enumerate(parts):
        if index and not is_list and not parts[index - 1][0]:
            out.write("<br />")
        out.write(fragment)
    return f'<div class="{classes}">{out.getvalue()}</div>'


class _SurfaceParser(HTMLParser):
    """Read contentEditable markup into a document tree.

    ``div``/``p`` start lines, ``ul``/``ol`` and ``li`` build lists and
    ``b``/``strong``, ``i``/``em`` and ``u`` build format nodes. Breaks inside
    formatting or list items can only be kept as whitespace. Unknown tags are
    transparent.
    """

    def __init__(self) -> None:
        super().__init__()
        self.document = Document()
        self._list: List | None = None
        self._block: Line | ListItem | None = None
        self._formats: list[Bold | Italic | Underline] = []
        # A <br> ends the line only once more content follows it, so the
        # trailing placeholder in "<div>text<br></div>" adds no blank line.
        self._pending_break = False

    def handle_starttag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        if tag in ("ul", "ol"):
            self._end_block()
            self._list = List()
            self.document.children.append(self._list)
        elif tag == "li":
            if self._list is None:
                self._list = List()
                self.document.children.append(self._list)
            self._block = ListItem()
            self._list.items.append(self._block)
            self._formats = []
        elif tag in ("div", "p"):
            if self._formats:
                self._container().append(Text("\n"))
            else:
                self._end_block()
        elif tag == "br":
            self._line_break()
        elif tag in _FORMAT_TAGS:
            node = _FORMAT_TAGS[tag]()
            self._container().append(node)
            self._formats.append(node)

    def handle_startendtag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        self.handle_starttag(tag, attrs)

    def handle_endtag(self, tag: str) -> None:
        if tag in ("ul", "ol"):
            self._end_block()
            self._list = None
        elif tag == "li":
            self._block = None
            self._formats = []
        elif tag in ("div", "p"):
            if self._formats:
                self._container().append(Text("\n"))
            else:
                self._end_block()
        elif tag in _FORMAT_TAGS:
            node_type = _FORMAT_TAGS[tag]
            for index in range(len(self._formats) - 1, -1, -1):
                if isinstance(self._formats[index], node_type):
                    del self._formats[index:]
                    break

    def handle_data(self, data: str) -> None:
        if not data.strip() and self._block is None:
            return
        self._container().append(Text(data))

    def _line_break(self) -> None:
        if self._formats or isinstance(self._block, ListItem):
            self._container().append(Text("\n"))
            return
        if self._block is None or self._pending_break:
            self._start_line()
        self._pending_break = True

    def _end_block(self) -> None:
        self._block = None
        self._formats = []
        self._pending_break = False

    def _start_line(self) -> Line:
        line = Line()
        self.document.children.append(line)
        self._list = None
        self._block = line
        return line

    def _container(self) -> list[Inline]:
        if self._formats:
            return self._formats[-1].children
        block = self._block
        if block is None or self._pending_break:
            self._pending_break = False
            block = self._start_line()
        return block.children


def html_to_document(markup: str | None) -> Document:
    """Parse editing-surface HTML into a document tree."""
    parser = _SurfaceParser()
    if markup:
        parser.feed(markup)
        parser.close()
    logger.debug("Parsed surface HTML into {} block(s)", len(parser.document.children))
    return parser.document
