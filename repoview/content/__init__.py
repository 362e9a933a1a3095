"""Content resolution: render-mode classification, highlighting, markdown."""

from __future__ import annotations

from .classify import RenderMode, classify
from .markdown import Document, TerminalDocumentRenderer, parse_document
from .resolver import ContentResolver, RenderedContent, render, render_file
from .syntax import CodeBlock, CodeLine, format_code_lines, highlight_code, sanitize_terminal_text

__all__ = [
    "RenderMode",
    "classify",
    "Document",
    "TerminalDocumentRenderer",
    "parse_document",
    "ContentResolver",
    "RenderedContent",
    "render",
    "render_file",
    "CodeBlock",
    "CodeLine",
    "format_code_lines",
    "highlight_code",
    "sanitize_terminal_text",
]
