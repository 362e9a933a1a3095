"""Fetch file bodies and turn them into renderable content.

``render`` dispatches on the ``RenderMode`` chosen by ``classify``:
documents go to the markdown parser, everything else to the highlighter.
"""

from __future__ import annotations

import logging

from ..errors import ContentFetchError
from ..source.base import ContentSource
from ..source.types import DirectoryEntry, EntryKind
from .classify import RenderMode, classify
from .markdown import Document, parse_document
from .syntax import CodeBlock, highlight_code, sanitize_terminal_text

logger = logging.getLogger(__name__)

RenderedContent = Document | CodeBlock


def binary_placeholder(byte_size: int) -> str:
    return f"<binary file: {byte_size} bytes>"


def render(content: str, mode: RenderMode, language: str) -> RenderedContent:
    """Turn raw text into a ``Document`` or a line-numbered ``CodeBlock``."""
    content = sanitize_terminal_text(content)
    if mode is RenderMode.DOCUMENT:
        return parse_document(content)
    if mode is RenderMode.CODE:
        return highlight_code(content, language)
    raise AssertionError(f"unhandled render mode: {mode!r}")


def render_file(content: str, extension: str) -> RenderedContent:
    return render(content, classify(extension), extension)


class ContentResolver:
    """Fetch file text from a source, discarding superseded results.

    Each ``fetch_content`` call takes a new generation number. When a call
    resolves after a newer one was issued, its text is dropped and ``None`` is
    returned.
    """

    def __init__(self, source: ContentSource) -> None:
        self.source = source
        self._generation = 0

    @property
    def generation(self) -> int:
        return self._generation

    async def fetch_content(self, entry: DirectoryEntry) -> str | None:
        if entry.kind is not EntryKind.FILE:
            raise ValueError(f"{entry.name} is not a file")

        self._generation += 1
        generation = self._generation
        try:
            text = await self.source.fetch_text(entry)
        except ContentFetchError:
            if generation != self._generation:
                logger.debug("Ignoring failure of superseded fetch for %s", entry.name)
                return None
            raise

        if generation != self._generation:
            logger.debug("Discarding superseded content for %s", entry.name)
            return None
        if "\x00" in text:
            return binary_placeholder(entry.byte_size or len(text))
        return text


__all__ = [
    "ContentResolver",
    "RenderedContent",
    "binary_placeholder",
    "render",
    "render_file",
]
