"""Render-mode selection for file extensions."""

from __future__ import annotations

import enum

DOCUMENT_EXTENSIONS = frozenset({"md"})


class RenderMode(enum.Enum):
    DOCUMENT = "document"
    CODE = "code"


def classify(extension: str) -> RenderMode:
    """Return ``DOCUMENT`` for markdown extensions and ``CODE`` for everything else."""
    if extension.lower() in DOCUMENT_EXTENSIONS:
        return RenderMode.DOCUMENT
    return RenderMode.CODE


__all__ = ["RenderMode", "classify", "DOCUMENT_EXTENSIONS"]
