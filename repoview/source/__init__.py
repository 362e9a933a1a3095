"""Directory listing sources and their domain types.

This package contains non-UI primitives:
- entry/listing datatypes and source identities
- listing construction (directory-first ordering, name uniqueness)
- the GitHub contents-API backend
- the local filesystem backend
"""

from __future__ import annotations

from .base import ContentSource
from .github import DEFAULT_API_URL, DEFAULT_TIMEOUT_SECONDS, GitHubContentSource, create_client
from .listing import build_listing, format_size, join_path, normalize_path, split_path
from .local import LocalDirectorySource
from .types import EMPTY_LISTING, DirectoryEntry, EntryKind, Listing, SourceIdentity, extension_for_name

__all__ = [
    "ContentSource",
    "DEFAULT_API_URL",
    "DEFAULT_TIMEOUT_SECONDS",
    "GitHubContentSource",
    "create_client",
    "LocalDirectorySource",
    "build_listing",
    "format_size",
    "join_path",
    "normalize_path",
    "split_path",
    "EMPTY_LISTING",
    "DirectoryEntry",
    "EntryKind",
    "Listing",
    "SourceIdentity",
    "extension_for_name",
]
