"""Exception hierarchy shared by sources, the resolver, and the navigation model.

Every failure a user can trigger is one of these types. None of them is fatal:
the navigation model stores them on its state and the view renders them.
"""

from __future__ import annotations

from typing import Any


class ExplorerError(Exception):
    """Base exception for repoview errors."""

    error_code = "explorer_error"
    default_detail = "An unexpected error occurred."

    def __init__(self, detail: str | None = None, *, extra: dict[str, Any] | None = None) -> None:
        super().__init__(detail or self.default_detail)
        self.detail = detail or self.default_detail
        self.extra = extra or {}


class ListingFetchError(ExplorerError):
    """Raised when a directory listing cannot be fetched or parsed."""

    error_code = "listing_fetch_error"
    default_detail = "Could not load directory listing."


class ListingNotFound(ListingFetchError):
    """Raised when the source has no such repository or path."""

    error_code = "listing_not_found"
    default_detail = "Not Found"


class ContentFetchError(ExplorerError):
    """Raised when a file body cannot be fetched."""

    error_code = "content_fetch_error"
    default_detail = "Could not load file content."


class UnsupportedLanguage(ExplorerError):
    """Raised when no syntax grammar matches a language tag."""

    error_code = "unsupported_language"
    default_detail = "No grammar for language."

    def __init__(self, language: str) -> None:
        self.language = language
        super().__init__(f"No grammar for language {language!r}.", extra={"language": language})


class InvalidSourceIdentity(ExplorerError, ValueError):
    """Raised for ``owner/repository`` strings that cannot be parsed."""

    error_code = "invalid_source_identity"
    default_detail = "Expected 'owner/repository'."


class SearchDisabledError(ExplorerError):
    """Raised when re-pointing the source is requested but search is off."""

    error_code = "search_disabled"
    default_detail = "Repository search is disabled."


__all__ = [
    "ExplorerError",
    "ListingFetchError",
    "ListingNotFound",
    "ContentFetchError",
    "UnsupportedLanguage",
    "InvalidSourceIdentity",
    "SearchDisabledError",
]
