"""Render a ``NavigationState`` snapshot as terminal text.

The screen has three parts: a title with breadcrumbs, the directory listing
(or a loading/empty-state message), and the preview pane for the selected
file. Every row is clipped to the terminal width.
"""

from __future__ import annotations

from dataclasses import dataclass

from .ansi import clip_ansi_line, display_width
from .content.markdown import Document, TerminalDocumentRenderer
from .content.resolver import render_file
from .content.syntax import DEFAULT_STYLE, format_code_lines, sanitize_terminal_text
from .errors import ExplorerError, ListingFetchError, ListingNotFound
from .navigation.breadcrumbs import breadcrumbs_for
from .navigation.state import NavigationState, SelectedFile
from .source.listing import format_size, join_path
from .source.types import DirectoryEntry
from .ui_theme import DEFAULT_THEME, PLAIN_THEME, UITheme, paint

LOADING_TEXT = "Loading..."
EMPTY_DIRECTORY_TEXT = "This directory is empty."
DIR_MARKER = "▸ "
FILE_MARKER = "  "
MIN_WIDTH = 20


@dataclass(frozen=True)
class ViewOptions:
    width: int = 80
    style: str = DEFAULT_STYLE
    theme: UITheme = DEFAULT_THEME

    @property
    def no_color(self) -> bool:
        return self.theme is PLAIN_THEME


def listing_error_message(error: ExplorerError) -> str:
    if isinstance(error, ListingNotFound):
        return f"Nothing here: {error.detail}"
    if isinstance(error, ListingFetchError):
        return f"Could not load this directory: {error.detail}"
    return error.detail


class ExplorerView:
    """Build screen rows for one snapshot."""

    def __init__(self, options: ViewOptions | None = None) -> None:
        self.options = options or ViewOptions()
        self.width = max(MIN_WIDTH, self.options.width)
        self.theme = self.options.theme

    def _paint(self, sgr: str, text: str) -> str:
        return paint(self.theme, sgr, text)

    def divider(self) -> str:
        return self._paint(self.theme.divider, "─" * self.width)

    def breadcrumb_row(self, state: NavigationState) -> str:
        parts: list[str] = []
        for crumb in breadcrumbs_for(state.current_path):
            label = self._paint(self.theme.breadcrumb, sanitize_terminal_text(crumb.label))
            if crumb.index >= 0:
                label = f"{self._paint(self.theme.breadcrumb_index, f'[{crumb.index}]')}{label}"
            parts.append(label)
        row = " / ".join(parts)
        if state.is_listing_loading and state.pending_path is not None and state.pending_path != state.current_path:
            row += self._paint(self.theme.message, f"  -> /{join_path(state.pending_path)}")
        return row

    def entry_row(self, position: int, entry: DirectoryEntry, index_width: int) -> str:
        index = self._paint(self.theme.entry_index, f"{position:>{index_width}}")
        name = sanitize_terminal_text(entry.name)
        if entry.is_dir:
            label = self._paint(self.theme.entry_dir, f"{DIR_MARKER}{name}/")
            size = ""
        else:
            label = self._paint(self.theme.entry_file, f"{FILE_MARKER}{name}")
            size = self._paint(self.theme.entry_size, format_size(entry.byte_size))
        left = f"{index} {label}"
        if not size:
            return left
        gap = self.width - display_width(left) - display_width(size)
        if gap < 1:
            return left
        return f"{left}{' ' * gap}{size}"

    def listing_rows(self, state: NavigationState) -> list[str]:
        if state.is_listing_loading:
            return [self._paint(self.theme.message, LOADING_TEXT)]
        if state.error is not None and isinstance(state.error, ListingFetchError):
            return [self._paint(self.theme.error, listing_error_message(state.error))]

        rows: list[str] = []
        if state.error is not None:
            rows.append(self._paint(self.theme.error, listing_error_message(state.error)))
        if not state.listing.entries:
            rows.append(self._paint(self.theme.message, EMPTY_DIRECTORY_TEXT))
            return rows
        index_width = len(str(len(state.listing.entries)))
        for position, entry in enumerate(state.listing.entries, start=1):
            rows.append(self.entry_row(position, entry, index_width))
        return rows

    def content_rows(self, selected: SelectedFile) -> list[str]:
        if selected.is_content_loading:
            return [self._paint(self.theme.message, LOADING_TEXT)]
        if selected.error is not None:
            return [self._paint(self.theme.error, f"Could not load {selected.name}: {selected.error.detail}")]
        if selected.content is None:
            return []

        rendered = render_file(selected.content, selected.extension)
        if isinstance(rendered, Document):
            renderer = TerminalDocumentRenderer(
                width=self.width,
                style=self.options.style,
                no_color=self.options.no_color,
            )
            return renderer.render(rendered)
        return format_code_lines(
            rendered,
            style=self.options.style,
            no_color=self.options.no_color,
            gutter_sgr=self.theme.gutter,
        )

    def file_rows(self, state: NavigationState) -> list[str]:
        selected = state.selected_file
        if selected is None:
            return []
        header = self._paint(self.theme.file_header, sanitize_terminal_text(selected.name))
        return [self.divider(), header, self.divider(), *self.content_rows(selected)]

    def rows(self, state: NavigationState, title: str) -> list[str]:
        rows = [
            self._paint(self.theme.title, sanitize_terminal_text(title)),
            self.breadcrumb_row(state),
            self.divider(),
            *self.listing_rows(state),
            *self.file_rows(state),
        ]
        return [clip_ansi_line(row, self.width) if display_width(row) > self.width else row for row in rows]

    def render(self, state: NavigationState, title: str) -> str:
        return "\n".join(self.rows(state, title)) + "\n"


def render_explorer(state: NavigationState, title: str, options: ViewOptions | None = None) -> str:
    """Render ``state`` as one screen of text."""
    return ExplorerView(options).render(state, title)


__all__ = [
    "ExplorerView",
    "ViewOptions",
    "render_explorer",
    "listing_error_message",
    "LOADING_TEXT",
    "EMPTY_DIRECTORY_TEXT",
]
