"""UI theme definitions and selection helpers.

Themes are ANSI palettes for the explorer chrome (breadcrumbs, listing rows,
messages). Syntax highlighting style for file content is a separate setting.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class UITheme:
    """Semantic ANSI palette used by the view."""

    name: str
    reset: str
    divider: str
    title: str
    breadcrumb: str
    breadcrumb_index: str
    entry_index: str
    entry_dir: str
    entry_file: str
    entry_size: str
    file_header: str
    message: str
    error: str
    gutter: str


DEFAULT_THEME = UITheme(
    name="default",
    reset="\033[0m",
    divider="\033[2m",
    title="\033[1;38;5;81m",
    breadcrumb="\033[38;5;75m",
    breadcrumb_index="\033[2;38;5;250m",
    entry_index="\033[2;38;5;250m",
    entry_dir="\033[1;34m",
    entry_file="\033[38;5;252m",
    entry_size="\033[38;5;109m",
    file_header="\033[1;38;5;229m",
    message="\033[2;38;5;250m",
    error="\033[38;5;203m",
    gutter="\033[2m",
)

OCEAN_THEME = UITheme(
    name="ocean",
    reset="\033[0m",
    divider="\033[2;38;5;31m",
    title="\033[1;38;5;45m",
    breadcrumb="\033[38;5;117m",
    breadcrumb_index="\033[2;38;5;110m",
    entry_index="\033[2;38;5;110m",
    entry_dir="\033[1;38;5;45m",
    entry_file="\033[38;5;252m",
    entry_size="\033[38;5;73m",
    file_header="\033[1;38;5;153m",
    message="\033[2;38;5;110m",
    error="\033[38;5;215m",
    gutter="\033[2;38;5;31m",
)

PLAIN_THEME = UITheme(
    name="plain",
    reset="",
    divider="",
    title="",
    breadcrumb="",
    breadcrumb_index="",
    entry_index="",
    entry_dir="",
    entry_file="",
    entry_size="",
    file_header="",
    message="",
    error="",
    gutter="",
)

_THEMES: dict[str, UITheme] = {
    DEFAULT_THEME.name: DEFAULT_THEME,
    OCEAN_THEME.name: OCEAN_THEME,
}


def available_theme_names() -> tuple[str, ...]:
    """Return selectable non-plain theme names."""
    return tuple(sorted(_THEMES.keys()))


def resolve_theme(name: str | None, *, no_color: bool = False) -> UITheme:
    """Return concrete theme for requested name and color mode.

    Unknown or empty names fall back to the default theme.
    """
    if no_color:
        return PLAIN_THEME
    candidate = (name or "").strip().lower()
    return _THEMES.get(candidate, DEFAULT_THEME)


def paint(theme: UITheme, sgr: str, text: str) -> str:
    """Wrap ``text`` in ``sgr`` and the theme reset; no-op for empty styles."""
    if not sgr or not text:
        return text
    return f"{sgr}{text}{theme.reset}"


__all__ = [
    "UITheme",
    "DEFAULT_THEME",
    "OCEAN_THEME",
    "PLAIN_THEME",
    "available_theme_names",
    "resolve_theme",
    "paint",
]
