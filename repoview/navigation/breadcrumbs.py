"""Breadcrumbs keyed by segment position.

Segment names may repeat (``a/b/a``), so a crumb is identified by its index,
never by its text.
"""

from __future__ import annotations

from dataclasses import dataclass

ROOT_LABEL = "root"


@dataclass(frozen=True)
class Breadcrumb:
    index: int
    label: str
    target: tuple[str, ...]


def breadcrumb_target(current_path: tuple[str, ...], segment_index: int) -> tuple[str, ...]:
    """Return the path prefix ending at ``segment_index`` (inclusive)."""
    if isinstance(segment_index, bool) or not isinstance(segment_index, int):
        raise TypeError(f"segment index must be an int, got {segment_index!r}")
    if not 0 <= segment_index < len(current_path):
        raise IndexError(f"segment index {segment_index} out of range for path of length {len(current_path)}")
    return current_path[: segment_index + 1]


def breadcrumbs_for(current_path: tuple[str, ...]) -> list[Breadcrumb]:
    """Crumbs for each segment; the root crumb has index ``-1``."""
    crumbs = [Breadcrumb(index=-1, label=ROOT_LABEL, target=())]
    for idx, segment in enumerate(current_path):
        crumbs.append(Breadcrumb(index=idx, label=segment, target=current_path[: idx + 1]))
    return crumbs


__all__ = ["Breadcrumb", "ROOT_LABEL", "breadcrumb_target", "breadcrumbs_for"]
