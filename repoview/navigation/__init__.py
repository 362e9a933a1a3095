"""Navigation state: immutable snapshots, pure transitions, and the async model."""

from __future__ import annotations

from .breadcrumbs import Breadcrumb, breadcrumb_target, breadcrumbs_for
from .model import NavigationModel, find_readme
from .state import NavigationState, SelectedFile

__all__ = [
    "Breadcrumb",
    "breadcrumb_target",
    "breadcrumbs_for",
    "NavigationModel",
    "find_readme",
    "NavigationState",
    "SelectedFile",
]
