# src/view_state.py
"""
Per-item view state.

A DisplayItem is immutable: payload, title and the backend's hints. What the
user changes (view mode, percent toggle) lives in a ViewState record kept by
the ViewStateController under the item's key, so two charts in the same
message never share a toggle and the payload is never touched.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from src.formatting import FormatPolicy
from src.projection import Projection, ViewMode, project_classified, resolve_mode
from src.shape_classifier import Classification, classify
from src.stats_views import StatsView, render_view

MODE_ORDER = (ViewMode.CHART_BAR, ViewMode.CHART_PIE, ViewMode.TABLE, ViewMode.TEXT)


@dataclass(frozen=True)
class DisplayItem:
    key: str
    payload: Any
    title: Optional[str] = None
    suggested_mode: ViewMode = ViewMode.CHART_BAR
    suggested_percent: bool = False
    classification: Classification = field(default=None, compare=False)

    def __post_init__(self):
        # classified once, when the message arrives
        if self.classification is None:
            object.__setattr__(self, "classification", classify(self.payload))

    @property
    def has_percent(self) -> bool:
        return self.classification.has_percent

    @property
    def is_matrix(self) -> bool:
        return self.classification.is_matrix


@dataclass
class ViewState:
    override_mode: Optional[ViewMode] = None
    override_percent: Optional[bool] = None


class ViewStateController:
    """Holds user overrides for every DisplayItem, keyed by item key."""

    def __init__(self) -> None:
        self._states: Dict[str, ViewState] = {}

    def state(self, item: DisplayItem) -> ViewState:
        return self._states.setdefault(item.key, ViewState())

    # ─────────────────────────────────────────────────────────────
    # Effective values
    # ─────────────────────────────────────────────────────────────

    def effective_mode(self, item: DisplayItem) -> ViewMode:
        state = self._states.get(item.key)
        mode = state.override_mode if state and state.override_mode else item.suggested_mode
        return resolve_mode(mode, item.classification.shape)

    def effective_percent(self, item: DisplayItem) -> bool:
        if not item.has_percent:
            return False
        state = self._states.get(item.key)
        if state and state.override_percent is not None:
            return state.override_percent
        return bool(item.suggested_percent)

    def available_modes(self, item: DisplayItem) -> List[ViewMode]:
        """Modes offered to the user; pie is not offered for matrices."""
        if item.is_matrix:
            return [m for m in MODE_ORDER if m is not ViewMode.CHART_PIE]
        return list(MODE_ORDER)

    def can_toggle_percent(self, item: DisplayItem) -> bool:
        return item.has_percent

    # ─────────────────────────────────────────────────────────────
    # User interaction
    # ─────────────────────────────────────────────────────────────

    def set_mode(self, item: DisplayItem, mode: Any) -> ViewMode:
        self.state(item).override_mode = ViewMode.parse(mode)
        return self.effective_mode(item)

    def toggle_percent(self, item: DisplayItem) -> bool:
        if not self.can_toggle_percent(item):
            return False
        self.state(item).override_percent = not self.effective_percent(item)
        return self.effective_percent(item)

    def forget(self, key: str) -> None:
        self._states.pop(key, None)

    def clear(self) -> None:
        self._states.clear()

    # ─────────────────────────────────────────────────────────────
    # Rendering
    # ─────────────────────────────────────────────────────────────

    def projection(self, item: DisplayItem) -> Projection:
        return project_classified(
            item.classification,
            self.effective_mode(item),
            self.effective_percent(item),
        )

    def view(self, item: DisplayItem, policy: FormatPolicy, stacked: bool = False) -> StatsView:
        return render_view(self.projection(item), policy, title=item.title, stacked=stacked)
