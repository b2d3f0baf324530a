# src/stats_views.py
"""
Table, text and chart views of a Projection.

Renderers are pure: (projection, policy) -> StatsView. They format values
but never decide which rows or columns exist; that is the projection's job.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Optional, Tuple

import pandas as pd

from src.formatting import FormatPolicy
from src.projection import Projection, ViewMode
from src.visualizations import create_stats_chart

CATEGORY_HEADER = "Catégorie"
VALUE_HEADER = "Valeur"
TEXT_SEPARATOR = " · "


@dataclass(frozen=True)
class StatsView:
    """Display structure handed to the presentation layer."""

    mode: ViewMode
    figure: Any = None
    frame: Optional[pd.DataFrame] = None
    lines: Tuple[str, ...] = ()
    empty_message: Optional[str] = None

    @property
    def is_empty(self) -> bool:
        return self.empty_message is not None

    @property
    def text(self) -> str:
        return "\n".join(self.lines)


def _empty(projection: Projection, policy: FormatPolicy) -> StatsView:
    return StatsView(mode=projection.mode, empty_message=policy.empty_message)


def render_table(projection: Projection, policy: FormatPolicy) -> StatsView:
    """Grid indexed by row label with one column per period (or 'Valeur')."""
    if projection.is_empty:
        return _empty(projection, policy)

    # Row labels in the index; period headers never collide with them
    headers = list(projection.columns) if projection.is_matrix else [VALUE_HEADER]
    records: List[List[str]] = [
        [
            policy.format_cell(projection.cell(row, col), projection.percent)
            for col in projection.table_columns
        ]
        for row in projection.rows
    ]

    frame = pd.DataFrame(
        records,
        columns=headers,
        index=pd.Index(list(projection.rows), name=CATEGORY_HEADER),
    )
    return StatsView(mode=projection.mode, frame=frame)


def render_text(projection: Projection, policy: FormatPolicy) -> StatsView:
    """
    One line per row:

        FLAT    dev: 6
        MATRIX  dev: 04-2025=1 · 05-2025=2
    """
    if projection.is_empty:
        return _empty(projection, policy)

    lines = []
    for row in projection.rows:
        if projection.is_matrix:
            parts = [
                f"{col}={policy.format_cell(projection.cell(row, col), projection.percent)}"
                for col in projection.columns
            ]
            lines.append(f"{row}: {TEXT_SEPARATOR.join(parts)}")
        else:
            lines.append(f"{row}: {policy.format_cell(projection.cell(row), projection.percent)}")

    return StatsView(mode=projection.mode, lines=tuple(lines))


def render_chart(
    projection: Projection,
    policy: FormatPolicy,
    title: Optional[str] = None,
    stacked: bool = False,
) -> StatsView:
    fig = create_stats_chart(projection, policy, title=title, stacked=stacked)
    if fig is None:
        return _empty(projection, policy)
    return StatsView(mode=projection.mode, figure=fig)


def render_view(
    projection: Projection,
    policy: FormatPolicy,
    title: Optional[str] = None,
    stacked: bool = False,
) -> StatsView:
    """Dispatch on the projection's effective mode."""
    if projection.mode is ViewMode.TABLE:
        return render_table(projection, policy)
    if projection.mode is ViewMode.TEXT:
        return render_text(projection, policy)
    return render_chart(projection, policy, title=title, stacked=stacked)
