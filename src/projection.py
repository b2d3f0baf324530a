# src/projection.py
"""
Projection engine: payload + view mode + percent flag -> render-ready grid.

Every view (chart, table, text) is drawn from the same Projection, so the
rules below are applied in one place only:

- percent on:  rows come from "<category>_pct" keys, "total" excluded
- percent off: rows are the raw keys (no "*_pct"), "total" included
- MATRIX columns are the payload periods, in source order
- rows are unique and keep first-seen order across all periods
- a missing matrix cell is None, never 0
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from src.shape_classifier import (
    TOTAL_KEY,
    Classification,
    Shape,
    classify,
    is_pct_key,
    strip_pct_suffix,
)
from src.value_coercion import decode, to_plot_value

logger = logging.getLogger(__name__)

VALUE_COLUMN = "value"

CellKey = Tuple[str, Optional[str]]


class ViewMode(str, Enum):
    CHART_BAR = "chart-bar"
    CHART_PIE = "chart-pie"
    TABLE = "table"
    TEXT = "text"

    @property
    def is_chart(self) -> bool:
        return self in (ViewMode.CHART_BAR, ViewMode.CHART_PIE)

    @classmethod
    def parse(cls, value: Any, default: "ViewMode" = None) -> "ViewMode":
        """Lenient conversion; unknown values map to ``default`` (bar chart)."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return default or cls.CHART_BAR


@dataclass(frozen=True)
class Projection:
    shape: Shape
    mode: ViewMode
    percent: bool
    rows: Tuple[str, ...] = ()
    columns: Tuple[str, ...] = ()
    cells: Dict[CellKey, Any] = field(default_factory=dict)

    @property
    def is_empty(self) -> bool:
        return not self.rows

    @property
    def is_matrix(self) -> bool:
        return self.shape is Shape.MATRIX

    @property
    def table_columns(self) -> Tuple[str, ...]:
        """Columns for table/text views; FLAT gets one synthetic column."""
        return self.columns if self.is_matrix else (VALUE_COLUMN,)

    def cell(self, row: str, column: Optional[str] = None) -> Any:
        """Decoded value, or None for a missing cell."""
        if column == VALUE_COLUMN and not self.is_matrix:
            column = None
        return self.cells.get((row, column))

    def plot_value(self, row: str, column: Optional[str] = None) -> float:
        return to_plot_value(self.cell(row, column))

    def series(self, row: str) -> Tuple[float, ...]:
        """Plot values of one MATRIX row across all columns."""
        return tuple(self.plot_value(row, c) for c in self.columns)


# ─────────────────────────────────────────────────────────────
# Mode resolution
# ─────────────────────────────────────────────────────────────

def resolve_mode(mode: Any, shape: Shape) -> ViewMode:
    """Effective mode: pie has no single-series reading for a matrix."""
    resolved = ViewMode.parse(mode)
    if resolved is ViewMode.CHART_PIE and shape is Shape.MATRIX:
        logger.debug("Pie requested on matrix payload; using bar chart")
        return ViewMode.CHART_BAR
    return resolved


# ─────────────────────────────────────────────────────────────
# Row selection
# ─────────────────────────────────────────────────────────────

def _category_for(key: Any, percent: bool) -> Optional[str]:
    """Category a source key contributes to, or None if it is excluded."""
    if percent:
        if not is_pct_key(key):
            return None
        category = strip_pct_suffix(key)
        return None if category == TOTAL_KEY else category
    if is_pct_key(key):
        return None
    return str(key)


def _project_flat(source: Dict[str, Any], percent: bool):
    rows = []
    cells: Dict[CellKey, Any] = {}
    for key, value in source.items():
        category = _category_for(key, percent)
        if category is None or (category, None) in cells:
            continue
        rows.append(category)
        cells[(category, None)] = decode(value)
    return tuple(rows), (), cells


def _project_matrix(classification: Classification, percent: bool):
    rows = []
    seen = set()
    cells: Dict[CellKey, Any] = {}
    for period, values in zip(classification.periods, classification.source.values()):
        for key, value in values.items():
            category = _category_for(key, percent)
            if category is None:
                continue
            if category not in seen:
                seen.add(category)
                rows.append(category)
            cells[(category, period)] = decode(value)
    return tuple(rows), classification.periods, cells


def project_classified(
    classification: Classification, mode: Any, percent: bool
) -> Projection:
    """Same as ``project`` for an already classified payload."""
    percent = bool(percent)
    effective = resolve_mode(mode, classification.shape)

    if classification.shape is Shape.FLAT:
        rows, columns, cells = _project_flat(classification.source, percent)
    elif classification.shape is Shape.MATRIX:
        rows, columns, cells = _project_matrix(classification, percent)
    else:
        return Projection(shape=classification.shape, mode=effective, percent=percent)

    if not rows:
        logger.debug("Empty projection (shape=%s, percent=%s)", classification.shape.value, percent)

    return Projection(
        shape=classification.shape,
        mode=effective,
        percent=percent,
        rows=rows,
        columns=columns,
        cells=cells,
    )


def project(payload: Any, mode: Any, percent: bool) -> Projection:
    """
    Build the Projection of ``payload`` for ``mode`` and ``percent``.

    Pure: identical arguments always give equal Projections, and the payload
    is never modified.
    """
    return project_classified(classify(payload), mode, percent)
