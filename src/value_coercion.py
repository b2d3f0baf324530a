# src/value_coercion.py
"""
Scalar decoding for statistics payloads.

Backends send numbers as real numbers, numeric strings ("12") or localized
percentage strings ("66,67%"). Two fallbacks exist for values that do not
parse:
  - plotting  -> 0, so a chart always has something to draw
  - text      -> the original value, so a table never shows an invented 0
"""

from __future__ import annotations

import math
from typing import Any, Optional, Union

Number = Union[int, float]


def _is_number(v: Any) -> bool:
    return isinstance(v, (int, float)) and not isinstance(v, bool)


def parse_number(v: Any) -> Optional[Number]:
    """Return the numeric form of ``v`` or None when it has none."""
    if _is_number(v):
        return v
    if isinstance(v, str):
        cleaned = v.strip().replace("%", "").replace(",", ".", 1).strip()
        if not cleaned:
            return None
        try:
            n = float(cleaned)
        except ValueError:
            return None
        return n if math.isfinite(n) else None
    return None


def coerce(v: Any, *, textual: bool = False) -> Any:
    """
    Canonical numeric form of ``v``.

    textual=False: non-numeric input becomes 0 (plotting).
    textual=True:  non-numeric input is returned unchanged (echoing).
    """
    n = parse_number(v)
    if n is not None:
        return n
    return v if textual else 0


def to_plot_value(v: Any) -> float:
    n = coerce(v)
    if not math.isfinite(n):
        return 0.0
    return float(n)


def decode(v: Any) -> Any:
    """
    Decode a cell value for a Projection.

    Numbers stay numbers, parseable strings become numbers, other strings
    pass through. Missing and non-scalar values become None.
    """
    if v is None or isinstance(v, (dict, list, tuple, bool)):
        return None
    return coerce(v, textual=True)


def is_usable_scalar(v: Any) -> bool:
    """A number or a non-empty string."""
    if _is_number(v):
        return True
    return isinstance(v, str) and v.strip() != ""
