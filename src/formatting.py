# src/formatting.py
"""
Number formatting policy shared by the table and text views.

The policy is passed explicitly to every renderer instead of reading the
process locale, so the same payload always renders the same way.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any

from src.value_coercion import parse_number


@dataclass(frozen=True)
class FormatPolicy:
    decimal_separator: str = ","
    group_separator: str = "\u202f"
    max_fraction_digits: int = 2
    percent_suffix: str = "%"
    empty_message: str = "Aucune donnée à afficher"

    @classmethod
    def from_config(cls, config) -> "FormatPolicy":
        return cls(
            decimal_separator=config.NUMBER_DECIMAL_SEPARATOR,
            group_separator=config.NUMBER_GROUP_SEPARATOR,
            max_fraction_digits=config.NUMBER_MAX_FRACTION_DIGITS,
            percent_suffix=config.PERCENT_SUFFIX,
            empty_message=config.EMPTY_MESSAGE,
        )

    # ─────────────────────────────────────────────────────────────
    # Numbers
    # ─────────────────────────────────────────────────────────────

    def format_number(self, n: float) -> str:
        """Group thousands and keep at most ``max_fraction_digits`` decimals."""
        if not math.isfinite(n):
            return ""
        digits = max(0, self.max_fraction_digits)
        text = f"{abs(n):,.{digits}f}"
        if digits:
            text = text.rstrip("0").rstrip(".")
        int_part, _, frac = text.partition(".")
        out = int_part.replace(",", self.group_separator)
        if frac:
            out = f"{out}{self.decimal_separator}{frac}"
        if n < 0 and any(ch not in "0,." for ch in text):
            out = f"-{out}"
        return out

    def format_percent(self, n: float) -> str:
        body = self.format_number(n)
        return f"{body}{self.percent_suffix}" if body else ""

    # ─────────────────────────────────────────────────────────────
    # Cells
    # ─────────────────────────────────────────────────────────────

    def format_cell(self, value: Any, percent: bool) -> str:
        """
        Text for a decoded Projection cell.

        Missing cells are blank. Values that are not numeric are echoed as
        they came, never replaced with 0.
        """
        if value is None:
            return ""
        n = parse_number(value)
        if n is None:
            return str(value)
        return self.format_percent(n) if percent else self.format_number(n)
