# src/shape_classifier.py
"""
Structural classification of statistics payloads.

Payloads carry no schema, so the shape is inferred once here and every view
reads the result instead of probing the payload on its own:

    FLAT          {"dev": 6, "test": 1, "total": 7, "dev_pct": "85,71%"}
    MATRIX        {"04-2025": {"dev": 1, "total": 1}, "05-2025": {...}}
    UNRECOGNIZED  anything else, including empty and mixed payloads

A payload may also arrive wrapped once under a container key
("dataTable", "globalDistribution").
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from src.value_coercion import is_usable_scalar

logger = logging.getLogger(__name__)

PCT_SUFFIX = "_pct"
TOTAL_KEY = "total"
TOTAL_PCT_KEY = TOTAL_KEY + PCT_SUFFIX
CONTAINER_KEYS = ("dataTable", "globalDistribution")


class Shape(str, Enum):
    FLAT = "flat"
    MATRIX = "matrix"
    UNRECOGNIZED = "unrecognized"


@dataclass(frozen=True)
class Classification:
    shape: Shape
    has_percent: bool = False
    has_total: bool = False
    periods: Tuple[str, ...] = ()
    source: Dict[str, Any] = field(default_factory=dict)

    @property
    def is_matrix(self) -> bool:
        return self.shape is Shape.MATRIX

    @property
    def is_flat(self) -> bool:
        return self.shape is Shape.FLAT

    @property
    def is_recognized(self) -> bool:
        return self.shape is not Shape.UNRECOGNIZED


UNRECOGNIZED = Classification(Shape.UNRECOGNIZED)


# ─────────────────────────────────────────────────────────────
# Key helpers
# ─────────────────────────────────────────────────────────────

def is_pct_key(key: Any) -> bool:
    return isinstance(key, str) and key.endswith(PCT_SUFFIX) and len(key) > len(PCT_SUFFIX)


def strip_pct_suffix(key: str) -> str:
    return key[: -len(PCT_SUFFIX)] if is_pct_key(key) else key


def _is_percent_companion(key: Any) -> bool:
    return is_pct_key(key) and key != TOTAL_PCT_KEY


def _is_usable_key(key: Any) -> bool:
    # total_pct is never displayable, in either mode
    return key != TOTAL_PCT_KEY


def unwrap(payload: Mapping) -> Mapping:
    """Strip one container level when a container key holds a mapping."""
    for key in CONTAINER_KEYS:
        inner = payload.get(key)
        if isinstance(inner, Mapping):
            return inner
    return payload


# ─────────────────────────────────────────────────────────────
# Classification
# ─────────────────────────────────────────────────────────────

def _classify_matrix(source: Mapping) -> Optional[Classification]:
    if not all(isinstance(v, Mapping) for v in source.values()):
        return None

    usable = any(_is_usable_key(k) for row in source.values() for k in row)
    if not usable:
        logger.debug("Matrix payload has no usable category keys")
        return UNRECOGNIZED

    return Classification(
        shape=Shape.MATRIX,
        has_percent=any(_is_percent_companion(k) for row in source.values() for k in row),
        has_total=any(TOTAL_KEY in row for row in source.values()),
        periods=tuple(str(k) for k in source),
        source=dict(source),
    )


def _classify_flat(source: Mapping) -> Optional[Classification]:
    if any(isinstance(v, (Mapping, list, tuple)) for v in source.values()):
        return None

    usable = any(_is_usable_key(k) and is_usable_scalar(v) for k, v in source.items())
    if not usable:
        logger.debug("Flat payload has no usable scalar entries")
        return UNRECOGNIZED

    return Classification(
        shape=Shape.FLAT,
        has_percent=any(_is_percent_companion(k) for k in source),
        has_total=TOTAL_KEY in source,
        source=dict(source),
    )


def classify(payload: Any) -> Classification:
    """
    Classify ``payload`` as FLAT, MATRIX or UNRECOGNIZED.

    Total function: any input, including None and non-mappings, yields a
    Classification.
    """
    if not isinstance(payload, Mapping):
        return UNRECOGNIZED

    source = unwrap(payload)
    if not source:
        return UNRECOGNIZED

    result = _classify_matrix(source)
    if result is None:
        result = _classify_flat(source)
    if result is None:
        logger.debug("Mixed scalar/object payload left unrecognized: keys=%s", list(source)[:10])
        return UNRECOGNIZED
    return result
