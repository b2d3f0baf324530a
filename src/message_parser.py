# src/message_parser.py
"""
Turn the structured part of a backend answer into DisplayItems.

Accepted `content` shapes:
    None / missing                  -> no items
    a statistics payload (mapping)  -> one item, hints from `metadata`
    a list of descriptors           -> one item per descriptor

A descriptor looks like:
    {"render": "chart_pct", "chartType": "pie", "title": "...", "data": {...}}

`render` is one of chart | chart_pct | table | text; "chart_pct" means the
item opens in percent mode. Fields missing on a descriptor fall back to the
message metadata.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Dict, List, Optional, Tuple

from src.projection import ViewMode
from src.view_state import DisplayItem

logger = logging.getLogger(__name__)

RENDER_CHART = "chart"
RENDER_CHART_PCT = "chart_pct"
RENDER_TABLE = "table"
RENDER_TEXT = "text"

_RENDER_KINDS = {RENDER_CHART, RENDER_CHART_PCT, RENDER_TABLE, RENDER_TEXT}


def _norm(value: Any) -> str:
    return str(value).strip().lower() if value is not None else ""


def _truthy(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes", "on"}
    return bool(value)


def suggested_hints(
    render: Any, chart_type: Any = None, use_percent: Any = None
) -> Tuple[ViewMode, bool]:
    """Map backend hints to (suggested mode, suggested percent)."""
    kind = _norm(render)
    if kind and kind not in _RENDER_KINDS:
        logger.warning("Unknown render hint %r; using chart", render)

    if kind == RENDER_TABLE:
        mode = ViewMode.TABLE
    elif kind == RENDER_TEXT:
        mode = ViewMode.TEXT
    elif _norm(chart_type) == "pie":
        mode = ViewMode.CHART_PIE
    else:
        mode = ViewMode.CHART_BAR

    percent = kind == RENDER_CHART_PCT or _truthy(use_percent)
    return mode, percent


def _is_descriptor(entry: Any) -> bool:
    if not isinstance(entry, Mapping):
        return False
    if "render" in entry or "chartType" in entry:
        return "data" in entry or "content" in entry
    return isinstance(entry.get("data"), Mapping) or isinstance(entry.get("content"), Mapping)


def _build_item(
    key: str, payload: Any, hints: Mapping, defaults: Mapping
) -> DisplayItem:
    def pick(name: str) -> Any:
        value = hints.get(name)
        return value if value is not None else defaults.get(name)

    mode, percent = suggested_hints(pick("render"), pick("chartType"), pick("usePercent"))
    title = pick("title")
    return DisplayItem(
        key=key,
        payload=payload,
        title=str(title) if title else None,
        suggested_mode=mode,
        suggested_percent=percent,
    )


def parse_display_items(
    content: Any, metadata: Optional[Mapping] = None, message_id: Any = "msg"
) -> List[DisplayItem]:
    """
    DisplayItems for one message. Item keys are "<message_id>:<index>",
    unique within the conversation as long as message ids are.
    """
    meta: Dict[str, Any] = dict(metadata) if isinstance(metadata, Mapping) else {}

    if content is None:
        return []

    if isinstance(content, Mapping):
        if _is_descriptor(content):
            content = [content]
        else:
            return [_build_item(f"{message_id}:0", content, {}, meta)]

    if not isinstance(content, (list, tuple)):
        logger.warning("Ignoring message content of type %s", type(content).__name__)
        return []

    items = []
    for idx, entry in enumerate(content):
        if not _is_descriptor(entry):
            logger.warning("Skipping malformed content descriptor #%d", idx)
            continue
        payload = entry.get("data")
        if payload is None:
            payload = entry.get("content")
        items.append(_build_item(f"{message_id}:{idx}", payload, entry, meta))
    return items
