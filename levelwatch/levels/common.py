"""Helpers shared by the level derivations."""

import re
from typing import Any

from levelwatch.models.levels import Level, LevelKind

CURRENT_PRICE_KEY = "CurrentPrice"

_INDEX_SUFFIX = re.compile(r"^(\D+?)\s*(\d+)$")


def current_price_text(price: float) -> str:
    return f"Cu. Price={price:.5f}"


def current_price_marker(price: float) -> Level:
    return Level(
        key=CURRENT_PRICE_KEY,
        kind=LevelKind.CURRENT_PRICE,
        y=price,
        text=current_price_text(price),
        id="current-price",
    )


def mark_gaps(levels: list[Level], price: float) -> list[Level]:
    """Flag the first row that drops below price after a row at/above it."""
    marked = []
    for i, level in enumerate(levels):
        gap = i > 0 and level.y < price and levels[i - 1].y >= price
        if gap != level.gap_before:
            level = level.model_copy(update={"gap_before": gap})
        marked.append(level)
    return marked


def parse_indexed_key(sub_key: str, prefix: str) -> int | None:
    """'Res3' with prefix 'Res' -> 2 (zero-based). None if it doesn't match."""
    m = _INDEX_SUFFIX.match(sub_key.strip()) if isinstance(sub_key, str) else None
    if not m or m.group(1) != prefix:
        return None
    index = int(m.group(2)) - 1
    return index if index >= 0 else None


def payload_list(payload: Any, field: str) -> list:
    """payload[field] if payload is a dict holding a list there, else []."""
    if not isinstance(payload, dict):
        return []
    items = payload.get(field)
    return items if isinstance(items, list) else []
