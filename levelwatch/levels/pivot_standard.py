"""Pivot Points Standard — parse "R1 (1234.56)" labels and classify vs price.

Input payload: {"labels": [{"text": "R1 (1234.56)"}, ...]}.

Views restrict the label pool *before* the name lookup, so a label whose
classification doesn't match the view answers "no data" even when its name
matches the sub-key.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Any

from levelwatch.levels.common import (
    CURRENT_PRICE_KEY,
    current_price_marker,
    mark_gaps,
    payload_list,
)
from levelwatch.models.levels import Level, LevelKind
from levelwatch.validity import is_valid

INDICATOR = "Pivot Points Standard"
PIVOT_NAME = "P"
SUB_LEVELS = ("R5", "R4", "R3", "R2", "R1", "P", "S1", "S2", "S3", "S4", "S5")

_LEVEL_RE = re.compile(r"\((\d+\.?\d*)\)")


class PivotView(str, Enum):
    COMBINED = "combined"
    RESISTANCE = "resistance"
    SUPPORT = "support"
    PIVOT = "pivot"


@dataclass(frozen=True)
class PivotLabel:
    name: str
    y: float
    text: str
    index: int


def parse_pivot_label(text: Any) -> tuple[str, float] | None:
    """'R1 (1850.25)' -> ('R1', 1850.25); None when there's no parenthesised number."""
    if not isinstance(text, str):
        return None
    m = _LEVEL_RE.search(text)
    if not m:
        return None
    name = text[: text.find("(")].strip()
    return name, float(m.group(1))


def classify(y: float, price: float) -> LevelKind:
    if y > price:
        return LevelKind.RESISTANCE
    if y < price:
        return LevelKind.SUPPORT
    return LevelKind.PIVOT


def parse_pivot_labels(payload: Any) -> list[PivotLabel]:
    parsed = []
    for i, label in enumerate(payload_list(payload, "labels")):
        text = label.get("text") if isinstance(label, dict) else None
        result = parse_pivot_label(text)
        if result is None:
            continue
        name, y = result
        if not is_valid(y):
            continue
        parsed.append(PivotLabel(name=name, y=y, text=text, index=i))
    return parsed


def in_view(label: PivotLabel, price: float, view: PivotView) -> bool:
    if view == PivotView.RESISTANCE:
        return label.y > price
    if view == PivotView.SUPPORT:
        return label.y <= price
    if view == PivotView.PIVOT:
        return label.name == PIVOT_NAME
    return True


def _to_level(label: PivotLabel, price: float) -> Level:
    return Level(
        key=label.name,
        kind=classify(label.y, price),
        y=label.y,
        text=label.text,
        id=f"pivot-std-{label.index}",
    )


def pivot_standard_levels(payload: Any, current_price: float) -> list[Level]:
    """Combined view: every parsed level plus the price row, highest first."""
    price = current_price or 0.0
    rows = [_to_level(label, price) for label in parse_pivot_labels(payload)]
    if price > 0:
        rows.append(current_price_marker(price))
    rows.sort(key=lambda lv: -lv.y)
    return mark_gaps(rows, price)


def pivot_standard_pool(payload: Any, current_price: float, view: PivotView) -> list[Level]:
    """Levels of one view in label order."""
    price = current_price or 0.0
    return [
        _to_level(label, price)
        for label in parse_pivot_labels(payload)
        if in_view(label, price, view)
    ]


def lookup_pivot_standard(pool: list[Level], price: float, view: PivotView, sub_key: str) -> Level | None:
    name = sub_key.strip() if isinstance(sub_key, str) else ""
    if name == CURRENT_PRICE_KEY:
        if price > 0 and view in (PivotView.COMBINED, PivotView.RESISTANCE):
            return current_price_marker(price)
        return None
    return next((lv for lv in pool if lv.key == name), None)


def pivot_standard_value(
    payload: Any, current_price: float, view: PivotView, sub_key: str
) -> Level | None:
    """Resolve R1..R5 / P / S1..S5 / CurrentPrice within a view."""
    price = current_price or 0.0
    return lookup_pivot_standard(pivot_standard_pool(payload, price, view), price, view, sub_key)
