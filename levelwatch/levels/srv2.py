"""SRv2 support/resistance — rank labelled levels around the current price.

Input payload: {"labels": [{"id"?, "text"?, "y": float}, ...]}.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from levelwatch.levels.common import (
    CURRENT_PRICE_KEY,
    current_price_marker,
    mark_gaps,
    parse_indexed_key,
    payload_list,
)
from levelwatch.models.levels import Level, LevelKind
from levelwatch.validity import is_number, is_valid

INDICATOR = "SRv2"
MAX_LEVELS = 5


class Side(str, Enum):
    SUPPORT = "support"
    RESISTANCE = "resistance"


@dataclass
class SRPartition:
    price: float
    support: list[Level] = field(default_factory=list)     # descending y, nearest below first
    resistance: list[Level] = field(default_factory=list)  # ascending y, nearest above first

    def side(self, side: Side) -> list[Level]:
        return self.support if side == Side.SUPPORT else self.resistance

    @property
    def shows_current_price(self) -> bool:
        """Price row sits between nearest support and nearest resistance."""
        if self.price <= 0 or not (self.support or self.resistance):
            return False
        max_support = max((lv.y for lv in self.support), default=float("-inf"))
        min_resistance = min((lv.y for lv in self.resistance), default=float("inf"))
        return max_support < self.price <= min_resistance


def _is_support_label(text: Any, y: float, price: float) -> bool:
    if isinstance(text, str) and text and "support" in text.lower():
        return True
    return y <= price


def partition_srv2(payload: Any, current_price: float) -> SRPartition:
    """Classify and rank SRv2 labels; shared by value lookup and availability."""
    price = current_price or 0.0
    part = SRPartition(price=price)
    support: list[tuple[float, int, dict]] = []
    resistance: list[tuple[float, int, dict]] = []

    for i, label in enumerate(payload_list(payload, "labels")):
        if not isinstance(label, dict):
            continue
        y = label.get("y")
        if not is_number(y) or not is_valid(y):
            continue
        y = float(y)
        if _is_support_label(label.get("text"), y, price):
            if y <= price:
                support.append((y, i, label))
        elif y > price:
            resistance.append((y, i, label))

    support.sort(key=lambda item: -item[0])
    resistance.sort(key=lambda item: item[0])

    for kind, bucket, target in (
        (LevelKind.SUPPORT, support, part.support),
        (LevelKind.RESISTANCE, resistance, part.resistance),
    ):
        for rank, (y, i, label) in enumerate(bucket, start=1):
            text = label.get("text") or ("Support" if y <= price else "Resistance")
            target.append(
                Level(
                    key=f"Level{rank}",
                    kind=kind,
                    y=y,
                    text=str(text),
                    rank=rank,
                    # positional fallback keeps ids reproducible across calls
                    id=str(label.get("id") or f"label-{i}"),
                )
            )
    return part


def srv2_levels(payload: Any, current_price: float, side: Side) -> list[Level]:
    """Display rows for one side, highest first.

    The resistance side gets the current-price row when price sits between
    the two sides; the support side never does.
    """
    part = partition_srv2(payload, current_price)
    rows = list(part.side(side))
    if side == Side.RESISTANCE and part.shows_current_price:
        rows.append(current_price_marker(part.price))
    rows.sort(key=lambda lv: -lv.y)
    return mark_gaps(rows, part.price)


def lookup_srv2(part: SRPartition, side: Side, sub_key: str) -> Level | None:
    if sub_key == CURRENT_PRICE_KEY:
        if side == Side.RESISTANCE and part.shows_current_price:
            return current_price_marker(part.price)
        return None
    index = parse_indexed_key(sub_key, "Level")
    levels = part.side(side)
    if index is None or index >= len(levels):
        return None
    return levels[index]


def srv2_value(payload: Any, current_price: float, side: Side, sub_key: str) -> Level | None:
    """Resolve Level1..Level5 / CurrentPrice on one side to its level."""
    return lookup_srv2(partition_srv2(payload, current_price), side, sub_key)
