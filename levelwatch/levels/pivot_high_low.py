"""Pivot Points High/Low — bucket processed pivots around the current price.

Input payload: {"processedPivotPoints": [{"value", "count", "difference"}, ...]}.
Values may arrive as numbers or numeric strings.

Numbering runs outward from price on both sides:
  Res1 = smallest value >= price, ResN = farthest above
  Sup1 = largest value < price,  SupM = farthest below
Display order is ResN..Res1, CurrentPrice, Sup1..SupM.
"""

from dataclasses import dataclass, field
from typing import Any

from levelwatch.levels.common import (
    CURRENT_PRICE_KEY,
    current_price_marker,
    mark_gaps,
    parse_indexed_key,
    payload_list,
)
from levelwatch.models.levels import Level, LevelCounts, LevelKind
from levelwatch.validity import to_price

INDICATOR = "Pivot Points High Low"


@dataclass
class PivotPartition:
    price: float
    resistance: list[Level] = field(default_factory=list)  # nearest first
    support: list[Level] = field(default_factory=list)     # nearest first
    unclassified: list[Level] = field(default_factory=list)

    @property
    def classified(self) -> bool:
        return self.price > 0

    def counts(self) -> LevelCounts:
        return LevelCounts(resistance=len(self.resistance), support=len(self.support))


def _point_text(raw: Any, point: dict) -> str:
    return f"{raw} (Count: {point.get('count')}, Diff: {point.get('difference')})"


def _to_level(key: str, kind: LevelKind, rank: int, index: int, value: float, point: dict) -> Level:
    return Level(
        key=key,
        kind=kind,
        y=value,
        text=_point_text(point.get("value"), point),
        rank=rank,
        id=str(point.get("id") or f"pivot-{index}"),
        count=point.get("count"),
        difference=point.get("difference"),
    )


def _read_points(payload: Any) -> list[tuple[int, float, dict]]:
    points = []
    for i, point in enumerate(payload_list(payload, "processedPivotPoints")):
        if not isinstance(point, dict):
            continue
        value = to_price(point.get("value"))
        if value is None:
            continue
        points.append((i, value, point))
    return points


def partition_pivot_points(payload: Any, current_price: float) -> PivotPartition:
    """Split pivots into resistance (>= price) and support (< price).

    With no usable price (0 or missing) nothing is classified and every point
    is returned in input order as Point1..N.
    """
    price = current_price or 0.0
    part = PivotPartition(price=price)
    points = _read_points(payload)

    if not part.classified:
        for rank, (i, value, point) in enumerate(points, start=1):
            part.unclassified.append(_to_level(f"Point{rank}", LevelKind.UNCLASSIFIED, rank, i, value, point))
        return part

    # Stable sort keeps input order between equal values
    above = sorted((p for p in points if p[1] >= price), key=lambda p: p[1])
    below = sorted((p for p in points if p[1] < price), key=lambda p: -p[1])

    for prefix, kind, bucket, target in (
        ("Res", LevelKind.RESISTANCE, above, part.resistance),
        ("Sup", LevelKind.SUPPORT, below, part.support),
    ):
        for rank, (i, value, point) in enumerate(bucket, start=1):
            target.append(_to_level(f"{prefix}{rank}", kind, rank, i, value, point))
    return part


def pivot_high_low_levels(payload: Any, current_price: float) -> list[Level]:
    """All pivots in display order, farthest resistance first."""
    part = partition_pivot_points(payload, current_price)
    if not part.classified:
        return part.unclassified
    rows = [*reversed(part.resistance), current_price_marker(part.price), *part.support]
    return mark_gaps(rows, part.price)


def lookup_pivot_high_low(part: PivotPartition, sub_key: str) -> Level | None:
    if sub_key == CURRENT_PRICE_KEY:
        return current_price_marker(part.price) if part.classified else None
    if not part.classified:
        index = parse_indexed_key(sub_key, "Point")
        return part.unclassified[index] if index is not None and index < len(part.unclassified) else None
    for prefix, bucket in (("Res", part.resistance), ("Sup", part.support)):
        index = parse_indexed_key(sub_key, prefix)
        if index is not None:
            return bucket[index] if index < len(bucket) else None
    return None


def pivot_high_low_value(payload: Any, current_price: float, sub_key: str) -> Level | None:
    """Resolve a sub-key (Res1.., Sup1.., CurrentPrice) to its level."""
    return lookup_pivot_high_low(partition_pivot_points(payload, current_price), sub_key)
