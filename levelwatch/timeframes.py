"""Timeframe identifiers and the readiness filter that gates display columns."""

from typing import Any, Iterable

from levelwatch.validity import has_valid_value

# Fixed display order — never the arrival order
TIMEFRAME_ORDER: tuple[str, ...] = ("15", "60", "240", "1D", "1W")

TIMEFRAME_LABELS = {
    "15": "15m",
    "60": "1h",
    "240": "4h",
    "1D": "1D",
    "1W": "1W",
}


def normalize_timeframe(value: Any) -> str:
    """Canonical string id for a timeframe: 15 -> "15", " 1d " -> "1D"."""
    if isinstance(value, bool) or value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    text = str(value).strip()
    upper = text.upper()
    return upper if upper in TIMEFRAME_ORDER else text


def is_known_timeframe(timeframe: str) -> bool:
    return timeframe in TIMEFRAME_LABELS


def timeframe_label(timeframe: str) -> str:
    return TIMEFRAME_LABELS.get(timeframe, timeframe)


def sort_timeframes(timeframes: Iterable[str]) -> list[str]:
    """Known timeframes in display order; unknown ids are dropped."""
    return sorted(
        (tf for tf in set(timeframes) if is_known_timeframe(tf)),
        key=TIMEFRAME_ORDER.index,
    )


def compute_ready_timeframes(snapshots: Iterable) -> tuple[str, ...]:
    """Timeframes with at least one valid indicator value, in display order.

    Accepts the snapshots of a single symbol. Always a full recomputation so
    the result tracks the current sentinel state of every timeframe.
    """
    ready = [
        snap.timeframe
        for snap in snapshots
        if is_known_timeframe(snap.timeframe) and has_valid_value(snap.indicators)
    ]
    return tuple(sort_timeframes(ready))
