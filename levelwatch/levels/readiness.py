"""Sub-key resolution shared by value display and row availability.

Every display key maps to exactly one lookup routine; "is this row
available" is simply "does the lookup return something on any ready
timeframe", so the two can never disagree.
"""

from typing import Any, Iterable

from levelwatch.levels import bands, fields, pivot_high_low, pivot_standard, srv2
from levelwatch.levels.pivot_standard import PivotView
from levelwatch.levels.srv2 import Side
from levelwatch.models.levels import LevelCounts

# Display key -> indicator name in the snapshot
SOURCE_INDICATOR: dict[str, str] = {
    "SRv2 Support": srv2.INDICATOR,
    "SRv2 Resistance": srv2.INDICATOR,
    "Pivot Points High Low": pivot_high_low.INDICATOR,
    "Pivot Points Standard": pivot_standard.INDICATOR,
    "Pivot Points Standard Resistance": pivot_standard.INDICATOR,
    "Pivot Points Standard Support": pivot_standard.INDICATOR,
    "Pivot Points Std": pivot_standard.INDICATOR,
    "Nadaraya-Watson-LuxAlgo": bands.INDICATOR,
}

SRV2_SIDES = {"SRv2 Support": Side.SUPPORT, "SRv2 Resistance": Side.RESISTANCE}

PIVOT_STANDARD_VIEWS = {
    "Pivot Points Standard": PivotView.COMBINED,
    "Pivot Points Standard Resistance": PivotView.RESISTANCE,
    "Pivot Points Standard Support": PivotView.SUPPORT,
    "Pivot Points Std": PivotView.PIVOT,
}


def source_indicator(display_key: str) -> str:
    return SOURCE_INDICATOR.get(display_key, display_key)


def resolve_sub_level(display_key: str, payload: Any, current_price: float, sub_key: str) -> Any:
    """Value behind one row of one display key, or None for "no data".

    Level-type indicators return a Level; plain indicators return the raw
    field value.
    """
    if payload is None or not isinstance(sub_key, str):
        return None
    if display_key in SRV2_SIDES:
        return srv2.srv2_value(payload, current_price, SRV2_SIDES[display_key], sub_key)
    if display_key in PIVOT_STANDARD_VIEWS:
        return pivot_standard.pivot_standard_value(
            payload, current_price, PIVOT_STANDARD_VIEWS[display_key], sub_key
        )
    if display_key == pivot_high_low.INDICATOR:
        return pivot_high_low.pivot_high_low_value(payload, current_price, sub_key)
    if display_key == bands.INDICATOR:
        return bands.envelope_band(payload, sub_key)
    return fields.field_value(payload, sub_key)


def has_sub_key(display_key: str, sub_key: str, payloads: Iterable[Any], current_price: float) -> bool:
    """True if any payload (one per ready timeframe) yields a value for sub_key."""
    return any(
        resolve_sub_level(display_key, payload, current_price, sub_key) is not None
        for payload in payloads
    )


def max_level_counts(payloads: Iterable[Any], current_price: float) -> LevelCounts:
    """Widest resistance/support spread of pivot high/low across timeframes."""
    res = sup = 0
    for payload in payloads:
        counts = pivot_high_low.partition_pivot_points(payload, current_price).counts()
        res = max(res, counts.resistance)
        sup = max(sup, counts.support)
    return LevelCounts(resistance=res, support=sup)
