"""Display catalog — which indicator rows exist and which sub-keys they offer."""

from enum import Enum
from typing import Any, Iterable

from pydantic import BaseModel

from levelwatch.levels import pivot_high_low, pivot_standard, srv2
from levelwatch.levels.common import CURRENT_PRICE_KEY
from levelwatch.levels.readiness import SOURCE_INDICATOR
from levelwatch.models.levels import LevelCounts


class ViewMode(str, Enum):
    STANDARD = "standard"
    PIVOT = "pivot"


class IndicatorDefinition(BaseModel):
    key: str
    name: str
    sub_keys: list[str] = []
    dynamic_levels: bool = False  # sub-keys come from max_level_counts

    @property
    def source(self) -> str:
        return SOURCE_INDICATOR.get(self.key, self.key)


_SRV2_LEVELS = [f"Level{i}" for i in range(1, srv2.MAX_LEVELS + 1)]

INDICATOR_DEFINITIONS: list[IndicatorDefinition] = [
    IndicatorDefinition(key="EMA50", name="EMA50", sub_keys=["EMA"]),
    IndicatorDefinition(key="EMA200", name="EMA200", sub_keys=["EMA"]),
    IndicatorDefinition(key="RSI", name="RSI", sub_keys=["RSI", "RSIbased_MA"]),
    IndicatorDefinition(key="MACD", name="MACD", sub_keys=["Histogram", "MACD", "Signal"]),
    IndicatorDefinition(
        key="FibonacciBollingerBands",
        name="Fibonacci Bollinger Bands",
        sub_keys=[
            "1_2", "0764_2", "0618_2", "05", "0382", "0236",
            "Plot", "0236_2", "0382_2", "05_2", "0618", "0764", "1",
        ],
    ),
    IndicatorDefinition(
        key="VWAP",
        name="VWAP",
        sub_keys=[
            "Upper_Band_3", "Upper_Band_2", "Upper_Band_1", "VWAP",
            "Lower_Band_1", "Lower_Band_2", "Lower_Band_3",
        ],
    ),
    IndicatorDefinition(key="BollingerBands", name="Bollinger Bands", sub_keys=["Upper", "Basis", "Lower"]),
    IndicatorDefinition(key="CandlestickPatterns", name="Candlestick Patterns"),
    IndicatorDefinition(
        key="Nadaraya-Watson-LuxAlgo", name="Nada-Watson-LuxAlgo", sub_keys=["UpperBand", "LowerBand"]
    ),
    IndicatorDefinition(
        key="SRv2 Resistance", name="SRv2 Resistance", sub_keys=[*_SRV2_LEVELS, CURRENT_PRICE_KEY]
    ),
    IndicatorDefinition(key="SRv2 Support", name="SRv2 Support", sub_keys=_SRV2_LEVELS),
    IndicatorDefinition(key="Pivot Points High Low", name="Pivot Points High Low", dynamic_levels=True),
    IndicatorDefinition(
        key="Pivot Points Standard Resistance",
        name="Pivot Points Std Resistance",
        sub_keys=[*pivot_standard.SUB_LEVELS, CURRENT_PRICE_KEY],
    ),
    IndicatorDefinition(
        key="Pivot Points Standard Support",
        name="Pivot Points Std Support",
        sub_keys=list(pivot_standard.SUB_LEVELS),
    ),
    IndicatorDefinition(key="Pivot Points Std", name="Pivot Points Std", sub_keys=[pivot_standard.PIVOT_NAME]),
]

DEFINITIONS_BY_KEY = {d.key: d for d in INDICATOR_DEFINITIONS}

# Level indicators are only shown when some timeframe has labels to rank
_LABELLED_SOURCES = {srv2.INDICATOR, pivot_standard.INDICATOR}


def candidate_sub_keys(definition: IndicatorDefinition, counts: LevelCounts) -> list[str]:
    """Sub-keys to test for a definition; pivot high/low is sized by counts."""
    if not definition.dynamic_levels:
        return list(definition.sub_keys)
    return [
        *(f"Res{i}" for i in range(counts.resistance, 0, -1)),
        CURRENT_PRICE_KEY,
        *(f"Sup{i}" for i in range(1, counts.support + 1)),
    ]


def shown_in_view(definition: IndicatorDefinition, view: ViewMode) -> bool:
    is_pivot_hl = definition.key == pivot_high_low.INDICATOR
    return is_pivot_hl if view == ViewMode.PIVOT else not is_pivot_hl


def has_data(definition: IndicatorDefinition, payloads: Iterable[Any]) -> bool:
    """True if any ready timeframe carries this definition's indicator."""
    if definition.source in _LABELLED_SOURCES:
        return any(
            isinstance(p, dict) and isinstance(p.get("labels"), list) and len(p["labels"]) > 0
            for p in payloads
        )
    return any(p is not None for p in payloads)
