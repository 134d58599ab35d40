from typing import Any, Literal

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from levelwatch.timeframes import normalize_timeframe
from levelwatch.validity import to_price

# Indicators upstream may also send as top-level tick fields
ALIAS_INDICATORS: tuple[str, ...] = (
    "EMA50",
    "EMA200",
    "RSI",
    "MACD",
    "FibonacciBollingerBands",
    "VWAP",
    "BollingerBands",
    "CandlestickPatterns",
    "Nadaraya-Watson-LuxAlgo",
    "SRv2",
    "Pivot Points High Low",
    "Pivot Points Standard",
)


class Tick(BaseModel):
    """One inbound update for a symbol/timeframe, as pushed by the stream."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    symbol: str = Field(min_length=1)
    timeframe: str = Field(min_length=1)
    market_price: float | None = Field(default=None, alias="marketPrice")
    volume: float | None = None
    indicators: dict[str, Any] = {}

    @field_validator("symbol", mode="before")
    @classmethod
    def _strip_symbol(cls, v: Any) -> Any:
        return v.strip() if isinstance(v, str) else v

    @field_validator("timeframe", mode="before")
    @classmethod
    def _normalize_timeframe(cls, v: Any) -> Any:
        if isinstance(v, (str, int, float)) and not isinstance(v, bool):
            return normalize_timeframe(v)
        return v

    @field_validator("market_price", "volume", mode="before")
    @classmethod
    def _unusable_is_none(cls, v: Any) -> Any:
        # Unusable price or volume is dropped; the tick itself still applies
        return to_price(v)

    @field_validator("indicators", mode="before")
    @classmethod
    def _none_is_empty(cls, v: Any) -> Any:
        return {} if v is None else v

    def merged_indicators(self) -> dict[str, Any]:
        """Nested indicators overlaid with recognised top-level aliases.

        The top-level field wins when both carry the same indicator.
        """
        merged = dict(self.indicators)
        extra = self.model_extra or {}
        for name in ALIAS_INDICATORS:
            value = extra.get(name)
            if value is not None:
                merged[name] = value
        return merged


class Snapshot(BaseModel):
    """Merged indicator state for one (symbol, timeframe).

    Published instances are never mutated; each tick produces a new one.
    """

    model_config = ConfigDict(frozen=True)

    symbol: str
    timeframe: str
    indicators: dict[str, Any] = {}

    @property
    def key(self) -> tuple[str, str]:
        return (self.symbol, self.timeframe)


class MarketQuote(BaseModel):
    model_config = ConfigDict(frozen=True)

    market_price: float = 0.0
    volume: float = 0.0


class TrackedSymbol(BaseModel):
    """An entry of the bulk symbol list (open positions with entry prices)."""

    id: str = Field(validation_alias=AliasChoices("id", "_id"))
    symbol: str
    entry_price: float = Field(validation_alias=AliasChoices("entryPrice", "entry_price"))
    side: Literal["long", "short"]

    @field_validator("id", mode="before")
    @classmethod
    def _id_to_str(cls, v: Any) -> Any:
        return str(v) if isinstance(v, int) and not isinstance(v, bool) else v
