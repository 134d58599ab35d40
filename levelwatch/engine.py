"""Indicator Engine — ingestion boundary and query surface for the display layer.

Owns the snapshot store, the price cache and the symbol book. Derived levels
are never cached: every query re-runs the pure derivations against the
current snapshot and price.
"""

from typing import Any

from loguru import logger
from pydantic import ValidationError

from levelwatch.catalog import (
    DEFINITIONS_BY_KEY,
    INDICATOR_DEFINITIONS,
    IndicatorDefinition,
    ViewMode,
    candidate_sub_keys,
    has_data,
    shown_in_view,
)
from levelwatch.levels import bands, fields, pivot_high_low, pivot_standard, srv2
from levelwatch.levels.readiness import (
    PIVOT_STANDARD_VIEWS,
    SRV2_SIDES,
    has_sub_key,
    max_level_counts,
    resolve_sub_level,
    source_indicator,
)
from levelwatch.models.levels import Level, LevelCounts
from levelwatch.models.market import MarketQuote, Snapshot, Tick
from levelwatch.price_cache import MarketPriceCache
from levelwatch.snapshot_store import SnapshotStore
from levelwatch.symbols import SymbolBook


class IndicatorEngine:
    def __init__(
        self,
        store: SnapshotStore | None = None,
        symbol_book: SymbolBook | None = None,
    ):
        self.store = store or SnapshotStore()
        self.prices: MarketPriceCache = self.store.price_cache
        self.symbol_book = symbol_book or SymbolBook()

    # --- Ingestion ---

    def handle_message(self, data: Any) -> Snapshot | None:
        """Route one pushed message: a symbol list or an indicator tick."""
        if isinstance(data, dict) and isinstance(data.get("symbols"), list):
            self.symbol_book.apply_live_list(data["symbols"])
            return None
        return self.ingest(data)

    def ingest(self, raw: Any) -> Snapshot | None:
        """Validate and apply a raw tick. Malformed ticks are dropped, never raised."""
        if isinstance(raw, Tick):
            tick = raw
        else:
            try:
                tick = Tick.model_validate(raw)
            except ValidationError as e:
                logger.debug(f"Dropping malformed tick: {e.error_count()} errors")
                return None
        return self.store.apply_tick(tick)

    # --- Queries ---

    def get_snapshot(self, symbol: str, timeframe: str) -> Snapshot | None:
        return self.store.get(symbol, timeframe)

    def get_ready_timeframes(self, symbol: str) -> list[str]:
        return list(self.store.ready_timeframes(symbol))

    def get_market_price(self, symbol: str) -> MarketQuote:
        return self.prices.get(symbol)

    def _payload(self, symbol: str, timeframe: str, display_key: str) -> Any:
        snap = self.store.get(symbol, timeframe)
        if snap is None:
            return None
        return snap.indicators.get(source_indicator(display_key))

    def ready_payloads(self, symbol: str, display_key: str) -> list[Any]:
        """The indicator payload on each ready timeframe (None where absent)."""
        snaps = self.store.snapshots_for(symbol)
        source = source_indicator(display_key)
        return [
            snaps[tf].indicators.get(source)
            for tf in self.store.ready_timeframes(symbol)
            if tf in snaps
        ]

    def max_level_counts(self, symbol: str) -> LevelCounts:
        return max_level_counts(
            self.ready_payloads(symbol, pivot_high_low.INDICATOR),
            self.prices.price(symbol),
        )

    def sub_level(self, symbol: str, timeframe: str, display_key: str, sub_key: str) -> Any:
        """One cell: the value behind display_key/sub_key on one timeframe."""
        return resolve_sub_level(
            display_key,
            self._payload(symbol, timeframe, display_key),
            self.prices.price(symbol),
            sub_key,
        )

    def levels(self, symbol: str, timeframe: str, display_key: str) -> list[Level]:
        """Full ranked level list for a level-type display key."""
        payload = self._payload(symbol, timeframe, display_key)
        price = self.prices.price(symbol)
        if display_key in SRV2_SIDES:
            return srv2.srv2_levels(payload, price, SRV2_SIDES[display_key])
        view = PIVOT_STANDARD_VIEWS.get(display_key)
        if view == pivot_standard.PivotView.COMBINED:
            return pivot_standard.pivot_standard_levels(payload, price)
        if view is not None:
            return pivot_standard.pivot_standard_pool(payload, price, view)
        if display_key == pivot_high_low.INDICATOR:
            return pivot_high_low.pivot_high_low_levels(payload, price)
        if display_key == bands.INDICATOR:
            return bands.envelope_bands(payload)
        return []

    def indicator_fields(self, symbol: str, timeframe: str, display_key: str) -> dict[str, Any] | list[str]:
        """Valid fields of a plain indicator (active names for candlestick patterns)."""
        payload = self._payload(symbol, timeframe, display_key)
        if display_key == fields.CANDLESTICK_PATTERNS:
            return fields.active_patterns(payload)
        return fields.indicator_fields(display_key, payload)

    def available_sub_keys(self, symbol: str, display_key: str) -> list[str]:
        """Sub-keys with data on at least one ready timeframe, in display order."""
        definition = DEFINITIONS_BY_KEY.get(display_key) or IndicatorDefinition(key=display_key, name=display_key)
        payloads = self.ready_payloads(symbol, display_key)
        price = self.prices.price(symbol)
        counts = self.max_level_counts(symbol) if definition.dynamic_levels else LevelCounts()
        return [
            sub_key
            for sub_key in candidate_sub_keys(definition, counts)
            if has_sub_key(display_key, sub_key, payloads, price)
        ]

    def visible_indicators(self, symbol: str, view: ViewMode = ViewMode.STANDARD) -> list[dict]:
        """Indicator rows the display may render for a symbol, with their sub-keys."""
        rows = []
        for definition in INDICATOR_DEFINITIONS:
            if not shown_in_view(definition, view):
                continue
            if not has_data(definition, self.ready_payloads(symbol, definition.key)):
                continue
            rows.append({
                "key": definition.key,
                "name": definition.name,
                "sub_keys": self.available_sub_keys(symbol, definition.key),
            })
        return rows
