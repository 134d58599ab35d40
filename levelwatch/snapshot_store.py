"""Snapshot Store — merged indicator state per symbol/timeframe."""

import copy
import threading

from loguru import logger

from levelwatch.models.market import Snapshot, Tick
from levelwatch.price_cache import MarketPriceCache
from levelwatch.timeframes import compute_ready_timeframes


class SnapshotStore:
    def __init__(self, price_cache: MarketPriceCache | None = None):
        self.price_cache = price_cache or MarketPriceCache()

        # Published snapshots: {symbol: {timeframe: Snapshot}}
        self._snapshots: dict[str, dict[str, Snapshot]] = {}

        # Ready timeframes per symbol, in display order
        self._ready: dict[str, tuple[str, ...]] = {}

        # Serialises writers; readers only ever see whole published snapshots
        self._lock = threading.Lock()

    def apply_tick(self, tick: Tick) -> Snapshot:
        """Overlay a tick onto its snapshot and publish the result.

        Indicators named in the tick replace the stored ones wholesale; the
        rest are kept. The previous Snapshot object is left untouched.
        """
        incoming = copy.deepcopy(tick.merged_indicators())

        with self._lock:
            by_tf = self._snapshots.get(tick.symbol, {})
            prev = by_tf.get(tick.timeframe)
            indicators = {**prev.indicators, **incoming} if prev else incoming
            snapshot = Snapshot(symbol=tick.symbol, timeframe=tick.timeframe, indicators=indicators)
            # Swap in a new per-symbol dict so readers never see it mid-update
            by_tf = {**by_tf, tick.timeframe: snapshot}
            self._snapshots[tick.symbol] = by_tf

            ready = compute_ready_timeframes(by_tf.values())
            if ready != self._ready.get(tick.symbol):
                logger.debug(f"Ready timeframes {tick.symbol}: {list(ready)}")
            self._ready[tick.symbol] = ready

        if tick.market_price is not None or tick.volume is not None:
            self.price_cache.update(tick.symbol, tick.market_price, tick.volume)

        if prev is None:
            logger.info(f"New snapshot {tick.symbol}/{tick.timeframe} ({len(indicators)} indicators)")
        return snapshot

    def get(self, symbol: str, timeframe: str) -> Snapshot | None:
        return self._snapshots.get(symbol, {}).get(timeframe)

    def snapshots_for(self, symbol: str) -> dict[str, Snapshot]:
        """All snapshots of a symbol keyed by timeframe (a copy)."""
        return dict(self._snapshots.get(symbol, {}))

    def ready_timeframes(self, symbol: str) -> tuple[str, ...]:
        return self._ready.get(symbol, ())

    def symbols(self) -> list[str]:
        return list(self._snapshots)
