"""Market Price Cache — latest trade price/volume per symbol."""

import threading

from loguru import logger

from levelwatch.models.market import MarketQuote
from levelwatch.validity import is_valid


def _usable(value: float | None) -> bool:
    return bool(value) and is_valid(value)


class MarketPriceCache:
    def __init__(self):
        self._quotes: dict[str, MarketQuote] = {}
        self._lock = threading.Lock()

    def update(
        self, symbol: str, market_price: float | None = None, volume: float | None = None
    ) -> MarketQuote | None:
        """Overlay price/volume onto the cached quote.

        A missing, zero or sentinel field keeps the previous value (0 if there
        was none). Nothing is written when neither field is usable.
        """
        if not _usable(market_price) and not _usable(volume):
            return None

        with self._lock:
            prev = self._quotes.get(symbol, MarketQuote())
            quote = MarketQuote(
                market_price=float(market_price) if _usable(market_price) else prev.market_price,
                volume=float(volume) if _usable(volume) else prev.volume,
            )
            self._quotes[symbol] = quote

        if prev.market_price != quote.market_price:
            logger.debug(f"Price {symbol}: {prev.market_price} -> {quote.market_price}")
        return quote

    def get(self, symbol: str) -> MarketQuote:
        return self._quotes.get(symbol, MarketQuote())

    def price(self, symbol: str) -> float:
        return self.get(symbol).market_price

    def symbols(self) -> list[str]:
        return list(self._quotes)
