"""Tracked symbol lists (buy = long, sell = short) from the bulk fetch."""

from typing import Any

import httpx
from loguru import logger
from pydantic import ValidationError

from levelwatch.config import settings
from levelwatch.models.market import TrackedSymbol


class SymbolBook:
    def __init__(self):
        self.buy: list[TrackedSymbol] = []
        self.sell: list[TrackedSymbol] = []

    def reset(self):
        self.buy = []
        self.sell = []

    def apply_live_list(self, symbols: Any):
        """Replace both lists from a raw symbol sequence; bad entries are skipped."""
        if not isinstance(symbols, list):
            self.reset()
            return
        parsed: list[TrackedSymbol] = []
        for item in symbols:
            try:
                parsed.append(TrackedSymbol.model_validate(item))
            except ValidationError as e:
                logger.debug(f"Skipping malformed symbol entry {item!r}: {e.error_count()} errors")
        self.buy = [s for s in parsed if s.side == "long"]
        self.sell = [s for s in parsed if s.side == "short"]

    def apply_response(self, payload: Any):
        """Apply a {"success": bool, "symbols": [...]} response.

        Anything other than a successful response with a symbol list empties
        both lists rather than keeping stale entries.
        """
        if (
            not isinstance(payload, dict)
            or not payload.get("success")
            or not isinstance(payload.get("symbols"), list)
        ):
            logger.warning("Symbol list response unsuccessful or malformed; clearing lists")
            self.reset()
            return
        self.apply_live_list(payload["symbols"])
        logger.info(f"Symbol lists updated: {len(self.buy)} buy, {len(self.sell)} sell")

    def to_dict(self) -> dict:
        return {
            "buy": [s.model_dump() for s in self.buy],
            "sell": [s.model_dump() for s in self.sell],
        }


async def fetch_symbols(
    book: SymbolBook, url: str | None = None, client: httpx.AsyncClient | None = None
) -> SymbolBook:
    """GET the symbol list and apply it. Transport errors clear the lists."""
    url = url or settings.symbols_url
    if not url:
        return book

    try:
        if client is None:
            async with httpx.AsyncClient(timeout=settings.fetch_timeout_s) as own_client:
                resp = await own_client.get(url)
        else:
            resp = await client.get(url)
        resp.raise_for_status()
        payload = resp.json()
    except (httpx.HTTPError, ValueError) as e:
        logger.warning(f"Symbol fetch failed ({url}): {e}")
        book.reset()
        return book

    book.apply_response(payload)
    return book
