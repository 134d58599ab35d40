"""Snapshot, price and derived-level endpoints for the display layer."""

from typing import Any

from fastapi import APIRouter, HTTPException

from levelwatch.catalog import ViewMode
from levelwatch.models.levels import Level
from levelwatch.timeframes import timeframe_label

router = APIRouter(prefix="/api", tags=["market"])


def _engine():
    from levelwatch.api.main import app_state
    return app_state["engine"]


def _cell(value: Any) -> Any:
    return value.model_dump() if isinstance(value, Level) else value


@router.post("/ticks")
async def ingest_tick(tick: dict[str, Any]):
    """Apply one tick. Malformed ticks are accepted and dropped."""
    snapshot = _engine().handle_message(tick)
    return {"applied": snapshot is not None}


@router.get("/market/{symbol}")
async def get_market_data(symbol: str):
    """Latest price/volume for a symbol (zeros if nothing received yet)."""
    quote = _engine().get_market_price(symbol)
    return {"symbol": symbol, "marketPrice": quote.market_price, "volume": quote.volume}


@router.get("/symbols/{symbol}/timeframes")
async def get_ready_timeframes(symbol: str):
    timeframes = _engine().get_ready_timeframes(symbol)
    return {
        "symbol": symbol,
        "timeframes": [{"id": tf, "label": timeframe_label(tf)} for tf in timeframes],
    }


@router.get("/symbols/{symbol}/indicators")
async def get_visible_indicators(symbol: str, view: ViewMode = ViewMode.STANDARD):
    engine = _engine()
    counts = engine.max_level_counts(symbol)
    return {
        "symbol": symbol,
        "view": view.value,
        "max_levels": counts.model_dump(),
        "indicators": engine.visible_indicators(symbol, view),
    }


@router.get("/snapshots/{symbol}/{timeframe}")
async def get_snapshot(symbol: str, timeframe: str):
    snapshot = _engine().get_snapshot(symbol, timeframe)
    if snapshot is None:
        raise HTTPException(status_code=404, detail="Snapshot not found")
    return snapshot.model_dump()


@router.get("/levels/{symbol}/{timeframe}")
async def get_levels(symbol: str, timeframe: str, indicator: str, sub_key: str | None = None):
    """Derived levels for a display key; one cell when sub_key is given."""
    engine = _engine()
    if engine.get_snapshot(symbol, timeframe) is None:
        raise HTTPException(status_code=404, detail="Snapshot not found")

    price = engine.get_market_price(symbol).market_price
    if sub_key is not None:
        return {
            "indicator": indicator,
            "sub_key": sub_key,
            "current_price": price,
            "value": _cell(engine.sub_level(symbol, timeframe, indicator, sub_key)),
        }
    return {
        "indicator": indicator,
        "current_price": price,
        "levels": [lv.model_dump() for lv in engine.levels(symbol, timeframe, indicator)],
    }


@router.get("/fields/{symbol}/{timeframe}")
async def get_fields(symbol: str, timeframe: str, indicator: str):
    """Valid fields of a plain indicator (active patterns for CandlestickPatterns)."""
    engine = _engine()
    if engine.get_snapshot(symbol, timeframe) is None:
        raise HTTPException(status_code=404, detail="Snapshot not found")
    return {"indicator": indicator, "fields": engine.indicator_fields(symbol, timeframe, indicator)}


@router.get("/watchlist")
async def get_watchlist():
    """Buy (long) and sell (short) tracked symbols."""
    return _engine().symbol_book.to_dict()
