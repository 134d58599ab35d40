"""Plain indicators — which fields of a multi-output payload are shown."""

from typing import Any

from levelwatch.validity import is_valid

RELEVANT_FIELDS: dict[str, list[str]] = {
    "EMA50": ["EMA"],
    "EMA200": ["EMA"],
    "RSI": ["RSI", "RSIbased_MA"],
    "MACD": ["Histogram", "MACD", "Signal"],
    "FibonacciBollingerBands": [
        "1_2", "0764_2", "0618_2", "05", "0382", "0236",
        "Plot", "0236_2", "0382_2", "05_2", "0618", "0764", "1",
    ],
    "VWAP": [
        "Upper_Band_3", "Upper_Band_2", "Upper_Band_1", "VWAP",
        "Lower_Band_1", "Lower_Band_2", "Lower_Band_3",
    ],
    "BollingerBands": ["Upper", "Basis", "Lower"],
}

CANDLESTICK_PATTERNS = "CandlestickPatterns"


def indicator_fields(indicator: str, payload: Any) -> dict[str, Any]:
    """Valid fields of a payload, in display order for known indicators."""
    if not isinstance(payload, dict):
        return {}
    names = RELEVANT_FIELDS.get(indicator) or list(payload)
    return {name: payload[name] for name in names if is_valid(payload.get(name))}


def field_value(payload: Any, sub_key: str) -> Any:
    """payload[sub_key] if it's a real value, else None."""
    if not isinstance(payload, dict):
        return None
    value = payload.get(sub_key)
    return value if is_valid(value) else None


def active_patterns(payload: Any) -> list[str]:
    """Candlestick patterns flagged 1 on the current bar."""
    if not isinstance(payload, dict):
        return []
    return [
        name for name, value in payload.items()
        if name != "$time" and value == 1 and not isinstance(value, bool)
    ]
