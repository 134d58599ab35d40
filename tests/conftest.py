"""Shared test fixtures for the snapshot store and level derivations."""

import pytest

from levelwatch.engine import IndicatorEngine

SYMBOL = "VANTAGE:XAUUSD"


def make_tick(timeframe="15", indicators=None, symbol=SYMBOL, **fields) -> dict:
    """Raw tick dict as the stream delivers it."""
    tick = {"symbol": symbol, "timeframe": timeframe, "indicators": indicators or {}}
    tick.update(fields)
    return tick


@pytest.fixture
def engine():
    return IndicatorEngine()


@pytest.fixture
def pivot_hl_payload():
    """Pivot Points High Low with two points above and two below 2000."""
    return {
        "processedPivotPoints": [
            {"value": 2010.5, "count": 3, "difference": 1.2},
            {"value": "2030.0", "count": 1, "difference": 0.4},
            {"value": 1990.0, "count": 2, "difference": 0.8},
            {"value": 1975.25, "count": 5, "difference": 2.0},
        ]
    }


@pytest.fixture
def srv2_payload():
    return {
        "labels": [
            {"id": "a", "text": "Support", "y": 1990.0},
            {"id": "b", "text": "Resistance", "y": 2015.0},
            {"text": "Support", "y": 1970.0},
            {"y": 2040.0},
            {"y": 1985.0},
        ]
    }


@pytest.fixture
def pivot_std_payload():
    return {
        "labels": [
            {"text": "R2 (2050.00)"},
            {"text": "R1 (2025.50)"},
            {"text": "P (2000)"},
            {"text": "S1 (1980.25)"},
            {"text": "S2 (1960.00)"},
        ]
    }
