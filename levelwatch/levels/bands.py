"""Nadaraya-Watson envelope — upper/lower band from the indicator's drawn lines."""

from typing import Any

from levelwatch.levels.common import payload_list
from levelwatch.models.levels import Level, LevelKind
from levelwatch.validity import is_number, is_valid

INDICATOR = "Nadaraya-Watson-LuxAlgo"
BAND_KEYS = ("UpperBand", "LowerBand")


def envelope_bands(payload: Any) -> list[Level]:
    """Up to two bands, upper first. Lines without a usable y2 are ignored."""
    ys = sorted(
        (
            float(line["y2"])
            for line in payload_list(payload, "lines")
            if isinstance(line, dict) and is_number(line.get("y2")) and is_valid(line.get("y2"))
        ),
        reverse=True,
    )
    return [
        Level(
            key=key,
            kind=LevelKind.RESISTANCE if key == "UpperBand" else LevelKind.SUPPORT,
            y=y,
            text=f"{key} y={y:.2f}",
            rank=1,
        )
        for key, y in zip(BAND_KEYS, ys)
    ]


def envelope_band(payload: Any, sub_key: str) -> Level | None:
    return next((lv for lv in envelope_bands(payload) if lv.key == sub_key), None)
