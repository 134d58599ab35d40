from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict


class LevelKind(str, Enum):
    SUPPORT = "Support"
    RESISTANCE = "Resistance"
    PIVOT = "Pivot"
    CURRENT_PRICE = "CurrentPrice"
    UNCLASSIFIED = "Unclassified"


class Level(BaseModel):
    """A derived price marker. Never stored, rebuilt on every read."""

    model_config = ConfigDict(frozen=True)

    key: str  # sub-key it answers to: "Res1", "Level2", "R1", "CurrentPrice", ...
    kind: LevelKind
    y: float
    text: str
    rank: int = 0  # 1 = nearest to price on its side; 0 for the price marker
    id: str = ""
    count: Any = None
    difference: Any = None
    gap_before: bool = False  # first row below price after rows at/above it


class LevelCounts(BaseModel):
    resistance: int = 0
    support: int = 0
