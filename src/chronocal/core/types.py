from __future__ import annotations
from dataclasses import dataclass, replace
from typing import Any, Optional, Tuple

YMD = Tuple[int, int, int]


@dataclass(frozen=True, order=True)
class Era:
    """
    An era of one chronology. Values are unique within a chronology and
    increase with the start date; the current era of a two-era calendar is 1.
    """
    value: int
    name: str
    abbreviation: str = ""
    since: Optional[YMD] = None  # ISO start date, only for date-bound eras

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class ChronologySpec:
    """Pure data payload for constructing a chronology."""
    id: str
    calendar_type: Optional[str]
    payload: Any  # IsoLikeParams | HijrahParams | JapaneseParams

    def tweak(self, **kwargs) -> "ChronologySpec":
        return replace(self, payload=replace(self.payload, **kwargs))
