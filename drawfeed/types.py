from __future__ import annotations

import datetime as dt
from collections import Counter
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Mapping, NamedTuple, Optional, Tuple, Union


class GameType(str, Enum):
    XSMB = "xsmb"
    MEGA_645 = "mega645"
    POWER_655 = "power655"
    KENO = "keno"
    BINGO_18 = "bingo18"

    @property
    def is_structured(self) -> bool:
        return self is GameType.POWER_655

    @property
    def preserves_order(self) -> bool:
        # Prize-tier order carries meaning for the digit lottery.
        return self is GameType.XSMB

    @property
    def digit_width(self) -> Optional[int]:
        return 2 if self is GameType.XSMB else None

    @classmethod
    def parse(cls, value: Union[str, "GameType"]) -> "GameType":
        if isinstance(value, GameType):
            return value
        return cls(str(value).strip().lower())


class RawDrawTuple(NamedTuple):
    date_text: str
    numbers: Tuple[int, ...]


@dataclass(frozen=True)
class StructuredNumbers:
    main: Tuple[int, ...]
    special: int

    def to_dict(self) -> Dict[str, Any]:
        return {"main": list(self.main), "special": self.special}


NumberPayload = Union[Tuple[int, ...], StructuredNumbers]


@dataclass(frozen=True)
class DrawRecord:
    """Canonical draw: a calendar date and its winning numbers."""

    date: dt.date
    numbers: NumberPayload

    def to_dict(self) -> Dict[str, Any]:
        if isinstance(self.numbers, StructuredNumbers):
            numbers: Any = self.numbers.to_dict()
        else:
            numbers = list(self.numbers)
        return {"date": self.date.isoformat(), "numbers": numbers}


@dataclass(frozen=True)
class ResultSet:
    game_type: GameType
    records: Tuple[DrawRecord, ...]
    skipped: Mapping[str, int] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self):
        return iter(self.records)

    @property
    def skipped_total(self) -> int:
        return sum(self.skipped.values())

    def to_list(self) -> List[Dict[str, Any]]:
        return [record.to_dict() for record in self.records]


class SkipCounter(Counter):
    """Per-reason tally of records dropped while parsing one payload."""

    def record(self, reason: str) -> None:
        self[reason] += 1

    def snapshot(self) -> Dict[str, int]:
        return dict(sorted(self.items()))
