from __future__ import annotations

from typing import Any, List, Mapping, Optional, Sequence

from ..errors import DateParseError, UpstreamShapeError
from ..parsing import date_from_slash, extract_numbers
from ..types import GameType, RawDrawTuple, SkipCounter
from .base import SourceAdapter

# Special prize first, then first through seventh; the order is the prize ranking.
PRIZE_FIELDS: Sequence[str] = (
    "giaidb",
    "giai1",
    "giai2",
    "giai3",
    "giai4",
    "giai5",
    "giai6",
    "giai7",
)


class JsonListAdapter(SourceAdapter):
    """Per-day prize records from a JSON feed such as `json-kq-mienbac`."""

    kind = "json_list"

    def __init__(
        self,
        game_type: GameType,
        url: str,
        collection_key: str = "list",
        date_key: str = "ngay",
        prize_fields: Sequence[str] = PRIZE_FIELDS,
    ) -> None:
        super().__init__(game_type, url)
        self.collection_key = collection_key
        self.date_key = date_key
        self.prize_fields = tuple(prize_fields)

    def parse(self, raw: str, skipped: Optional[SkipCounter] = None) -> List[RawDrawTuple]:
        payload = self._decode_json(raw)
        records = payload.get(self.collection_key) if isinstance(payload, Mapping) else None
        if not isinstance(records, list):
            raise UpstreamShapeError(
                f"Missing '{self.collection_key}' list in {self.game_type.value} payload",
                self.game_type.value,
            )

        draws: List[RawDrawTuple] = []
        for record in records:
            if not isinstance(record, Mapping):
                self._skip(skipped, "malformed_record", record)
                continue
            try:
                date_text = date_from_slash(str(record.get(self.date_key) or ""))
            except DateParseError:
                self._skip(skipped, "bad_date", record.get(self.date_key))
                continue
            draws.append(RawDrawTuple(date_text, tuple(self._numbers(record))))
        return draws

    def _numbers(self, record: Mapping[str, Any]) -> List[int]:
        width = self.game_type.digit_width
        numbers: List[int] = []
        for name in self.prize_fields:
            value = record.get(name)
            if isinstance(value, str):
                numbers.extend(extract_numbers(value, ",", width))
        return numbers
