from __future__ import annotations

from typing import List, Mapping, Optional

from ..errors import DateParseError, UpstreamShapeError
from ..parsing import date_from_slash, extract_numbers
from ..types import GameType, RawDrawTuple, SkipCounter
from .base import SourceAdapter


class KeyedJsonAdapter(SourceAdapter):
    """Archive object keyed per draw, e.g. `xosoplus.com/json/lastest/<game>.json`.

    Each value carries `thu` (`"<weekday>_DD/MM/YYYY"`) and `number`
    (a comma-joined string).
    """

    kind = "keyed_json"

    def __init__(
        self,
        game_type: GameType,
        url: str,
        date_key: str = "thu",
        numbers_key: str = "number",
    ) -> None:
        super().__init__(game_type, url)
        self.date_key = date_key
        self.numbers_key = numbers_key

    def parse(self, raw: str, skipped: Optional[SkipCounter] = None) -> List[RawDrawTuple]:
        payload = self._decode_json(raw)
        if not isinstance(payload, Mapping):
            raise UpstreamShapeError(
                f"Expected an object of draws for {self.game_type.value}",
                self.game_type.value,
            )

        draws: List[RawDrawTuple] = []
        for key, entry in payload.items():
            if not isinstance(entry, Mapping):
                self._skip(skipped, "malformed_record", key)
                continue
            try:
                date_text = date_from_slash(str(entry.get(self.date_key) or ""))
            except DateParseError:
                self._skip(skipped, "bad_date", entry.get(self.date_key))
                continue
            value = entry.get(self.numbers_key)
            numbers = extract_numbers(value if isinstance(value, str) else "", ",", self.game_type.digit_width)
            draws.append(RawDrawTuple(date_text, tuple(numbers)))
        return draws
