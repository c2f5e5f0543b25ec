from __future__ import annotations

from typing import Any, List, Mapping, Optional, Tuple

from ..errors import DateParseError, UpstreamShapeError
from ..parsing import date_from_iso
from ..transport import RawFetcher
from ..types import GameType, RawDrawTuple, SkipCounter
from .base import SourceAdapter


class PostJsonAdapter(SourceAdapter):
    """Results API queried with a JSON POST body, answering with integer draws."""

    kind = "post_json"

    def __init__(
        self,
        game_type: GameType,
        url: str,
        collection_key: str = "results",
        date_key: str = "date",
        numbers_key: str = "numbers",
        limit: int = 200,
    ) -> None:
        super().__init__(game_type, url)
        self.collection_key = collection_key
        self.date_key = date_key
        self.numbers_key = numbers_key
        self.limit = limit

    def request_body(self) -> Mapping[str, Any]:
        return {"game": self.game_type.value, "limit": self.limit}

    async def fetch(self, fetcher: RawFetcher) -> str:
        return await fetcher.fetch_raw(self.url, method="POST", json=self.request_body())

    def parse(self, raw: str, skipped: Optional[SkipCounter] = None) -> List[RawDrawTuple]:
        payload = self._decode_json(raw)
        entries = payload.get(self.collection_key) if isinstance(payload, Mapping) else None
        if not isinstance(entries, list):
            raise UpstreamShapeError(
                f"Missing '{self.collection_key}' collection in {self.game_type.value} response",
                self.game_type.value,
            )

        draws: List[RawDrawTuple] = []
        for entry in entries:
            if not isinstance(entry, Mapping):
                self._skip(skipped, "malformed_record", entry)
                continue
            raw_date = entry.get(self.date_key)
            try:
                date_text = date_from_iso(raw_date if isinstance(raw_date, str) else "")
            except DateParseError:
                self._skip(skipped, "bad_date", raw_date)
                continue
            try:
                numbers = self._parse_numbers(entry.get(self.numbers_key))
            except ValueError:
                self._skip(skipped, "bad_numbers", entry.get(self.numbers_key))
                continue
            draws.append(RawDrawTuple(date_text, numbers))
        return draws

    @staticmethod
    def _parse_numbers(raw: Any) -> Tuple[int, ...]:
        if not isinstance(raw, list):
            raise ValueError("numbers field must be a list")
        numbers = []
        for value in raw:
            # bool is an int subclass; a True in a draw list is a bad payload.
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValueError("numbers must be integers")
            if value < 0:
                raise ValueError("numbers must be non-negative")
            numbers.append(value)
        return tuple(numbers)
