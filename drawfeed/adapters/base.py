from __future__ import annotations

import abc
import json
import logging
from typing import Any, List, Optional

from ..errors import UpstreamShapeError
from ..transport import RawFetcher
from ..types import GameType, RawDrawTuple, SkipCounter

logger = logging.getLogger("drawfeed.adapters")


class SourceAdapter(abc.ABC):
    """Translate one upstream format into raw draw tuples."""

    kind = "base"

    def __init__(self, game_type: GameType, url: str) -> None:
        self.game_type = game_type
        self.url = url

    async def fetch(self, fetcher: RawFetcher) -> str:
        return await fetcher.fetch_raw(self.url)

    @abc.abstractmethod
    def parse(self, raw: str, skipped: Optional[SkipCounter] = None) -> List[RawDrawTuple]:
        """Return the draws found in `raw`, in source order.

        Implementations raise `UpstreamShapeError` only when the payload as a
        whole is unusable; bad individual records are tallied in `skipped`
        and left out.
        """

    async def load(self, fetcher: RawFetcher, skipped: Optional[SkipCounter] = None) -> List[RawDrawTuple]:
        raw = await self.fetch(fetcher)
        return self.parse(raw, skipped)

    def _decode_json(self, raw: str) -> Any:
        try:
            return json.loads(raw)
        except (ValueError, RecursionError) as exc:
            raise UpstreamShapeError(
                f"{self.kind} source for {self.game_type.value} returned non-JSON content",
                self.game_type.value,
            ) from exc

    def _skip(self, skipped: Optional[SkipCounter], reason: str, detail: Any) -> None:
        logger.debug("Skipping %s record (%s): %r", self.game_type.value, reason, detail)
        if skipped is not None:
            skipped.record(reason)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(game_type={self.game_type.value!r}, url={self.url!r})"
