from __future__ import annotations

import datetime as dt
import logging
from typing import Iterable, List, Optional

from .errors import EmptyResultError
from .types import DrawRecord, GameType, NumberPayload, RawDrawTuple, ResultSet, SkipCounter, StructuredNumbers

STRUCTURED_MAIN_COUNT = 6

logger = logging.getLogger("drawfeed.canonical")


def shape_numbers(numbers: Iterable[int], game_type: GameType) -> Optional[NumberPayload]:
    """Arrange extracted numbers for `game_type`, or None when too few are present."""
    values = list(numbers)
    if not values:
        return None
    if game_type.is_structured:
        if len(values) <= STRUCTURED_MAIN_COUNT:
            return None
        main = tuple(sorted(values[:STRUCTURED_MAIN_COUNT]))
        return StructuredNumbers(main=main, special=values[STRUCTURED_MAIN_COUNT])
    if game_type.preserves_order:
        return tuple(values)
    return tuple(sorted(values))


def canonicalize(
    tuples: Iterable[RawDrawTuple],
    game_type: GameType,
    skipped: Optional[SkipCounter] = None,
) -> ResultSet:
    skipped = skipped if skipped is not None else SkipCounter()
    records: List[DrawRecord] = []
    for raw in tuples:
        try:
            draw_date = dt.date.fromisoformat(raw.date_text)
        except (TypeError, ValueError):
            logger.debug("Dropping %s draw with bad date %r", game_type.value, raw.date_text)
            skipped.record("bad_date")
            continue
        payload = shape_numbers(raw.numbers, game_type)
        if payload is None:
            logger.debug("Dropping %s draw on %s: %d numbers", game_type.value, raw.date_text, len(raw.numbers))
            skipped.record("short_draw" if raw.numbers else "no_numbers")
            continue
        records.append(DrawRecord(date=draw_date, numbers=payload))

    if not records:
        raise EmptyResultError(
            f"Source returned no usable {game_type.value} draws", game_type.value
        )

    # sort() is stable: draws sharing a date keep their source order.
    records.sort(key=lambda record: record.date)
    return ResultSet(game_type=game_type, records=tuple(records), skipped=skipped.snapshot())
