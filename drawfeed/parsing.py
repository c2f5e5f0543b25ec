"""Text-level helpers shared by every source adapter.

Upstream payloads are noisy: prize strings carry stray separators and
padding, HTML cells mix labels with digits, and each source encodes dates
its own way. Nothing in this module raises on malformed numbers; dates
raise `DateParseError` so adapters can skip the offending record.
"""

from __future__ import annotations

import datetime as dt
import re
from typing import List, Optional

from .errors import DateParseError

_DIGITS_RE = re.compile(r"[0-9]+")
_ISO_RE = re.compile(r"^\s*(\d{4})-(\d{1,2})-(\d{1,2})(?:[T ]|$)")
_SLASH_RE = re.compile(r"(?<!\d)(\d{1,2})/(\d{1,2})/(\d{4})(?!\d)")
_TITLE_RE = re.compile(r"(?<!\d)(\d{1,2})-(\d{1,2})-(\d{4})(?!\d)")


def extract_numbers(text: Optional[str], delimiter: Optional[str] = ",", width: Optional[int] = None) -> List[int]:
    """Split `text` on `delimiter` and parse the trailing `width` digits of each token.

    `delimiter=None` splits on any run of whitespace. With `width=None` the
    whole token must be numeric. Empty, short and non-numeric tokens are
    dropped.
    """
    if not text:
        return []
    numbers: List[int] = []
    for token in text.split(delimiter):
        token = token.strip()
        if not token:
            continue
        if width is not None:
            if len(token) < width:
                continue
            token = token[-width:]
        if _DIGITS_RE.fullmatch(token) is None:
            continue
        numbers.append(int(token))
    return numbers


def _format(year: str, month: str, day: str, text: str) -> str:
    try:
        value = dt.date(int(year), int(month), int(day))
    except ValueError as exc:
        raise DateParseError(f"Invalid calendar date in {text!r}") from exc
    return value.isoformat()


def date_from_iso(text: str) -> str:
    match = _ISO_RE.match(text)
    if match is None:
        raise DateParseError(f"No ISO date in {text!r}")
    year, month, day = match.groups()
    return _format(year, month, day, text)


def date_from_slash(text: str) -> str:
    """`DD/MM/YYYY`, possibly embedded in a longer key such as `Thu 6_05/01/2024`."""
    match = _SLASH_RE.search(text)
    if match is None:
        raise DateParseError(f"No DD/MM/YYYY date in {text!r}")
    day, month, year = match.groups()
    return _format(year, month, day, text)


def date_from_title(text: str) -> str:
    """Pull a `D-M-YYYY` date out of free heading text."""
    match = _TITLE_RE.search(text)
    if match is None:
        raise DateParseError(f"No D-M-YYYY date in {text!r}")
    day, month, year = match.groups()
    return _format(year, month, day, text)


def normalize_date(text: Optional[str]) -> str:
    """Return `text` as a `YYYY-MM-DD` string, whichever supported shape it uses."""
    if not text or not isinstance(text, str):
        raise DateParseError(f"Unrecognized date value: {text!r}")
    for parser in (date_from_iso, date_from_slash, date_from_title):
        try:
            return parser(text)
        except DateParseError:
            continue
    raise DateParseError(f"No recognizable date in {text!r}")
