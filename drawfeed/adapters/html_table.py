from __future__ import annotations

import re
from typing import List, Optional, Tuple

from bs4 import BeautifulSoup, Tag

from ..errors import DateParseError, UpstreamShapeError
from ..parsing import date_from_title, extract_numbers
from ..types import GameType, RawDrawTuple, SkipCounter
from .base import SourceAdapter

DEFAULT_BLOCK_CLASS = r"^(draw|result|kqxs)([-_](block|day|box|table))?$"
DEFAULT_NUMBER_CLASS = r"^(num|number|ball|prize|giai)([-_]?\w+)?$"
_HEADING_TAG_RE = re.compile(r"^h[1-6]$")
_HEADING_CLASS_RE = re.compile(r"(title|date|heading)")


class HtmlTableAdapter(SourceAdapter):
    """Scrape a results page laid out as one block per draw day.

    Elements are matched on class patterns rather than tag names so that
    `<td class="number">`, `<span class="ball">` and `<div class="giai-db">`
    are all picked up.
    """

    kind = "html_table"

    def __init__(
        self,
        game_type: GameType,
        url: str,
        block_class: str = DEFAULT_BLOCK_CLASS,
        number_class: str = DEFAULT_NUMBER_CLASS,
    ) -> None:
        super().__init__(game_type, url)
        self._block_re = re.compile(block_class)
        self._number_re = re.compile(number_class)

    def parse(self, raw: str, skipped: Optional[SkipCounter] = None) -> List[RawDrawTuple]:
        soup = BeautifulSoup(raw, "html.parser")
        blocks = self._blocks(soup)
        if not blocks:
            raise UpstreamShapeError(
                f"No draw blocks in {self.game_type.value} page", self.game_type.value
            )

        draws: List[RawDrawTuple] = []
        for block in blocks:
            date_text, heading_text = self._block_date(block)
            if date_text is None:
                self._skip(skipped, "bad_date", heading_text)
                continue

            numbers: List[int] = []
            for cell in block.find_all(self._is_number_cell):
                if cell.find(self._is_number_cell) is not None:
                    continue
                numbers.extend(
                    extract_numbers(cell.get_text(" ", strip=True), None, self.game_type.digit_width)
                )
            if not numbers:
                self._skip(skipped, "no_numbers", heading_text)
                continue
            draws.append(RawDrawTuple(date_text, tuple(numbers)))
        return draws

    def _block_date(self, block: Tag) -> Tuple[Optional[str], str]:
        """First heading in `block` that carries a date, plus the text used for logging."""
        first_text = ""
        for heading in block.find_all(self._is_heading):
            text = heading.get_text(" ", strip=True)
            first_text = first_text or text
            try:
                return date_from_title(text), text
            except DateParseError:
                continue
        return None, first_text

    def _blocks(self, soup: BeautifulSoup) -> List[Tag]:
        matched = soup.find_all(class_=self._block_re)
        seen = {id(tag) for tag in matched}
        # Nested matches (a result table inside a result block) belong to the outer block.
        return [tag for tag in matched if not any(id(parent) in seen for parent in tag.parents)]

    def _is_heading(self, tag: Tag) -> bool:
        if _HEADING_TAG_RE.match(tag.name or ""):
            return True
        return any(_HEADING_CLASS_RE.search(cls) for cls in tag.get("class") or ())

    def _is_number_cell(self, tag: Tag) -> bool:
        return any(self._number_re.match(cls) for cls in tag.get("class") or ())
