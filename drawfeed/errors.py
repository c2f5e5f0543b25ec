from __future__ import annotations

from typing import Optional


class DrawFeedError(RuntimeError):
    """Base class for failures surfaced to callers of the pipeline."""

    kind = "error"

    def __init__(self, message: str, game_type: Optional[str] = None) -> None:
        super().__init__(message)
        self.game_type = game_type


class UpstreamUnavailableError(DrawFeedError):
    kind = "upstream_unavailable"


class UpstreamShapeError(DrawFeedError):
    kind = "upstream_shape"


class EmptyResultError(DrawFeedError):
    kind = "empty_result"


class UnknownGameTypeError(DrawFeedError):
    kind = "unknown_game_type"


class DateParseError(ValueError):
    """Raised when no recognizable date is present in the given text."""


class TransportError(RuntimeError):
    """Raised by a fetcher when raw content cannot be retrieved."""

    def __init__(self, message: str, url: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.url = url
        self.status_code = status_code
