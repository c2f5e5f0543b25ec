from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, Optional, Tuple, Union

from .adapters import ADAPTER_KINDS, SourceAdapter
from .canonical import canonicalize
from .config import FeedSettings, SourceSettings
from .errors import TransportError, UnknownGameTypeError, UpstreamUnavailableError
from .transport import HttpFetcher, RawFetcher
from .types import GameType, ResultSet, SkipCounter


def build_adapter(game: GameType, source: SourceSettings) -> SourceAdapter:
    try:
        adapter_cls = ADAPTER_KINDS[source.adapter]
    except KeyError as exc:
        raise RuntimeError(f"Unknown adapter kind for {game.value}: {source.adapter}") from exc

    options: Dict[str, Any] = {}
    if source.collection_key and source.adapter in ("json_list", "post_json"):
        options["collection_key"] = source.collection_key
    if source.adapter == "post_json":
        options["limit"] = source.limit
    if source.adapter == "html_table":
        if source.block_class:
            options["block_class"] = source.block_class
        if source.number_class:
            options["number_class"] = source.number_class
    return adapter_cls(game, source.url, **options)


class ResultPipeline:
    """Fetch one game's upstream payload and turn it into a canonical `ResultSet`."""

    def __init__(
        self,
        adapters: Mapping[GameType, SourceAdapter],
        fetcher: RawFetcher,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._adapters = dict(adapters)
        self._fetcher = fetcher
        self._logger = logger or logging.getLogger("drawfeed.pipeline")

    @classmethod
    def from_settings(
        cls,
        settings: FeedSettings,
        fetcher: Optional[RawFetcher] = None,
        logger: Optional[logging.Logger] = None,
    ) -> "ResultPipeline":
        adapters: Dict[GameType, SourceAdapter] = {}
        for game in settings.enabled_games:
            source = settings.sources.get(game)
            if source is None or not source.url:
                (logger or logging.getLogger("drawfeed.pipeline")).warning(
                    "Game %s enabled but no source URL configured; not registering.", game.value
                )
                continue
            adapters[game] = build_adapter(game, source)
        if fetcher is None:
            fetcher = HttpFetcher(settings.timeout_seconds, settings.user_agent)
        return cls(adapters, fetcher, logger=logger)

    @property
    def game_types(self) -> Tuple[GameType, ...]:
        return tuple(game for game in GameType if game in self._adapters)

    def adapter_for(self, game_type: Union[str, GameType]) -> SourceAdapter:
        try:
            game = GameType.parse(game_type)
        except ValueError as exc:
            raise UnknownGameTypeError(f"Unknown game type: {game_type}", str(game_type)) from exc
        adapter = self._adapters.get(game)
        if adapter is None:
            raise UnknownGameTypeError(f"No source registered for game type {game.value}", game.value)
        return adapter

    async def get_results(self, game_type: Union[str, GameType]) -> ResultSet:
        adapter = self.adapter_for(game_type)
        game = adapter.game_type
        skipped = SkipCounter()

        try:
            raw_draws = await adapter.load(self._fetcher, skipped)
        except TransportError as exc:
            self._logger.warning("Upstream fetch for %s failed: %s", game.value, exc)
            raise UpstreamUnavailableError(
                f"Upstream source for {game.value} is unavailable: {exc}", game.value
            ) from exc

        result = canonicalize(raw_draws, game, skipped)
        if result.skipped_total:
            self._logger.info(
                "%s: %d draws kept, %d skipped %s",
                game.value,
                len(result),
                result.skipped_total,
                result.skipped,
            )
        else:
            self._logger.debug("%s: %d draws kept", game.value, len(result))
        return result

    async def close(self) -> None:
        await self._fetcher.close()
