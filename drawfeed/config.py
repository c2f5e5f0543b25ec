from __future__ import annotations

import os
import pathlib
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Dict, Mapping, Optional, Tuple

from dotenv import load_dotenv

from .transport import DEFAULT_USER_AGENT
from .types import GameType


def _int_from_env(value: Optional[str], default: int) -> int:
    if value is None or value == "":
        return default
    return int(value)


def _games_from_env(value: Optional[str], default: Tuple[GameType, ...]) -> Tuple[GameType, ...]:
    if value is None or value.strip() == "":
        return default
    games = []
    for item in value.split(","):
        item = item.strip()
        if not item:
            continue
        try:
            games.append(GameType.parse(item))
        except ValueError as exc:
            raise RuntimeError(f"ENABLED_GAMES lists unknown game type: {item}") from exc
    return tuple(games)


@dataclass(frozen=True)
class SourceSettings:
    adapter: str
    url: str = ""
    collection_key: Optional[str] = None
    limit: int = 200
    block_class: Optional[str] = None
    number_class: Optional[str] = None


DEFAULT_SOURCES: Mapping[GameType, SourceSettings] = {
    GameType.XSMB: SourceSettings(
        adapter="json_list",
        url="https://api.xoso.me/app/json-kq-mienbac?page=1&limit=200",
    ),
    GameType.MEGA_645: SourceSettings(
        adapter="keyed_json", url="https://xosoplus.com/json/lastest/mega645.json"
    ),
    GameType.POWER_655: SourceSettings(
        adapter="keyed_json", url="https://xosoplus.com/json/lastest/power655.json"
    ),
    GameType.BINGO_18: SourceSettings(
        adapter="keyed_json", url="https://xosoplus.com/json/lastest/bingo18.json"
    ),
    # No known upstream publishes keno in a usable shape.
    GameType.KENO: SourceSettings(adapter="keyed_json"),
}

DEFAULT_ENABLED_GAMES: Tuple[GameType, ...] = (
    GameType.XSMB,
    GameType.MEGA_645,
    GameType.POWER_655,
    GameType.BINGO_18,
)


@dataclass(frozen=True)
class FeedSettings:
    timeout_seconds: int = 10
    user_agent: str = DEFAULT_USER_AGENT
    enabled_games: Tuple[GameType, ...] = DEFAULT_ENABLED_GAMES
    sources: Mapping[GameType, SourceSettings] = field(default_factory=lambda: dict(DEFAULT_SOURCES))


def _source_from_env(game: GameType, default: SourceSettings) -> SourceSettings:
    prefix = f"SOURCE__{game.value.upper()}__"
    return SourceSettings(
        adapter=os.getenv(prefix + "ADAPTER", default.adapter),
        url=os.getenv(prefix + "URL", default.url),
        collection_key=os.getenv(prefix + "COLLECTION_KEY") or default.collection_key,
        limit=_int_from_env(os.getenv(prefix + "LIMIT"), default.limit),
        block_class=os.getenv(prefix + "BLOCK_CLASS") or default.block_class,
        number_class=os.getenv(prefix + "NUMBER_CLASS") or default.number_class,
    )


def load_from_environment() -> FeedSettings:
    sources: Dict[GameType, SourceSettings] = {
        game: _source_from_env(game, DEFAULT_SOURCES[game]) for game in GameType
    }
    return FeedSettings(
        timeout_seconds=_int_from_env(os.getenv("HTTP_TIMEOUT_SECONDS"), 10),
        user_agent=os.getenv("HTTP_USER_AGENT", DEFAULT_USER_AGENT),
        enabled_games=_games_from_env(os.getenv("ENABLED_GAMES"), DEFAULT_ENABLED_GAMES),
        sources=sources,
    )


@lru_cache(maxsize=1)
def load_config(dotenv_path: Optional[str] = None) -> FeedSettings:
    if dotenv_path:
        load_dotenv(dotenv_path)
    else:
        default_path = pathlib.Path(".env")
        if default_path.exists():
            load_dotenv(default_path)
    return load_from_environment()
