from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv

from drawfeed.config import FeedSettings, load_from_environment


@dataclass(frozen=True)
class FlaskSettings:
    secret_key: str = "drawfeed-dev-secret"
    debug: bool = True


@dataclass(frozen=True)
class HttpPolicySettings:
    cache_max_age: int = 3600
    cors_allow_origin: str = "*"


@dataclass(frozen=True)
class AppSettings:
    flask: FlaskSettings
    http: HttpPolicySettings
    feed: FeedSettings


@lru_cache(maxsize=1)
def load_settings(dotenv_path: Optional[str] = None) -> AppSettings:
    if dotenv_path:
        load_dotenv(dotenv_path)
    else:
        load_dotenv()

    flask_settings = FlaskSettings(
        secret_key=os.getenv("FLASK_SECRET_KEY", "drawfeed-dev-secret"),
        debug=os.getenv("FLASK_DEBUG", "1") == "1",
    )

    http_settings = HttpPolicySettings(
        cache_max_age=int(os.getenv("CACHE_MAX_AGE", "3600")),
        cors_allow_origin=os.getenv("CORS_ALLOW_ORIGIN", "*"),
    )

    return AppSettings(
        flask=flask_settings,
        http=http_settings,
        feed=load_from_environment(),
    )
