from __future__ import annotations

import asyncio
import logging
from typing import Any, Mapping, Optional, Protocol

import requests

from .errors import TransportError

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/127.0.0.0 Safari/537.36"
)

logger = logging.getLogger("drawfeed.transport")


class RawFetcher(Protocol):
    async def fetch_raw(
        self, url: str, *, method: str = "GET", json: Optional[Mapping[str, Any]] = None
    ) -> str:
        ...

    async def close(self) -> None:
        ...


class HttpFetcher:
    """Fetch raw response bodies over HTTP.

    Each call is a standalone `requests.request`, so concurrent fetches in
    worker threads share no connection pool or cookie jar.
    """

    def __init__(self, timeout_seconds: float = 10, user_agent: str = DEFAULT_USER_AGENT) -> None:
        self._timeout = timeout_seconds
        self._headers = {
            "User-Agent": user_agent,
            "Accept": "application/json,text/html;q=0.9,*/*;q=0.8",
        }

    async def fetch_raw(
        self, url: str, *, method: str = "GET", json: Optional[Mapping[str, Any]] = None
    ) -> str:
        return await asyncio.to_thread(self._request, method, url, json)

    def _request(self, method: str, url: str, payload: Optional[Mapping[str, Any]]) -> str:
        logger.debug("%s %s", method, url)
        try:
            resp = requests.request(
                method, url, json=payload, headers=dict(self._headers), timeout=self._timeout
            )
        except requests.RequestException as exc:
            raise TransportError(f"{method} {url} failed: {exc}", url) from exc
        if not resp.ok:
            raise TransportError(
                f"{method} {url} returned status {resp.status_code}", url, resp.status_code
            )
        return resp.text

    async def close(self) -> None:
        return None
