import asyncio
import os
import unittest
from unittest import mock

import requests

from drawfeed.config import DEFAULT_ENABLED_GAMES, load_from_environment
from drawfeed.errors import TransportError
from drawfeed.transport import HttpFetcher
from drawfeed.types import GameType


class LoadFromEnvironmentTests(unittest.TestCase):
    def test_defaults_leave_keno_disabled(self) -> None:
        with mock.patch.dict(os.environ, {}, clear=True):
            settings = load_from_environment()

        self.assertEqual(settings.enabled_games, DEFAULT_ENABLED_GAMES)
        self.assertNotIn(GameType.KENO, settings.enabled_games)
        self.assertEqual(settings.sources[GameType.XSMB].adapter, "json_list")
        self.assertEqual(settings.timeout_seconds, 10)

    def test_source_overrides(self) -> None:
        env = {
            "ENABLED_GAMES": "xsmb, BINGO18",
            "HTTP_TIMEOUT_SECONDS": "4",
            "SOURCE__BINGO18__ADAPTER": "html_table",
            "SOURCE__BINGO18__URL": "https://page.test/bingo",
            "SOURCE__BINGO18__BLOCK_CLASS": "^kq$",
            "SOURCE__POWER655__ADAPTER": "post_json",
            "SOURCE__POWER655__LIMIT": "25",
        }
        with mock.patch.dict(os.environ, env, clear=True):
            settings = load_from_environment()

        self.assertEqual(settings.enabled_games, (GameType.XSMB, GameType.BINGO_18))
        self.assertEqual(settings.timeout_seconds, 4)
        bingo = settings.sources[GameType.BINGO_18]
        self.assertEqual((bingo.adapter, bingo.url, bingo.block_class), ("html_table", "https://page.test/bingo", "^kq$"))
        self.assertEqual(settings.sources[GameType.POWER_655].limit, 25)

    def test_unknown_enabled_game_is_rejected(self) -> None:
        with mock.patch.dict(os.environ, {"ENABLED_GAMES": "xsmb,lotto649"}, clear=True):
            with self.assertRaises(RuntimeError):
                load_from_environment()


class HttpFetcherTests(unittest.TestCase):
    def setUp(self) -> None:
        self.fetcher = HttpFetcher(timeout_seconds=3)

    def tearDown(self) -> None:
        asyncio.run(self.fetcher.close())

    def test_returns_body_text(self) -> None:
        response = mock.Mock(ok=True, status_code=200, text='{"list": []}')
        with mock.patch("drawfeed.transport.requests.request", return_value=response) as request:
            body = asyncio.run(
                self.fetcher.fetch_raw("https://api.test/r", method="POST", json={"game": "mega645"})
            )

        self.assertEqual(body, '{"list": []}')
        request.assert_called_once_with(
            "POST",
            "https://api.test/r",
            json={"game": "mega645"},
            headers=mock.ANY,
            timeout=3,
        )
        self.assertIn("User-Agent", request.call_args.kwargs["headers"])

    def test_each_call_is_independent_of_a_session(self) -> None:
        response = mock.Mock(ok=True, status_code=200, text="ok")
        with mock.patch("drawfeed.transport.requests.request", return_value=response) as request, mock.patch(
            "drawfeed.transport.requests.Session"
        ) as session_cls:
            asyncio.run(self.fetcher.fetch_raw("https://page.test/a"))
            asyncio.run(self.fetcher.fetch_raw("https://page.test/b"))

        session_cls.assert_not_called()
        self.assertEqual(request.call_count, 2)
        first, second = (call.kwargs["headers"] for call in request.call_args_list)
        self.assertEqual(first, second)
        self.assertIsNot(first, second)

    def test_non_success_status_raises_transport_error(self) -> None:
        response = mock.Mock(ok=False, status_code=503, text="down")
        with mock.patch("drawfeed.transport.requests.request", return_value=response):
            with self.assertRaises(TransportError) as ctx:
                asyncio.run(self.fetcher.fetch_raw("https://api.test/r"))

        self.assertEqual(ctx.exception.status_code, 503)
        self.assertEqual(ctx.exception.url, "https://api.test/r")

    def test_connection_error_raises_transport_error(self) -> None:
        with mock.patch(
            "drawfeed.transport.requests.request", side_effect=requests.ConnectionError("refused")
        ):
            with self.assertRaises(TransportError) as ctx:
                asyncio.run(self.fetcher.fetch_raw("https://api.test/r"))

        self.assertIsNone(ctx.exception.status_code)


if __name__ == "__main__":
    unittest.main()
