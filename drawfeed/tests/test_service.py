import contextlib
import io
import json
import unittest
from unittest import mock

from drawfeed import service
from drawfeed.adapters import KeyedJsonAdapter
from drawfeed.config import FeedSettings
from drawfeed.pipeline import ResultPipeline
from drawfeed.types import GameType

MEGA_URL = "https://archive.test/mega645.json"


class StaticFetcher:
    def __init__(self, body: str) -> None:
        self._body = body
        self.closed = False

    async def fetch_raw(self, url, *, method="GET", json=None):
        return self._body

    async def close(self) -> None:
        self.closed = True


class ServiceMainTests(unittest.TestCase):
    def _run(self, body: str, argv):
        fetcher = StaticFetcher(body)
        pipeline = ResultPipeline({GameType.MEGA_645: KeyedJsonAdapter(GameType.MEGA_645, MEGA_URL)}, fetcher)
        stdout, stderr = io.StringIO(), io.StringIO()
        with mock.patch.object(service, "load_config", return_value=FeedSettings()), mock.patch.object(
            ResultPipeline, "from_settings", return_value=pipeline
        ), mock.patch.object(service, "configure_logging"), contextlib.redirect_stdout(
            stdout
        ), contextlib.redirect_stderr(stderr):
            code = service.main(argv)
        return code, stdout.getvalue(), stderr.getvalue(), fetcher

    def test_prints_canonical_json(self) -> None:
        body = json.dumps({"1": {"thu": "Thứ Sáu_05/01/2024", "number": "40,02,33,14,21,29"}})

        code, out, _, fetcher = self._run(body, ["--type", "mega645"])

        self.assertEqual(code, 0)
        self.assertEqual(json.loads(out), [{"date": "2024-01-05", "numbers": [2, 14, 21, 29, 33, 40]}])
        self.assertTrue(fetcher.closed)

    def test_surfaced_error_exits_non_zero(self) -> None:
        code, out, err, fetcher = self._run("{}", ["--type", "mega645"])

        self.assertEqual(code, 1)
        self.assertEqual(out, "")
        self.assertIn("empty_result", err)
        self.assertTrue(fetcher.closed)

    def test_unregistered_game(self) -> None:
        code, _, err, _ = self._run("{}", ["--type", "keno"])

        self.assertEqual(code, 1)
        self.assertIn("unknown_game_type", err)


if __name__ == "__main__":
    unittest.main()
