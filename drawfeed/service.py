from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from typing import Optional

from .config import load_config
from .errors import DrawFeedError
from .pipeline import ResultPipeline
from .types import GameType


def configure_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        stream=sys.stderr,
    )


async def run(args: argparse.Namespace) -> str:
    settings = load_config(args.env_file)
    configure_logging(args.verbose)
    logger = logging.getLogger("drawfeed")

    pipeline = ResultPipeline.from_settings(settings, logger=logger)
    try:
        result = await pipeline.get_results(args.type)
    finally:
        await pipeline.close()
    return json.dumps(result.to_list(), ensure_ascii=False, indent=args.indent)


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Fetch canonical lottery draw results")
    parser.add_argument(
        "--type",
        required=True,
        choices=[game.value for game in GameType],
        help="Game type to fetch.",
    )
    parser.add_argument("--env-file", type=str, default=None, help="Path to .env file with source overrides")
    parser.add_argument("--indent", type=int, default=None, help="Pretty-print JSON with this indent.")
    parser.add_argument(
        "--verbose", action="store_true", help="Enable debug logging (default INFO)."
    )
    return parser.parse_args(argv)


def main(argv: Optional[list[str]] = None) -> int:
    args = parse_args(argv)
    try:
        output = asyncio.run(run(args))
    except DrawFeedError as exc:
        print(f"error ({exc.kind}): {exc}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("Interrupted.", file=sys.stderr)
        return 130
    print(output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
