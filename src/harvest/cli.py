"""
Command line entry point.

    opensea-rankings PAGES DURATION CHAIN OUTPUT [--debug] [--quiet] [--timeout SEC] [--allow-partial]
"""

from typing import List, Optional
import argparse
import asyncio
import dataclasses
from pathlib import Path
import sys

from dotenv import load_dotenv

from .config import CHAINS, DURATIONS, HarvestConfig, RankingsQuery
from .errors import HarvestError, PaginationError, ValidationError
from .rankings import rankings


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="opensea-rankings",
        description="Scrape the OpenSea rankings list into a JSON file.",
    )
    parser.add_argument("pages", help="number of pages to fetch (1 page = top 100 collections)")
    parser.add_argument("duration", help=f"volume window, one of {list(DURATIONS)}")
    parser.add_argument("chain", help=f"chain, one of {list(CHAINS)}")
    parser.add_argument("output", help="path of the JSON file to write")
    parser.add_argument(
        "--debug",
        action="store_true",
        help="launch a visible browser window",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="do not print progress logs",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="abort the run after this many seconds (overrides HARVEST_TIMEOUT_SEC)",
    )
    parser.add_argument(
        "--allow-partial",
        action="store_true",
        help="write the rows collected so far when a later page cannot be reached",
    )
    return parser


async def run(args: argparse.Namespace, config: HarvestConfig) -> int:
    try:
        result = await rankings(
            args.pages,
            args.duration,
            args.chain,
            args.output,
            debug=args.debug,
            logs=not args.quiet,
            config=config,
            allow_partial=args.allow_partial,
        )
    except PaginationError as e:
        kept = len(e.partial) if e.partial is not None else 0
        print(f"error: {e} ({kept} collections collected before the failure, nothing written)", file=sys.stderr)
        return 1
    except HarvestError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    print(
        f"It's saved! {len(result)} collections, "
        f"{result.pages_completed}/{result.pages_requested} pages ({result.status.value}) -> {args.output}"
    )
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    load_dotenv(dotenv_path=Path.cwd() / ".env")
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        RankingsQuery.create(args.pages, args.duration, args.chain)
        config = HarvestConfig.from_env()
        if args.timeout is not None:
            config = dataclasses.replace(config, timeout=args.timeout)
    except ValidationError as e:
        parser.print_usage(sys.stderr)
        print(f"{parser.prog}: error: {e}", file=sys.stderr)
        return 2

    return asyncio.run(run(args, config))


if __name__ == "__main__":
    raise SystemExit(main())
