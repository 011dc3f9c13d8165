"""Parse exchange CSV exports into normalized trades (JSON lines).

Usage:
    python -m tradestream binance.csv kraken-ledgers.csv --verbose
    python -m tradestream exports/*.csv --output trades.jsonl
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from contextlib import nullcontext
from pathlib import Path
from typing import Optional, TextIO

from .config import Settings
from .reader import iter_records
from .stream import RecordParseError, TradeParseStream

logger = logging.getLogger(__name__)


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tradestream",
        description="Normalize Binance, Bittrex and Kraken CSV exports into trades.",
    )
    parser.add_argument("files", nargs="+", type=Path, help="CSV export(s), processed in order")
    parser.add_argument("-o", "--output", type=Path, help="write JSON lines here instead of stdout")
    parser.add_argument(
        "-v", "--verbose", action="store_true", default=None,
        help="log a summary line for every parsed trade",
    )
    return parser


async def _run(parser: TradeParseStream, files: list[Path], out: TextIO, chunk_size: int) -> None:
    async for trade in parser.stream(iter_records(files, chunk_size)):
        out.write(json.dumps(trade.to_dict()) + "\n")


def main(argv: Optional[list[str]] = None) -> int:
    args = build_arg_parser().parse_args(argv)

    settings = Settings.from_env()
    if args.verbose is not None:
        settings.verbose = args.verbose

    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
        stream=sys.stderr,
    )

    missing = [p for p in args.files if not p.exists()]
    if missing:
        logger.error("File not found: %s", ", ".join(str(p) for p in missing))
        return 1

    parser = TradeParseStream(settings)
    sink = open(args.output, "w") if args.output else nullcontext(sys.stdout)
    try:
        with sink as out:
            asyncio.run(_run(parser, args.files, out, settings.chunk_size))
    except RecordParseError as e:
        logger.error("%s", e)
        return 1

    logger.info(
        "Done: %d records, %d trades, %d unrecognized format(s)",
        parser.records_seen,
        parser.trades_emitted,
        len(parser.unrecognized_signatures),
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
