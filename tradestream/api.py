"""FastAPI service exposing the trade parser.

POST /parse { csv_text, verbose } -> normalized trades for one CSV export.
"""

from __future__ import annotations

import dataclasses
import logging
from typing import Any

import pandas as pd
from fastapi import FastAPI
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from . import __version__
from .config import Settings
from .parsers.format_detector import SIGNATURES
from .reader import read_records_from_text
from .stream import RecordParseError, TradeParseStream

_settings = Settings.from_env()

logging.basicConfig(
    level=_settings.log_level,
    format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="tradestream",
    description="Normalize exchange CSV exports into canonical trades",
    version=__version__,
)


@app.get("/health")
def health() -> dict[str, Any]:
    return {
        "status": "ok",
        "version": __version__,
        "formats": [kind.exchange.value for kind in SIGNATURES.values()],
    }


class ParseRequest(BaseModel):
    csv_text: str
    verbose: bool = False


@app.post("/parse")
async def parse(req: ParseRequest) -> JSONResponse:
    settings = dataclasses.replace(_settings, verbose=req.verbose or _settings.verbose)
    parser = TradeParseStream(settings)

    try:
        records = read_records_from_text(req.csv_text, settings.chunk_size)
        trades = [trade.to_dict() async for trade in parser.stream(records)]
    except RecordParseError as e:
        logger.warning("[PARSE] %s", e)
        return JSONResponse({"error": str(e)}, status_code=422)
    except pd.errors.ParserError as e:
        logger.warning("[PARSE] Unreadable CSV: %s", e)
        return JSONResponse({"error": f"Unreadable CSV: {e}"}, status_code=400)

    logger.info(
        "[PARSE] %d records -> %d trades (%d unrecognized formats)",
        parser.records_seen, len(trades), len(parser.unrecognized_signatures),
    )
    return JSONResponse({
        "trades": trades,
        "count": len(trades),
        "unrecognized": sorted(parser.unrecognized_signatures),
    })
