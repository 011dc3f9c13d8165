"""
Streaming transform from raw CSV records to normalized trades.

Records are processed strictly in arrival order, one at a time. Kraken
ledger legs are paired across consecutive records, so the order is part of
the result. ``TradeParseStream.stream`` is an async generator: it only pulls
the next record when the consumer asks for the next trade, which lets a slow
consumer hold back the input side.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterable, AsyncIterator, Iterable, Mapping
from typing import Any, Optional, Union

from .config import Settings
from .currency import CurrencyService, DefaultCurrencyService
from .diagnostics import TradeDiagnostics
from .parsers.binance import normalize_binance
from .parsers.bittrex import normalize_bittrex
from .parsers.format_detector import (
    FormatKind,
    compute_signature,
    detect,
    strip_injected_fields,
)
from .parsers.kraken import KrakenLedgerPairer
from .trade import Trade

logger = logging.getLogger(__name__)

Records = Union[Iterable[Mapping[Any, Any]], AsyncIterable[Mapping[Any, Any]]]


class RecordParseError(ValueError):
    """A record of a recognized format carried a malformed field."""

    def __init__(self, kind: FormatKind, record_number: int, cause: Exception) -> None:
        self.kind = kind
        self.record_number = record_number
        super().__init__(
            f"Failed to parse {kind.exchange.value} record #{record_number}: {cause}"
        )


async def _iterate(records: Records) -> AsyncIterator[Mapping[Any, Any]]:
    if isinstance(records, AsyncIterable):
        async for record in records:
            yield record
    else:
        for record in records:
            yield record


class TradeParseStream:
    """
    Detect each record's exchange format and normalize it into a Trade.

    Usage:
        parser = TradeParseStream(Settings(verbose=True))
        async for trade in parser.stream(records):
            ...
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        currencies: Optional[CurrencyService] = None,
        diagnostics: Optional[TradeDiagnostics] = None,
    ) -> None:
        self.settings = settings or Settings()
        self.currencies = currencies or DefaultCurrencyService()
        self.diagnostics = diagnostics or TradeDiagnostics()
        self.kraken = KrakenLedgerPairer(self.currencies)

        self.unrecognized_signatures: set[str] = set()
        self.records_seen: int = 0
        self.trades_emitted: int = 0

    async def transform(self, record: Mapping[Any, Any]) -> Optional[Trade]:
        """Process one record; returns the completed trade, if any."""
        self.records_seen += 1
        fields = strip_injected_fields(record, self.settings.injected_fields)

        kind = detect(fields)
        if kind is None:
            self._unrecognized(compute_signature(fields))
            return None

        try:
            trade = await self._normalize(kind, fields)
        except ValueError as e:
            raise RecordParseError(kind, self.records_seen, e) from e

        if trade is not None:
            self._emit(trade)
        return trade

    async def stream(self, records: Records) -> AsyncIterator[Trade]:
        """Yield trades for a sequence of records, in input order."""
        try:
            async for record in _iterate(records):
                trade = await self.transform(record)
                if trade is not None:
                    yield trade
        finally:
            self.finish()

    async def pipe(self, records: Records, queue: asyncio.Queue) -> None:
        """Push trades into a queue, then a None sentinel.

        A bounded queue stops record consumption until the reader catches up.
        """
        async for trade in self.stream(records):
            await queue.put(trade)
        await queue.put(None)

    def finish(self) -> None:
        """End of input: drop any unpaired Kraken leg."""
        if self.kraken.pending:
            logger.debug("Discarding %d unpaired Kraken leg(s) at end of stream", self.kraken.pending)
        self.kraken.reset()

    # ------------------------------------------------------------------

    async def _normalize(self, kind: FormatKind, fields: dict[str, Any]) -> Optional[Trade]:
        if kind is FormatKind.BINANCE_TRADES:
            return await normalize_binance(fields, self.currencies)
        elif kind is FormatKind.BITTREX_ORDERS:
            return await normalize_bittrex(fields, self.currencies)
        elif kind is FormatKind.KRAKEN_LEDGER:
            result = await self.kraken.feed(fields)
            if result.anomaly is not None:
                self.diagnostics.pairing_anomaly(result.anomaly)
            return result.trade
        raise AssertionError(f"Unhandled format: {kind}")

    def _unrecognized(self, signature: str) -> None:
        if signature in self.unrecognized_signatures:
            return
        self.unrecognized_signatures.add(signature)
        self.diagnostics.unrecognized_format(signature)

    def _emit(self, trade: Trade) -> None:
        if self.settings.verbose:
            self.diagnostics.trade_parsed(trade)
        self.trades_emitted += 1


def parse_records(records: Iterable[Mapping[Any, Any]], **kwargs: Any) -> list[Trade]:
    """Run a whole record sequence through a fresh stream synchronously."""
    parser = TradeParseStream(**kwargs)

    async def _collect() -> list[Trade]:
        return [trade async for trade in parser.stream(records)]

    return asyncio.run(_collect())
