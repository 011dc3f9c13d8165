"""
Kraken ledger export.

Columns: txid, refid, time, type, aclass, asset, amount, fee, balance

Kraken writes one ledger row per asset movement, so a trade shows up as two
adjacent rows with ``type == "trade"`` (one per leg, in no particular order).
Legs carry signed amounts: positive for the asset received, negative for the
asset spent. Which leg is the base of the pair is decided by currency
priority: the leg whose asset has the lower priority value is the base.

Legs are only paired when they are adjacent. Any other ledger row arriving
between them discards the buffered leg.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Mapping, Optional

from ..currency import CurrencyService, currency_priority, normalize_code
from ..trade import Exchange, Trade
from .values import parse_number, parse_text, parse_time

TRADE_TYPE = "trade"


class PairingAnomaly(Enum):
    TIMESTAMP_MISMATCH = "Found paired trade chunks with different timestamps."
    UNPAIRED_LEG = "Found unpaired trade chunk."

    @property
    def message(self) -> str:
        return self.value


@dataclass(frozen=True)
class LedgerLeg:
    """One normalized side of a Kraken trade."""

    asset: str
    amount: float  # signed
    time: int
    fee: float


@dataclass(frozen=True)
class PairingResult:
    trade: Optional[Trade] = None
    anomaly: Optional[PairingAnomaly] = None


class KrakenLedgerPairer:
    """
    Rebuild trades from consecutive Kraken ledger legs.

    Usage:
        pairer = KrakenLedgerPairer(currencies)
        result = await pairer.feed(record)
        if result.trade: ...
    """

    def __init__(self, currencies: CurrencyService) -> None:
        self.currencies = currencies
        self._legs: list[LedgerLeg] = []

    @property
    def pending(self) -> int:
        return len(self._legs)

    def reset(self) -> None:
        self._legs.clear()

    async def feed(self, record: Mapping[str, str]) -> PairingResult:
        if record["type"] != TRADE_TYPE:
            if self._legs:
                self.reset()
                return PairingResult(anomaly=PairingAnomaly.UNPAIRED_LEG)
            return PairingResult()

        self._legs.append(await self._normalize_leg(record))
        if len(self._legs) < 2:
            return PairingResult()

        first, second = self._legs
        self.reset()

        anomaly = None
        if first.time != second.time:
            anomaly = PairingAnomaly.TIMESTAMP_MISMATCH

        trade = await self._build_trade(first, second)
        return PairingResult(trade=trade, anomaly=anomaly)

    async def _normalize_leg(self, record: Mapping[str, str]) -> LedgerLeg:
        return LedgerLeg(
            asset=await normalize_code(
                self.currencies, parse_text(record["asset"], "asset")
            ),
            amount=parse_number(record["amount"]),
            time=parse_time(record["time"]),
            fee=parse_number(record["fee"]),
        )

    async def _build_trade(self, first: LedgerLeg, second: LedgerLeg) -> Trade:
        first_priority = await currency_priority(self.currencies, first.asset)
        second_priority = await currency_priority(self.currencies, second.asset)

        # Equal priorities fall through to the second leg as base
        if first_priority < second_priority:
            base, quote = first, second
        else:
            base, quote = second, first

        return Trade(
            exchange=Exchange.KRAKEN,
            base_asset=base.asset,
            quote_asset=quote.asset,
            base_amount=abs(base.amount),
            quote_amount=abs(quote.amount),
            sell=base.amount > 0,
            time=base.time,
            fee_asset=base.asset,
            fee_amount=base.fee,
        )
