"""
Canonical trade record produced by every exchange normalizer.

Downstream accounting consumes trades as plain dicts with camelCase keys
(see ``Trade.to_dict``); the ``value`` and ``fee`` fields are reserved for
fiat valuation and are never populated here.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional


class Exchange(str, Enum):
    """Exchanges whose CSV exports are recognized."""

    BINANCE = "Binance"
    BITTREX = "Bittrex"
    KRAKEN = "Kraken"


@dataclass(frozen=True)
class Trade:
    """A single normalized trade."""

    exchange: Exchange
    base_asset: str
    quote_asset: str
    base_amount: float
    quote_amount: float
    sell: bool  # True if the base asset was disposed
    time: int  # Unix epoch milliseconds
    fee_asset: str
    fee_amount: float
    value: Optional[float] = None
    fee: Optional[float] = None

    def __post_init__(self) -> None:
        if self.base_asset == self.quote_asset:
            raise ValueError(
                f"Trade base and quote assets are both {self.base_asset!r}"
            )
        for name in ("base_amount", "quote_amount", "fee_amount"):
            amount = getattr(self, name)
            if not math.isfinite(amount) or amount < 0:
                raise ValueError(f"Trade {name} must be finite and >= 0, got {amount!r}")
        if isinstance(self.time, bool) or not isinstance(self.time, int):
            raise ValueError(f"Trade time must be integer milliseconds, got {self.time!r}")

    @property
    def pair(self) -> str:
        return f"{self.base_asset}/{self.quote_asset}"

    def to_dict(self) -> dict[str, Any]:
        """Render the trade with the field names used by downstream valuation."""
        out: dict[str, Any] = {
            "exchange": self.exchange.value,
            "baseAsset": self.base_asset,
            "quoteAsset": self.quote_asset,
            "baseAmount": self.base_amount,
            "quoteAmount": self.quote_amount,
            "sell": self.sell,
            "time": self.time,
            "feeAsset": self.fee_asset,
            "feeAmount": self.fee_amount,
        }
        if self.value is not None:
            out["value"] = self.value
        if self.fee is not None:
            out["fee"] = self.fee
        return out
