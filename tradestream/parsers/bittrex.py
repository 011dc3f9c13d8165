"""
Bittrex order history export.

Columns: OrderUuid, Exchange, Type, Quantity, Limit, CommissionPaid, Price,
Opened, Closed

``Exchange`` holds the pair as ``BASE-QUOTE``. Bittrex reports the executed
price in ``Price`` and the traded quantity in ``Quantity``; they map to
``base_amount`` and ``quote_amount`` respectively.
"""

from __future__ import annotations

from typing import Mapping

from ..currency import CurrencyService, normalize_code
from ..trade import Exchange, Trade
from .values import parse_number, parse_text, parse_time


def split_pair(pair: str) -> tuple[str, str]:
    """Split 'BTC-ETH' into ('BTC', 'ETH')."""
    parts = parse_text(pair, "Exchange").split("-")
    if len(parts) != 2 or not all(p.strip() for p in parts):
        raise ValueError(f"Invalid Bittrex pair: {pair!r}")
    return parts[0], parts[1]


async def normalize_bittrex(record: Mapping[str, str], currencies: CurrencyService) -> Trade:
    """Map one Bittrex row to a Trade. The fee is charged in the base asset."""
    base_raw, quote_raw = split_pair(record["Exchange"])
    base_asset = await normalize_code(currencies, base_raw)
    quote_asset = await normalize_code(currencies, quote_raw)

    return Trade(
        exchange=Exchange.BITTREX,
        base_asset=base_asset,
        quote_asset=quote_asset,
        base_amount=parse_number(record["Price"]),
        quote_amount=parse_number(record["Quantity"]),
        sell="SELL" in parse_text(record["Type"], "Type"),
        time=parse_time(record["Closed"]),
        fee_asset=base_asset,
        fee_amount=parse_number(record["CommissionPaid"]),
    )
