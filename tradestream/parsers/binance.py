"""
Binance trade history export.

Columns: Date(UTC), Market, Type, Price, Amount, Total, Fee, Fee Coin

Binance concatenates the pair into ``Market`` (e.g. ``ETHBTC``). The trailing
three characters are the currency the trade is priced in, which this system
treats as the base asset; ``Amount`` is the quantity of the leading currency.
"""

from __future__ import annotations

from typing import Mapping

from ..currency import CurrencyService, normalize_code
from ..trade import Exchange, Trade
from .values import parse_number, parse_text, parse_time

_BASE_WIDTH = 3


async def normalize_binance(record: Mapping[str, str], currencies: CurrencyService) -> Trade:
    """Map one Binance row to a Trade."""
    market = parse_text(record["Market"], "Market")
    amount = parse_number(record["Amount"])
    price = parse_number(record["Price"])

    return Trade(
        exchange=Exchange.BINANCE,
        base_asset=await normalize_code(currencies, market[-_BASE_WIDTH:]),
        quote_asset=await normalize_code(currencies, market[:-_BASE_WIDTH]),
        base_amount=amount * price,
        quote_amount=amount,
        sell="SELL" in parse_text(record["Type"], "Type"),
        time=parse_time(record["Date(UTC)"]),
        fee_asset=await normalize_code(
            currencies, parse_text(record["Fee Coin"], "Fee Coin")
        ),
        fee_amount=parse_number(record["Fee"]),
    )
