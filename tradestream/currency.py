"""
Currency code normalization and base/quote priority ranking.

The engine only depends on the ``CurrencyService`` contract:

- ``normalize_currency_code(code)`` canonicalizes a ticker (case folding,
  exchange aliases like Kraken's ``XXBT``)
- ``get_currency_priority(code)`` returns a total-order key; the lower value
  is treated as the base of a pair

Either method may be a coroutine function. ``normalize_code`` and
``currency_priority`` await the result when needed so callers can treat both
kinds of service the same way.
"""

from __future__ import annotations

import inspect
from typing import Any, Protocol


class CurrencyService(Protocol):
    def normalize_currency_code(self, code: str) -> Any: ...

    def get_currency_priority(self, code: str) -> Any: ...


# ---------------------------------------------------------------------------
# Known aliases and priority order
# ---------------------------------------------------------------------------

# Exchange-specific tickers -> canonical ticker
_ALIASES: dict[str, str] = {
    # Kraken ledger asset codes
    "XBT": "BTC",
    "XXBT": "BTC",
    "XETH": "ETH",
    "XETC": "ETC",
    "XLTC": "LTC",
    "XXRP": "XRP",
    "XXLM": "XLM",
    "XXMR": "XMR",
    "XZEC": "ZEC",
    "XREP": "REP",
    "XXDG": "DOGE",
    "XDG": "DOGE",
    "ZEUR": "EUR",
    "ZUSD": "USD",
    "ZCAD": "CAD",
    "ZGBP": "GBP",
    "ZJPY": "JPY",
    # Binance legacy tickers
    "BCC": "BCH",
    "BCHABC": "BCH",
    "IOTA": "MIOTA",
    # Bittrex
    "BCHSV": "BSV",
}

# Lowest index wins the base slot of a pair
_PRIORITY: list[str] = [
    "BTC",
    "ETH",
    "BNB",
    "USDT",
    "USDC",
    "BUSD",
    "USD",
    "EUR",
    "CAD",
    "GBP",
    "JPY",
]


class DefaultCurrencyService:
    """Static alias table and priority list."""

    def __init__(
        self,
        aliases: dict[str, str] | None = None,
        priority: list[str] | None = None,
    ) -> None:
        self.aliases = dict(_ALIASES if aliases is None else aliases)
        order = _PRIORITY if priority is None else priority
        self._priority_index = {code: i for i, code in enumerate(order)}

    def normalize_currency_code(self, code: str) -> str:
        cleaned = code.strip().upper()
        return self.aliases.get(cleaned, cleaned)

    def get_currency_priority(self, code: str) -> int:
        # Unknown codes all share the last rank
        return self._priority_index.get(
            self.normalize_currency_code(code), len(self._priority_index)
        )


# ---------------------------------------------------------------------------
# Sync/async adapters
# ---------------------------------------------------------------------------


async def normalize_code(service: CurrencyService, code: str) -> str:
    result = service.normalize_currency_code(code)
    if inspect.isawaitable(result):
        result = await result
    return result


async def currency_priority(service: CurrencyService, code: str) -> int:
    result = service.get_currency_priority(code)
    if inspect.isawaitable(result):
        result = await result
    return result
