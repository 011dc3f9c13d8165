"""Normalize exchange CSV exports (Binance, Bittrex, Kraken) into trades."""

__version__ = "1.0.0"

from .config import Settings
from .currency import CurrencyService, DefaultCurrencyService
from .diagnostics import TradeDiagnostics
from .stream import RecordParseError, TradeParseStream, parse_records
from .trade import Exchange, Trade
