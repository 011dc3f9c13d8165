"""Diagnostics hook: log lines for parsed trades and parsing anomalies."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

from .parsers.kraken import PairingAnomaly
from .trade import Trade

_TIME_FORMAT = "%Y-%m-%d %H:%M"


def describe_trade(trade: Trade) -> str:
    """One-line human-readable summary, time shown in the local timezone."""
    local = datetime.fromtimestamp(trade.time / 1000).strftime(_TIME_FORMAT)
    return f"Parsed {trade.pair} trade from {local} on {trade.exchange.value}."


class TradeDiagnostics:
    """Observer invoked by the stream driver. Never alters the stream."""

    def __init__(self, logger: Optional[logging.Logger] = None) -> None:
        self.logger = logger or logging.getLogger(__name__)

    def trade_parsed(self, trade: Trade) -> None:
        self.logger.info(describe_trade(trade))

    def unrecognized_format(self, signature: str) -> None:
        self.logger.warning('Unrecognized trade keys: "%s".', signature)

    def pairing_anomaly(self, anomaly: PairingAnomaly) -> None:
        self.logger.warning(anomaly.message)
