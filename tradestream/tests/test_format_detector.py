"""Tests for signature-based format detection."""

from tradestream.parsers.format_detector import (
    FormatKind,
    compute_signature,
    detect,
    is_injected_field,
    strip_injected_fields,
)
from tradestream.trade import Exchange

BINANCE_FIELDS = ["Date(UTC)", "Market", "Type", "Price", "Amount", "Total", "Fee", "Fee Coin"]
BITTREX_FIELDS = [
    "OrderUuid", "Exchange", "Type", "Quantity", "Limit",
    "CommissionPaid", "Price", "Opened", "Closed",
]
KRAKEN_FIELDS = ["txid", "refid", "time", "type", "aclass", "asset", "amount", "fee", "balance"]


class TestDetect:
    def test_binance(self):
        assert detect(BINANCE_FIELDS) is FormatKind.BINANCE_TRADES

    def test_bittrex(self):
        assert detect(BITTREX_FIELDS) is FormatKind.BITTREX_ORDERS

    def test_kraken(self):
        assert detect(KRAKEN_FIELDS) is FormatKind.KRAKEN_LEDGER

    def test_unknown(self):
        assert detect(["Date", "Ticker", "Quantity"]) is None

    def test_column_order_matters(self):
        assert detect(list(reversed(KRAKEN_FIELDS))) is None

    def test_missing_column(self):
        assert detect(BINANCE_FIELDS[:-1]) is None

    def test_accepts_dict_keys(self):
        record = {name: "" for name in BITTREX_FIELDS}
        assert detect(record) is FormatKind.BITTREX_ORDERS

    def test_kind_exchange(self):
        assert FormatKind.BINANCE_TRADES.exchange is Exchange.BINANCE
        assert FormatKind.BITTREX_ORDERS.exchange is Exchange.BITTREX
        assert FormatKind.KRAKEN_LEDGER.exchange is Exchange.KRAKEN


class TestSignature:
    def test_joined_with_pipe(self):
        assert compute_signature(["a", "b", "c"]) == "a|b|c"

    def test_empty(self):
        assert compute_signature([]) == ""


class TestInjectedFields:
    def test_none_key(self):
        assert is_injected_field(None)

    def test_pandas_placeholder(self):
        assert is_injected_field("Unnamed: 9")
        assert not is_injected_field("Unnamed")

    def test_extra_names(self):
        assert is_injected_field("_source", extra={"_source"})
        assert not is_injected_field("_source")

    def test_strip_keeps_order(self):
        record = {"txid": "1", None: ["x"], "refid": "2", "Unnamed: 3": "", "time": "t"}
        stripped = strip_injected_fields(record)
        assert list(stripped) == ["txid", "refid", "time"]

    def test_strip_does_not_mutate(self):
        record = {"a": "1", "Unnamed: 1": ""}
        strip_injected_fields(record)
        assert "Unnamed: 1" in record

    def test_recognized_after_strip(self):
        record = {name: "" for name in KRAKEN_FIELDS}
        record["Unnamed: 9"] = ""
        assert detect(record) is None
        assert detect(strip_injected_fields(record)) is FormatKind.KRAKEN_LEDGER
