"""Tests for the HTTP surface."""

import pytest
from fastapi.testclient import TestClient

from tradestream import api
from tradestream.api import app
from tradestream.config import Settings

BITTREX_CSV = (
    "OrderUuid,Exchange,Type,Quantity,Limit,CommissionPaid,Price,Opened,Closed\n"
    "x,BTC-ETH,LIMIT_SELL,2.5,0.05,0.001,0.0501,2021-01-01,2021-01-02T00:00:00Z\n"
)


@pytest.fixture
def client():
    return TestClient(app)


class TestHealth:
    def test_lists_formats(self, client):
        resp = client.get("/health")
        assert resp.status_code == 200
        body = resp.json()
        assert body["status"] == "ok"
        assert sorted(body["formats"]) == ["Binance", "Bittrex", "Kraken"]


class TestParse:
    def test_bittrex_export(self, client):
        resp = client.post("/parse", json={"csv_text": BITTREX_CSV})
        assert resp.status_code == 200
        body = resp.json()
        assert body["count"] == 1
        assert body["unrecognized"] == []
        assert body["trades"][0] == {
            "exchange": "Bittrex",
            "baseAsset": "BTC",
            "quoteAsset": "ETH",
            "baseAmount": 0.0501,
            "quoteAmount": 2.5,
            "sell": True,
            "time": 1609545600000,
            "feeAsset": "BTC",
            "feeAmount": 0.001,
        }

    def test_unknown_format(self, client):
        resp = client.post("/parse", json={"csv_text": "Date,Ticker\n2021-01-01,AAPL\n"})
        assert resp.status_code == 200
        assert resp.json() == {"trades": [], "count": 0, "unrecognized": ["Date|Ticker"]}

    def test_malformed_record(self, client):
        bad = BITTREX_CSV.replace("2021-01-02T00:00:00Z", "sometime")
        resp = client.post("/parse", json={"csv_text": bad, "verbose": True})
        assert resp.status_code == 422
        assert "Bittrex record #1" in resp.json()["error"]

    def test_empty_body(self, client):
        resp = client.post("/parse", json={"csv_text": ""})
        assert resp.status_code == 200
        assert resp.json()["count"] == 0

    def test_keeps_configured_settings(self, client, monkeypatch):
        monkeypatch.setattr(
            api, "_settings", Settings(injected_fields=("_source",), chunk_size=1)
        )
        text = BITTREX_CSV.replace("Closed\n", "Closed,_source\n").replace(
            "00:00:00Z\n", "00:00:00Z,orders.csv\n"
        )
        resp = client.post("/parse", json={"csv_text": text, "verbose": True})
        assert resp.status_code == 200
        assert resp.json()["count"] == 1
