"""
Pytest tests for the TraderBot API (analytics bundle, transaction and conversation log).

Uses temporary SQLite DB via conftest fixtures.
"""

from __future__ import annotations

from conftest import HOUR_MS, T1

WALLET = "0x1111111111111111111111111111111111111111"
WALLET_2 = "0x2222222222222222222222222222222222222222"


def _swap_doc(tx_id, amounts=("10", "5"), timestamp=T1):
    return {
        "id": tx_id,
        "type": "swap",
        "details": {
            "tokens": ["USDC", "UNI"],
            "amounts": list(amounts),
            "balances": {"before": {"USDC": "100"}, "after": {"USDC": "90"}},
            "timestamp": timestamp,
            "txHash": "0xdeadbeef",
            "status": "success",
        },
    }


def _stake_doc(tx_id, timestamp=T1):
    return {
        "id": tx_id,
        "type": "stake",
        "details": {"userInput": "stake 2", "response": "ok", "timestamp": timestamp},
    }


def test_health(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json() == {"status": "ok"}


def test_analytics_empty_store(client):
    """No records: bundle renders with empty/zero forms."""
    r = client.get("/api/transactions")
    assert r.status_code == 200
    data = r.json()
    assert data["balancesNow"] == {}
    assert data["balancesBefore"] == {}
    assert data["transactions"] == []
    assert data["chartData"]["doughnut"] == [{"type": "swap", "value": 0.0}, {"type": "stake", "value": 0.0}]


def test_analytics_example_scenario(client):
    """Records posted for a wallet flow through to the chart bundle."""
    assert client.post(f"/api/transactions/{WALLET}", json=_swap_doc("swap-1")).status_code == 201
    assert client.post(f"/api/transactions/{WALLET}", json=_stake_doc("stake-1", T1 + HOUR_MS)).status_code == 201
    r = client.post(f"/api/transactions/{WALLET}", json=_swap_doc("swap-2", ("3", "1"), T1 + 2 * HOUR_MS))
    assert r.status_code == 201
    assert r.json() == {"wallet": WALLET, "id": "swap-2", "type": "swap"}

    data = client.get("/api/transactions").json()
    assert data["balancesNow"] == {"USDC": 13.0, "UNI": 6.0}
    assert data["balancesBefore"] == {"USDC": 10.0, "UNI": 5.0}
    assert data["balanceChange"] == {"USDC": 3.0, "UNI": 1.0}
    chart = data["chartData"]
    assert chart["perTokenCumulative"]["USDC"] == [10.0, 10.0, 13.0]
    assert [d["type"] for d in chart["doughnut"]] == ["swap", "stake"]
    assert abs(chart["doughnut"][0]["value"] - 2 / 3) < 1e-9
    assert chart["timeline"][1]["desc"] == "stake 2"
    assert chart["timeline"][0]["desc"] is None
    assert [t["id"] for t in data["transactions"]] == ["swap-1", "stake-1", "swap-2"]
    assert data["transactions"][0]["details"]["txHash"] == "0xdeadbeef"


def test_analytics_uses_display_timezone(client, monkeypatch):
    monkeypatch.setenv("ANALYTICS_TIMEZONE", "Asia/Tokyo")
    client.post(f"/api/transactions/{WALLET}", json=_swap_doc("swap-1"))
    data = client.get("/api/transactions").json()
    assert data["chartData"]["heatmapData"] == [{"date": "2023-11-15", "USDC": 1, "UNI": 1}]


def test_analytics_timezone_directory_name_does_not_fail_request(client, monkeypatch):
    monkeypatch.setenv("ANALYTICS_TIMEZONE", "America")
    client.post(f"/api/transactions/{WALLET}", json=_swap_doc("swap-1"))
    r = client.get("/api/transactions")
    assert r.status_code == 200
    assert r.json()["chartData"]["heatmapData"] == [{"date": "2023-11-14", "USDC": 1, "UNI": 1}]


def test_analytics_store_failure_returns_500(client):
    """Store unavailable: the whole request fails; no partial bundle."""
    from backend_traderbot.api_server.server import app
    from backend_traderbot.api_server.transactions_api import get_record_source
    from backend_traderbot.core.exceptions import TransactionStoreError

    def failing_source():
        raise TransactionStoreError("database is down")

    app.dependency_overrides[get_record_source] = lambda: failing_source
    r = client.get("/api/transactions")
    assert r.status_code == 500
    assert r.json() == {"detail": "Failed to load transactions"}


def test_post_transaction_duplicate_returns_409(client):
    assert client.post(f"/api/transactions/{WALLET}", json=_swap_doc("swap-1")).status_code == 201
    r = client.post(f"/api/transactions/{WALLET_2}", json=_swap_doc("swap-1"))
    assert r.status_code == 409
    assert "swap-1" in r.json()["detail"]


def test_post_transaction_invalid_returns_400(client):
    r = client.post(f"/api/transactions/{WALLET}", json={"id": "x", "type": "bridge", "details": {}})
    assert r.status_code == 400
    r = client.post(f"/api/transactions/{WALLET}", json={"id": "x", "type": "stake", "details": {}})
    assert r.status_code == 400


def test_get_wallet_transactions(client):
    client.post(f"/api/transactions/{WALLET}", json=_swap_doc("swap-1"))
    client.post(f"/api/transactions/{WALLET_2}", json=_stake_doc("stake-1"))
    r = client.get(f"/api/transactions/{WALLET}")
    assert r.status_code == 200
    assert [t["id"] for t in r.json()] == ["swap-1"]
    assert client.get("/api/transactions/0xunknown").json() == []


def test_conversations_and_stake_logging(client):
    r = client.post(f"/api/conversations/{WALLET}", json={"userInput": "hi", "response": "hello"})
    assert r.status_code == 201
    assert r.json()["conversation"]["userInput"] == "hi"

    r = client.post(
        f"/api/conversations/{WALLET}",
        json={"userInput": "stake 1 ETH", "response": "staked (mock)", "kind": "stake"},
    )
    assert r.status_code == 201
    assert r.json()["transaction"]["type"] == "stake"

    conversations = client.get(f"/api/conversations/{WALLET}").json()
    assert [c["userInput"] for c in conversations] == ["hi", "stake 1 ETH"]
    data = client.get("/api/transactions").json()
    assert data["chartData"]["transactionTypes"] == [{"type": "swap", "count": 0}, {"type": "stake", "count": 1}]


def test_list_wallets(client):
    client.post(f"/api/transactions/{WALLET}", json=_swap_doc("swap-1"))
    client.post(f"/api/transactions/{WALLET}", json=_stake_doc("stake-1"))
    r = client.get("/wallets")
    assert r.status_code == 200
    assert r.json() == [{"wallet": WALLET, "transaction_count": 2}]
