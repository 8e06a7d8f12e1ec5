"""
Pytest fixtures for TraderBot tests. Uses a temporary SQLite DB for the transaction store.
"""

from __future__ import annotations

import pytest

from backend_traderbot.transactions.models import (
    StakeDetails,
    StakeTransaction,
    SwapDetails,
    SwapTransaction,
)

# 2023-11-14 22:13:20 UTC
T1 = 1_700_000_000_000
HOUR_MS = 3_600_000
DAY_MS = 24 * HOUR_MS


def make_swap(tx_id, tokens=("USDC", "UNI"), amounts=("10", "5"), timestamp=T1, **extra):
    return SwapTransaction(
        id=tx_id,
        details=SwapDetails(
            tokens=list(tokens) if tokens is not None else None,
            amounts=list(amounts) if amounts is not None else None,
            timestamp=timestamp,
            **extra,
        ),
    )


def make_stake(tx_id, user_input="stake 2", response="ok", timestamp=T1):
    return StakeTransaction(
        id=tx_id,
        details=StakeDetails(user_input=user_input, response=response, timestamp=timestamp),
    )


@pytest.fixture
def example_records():
    """swap USDC/UNI 10/5, stake, swap USDC/UNI 3/1: one hour apart."""
    return [
        make_swap("swap-1", amounts=("10", "5"), timestamp=T1),
        make_stake("stake-1", timestamp=T1 + HOUR_MS),
        make_swap("swap-2", amounts=("3", "1"), timestamp=T1 + 2 * HOUR_MS),
    ]


@pytest.fixture
def transaction_db(tmp_path, monkeypatch):
    """
    Point the transaction store at a temporary SQLite DB and create tables.
    Resets engine cache so each test gets a fresh DB. Unset DATABASE_URL so we use SQLite.
    """
    monkeypatch.delenv("DATABASE_URL", raising=False)
    monkeypatch.delenv("TRADERBOT_DB_URL", raising=False)
    monkeypatch.setenv("TRADERBOT_DB_PATH", str(tmp_path / "traderbot.db"))

    from backend_traderbot.transactions import store

    store.reset_engine_for_test()
    store.init_db()
    yield store
    store.reset_engine_for_test()


@pytest.fixture
def client(transaction_db, monkeypatch):
    """FastAPI TestClient. Depends on transaction_db so the temp DB is set before app runs."""
    from fastapi.testclient import TestClient

    from backend_traderbot.api_server.server import app

    monkeypatch.setenv("ANALYTICS_TIMEZONE", "UTC")
    app.dependency_overrides.clear()
    yield TestClient(app)
    app.dependency_overrides.clear()
