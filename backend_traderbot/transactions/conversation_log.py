"""
Conversation log: per-wallet chat entries (user input + agent response).

Staking is mocked by the agent, so a staking chat is also logged as a stake
record to show up in transaction analytics.
"""

from __future__ import annotations

import time
import uuid
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from backend_traderbot.core.exceptions import TransactionStoreError
from backend_traderbot.traderbot_logging import bind_wallet
from backend_traderbot.transactions.models import StakeDetails, StakeTransaction
from backend_traderbot.transactions.store import (
    WalletConversation,
    WalletData,
    append_transaction,
    get_or_create_wallet,
    normalize_wallet,
    session_scope,
)


def _now_ms() -> int:
    return int(time.time() * 1000)


def append_conversation(
    session: Session,
    wallet_row: WalletData,
    user_input: str,
    response: str,
    timestamp: int,
) -> WalletConversation:
    """Add a conversation entry inside an open session; the caller commits."""
    entry = WalletConversation(
        wallet_id=wallet_row.id,
        user_input=user_input,
        response=response or "",
        timestamp=timestamp,
    )
    session.add(entry)
    session.flush()
    return entry


def record_conversation(
    wallet: str,
    user_input: str,
    response: str,
    timestamp: int | None = None,
) -> dict[str, Any]:
    """Append a conversation entry to the wallet's history. Returns the stored entry."""
    wallet = normalize_wallet(wallet)
    log = bind_wallet(wallet, __name__)
    ts = timestamp if timestamp is not None else _now_ms()
    try:
        with session_scope() as session:
            wallet_row = get_or_create_wallet(session, wallet)
            stored = append_conversation(session, wallet_row, user_input, response, ts).to_dict()
    except SQLAlchemyError as e:
        log.exception("conversation_record_failed", error=str(e))
        raise TransactionStoreError("Failed to record conversation") from e
    log.info("conversation_recorded")
    return stored


def get_conversations(wallet: str) -> list[dict[str, Any]]:
    """Return [{userInput, response, timestamp}] for the wallet in append order."""
    wallet = (wallet or "").strip()
    if not wallet:
        return []
    try:
        with session_scope() as session:
            rows = (
                session.query(WalletConversation)
                .join(WalletData, WalletConversation.wallet_id == WalletData.id)
                .filter(WalletData.wallet == wallet)
                .order_by(WalletConversation.id)
                .all()
            )
            return [r.to_dict() for r in rows]
    except SQLAlchemyError as e:
        bind_wallet(wallet, __name__).exception("conversation_get_failed", error=str(e))
        raise TransactionStoreError("Failed to load conversations") from e


def log_stake_interaction(wallet: str, user_input: str, response: str) -> StakeTransaction:
    """
    Record a staking chat as a conversation entry and as a stake record.
    Both rows are written in one database transaction: either both are stored or neither.
    """
    wallet = normalize_wallet(wallet)
    log = bind_wallet(wallet, __name__)
    ts = _now_ms()
    tx = StakeTransaction(
        id=f"stake-{uuid.uuid4().hex}",
        details=StakeDetails(user_input=user_input, response=response or "", timestamp=ts),
    )
    try:
        with session_scope() as session:
            wallet_row = get_or_create_wallet(session, wallet)
            append_conversation(session, wallet_row, user_input, response, ts)
            append_transaction(session, wallet_row, tx)
    except SQLAlchemyError as e:
        log.exception("stake_interaction_failed", tx_id=tx.id, error=str(e))
        raise TransactionStoreError("Failed to record stake interaction") from e
    log.info("stake_interaction_recorded", tx_id=tx.id)
    return tx
