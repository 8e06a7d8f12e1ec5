"""
TraderBot transaction store: SQLAlchemy-backed per-wallet transaction history.

Uses DATABASE_URL when set; otherwise falls back to SQLite (TRADERBOT_DB_PATH or
traderbot.db). Each wallet's records keep their append order; the full history
is the concatenation of every wallet's history, with no ordering across wallets
beyond wallet registration order.
"""

from __future__ import annotations

import json
from contextlib import contextmanager
from typing import Any, Iterator

from sqlalchemy import Column, ForeignKey, Integer, String, Text, UniqueConstraint, create_engine, func
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from backend_traderbot.config.env import get_database_url
from backend_traderbot.core.exceptions import (
    DuplicateTransactionError,
    InvalidTransactionError,
    TransactionStoreError,
)
from backend_traderbot.traderbot_logging import bind_wallet, get_logger
from backend_traderbot.transactions.models import TransactionRecord, dump_transaction, parse_transaction

logger = get_logger(__name__)

Base = declarative_base()

# -----------------------------------------------------------------------------
# SQLAlchemy models
# -----------------------------------------------------------------------------


class WalletData(Base):
    """One row per wallet that has logged at least one transaction or conversation."""

    __tablename__ = "wallet_data"

    id = Column(Integer, primary_key=True, autoincrement=True)
    wallet = Column(String(128), unique=True, nullable=False, index=True)


class WalletTransaction(Base):
    """
    One stored record. payload holds the full JSON document (wire names);
    seq is the record's position in its wallet's append order.
    """

    __tablename__ = "wallet_transactions"
    __table_args__ = (UniqueConstraint("wallet_id", "seq", name="uq_wallet_transactions_seq"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    wallet_id = Column(Integer, ForeignKey("wallet_data.id"), nullable=False, index=True)
    tx_id = Column(String(128), unique=True, nullable=False, index=True)
    tx_type = Column(String(16), nullable=False, index=True)
    seq = Column(Integer, nullable=False)
    timestamp = Column(Integer, nullable=False)  # epoch ms
    payload = Column(Text, nullable=False)


class WalletConversation(Base):
    """Conversation entry (user input + agent response) appended per wallet."""

    __tablename__ = "wallet_conversations"

    id = Column(Integer, primary_key=True, autoincrement=True)
    wallet_id = Column(Integer, ForeignKey("wallet_data.id"), nullable=False, index=True)
    user_input = Column(Text, nullable=False)
    response = Column(Text, nullable=False, default="")
    timestamp = Column(Integer, nullable=False)  # epoch ms

    def to_dict(self) -> dict[str, Any]:
        return {
            "userInput": self.user_input,
            "response": self.response or "",
            "timestamp": self.timestamp,
        }


# -----------------------------------------------------------------------------
# Engine and session
# -----------------------------------------------------------------------------

_engine = None
_SessionLocal: sessionmaker | None = None


def _safe_url(url: str) -> str:
    return url.split("?")[0].split("//")[-1].split("@")[-1]


def _get_engine():
    """Create or return cached engine."""
    global _engine
    if _engine is None:
        url = get_database_url()
        connect_args = {}
        if url.startswith("sqlite"):
            connect_args["check_same_thread"] = False
        _engine = create_engine(url, connect_args=connect_args, pool_pre_ping=True)
        logger.info("transaction_store_engine", url=_safe_url(url))
    return _engine


def _get_session_factory() -> sessionmaker:
    global _SessionLocal
    if _SessionLocal is None:
        _SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=_get_engine())
    return _SessionLocal


@contextmanager
def session_scope() -> Iterator[Session]:
    """Context manager for a single session. Commits on success, rolls back on error."""
    factory = _get_session_factory()
    session = factory()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def normalize_wallet(wallet: str) -> str:
    wallet = (wallet or "").strip()
    if not wallet:
        raise ValueError("Wallet address is required")
    return wallet


def get_or_create_wallet(session: Session, wallet: str) -> WalletData:
    """Return the wallet row, inserting it on first use (upsert)."""
    row = session.query(WalletData).filter(WalletData.wallet == wallet).first()
    if row is None:
        row = WalletData(wallet=wallet)
        session.add(row)
        session.flush()
    return row


def init_db() -> None:
    """
    Create transaction store tables if they do not exist.
    Safe to call on every startup.
    """
    try:
        engine = _get_engine()
        Base.metadata.create_all(bind=engine)
        logger.info("transaction_store_init_db", url=_safe_url(get_database_url()))
    except SQLAlchemyError as e:
        logger.exception("transaction_store_init_db_failed", error=str(e))
        raise TransactionStoreError("Failed to initialise transaction store") from e


# -----------------------------------------------------------------------------
# Public API
# -----------------------------------------------------------------------------

# Appends retried once when the (wallet, seq) slot was taken by a concurrent writer.
RECORD_ATTEMPTS = 2


def _next_seq(session: Session, wallet_id: int) -> int:
    last_seq = (
        session.query(func.max(WalletTransaction.seq))
        .filter(WalletTransaction.wallet_id == wallet_id)
        .scalar()
    )
    return 0 if last_seq is None else last_seq + 1


def append_transaction(session: Session, wallet_row: WalletData, tx: TransactionRecord) -> WalletTransaction:
    """
    Add a record at the end of the wallet's history inside an open session.
    The caller owns the transaction; IntegrityError surfaces on flush.
    """
    row = WalletTransaction(
        wallet_id=wallet_row.id,
        tx_id=tx.id,
        tx_type=tx.type,
        seq=_next_seq(session, wallet_row.id),
        timestamp=tx.details.timestamp,
        payload=json.dumps(dump_transaction(tx)),
    )
    session.add(row)
    session.flush()
    return row


def transaction_exists(tx_id: str) -> bool:
    """True when a record with this id is stored for any wallet."""
    try:
        with session_scope() as session:
            found = session.query(WalletTransaction.id).filter(WalletTransaction.tx_id == tx_id).first()
            return found is not None
    except SQLAlchemyError as e:
        logger.exception("transaction_lookup_failed", tx_id=tx_id, error=str(e))
        raise TransactionStoreError("Failed to look up transaction") from e


def record_transaction(wallet: str, tx: TransactionRecord) -> None:
    """
    Append a record to the wallet's history, creating the wallet row if needed.

    Raises ValueError for an empty wallet, DuplicateTransactionError when the
    record id is already stored, TransactionStoreError on database failure.
    A constraint violation that is not a duplicate id (a concurrent append took
    the same position) is retried once before giving up.
    """
    wallet = normalize_wallet(wallet)
    log = bind_wallet(wallet, __name__)
    for attempt in range(1, RECORD_ATTEMPTS + 1):
        try:
            with session_scope() as session:
                append_transaction(session, get_or_create_wallet(session, wallet), tx)
        except IntegrityError as e:
            if transaction_exists(tx.id):
                log.info("transaction_already_recorded", tx_id=tx.id)
                raise DuplicateTransactionError(tx.id) from e
            if attempt < RECORD_ATTEMPTS:
                log.warning("transaction_record_conflict", tx_id=tx.id, attempt=attempt)
                continue
            log.error("transaction_record_failed", tx_id=tx.id, attempts=attempt, error=str(e))
            raise TransactionStoreError("Failed to record transaction") from e
        except SQLAlchemyError as e:
            log.exception("transaction_record_failed", tx_id=tx.id, error=str(e))
            raise TransactionStoreError("Failed to record transaction") from e
        log.info("transaction_recorded", tx_id=tx.id, tx_type=tx.type)
        return


def _load_rows(rows: list[WalletTransaction]) -> list[TransactionRecord]:
    """Parse stored payloads; rows that no longer validate are skipped."""
    records: list[TransactionRecord] = []
    for row in rows:
        try:
            records.append(parse_transaction(json.loads(row.payload)))
        except (InvalidTransactionError, json.JSONDecodeError) as e:
            logger.warning("transaction_row_skipped", tx_id=row.tx_id, error=str(e))
    return records


def get_transactions(wallet: str) -> list[TransactionRecord]:
    """Return one wallet's records in append order; [] for an unknown wallet."""
    wallet = (wallet or "").strip()
    if not wallet:
        return []
    try:
        with session_scope() as session:
            rows = (
                session.query(WalletTransaction)
                .join(WalletData, WalletTransaction.wallet_id == WalletData.id)
                .filter(WalletData.wallet == wallet)
                .order_by(WalletTransaction.seq)
                .all()
            )
            return _load_rows(rows)
    except SQLAlchemyError as e:
        bind_wallet(wallet, __name__).exception("transaction_get_failed", error=str(e))
        raise TransactionStoreError("Failed to load transactions") from e


def get_all_transactions() -> list[TransactionRecord]:
    """
    Return every wallet's records: wallets in registration order, each in append order.
    Returns [] when nothing is stored.
    """
    try:
        with session_scope() as session:
            rows = (
                session.query(WalletTransaction)
                .order_by(WalletTransaction.wallet_id, WalletTransaction.seq)
                .all()
            )
            records = _load_rows(rows)
    except SQLAlchemyError as e:
        logger.exception("transaction_get_all_failed", error=str(e))
        raise TransactionStoreError("Failed to load transactions") from e
    logger.debug("transaction_get_all", record_count=len(records))
    return records


def list_wallets() -> list[dict[str, Any]]:
    """Return [{wallet, transaction_count}] in registration order."""
    try:
        with session_scope() as session:
            rows = (
                session.query(WalletData.wallet, func.count(WalletTransaction.id))
                .outerjoin(WalletTransaction, WalletTransaction.wallet_id == WalletData.id)
                .group_by(WalletData.id, WalletData.wallet)
                .order_by(WalletData.id)
                .all()
            )
            return [{"wallet": r[0], "transaction_count": int(r[1])} for r in rows]
    except SQLAlchemyError as e:
        logger.exception("transaction_list_wallets_failed", error=str(e))
        raise TransactionStoreError("Failed to list wallets") from e


def reset_engine_for_test() -> None:
    """
    Clear cached engine and session factory. For tests only; use with a new TRADERBOT_DB_PATH.
    """
    global _engine, _SessionLocal
    if _engine is not None:
        _engine.dispose()
    _engine = None
    _SessionLocal = None
