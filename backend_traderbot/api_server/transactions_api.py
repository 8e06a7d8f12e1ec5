"""
FastAPI router: transaction analytics and per-wallet transaction/conversation log.

GET /api/transactions computes the chart bundle fresh from the full store on every
request. If the store cannot be read the request fails as a whole; no partial
bundle is returned.
"""

from __future__ import annotations

from datetime import tzinfo
from typing import Any, Callable, Literal

from fastapi import APIRouter, Body, Depends, HTTPException
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field

from backend_traderbot.analytics import build_chart_bundle
from backend_traderbot.config.env import get_analytics_timezone, get_timeline_limit
from backend_traderbot.core.exceptions import (
    DuplicateTransactionError,
    InvalidTransactionError,
    TransactionStoreError,
)
from backend_traderbot.traderbot_logging import get_logger
from backend_traderbot.transactions import conversation_log, store
from backend_traderbot.transactions.models import TransactionRecord, dump_transaction, parse_transaction

logger = get_logger(__name__)

router = APIRouter(tags=["transactions"])

RecordSource = Callable[[], list[TransactionRecord]]


def get_record_source() -> RecordSource:
    """Dependency: where the analytics endpoint reads the full record list from."""
    return store.get_all_transactions


def get_display_timezone() -> tzinfo:
    """Dependency: timezone used to render chart dates (ANALYTICS_TIMEZONE)."""
    return get_analytics_timezone()


# -----------------------------------------------------------------------------
# Request / response models
# -----------------------------------------------------------------------------


class RecordTransactionResponse(BaseModel):
    wallet: str
    id: str = Field(..., description="Record id")
    type: str = Field(..., description="swap | stake")


class ConversationRequest(BaseModel):
    """POST /api/conversations/{wallet} body."""

    user_input: str = Field(..., alias="userInput", min_length=1)
    response: str = ""
    kind: Literal["chat", "stake"] = Field("chat", description="stake also logs a stake record")

    model_config = ConfigDict(populate_by_name=True)


# -----------------------------------------------------------------------------
# Routes
# -----------------------------------------------------------------------------


@router.get("/transactions")
def get_transaction_analytics(
    source: RecordSource = Depends(get_record_source),
    tz: tzinfo = Depends(get_display_timezone),
) -> dict[str, Any]:
    """Return balances, chart data and the raw records over all wallets."""
    try:
        records = source()
    except TransactionStoreError as e:
        logger.error("transaction_analytics_load_failed", error=str(e))
        raise HTTPException(status_code=500, detail="Failed to load transactions") from e
    return build_chart_bundle(records, tz=tz, timeline_limit=get_timeline_limit())


@router.get("/transactions/{wallet}")
def get_wallet_transactions(wallet: str) -> list[dict[str, Any]]:
    """Return one wallet's records in append order."""
    wallet = wallet.strip()
    if not wallet:
        raise HTTPException(status_code=400, detail="wallet must be non-empty")
    try:
        return [dump_transaction(tx) for tx in store.get_transactions(wallet)]
    except TransactionStoreError as e:
        raise HTTPException(status_code=500, detail="Failed to load transactions") from e


@router.post("/transactions/{wallet}", response_model=RecordTransactionResponse, status_code=201)
def post_wallet_transaction(wallet: str, payload: dict[str, Any] = Body(...)) -> JSONResponse:
    """Append a swap or stake record to the wallet's history. 409 when the id already exists."""
    wallet = wallet.strip()
    if not wallet:
        raise HTTPException(status_code=400, detail="wallet must be non-empty")
    try:
        tx = parse_transaction(payload)
    except InvalidTransactionError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    try:
        store.record_transaction(wallet, tx)
    except DuplicateTransactionError as e:
        raise HTTPException(status_code=409, detail=str(e)) from e
    except TransactionStoreError as e:
        raise HTTPException(status_code=500, detail="Failed to record transaction") from e
    return JSONResponse(
        status_code=201,
        content=RecordTransactionResponse(wallet=wallet, id=tx.id, type=tx.type).model_dump(),
    )


@router.get("/conversations/{wallet}")
def get_wallet_conversations(wallet: str) -> list[dict[str, Any]]:
    try:
        return conversation_log.get_conversations(wallet)
    except TransactionStoreError as e:
        raise HTTPException(status_code=500, detail="Failed to load conversations") from e


@router.post("/conversations/{wallet}", status_code=201)
def post_wallet_conversation(wallet: str, body: ConversationRequest) -> JSONResponse:
    """Log a chat entry; kind=stake also records a stake transaction."""
    wallet = wallet.strip()
    if not wallet:
        raise HTTPException(status_code=400, detail="wallet must be non-empty")
    try:
        if body.kind == "stake":
            tx = conversation_log.log_stake_interaction(wallet, body.user_input, body.response)
            content: dict[str, Any] = {"wallet": wallet, "transaction": dump_transaction(tx)}
        else:
            entry = conversation_log.record_conversation(wallet, body.user_input, body.response)
            content = {"wallet": wallet, "conversation": entry}
    except TransactionStoreError as e:
        raise HTTPException(status_code=500, detail="Failed to record conversation") from e
    return JSONResponse(status_code=201, content=content)
