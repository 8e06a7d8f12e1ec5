"""
FastAPI server: transaction log and analytics API.

Exposes GET /api/transactions (dashboard chart bundle), per-wallet transaction and
conversation logging under /api, GET /wallets and GET /health. Config via env
(DATABASE_URL / TRADERBOT_DB_PATH, ANALYTICS_TIMEZONE).
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, HTTPException
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from backend_traderbot import __version__
from backend_traderbot.api_server.transactions_api import router as transactions_router
from backend_traderbot.core.exceptions import TransactionStoreError
from backend_traderbot.traderbot_logging import get_logger
from backend_traderbot.transactions import store

logger = get_logger(__name__)


class WalletSummary(BaseModel):
    """GET /wallets item."""

    wallet: str = Field(..., description="Wallet address")
    transaction_count: int = Field(..., ge=0, description="Number of stored records")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create store tables on startup."""
    try:
        store.init_db()
    except TransactionStoreError as e:
        logger.warning("transaction_store_init_skip", error=str(e))
    logger.info("api_started", version=__version__)
    yield
    logger.info("api_stopped")


# -----------------------------------------------------------------------------
# App and routes
# -----------------------------------------------------------------------------

app = FastAPI(
    title="Backend TraderBot API",
    description="Transaction log and chart-ready analytics for the DeFi chat assistant.",
    version=__version__,
    lifespan=lifespan,
)

app.include_router(transactions_router, prefix="/api")


@app.get("/wallets", response_model=list[WalletSummary])
def get_wallets() -> list[dict[str, Any]]:
    """Return all wallets with their stored record counts."""
    try:
        return store.list_wallets()
    except TransactionStoreError as e:
        logger.exception("wallets_list_failed", error=str(e))
        raise HTTPException(status_code=500, detail="Failed to list wallets") from e


@app.get("/health")
def health() -> dict[str, str]:
    """Liveness probe: API is up."""
    return {"status": "ok"}


@app.exception_handler(HTTPException)
def http_exception_handler(request: Any, exc: HTTPException) -> JSONResponse:
    """Consistent JSON error response for HTTPException."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail},
    )
