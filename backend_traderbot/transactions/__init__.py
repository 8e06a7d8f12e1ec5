"""
Transaction records logged by the chat agent: models, the SQLAlchemy-backed
store, and the conversation log.
"""

from backend_traderbot.transactions.models import (
    StakeTransaction,
    SwapTransaction,
    Transaction,
    TransactionRecord,
    dump_transaction,
    parse_transaction,
)

__all__ = [
    "StakeTransaction",
    "SwapTransaction",
    "Transaction",
    "TransactionRecord",
    "dump_transaction",
    "parse_transaction",
]
