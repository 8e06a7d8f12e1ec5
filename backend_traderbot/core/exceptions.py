"""
Application-level exceptions.

Domain exceptions for the transaction store and API error handling.
Analytics derivations never raise these for malformed records; they are
reserved for storage and request validation failures.
"""

from __future__ import annotations


class TraderBotError(Exception):
    """Base class for TraderBot errors."""


class InvalidTransactionError(TraderBotError, ValueError):
    """A stored or submitted document is not a valid swap/stake record."""


class DuplicateTransactionError(TraderBotError):
    """A record with the same id is already stored."""

    def __init__(self, tx_id: str) -> None:
        super().__init__(f"Transaction {tx_id!r} already recorded")
        self.tx_id = tx_id


class TransactionStoreError(TraderBotError):
    """The transaction store is unavailable or a query failed."""
