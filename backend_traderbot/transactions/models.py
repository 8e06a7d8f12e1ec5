"""
Transaction record models: swap and stake entries logged by the chat agent.

A record is a tagged union on ``type``. Swap details carry the token pair and
signed amounts moved; stake details carry the staking conversation. Wire names
are camelCase (txHash, userInput) to match the documents written by the agent.
"""

from __future__ import annotations

from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError, field_validator

from backend_traderbot.core.amounts import parse_amount
from backend_traderbot.core.exceptions import InvalidTransactionError

TX_TYPE_SWAP = "swap"
TX_TYPE_STAKE = "stake"


class _Record(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")


class TokenBalances(_Record):
    """Wallet balances (token -> decimal string) captured around a swap."""

    before: dict[str, str] = Field(default_factory=dict)
    after: dict[str, str] = Field(default_factory=dict)


class SwapDetails(_Record):
    tokens: list[str] | None = Field(None, description="[tokenIn, tokenOut]")
    amounts: list[str] | None = Field(None, description="Signed decimal strings aligned with tokens")
    balances: TokenBalances | None = None
    timestamp: int = Field(..., description="Epoch milliseconds")
    tx_hash: str | None = Field(None, alias="txHash")
    status: str | None = None
    response: Any = None

    @field_validator("amounts", mode="before")
    @classmethod
    def _amounts_as_strings(cls, value: Any) -> Any:
        # Older documents stored amounts as JSON numbers.
        if isinstance(value, (list, tuple)):
            return [v if isinstance(v, str) else str(v) for v in value]
        return value

    def is_well_formed(self) -> bool:
        """True when tokens and amounts are both present and positionally aligned."""
        return (
            self.tokens is not None
            and self.amounts is not None
            and len(self.tokens) == len(self.amounts)
        )

    def token_amounts(self) -> list[tuple[str, float]]:
        """(token, parsed amount) pairs; empty for malformed swaps."""
        if not self.is_well_formed():
            return []
        return [(token, parse_amount(amount)) for token, amount in zip(self.tokens, self.amounts)]

    def amount_total(self) -> float:
        """Sum of all parsed amounts, whether or not tokens are present or aligned."""
        return sum((parse_amount(amount) for amount in self.amounts or []), 0.0)


class StakeDetails(_Record):
    user_input: str = Field(..., alias="userInput")
    response: str = ""
    timestamp: int = Field(..., description="Epoch milliseconds")


class SwapTransaction(_Record):
    id: str = Field(..., min_length=1)
    type: Literal["swap"] = TX_TYPE_SWAP
    details: SwapDetails


class StakeTransaction(_Record):
    id: str = Field(..., min_length=1)
    type: Literal["stake"] = TX_TYPE_STAKE
    details: StakeDetails


TransactionRecord = Union[SwapTransaction, StakeTransaction]
Transaction = Annotated[TransactionRecord, Field(discriminator="type")]

_transaction_adapter: TypeAdapter[Transaction] = TypeAdapter(Transaction)


def parse_transaction(raw: Any) -> TransactionRecord:
    """Validate one stored/submitted document. Raises InvalidTransactionError on shape errors."""
    try:
        return _transaction_adapter.validate_python(raw)
    except ValidationError as e:
        raise InvalidTransactionError(f"Invalid transaction record: {e.error_count()} error(s)") from e


def dump_transaction(tx: TransactionRecord) -> dict[str, Any]:
    """JSON-ready dict with wire (camelCase) names."""
    return tx.model_dump(mode="json", by_alias=True, exclude_none=True)
