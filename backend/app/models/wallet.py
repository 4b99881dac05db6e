"""Wallet models."""
from decimal import Decimal
from typing import Annotated, Any, List, Union
from pydantic import BaseModel, ConfigDict, Field, PlainSerializer, field_validator
from app.config import settings
from app.models.transaction import TransactionSummary

# Decimals go over the wire as JSON numbers
Amount = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]


class WalletRequest(BaseModel):
    """A single (chain, address) pair to look up."""
    model_config = ConfigDict(frozen=True)

    chain: str = Field(..., description="Chain symbol, e.g. BTC")
    address: str = Field(..., description="Wallet address, xpub or stake address")

    @classmethod
    def from_payload(cls, item: Any) -> "WalletRequest":
        """
        Build a request from one raw ``wallets`` item.

        Missing or non-string fields are coerced to strings so that a
        malformed item resolves to an unsupported chain instead of
        rejecting the whole batch.
        """
        if not isinstance(item, dict):
            item = {}
        chain = item.get("chain")
        address = item.get("address")
        return cls(
            chain="" if chain is None else str(chain),
            address="" if address is None else str(address),
        )


class WalletSnapshot(BaseModel):
    """Successful chain lookup: balance in whole coins plus recent activity."""
    model_config = ConfigDict(frozen=True)

    chain: str
    address: str
    balance: Amount
    transactions: List[TransactionSummary] = Field(default_factory=list)
    degraded: List[str] = Field(
        default_factory=list,
        description="Sub-queries that failed and fell back to a default"
    )

    @field_validator("transactions")
    @classmethod
    def _cap_transactions(cls, value: List[TransactionSummary]) -> List[TransactionSummary]:
        return value[:settings.max_transactions_per_wallet]


class WalletFailure(BaseModel):
    """Failed chain lookup. Carries no balance data at all."""
    model_config = ConfigDict(frozen=True)

    chain: str
    address: str
    error: str


ChainLookupResult = Union[WalletSnapshot, WalletFailure]
