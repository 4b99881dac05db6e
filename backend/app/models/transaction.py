"""Recent-activity transaction model."""
from enum import Enum
from pydantic import BaseModel, ConfigDict, Field


class TransactionKind(str, Enum):
    """Transaction kind enumeration."""
    TX = "TX"
    MIXED = "MIXED"  # xpub aggregate activity, leaf address unknown
    SUCCESS = "Success"
    FAIL = "Fail"
    INFO = "INFO"


class TransactionSummary(BaseModel):
    """One line of recent wallet activity, as shown next to a balance."""
    model_config = ConfigDict(frozen=True)

    hash: str = Field(..., description="Transaction hash or signature")
    label: str = Field(..., description="Short human readable status")
    date: str = Field(..., description="UTC date, or Pending / Mempool / Info")
    kind: TransactionKind = Field(..., description="Type of activity")


HISTORY_UNAVAILABLE = TransactionSummary(
    hash="",
    label="history temporarily unavailable",
    date="Info",
    kind=TransactionKind.INFO,
)
