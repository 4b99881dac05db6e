"""Portfolio valuation models."""
from decimal import Decimal
from typing import List, Union
from pydantic import BaseModel, ConfigDict, Field
from app.models.wallet import Amount, WalletFailure, WalletSnapshot

CURRENCIES = ("usd", "eur", "chf")


class PriceQuote(BaseModel):
    """Amount per fiat currency. Used both for unit price and total value."""
    model_config = ConfigDict(frozen=True)

    usd: Amount = Field(default=Decimal("0"))
    eur: Amount = Field(default=Decimal("0"))
    chf: Amount = Field(default=Decimal("0"))

    def scaled(self, amount: Decimal) -> "PriceQuote":
        """Return this quote multiplied by ``amount`` in every currency."""
        return PriceQuote(**{ccy: amount * getattr(self, ccy) for ccy in CURRENCIES})


ZERO_QUOTE = PriceQuote()


class WalletValuation(WalletSnapshot):
    """Snapshot joined with spot prices."""
    price: PriceQuote
    value: PriceQuote


PortfolioEntry = Union[WalletValuation, WalletFailure]


def dump_entries(entries: List[PortfolioEntry]) -> List[dict]:
    """JSON-ready form of a portfolio, in order."""
    return [entry.model_dump(mode="json") for entry in entries]
