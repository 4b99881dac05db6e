"""Join chain lookups with spot prices."""
from typing import List, Mapping
from app.models.portfolio import ZERO_QUOTE, PortfolioEntry, PriceQuote, WalletValuation
from app.models.wallet import ChainLookupResult, WalletSnapshot


def assemble(
    results: List[ChainLookupResult],
    prices: Mapping[str, PriceQuote]
) -> List[PortfolioEntry]:
    """
    Value every successful lookup in USD, EUR and CHF.

    Failures pass through unchanged. A chain missing from ``prices`` is
    valued with a zero quote.

    Args:
        results: Lookup results, in request order
        prices: Quotes keyed by chain symbol

    Returns:
        Portfolio entries, same length and order as ``results``
    """
    entries: List[PortfolioEntry] = []
    for result in results:
        if not isinstance(result, WalletSnapshot):
            entries.append(result)
            continue

        price = prices.get(result.chain, ZERO_QUOTE)
        entries.append(WalletValuation(
            **dict(result),
            price=price,
            value=price.scaled(result.balance),
        ))
    return entries
