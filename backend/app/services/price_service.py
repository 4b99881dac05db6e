"""Spot price fetching service."""
import logging
from decimal import Decimal, InvalidOperation
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Optional
import httpx
from app.config import settings
from app.models.portfolio import CURRENCIES, PriceQuote
from app.models.wallet import ChainLookupResult, WalletSnapshot
from app.utils.errors import PriceServiceError

logger = logging.getLogger(__name__)

# Chain symbol to CoinGecko ID mapping
COINGECKO_IDS: Mapping[str, str] = MappingProxyType({
    "BTC": "bitcoin",
    "ETH": "ethereum",
    "SOL": "solana",
    "ADA": "cardano",
})


def _parse_quote(entry: Dict[str, object]) -> PriceQuote:
    """Build a quote from one `/simple/price` entry; missing currencies are zero."""
    amounts = {}
    for ccy in CURRENCIES:
        amount = Decimal(str(entry.get(ccy) or 0))
        if not amount.is_finite():
            raise ValueError(f"non-finite {ccy} price")
        amounts[ccy] = amount
    return PriceQuote(**amounts)


def collect_priced_chains(results: Iterable[ChainLookupResult]) -> List[str]:
    """Distinct chains among successful lookups, in first-seen order."""
    chains: List[str] = []
    for result in results:
        if isinstance(result, WalletSnapshot) and result.chain not in chains:
            chains.append(result.chain)
    return chains


class PriceService:
    """Service for fetching current cryptocurrency prices."""

    def __init__(self, client: httpx.AsyncClient):
        self.base_url = settings.coingecko_base_url
        self.api_key = settings.coingecko_api_key
        self.client = client

    def _get_coingecko_id(self, chain: str) -> Optional[str]:
        """Get CoinGecko ID from chain symbol."""
        return COINGECKO_IDS.get(chain)

    async def get_spot_prices(self, chains: Iterable[str]) -> Dict[str, PriceQuote]:
        """
        Get current USD/EUR/CHF prices for several chains in one call.

        Args:
            chains: Chain symbols; duplicates are ignored

        Returns:
            Dictionary mapping chain symbols to quotes. Empty when there is
            nothing to price or the price feed is unavailable.
        """
        ids_by_chain = {}
        for chain in chains:
            coingecko_id = self._get_coingecko_id(chain)
            if coingecko_id:
                ids_by_chain[chain] = coingecko_id

        if not ids_by_chain:
            return {}

        try:
            data = await self._fetch_simple_price(sorted(set(ids_by_chain.values())))
        except PriceServiceError as e:
            logger.error("Price API Error: %s", e)
            return {}

        prices = {}
        for chain, coingecko_id in ids_by_chain.items():
            entry = data.get(coingecko_id)
            if not isinstance(entry, dict):
                continue
            try:
                prices[chain] = _parse_quote(entry)
            except (InvalidOperation, TypeError, ValueError) as e:
                logger.error("Unusable price entry for %s: %r (%s)", coingecko_id, entry, e)
        return prices

    async def _fetch_simple_price(self, coingecko_ids: List[str]) -> Dict[str, Dict[str, float]]:
        params = {
            "ids": ",".join(coingecko_ids),
            "vs_currencies": ",".join(CURRENCIES),
        }
        if self.api_key:
            params["x_cg_demo_api_key"] = self.api_key

        logger.info("Fetching spot prices for %s", params["ids"])
        try:
            response = await self.client.get(f"{self.base_url}/simple/price", params=params)
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as e:
            raise PriceServiceError(f"HTTP error fetching price: {e.response.status_code}")
        except httpx.HTTPError as e:
            raise PriceServiceError(f"Error fetching price: {str(e)}")
        except Exception as e:
            raise PriceServiceError(f"Unexpected error: {str(e)}")

        if not isinstance(data, dict):
            raise PriceServiceError("Unexpected price payload")
        return data
