"""Multi-chain portfolio aggregation service."""
import asyncio
import logging
from typing import List, Optional
import httpx
from app.models.portfolio import PortfolioEntry
from app.models.wallet import ChainLookupResult, WalletFailure, WalletRequest
from app.services.chain_adapters.registry import get_chain_adapter
from app.services.portfolio_assembler import assemble
from app.services.price_service import PriceService, collect_priced_chains
from app.utils.errors import UnsupportedChainError, UpstreamUnavailableError

logger = logging.getLogger(__name__)


class PortfolioService:
    """Looks up a batch of wallets across chains and values them."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        price_service: Optional[PriceService] = None
    ):
        self.client = client
        self.price_service = price_service or PriceService(client)

    async def build_portfolio(self, wallets: List[WalletRequest]) -> List[PortfolioEntry]:
        """
        Run the whole pipeline for one request.

        This method:
        1. Looks up every wallet concurrently
        2. Fetches spot prices for the chains that resolved
        3. Values each successful wallet in every currency

        Args:
            wallets: Requested wallets

        Returns:
            One entry per wallet, in request order
        """
        results = await self.dispatch(wallets)
        prices = await self.price_service.get_spot_prices(collect_priced_chains(results))
        return assemble(results, prices)

    async def dispatch(self, wallets: List[WalletRequest]) -> List[ChainLookupResult]:
        """Look up all wallets concurrently; result ``i`` belongs to wallet ``i``."""
        results = await asyncio.gather(
            *(self._lookup(wallet) for wallet in wallets),
            return_exceptions=True
        )

        collected: List[ChainLookupResult] = []
        for wallet, result in zip(wallets, results):
            if isinstance(result, BaseException):
                logger.error(
                    "Unhandled error looking up %s %s: %r",
                    wallet.chain, wallet.address, result
                )
                result = WalletFailure(
                    chain=wallet.chain,
                    address=wallet.address,
                    error=UpstreamUnavailableError.message,
                )
            collected.append(result)
        return collected

    async def _lookup(self, wallet: WalletRequest) -> ChainLookupResult:
        try:
            adapter = get_chain_adapter(wallet.chain, self.client)
        except UnsupportedChainError as e:
            return WalletFailure(chain=wallet.chain, address=wallet.address, error=str(e))
        return await adapter.lookup(wallet.address)
