"""Abstract base class for chain adapters."""
from abc import ABC, abstractmethod
import httpx
from app.models.wallet import ChainLookupResult, WalletFailure, WalletSnapshot
from app.utils.errors import WalletLookupError


class ChainAdapter(ABC):
    """Abstract base class for blockchain balance lookups."""

    symbol: str = ""
    name: str = ""

    def __init__(self, client: httpx.AsyncClient):
        self.client = client

    async def lookup(self, address: str) -> ChainLookupResult:
        """
        Look up one wallet and capture any lookup error inline.

        Args:
            address: Address exactly as the caller submitted it

        Returns:
            A snapshot, or a failure record carrying the error message
        """
        try:
            return await self.fetch_wallet(address)
        except WalletLookupError as e:
            return WalletFailure(
                chain=self.symbol,
                address=e.address or address,
                error=str(e),
            )

    @abstractmethod
    async def fetch_wallet(self, address: str) -> WalletSnapshot:
        """
        Fetch balance and recent transactions for a wallet.

        Args:
            address: Wallet address

        Returns:
            Normalized wallet snapshot

        Raises:
            WalletLookupError: If the wallet cannot be looked up
        """
        pass

    @classmethod
    def validate_address(cls, address: str) -> bool:
        """
        Local, offline address check.

        Args:
            address: Wallet address to validate

        Returns:
            True if the address passes the adapter's format check
        """
        return bool(address)
