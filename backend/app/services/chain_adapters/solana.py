"""Solana chain adapter."""
import logging
from typing import Any, Dict, List
import base58
import httpx
from app.config import settings
from app.models.transaction import TransactionKind, TransactionSummary
from app.models.wallet import WalletSnapshot
from app.services.chain_adapters.base import ChainAdapter
from app.utils.errors import MalformedInputError, UpstreamUnavailableError
from app.utils.formatting import format_block_date, to_whole_units

logger = logging.getLogger(__name__)

SOL_DECIMALS = 9  # lamports per SOL
INVALID_ADDRESS = "invalid address"


class SolanaRpcError(Exception):
    """JSON-RPC level error returned by the Solana node."""
    pass


class SolanaAdapter(ChainAdapter):
    """Adapter for Solana blockchain."""

    symbol = "SOL"
    name = "Solana"

    async def _rpc_call(self, method: str, params: List[Any]) -> Any:
        """Make RPC call to Solana."""
        payload = {
            "jsonrpc": "2.0",
            "id": 1,
            "method": method,
            "params": params
        }

        response = await self.client.post(settings.solana_rpc_url, json=payload)
        response.raise_for_status()
        data = response.json()

        if "error" in data:
            raise SolanaRpcError(data["error"].get("message", "Unknown error"))

        return data.get("result")

    async def fetch_wallet(self, address: str) -> WalletSnapshot:
        """
        Fetch SOL balance and the latest signatures.

        Invalid keys and upstream failures surface with the same message;
        the log keeps them apart.
        """
        if not self.validate_address(address):
            logger.info("SOL address %r is not a base58 public key", address)
            raise MalformedInputError(INVALID_ADDRESS)

        try:
            balance_result = await self._rpc_call(
                "getBalance",
                [address, {"commitment": "confirmed"}]
            )
            lamports = balance_result["value"]

            signatures = await self._rpc_call(
                "getSignaturesForAddress",
                [address, {"limit": settings.max_transactions_per_wallet}]
            )

            transactions = [
                _summarize_signature(sig)
                for sig in (signatures or [])[:settings.max_transactions_per_wallet]
            ]
            balance = to_whole_units(lamports, SOL_DECIMALS)
        except (httpx.HTTPError, SolanaRpcError) as e:
            logger.warning("SOL lookup for %s failed upstream: %s", address, e)
            raise UpstreamUnavailableError(INVALID_ADDRESS)
        except Exception as e:
            logger.warning("SOL response for %s could not be parsed: %s", address, e)
            raise UpstreamUnavailableError(INVALID_ADDRESS)

        return WalletSnapshot(
            chain=self.symbol,
            address=address,
            balance=balance,
            transactions=transactions,
        )

    @classmethod
    def validate_address(cls, address: str) -> bool:
        """
        Validate Solana address format.

        Solana addresses are base58 encoded, typically 32-44 characters.
        """
        if not address or len(address) < 32 or len(address) > 44:
            return False

        try:
            # Try to decode as base58
            decoded = base58.b58decode(address)
            # Solana public keys are 32 bytes
            return len(decoded) == 32
        except ValueError:
            return False


def _summarize_signature(sig: Dict[str, Any]) -> TransactionSummary:
    return TransactionSummary(
        hash=sig["signature"],
        label="Solana Action",
        date=format_block_date(sig.get("blockTime"), "Pending"),
        kind=TransactionKind.FAIL if sig.get("err") else TransactionKind.SUCCESS,
    )
