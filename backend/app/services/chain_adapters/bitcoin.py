"""Bitcoin chain adapter."""
import logging
import re
from typing import Any, Dict
import httpx
from app.config import settings
from app.models.transaction import TransactionKind, TransactionSummary
from app.models.wallet import WalletSnapshot
from app.services.chain_adapters.base import ChainAdapter
from app.utils.errors import (
    MalformedInputError,
    UpstreamMalformedError,
    UpstreamUnavailableError,
)
from app.utils.formatting import format_block_date, to_whole_units

logger = logging.getLogger(__name__)

BTC_DECIMALS = 8
XPUB_PREFIXES = ("xpub", "ypub", "zpub", "vpub", "upub")
_ILLEGAL_CHARACTERS = re.compile(r"[^a-zA-Z0-9]")


def sanitize_address(raw_address: str) -> str:
    """Drop every whitespace character, interior ones included."""
    return "".join(raw_address.split())


def is_extended_public_key(address: str) -> bool:
    return address[:4].lower() in XPUB_PREFIXES


class BitcoinAdapter(ChainAdapter):
    """
    Adapter for Bitcoin.

    Extended public keys (xpub/ypub/zpub/vpub/upub) go to blockchain.info,
    which aggregates every derived address. Plain addresses, Taproot
    included, go to Blockstream's Esplora API.
    """

    symbol = "BTC"
    name = "Bitcoin"

    async def fetch_wallet(self, address: str) -> WalletSnapshot:
        clean = sanitize_address(address)
        if _ILLEGAL_CHARACTERS.search(clean):
            # Echo what the user pasted so they can spot the artifact
            raise MalformedInputError(address=address)

        try:
            if is_extended_public_key(clean):
                return await self._fetch_xpub(clean)
            return await self._fetch_address(clean)
        except httpx.HTTPStatusError as e:
            if e.response.status_code == 400:
                raise UpstreamMalformedError(address=clean)
            logger.warning("BTC lookup for %s got HTTP %s", clean, e.response.status_code)
            raise UpstreamUnavailableError(address=clean)
        except httpx.HTTPError as e:
            logger.warning("BTC lookup for %s failed: %s", clean, e)
            raise UpstreamUnavailableError(address=clean)
        except Exception as e:
            logger.warning("BTC response for %s could not be parsed: %s", clean, e)
            raise UpstreamUnavailableError(address=clean)

    async def _get_json(self, url: str, **params: Any) -> Any:
        response = await self.client.get(url, params=params or None)
        response.raise_for_status()
        return response.json()

    async def _fetch_xpub(self, xpub: str) -> WalletSnapshot:
        """Aggregate balance and activity over the whole derived address family."""
        limit = settings.max_transactions_per_wallet
        data = await self._get_json(
            f"{settings.blockchain_info_url}/multiaddr",
            active=xpub,
            n=limit,
        )

        final_balance = (data.get("wallet") or {}).get("final_balance")
        if final_balance is None:
            final_balance = sum(int(a.get("final_balance", 0)) for a in data.get("addresses", []))

        # The API reports activity per wallet, not per leaf address
        transactions = [
            TransactionSummary(
                hash=tx["hash"],
                label="XPUB Activity",
                date=format_block_date(tx.get("time"), "Pending"),
                kind=TransactionKind.MIXED,
            )
            for tx in data.get("txs", [])[:limit]
        ]

        return WalletSnapshot(
            chain=self.symbol,
            address=xpub,
            balance=to_whole_units(final_balance, BTC_DECIMALS),
            transactions=transactions,
        )

    async def _fetch_address(self, address: str) -> WalletSnapshot:
        base = f"{settings.blockstream_api_url}/address/{address}"
        stats = await self._get_json(base)
        txs = await self._get_json(f"{base}/txs")

        # Confirmed plus mempool
        balance_sat = _net_funded(stats["chain_stats"]) + _net_funded(stats["mempool_stats"])

        transactions = [
            _summarize_esplora_tx(tx)
            for tx in txs[:settings.max_transactions_per_wallet]
        ]

        return WalletSnapshot(
            chain=self.symbol,
            address=address,
            balance=to_whole_units(balance_sat, BTC_DECIMALS),
            transactions=transactions,
        )

    @classmethod
    def validate_address(cls, address: str) -> bool:
        clean = sanitize_address(address)
        return bool(clean) and not _ILLEGAL_CHARACTERS.search(clean)


def _net_funded(stats: Dict[str, Any]) -> int:
    return int(stats["funded_txo_sum"]) - int(stats["spent_txo_sum"])


def _summarize_esplora_tx(tx: Dict[str, Any]) -> TransactionSummary:
    status = tx.get("status") or {}
    return TransactionSummary(
        hash=tx["txid"],
        label="Confirmed" if status.get("confirmed") else "Pending...",
        date=format_block_date(status.get("block_time"), "Mempool"),
        kind=TransactionKind.TX,
    )
