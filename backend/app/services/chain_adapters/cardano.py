"""Cardano chain adapter."""
import asyncio
import logging
from decimal import Decimal
from typing import Any, Dict, List, NamedTuple
from app.config import settings
from app.models.transaction import HISTORY_UNAVAILABLE, TransactionKind, TransactionSummary
from app.models.wallet import WalletSnapshot
from app.services.chain_adapters.base import ChainAdapter
from app.utils.errors import SevereLookupError
from app.utils.formatting import format_block_date, to_whole_units

logger = logging.getLogger(__name__)

ADA_DECIMALS = 6  # lovelace per ADA
STAKE_PREFIX = "stake1"


class KoiosQuery(NamedTuple):
    """Endpoints and request body for one address form."""
    balance_endpoint: str
    history_endpoint: str
    balance_field: str
    body: Dict[str, List[str]]

    @classmethod
    def for_address(cls, address: str) -> "KoiosQuery":
        if address.startswith(STAKE_PREFIX):
            return cls("account_info", "account_txs", "total_balance", {"_stake_addresses": [address]})
        return cls("address_info", "address_txs", "balance", {"_addresses": [address]})


class SubQueryOutcome(NamedTuple):
    """Result of one sub-query; ``ok`` is False when ``value`` is a fallback."""
    value: Any
    ok: bool


class CardanoAdapter(ChainAdapter):
    """
    Adapter for Cardano via the Koios REST API.

    Accepts both payment addresses and stake (account) addresses. Balance
    and history are fetched independently; either may fall back without
    failing the wallet.
    """

    symbol = "ADA"
    name = "Cardano"

    async def fetch_wallet(self, address: str) -> WalletSnapshot:
        try:
            query = KoiosQuery.for_address(address)
        except Exception as e:
            logger.error("ADA lookup for %r could not be prepared: %s", address, e)
            raise SevereLookupError()

        balance, history = await asyncio.gather(
            self._fetch_balance(query),
            self._fetch_history(query),
        )

        degraded = []
        if not balance.ok:
            degraded.append("balance")
        if not history.ok:
            degraded.append("history")

        return WalletSnapshot(
            chain=self.symbol,
            address=address,
            balance=balance.value,
            transactions=history.value,
            degraded=degraded,
        )

    async def _post(self, endpoint: str, body: Dict[str, List[str]]) -> Any:
        response = await self.client.post(f"{settings.koios_api_url}/{endpoint}", json=body)
        response.raise_for_status()
        return response.json()

    async def _fetch_balance(self, query: KoiosQuery) -> SubQueryOutcome:
        try:
            data = await self._post(query.balance_endpoint, query.body)
            if not data:
                return SubQueryOutcome(Decimal("0"), True)
            lovelace = data[0].get(query.balance_field) or 0
            return SubQueryOutcome(to_whole_units(lovelace, ADA_DECIMALS), True)
        except Exception as e:
            logger.warning("ADA balance unavailable for %s: %s", query.body, e)
            return SubQueryOutcome(Decimal("0"), False)

    async def _fetch_history(self, query: KoiosQuery) -> SubQueryOutcome:
        try:
            txs = await self._post(query.history_endpoint, query.body)
            transactions = [
                TransactionSummary(
                    hash=tx["tx_hash"],
                    label="ADA Tx",
                    date=format_block_date(tx.get("block_time"), "Pending"),
                    kind=TransactionKind.TX,
                )
                for tx in (txs or [])[:settings.max_transactions_per_wallet]
            ]
            return SubQueryOutcome(transactions, True)
        except Exception as e:
            # Koios answers 404 for addresses it has never seen
            logger.warning("ADA history unavailable for %s: %s", query.body, e)
            return SubQueryOutcome([HISTORY_UNAVAILABLE], False)

    @classmethod
    def validate_address(cls, address: str) -> bool:
        return address.startswith((STAKE_PREFIX, "addr1", "Ae2", "DdzFF"))
