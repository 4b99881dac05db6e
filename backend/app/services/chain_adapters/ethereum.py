"""Ethereum chain adapter."""
import logging
import re
import httpx
from app.config import settings
from app.models.wallet import WalletSnapshot
from app.services.chain_adapters.base import ChainAdapter
from app.utils.errors import UpstreamUnavailableError
from app.utils.formatting import to_whole_units

logger = logging.getLogger(__name__)

ETH_DECIMALS = 18
_ADDRESS_PATTERN = re.compile(r"^0x[0-9a-fA-F]{40}$")


class EthereumAdapter(ChainAdapter):
    """Adapter for Ethereum mainnet, native ETH balance only."""

    symbol = "ETH"
    name = "Ethereum"

    async def fetch_wallet(self, address: str) -> WalletSnapshot:
        params = {
            "module": "account",
            "action": "balance",
            "address": address,
        }

        try:
            response = await self.client.get(settings.blockscout_api_url, params=params)
            response.raise_for_status()
            data = response.json()
            # Wei as a decimal string; error payloads carry a message here instead
            balance = to_whole_units(data["result"], ETH_DECIMALS)
        except httpx.HTTPError as e:
            logger.warning("ETH balance lookup for %s failed: %s", address, e)
            raise UpstreamUnavailableError()
        except Exception as e:
            logger.warning("ETH balance response for %s could not be parsed: %s", address, e)
            raise UpstreamUnavailableError()

        # No history source for ETH yet
        return WalletSnapshot(chain=self.symbol, address=address, balance=balance, transactions=[])

    @classmethod
    def validate_address(cls, address: str) -> bool:
        return bool(_ADDRESS_PATTERN.match(address))
