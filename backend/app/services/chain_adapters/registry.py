"""Chain adapter registry."""
from types import MappingProxyType
from typing import Mapping, Type
import httpx
from app.services.chain_adapters.base import ChainAdapter
from app.services.chain_adapters.bitcoin import BitcoinAdapter
from app.services.chain_adapters.cardano import CardanoAdapter
from app.services.chain_adapters.ethereum import EthereumAdapter
from app.services.chain_adapters.solana import SolanaAdapter
from app.utils.errors import UnsupportedChainError

# Closed set of supported chains, keyed by the symbol clients send
_chain_adapters: Mapping[str, Type[ChainAdapter]] = MappingProxyType({
    adapter.symbol: adapter
    for adapter in (BitcoinAdapter, EthereumAdapter, SolanaAdapter, CardanoAdapter)
})


def is_supported_chain(symbol: str) -> bool:
    """Check whether a chain symbol has an adapter."""
    return symbol in _chain_adapters


def get_chain_adapter_class(symbol: str) -> Type[ChainAdapter]:
    """
    Get the adapter class for a chain symbol, without a client.

    Raises:
        UnsupportedChainError: If the chain is not supported
    """
    if symbol not in _chain_adapters:
        raise UnsupportedChainError()

    return _chain_adapters[symbol]


def get_chain_adapter(symbol: str, client: httpx.AsyncClient) -> ChainAdapter:
    """
    Get chain adapter instance for a chain symbol.

    Args:
        symbol: Chain symbol (e.g., 'BTC'), matched exactly
        client: Shared HTTP client for upstream calls

    Returns:
        Chain adapter instance

    Raises:
        UnsupportedChainError: If the chain is not supported
    """
    return get_chain_adapter_class(symbol)(client)


def list_supported_chains() -> list[dict]:
    """List all supported chains."""
    return [
        {"symbol": symbol, "name": adapter.name}
        for symbol, adapter in _chain_adapters.items()
    ]
