import asyncio
import json
from decimal import Decimal
import httpx
import pytest

from app.config import settings
from app.models.portfolio import WalletValuation
from app.models.wallet import WalletFailure, WalletRequest, WalletSnapshot
from app.services.portfolio_service import PortfolioService

SOL_A = "So11111111111111111111111111111111111111112"
SOL_B = "11111111111111111111111111111111"
ETH = "0xd8da6bf26964af9d7eed9e03e53415d37aa96045"
BTC = "bc1qxy2kgdygjrsqtzq2n0yrf2493p83kkfjhx0wlh"
SIMPLE_PRICE = f"{settings.coingecko_base_url}/simple/price"


def solana_rpc(request: httpx.Request) -> httpx.Response:
    method = json.loads(request.content)["method"]
    result = {"context": {"slot": 1}, "value": 2_000_000_000} if method == "getBalance" else []
    return httpx.Response(200, json={"jsonrpc": "2.0", "id": 1, "result": result})


def _wallets(*pairs):
    return [WalletRequest(chain=chain, address=address) for chain, address in pairs]


@pytest.mark.asyncio
async def test_dispatch_preserves_order_when_earlier_wallet_is_slower(upstream):
    upstream.add("GET", settings.blockscout_api_url, delay=0.05, json={"result": "1000000000000000000"})
    upstream.add("POST", settings.solana_rpc_url, handler=solana_rpc)

    results = await PortfolioService(upstream.client()).dispatch(
        _wallets(("ETH", ETH), ("XYZ", "foo"), ("SOL", SOL_A))
    )

    assert [r.chain for r in results] == ["ETH", "XYZ", "SOL"]
    assert isinstance(results[0], WalletSnapshot)
    assert results[1] == WalletFailure(chain="XYZ", address="foo", error="Unsupported Chain")
    assert isinstance(results[2], WalletSnapshot)


@pytest.mark.asyncio
async def test_lookups_run_concurrently(upstream):
    upstream.add("GET", settings.blockscout_api_url, delay=0.2, json={"result": "0"})

    loop = asyncio.get_running_loop()
    started = loop.time()
    results = await PortfolioService(upstream.client()).dispatch(
        _wallets(*[("ETH", ETH)] * 5)
    )
    elapsed = loop.time() - started

    assert len(results) == 5
    assert elapsed < 0.8


@pytest.mark.asyncio
async def test_unsupported_chain_makes_no_network_call(upstream):
    results = await PortfolioService(upstream.client()).dispatch(_wallets(("DOGE", "D123")))

    assert results == [WalletFailure(chain="DOGE", address="D123", error="Unsupported Chain")]
    assert upstream.calls == []


@pytest.mark.asyncio
async def test_escaping_exception_is_isolated(upstream, monkeypatch):
    upstream.add("POST", settings.solana_rpc_url, handler=solana_rpc)

    async def boom(self, address):
        raise RuntimeError("adapter bug")

    monkeypatch.setattr("app.services.chain_adapters.ethereum.EthereumAdapter.lookup", boom)

    results = await PortfolioService(upstream.client()).dispatch(
        _wallets(("ETH", ETH), ("SOL", SOL_A))
    )

    assert results[0] == WalletFailure(chain="ETH", address=ETH, error="lookup failed")
    assert isinstance(results[1], WalletSnapshot)


@pytest.mark.asyncio
async def test_price_requested_once_per_chain(upstream):
    upstream.add("POST", settings.solana_rpc_url, handler=solana_rpc)
    upstream.add("GET", SIMPLE_PRICE, json={"solana": {"usd": 100, "eur": 90, "chf": 80}})

    entries = await PortfolioService(upstream.client()).build_portfolio(
        _wallets(("SOL", SOL_A), ("SOL", SOL_B))
    )

    price_calls = upstream.calls_to(SIMPLE_PRICE)
    assert len(price_calls) == 1
    assert price_calls[0].url.params["ids"] == "solana"
    assert [e.value.usd for e in entries] == [Decimal("200"), Decimal("200")]


@pytest.mark.asyncio
async def test_failed_chains_are_not_priced(upstream):
    upstream.add("GET", settings.blockscout_api_url, status_code=502, json={})
    upstream.add("POST", settings.solana_rpc_url, handler=solana_rpc)
    upstream.add("GET", SIMPLE_PRICE, json={"solana": {"usd": 100, "eur": 90, "chf": 80}})

    await PortfolioService(upstream.client()).build_portfolio(
        _wallets(("ETH", ETH), ("SOL", SOL_A))
    )

    assert upstream.calls_to(SIMPLE_PRICE)[0].url.params["ids"] == "solana"


@pytest.mark.asyncio
async def test_all_failed_skips_price_feed(upstream):
    entries = await PortfolioService(upstream.client()).build_portfolio(
        _wallets(("XYZ", "foo"), ("BTC", "bad!address"))
    )

    assert [e.error for e in entries] == ["Unsupported Chain", "invalid characters"]
    assert upstream.calls == []


@pytest.mark.asyncio
async def test_price_outage_values_at_zero(upstream, connect_error):
    upstream.add("POST", settings.solana_rpc_url, handler=solana_rpc)
    upstream.add("GET", SIMPLE_PRICE, handler=connect_error)

    [entry] = await PortfolioService(upstream.client()).build_portfolio(_wallets(("SOL", SOL_A)))

    assert isinstance(entry, WalletValuation)
    assert entry.balance == Decimal("2")
    assert entry.value.usd == 0
    assert entry.value.eur == 0
    assert entry.value.chf == 0


@pytest.mark.asyncio
async def test_empty_batch(upstream):
    assert await PortfolioService(upstream.client()).build_portfolio([]) == []
    assert upstream.calls == []
