"""Shared fixtures: a scriptable fake for every upstream HTTP API."""
import asyncio
from typing import Any, Callable, Dict, List, Optional, Tuple
import httpx
import pytest


def _route_key(method: str, url: httpx.URL) -> Tuple[str, str]:
    return method.upper(), f"{url.scheme}://{url.host}{url.path.rstrip('/')}"


class FakeUpstream:
    """httpx transport handler that answers from registered routes and records calls."""

    def __init__(self):
        self.routes: Dict[Tuple[str, str], Dict[str, Any]] = {}
        self.calls: List[httpx.Request] = []

    def add(
        self,
        method: str,
        url: str,
        json: Any = None,
        status_code: int = 200,
        handler: Optional[Callable[[httpx.Request], httpx.Response]] = None,
        delay: float = 0,
    ):
        self.routes[_route_key(method, httpx.URL(url))] = {
            "json": json,
            "status_code": status_code,
            "handler": handler,
            "delay": delay,
        }

    async def __call__(self, request: httpx.Request) -> httpx.Response:
        self.calls.append(request)
        route = self.routes.get(_route_key(request.method, request.url))
        if route is None:
            return httpx.Response(404, json={"error": "not mocked"})
        if route["delay"]:
            await asyncio.sleep(route["delay"])
        if route["handler"]:
            return route["handler"](request)
        return httpx.Response(route["status_code"], json=route["json"])

    def calls_to(self, url: str) -> List[httpx.Request]:
        key = _route_key("GET", httpx.URL(url))[1]
        return [c for c in self.calls if _route_key(c.method, c.url)[1] == key]

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self))


@pytest.fixture
def upstream() -> FakeUpstream:
    return FakeUpstream()


def raise_connect_error(request: httpx.Request) -> httpx.Response:
    raise httpx.ConnectError("connection refused", request=request)


@pytest.fixture
def connect_error() -> Callable[[httpx.Request], httpx.Response]:
    return raise_connect_error
