"""Request-scoped dependencies."""
from typing import AsyncIterator
import httpx
from fastapi import Depends
from app.config import settings
from app.services.portfolio_service import PortfolioService


async def get_http_client() -> AsyncIterator[httpx.AsyncClient]:
    """One upstream HTTP client per request, shared by every lookup."""
    async with httpx.AsyncClient(timeout=settings.http_timeout_seconds) as client:
        yield client


def get_portfolio_service(
    client: httpx.AsyncClient = Depends(get_http_client)
) -> PortfolioService:
    return PortfolioService(client)
