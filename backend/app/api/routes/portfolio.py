"""Portfolio valuation endpoint."""
import logging
from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from app.api.deps import get_portfolio_service
from app.models.portfolio import dump_entries
from app.models.wallet import WalletRequest
from app.services.portfolio_service import PortfolioService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("")
async def get_portfolio(
    request: Request,
    service: PortfolioService = Depends(get_portfolio_service)
):
    """
    Value a batch of wallets across BTC, ETH, SOL and ADA.

    Body: ``{"wallets": [{"chain": "BTC", "address": "..."}]}``. The
    response is a list in the same order as ``wallets``; each item is
    either a valuation or an inline error record.
    """
    try:
        body = await request.json()
    except ValueError:
        body = None

    wallets = body.get("wallets") if isinstance(body, dict) else None
    if not isinstance(wallets, list):
        return JSONResponse(status_code=400, content={"error": "Invalid input"})

    try:
        entries = await service.build_portfolio([WalletRequest.from_payload(w) for w in wallets])
        return JSONResponse(content=dump_entries(entries))
    except Exception:
        logger.exception("Portfolio request failed")
        return JSONResponse(status_code=500, content={"error": "Server Error"})
