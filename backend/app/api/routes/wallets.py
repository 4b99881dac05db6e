"""Wallet helper endpoints."""
from fastapi import APIRouter, HTTPException
from app.services.chain_adapters.registry import get_chain_adapter_class, list_supported_chains
from app.utils.errors import UnsupportedChainError

router = APIRouter()


@router.get("/chains")
async def supported_chains():
    """List the chains a portfolio request may contain."""
    return list_supported_chains()


@router.get("/validate/{chain}/{address}")
async def validate_wallet(chain: str, address: str):
    """Validate a wallet address offline, without querying the chain."""
    try:
        adapter = get_chain_adapter_class(chain)
    except UnsupportedChainError as e:
        raise HTTPException(status_code=400, detail=str(e))

    is_valid = adapter.validate_address(address)

    return {
        "chain": chain,
        "address": address,
        "valid": is_valid,
        "message": "Address is valid" if is_valid else f"Invalid {adapter.name} address format"
    }
