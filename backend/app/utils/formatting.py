"""Formatting helpers shared by the chain adapters."""
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Optional


def format_block_date(block_time: Optional[int], placeholder: str) -> str:
    """Render a unix block time as a UTC ``YYYY-MM-DD`` date, or the placeholder."""
    if not block_time:
        return placeholder
    return datetime.fromtimestamp(int(block_time), tz=timezone.utc).strftime("%Y-%m-%d")


def to_whole_units(amount: Any, decimals: int) -> Decimal:
    """Scale an integer amount in the smallest unit to whole coins."""
    return Decimal(int(amount)) / (Decimal(10) ** decimals)
