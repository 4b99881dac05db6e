"""Custom error classes."""
from typing import Optional


class PortfolioTrackerError(Exception):
    """Base exception for portfolio tracker application."""
    pass


class WalletLookupError(PortfolioTrackerError):
    """
    Error raised while looking up a single wallet.

    The message is reported inline in the wallet's result slot, so it is
    written for the end user.
    """
    message = "lookup failed"

    def __init__(self, message: Optional[str] = None, address: Optional[str] = None):
        super().__init__(message or self.message)
        self.address = address


class UnsupportedChainError(WalletLookupError):
    """No lookup strategy is registered for the chain symbol."""
    message = "Unsupported Chain"


class MalformedInputError(WalletLookupError):
    """Address rejected locally, before any network call."""
    message = "invalid characters"


class UpstreamMalformedError(WalletLookupError):
    """Upstream rejected the address as malformed (HTTP 400)."""
    message = "malformed xpub/address"


class UpstreamUnavailableError(WalletLookupError):
    """Network, HTTP status or parse failure talking to an upstream."""
    message = "lookup failed"


class SevereLookupError(WalletLookupError):
    """Lookup could not even be prepared."""
    message = "severe lookup error"


class PriceServiceError(PortfolioTrackerError):
    """Error related to price fetching."""
    pass
