"""Configuration management for the application."""
from pydantic_settings import BaseSettings
from typing import Optional


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # API Configuration
    api_title: str = "Multi-Chain Portfolio Tracker API"
    api_version: str = "1.0.0"
    api_prefix: str = "/api"

    # CORS Configuration
    cors_origins: list[str] = ["http://localhost:5173", "http://localhost:3000"]

    # Logging
    log_level: str = "INFO"

    # Upstream HTTP
    http_timeout_seconds: float = 30.0

    # Bitcoin Configuration
    blockchain_info_url: str = "https://blockchain.info"  # xpub aggregate balances
    blockstream_api_url: str = "https://blockstream.info/api"  # single addresses

    # Ethereum Configuration
    blockscout_api_url: str = "https://eth.blockscout.com/api"

    # Solana Configuration
    solana_rpc_url: str = "https://api.mainnet-beta.solana.com"

    # Cardano Configuration
    koios_api_url: str = "https://api.koios.rest/api/v1"

    # Price Service Configuration
    coingecko_api_key: Optional[str] = None
    coingecko_base_url: str = "https://api.coingecko.com/api/v3"

    # Application Limits
    max_transactions_per_wallet: int = 5

    class Config:
        env_file = ".env"
        case_sensitive = False


settings = Settings()
