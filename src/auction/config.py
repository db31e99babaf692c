"""
Auction Configuration

Display, registration and service settings for the auction marketplace,
read from defaults or from environment variables.
"""

import os
import logging
from dataclasses import dataclass

logger = logging.getLogger(__name__)


@dataclass
class AuctionConfig:
    """
    Auction marketplace configuration.

    Attributes:
        currency_symbol: Symbol prefixed to rendered amounts
        allow_duplicate_usernames: Accept registrations for taken usernames
        log_level: Root logging level name for the entry points
        api_host: Host the HTTP API binds to
        api_port: Port the HTTP API binds to
    """

    currency_symbol: str = "$"
    allow_duplicate_usernames: bool = False
    log_level: str = "INFO"
    api_host: str = "127.0.0.1"
    api_port: int = 8000

    def get_api_url(self) -> str:
        """Get HTTP API base URL"""
        return f"http://{self.api_host}:{self.api_port}"

    @classmethod
    def from_env(cls) -> "AuctionConfig":
        """Create config from environment variables"""
        config = cls(
            currency_symbol=os.getenv("AUCTION_CURRENCY_SYMBOL", "$"),
            allow_duplicate_usernames=os.getenv(
                "AUCTION_ALLOW_DUPLICATE_USERS", "false"
            ).lower() in ("true", "1", "yes", "on"),
            log_level=os.getenv("AUCTION_LOG_LEVEL", "INFO").upper(),
            api_host=os.getenv("AUCTION_API_HOST", "127.0.0.1"),
            api_port=int(os.getenv("AUCTION_API_PORT", "8000")),
        )
        logger.debug(f"Loaded auction config from environment: {config}")
        return config
