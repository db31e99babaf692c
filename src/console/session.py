"""
Console session: per-operator context passed to every command handler.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Optional

from auction.catalog import AuctionCatalog
from auction.config import AuctionConfig
from auction.user import User


@dataclass
class Session:
    """Catalog, configuration, and the logged-in user (if any)"""
    catalog: AuctionCatalog
    config: AuctionConfig = field(default_factory=AuctionConfig)
    user: Optional[User] = None

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None

    def format_amount(self, amount: Decimal) -> str:
        """Render money with the configured currency symbol"""
        return f"{self.config.currency_symbol}{amount:.2f}"
