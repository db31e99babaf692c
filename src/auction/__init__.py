"""
Auction module: item listing, time-bounded bidding, and reserve-price settlement.
"""

from .catalog import AuctionCatalog
from .config import AuctionConfig
from .errors import (
    AuctionError,
    DuplicateUserError,
    InvalidCredentialsError,
    AuctionClosedError,
    BidTooLowError,
    IndexOutOfRangeError,
    ItemAlreadyWatchlistedError,
)
from .item import AuctionItem
from .models import (
    Bid,
    WatchEntry,
    ItemListing,
    HistoryEntry,
    ItemStatus,
    SettlementOutcome,
    SettlementResult,
)
from .user import User

__all__ = [
    "AuctionCatalog",
    "AuctionConfig",
    "AuctionItem",
    "User",
    "Bid",
    "WatchEntry",
    "ItemListing",
    "HistoryEntry",
    "ItemStatus",
    "SettlementOutcome",
    "SettlementResult",
    "AuctionError",
    "DuplicateUserError",
    "InvalidCredentialsError",
    "AuctionClosedError",
    "BidTooLowError",
    "IndexOutOfRangeError",
    "ItemAlreadyWatchlistedError",
]
