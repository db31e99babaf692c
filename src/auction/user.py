"""
Auction User: private bid ledger and watchlist.
"""

import logging
from typing import Dict, List, TYPE_CHECKING

from .models import Bid, WatchEntry

if TYPE_CHECKING:
    from .item import AuctionItem

logger = logging.getLogger(__name__)


class User:
    """
    Registered marketplace user.

    The ledger keeps only the most recent bid per item; items are referenced,
    never owned.
    """

    def __init__(self, username: str, password: str):
        self.username = username
        self._password = password
        self._bids: Dict["AuctionItem", Bid] = {}
        self._watchlist: List["AuctionItem"] = []

    def check_password(self, password: str) -> bool:
        # Plain-text comparison; credential hardening is out of scope
        return self._password == password

    def add_bid(self, item: "AuctionItem", bid: Bid) -> None:
        """Record a validated bid, replacing any earlier one for the item"""
        self._bids[item] = bid

    def add_to_watchlist(self, item: "AuctionItem") -> bool:
        """
        Add item to the watchlist.

        Returns:
            True if added, False if the item was already present
        """
        if any(watched is item for watched in self._watchlist):
            logger.debug(f"{item.name} already on watchlist of {self.username}")
            return False

        self._watchlist.append(item)
        logger.info(f"{item.name} added to watchlist of {self.username}")
        return True

    def list_bids(self) -> List[Bid]:
        return list(self._bids.values())

    def list_watchlist(self) -> List[WatchEntry]:
        return [
            WatchEntry(
                item_name=item.name,
                highest_bid=item.highest_bid,
                end_time=item.end_time,
            )
            for item in self._watchlist
        ]

    def __repr__(self) -> str:
        return f"User(username={self.username!r}, bids={len(self._bids)})"
