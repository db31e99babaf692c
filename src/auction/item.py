"""
Auction Item: bid state and lifecycle for a single listed item.
"""

import uuid
import logging
from datetime import datetime
from decimal import Decimal
from typing import Callable, Optional, TYPE_CHECKING

from observability.metrics import metrics_collector

from .errors import AuctionClosedError, BidTooLowError
from .models import Bid, ItemStatus
from .operations import Amount, to_amount

if TYPE_CHECKING:
    from .user import User

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


class AuctionItem:
    """
    Item listed for auction.

    Invariants:
    - highest_bid >= starting_price
    - highest_bidder is set iff highest_bid > starting_price

    Items compare and hash by identity so they can key a user's bid ledger.
    """

    def __init__(
        self,
        name: str,
        starting_price: Decimal,
        reserve_price: Decimal,
        end_time: datetime,
        min_bid_increment: Decimal,
        clock: Optional[Clock] = None,
    ):
        """
        Initialize an item.

        Args:
            name: Display name
            starting_price: Opening price; first bid must clear it by the increment
            reserve_price: Lowest highest-bid that counts as a sale
            end_time: Bids are accepted strictly before this instant
            min_bid_increment: Smallest step above the current highest bid
            clock: Callable returning "now" (defaults to datetime.now)
        """
        self.item_id = str(uuid.uuid4())
        self.name = name
        self.starting_price = starting_price
        self.reserve_price = reserve_price
        self.highest_bid = starting_price
        self.highest_bidder: Optional["User"] = None
        self.end_time = end_time
        self.min_bid_increment = min_bid_increment
        self._clock = clock or datetime.now

    def is_open(self) -> bool:
        return self._clock() < self.end_time

    def is_reserve_met(self) -> bool:
        return self.highest_bid >= self.reserve_price

    def minimum_next_bid(self) -> Decimal:
        """Smallest amount the next bid must reach"""
        return self.highest_bid + self.min_bid_increment

    def status(self) -> ItemStatus:
        """Classify the item for reporting; nothing is stored"""
        if self.is_open():
            return ItemStatus.OPEN
        if self.highest_bidder is None:
            return ItemStatus.CLOSED_UNSOLD
        if not self.is_reserve_met():
            return ItemStatus.CLOSED_RESERVE_NOT_MET
        return ItemStatus.CLOSED_RESERVE_MET

    def place_bid(self, bidder: "User", amount: Amount) -> Bid:
        """
        Place a bid on this item.

        Args:
            bidder: User placing the bid
            amount: Bid amount

        Returns:
            The accepted Bid (also recorded in the bidder's ledger)

        Raises:
            AuctionClosedError: If the end time has passed
            BidTooLowError: If amount < highest_bid + min_bid_increment
        """
        amount = to_amount(amount)

        if not self.is_open():
            logger.warning(f"[ITEM] Bid from {bidder.username} rejected: {self.name} is closed")
            metrics_collector.record_bid("closed")
            raise AuctionClosedError(self.name)

        minimum = self.minimum_next_bid()
        if amount < minimum:
            logger.warning(
                f"[ITEM] Bid of {amount} from {bidder.username} on {self.name} "
                f"below minimum {minimum}"
            )
            metrics_collector.record_bid("too_low")
            raise BidTooLowError(self.name, amount, minimum)

        self.highest_bid = amount
        self.highest_bidder = bidder

        bid = Bid(
            item_id=self.item_id,
            item_name=self.name,
            bidder=bidder.username,
            amount=amount,
            placed_at=self._clock(),
        )
        bidder.add_bid(self, bid)

        metrics_collector.record_bid("accepted")
        logger.info(f"[ITEM] {bidder.username} placed a bid of {amount} on {self.name}")
        return bid

    def __repr__(self) -> str:
        return (
            f"AuctionItem(name={self.name!r}, highest_bid={self.highest_bid}, "
            f"end_time={self.end_time.isoformat()})"
        )
