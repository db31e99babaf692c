"""
Auction Catalog: item collection, user directory, and settlement.
"""

import threading
import logging
from datetime import datetime, timedelta
from typing import List, Optional

from observability.metrics import metrics_collector, settlement_latency, track_time

from .config import AuctionConfig
from .errors import (
    DuplicateUserError,
    IndexOutOfRangeError,
    InvalidCredentialsError,
    ItemAlreadyWatchlistedError,
)
from .item import AuctionItem, Clock
from .models import (
    Bid,
    HistoryEntry,
    ItemListing,
    SettlementOutcome,
    SettlementResult,
)
from .operations import (
    Amount,
    to_amount,
    validate_duration,
    validate_increment,
    validate_item_name,
    validate_price,
    validate_username,
)
from .user import User

logger = logging.getLogger(__name__)


class AuctionCatalog:
    """
    Own active items, registered users, and settled history.

    Responsibilities:
    - Register and authenticate users
    - List items for auction
    - Route bids to items by index
    - Settle items against their reserve prices

    An item is always in exactly one of active items or history. Expired
    items are never swept; they stay active until a settlement sells them.
    """

    def __init__(self, config: Optional[AuctionConfig] = None, clock: Optional[Clock] = None):
        """
        Initialize catalog.

        Args:
            config: Optional auction configuration
            clock: Callable returning "now", shared with every item
        """
        self.config = config or AuctionConfig()
        self._clock = clock or datetime.now
        self._items: List[AuctionItem] = []
        self._users: List[User] = []
        self._history: List[AuctionItem] = []
        self._lock = threading.Lock()

    # Users

    def register_user(self, username: str, password: str) -> User:
        """
        Register a new user.

        Raises:
            DuplicateUserError: If the username is taken and duplicates
                are not allowed by configuration
            ValueError: If the username is empty
        """
        validate_username(username)

        with self._lock:
            taken = any(user.username == username for user in self._users)
            if taken and not self.config.allow_duplicate_usernames:
                logger.warning(f"[CATALOG] Registration rejected: {username} already exists")
                raise DuplicateUserError(username)

            user = User(username, password)
            self._users.append(user)

        metrics_collector.record_user_registered()
        logger.info(f"[CATALOG] User {username} registered successfully")
        return user

    def authenticate(self, username: str, password: str) -> Optional[User]:
        """Return the first user matching both username and password"""
        with self._lock:
            for user in self._users:
                if user.username == username and user.check_password(password):
                    logger.info(f"[CATALOG] Login successful for {username}")
                    return user

        logger.warning(f"[CATALOG] Invalid credentials for {username}")
        return None

    def login(self, username: str, password: str) -> User:
        """Like authenticate, but raises InvalidCredentialsError on failure"""
        user = self.authenticate(username, password)
        if user is None:
            raise InvalidCredentialsError()
        return user

    def get_user(self, username: str) -> Optional[User]:
        with self._lock:
            for user in self._users:
                if user.username == username:
                    return user
        return None

    # Items

    def add_item(
        self,
        name: str,
        starting_price: Amount,
        reserve_price: Amount,
        duration_minutes: int,
        min_bid_increment: Amount,
    ) -> AuctionItem:
        """
        List a new item for auction.

        Args:
            name: Item name
            starting_price: Opening price
            reserve_price: Minimum sale price
            duration_minutes: Minutes from now until bidding closes
            min_bid_increment: Smallest step above the current highest bid

        Returns:
            The new active item
        """
        validate_item_name(name)
        starting = to_amount(starting_price)
        reserve = to_amount(reserve_price)
        increment = to_amount(min_bid_increment)
        validate_price("Starting price", starting)
        validate_price("Reserve price", reserve)
        validate_increment(increment)
        validate_duration(duration_minutes)

        end_time = self._clock() + timedelta(minutes=duration_minutes)
        item = AuctionItem(name, starting, reserve, end_time, increment, clock=self._clock)

        with self._lock:
            self._items.append(item)
            active = len(self._items)

        metrics_collector.set_active_items(active)
        logger.info(
            f"[CATALOG] Item {name} added to the auction with a starting price of {starting} "
            f"(reserve: {reserve}, ends: {end_time.isoformat()})"
        )
        return item

    def get_item(self, index: int) -> AuctionItem:
        """
        Get an active item by 0-based index.

        Raises:
            IndexOutOfRangeError: If index does not address an active item
        """
        with self._lock:
            return self._get_item_locked(index)

    def find_item(self, item_id: str) -> Optional[AuctionItem]:
        """Find an item by id among active items and history"""
        with self._lock:
            for item in self._items + self._history:
                if item.item_id == item_id:
                    return item
        return None

    def list_active_items(self) -> List[ItemListing]:
        """Snapshot of active items with 1-based positions"""
        with self._lock:
            return [
                ItemListing(
                    position=position,
                    item_id=item.item_id,
                    name=item.name,
                    highest_bid=item.highest_bid,
                    highest_bidder=(
                        item.highest_bidder.username if item.highest_bidder else None
                    ),
                    minimum_next_bid=item.minimum_next_bid(),
                    end_time=item.end_time,
                    is_open=item.is_open(),
                )
                for position, item in enumerate(self._items, start=1)
            ]

    # Bidding

    def place_bid(self, index: int, bidder: User, amount: Amount) -> Bid:
        """
        Place a bid on the active item at a 0-based index.

        Raises:
            IndexOutOfRangeError: If index does not address an active item
            AuctionClosedError: If the item's auction has ended
            BidTooLowError: If amount is below the minimum next bid
        """
        with self._lock:
            item = self._get_item_locked(index)
            return item.place_bid(bidder, amount)

    def watch_item(self, index: int, user: User) -> AuctionItem:
        """
        Add the active item at a 0-based index to a user's watchlist.

        Raises:
            IndexOutOfRangeError: If index does not address an active item
            ItemAlreadyWatchlistedError: If the item is already watched
        """
        with self._lock:
            item = self._get_item_locked(index)
            if not user.add_to_watchlist(item):
                raise ItemAlreadyWatchlistedError(item.name)
            return item

    # Settlement

    @track_time(settlement_latency)
    def declare_winners(self) -> List[SettlementResult]:
        """
        Settle every active item.

        Items with a bidder and a met reserve are sold and moved to history.
        Items without bids or below reserve stay active and are reported
        again on the next call.

        Returns:
            One result per item that was active when called
        """
        results: List[SettlementResult] = []

        with self._lock:
            if not self._items:
                logger.info("[CATALOG] No items to declare winners for")
                return results

            settled: List[AuctionItem] = []
            for item in self._items:
                bidder = item.highest_bidder
                if bidder is not None and item.is_reserve_met():
                    outcome = SettlementOutcome.SOLD
                    settled.append(item)
                    logger.info(
                        f"[CATALOG] Item {item.name} won by {bidder.username} "
                        f"with a bid of {item.highest_bid}"
                    )
                elif bidder is None:
                    outcome = SettlementOutcome.NO_BIDS
                    logger.info(f"[CATALOG] Item {item.name} received no bids")
                else:
                    outcome = SettlementOutcome.RESERVE_NOT_MET
                    logger.info(f"[CATALOG] Item {item.name} did not meet the reserve price")

                metrics_collector.record_settlement(outcome.value)
                results.append(
                    SettlementResult(
                        item_id=item.item_id,
                        item_name=item.name,
                        outcome=outcome,
                        highest_bid=item.highest_bid,
                        winner=bidder.username if outcome == SettlementOutcome.SOLD else None,
                    )
                )

            self._history.extend(settled)
            self._items = [item for item in self._items if item not in settled]
            active, sold = len(self._items), len(self._history)

        metrics_collector.set_active_items(active)
        metrics_collector.set_settled_items(sold)
        return results

    def auction_history(self) -> List[HistoryEntry]:
        """Snapshot of settled items in settlement order"""
        with self._lock:
            return [
                HistoryEntry(
                    item_id=item.item_id,
                    item_name=item.name,
                    final_price=item.highest_bid,
                    winner=item.highest_bidder.username,
                    end_time=item.end_time,
                )
                for item in self._history
            ]

    def _get_item_locked(self, index: int) -> AuctionItem:
        if isinstance(index, bool) or not isinstance(index, int):
            raise IndexOutOfRangeError(index, len(self._items))
        if index < 0 or index >= len(self._items):
            logger.warning(f"[CATALOG] Invalid item selected: {index}")
            raise IndexOutOfRangeError(index, len(self._items))
        return self._items[index]
