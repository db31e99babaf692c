"""
Command Dispatcher: translate operator commands into catalog calls.

Handlers never print; they return a CommandResult the console renders.
"""

import logging
from dataclasses import dataclass, field
from typing import List

from auction.errors import (
    AuctionClosedError,
    BidTooLowError,
    DuplicateUserError,
    IndexOutOfRangeError,
    InvalidCredentialsError,
    ItemAlreadyWatchlistedError,
)
from auction.models import SettlementOutcome
from auction.operations import Amount

from .session import Session

logger = logging.getLogger(__name__)


@dataclass
class CommandResult:
    """Outcome of one command: success flag and lines to show"""
    ok: bool
    lines: List[str] = field(default_factory=list)

    @classmethod
    def success(cls, *lines: str) -> "CommandResult":
        return cls(True, list(lines))

    @classmethod
    def failure(cls, *lines: str) -> "CommandResult":
        return cls(False, list(lines))


LOGIN_REQUIRED = "Please log in first."


class CommandDispatcher:
    """
    Execute menu commands against a session.

    Unauthenticated: register, login.
    Authenticated: add_item, list_items, place_bid, list_my_bids,
    add_to_watchlist, list_my_watchlist, declare_winners, list_history, logout.

    Item positions are 1-based, as displayed by list_items.
    """

    def __init__(self, session: Session):
        self.session = session

    @property
    def catalog(self):
        return self.session.catalog

    # Unauthenticated commands

    def register(self, username: str, password: str) -> CommandResult:
        try:
            self.catalog.register_user(username, password)
        except DuplicateUserError as e:
            return CommandResult.failure(f"{e}.")
        except ValueError as e:
            return CommandResult.failure(str(e))
        return CommandResult.success(f"User {username} registered successfully.")

    def login(self, username: str, password: str) -> CommandResult:
        try:
            self.session.user = self.catalog.login(username, password)
        except InvalidCredentialsError:
            return CommandResult.failure("Invalid credentials.")
        logger.debug(f"[CONSOLE] Session user set to {username}")
        return CommandResult.success("Login successful.")

    # Authenticated commands

    def logout(self) -> CommandResult:
        if not self.session.is_authenticated:
            return CommandResult.failure(LOGIN_REQUIRED)
        self.session.user = None
        return CommandResult.success("Logged out successfully.")

    def add_item(
        self,
        name: str,
        starting_price: Amount,
        reserve_price: Amount,
        duration_minutes: int,
        min_bid_increment: Amount,
    ) -> CommandResult:
        if not self.session.is_authenticated:
            return CommandResult.failure(LOGIN_REQUIRED)
        try:
            item = self.catalog.add_item(
                name, starting_price, reserve_price, duration_minutes, min_bid_increment
            )
        except ValueError as e:
            return CommandResult.failure(str(e))
        return CommandResult.success(
            f"Item {item.name} added to the auction with a starting price of "
            f"{self.session.format_amount(item.starting_price)}"
        )

    def list_items(self) -> CommandResult:
        if not self.session.is_authenticated:
            return CommandResult.failure(LOGIN_REQUIRED)
        listings = self.catalog.list_active_items()
        if not listings:
            return CommandResult.success("No items available for auction.")

        lines = ["Items available for auction:"]
        for listing in listings:
            lines.append(
                f"{listing.position}. {listing.name} - Highest Bid: "
                f"{self.session.format_amount(listing.highest_bid)} - "
                f"Auction ends at: {listing.end_time}"
            )
        return CommandResult.success(*lines)

    def place_bid(self, position: int, amount: Amount) -> CommandResult:
        if not self.session.is_authenticated:
            return CommandResult.failure(LOGIN_REQUIRED)
        user = self.session.user
        try:
            bid = self.catalog.place_bid(position - 1, user, amount)
        except IndexOutOfRangeError:
            return CommandResult.failure("Invalid item selected.")
        except AuctionClosedError as e:
            return CommandResult.failure(f"Auction for {e.item_name} is closed.")
        except BidTooLowError as e:
            return CommandResult.failure(
                f"Bid amount must be at least {self.session.format_amount(e.minimum)}. "
                "Please place a higher bid."
            )
        except ValueError as e:
            return CommandResult.failure(str(e))
        return CommandResult.success(
            f"{user.username} placed a bid of {self.session.format_amount(bid.amount)} "
            f"on {bid.item_name}"
        )

    def list_my_bids(self) -> CommandResult:
        if not self.session.is_authenticated:
            return CommandResult.failure(LOGIN_REQUIRED)
        user = self.session.user
        lines = [f"Bids placed by {user.username}:"]
        bids = user.list_bids()
        if not bids:
            lines.append("No bids placed.")
        for bid in bids:
            lines.append(f"Item: {bid.item_name} - Bid: {self.session.format_amount(bid.amount)}")
        return CommandResult.success(*lines)

    def add_to_watchlist(self, position: int) -> CommandResult:
        if not self.session.is_authenticated:
            return CommandResult.failure(LOGIN_REQUIRED)
        try:
            item = self.catalog.watch_item(position - 1, self.session.user)
        except IndexOutOfRangeError:
            return CommandResult.failure("Invalid item selected.")
        except ItemAlreadyWatchlistedError as e:
            return CommandResult.failure(f"{e.item_name} is already in your watchlist.")
        return CommandResult.success(f"{item.name} has been added to your watchlist.")

    def list_my_watchlist(self) -> CommandResult:
        if not self.session.is_authenticated:
            return CommandResult.failure(LOGIN_REQUIRED)
        user = self.session.user
        lines = [f"Watchlist for {user.username}:"]
        entries = user.list_watchlist()
        if not entries:
            lines.append("No items in the watchlist.")
        for entry in entries:
            lines.append(
                f"Item: {entry.item_name} - Highest Bid: "
                f"{self.session.format_amount(entry.highest_bid)} - "
                f"Auction ends at: {entry.end_time}"
            )
        return CommandResult.success(*lines)

    def declare_winners(self) -> CommandResult:
        if not self.session.is_authenticated:
            return CommandResult.failure(LOGIN_REQUIRED)
        results = self.catalog.declare_winners()
        if not results:
            return CommandResult.success("No items to declare winners for.")

        lines = ["Auction results:"]
        for result in results:
            if result.outcome == SettlementOutcome.SOLD:
                lines.append(
                    f"Item: {result.item_name} won by {result.winner} with a bid of "
                    f"{self.session.format_amount(result.highest_bid)}"
                )
            elif result.outcome == SettlementOutcome.NO_BIDS:
                lines.append(f"Item: {result.item_name} received no bids.")
            else:
                lines.append(f"Item: {result.item_name} did not meet the reserve price.")
        return CommandResult.success(*lines)

    def list_history(self) -> CommandResult:
        if not self.session.is_authenticated:
            return CommandResult.failure(LOGIN_REQUIRED)
        entries = self.catalog.auction_history()
        if not entries:
            return CommandResult.success("No past auctions to display.")

        lines = ["Past auction results:"]
        for entry in entries:
            lines.append(
                f"Item: {entry.item_name} - Sold for: "
                f"{self.session.format_amount(entry.final_price)} to {entry.winner}"
            )
        return CommandResult.success(*lines)
