"""
Auction errors: recoverable failures reported back to the operator.
"""

from decimal import Decimal


class AuctionError(Exception):
    """Base class for all recoverable auction failures"""


class DuplicateUserError(AuctionError):
    """Raised when registering a username that is already taken"""

    def __init__(self, username: str):
        super().__init__(f"Username {username} is already registered")
        self.username = username


class InvalidCredentialsError(AuctionError):
    """Raised when a username/password pair matches no registered user"""

    def __init__(self):
        super().__init__("Invalid credentials")


class AuctionClosedError(AuctionError):
    """Raised when bidding on an item whose end time has passed"""

    def __init__(self, item_name: str):
        super().__init__(f"Auction for {item_name} is closed")
        self.item_name = item_name


class BidTooLowError(AuctionError):
    """Raised when a bid is below highest bid plus the minimum increment"""

    def __init__(self, item_name: str, amount: Decimal, minimum: Decimal):
        super().__init__(
            f"Bid amount must be at least {minimum} for {item_name} (got {amount})"
        )
        self.item_name = item_name
        self.amount = amount
        self.minimum = minimum


class IndexOutOfRangeError(AuctionError, IndexError):
    """Raised when an item index does not address an active item"""

    def __init__(self, index: int, size: int):
        super().__init__(f"Invalid item selected: index {index} (active items: {size})")
        self.index = index
        self.size = size


class ItemAlreadyWatchlistedError(AuctionError):
    """Raised when watching an item that is already on the watchlist"""

    def __init__(self, item_name: str):
        super().__init__(f"{item_name} is already in your watchlist")
        self.item_name = item_name
