"""
Auction value types: bids, snapshots, and settlement results.
"""

from enum import Enum
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional


class ItemStatus(Enum):
    """Report classification of an active item"""
    OPEN = "OPEN"                                       # Accepting bids
    CLOSED_UNSOLD = "CLOSED_UNSOLD"                     # Past end time, no bids
    CLOSED_RESERVE_NOT_MET = "CLOSED_RESERVE_NOT_MET"   # Past end time, below reserve
    CLOSED_RESERVE_MET = "CLOSED_RESERVE_MET"           # Past end time, sells when winners are declared


class SettlementOutcome(Enum):
    """Outcome of settling one item"""
    NO_BIDS = "NO_BIDS"                   # Stays active
    RESERVE_NOT_MET = "RESERVE_NOT_MET"   # Stays active
    SOLD = "SOLD"                         # Moved to history


@dataclass(frozen=True)
class Bid:
    """Single accepted bid"""
    item_id: str
    item_name: str
    bidder: str             # Username
    amount: Decimal
    placed_at: datetime


@dataclass(frozen=True)
class WatchEntry:
    """Live view of a watched item at the time of listing"""
    item_name: str
    highest_bid: Decimal
    end_time: datetime


@dataclass(frozen=True)
class ItemListing:
    """Active item as shown to operators"""
    position: int           # 1-based
    item_id: str
    name: str
    highest_bid: Decimal
    highest_bidder: Optional[str]
    minimum_next_bid: Decimal
    end_time: datetime
    is_open: bool


@dataclass(frozen=True)
class SettlementResult:
    """Result of settling one item during declare_winners"""
    item_id: str
    item_name: str
    outcome: SettlementOutcome
    highest_bid: Decimal
    winner: Optional[str] = None             # Set only when SOLD

    @property
    def sold(self) -> bool:
        return self.outcome == SettlementOutcome.SOLD


@dataclass(frozen=True)
class HistoryEntry:
    """Settled item with its final price and winner"""
    item_id: str
    item_name: str
    final_price: Decimal
    winner: str
    end_time: datetime
