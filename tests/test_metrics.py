"""
Tests for Prometheus auction metrics.

Counters are process-global, so assertions compare before/after deltas.
"""

import sys
import os

# Add src to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

import pytest
from prometheus_client import REGISTRY

from auction import AuctionCatalog, BidTooLowError, AuctionClosedError
from observability.metrics import metrics_collector


def sample(name, labels=None):
    return REGISTRY.get_sample_value(name, labels or {}) or 0.0


class TestBidMetrics:
    """Test bid counters"""

    def test_bid_results_counted(self, clock):
        """Test accepted, too-low and closed bids increment their labels"""
        catalog = AuctionCatalog(clock=clock)
        alice = catalog.register_user("alice", "pw")
        catalog.add_item("Vase", 10, 50, 60, 5)

        accepted = sample("auction_bids_total", {"result": "accepted"})
        too_low = sample("auction_bids_total", {"result": "too_low"})
        closed = sample("auction_bids_total", {"result": "closed"})

        catalog.place_bid(0, alice, 15)
        with pytest.raises(BidTooLowError):
            catalog.place_bid(0, alice, 16)
        clock.advance(minutes=61)
        with pytest.raises(AuctionClosedError):
            catalog.place_bid(0, alice, 100)

        assert sample("auction_bids_total", {"result": "accepted"}) == accepted + 1
        assert sample("auction_bids_total", {"result": "too_low"}) == too_low + 1
        assert sample("auction_bids_total", {"result": "closed"}) == closed + 1


class TestSettlementMetrics:
    """Test settlement counters and gauges"""

    def test_settlement_outcomes_counted(self, clock):
        """Test one outcome counted per item and gauges updated"""
        catalog = AuctionCatalog(clock=clock)
        alice = catalog.register_user("alice", "pw")
        catalog.add_item("Unbid", 10, 50, 60, 5)
        catalog.add_item("Sold", 10, 50, 60, 5)
        catalog.place_bid(1, alice, 50)

        sold = sample("auction_settlements_total", {"outcome": "SOLD"})
        no_bids = sample("auction_settlements_total", {"outcome": "NO_BIDS"})
        observed = sample("auction_settlement_latency_seconds_count")

        catalog.declare_winners()

        assert sample("auction_settlements_total", {"outcome": "SOLD"}) == sold + 1
        assert sample("auction_settlements_total", {"outcome": "NO_BIDS"}) == no_bids + 1
        assert sample("auction_settlement_latency_seconds_count") == observed + 1
        assert sample("auction_active_items") == 1
        assert sample("auction_settled_items") == 1

    def test_registrations_counted(self, clock):
        """Test user registrations increment the counter"""
        catalog = AuctionCatalog(clock=clock)
        before = sample("auction_users_registered_total")

        catalog.register_user("alice", "pw")
        catalog.register_user("bob", "pw")

        assert sample("auction_users_registered_total") == before + 2


class TestExport:
    """Test exposition output"""

    def test_get_metrics(self):
        """Test exported text includes auction metrics"""
        output = metrics_collector.get_metrics().decode("utf-8")

        assert "auction_uptime_seconds" in output
        assert "auction_settlements_total" in output
