"""Prometheus metrics for the auction marketplace

This module exports bid, settlement and catalog metrics, plus helpers for
timing operations and mounting a scrape endpoint.
"""

from prometheus_client import (
    Counter,
    Histogram,
    Gauge,
    Info,
    generate_latest,
    REGISTRY,
)
import time
from functools import wraps


# ============================================================================
# CORE METRICS
# ============================================================================

bids_total = Counter(
    "auction_bids_total",
    "Total number of bids by result",
    ["result"],  # accepted, too_low, closed
)

settlements_total = Counter(
    "auction_settlements_total",
    "Total number of per-item settlement outcomes",
    ["outcome"],  # NO_BIDS, RESERVE_NOT_MET, SOLD
)

users_registered_total = Counter(
    "auction_users_registered_total", "Total number of registered users"
)

active_items = Gauge("auction_active_items", "Number of items still open for settlement")

settled_items = Gauge("auction_settled_items", "Number of items moved to history")

settlement_latency = Histogram(
    "auction_settlement_latency_seconds",
    "Time to settle all active items",
    buckets=[0.0005, 0.001, 0.005, 0.01, 0.05, 0.1, 0.5],
)

system_uptime_seconds = Gauge("auction_uptime_seconds", "Process uptime in seconds")

system_info = Info("auction_system", "System information")


# ============================================================================
# HELPER FUNCTIONS & DECORATORS
# ============================================================================


def track_time(histogram):
    """
    Decorator to automatically track execution time.

    Args:
        histogram: Prometheus Histogram to record time

    Example:
        @track_time(settlement_latency)
        def declare_winners(self):
            ...
    """

    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            start_time = time.time()
            try:
                return func(*args, **kwargs)
            finally:
                duration = time.time() - start_time
                histogram.observe(duration)

        return wrapper

    return decorator


# ============================================================================
# METRICS COLLECTOR
# ============================================================================


class MetricsCollector:
    """
    Centralized metrics collection and export.

    Provides methods for recording auction metrics and exposing them
    to Prometheus.
    """

    def __init__(self):
        self.start_time = time.time()
        self._update_system_info()

    def _update_system_info(self):
        """Update system information metric."""
        import platform

        system_info.info(
            {
                "version": "1.0.0",
                "platform": platform.system(),
                "python_version": platform.python_version(),
            }
        )

    def record_bid(self, result: str):
        """Record a bid attempt by result."""
        bids_total.labels(result=result).inc()

    def record_settlement(self, outcome: str):
        """Record one item's settlement outcome."""
        settlements_total.labels(outcome=outcome).inc()

    def record_user_registered(self):
        """Record a user registration."""
        users_registered_total.inc()

    def set_active_items(self, count: int):
        """Set the number of active items."""
        active_items.set(count)

    def set_settled_items(self, count: int):
        """Set the number of settled items."""
        settled_items.set(count)

    def update_uptime(self):
        """Update system uptime."""
        uptime = time.time() - self.start_time
        system_uptime_seconds.set(uptime)

    def get_metrics(self) -> bytes:
        """
        Get metrics in Prometheus format.

        Returns:
            Metrics as bytes in Prometheus exposition format
        """
        self.update_uptime()
        return generate_latest(REGISTRY)


# Global metrics collector instance
metrics_collector = MetricsCollector()


# ============================================================================
# HTTP ENDPOINT (for Prometheus scraping)
# ============================================================================


def setup_metrics_endpoint_fastapi(app):
    """
    Setup metrics endpoint for FastAPI app.

    Args:
        app: FastAPI application instance
    """
    from fastapi import Response

    @app.get("/metrics")
    async def metrics():
        return Response(
            content=metrics_collector.get_metrics(),
            media_type="text/plain; version=0.0.4; charset=utf-8",
        )
