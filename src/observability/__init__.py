"""
Observability module for auction metrics.

Provides Prometheus integration for the auction marketplace.
"""

from .metrics import (
    metrics_collector,
    MetricsCollector,
    track_time,
    setup_metrics_endpoint_fastapi,
)

__all__ = [
    'metrics_collector',
    'MetricsCollector',
    'track_time',
    'setup_metrics_endpoint_fastapi',
]
