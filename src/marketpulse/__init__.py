# src/marketpulse/__init__.py
"""
MarketPulse - Market Snapshot Aggregator

Queries public FX, crypto, metals, volatility and oil quote sources
concurrently, normalizes them into one snapshot with derived analytics
(cross rates, percent changes, US dollar index), and isolates each source's
failure to its own section.
"""

__version__ = "1.0.0"

from marketpulse.application.snapshot_service import SnapshotService, collect_snapshot, get_snapshot

__all__ = ["SnapshotService", "collect_snapshot", "get_snapshot", "__version__"]
