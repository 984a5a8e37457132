"""
Application Layer - Section Fetchers and Snapshot Aggregation

This package contains the services that turn upstream data into snapshots.
No direct I/O - uses the adapters for every network call.
"""

from marketpulse.application.handoff import RateHandoff
from marketpulse.application.snapshot_service import SnapshotService, collect_snapshot, get_snapshot

__all__ = [
    "RateHandoff",
    "SnapshotService",
    "collect_snapshot",
    "get_snapshot",
]
