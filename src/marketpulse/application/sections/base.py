# src/marketpulse/application/sections/base.py
"""
Section Fetcher Base Class

A section fetcher owns one snapshot category: it calls its source adapter(s),
normalizes the values and returns the category record. Failures are raised,
not returned; the aggregator turns them into the category's error marker.

Files that USE this module:
- marketpulse.application.sections.* (all section fetchers extend SectionFetcher)
- marketpulse.application.snapshot_service (runs section fetchers)
"""
from abc import ABC, abstractmethod
from typing import Any


class SectionFetcher(ABC):
    name: str = "section"

    @abstractmethod
    async def fetch(self, *args: Any, **kwargs: Any) -> Any:
        """Fetch and normalize the category; raise on failure."""
        raise NotImplementedError
