# src/marketpulse/adapters/providers/base.py
"""
Source-Neutral Quote Types and Provider Base Class

Every source adapter decodes its upstream's JSON into one of the small
value types below. Section fetchers only ever see these types, so no
upstream field name leaks past the adapters.

Files that USE this module:
- marketpulse.adapters.providers.* (adapters extend Provider and return these types)
- marketpulse.application.sections.* (sections consume these types)

Files that this module USES:
- marketpulse.adapters.upstream (UpstreamClient)
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from marketpulse.adapters.upstream import UpstreamClient


@dataclass(frozen=True)
class SpotStats:
    """Last traded price with its period-open baseline and, if reported, a ready-made percent change."""
    last: float
    open: Optional[float] = None
    change_pct: Optional[float] = None


@dataclass(frozen=True)
class TopOfBook:
    """Best bid and ask; change_pct only when the source reports one."""
    bid: Optional[float]
    ask: Optional[float]
    change_pct: Optional[float] = None


@dataclass(frozen=True)
class IndexQuote:
    level: Optional[float]
    change_pct: Optional[float] = None


@dataclass(frozen=True)
class Observation:
    """One dated value of a time series."""
    period: str
    value: float


class Provider:
    """Base class holding the shared upstream client and the source's base URL."""

    source = "upstream"

    def __init__(self, base_url: str, client: Optional[UpstreamClient] = None):
        self.base_url = base_url
        self.client = client or UpstreamClient()
