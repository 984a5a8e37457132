# src/marketpulse/application/handoff.py
"""
Rate Handoff - One-shot USD/CAD Rate Passed From Forex to Crypto

The forex section publishes the USD/CAD rate it read from the rate table;
the crypto section reads it when converting prices to CAD. The handoff is
settled exactly once per run: with the rate, or with None when the forex
section fails (the aggregator settles it when the forex branch finishes,
whatever its outcome). Readers wait only for that settlement, never for a
successful forex fetch, and get the fallback constant when no rate exists.

Files that USE this module:
- marketpulse.application.sections.forex (publishes the rate)
- marketpulse.application.sections.crypto (resolves the rate)
- marketpulse.application.snapshot_service (creates and settles the handoff)
"""
from __future__ import annotations

import asyncio
import logging
from typing import Optional

log = logging.getLogger(__name__)


class RateHandoff:
    def __init__(self) -> None:
        self._rate: Optional[float] = None
        self._settled = asyncio.Event()

    @classmethod
    def settled(cls, rate: Optional[float]) -> "RateHandoff":
        """Build an already-settled handoff (used when crypto runs on its own)."""
        handoff = cls()
        handoff.publish(rate)
        return handoff

    @property
    def is_settled(self) -> bool:
        return self._settled.is_set()

    def publish(self, rate: Optional[float]) -> None:
        """Settle the handoff; later calls are ignored so the value never changes."""
        if self._settled.is_set():
            return
        self._rate = rate if rate is not None and rate > 0 else None
        self._settled.set()
        log.debug("USD/CAD handoff settled: %s", self._rate)

    async def resolve(self, fallback: float) -> float:
        """Wait for settlement and return the rate, or fallback when none was published."""
        await self._settled.wait()
        if self._rate is None:
            log.info("USD/CAD rate unavailable, using fallback %s", fallback)
            return fallback
        return self._rate
