# src/marketpulse/application/snapshot_service.py
"""
Snapshot Service - Concurrent Fan-out Over All Market Sections

This module contains the aggregation core. It runs the five section fetchers
concurrently, isolates each one's failure into that section's error marker,
waits for every branch to settle and returns one Snapshot.

The only link between sections is the USD/CAD rate handed from forex to
crypto. The forex branch settles the handoff when it finishes, successful or
not, so crypto never waits on anything but forex's completion.

Files that USE this module:
- marketpulse.app (CLI entry point prints get_snapshot())
- marketpulse (package exports get_snapshot and collect_snapshot)
- tests.test_snapshot_service (unit tests)

Files that this module USES:
- marketpulse.application.sections.* (the five section fetchers)
- marketpulse.application.handoff (RateHandoff)
- marketpulse.config (fallback rate and per-section timeout)
- marketpulse.domain.models (Snapshot, SectionError)
"""
from __future__ import annotations

import asyncio
import logging
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timezone
from typing import Any, Awaitable, Callable, Dict, Optional

from marketpulse.adapters.upstream import UpstreamClient
from marketpulse.adapters.providers import (
    CboeProvider,
    CoinbaseProvider,
    EiaProvider,
    ErApiProvider,
    SwissquoteProvider,
)
from marketpulse.application.handoff import RateHandoff
from marketpulse.application.sections import (
    CryptoSection,
    ForexSection,
    MetalsSection,
    OilSection,
    VolatilitySection,
)
from marketpulse.config import settings
from marketpulse.domain.models import SectionError, SectionResult, Snapshot

log = logging.getLogger(__name__)

# Upstream calls per run: forex 1, crypto 2, metals 2, volatility 2, oil 1
UPSTREAM_WORKERS = 8


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _error_message(exc: BaseException) -> str:
    return str(exc) or "Failed"


class SnapshotService:
    """
    Aggregates the five market sections into a Snapshot.

    Sections are injectable for tests; by default all of them share one
    UpstreamClient. Each collect() gives that client a fresh thread pool and
    abandons it without joining when the run ends, so a request still
    blocked past its section timeout cannot hold up the caller.
    """

    def __init__(
        self,
        forex: Optional[ForexSection] = None,
        crypto: Optional[CryptoSection] = None,
        metals: Optional[MetalsSection] = None,
        volatility: Optional[VolatilitySection] = None,
        oil: Optional[OilSection] = None,
        client: Optional[UpstreamClient] = None,
        section_timeout: Optional[float] = None,
        clock: Callable[[], datetime] = _utc_now,
    ):
        self.section_timeout = section_timeout if section_timeout is not None else settings.section_timeout_seconds
        if client is None:
            timeout = settings.http_timeout_seconds
            if self.section_timeout:
                timeout = min(timeout, self.section_timeout)
            client = UpstreamClient(timeout=timeout)
        self.client = client
        self.forex = forex or ForexSection(ErApiProvider(client=client))
        self.crypto = crypto or CryptoSection(
            CoinbaseProvider(client=client),
            fallback_usd_cad_rate=settings.fallback_usd_cad_rate,
        )
        self.metals = metals or MetalsSection(SwissquoteProvider(client=client))
        self.volatility = volatility or VolatilitySection(CboeProvider(client=client))
        self.oil = oil or OilSection(EiaProvider(client=client))
        self.clock = clock

    async def _guarded(
        self,
        name: str,
        coro: Awaitable[Any],
        on_settled: Optional[Callable[[], None]] = None,
    ) -> SectionResult:
        """
        Await one section and convert any failure into its SectionError.

        Args:
            name: Section name (for logs and timeout messages)
            coro: The section's fetch() coroutine
            on_settled: Called once the section has finished, whatever the outcome
        """
        try:
            if self.section_timeout:
                result = await asyncio.wait_for(coro, timeout=self.section_timeout)
            else:
                result = await coro
            log.debug("Section %s ok", name)
            return result
        except asyncio.TimeoutError as e:
            if not self.section_timeout:
                log.warning("Section %s failed: %s (type: %s)", name, e, type(e).__name__)
                return SectionError(_error_message(e))
            log.warning("Section %s timed out after %ss", name, self.section_timeout)
            return SectionError(f"{name} timed out after {self.section_timeout:g}s")
        except Exception as e:
            log.warning("Section %s failed: %s (type: %s)", name, e, type(e).__name__)
            return SectionError(_error_message(e))
        finally:
            if on_settled is not None:
                on_settled()

    async def collect(self) -> Snapshot:
        """
        Run all sections concurrently and assemble the snapshot.

        Never raises for a section failure; failed sections carry SectionError.
        """
        handoff = RateHandoff()
        log.info("Collecting market snapshot")

        executor = ThreadPoolExecutor(max_workers=UPSTREAM_WORKERS, thread_name_prefix="marketpulse-upstream")
        self.client.executor = executor
        try:
            forex, crypto, metals, volatility, oil = await asyncio.gather(
                self._guarded("forex", self.forex.fetch(handoff), on_settled=lambda: handoff.publish(None)),
                self._guarded("crypto", self.crypto.fetch(handoff)),
                self._guarded("metals", self.metals.fetch()),
                self._guarded("volatility", self.volatility.fetch()),
                self._guarded("oil", self.oil.fetch()),
            )
        finally:
            self.client.executor = None
            # Requests still running after a section timeout finish in the background.
            executor.shutdown(wait=False, cancel_futures=True)

        snapshot = Snapshot(
            timestamp=self.clock(),
            forex=forex,
            crypto=crypto,
            metals=metals,
            volatility=volatility,
            oil=oil,
        )
        failed = snapshot.failed_sections()
        if failed:
            log.warning("Snapshot collected with failed sections: %s", ", ".join(failed))
        else:
            log.info("Snapshot collected, all sections ok")
        return snapshot


async def collect_snapshot(service: Optional[SnapshotService] = None) -> Snapshot:
    """Awaitable form of get_snapshot() returning the Snapshot object."""
    service = service or SnapshotService()
    return await service.collect()


def get_snapshot(service: Optional[SnapshotService] = None) -> Dict[str, Any]:
    """
    Collect one snapshot and return it in its wire (JSON-ready) shape.

    This starts its own event loop. Code already running inside an event
    loop should await collect_snapshot() instead.

    Returns:
        Snapshot dict, or {"error": message} if the run could not start
    """
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        pass
    else:
        log.error("get_snapshot() called from a running event loop")
        return {"error": "get_snapshot() cannot run inside an event loop; await collect_snapshot() instead"}

    try:
        return asyncio.run(collect_snapshot(service)).to_dict()
    except Exception as e:
        log.exception("Snapshot run failed before fan-out: %s", e)
        return {"error": _error_message(e)}
