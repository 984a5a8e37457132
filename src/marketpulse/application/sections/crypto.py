# src/marketpulse/application/sections/crypto.py
"""
Crypto Section - BTC and ETH Spot Prices in USD and CAD

Both products are fetched in parallel. Percent change is the provider's own
figure when it reports one, otherwise (last - open) / open * 100. CAD prices
use the USD/CAD rate from the forex section, or the configured fallback
rate when forex had none this run.

Files that USE this module:
- marketpulse.application.snapshot_service (runs CryptoSection)
- tests.test_sections (unit tests)

Files that this module USES:
- marketpulse.adapters.providers.coinbase (CoinbaseProvider)
- marketpulse.application.handoff (RateHandoff)
- marketpulse.config (settings.fallback_usd_cad_rate)
"""
from __future__ import annotations

import asyncio
import logging
from typing import Optional

from marketpulse.adapters.providers.base import SpotStats
from marketpulse.adapters.providers.coinbase import CoinbaseProvider
from marketpulse.application.handoff import RateHandoff
from marketpulse.application.sections.base import SectionFetcher
from marketpulse.config import settings
from marketpulse.domain.models import CryptoRecord
from marketpulse.shared.numbers import pct_change, round_half_up

log = logging.getLogger(__name__)


def period_change(stats: SpotStats) -> Optional[float]:
    """Provider-reported change if present, else change against the period open, 2 dp."""
    if stats.change_pct is not None:
        return stats.change_pct
    return round_half_up(pct_change(stats.last, stats.open), 2)


class CryptoSection(SectionFetcher):
    name = "crypto"

    def __init__(
        self,
        provider: Optional[CoinbaseProvider] = None,
        fallback_usd_cad_rate: Optional[float] = None,
    ):
        self.provider = provider or CoinbaseProvider()
        self.fallback_usd_cad_rate = fallback_usd_cad_rate or settings.fallback_usd_cad_rate

    async def fetch(self, handoff: Optional[RateHandoff] = None) -> CryptoRecord:
        """
        Fetch BTC-USD and ETH-USD stats and build the crypto record.

        Args:
            handoff: USD/CAD rate from the forex section; the fallback rate is used without one

        Raises:
            UpstreamError: If either price request fails
        """
        btc, eth = await asyncio.gather(
            self.provider.spot_stats("BTC-USD"),
            self.provider.spot_stats("ETH-USD"),
        )

        if handoff is None:
            usd_cad = self.fallback_usd_cad_rate
        else:
            usd_cad = await handoff.resolve(self.fallback_usd_cad_rate)

        return CryptoRecord(
            btc_usd=round_half_up(btc.last, 2),
            eth_usd=round_half_up(eth.last, 2),
            btc_cad=round_half_up(btc.last * usd_cad, 2),
            eth_cad=round_half_up(eth.last * usd_cad, 2),
            btc_change=period_change(btc),
            eth_change=period_change(eth),
        )
