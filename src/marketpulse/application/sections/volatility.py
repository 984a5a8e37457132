# src/marketpulse/application/sections/volatility.py
"""
Volatility Section - VIX and VXN

Index levels and the provider's percent changes are passed through as
reported; a missing change becomes None.
"""
import asyncio
from typing import Optional

from marketpulse.adapters.providers.cboe import CboeProvider
from marketpulse.application.sections.base import SectionFetcher
from marketpulse.domain.models import VolatilityRecord


class VolatilitySection(SectionFetcher):
    name = "volatility"

    def __init__(self, provider: Optional[CboeProvider] = None):
        self.provider = provider or CboeProvider()

    async def fetch(self) -> VolatilityRecord:
        vix, vxn = await asyncio.gather(
            self.provider.index_quote("VIX"),
            self.provider.index_quote("VXN"),
        )
        return VolatilityRecord(
            vix=vix.level,
            vix_change=vix.change_pct,
            vxn=vxn.level,
            vxn_change=vxn.change_pct,
        )
