# src/marketpulse/application/sections/oil.py
"""
Oil Section - Brent Crude Spot Price

Uses the two latest daily observations of the Brent spot series. Percent
change needs both; with fewer than two the section has no data.

Files that USE this module:
- marketpulse.application.snapshot_service (runs OilSection)
- tests.test_sections (unit tests)

Files that this module USES:
- marketpulse.adapters.providers.eia (EiaProvider)
"""
import logging
from typing import Optional

from marketpulse.adapters.providers.eia import BRENT, EiaProvider
from marketpulse.application.sections.base import SectionFetcher
from marketpulse.domain.errors import NoDataError
from marketpulse.domain.models import OilRecord
from marketpulse.shared.numbers import pct_change, round_half_up

log = logging.getLogger(__name__)


class OilSection(SectionFetcher):
    name = "oil"

    def __init__(self, provider: Optional[EiaProvider] = None):
        self.provider = provider or EiaProvider()

    async def fetch(self) -> OilRecord:
        """
        Raises:
            UpstreamError: If the series request fails
            NoDataError: If fewer than two observations came back
        """
        observations = await self.provider.latest_observations(BRENT, length=2)
        if len(observations) < 2:
            log.warning("Brent series returned %d observation(s), need 2", len(observations))
            raise NoDataError()

        latest, previous = observations[0], observations[1]
        change = pct_change(latest.value, previous.value)
        if change is None:
            raise NoDataError("No data (previous Brent price is zero)")

        return OilRecord(
            brent_price=round_half_up(latest.value, 2),
            brent_change=round_half_up(change, 2),
            brent_date=latest.period,
        )
