# src/marketpulse/application/sections/metals.py
"""
Metals Section - Gold and Silver Spot per Troy Ounce

Mid-price of the top of book, gold to 2 dp and silver to 3 dp. The quote
feed reports no daily change, so the change fields stay None unless a
source provides them.

Files that USE this module:
- marketpulse.application.snapshot_service (runs MetalsSection)
- tests.test_sections (unit tests)

Files that this module USES:
- marketpulse.adapters.providers.swissquote (SwissquoteProvider)
"""
import asyncio
from typing import Optional

from marketpulse.adapters.providers.swissquote import SwissquoteProvider
from marketpulse.application.sections.base import SectionFetcher
from marketpulse.domain.models import MetalsRecord
from marketpulse.shared.numbers import mid_price, round_half_up


class MetalsSection(SectionFetcher):
    name = "metals"

    def __init__(self, provider: Optional[SwissquoteProvider] = None):
        self.provider = provider or SwissquoteProvider()

    async def fetch(self) -> MetalsRecord:
        gold, silver = await asyncio.gather(
            self.provider.top_of_book("XAU", "USD"),
            self.provider.top_of_book("XAG", "USD"),
        )
        return MetalsRecord(
            gold_price=round_half_up(mid_price(gold.bid, gold.ask), 2),
            silver_price=round_half_up(mid_price(silver.bid, silver.ask), 3),
            gold_change=gold.change_pct,
            silver_change=silver.change_pct,
        )
