# src/marketpulse/application/sections/forex.py
"""
Forex Section - Exchange Rates and the US Dollar Index

Builds the forex record from the USD rate table. The table quotes every
currency per 1 USD, so pairs conventionally quoted the other way round
(EUR/USD, GBP/USD) are inverted before use. The dollar index follows the
ICE formula:

    DXY = 50.14348112 * EURUSD^-0.576 * USDJPY^0.136 * GBPUSD^-0.119
                      * USDCAD^0.091 * USDSEK^0.042 * USDCHF^0.036

All values are computed from unrounded rates and rounded once, on output.

Files that USE this module:
- marketpulse.application.snapshot_service (runs ForexSection)
- tests.test_sections (unit tests)

Files that this module USES:
- marketpulse.adapters.providers.er_api (ErApiProvider)
- marketpulse.application.handoff (RateHandoff for the USD/CAD rate)
- marketpulse.shared.numbers (round_half_up)
"""
from __future__ import annotations

import logging
import math
from typing import Mapping, Optional

from marketpulse.adapters.providers.er_api import ErApiProvider
from marketpulse.application.handoff import RateHandoff
from marketpulse.application.sections.base import SectionFetcher
from marketpulse.domain.models import ForexRecord
from marketpulse.shared.numbers import round_half_up

log = logging.getLogger(__name__)

DXY_CONSTANT = 50.14348112
# Pair -> exponent; every pair is expressed as quoted in the index definition
DXY_WEIGHTS = {
    "EURUSD": -0.576,
    "USDJPY": 0.136,
    "GBPUSD": -0.119,
    "USDCAD": 0.091,
    "USDSEK": 0.042,
    "USDCHF": 0.036,
}


def pair_rate(table: Mapping[str, float], base: str, quote: str) -> Optional[float]:
    """
    Rate of base/quote (units of quote per 1 base) from a USD rate table.

    Handles USD on either side and non-USD crosses; None when a leg is missing.
    """
    if base == quote:
        return 1.0
    if base == "USD":
        return table.get(quote)
    base_per_usd = table.get(base)
    if not base_per_usd:
        return None
    if quote == "USD":
        return 1.0 / base_per_usd
    quote_per_usd = table.get(quote)
    if quote_per_usd is None:
        return None
    return quote_per_usd / base_per_usd


def dollar_index(pairs: Mapping[str, Optional[float]]) -> Optional[float]:
    """
    Unrounded US dollar index from the six basket pairs.

    Args:
        pairs: Mapping with EURUSD, USDJPY, GBPUSD, USDCAD, USDSEK, USDCHF

    Returns:
        Index value, or None unless all six rates are present and positive
    """
    value = DXY_CONSTANT
    for pair, weight in DXY_WEIGHTS.items():
        rate = pairs.get(pair)
        if rate is None or rate <= 0:
            return None
        value *= math.pow(rate, weight)
    return value


class ForexSection(SectionFetcher):
    name = "forex"

    def __init__(self, provider: Optional[ErApiProvider] = None):
        self.provider = provider or ErApiProvider()

    async def fetch(self, handoff: Optional[RateHandoff] = None) -> ForexRecord:
        """
        Fetch the rate table and build the forex record.

        Args:
            handoff: Optional handoff that receives the unrounded USD/CAD rate

        Raises:
            UpstreamError: If the rate table cannot be fetched
        """
        table = await self.provider.usd_rate_table()

        usd_cad = pair_rate(table, "USD", "CAD")
        if handoff is not None:
            handoff.publish(usd_cad)

        return self.build(table)

    @staticmethod
    def build(table: Mapping[str, float]) -> ForexRecord:
        pairs = {name: pair_rate(table, name[:3], name[3:]) for name in DXY_WEIGHTS}
        dxy = dollar_index(pairs)
        if dxy is None:
            missing = sorted(name for name, rate in pairs.items() if rate is None)
            log.info("Dollar index skipped, missing pairs: %s", ", ".join(missing))

        return ForexRecord(
            dxy=round_half_up(dxy, 3),
            usd_cad=round_half_up(pairs["USDCAD"], 4),
            usd_cny=round_half_up(pair_rate(table, "USD", "CNY"), 4),
            cad_cny=round_half_up(pair_rate(table, "CAD", "CNY"), 4),
            usd_jpy=round_half_up(pairs["USDJPY"], 2),
            eur_usd=round_half_up(pairs["EURUSD"], 4),
        )
