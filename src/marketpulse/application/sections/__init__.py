"""
Section Fetchers - One Per Snapshot Category
"""

from marketpulse.application.sections.base import SectionFetcher
from marketpulse.application.sections.crypto import CryptoSection
from marketpulse.application.sections.forex import ForexSection
from marketpulse.application.sections.metals import MetalsSection
from marketpulse.application.sections.oil import OilSection
from marketpulse.application.sections.volatility import VolatilitySection

__all__ = [
    "SectionFetcher",
    "ForexSection",
    "CryptoSection",
    "MetalsSection",
    "VolatilitySection",
    "OilSection",
]
