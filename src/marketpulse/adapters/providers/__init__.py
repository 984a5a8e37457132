"""
Provider Adapters - Public Market Data Sources

One module per upstream. Each adapter decodes its source's JSON into the
source-neutral quote types defined in base.py.
"""

from marketpulse.adapters.providers.base import IndexQuote, Observation, Provider, SpotStats, TopOfBook
from marketpulse.adapters.providers.cboe import CboeProvider
from marketpulse.adapters.providers.coinbase import CoinbaseProvider
from marketpulse.adapters.providers.eia import EiaProvider
from marketpulse.adapters.providers.er_api import ErApiProvider
from marketpulse.adapters.providers.swissquote import SwissquoteProvider

__all__ = [
    "Provider",
    "SpotStats",
    "TopOfBook",
    "IndexQuote",
    "Observation",
    "ErApiProvider",
    "CoinbaseProvider",
    "SwissquoteProvider",
    "CboeProvider",
    "EiaProvider",
]
