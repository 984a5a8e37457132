# src/marketpulse/adapters/providers/coinbase.py
"""
Coinbase Exchange Provider for 24h Product Stats

GET /products/<BASE>-<QUOTE>/stats returns strings:
    {"open": "64100.01", "high": "...", "low": "...", "last": "65012.55", "volume": "..."}

Files that USE this module:
- marketpulse.application.sections.crypto (CryptoSection)
- tests.test_providers (unit tests)

Files that this module USES:
- marketpulse.adapters.providers.base (Provider, SpotStats)
- marketpulse.config (settings for the API base URL)
"""
import logging
from typing import Optional

from marketpulse.adapters.providers.base import Provider, SpotStats
from marketpulse.adapters.upstream import UpstreamClient
from marketpulse.config import settings
from marketpulse.domain.errors import DecodeError
from marketpulse.shared.numbers import to_float

log = logging.getLogger(__name__)


class CoinbaseProvider(Provider):
    source = "coinbase"

    def __init__(self, base_url: Optional[str] = None, client: Optional[UpstreamClient] = None):
        super().__init__(base_url or settings.coinbase_url, client)

    def stats_url(self, product: str) -> str:
        return f"{self.base_url.rstrip('/')}/products/{product}/stats"

    async def spot_stats(self, product: str) -> SpotStats:
        """
        Fetch last price and 24h open for a product such as 'BTC-USD'.

        Raises:
            UpstreamError: If the request fails or the payload has no usable last price
        """
        url = self.stats_url(product)
        data = await self.client.fetch_json(url, expect=dict)

        last = to_float(data.get("last"))
        if last is None:
            log.error("%s %s stats missing 'last': %s", self.source, product, data)
            raise DecodeError(f"{url} response missing last price", url=url)

        stats = SpotStats(last=last, open=to_float(data.get("open")))
        log.debug("%s %s: last=%s open=%s", self.source, product, stats.last, stats.open)
        return stats
