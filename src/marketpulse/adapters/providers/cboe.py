# src/marketpulse/adapters/providers/cboe.py
"""
CBOE Delayed Quotes Provider for Volatility Indices

GET /_<SYMBOL>.json returns:
    {"timestamp": "...", "data": {"symbol": "^VIX", "current_price": 14.2, "price_change_percent": -3.1, ...}}

Files that USE this module:
- marketpulse.application.sections.volatility (VolatilitySection)
- tests.test_providers (unit tests)

Files that this module USES:
- marketpulse.adapters.providers.base (Provider, IndexQuote)
- marketpulse.config (settings for the CDN base URL)
"""
import logging
from typing import Optional

from marketpulse.adapters.providers.base import IndexQuote, Provider
from marketpulse.adapters.upstream import UpstreamClient
from marketpulse.config import settings
from marketpulse.domain.errors import DecodeError
from marketpulse.shared.numbers import to_float

log = logging.getLogger(__name__)


class CboeProvider(Provider):
    source = "cboe"

    def __init__(self, base_url: Optional[str] = None, client: Optional[UpstreamClient] = None):
        super().__init__(base_url or settings.cboe_url, client)

    def quote_url(self, symbol: str) -> str:
        return f"{self.base_url.rstrip('/')}/_{symbol.upper()}.json"

    async def index_quote(self, symbol: str) -> IndexQuote:
        """
        Fetch the delayed quote of an index such as 'VIX'.

        Raises:
            UpstreamError: If the request fails or the payload has no 'data' object
        """
        url = self.quote_url(symbol)
        payload = await self.client.fetch_json(url, expect=dict)

        data = payload.get("data")
        if not isinstance(data, dict):
            log.error("%s %s: response missing 'data' object", self.source, symbol)
            raise DecodeError(f"{url} response missing data", url=url)

        return IndexQuote(
            level=to_float(data.get("current_price")),
            change_pct=to_float(data.get("price_change_percent")),
        )
