# src/marketpulse/adapters/providers/swissquote.py
"""
Swissquote Public Quotes Provider for Top-of-Book Prices

GET /<BASE>/<QUOTE> returns one entry per trading platform, each with a list
of spread profiles:
    [{"topo": {...}, "spreadProfilePrices": [{"spreadProfile": "prime", "bid": 65.1, "ask": 65.3}], "ts": ...}]

Only the first platform's first profile is used.

Files that USE this module:
- marketpulse.application.sections.metals (MetalsSection)
- tests.test_providers (unit tests)

Files that this module USES:
- marketpulse.adapters.providers.base (Provider, TopOfBook)
- marketpulse.config (settings for the API base URL)
"""
import logging
from typing import Any, Optional

from marketpulse.adapters.providers.base import Provider, TopOfBook
from marketpulse.adapters.upstream import UpstreamClient
from marketpulse.config import settings
from marketpulse.shared.numbers import to_float

log = logging.getLogger(__name__)


def _first(items: Any) -> Optional[dict]:
    if isinstance(items, list) and items and isinstance(items[0], dict):
        return items[0]
    return None


class SwissquoteProvider(Provider):
    source = "swissquote"

    def __init__(self, base_url: Optional[str] = None, client: Optional[UpstreamClient] = None):
        super().__init__(base_url or settings.swissquote_url, client)

    def quote_url(self, base: str, quote: str) -> str:
        return f"{self.base_url.rstrip('/')}/{base}/{quote}"

    async def top_of_book(self, base: str, quote: str = "USD") -> TopOfBook:
        """
        Fetch best bid/ask for an instrument such as XAU/USD.

        Missing platforms or profiles give a TopOfBook with None sides.
        """
        url = self.quote_url(base, quote)
        data = await self.client.fetch_json(url, expect=list)

        profile = _first((_first(data) or {}).get("spreadProfilePrices"))
        if profile is None:
            log.warning("%s %s/%s: no spread profile in response", self.source, base, quote)
            return TopOfBook(bid=None, ask=None)

        return TopOfBook(bid=to_float(profile.get("bid")), ask=to_float(profile.get("ask")))
