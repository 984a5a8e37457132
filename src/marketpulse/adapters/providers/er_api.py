# src/marketpulse/adapters/providers/er_api.py
"""
ExchangeRate-API (open.er-api.com) Provider for the USD Rate Table

The open endpoint returns every currency quoted per 1 USD:
    {"result": "success", "base_code": "USD", "rates": {"CAD": 1.36, "EUR": 0.92, ...}}

Files that USE this module:
- marketpulse.application.sections.forex (ForexSection reads the rate table)
- tests.test_providers (unit tests)

Files that this module USES:
- marketpulse.adapters.providers.base (Provider)
- marketpulse.config (settings for the endpoint URL)
"""
import logging
from typing import Dict, Optional

from marketpulse.adapters.providers.base import Provider
from marketpulse.adapters.upstream import UpstreamClient
from marketpulse.config import settings
from marketpulse.domain.errors import DecodeError
from marketpulse.shared.numbers import to_float

log = logging.getLogger(__name__)


class ErApiProvider(Provider):
    source = "open.er-api"

    def __init__(self, base_url: Optional[str] = None, client: Optional[UpstreamClient] = None):
        super().__init__(base_url or settings.er_api_url, client)

    async def usd_rate_table(self) -> Dict[str, float]:
        """
        Fetch the USD rate table.

        Returns:
            Mapping of currency code to units of that currency per 1 USD.
            Entries that are missing or non-positive are left out.

        Raises:
            UpstreamError: If the request fails or the payload has no rate table
        """
        data = await self.client.fetch_json(self.base_url, expect=dict)

        rates = data.get("rates")
        if not isinstance(rates, dict):
            reason = data.get("error-type") or "missing rates table"
            log.error("%s payload without rate table: %s", self.source, reason)
            raise DecodeError(f"{self.base_url} response has no rates ({reason})", url=self.base_url)

        table: Dict[str, float] = {}
        for code, raw in rates.items():
            rate = to_float(raw)
            if rate is not None and rate > 0:
                table[str(code).upper()] = rate

        log.info("%s rate table: %d currencies", self.source, len(table))
        return table
