# src/marketpulse/adapters/providers/eia.py
"""
EIA Open Data Provider for Petroleum Spot Prices

GET /v2/petroleum/pri/spt/data/ with facet filters returns:
    {"response": {"data": [{"period": "2024-05-01", "product": "EPCBRENT", "value": "82.5", ...}, ...]}}

Files that USE this module:
- marketpulse.application.sections.oil (OilSection)
- tests.test_providers (unit tests)

Files that this module USES:
- marketpulse.adapters.providers.base (Provider, Observation)
- marketpulse.config (settings for endpoint URL and API key)
"""
import logging
from typing import List, Optional

from marketpulse.adapters.providers.base import Observation, Provider
from marketpulse.adapters.upstream import UpstreamClient
from marketpulse.config import settings
from marketpulse.domain.errors import DecodeError
from marketpulse.shared.numbers import to_float

log = logging.getLogger(__name__)

BRENT = "EPCBRENT"


class EiaProvider(Provider):
    source = "eia"

    def __init__(
        self,
        base_url: Optional[str] = None,
        api_key: Optional[str] = None,
        client: Optional[UpstreamClient] = None,
    ):
        super().__init__(base_url or settings.eia_url, client)
        self.api_key = api_key or settings.eia_api_key

    def series_params(self, product: str, length: int) -> dict:
        return {
            "api_key": self.api_key,
            "frequency": "daily",
            "data[0]": "value",
            "facets[product][]": product,
            "sort[0][column]": "period",
            "sort[0][direction]": "desc",
            "length": length,
        }

    async def latest_observations(self, product: str = BRENT, length: int = 2) -> List[Observation]:
        """
        Fetch the most recent daily observations of a spot price series, newest first.

        An absent or empty series yields an empty list.

        Raises:
            UpstreamError: If the request fails or a row lacks a numeric value or a period
        """
        payload = await self.client.fetch_json(
            self.base_url, params=self.series_params(product, length), expect=dict
        )

        response = payload.get("response")
        rows = response.get("data") if isinstance(response, dict) else None
        if not isinstance(rows, list):
            log.warning("%s %s: response has no data rows", self.source, product)
            return []

        observations = []
        for row in rows[:length]:
            value = to_float(row.get("value")) if isinstance(row, dict) else None
            if value is None:
                log.error("%s %s: non-numeric observation %r", self.source, product, row)
                raise DecodeError(f"{self.base_url} returned a non-numeric {product} value", url=self.base_url)
            period = row.get("period")
            if not isinstance(period, str) or not period:
                log.error("%s %s: observation without period %r", self.source, product, row)
                raise DecodeError(f"{self.base_url} returned a {product} value without a period", url=self.base_url)
            observations.append(Observation(period=period, value=value))
        return observations
