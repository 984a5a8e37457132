# src/marketpulse/adapters/upstream.py
"""
Upstream Client - Single JSON GET Against a Public Data Source

This module performs the one network operation of the aggregator: an HTTP
GET that bypasses caches, decodes a JSON body, and reports failures as
categorized upstream errors. There are no retries; each call is one request.

Files that USE this module:
- marketpulse.adapters.providers.* (every source adapter fetches through UpstreamClient)
- tests.test_upstream (unit tests)

Files that this module USES:
- marketpulse.config (settings for timeout and user agent)
- marketpulse.domain.errors (TransportError, HttpStatusError, DecodeError)
"""
from __future__ import annotations

import asyncio
import logging
from concurrent.futures import Executor
from typing import Any, Mapping, Optional, Tuple, Type, Union

import requests

from marketpulse.config import settings
from marketpulse.domain.errors import DecodeError, HttpStatusError, TransportError

log = logging.getLogger(__name__)

NO_CACHE_HEADERS = {
    "Cache-Control": "no-cache",
    "Pragma": "no-cache",
    "Accept": "application/json",
}

Expected = Union[Type[Any], Tuple[Type[Any], ...]]


class UpstreamClient:
    """
    Blocking JSON client with an awaitable wrapper.

    get_json() does the request; fetch_json() runs it in a thread executor
    so several upstream calls can overlap. The executor is the client's own
    when one is set, otherwise the event loop's default.
    """

    def __init__(
        self,
        timeout: Optional[float] = None,
        user_agent: Optional[str] = None,
        executor: Optional[Executor] = None,
    ):
        """
        Initialize upstream client.

        Args:
            timeout: Optional HTTP timeout in seconds (defaults to settings.http_timeout_seconds)
            user_agent: Optional User-Agent header (defaults to settings.user_agent)
            executor: Optional executor for fetch_json() (defaults to the loop's default executor)
        """
        self.timeout = timeout or settings.http_timeout_seconds
        self.headers = dict(NO_CACHE_HEADERS)
        self.headers["User-Agent"] = user_agent or settings.user_agent
        self.executor = executor

    def get_json(
        self,
        url: str,
        params: Optional[Mapping[str, Any]] = None,
        expect: Expected = (dict, list),
    ) -> Any:
        """
        GET a URL and decode its JSON body.

        Args:
            url: Absolute URL to fetch
            params: Optional query parameters
            expect: Type (or tuple of types) the decoded top-level value must have

        Returns:
            Decoded JSON value

        Raises:
            TransportError: Connection failure or timeout
            HttpStatusError: Non-2xx status code
            DecodeError: Body is not JSON or not of the expected shape
        """
        try:
            log.debug("GET %s", url)
            resp = requests.get(url, params=params, headers=self.headers, timeout=self.timeout)
        except requests.exceptions.Timeout as e:
            log.warning("%s timed out after %ss", url, self.timeout)
            raise TransportError(f"{url} timed out after {self.timeout}s", url=url) from e
        except requests.exceptions.RequestException as e:
            log.warning("%s request failed: %s", url, e)
            raise TransportError(f"{url} request failed: {e}", url=url) from e

        if not 200 <= resp.status_code < 300:
            log.warning("%s returned HTTP %d", url, resp.status_code)
            raise HttpStatusError(url, resp.status_code)

        try:
            data = resp.json()
        except ValueError as e:
            log.error("%s returned invalid JSON: %s", url, e)
            raise DecodeError(f"{url} returned invalid JSON", url=url) from e

        if not isinstance(data, expect):
            log.error("%s returned unexpected JSON type: %r", url, type(data))
            raise DecodeError(f"{url} returned unexpected JSON type {type(data).__name__}", url=url)
        return data

    async def fetch_json(
        self,
        url: str,
        params: Optional[Mapping[str, Any]] = None,
        expect: Expected = (dict, list),
    ) -> Any:
        """Awaitable get_json(); the request runs in self.executor."""
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(self.executor, lambda: self.get_json(url, params=params, expect=expect))
