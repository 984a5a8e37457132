# src/marketpulse/domain/errors.py
"""
Domain Errors - Upstream and Section Exceptions

This module defines the exception taxonomy used by the aggregation core.
Upstream errors are raised by the HTTP client and source adapters; section
errors are raised by section fetchers. None of them escape a snapshot run:
the aggregator converts them into per-section failure markers.
"""
from typing import Optional


class DomainError(Exception):
    """Base exception for domain errors."""
    pass


class UpstreamError(DomainError):
    """Raised when a single upstream call cannot produce usable data."""

    def __init__(self, message: str, url: Optional[str] = None):
        super().__init__(message)
        self.url = url


class TransportError(UpstreamError):
    """Raised on connection failures and timeouts."""
    pass


class HttpStatusError(UpstreamError):
    """Raised when an upstream answers with a non-2xx status code."""

    def __init__(self, url: str, status_code: int):
        super().__init__(f"{url} returned {status_code}", url=url)
        self.status_code = status_code


class DecodeError(UpstreamError):
    """Raised when a response body is not the structured data we expect."""
    pass


class NoDataError(DomainError):
    """Raised when an upstream answered but had nothing to report."""

    def __init__(self, message: str = "No data"):
        super().__init__(message)
