# src/marketpulse/domain/models.py
"""
Domain Models - Normalized Snapshot Records

This module contains the normalized, source-neutral records produced by the
section fetchers and the Snapshot that bundles them:
- One record type per category (forex, crypto, metals, volatility, oil)
- SectionError, the failure marker that takes a record's place
- Snapshot, the unit of output of one aggregation run

Records carry Python attribute names; the wire (JSON) names consumed by the
dashboard are attached as field metadata and applied by to_dict().

Files that USE this module:
- marketpulse.application.* (section fetchers build records, the aggregator builds Snapshot)
- marketpulse.app (serializes Snapshot to JSON)
- tests.* (tests assert on records)

Files that this module USES:
- None (pure domain layer, no external dependencies)
"""

from __future__ import annotations  # Enable postponed evaluation of annotations

from dataclasses import dataclass, field, fields  # Data classes and field metadata for wire names
from datetime import datetime, timezone  # Snapshot timestamp handling
from typing import Any, Dict, Optional, Union  # Type hints

SECTION_NAMES = ("forex", "crypto", "metals", "volatility", "oil")


def _wire(name: str) -> Any:
    return field(metadata={"wire": name})


class _WireRecord:
    """Mixin that renders a dataclass record with its wire field names."""

    def to_dict(self) -> Dict[str, Any]:
        return {f.metadata.get("wire", f.name): getattr(self, f.name) for f in fields(self)}


@dataclass(frozen=True)
class ForexRecord(_WireRecord):
    """
    Foreign exchange section.

    Attributes:
        dxy: Composite US dollar index, None unless all six basket rates were available
        usd_cad: CAD per 1 USD
        usd_cny: CNY per 1 USD
        cad_cny: CNY per 1 CAD (cross rate)
        usd_jpy: JPY per 1 USD
        eur_usd: USD per 1 EUR
    """
    dxy: Optional[float] = _wire("dxy")
    usd_cad: Optional[float] = _wire("usdCAD")
    usd_cny: Optional[float] = _wire("usdCNY")
    cad_cny: Optional[float] = _wire("cadCNY")
    usd_jpy: Optional[float] = _wire("usdJPY")
    eur_usd: Optional[float] = _wire("eurUSD")


@dataclass(frozen=True)
class CryptoRecord(_WireRecord):
    """Crypto spot prices in USD and CAD plus period percent change."""
    btc_usd: Optional[float] = _wire("btcUSD")
    eth_usd: Optional[float] = _wire("ethUSD")
    btc_cad: Optional[float] = _wire("btcCAD")
    eth_cad: Optional[float] = _wire("ethCAD")
    btc_change: Optional[float] = _wire("btcChange")
    eth_change: Optional[float] = _wire("ethChange")


@dataclass(frozen=True)
class MetalsRecord(_WireRecord):
    """Spot price per troy ounce in USD; changes only when the source reports them."""
    gold_price: Optional[float] = _wire("goldPrice")
    silver_price: Optional[float] = _wire("silverPrice")
    gold_change: Optional[float] = _wire("goldChange")
    silver_change: Optional[float] = _wire("silverChange")


@dataclass(frozen=True)
class VolatilityRecord(_WireRecord):
    vix: Optional[float] = _wire("vix")
    vix_change: Optional[float] = _wire("vixChange")
    vxn: Optional[float] = _wire("vxn")
    vxn_change: Optional[float] = _wire("vxnChange")


@dataclass(frozen=True)
class OilRecord(_WireRecord):
    """
    Brent crude spot price.

    Attributes:
        brent_price: Latest observation in USD per barrel
        brent_change: Percent change against the previous observation
        brent_date: Date the latest observation refers to (YYYY-MM-DD)
    """
    brent_price: float = _wire("brentPrice")
    brent_change: float = _wire("brentChange")
    brent_date: str = _wire("brentDate")


@dataclass(frozen=True)
class SectionError:
    """Failure marker occupying a category slot whose fetcher failed."""
    error: str

    def to_dict(self) -> Dict[str, Any]:
        return {"error": self.error}


CategoryRecord = Union[ForexRecord, CryptoRecord, MetalsRecord, VolatilityRecord, OilRecord]
SectionResult = Union[CategoryRecord, SectionError]


def format_timestamp(ts: datetime) -> str:
    """Render a timestamp as ISO-8601 UTC with millisecond precision and a Z suffix."""
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=timezone.utc)
    ts = ts.astimezone(timezone.utc)
    return ts.strftime("%Y-%m-%dT%H:%M:%S") + f".{ts.microsecond // 1000:03d}Z"


@dataclass(frozen=True)
class Snapshot:
    """
    Result of one aggregation run.

    Every category slot is always populated, either with its record or
    with a SectionError.
    """
    timestamp: datetime
    forex: SectionResult
    crypto: SectionResult
    metals: SectionResult
    volatility: SectionResult
    oil: SectionResult

    def sections(self) -> Dict[str, SectionResult]:
        return {name: getattr(self, name) for name in SECTION_NAMES}

    def failed_sections(self) -> list[str]:
        return [name for name, result in self.sections().items() if isinstance(result, SectionError)]

    def to_dict(self) -> Dict[str, Any]:
        """Render the snapshot in the wire shape consumed by the dashboard."""
        payload: Dict[str, Any] = {"timestamp": format_timestamp(self.timestamp)}
        for name, result in self.sections().items():
            payload[name] = result.to_dict()
        return payload
