"""
Domain Layer - Pure Business Objects

This package contains the normalized snapshot records and the error taxonomy.
No dependencies on infrastructure or external systems.
"""

from marketpulse.domain.models import (
    SECTION_NAMES,
    CryptoRecord,
    ForexRecord,
    MetalsRecord,
    OilRecord,
    SectionError,
    SectionResult,
    Snapshot,
    VolatilityRecord,
)
from marketpulse.domain.errors import (
    DecodeError,
    DomainError,
    HttpStatusError,
    NoDataError,
    TransportError,
    UpstreamError,
)

__all__ = [
    "SECTION_NAMES",
    "ForexRecord",
    "CryptoRecord",
    "MetalsRecord",
    "VolatilityRecord",
    "OilRecord",
    "SectionError",
    "SectionResult",
    "Snapshot",
    "DomainError",
    "UpstreamError",
    "TransportError",
    "HttpStatusError",
    "DecodeError",
    "NoDataError",
]
