# tests/test_snapshot_service.py
"""
Snapshot Service Tests - Fan-out, Failure Isolation and Wire Shape

Runs the aggregator over frozen upstream fixtures (mocked providers, no
network): every slot present, failures isolated per section, the
forex-to-crypto rate handoff in both outcomes, timeouts and determinism.

Files that USE this module:
- pytest (test runner executes these tests)

Files that this module USES:
- marketpulse.application.snapshot_service (SnapshotService, get_snapshot)
- marketpulse.application.sections.* (sections wired with mocked providers)
- unittest.mock (Mock/AsyncMock providers)
"""
import asyncio
import json
import time
from datetime import datetime, timezone

from unittest.mock import AsyncMock, Mock

from marketpulse.adapters.providers import CboeProvider, IndexQuote, Observation, SpotStats, TopOfBook
from marketpulse.adapters.upstream import UpstreamClient
from marketpulse.application.sections import (
    CryptoSection,
    ForexSection,
    MetalsSection,
    OilSection,
    VolatilitySection,
)
from marketpulse.application.snapshot_service import SnapshotService, collect_snapshot, get_snapshot
from marketpulse.domain.errors import HttpStatusError, TransportError
from marketpulse.domain.models import (
    SECTION_NAMES,
    CryptoRecord,
    ForexRecord,
    MetalsRecord,
    OilRecord,
    SectionError,
    Snapshot,
    VolatilityRecord,
)

FROZEN_NOW = datetime(2024, 5, 2, 14, 30, 5, 123456, tzinfo=timezone.utc)

RATE_TABLE = {
    "USD": 1.0, "EUR": 1 / 1.0850, "JPY": 150.00, "GBP": 1 / 1.2600,
    "CAD": 1.3600, "SEK": 10.40, "CHF": 0.880, "CNY": 7.2400,
}


def _async_provider(**methods):
    """Mock provider whose named methods are async and return (or raise) the given values."""
    provider = Mock()
    for name, value in methods.items():
        if isinstance(value, Exception):
            setattr(provider, name, AsyncMock(side_effect=value))
        elif callable(value):
            setattr(provider, name, value)
        else:
            setattr(provider, name, AsyncMock(return_value=value))
    return provider


def _keyed(mapping):
    async def lookup(key, *args, **kwargs):
        value = mapping[key]
        if isinstance(value, Exception):
            raise value
        return value
    return lookup


def build_service(
    forex=None,
    crypto=None,
    metals=None,
    volatility=None,
    oil=None,
    section_timeout=None,
    client=None,
):
    """Service wired to frozen fixtures; pass a provider to replace one section's source."""
    forex = forex or _async_provider(usd_rate_table=dict(RATE_TABLE))
    crypto = crypto or _async_provider(spot_stats=_keyed({
        "BTC-USD": SpotStats(last=60000.0, open=58000.0),
        "ETH-USD": SpotStats(last=3000.0, open=3100.0),
    }))
    metals = metals or _async_provider(top_of_book=_keyed({
        "XAU": TopOfBook(bid=2330.10, ask=2330.50),
        "XAG": TopOfBook(bid=65.10, ask=65.30),
    }))
    volatility = volatility or _async_provider(index_quote=_keyed({
        "VIX": IndexQuote(level=14.21, change_pct=-3.07),
        "VXN": IndexQuote(level=18.5, change_pct=1.2),
    }))
    oil = oil or _async_provider(latest_observations=[
        Observation("2024-05-02", 82.50),
        Observation("2024-05-01", 80.00),
    ])
    return SnapshotService(
        forex=ForexSection(forex),
        crypto=CryptoSection(crypto, fallback_usd_cad_rate=1.44),
        metals=MetalsSection(metals),
        volatility=VolatilitySection(volatility),
        oil=OilSection(oil),
        client=client or Mock(),
        section_timeout=section_timeout,
        clock=lambda: FROZEN_NOW,
    )


class TestSnapshotCollection:
    def test_all_sections_populated(self):
        snapshot = asyncio.run(build_service().collect())

        assert isinstance(snapshot, Snapshot)
        assert snapshot.timestamp == FROZEN_NOW
        assert isinstance(snapshot.forex, ForexRecord)
        assert isinstance(snapshot.crypto, CryptoRecord)
        assert isinstance(snapshot.metals, MetalsRecord)
        assert isinstance(snapshot.volatility, VolatilityRecord)
        assert isinstance(snapshot.oil, OilRecord)
        assert snapshot.failed_sections() == []

    def test_every_slot_present_when_everything_fails(self):
        down = TransportError("network unreachable")
        service = build_service(
            forex=_async_provider(usd_rate_table=down),
            crypto=_async_provider(spot_stats=down),
            metals=_async_provider(top_of_book=down),
            volatility=_async_provider(index_quote=down),
            oil=_async_provider(latest_observations=down),
        )
        snapshot = asyncio.run(service.collect())

        assert set(snapshot.sections()) == set(SECTION_NAMES)
        for result in snapshot.sections().values():
            assert result == SectionError("network unreachable")

    def test_failing_volatility_does_not_touch_other_sections(self):
        baseline = asyncio.run(build_service().collect())
        service = build_service(volatility=_async_provider(index_quote=HttpStatusError("https://cdn.cboe.com/_VIX.json", 403)))
        snapshot = asyncio.run(service.collect())

        assert snapshot.volatility == SectionError("https://cdn.cboe.com/_VIX.json returned 403")
        for name in ("forex", "crypto", "metals", "oil"):
            assert getattr(snapshot, name) == getattr(baseline, name)

    def test_crypto_uses_forex_rate(self):
        snapshot = asyncio.run(build_service().collect())

        assert snapshot.crypto.btc_cad == 81600.0
        assert snapshot.crypto.eth_cad == 4080.0

    def test_crypto_uses_fallback_when_forex_fails(self):
        service = build_service(forex=_async_provider(usd_rate_table=HttpStatusError("https://open.er-api.com/v6/latest/USD", 500)))
        snapshot = asyncio.run(service.collect())

        assert snapshot.forex == SectionError("https://open.er-api.com/v6/latest/USD returned 500")
        assert isinstance(snapshot.crypto, CryptoRecord)
        assert snapshot.crypto.btc_cad == 86400.0
        assert snapshot.crypto.eth_cad == 4320.0

    def test_crypto_uses_fallback_when_table_lacks_cad(self):
        table = {k: v for k, v in RATE_TABLE.items() if k != "CAD"}
        snapshot = asyncio.run(build_service(forex=_async_provider(usd_rate_table=table)).collect())

        assert snapshot.forex.usd_cad is None
        assert snapshot.forex.dxy is None
        assert snapshot.crypto.btc_cad == 86400.0

    def test_crypto_waits_for_slow_forex(self):
        async def slow_table():
            await asyncio.sleep(0.05)
            return dict(RATE_TABLE)

        snapshot = asyncio.run(build_service(forex=_async_provider(usd_rate_table=slow_table)).collect())
        assert snapshot.crypto.btc_cad == 81600.0

    def test_oil_single_observation_is_section_error(self):
        service = build_service(oil=_async_provider(latest_observations=[Observation("2024-05-02", 82.5)]))
        snapshot = asyncio.run(service.collect())

        assert snapshot.oil == SectionError("No data")
        assert isinstance(snapshot.forex, ForexRecord)

    def test_unexpected_exception_is_isolated(self):
        service = build_service(metals=_async_provider(top_of_book=KeyError("spreadProfilePrices")))
        snapshot = asyncio.run(service.collect())

        assert snapshot.metals == SectionError("'spreadProfilePrices'")
        assert isinstance(snapshot.volatility, VolatilityRecord)

    def test_empty_message_becomes_failed(self):
        service = build_service(oil=_async_provider(latest_observations=RuntimeError()))
        snapshot = asyncio.run(service.collect())

        assert snapshot.oil == SectionError("Failed")

    def test_section_timeout(self):
        async def hanging(symbol):
            await asyncio.sleep(5)

        service = build_service(volatility=_async_provider(index_quote=hanging), section_timeout=0.05)
        snapshot = asyncio.run(service.collect())

        assert snapshot.volatility == SectionError("volatility timed out after 0.05s")
        assert isinstance(snapshot.crypto, CryptoRecord)

    def test_slow_forex_failure_settles_handoff(self):
        async def slow_failure():
            await asyncio.sleep(0.05)
            raise TransportError("er-api timed out after 10s")

        service = build_service(forex=_async_provider(usd_rate_table=slow_failure))
        snapshot = asyncio.run(service.collect())

        assert snapshot.forex == SectionError("er-api timed out after 10s")
        assert snapshot.crypto.btc_cad == 86400.0

    def test_repeated_runs_are_identical(self):
        first = asyncio.run(build_service().collect()).to_dict()
        second = asyncio.run(build_service().collect()).to_dict()

        assert first == second


class TestWireShape:
    def test_to_dict(self):
        payload = asyncio.run(build_service().collect()).to_dict()

        assert payload["timestamp"] == "2024-05-02T14:30:05.123Z"
        assert payload["forex"]["usdCAD"] == 1.36
        assert payload["forex"]["cadCNY"] == 5.3235
        assert payload["forex"]["usdJPY"] == 150.0
        assert payload["forex"]["eurUSD"] == 1.085
        assert payload["forex"]["dxy"] == 103.915
        assert payload["crypto"] == {
            "btcUSD": 60000.0, "ethUSD": 3000.0,
            "btcCAD": 81600.0, "ethCAD": 4080.0,
            "btcChange": 3.45, "ethChange": -3.23,
        }
        assert payload["metals"] == {"goldPrice": 2330.3, "silverPrice": 65.2, "goldChange": None, "silverChange": None}
        assert payload["volatility"] == {"vix": 14.21, "vixChange": -3.07, "vxn": 18.5, "vxnChange": 1.2}
        assert payload["oil"] == {"brentPrice": 82.5, "brentChange": 3.13, "brentDate": "2024-05-02"}
        json.dumps(payload)

    def test_error_slot_shape(self):
        service = build_service(oil=_async_provider(latest_observations=[]))
        payload = asyncio.run(service.collect()).to_dict()

        assert payload["oil"] == {"error": "No data"}
        assert list(payload) == ["timestamp", *SECTION_NAMES]


class TestGetSnapshot:
    def test_returns_wire_dict(self):
        payload = get_snapshot(build_service())

        assert payload["timestamp"] == "2024-05-02T14:30:05.123Z"
        assert set(payload) == {"timestamp", *SECTION_NAMES}

    def test_failure_before_fan_out(self):
        service = Mock()
        service.collect = AsyncMock(side_effect=RuntimeError("settings unavailable"))

        assert get_snapshot(service) == {"error": "settings unavailable"}

    def test_collect_snapshot(self):
        snapshot = asyncio.run(collect_snapshot(build_service()))
        assert isinstance(snapshot, Snapshot)

    def test_section_timeout_bounds_blocking_request(self):
        client = UpstreamClient(timeout=5)
        client.get_json = Mock(side_effect=lambda *args, **kwargs: time.sleep(1.0))
        service = build_service(volatility=CboeProvider(client=client), section_timeout=0.05, client=client)

        started = time.perf_counter()
        payload = get_snapshot(service)
        elapsed = time.perf_counter() - started

        assert payload["volatility"] == {"error": "volatility timed out after 0.05s"}
        assert payload["forex"]["usdCAD"] == 1.36
        assert elapsed < 0.5
        assert client.executor is None

    def test_inside_running_loop_points_to_collect_snapshot(self):
        service = Mock()
        service.collect = AsyncMock()

        async def handler():
            return get_snapshot(service)

        payload = asyncio.run(handler())

        assert "collect_snapshot" in payload["error"]
        service.collect.assert_not_called()

    def test_section_timeout_caps_default_request_timeout(self):
        assert SnapshotService(section_timeout=3).client.timeout == 3
        assert SnapshotService(section_timeout=30).client.timeout == 10
