"""Tests for breach data sources and identity scans."""

import json
import random
from unittest.mock import AsyncMock, MagicMock, patch

import aiohttp
import pytest

from privacyguard.exposure.models import Breach, RiskLevel
from privacyguard.exposure.sources import (
    SAMPLE_BREACHES,
    SOURCE_UNAVAILABLE_MESSAGE,
    BreachSource,
    BreachSourceError,
    HIBPBreachSource,
    SampleBreachSource,
    scan_identity,
)
from tests.conftest import make_breach

HIBP_BREACH = {
    "Name": "Adobe",
    "Title": "Adobe",
    "Domain": "adobe.com",
    "BreachDate": "2013-10-04",
    "AddedDate": "2013-12-04T00:00:00Z",
    "PwnCount": 152445165,
    "Description": "In October 2013, 153 million Adobe accounts were breached.",
    "DataClasses": ["Email addresses", "Password hints", "Passwords", "Usernames"],
    "IsVerified": True,
}


class FixedSource(BreachSource):
    def __init__(self, breaches):
        self.breaches = breaches
        self.queries = []

    async def lookup(self, query):
        self.queries.append(query)
        return list(self.breaches)


class FailingSource(BreachSource):
    async def lookup(self, query):
        raise BreachSourceError("upstream down")


def mock_session(status: int, payload=None, text: str = "") -> MagicMock:
    response = MagicMock()
    response.status = status
    response.headers = {}
    response.json = AsyncMock(return_value=payload)
    response.text = AsyncMock(return_value=text)

    request_cm = MagicMock()
    request_cm.__aenter__.return_value = response
    request_cm.__aexit__.return_value = None

    session = MagicMock()
    session.closed = False
    session.get = MagicMock(return_value=request_cm)
    session.close = AsyncMock()
    return session


class TestBreachFromApi:
    """Test suite for Breach.from_api_response."""

    def test_parses_fields(self):
        breach = Breach.from_api_response(HIBP_BREACH)
        assert breach.name == "Adobe"
        assert breach.domain == "adobe.com"
        assert breach.breach_date.year == 2013
        assert breach.added_date.month == 12
        assert breach.pwn_count == 152445165
        assert breach.data_classes == ("Email addresses", "Password hints", "Passwords", "Usernames")

    def test_bad_dates_become_none(self):
        breach = Breach.from_api_response({"Name": "X", "BreachDate": "sometime", "AddedDate": None})
        assert breach.breach_date is None
        assert breach.added_date is None
        assert breach.data_classes == ()

    def test_to_dict(self):
        data = Breach.from_api_response(HIBP_BREACH).to_dict()
        assert data["breach_date"].startswith("2013-10-04")
        assert data["data_classes"][2] == "Passwords"


class TestSampleBreachSource:
    """Test suite for SampleBreachSource."""

    @pytest.mark.asyncio
    async def test_results_come_from_catalog(self):
        source = SampleBreachSource(rng=random.Random(7))
        for _ in range(20):
            found = await source.lookup("user@example.com")
            assert len(found) <= SampleBreachSource.MAX_RESULTS
            assert all(b in SAMPLE_BREACHES for b in found)

    @pytest.mark.asyncio
    async def test_seeded_rng_is_repeatable(self):
        first = await SampleBreachSource(rng=random.Random(42)).lookup("a")
        second = await SampleBreachSource(rng=random.Random(42)).lookup("a")
        assert first == second

    @pytest.mark.asyncio
    async def test_keeps_catalog_order(self):
        source = SampleBreachSource(rng=random.Random(3))
        found = await source.lookup("a")
        indexes = [SAMPLE_BREACHES.index(b) for b in found]
        assert indexes == sorted(indexes)


class TestHIBPBreachSource:
    """Test suite for HIBPBreachSource."""

    @pytest.mark.asyncio
    async def test_requires_api_key(self):
        source = HIBPBreachSource(api_key=None)
        with pytest.raises(BreachSourceError, match="API key"):
            await source.lookup("user@example.com")

    @pytest.mark.asyncio
    async def test_lookup_parses_breaches(self):
        source = HIBPBreachSource(api_key="test-key")
        session = mock_session(200, payload=[HIBP_BREACH])
        with patch.object(source, "_ensure_session", new=AsyncMock(return_value=session)):
            breaches = await source.lookup(" User@Example.com ")

        assert [b.name for b in breaches] == ["Adobe"]
        args, kwargs = session.get.call_args
        assert args[0] == (
            "https://haveibeenpwned.com/api/v3/breachedaccount/"
            "user%40example.com?truncateResponse=false"
        )
        assert kwargs["headers"]["hibp-api-key"] == "test-key"

    @pytest.mark.asyncio
    async def test_not_found_is_empty(self):
        source = HIBPBreachSource(api_key="test-key")
        session = mock_session(404)
        with patch.object(source, "_ensure_session", new=AsyncMock(return_value=session)):
            assert await source.lookup("clean@example.com") == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status", [401, 429, 500])
    async def test_error_status_raises(self, status):
        source = HIBPBreachSource(api_key="test-key")
        session = mock_session(status, text="nope")
        with patch.object(source, "_ensure_session", new=AsyncMock(return_value=session)):
            with pytest.raises(BreachSourceError):
                await source.lookup("user@example.com")

    @pytest.mark.asyncio
    async def test_transport_error_raises(self):
        source = HIBPBreachSource(api_key="test-key")
        session = mock_session(200)
        session.get.side_effect = aiohttp.ClientConnectionError("refused")
        with patch.object(source, "_ensure_session", new=AsyncMock(return_value=session)):
            with pytest.raises(BreachSourceError):
                await source.lookup("user@example.com")

    @pytest.mark.asyncio
    async def test_non_json_body_raises(self):
        """An HTML error page served with 200 is a source failure."""
        source = HIBPBreachSource(api_key="test-key")
        session = mock_session(200)
        response = session.get.return_value.__aenter__.return_value
        response.json.side_effect = json.JSONDecodeError("Expecting value", "<html>", 0)
        with patch.object(source, "_ensure_session", new=AsyncMock(return_value=session)):
            with pytest.raises(BreachSourceError):
                await source.lookup("user@example.com")

    @pytest.mark.asyncio
    @pytest.mark.parametrize("payload", [["Adobe"], [HIBP_BREACH, None], {"Name": "Adobe"}])
    async def test_unexpected_payload_shape_raises(self, payload):
        source = HIBPBreachSource(api_key="test-key")
        session = mock_session(200, payload)
        with patch.object(source, "_ensure_session", new=AsyncMock(return_value=session)):
            with pytest.raises(BreachSourceError):
                await source.lookup("user@example.com")


class TestScanIdentity:
    """Test suite for scan_identity."""

    @pytest.mark.asyncio
    async def test_scan_with_breaches(self):
        source = FixedSource([
            make_breach("A", ["Passwords", "Financial information"]),
            make_breach("B", ["National ID numbers"]),
        ])
        result = await scan_identity("  user@example.com ", source)

        assert source.queries == ["user@example.com"]
        assert result.query == "user@example.com"
        assert result.is_breached
        assert result.breach_count == 2
        assert result.risk.score == 24
        assert result.risk.level == RiskLevel.LOW
        assert result.actions[0].id == "change-pass"
        assert result.error is None
        assert "Passwords" in result.compromised_data_types

    @pytest.mark.asyncio
    async def test_scan_without_breaches(self):
        result = await scan_identity("user@example.com", FixedSource([]))
        assert not result.is_breached
        assert result.risk.score == 0
        assert result.actions == []

    @pytest.mark.asyncio
    async def test_source_failure_becomes_error_value(self):
        result = await scan_identity("user@example.com", FailingSource())
        assert result.error == SOURCE_UNAVAILABLE_MESSAGE
        assert result.risk is None
        assert result.breaches == []

    @pytest.mark.asyncio
    async def test_garbled_hibp_response_becomes_error_value(self):
        source = HIBPBreachSource(api_key="test-key")
        session = mock_session(200)
        response = session.get.return_value.__aenter__.return_value
        response.json.side_effect = json.JSONDecodeError("Expecting value", "<html>", 0)
        with patch.object(source, "_ensure_session", new=AsyncMock(return_value=session)):
            result = await scan_identity("user@example.com", source)

        assert result.error == SOURCE_UNAVAILABLE_MESSAGE
        assert result.risk is None

    @pytest.mark.asyncio
    async def test_blank_query_rejected(self):
        with pytest.raises(ValueError):
            await scan_identity("   ", FixedSource([]))

    @pytest.mark.asyncio
    async def test_to_dict(self):
        result = await scan_identity("user@example.com", FixedSource([make_breach(pwn_count=5)]))
        data = result.to_dict()
        assert data["breach_count"] == 1
        assert data["total_pwn_count"] == 5
        assert data["risk"]["level"] == "Low"
