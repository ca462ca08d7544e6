"""
Breach data sources and identity scans.

A breach source turns a query (email, phone number or username) into the
breach records that mention it. ``SampleBreachSource`` samples a built-in
catalog for demonstrations; ``HIBPBreachSource`` queries Have I Been Pwned.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

import asyncio
import logging
import os
import random
from abc import ABC, abstractmethod
from datetime import datetime
from urllib.parse import quote

import aiohttp

from privacyguard.exposure.models import Breach, ScanResult
from privacyguard.exposure.risk import assess_risk, recommend_actions

logger = logging.getLogger(__name__)

SOURCE_UNAVAILABLE_MESSAGE = (
    "Breach lookup is currently unavailable. Please try again later."
)


class BreachSourceError(Exception):
    """The breach source could not answer the query."""


class BreachSource(ABC):
    """Looks up breach records for an identifier."""

    @abstractmethod
    async def lookup(self, query: str) -> list[Breach]:
        """Return breaches mentioning ``query``, possibly none.

        Raises:
            BreachSourceError: If the source cannot be queried
        """


SAMPLE_BREACHES: tuple[Breach, ...] = (
    Breach(
        name="SocialConnect2021",
        domain="socialconnect.com",
        breach_date=datetime(2021, 5, 15),
        added_date=datetime(2021, 6, 1),
        pwn_count=150_000_000,
        data_classes=("Email addresses", "Usernames", "Passwords", "Phone numbers"),
        description=(
            "In mid-2021, SocialConnect suffered a major data breach exposing "
            "user profile information and credentials."
        ),
    ),
    Breach(
        name="EshopMarket",
        domain="eshop-market.com",
        breach_date=datetime(2022, 11, 20),
        added_date=datetime(2022, 12, 10),
        pwn_count=75_000_000,
        data_classes=("Email addresses", "Passwords", "Physical addresses", "Financial information"),
        description=(
            "Customer data from EshopMarket was compromised, including payment "
            "details and shipping addresses."
        ),
    ),
    Breach(
        name="MyHealthTracker",
        domain="my-health-tracker.io",
        breach_date=datetime(2023, 1, 30),
        added_date=datetime(2023, 2, 18),
        pwn_count=2_500_000,
        data_classes=("Email addresses", "Passwords", "Health data"),
        description="A breach at MyHealthTracker exposed sensitive personal health information.",
    ),
    Breach(
        name="GamingForumXYZ",
        domain="gamingforum.xyz",
        breach_date=datetime(2020, 8, 1),
        added_date=datetime(2020, 8, 25),
        pwn_count=50_000_000,
        data_classes=("Email addresses", "Usernames", "IP addresses", "Passwords"),
        description=(
            "The popular gaming forum was hacked, leading to the leak of user "
            "credentials and IP addresses."
        ),
    ),
    Breach(
        name="GovRecordsLeak",
        domain="regional-gov-records.gov",
        breach_date=datetime(2023, 4, 10),
        added_date=datetime(2023, 5, 2),
        pwn_count=1_200_000,
        data_classes=("Email addresses", "National ID numbers", "Physical addresses"),
        description=(
            "A government database was inadvertently exposed, leaking national "
            "identification numbers and personal details."
        ),
    ),
)


class SampleBreachSource(BreachSource):
    """Demonstration source that samples ``SAMPLE_BREACHES`` at random.

    Results do not depend on the query. Pass a seeded ``random.Random`` for
    repeatable output.
    """

    KEEP_PROBABILITY = 0.6
    MAX_RESULTS = 5

    def __init__(
        self,
        rng: random.Random | None = None,
        catalog: tuple[Breach, ...] = SAMPLE_BREACHES,
    ):
        self.rng = rng or random.Random()
        self.catalog = catalog

    async def lookup(self, query: str) -> list[Breach]:
        kept = [b for b in self.catalog if self.rng.random() < self.KEEP_PROBABILITY]
        return kept[: self.rng.randint(1, self.MAX_RESULTS)]


class HIBPBreachSource(BreachSource):
    """Breach source backed by the Have I Been Pwned v3 API."""

    HIBP_API_BASE = "https://haveibeenpwned.com/api/v3"

    def __init__(
        self,
        api_key: str | None = None,
        user_agent: str = "PrivacyGuard/0.1",
        timeout: float = 30.0,
    ):
        """Initialize HIBP breach source.

        Args:
            api_key: HIBP API key (required for account lookups)
            user_agent: User-Agent header for requests
            timeout: Total request timeout in seconds
        """
        self.api_key = api_key or os.environ.get("HIBP_API_KEY")
        self.user_agent = user_agent
        self.timeout = timeout
        self._session: aiohttp.ClientSession | None = None

    async def _ensure_session(self) -> aiohttp.ClientSession:
        """Ensure HTTP session exists."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession()
        return self._session

    async def close(self) -> None:
        """Close HTTP session."""
        if self._session and not self._session.closed:
            await self._session.close()
            self._session = None

    async def __aenter__(self) -> "HIBPBreachSource":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def lookup(self, query: str) -> list[Breach]:
        if not self.api_key:
            raise BreachSourceError("HIBP API key required. Set HIBP_API_KEY environment variable.")

        account = quote(query.strip().lower(), safe="")
        url = f"{self.HIBP_API_BASE}/breachedaccount/{account}?truncateResponse=false"
        headers = {
            "User-Agent": self.user_agent,
            "hibp-api-key": self.api_key,
        }

        session = await self._ensure_session()
        try:
            async with session.get(
                url,
                headers=headers,
                timeout=aiohttp.ClientTimeout(total=self.timeout),
            ) as response:
                status = response.status

                if status == 404:
                    # Not found - no breaches for this account
                    return []
                if status == 429:
                    retry_after = response.headers.get("Retry-After", "60")
                    logger.warning(f"Rate limited. Retry after {retry_after}s")
                    raise BreachSourceError(f"Rate limited. Retry after {retry_after}s")
                if status == 401:
                    raise BreachSourceError("Invalid API key")
                if status != 200:
                    text = await response.text(errors="replace")
                    raise BreachSourceError(f"HTTP {status}: {text[:200]}")

                try:
                    data = await response.json(content_type=None)
                except ValueError:
                    raise BreachSourceError("HIBP returned a response that is not JSON") from None

        except asyncio.TimeoutError:
            raise BreachSourceError("Request timeout") from None
        except aiohttp.ClientError as e:
            raise BreachSourceError(f"Request failed: {str(e)}") from e

        if not isinstance(data, list) or not all(isinstance(item, dict) for item in data):
            raise BreachSourceError("Unexpected response from HIBP")

        return [Breach.from_api_response(item) for item in data]


async def scan_identity(query: str, source: BreachSource, action_limit: int = 3) -> ScanResult:
    """Scan an identifier for breach exposure.

    Args:
        query: Email address, phone number or username
        source: Where to look up breaches
        action_limit: Maximum number of recommended actions

    Returns:
        ScanResult; if the source fails, ``error`` is set and no breaches
        are reported
    """
    query = query.strip()
    if not query:
        raise ValueError("Query must not be empty")

    result = ScanResult(query=query)

    try:
        breaches = await source.lookup(query)
    except BreachSourceError as e:
        logger.error(f"Breach lookup failed: {e}")
        result.error = SOURCE_UNAVAILABLE_MESSAGE
        return result

    result.breaches = list(breaches)
    result.risk = assess_risk(result.breaches)
    result.actions = recommend_actions(result.breaches, limit=action_limit)
    return result
