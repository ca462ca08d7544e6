"""
Pwned Passwords client.

Checks passwords against the Pwned Passwords range API using k-anonymity:
only the first 5 characters of the SHA-1 hash are sent. The password and
its full hash never leave this process.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

import asyncio
import hashlib
import logging
import re

import aiohttp

from privacyguard.exposure.models import PasswordCheckResult

logger = logging.getLogger(__name__)

PREFIX_LENGTH = 5

_SHA1_RE = re.compile(r"^[0-9A-Fa-f]{40}$")


class PasswordCheckError(Exception):
    """The range lookup failed, so exposure is unknown.

    Attributes:
        status: HTTP status of the failed response, 0 for transport failures
    """

    def __init__(self, message: str, status: int = 0):
        super().__init__(message)
        self.status = status


def sha1_hex(password: str) -> str:
    """Uppercase hex SHA-1 digest of the UTF-8 encoded password."""
    return hashlib.sha1(password.encode("utf-8")).hexdigest().upper()


def split_hash(digest: str) -> tuple[str, str]:
    """Split a SHA-1 hex digest into its range prefix and suffix."""
    digest = digest.upper()
    return digest[:PREFIX_LENGTH], digest[PREFIX_LENGTH:]


def find_suffix_count(body: str, suffix: str) -> int:
    """Find the breach count for a hash suffix in a range response body.

    Args:
        body: Range response, one ``SUFFIX:COUNT`` pair per line
        suffix: 35-character hash suffix to look for

    Returns:
        Occurrence count, or 0 if the suffix is not listed
    """
    suffix = suffix.upper()
    for line in body.splitlines():
        line = line.strip()
        if not line:
            continue
        if ":" not in line:
            logger.warning("Skipping malformed range response line")
            continue

        hash_suffix, count = line.split(":", 1)
        if hash_suffix.strip().upper() != suffix:
            continue

        count = count.strip()
        if not (count.isascii() and count.isdigit()):
            raise PasswordCheckError(f"Malformed count in range response: {count[:20]!r}")
        return int(count)

    return 0


class PwnedPasswordsClient:
    """Client for the Pwned Passwords range API."""

    PWNED_PASSWORDS_API = "https://api.pwnedpasswords.com"

    def __init__(
        self,
        user_agent: str = "PrivacyGuard/0.1",
        timeout: float = 30.0,
        base_url: str | None = None,
        add_padding: bool = True,
    ):
        """Initialize Pwned Passwords client.

        Args:
            user_agent: User-Agent header for requests
            timeout: Total request timeout in seconds
            base_url: Override for the API base URL
            add_padding: Ask the service to pad responses with fake entries
        """
        self.user_agent = user_agent
        self.timeout = timeout
        self.base_url = (base_url or self.PWNED_PASSWORDS_API).rstrip("/")
        self.add_padding = add_padding
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

    async def __aenter__(self) -> "PwnedPasswordsClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def _request(self, url: str) -> tuple[int, str]:
        """GET a range URL.

        Returns:
            Tuple of (status_code, body); status 0 means the request failed
            before a response arrived
        """
        session = await self._ensure_session()

        headers = {"User-Agent": self.user_agent}
        if self.add_padding:
            headers["Add-Padding"] = "true"

        try:
            async with session.get(
                url,
                headers=headers,
                timeout=aiohttp.ClientTimeout(total=self.timeout),
            ) as response:
                try:
                    return response.status, await response.text()
                except UnicodeDecodeError:
                    raise PasswordCheckError(
                        "Range response is not valid text", status=response.status
                    ) from None

        except asyncio.TimeoutError:
            return 0, "Request timeout"
        except aiohttp.ClientError as e:
            return 0, f"Request failed: {str(e)}"

    async def fetch_range(self, prefix: str) -> str:
        """Fetch all hash suffixes sharing a 5-character prefix.

        Raises:
            PasswordCheckError: On a non-2xx status, an undecodable body or a
                transport failure
        """
        url = f"{self.base_url}/range/{prefix.upper()}"
        status, body = await self._request(url)

        if status == 0:
            logger.error(f"Range lookup failed for prefix {prefix}: {body}")
            raise PasswordCheckError(body, status=0)

        if not 200 <= status < 300:
            logger.error(f"Range lookup for prefix {prefix} returned HTTP {status}")
            raise PasswordCheckError(f"HTTP {status}: {body[:200]}", status=status)

        return body

    async def check_password(self, password: str) -> PasswordCheckResult:
        """Check if a password has been exposed in data breaches.

        Args:
            password: Password to check (NOT stored or logged)

        Returns:
            PasswordCheckResult with exposure count

        Raises:
            PasswordCheckError: If the range lookup could not be completed
        """
        if not password:
            return PasswordCheckResult()

        prefix, suffix = split_hash(sha1_hex(password))
        password = None  # noqa: F841

        body = await self.fetch_range(prefix)
        return PasswordCheckResult(
            count=find_suffix_count(body, suffix),
            hash_prefix=prefix,
        )

    async def check_password_hash(self, sha1_hash: str) -> PasswordCheckResult:
        """Check a pre-computed SHA-1 hash against Pwned Passwords.

        Args:
            sha1_hash: Full SHA-1 hex digest of the password

        Returns:
            PasswordCheckResult with exposure count
        """
        sha1_hash = sha1_hash.strip()
        if not _SHA1_RE.match(sha1_hash):
            raise ValueError("Expected a 40-character hex SHA-1 digest")

        prefix, suffix = split_hash(sha1_hash)
        body = await self.fetch_range(prefix)
        return PasswordCheckResult(
            count=find_suffix_count(body, suffix),
            hash_prefix=prefix,
        )


async def check_password(password: str, **client_kwargs) -> PasswordCheckResult:
    """Check one password with a short-lived client."""
    if not password:
        return PasswordCheckResult()
    async with PwnedPasswordsClient(**client_kwargs) as client:
        return await client.check_password(password)


def check_password_sync(password: str, **client_kwargs) -> PasswordCheckResult:
    """Synchronous wrapper for checking password exposure.

    Args:
        password: Password to check

    Returns:
        PasswordCheckResult
    """
    return asyncio.run(check_password(password, **client_kwargs))
