"""Shared fixtures for PrivacyGuard tests."""

from datetime import datetime

import pytest

from privacyguard.exposure.models import Breach


def make_breach(name: str = "ExampleBreach", data_classes=("Email addresses",), pwn_count: int = 1000) -> Breach:
    """Build a breach record with only the fields a test cares about."""
    return Breach(
        name=name,
        domain=f"{name.lower()}.com",
        breach_date=datetime(2022, 1, 1),
        added_date=datetime(2022, 2, 1),
        pwn_count=pwn_count,
        data_classes=tuple(data_classes),
        description=f"{name} was breached.",
    )


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep real API keys and settings out of tests."""
    for var in (
        "HIBP_API_KEY",
        "PRIVACYGUARD_AI_API_KEY",
        "GEMINI_API_KEY",
        "PRIVACYGUARD_AI_MODEL",
        "PRIVACYGUARD_BREACH_SOURCE",
        "PRIVACYGUARD_PROFILE_PATH",
        "PRIVACYGUARD_TIMEOUT",
        "PRIVACYGUARD_USER_AGENT",
    ):
        monkeypatch.delenv(var, raising=False)
