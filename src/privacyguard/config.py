"""
Configuration for PrivacyGuard.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any


class BreachSourceType(str, Enum):
    """Where breach records come from."""
    SAMPLE = "sample"
    HIBP = "hibp"


@dataclass
class GuardConfig:
    """Runtime configuration."""

    # Breach lookups
    breach_source: BreachSourceType = BreachSourceType.SAMPLE
    hibp_api_key: str | None = None

    # AI assistant
    ai_api_key: str | None = None
    ai_model: str = "gemini-2.5-flash"

    # HTTP
    request_timeout: float = 30.0
    user_agent: str = "PrivacyGuard/0.1"

    # Local profile storage
    profile_path: str | Path | None = None

    @classmethod
    def from_env(cls) -> "GuardConfig":
        """Load configuration from environment variables."""
        source_str = os.environ.get("PRIVACYGUARD_BREACH_SOURCE", "sample")
        try:
            breach_source = BreachSourceType(source_str.lower())
        except ValueError:
            breach_source = BreachSourceType.SAMPLE

        try:
            timeout = float(os.environ.get("PRIVACYGUARD_TIMEOUT", "30"))
        except ValueError:
            timeout = 30.0

        return cls(
            breach_source=breach_source,
            hibp_api_key=os.environ.get("HIBP_API_KEY"),
            ai_api_key=(
                os.environ.get("PRIVACYGUARD_AI_API_KEY")
                or os.environ.get("GEMINI_API_KEY")
            ),
            ai_model=os.environ.get("PRIVACYGUARD_AI_MODEL", "gemini-2.5-flash"),
            request_timeout=timeout,
            user_agent=os.environ.get("PRIVACYGUARD_USER_AGENT", "PrivacyGuard/0.1"),
            profile_path=os.environ.get("PRIVACYGUARD_PROFILE_PATH"),
        )

    def get_profile_path(self) -> Path:
        """Get profile storage path."""
        if self.profile_path:
            return Path(self.profile_path)
        return Path.home() / ".privacyguard" / "profile.json"

    def validate(self) -> list[str]:
        """Validate configuration. Returns list of errors."""
        errors = []

        if self.breach_source == BreachSourceType.HIBP and not self.hibp_api_key:
            errors.append("HIBP API key required when breach source is 'hibp'")

        if self.request_timeout <= 0:
            errors.append("Request timeout must be positive")

        return errors

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary (excludes sensitive values)."""
        return {
            "breach_source": self.breach_source.value,
            "hibp_api_key_set": bool(self.hibp_api_key),
            "ai_api_key_set": bool(self.ai_api_key),
            "ai_model": self.ai_model,
            "request_timeout": self.request_timeout,
            "user_agent": self.user_agent,
            "profile_path": str(self.get_profile_path()),
        }
