"""
Local user profile models.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

from dataclasses import dataclass, field, replace
from typing import Any


@dataclass(frozen=True)
class NotificationPreferences:
    """Which notifications the user wants."""

    new_breach_alerts: bool = True
    weekly_summary: bool = False
    security_tips: bool = True

    @classmethod
    def flag_names(cls) -> tuple[str, ...]:
        return ("new_breach_alerts", "weekly_summary", "security_tips")

    def with_flag(self, flag: str, enabled: bool) -> "NotificationPreferences":
        if flag not in self.flag_names():
            raise ValueError(f"Unknown notification flag: {flag}")
        return replace(self, **{flag: bool(enabled)})

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "NotificationPreferences":
        defaults = cls()
        flags = {}
        for name in cls.flag_names():
            value = data.get(name)
            # Anything but a real bool, e.g. the string "false", keeps the default
            flags[name] = value if isinstance(value, bool) else getattr(defaults, name)
        return cls(**flags)

    def to_dict(self) -> dict[str, bool]:
        return {name: getattr(self, name) for name in self.flag_names()}


@dataclass(frozen=True)
class UserProfile:
    """The local user's profile."""

    name: str = "Alex Doe"
    email: str = "alex.doe@example.com"
    notifications: NotificationPreferences = field(default_factory=NotificationPreferences)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "UserProfile":
        """Create UserProfile from stored data, filling gaps with defaults."""
        defaults = cls()
        return cls(
            name=str(data.get("name", defaults.name)),
            email=str(data.get("email", defaults.email)),
            notifications=NotificationPreferences.from_dict(data.get("notifications") or {}),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "email": self.email,
            "notifications": self.notifications.to_dict(),
        }
