"""
Data models for breach exposure checks.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any


class RiskLevel(str, Enum):
    """Privacy risk level, ordered from Low to Critical."""

    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
    CRITICAL = "Critical"

    @property
    def rank(self) -> int:
        return list(RiskLevel).index(self)

    def __lt__(self, other):
        if not isinstance(other, RiskLevel):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other):
        if not isinstance(other, RiskLevel):
            return NotImplemented
        return self.rank <= other.rank

    def __gt__(self, other):
        if not isinstance(other, RiskLevel):
            return NotImplemented
        return self.rank > other.rank

    def __ge__(self, other):
        if not isinstance(other, RiskLevel):
            return NotImplemented
        return self.rank >= other.rank

    @classmethod
    def for_score(cls, score: int) -> "RiskLevel":
        """Map a score to its risk band."""
        for threshold, level in LEVEL_THRESHOLDS:
            if score >= threshold:
                return level
        return cls.LOW


# Checked from highest to lowest, first match wins.
LEVEL_THRESHOLDS: tuple[tuple[int, RiskLevel], ...] = (
    (90, RiskLevel.CRITICAL),
    (70, RiskLevel.HIGH),
    (40, RiskLevel.MEDIUM),
    (0, RiskLevel.LOW),
)


class ActionPriority(str, Enum):
    """Priority of a recommended action."""

    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


def _parse_date(date_str: str | None) -> datetime | None:
    if not date_str:
        return None
    try:
        # HIBP uses ISO format
        return datetime.fromisoformat(date_str.replace("Z", "+00:00"))
    except (ValueError, AttributeError):
        try:
            return datetime.strptime(date_str, "%Y-%m-%d")
        except (ValueError, AttributeError, TypeError):
            return None


@dataclass(frozen=True)
class Breach:
    """A public breach record mentioning the queried identity."""

    name: str
    domain: str
    breach_date: datetime | None
    added_date: datetime | None
    pwn_count: int
    data_classes: tuple[str, ...]
    description: str

    @classmethod
    def from_api_response(cls, data: dict[str, Any]) -> "Breach":
        """Create Breach from HIBP API response."""
        return cls(
            name=data.get("Name", ""),
            domain=data.get("Domain", ""),
            breach_date=_parse_date(data.get("BreachDate")),
            added_date=_parse_date(data.get("AddedDate")),
            pwn_count=data.get("PwnCount", 0) or 0,
            data_classes=tuple(data.get("DataClasses") or ()),
            description=data.get("Description", "") or "",
        )

    def has_data_class(self, data_class: str) -> bool:
        return data_class in self.data_classes

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "name": self.name,
            "domain": self.domain,
            "breach_date": self.breach_date.isoformat() if self.breach_date else None,
            "added_date": self.added_date.isoformat() if self.added_date else None,
            "pwn_count": self.pwn_count,
            "data_classes": list(self.data_classes),
            "description": self.description,
        }


@dataclass(frozen=True)
class RiskAssessment:
    """Risk score, level and explanation for a set of breaches.

    Built by ``assess_risk`` only, which derives the level from the score.
    """

    score: int
    level: RiskLevel
    details: str

    def __post_init__(self):
        if not 0 <= self.score <= 100:
            raise ValueError(f"Risk score out of range: {self.score}")
        if self.level != RiskLevel.for_score(self.score):
            raise ValueError(
                f"Risk level {self.level.value} does not match score {self.score}"
            )

    def to_dict(self) -> dict[str, Any]:
        return {
            "score": self.score,
            "level": self.level.value,
            "details": self.details,
        }


@dataclass(frozen=True)
class RecommendedAction:
    """A remediation step suggested after a scan."""

    id: str
    title: str
    description: str
    priority: ActionPriority

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "priority": self.priority.value,
        }


@dataclass(frozen=True)
class PrivacyGrade:
    """Letter grade summarising how many breaches an identity appears in."""

    grade: str
    description: str


@dataclass
class ScanResult:
    """Result of scanning an identifier for breach exposure."""

    query: str
    breaches: list[Breach] = field(default_factory=list)
    risk: RiskAssessment | None = None
    actions: list[RecommendedAction] = field(default_factory=list)
    checked_at: datetime = field(default_factory=datetime.now)
    error: str | None = None

    @property
    def breach_count(self) -> int:
        return len(self.breaches)

    @property
    def is_breached(self) -> bool:
        """Check if the identifier was found in any breaches."""
        return self.breach_count > 0

    @property
    def total_pwn_count(self) -> int:
        return sum(b.pwn_count for b in self.breaches)

    @property
    def compromised_data_types(self) -> set[str]:
        """Get all compromised data types across all breaches."""
        types = set()
        for breach in self.breaches:
            types.update(breach.data_classes)
        return types

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "query": self.query,
            "is_breached": self.is_breached,
            "breach_count": self.breach_count,
            "total_pwn_count": self.total_pwn_count,
            "compromised_data_types": sorted(self.compromised_data_types),
            "risk": self.risk.to_dict() if self.risk else None,
            "actions": [a.to_dict() for a in self.actions],
            "breaches": [b.to_dict() for b in self.breaches],
            "checked_at": self.checked_at.isoformat(),
            "error": self.error,
        }


@dataclass
class PasswordCheckResult:
    """Result of checking a password against Pwned Passwords."""

    count: int = 0
    checked_at: datetime = field(default_factory=datetime.now)
    # Never store the actual password or its full hash!
    hash_prefix: str = ""  # Only first 5 chars of SHA-1

    @property
    def is_pwned(self) -> bool:
        """Check if password was found in breaches."""
        return self.count > 0

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "is_pwned": self.is_pwned,
            "count": self.count,
            "checked_at": self.checked_at.isoformat(),
        }
