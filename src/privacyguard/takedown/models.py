"""
Data models for takedown requests.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any


class LetterKind(str, Enum):
    """Privacy law a deletion request is made under."""

    GDPR = "gdpr"
    CCPA = "ccpa"


class RemovalDifficulty(str, Enum):
    """How hard it is to get a broker to remove a listing."""

    EASY = "Easy"
    MEDIUM = "Medium"
    HARD = "Hard"


@dataclass(frozen=True)
class DataBroker:
    """A company that collects and resells personal information."""

    name: str
    description: str
    removal_link: str
    difficulty: RemovalDifficulty

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "removal_link": self.removal_link,
            "difficulty": self.difficulty.value,
        }
