"""
Data broker scanning.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

import random
from abc import ABC, abstractmethod

from privacyguard.takedown.models import DataBroker, RemovalDifficulty

DATA_BROKERS: tuple[DataBroker, ...] = (
    DataBroker(
        name="Acxiom",
        description="One of the largest data brokers, collecting consumer data and analytics.",
        removal_link="https://www.acxiom.com",
        difficulty=RemovalDifficulty.HARD,
    ),
    DataBroker(
        name="Spokeo",
        description="A people search engine that aggregates data from online and offline sources.",
        removal_link="https://www.spokeo.com",
        difficulty=RemovalDifficulty.MEDIUM,
    ),
    DataBroker(
        name="Whitepages",
        description="Provides contact information and background checks on individuals.",
        removal_link="https://www.whitepages.com",
        difficulty=RemovalDifficulty.MEDIUM,
    ),
    DataBroker(
        name="Intelius",
        description="Offers background checks, criminal records, and other personal information.",
        removal_link="https://www.intelius.com",
        difficulty=RemovalDifficulty.HARD,
    ),
    DataBroker(
        name="BeenVerified",
        description=(
            "A background check company that allows searching for people, "
            "vehicles, and contact information."
        ),
        removal_link="https://www.beenverified.com",
        difficulty=RemovalDifficulty.EASY,
    ),
)


class BrokerSource(ABC):
    """Finds data brokers that may list a person."""

    @abstractmethod
    async def scan(self, query: str) -> list[DataBroker]:
        """Return brokers that may hold data about ``query``."""


class SampleBrokerSource(BrokerSource):
    """Demonstration source that samples ``DATA_BROKERS`` at random."""

    KEEP_PROBABILITY = 0.7

    def __init__(
        self,
        rng: random.Random | None = None,
        catalog: tuple[DataBroker, ...] = DATA_BROKERS,
    ):
        self.rng = rng or random.Random()
        self.catalog = catalog

    async def scan(self, query: str) -> list[DataBroker]:
        return [b for b in self.catalog if self.rng.random() < self.KEEP_PROBABILITY]
