"""
Takedown tooling: deletion request letters and data broker scans.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

from privacyguard.takedown.models import DataBroker, LetterKind, RemovalDifficulty
from privacyguard.takedown.letters import render_letter
from privacyguard.takedown.brokers import (
    DATA_BROKERS,
    BrokerSource,
    SampleBrokerSource,
)

__all__ = [
    "DATA_BROKERS",
    "BrokerSource",
    "DataBroker",
    "LetterKind",
    "RemovalDifficulty",
    "SampleBrokerSource",
    "render_letter",
]
