"""
Breach-aware privacy assistant.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

from privacyguard.assistant.models import ChatHistory, ChatMessage, ChatRole
from privacyguard.assistant.client import (
    ERROR_MESSAGE,
    UNAVAILABLE_MESSAGE,
    AssistantClient,
)

__all__ = [
    "AssistantClient",
    "ChatHistory",
    "ChatMessage",
    "ChatRole",
    "ERROR_MESSAGE",
    "UNAVAILABLE_MESSAGE",
]
