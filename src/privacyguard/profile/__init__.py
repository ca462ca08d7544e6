"""
Local user profile.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

from privacyguard.profile.models import NotificationPreferences, UserProfile
from privacyguard.profile.storage import (
    JsonFileStorage,
    MemoryStorage,
    StorageKey,
    StoragePort,
)
from privacyguard.profile.store import PROFILE_KEY, ProfileStore

__all__ = [
    "JsonFileStorage",
    "MemoryStorage",
    "NotificationPreferences",
    "PROFILE_KEY",
    "ProfileStore",
    "StorageKey",
    "StoragePort",
    "UserProfile",
]
