"""
Profile persistence on top of a storage port.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

from dataclasses import replace

from privacyguard.profile.models import UserProfile
from privacyguard.profile.storage import StorageKey, StoragePort

PROFILE_KEY: StorageKey[UserProfile] = StorageKey(
    name="privacyGuardProfile",
    default=UserProfile(),
    decode=UserProfile.from_dict,
    encode=UserProfile.to_dict,
)


class ProfileStore:
    """Read-modify-write access to the local user's profile."""

    def __init__(self, storage: StoragePort):
        self.storage = storage

    def load(self) -> UserProfile:
        return self.storage.get(PROFILE_KEY)

    def save(self, profile: UserProfile) -> None:
        self.storage.set(PROFILE_KEY, profile)

    def update(self, name: str | None = None, email: str | None = None) -> UserProfile:
        """Change name and/or email, keeping everything else."""
        profile = self.load()
        changes = {}
        if name is not None:
            changes["name"] = name
        if email is not None:
            changes["email"] = email
        if changes:
            profile = replace(profile, **changes)
            self.save(profile)
        return profile

    def set_notification(self, flag: str, enabled: bool) -> UserProfile:
        """Turn one notification flag on or off."""
        profile = self.load()
        profile = replace(profile, notifications=profile.notifications.with_flag(flag, enabled))
        self.save(profile)
        return profile
