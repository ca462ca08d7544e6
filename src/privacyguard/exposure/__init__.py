"""
Breach exposure checking.

Scans identifiers for breach exposure, scores the resulting privacy risk and
checks passwords against Pwned Passwords with k-anonymity.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

from privacyguard.exposure.models import (
    ActionPriority,
    Breach,
    PasswordCheckResult,
    PrivacyGrade,
    RecommendedAction,
    RiskAssessment,
    RiskLevel,
    ScanResult,
)
from privacyguard.exposure.risk import (
    assess_risk,
    level_for_score,
    privacy_grade,
    raw_exposure_points,
    recommend_actions,
)
from privacyguard.exposure.passwords import (
    PasswordCheckError,
    PwnedPasswordsClient,
    check_password,
    check_password_sync,
)
from privacyguard.exposure.sources import (
    BreachSource,
    BreachSourceError,
    HIBPBreachSource,
    SampleBreachSource,
    scan_identity,
)

__all__ = [
    "ActionPriority",
    "Breach",
    "PasswordCheckResult",
    "PrivacyGrade",
    "RecommendedAction",
    "RiskAssessment",
    "RiskLevel",
    "ScanResult",
    "assess_risk",
    "level_for_score",
    "privacy_grade",
    "raw_exposure_points",
    "recommend_actions",
    "PasswordCheckError",
    "PwnedPasswordsClient",
    "check_password",
    "check_password_sync",
    "BreachSource",
    "BreachSourceError",
    "HIBPBreachSource",
    "SampleBreachSource",
    "scan_identity",
]
