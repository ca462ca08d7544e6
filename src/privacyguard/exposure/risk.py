"""
Privacy risk scoring for breach exposure.

The score approximates the average severity per breach rather than growing
with the number of breaches, so one breach exposing national ID numbers can
outrank many breaches exposing only email addresses.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

import math
from typing import Iterable, Sequence

from privacyguard.exposure.models import (
    ActionPriority,
    Breach,
    PrivacyGrade,
    RecommendedAction,
    RiskAssessment,
    RiskLevel,
)

BASE_BREACH_POINTS = 10

# Bonus points per data class present in a breach. Unlisted classes add 0.
DATA_CLASS_POINTS: dict[str, int] = {
    "Passwords": 20,
    "National ID numbers": 30,
    "Financial information": 25,
    "Phone numbers": 5,
    "Physical addresses": 10,
}

# NOTE: a breach earns at most 100 points, so this divisor caps the score at
# 50 and the High and Critical bands are unreachable. Kept as-is for score
# compatibility.
NORMALIZATION_FACTOR = 2

MAX_SCORE = 100

LEVEL_DETAILS: dict[RiskLevel, str] = {
    RiskLevel.CRITICAL: (
        "Critical risk detected. Highly sensitive data like passwords and "
        "financial info exposed in multiple breaches."
    ),
    RiskLevel.HIGH: (
        "High risk. Sensitive data such as passwords have been exposed. "
        "Immediate action is recommended."
    ),
    RiskLevel.MEDIUM: (
        "Medium risk. Personal information has been exposed in several breaches."
    ),
    RiskLevel.LOW: (
        "Low risk. Some of your information has appeared in minor breaches."
    ),
}

NO_EXPOSURE_DETAILS = "No breaches found. Your exposure appears low."


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def breach_points(breach: Breach) -> int:
    """Points contributed by a single breach."""
    points = BASE_BREACH_POINTS
    for data_class, bonus in DATA_CLASS_POINTS.items():
        if breach.has_data_class(data_class):
            points += bonus
    return points


def raw_exposure_points(breaches: Iterable[Breach]) -> int:
    """Unnormalized point total across all breaches."""
    return sum(breach_points(b) for b in breaches)


def level_for_score(score: int) -> RiskLevel:
    """Map a score to its risk band."""
    return RiskLevel.for_score(score)


def assess_risk(breaches: Sequence[Breach]) -> RiskAssessment:
    """Calculate a privacy risk assessment from breach records.

    Args:
        breaches: Breach records found for one identity, in any order

    Returns:
        RiskAssessment with a score in [0, 100] and its matching level
    """
    breaches = list(breaches)
    if not breaches:
        return RiskAssessment(score=0, level=RiskLevel.LOW, details=NO_EXPOSURE_DETAILS)

    raw = raw_exposure_points(breaches)
    score = _round_half_up(raw / (len(breaches) * NORMALIZATION_FACTOR))
    score = max(0, min(score, MAX_SCORE))

    level = level_for_score(score)
    return RiskAssessment(score=score, level=level, details=LEVEL_DETAILS[level])


# Grade bands by breach count: (max breaches, grade, description)
GRADE_BANDS: tuple[tuple[int, str, str], ...] = (
    (0, "A+", "Excellent. No breaches on record. Keep up the great work!"),
    (1, "A", "Very Good. Your exposure is minimal."),
    (2, "B", "Good. A few minor breaches detected. Stay vigilant."),
    (4, "C", "Fair. Your data has appeared in several breaches. Action is recommended."),
    (6, "D", "Poor. Significant exposure detected. Take immediate steps to secure your accounts."),
)


def privacy_grade(breach_count: int) -> PrivacyGrade:
    """Letter grade for the number of breaches an identity appears in."""
    for max_count, grade, description in GRADE_BANDS:
        if breach_count <= max_count:
            return PrivacyGrade(grade=grade, description=description)
    return PrivacyGrade(
        grade="F",
        description="Critical. Your data is widely exposed. Urgent action is required.",
    )


# =============================================================================
# Recommended Actions
# =============================================================================

CHANGE_PASSWORD = RecommendedAction(
    id="change-pass",
    title="Change Your Password Immediately",
    description=(
        "Your password was found in a breach. Create a new, strong, and "
        "unique password for this account."
    ),
    priority=ActionPriority.HIGH,
)

ENABLE_2FA = RecommendedAction(
    id="enable-2fa",
    title="Enable Two-Factor Authentication (2FA)",
    description=(
        "Add an extra layer of security to your account. Even if your password "
        "is stolen, 2FA can prevent unauthorized access."
    ),
    priority=ActionPriority.HIGH,
)

REVIEW_STATEMENTS = RecommendedAction(
    id="review-accounts",
    title="Review Your Financial Statements",
    description=(
        "Since financial information may have been exposed, carefully check "
        "your bank and credit card statements for any suspicious activity."
    ),
    priority=ActionPriority.MEDIUM,
)

REVOKE_SESSIONS = RecommendedAction(
    id="revoke-sessions",
    title="Revoke Old Sessions",
    description=(
        "Log out of all devices and sessions for the affected account to "
        "ensure any unauthorized access is cut off."
    ),
    priority=ActionPriority.MEDIUM,
)

REQUEST_TAKEDOWN = RecommendedAction(
    id="remove-data",
    title="Request Data Takedown",
    description=(
        "Use GDPR/CCPA rights to request the breached company to delete your "
        "personal data from their systems."
    ),
    priority=ActionPriority.LOW,
)

RECOMMENDED_ACTIONS: tuple[RecommendedAction, ...] = (
    CHANGE_PASSWORD,
    ENABLE_2FA,
    REVIEW_STATEMENTS,
    REVOKE_SESSIONS,
    REQUEST_TAKEDOWN,
)

_PRIORITY_ORDER = {
    ActionPriority.HIGH: 0,
    ActionPriority.MEDIUM: 1,
    ActionPriority.LOW: 2,
}


def recommend_actions(breaches: Sequence[Breach], limit: int = 3) -> list[RecommendedAction]:
    """Pick remediation steps relevant to the exposed data.

    Args:
        breaches: Breach records found for one identity
        limit: Maximum number of actions to return

    Returns:
        Actions ordered from High to Low priority
    """
    if not breaches or limit <= 0:
        return []

    exposed = set()
    for breach in breaches:
        exposed.update(breach.data_classes)

    actions = []
    if "Passwords" in exposed:
        actions.append(CHANGE_PASSWORD)
    actions.append(ENABLE_2FA)
    if "Financial information" in exposed:
        actions.append(REVIEW_STATEMENTS)
    if exposed & {"Passwords", "Usernames"}:
        actions.append(REVOKE_SESSIONS)
    actions.append(REQUEST_TAKEDOWN)

    actions.sort(key=lambda a: _PRIORITY_ORDER[a.priority])
    return actions[:limit]
