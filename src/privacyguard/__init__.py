"""
PrivacyGuard - personal data exposure checker.

Reports which known breaches mention an identifier, scores the resulting
privacy risk, checks passwords against Pwned Passwords with k-anonymity and
provides takedown tooling.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

__version__ = "0.1.0"
