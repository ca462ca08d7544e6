"""
Data deletion request letters.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

from privacyguard.takedown.models import LetterKind

GDPR_TEMPLATE = """Subject: Data Deletion Request under GDPR Article 17

Dear {company} Data Protection Officer,

I am writing to request the immediate and complete erasure of my personal data from your systems, in accordance with my right to erasure under Article 17 of the General Data Protection Regulation (GDPR).

My personal details associated with your service are:
- Name: {name}
- Email: {email}
- Username: {username}

Please confirm once my data has been permanently deleted.

Sincerely,
{name}"""

CCPA_TEMPLATE = """Subject: Request to Delete My Personal Information under CCPA

Dear {company},

As a California resident, I am exercising my right to request the deletion of my personal information under the California Consumer Privacy Act (CCPA).

Please delete all personal information you have collected about me. My identifying information is:
- Name: {name}
- Email: {email}
- Address: {address}

Please confirm in writing that you have complied with this request.

Thank you,
{name}"""

TEMPLATES = {
    LetterKind.GDPR: GDPR_TEMPLATE,
    LetterKind.CCPA: CCPA_TEMPLATE,
}

PLACEHOLDERS = {
    "company": "[Company Name]",
    "name": "[Your Name]",
    "email": "[Your Email]",
    "username": "[Your Username, if applicable]",
    "address": "[Your Address]",
}


def render_letter(
    kind: LetterKind | str,
    company: str | None = None,
    name: str | None = None,
    email: str | None = None,
    username: str | None = None,
    address: str | None = None,
) -> str:
    """Fill in a deletion request letter.

    Any detail left out keeps its bracketed placeholder so the letter can be
    completed by hand.
    """
    kind = LetterKind(kind)
    values = {
        "company": company,
        "name": name,
        "email": email,
        "username": username,
        "address": address,
    }
    fields = {
        key: value.strip() if value and value.strip() else PLACEHOLDERS[key]
        for key, value in values.items()
    }
    return TEMPLATES[kind].format(**fields)
