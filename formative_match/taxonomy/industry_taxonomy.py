"""
Industry / niche vocabulary used by the recommendation engine.

Two fixed tables:

``INDUSTRY_KEYWORDS``
    Niche keywords searched for in a user's bio.  Matching is a
    case-insensitive substring test, so a bio containing "technology"
    yields both ``"tech"`` and ``"technology"``.

``RELATED_INDUSTRIES``
    Loose adjacency between niches.  A user keyword that appears as a key
    here earns a partial match against any opportunity whose industry text
    contains one of the listed values.

Opportunity industries stay free text ("Fashion Retail", "Consumer Tech")
because matching is substring-based in both directions.

This module has NO imports from any other ``formative_match`` package.
"""

from __future__ import annotations

from typing import Optional

INDUSTRY_KEYWORDS: tuple[str, ...] = (
    "fashion", "beauty", "tech", "technology", "food", "travel",
    "fitness", "health", "lifestyle", "gaming", "music", "art",
    "photography", "design", "sports", "entertainment", "education",
    "finance", "business", "marketing", "wellness", "parenting",
)

RELATED_INDUSTRIES: dict[str, tuple[str, ...]] = {
    "fashion":    ("beauty", "lifestyle", "retail", "apparel"),
    "technology": ("tech", "software", "gaming", "electronics"),
    "food":       ("beverage", "restaurant", "cooking", "nutrition"),
    "fitness":    ("health", "wellness", "sports", "nutrition"),
    "travel":     ("hospitality", "tourism", "adventure"),
    "beauty":     ("fashion", "skincare", "cosmetics", "lifestyle"),
}


def extract_industries(bio: Optional[str]) -> tuple[str, ...]:
    """Return the vocabulary keywords found in ``bio``, in vocabulary order.

    Args:
        bio: Free-text profile bio, or ``None``.

    Returns:
        Tuple of matched keywords (lowercase).  Empty when ``bio`` is
        ``None`` or contains no keyword.
    """
    if not bio:
        return ()
    text = bio.lower()
    return tuple(kw for kw in INDUSTRY_KEYWORDS if kw in text)


def is_direct_match(user_industry: str, opportunity_industry: str) -> bool:
    """True when either string contains the other (case-insensitive)."""
    a = user_industry.lower()
    b = opportunity_industry.lower()
    return b in a or a in b


def is_related_match(user_industry: str, opportunity_industry: str) -> bool:
    """True when ``user_industry`` has a related niche inside the opportunity text."""
    related = RELATED_INDUSTRIES.get(user_industry.lower())
    if not related:
        return False
    text = opportunity_industry.lower()
    return any(term in text for term in related)
