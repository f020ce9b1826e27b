"""
Marketplace taxonomy: closed category enums for users, opportunities,
activity feed items, and linked social platforms.

The backend sends every category as free text.  Each enum here carries an
explicit catch-all member (``OTHER`` / ``GENERAL``) so that unknown values
map to a real member instead of leaking raw strings into scoring branches.

Use ``from_string()`` at the API boundary::

    from formative_match.taxonomy.marketplace_taxonomy import UserType

    UserType.from_string("Influencer")   # -> UserType.INFLUENCER
    UserType.from_string("agency")       # -> UserType.OTHER
    UserType.from_string(None)           # -> None (absent)
    UserType.from_string("")             # -> UserType.OTHER

This module has NO imports from any other ``formative_match`` package.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Optional


def _normalize(value: Optional[str]) -> Optional[str]:
    # Only None is absent; "" and padded strings are values that match nothing.
    return None if value is None else value.lower()


class UserType(StrEnum):
    """Account role chosen at registration."""

    INFLUENCER = "influencer"
    """Creator who posts sponsored content."""

    BRAND = "brand"
    """Company posting collaboration opportunities."""

    FREELANCER = "freelancer"
    """Independent contractor; broadly compatible with any opportunity type."""

    OTHER = "other"
    """Any role the client does not recognise."""

    @classmethod
    def from_string(cls, value: Optional[str]) -> Optional["UserType"]:
        """Map a raw role string to a member; ``None`` when absent."""
        normalized = _normalize(value)
        if normalized is None:
            return None
        try:
            return cls(normalized)
        except ValueError:
            return cls.OTHER


class OpportunityType(StrEnum):
    """Kind of collaboration an opportunity offers."""

    # ── Creator-side ──────────────────────────────────────────────────────────
    INFLUENCER = "influencer"
    CONTENT = "content"
    AMBASSADOR = "ambassador"
    UGC = "ugc"

    # ── Brand-side ────────────────────────────────────────────────────────────
    PARTNERSHIP = "partnership"
    SPONSORSHIP = "sponsorship"
    COLLABORATION = "collaboration"

    OTHER = "other"

    @classmethod
    def from_string(cls, value: Optional[str]) -> Optional["OpportunityType"]:
        """Map a raw opportunity type to a member; ``None`` when absent."""
        normalized = _normalize(value)
        if normalized is None:
            return None
        try:
            return cls(normalized)
        except ValueError:
            return cls.OTHER


CREATOR_OPPORTUNITY_TYPES: frozenset[OpportunityType] = frozenset({
    OpportunityType.INFLUENCER,
    OpportunityType.CONTENT,
    OpportunityType.AMBASSADOR,
    OpportunityType.UGC,
})
"""Opportunity types that are a full match for influencer accounts."""

BRAND_OPPORTUNITY_TYPES: frozenset[OpportunityType] = frozenset({
    OpportunityType.PARTNERSHIP,
    OpportunityType.SPONSORSHIP,
    OpportunityType.COLLABORATION,
})
"""Opportunity types that are a full match for brand accounts."""


class ActivityType(StrEnum):
    """Dashboard activity-feed entry category."""

    APPLICATION_ACCEPTED = "application_accepted"
    APPLICATION_REJECTED = "application_rejected"
    NEW_MESSAGE = "new_message"
    CAMPAIGN_UPDATE = "campaign_update"
    PAYMENT_RECEIVED = "payment_received"
    TEAM_INVITATION = "team_invitation"
    OPPORTUNITY_POSTED = "opportunity_posted"
    GENERAL = "general"

    @classmethod
    def from_string(cls, value: Optional[str]) -> "ActivityType":
        """Map a raw activity type (including short aliases) to a member."""
        normalized = _normalize(value)
        if normalized is None:
            return cls.GENERAL
        normalized = _ACTIVITY_ALIASES.get(normalized, normalized)
        try:
            return cls(normalized)
        except ValueError:
            return cls.GENERAL


# Short forms the backend has used for some activity rows.
_ACTIVITY_ALIASES: dict[str, str] = {
    "message":     "new_message",
    "payment":     "payment_received",
    "invitation":  "team_invitation",
    "opportunity": "opportunity_posted",
}


class SocialPlatform(StrEnum):
    """Social network a creator can link to their profile."""

    TWITTER = "twitter"
    INSTAGRAM = "instagram"
    TIKTOK = "tiktok"
    YOUTUBE = "youtube"
    BLUESKY = "bluesky"
    OTHER = "other"

    @classmethod
    def from_string(cls, value: Optional[str]) -> "SocialPlatform":
        normalized = _normalize(value)
        if normalized is None:
            return cls.OTHER
        try:
            return cls(normalized)
        except ValueError:
            return cls.OTHER

    @property
    def display_name(self) -> str:
        return _PLATFORM_DISPLAY_NAMES[self]


_PLATFORM_DISPLAY_NAMES: dict[SocialPlatform, str] = {
    SocialPlatform.TWITTER:   "Twitter/X",
    SocialPlatform.INSTAGRAM: "Instagram",
    SocialPlatform.TIKTOK:    "TikTok",
    SocialPlatform.YOUTUBE:   "YouTube",
    SocialPlatform.BLUESKY:   "Bluesky",
    SocialPlatform.OTHER:     "Other",
}
