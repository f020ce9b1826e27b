"""
User models.

``User`` mirrors ``GET /user/profile``.  ``UserProfile`` is the minimal
read-only snapshot the recommendation engine depends on: the account role
and the bio it mines for niche keywords.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, field_validator

from formative_match.models.base import ApiModel, coerce_timestamp
from formative_match.taxonomy.marketplace_taxonomy import UserType


class ProfileData(ApiModel):
    """Editable profile fields nested under ``profileData``."""

    bio: Optional[str] = None
    website: Optional[str] = None
    location: Optional[str] = None
    calendly_url: Optional[str] = None


class User(ApiModel):
    """Authenticated marketplace account."""

    id: int
    email: Optional[str] = None
    name: Optional[str] = None
    user_type: Optional[str] = None
    profile_data: Optional[ProfileData] = None
    created_at: Optional[datetime] = None

    @field_validator("created_at", mode="before")
    @classmethod
    def parse_created_at(cls, v: Any) -> Optional[datetime]:
        return coerce_timestamp(v)

    def profile_snapshot(self) -> "UserProfile":
        """Return the engine-facing snapshot of this account."""
        bio = self.profile_data.bio if self.profile_data else None
        return UserProfile(user_type=self.user_type, bio=bio)


class UserProfile(BaseModel):
    """User profile snapshot consumed by ``RecommendationEngine``.

    Attributes:
        user_type: Free-text role, e.g. ``"influencer"``, ``"brand"``.
        bio: Free-text bio, scanned for industry keywords.
    """

    model_config = ConfigDict(frozen=True)

    user_type: Optional[str] = None
    bio: Optional[str] = None

    @property
    def user_type_category(self) -> Optional[UserType]:
        return UserType.from_string(self.user_type)
