"""
Linked social account models (``GET /user/social-accounts``).

The backend returns no id for accounts; ``platform`` is the unique key.
Platforms report follower and post counts under different names
(YouTube ``subscribers``/``videos``, Twitter ``tweets``), so ``SocialStats``
exposes unified ``total_followers`` / ``total_posts``.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

from pydantic import field_validator

from formative_match.models.base import ApiModel, coerce_timestamp
from formative_match.taxonomy.marketplace_taxonomy import SocialPlatform


class SocialStats(ApiModel):
    followers: Optional[int] = None
    following: Optional[int] = None
    posts: Optional[int] = None
    tweets: Optional[int] = None
    videos: Optional[int] = None
    subscribers: Optional[int] = None
    engagement_rate: Optional[float] = None
    display_name: Optional[str] = None
    verified: Optional[bool] = None

    @property
    def total_followers(self) -> int:
        if self.followers is not None:
            return self.followers
        return self.subscribers or 0

    @property
    def total_posts(self) -> int:
        for count in (self.posts, self.tweets, self.videos):
            if count is not None:
                return count
        return 0


class SocialAccount(ApiModel):
    """A social network account linked to the current user."""

    platform: str
    username: Optional[str] = None
    stats: Optional[SocialStats] = None
    last_synced_at: Optional[datetime] = None
    is_verified: Optional[bool] = None

    @field_validator("last_synced_at", mode="before")
    @classmethod
    def parse_synced_at(cls, v: Any) -> Optional[datetime]:
        return coerce_timestamp(v)

    @property
    def platform_type(self) -> SocialPlatform:
        return SocialPlatform.from_string(self.platform)

    @property
    def display_username(self) -> str:
        if self.username:
            return f"@{self.username}"
        return self.platform.capitalize()

    @property
    def total_followers(self) -> int:
        return self.stats.total_followers if self.stats else 0

    @property
    def total_posts(self) -> int:
        return self.stats.total_posts if self.stats else 0

    @property
    def formatted_followers(self) -> str:
        return format_count(self.total_followers)


def format_count(num: int) -> str:
    """Compact follower count: ``1.2M``, ``3.4K``, or the plain number."""
    if num >= 1_000_000:
        return f"{num / 1_000_000:.1f}M"
    if num >= 1_000:
        return f"{num / 1_000:.1f}K"
    return str(num)
