"""
Tests for formative_match/models/user.py, models/dashboard.py and
models/social.py.

What we test
------------
User / UserProfile:
  - profileData.bio flows into profile_snapshot(); missing profileData -> no bio.
  - user_type_category follows UserType.from_string.

DashboardStats:
  - Missing and null counters become zero; empty() is all zeros.

ActivityItem:
  - activity_type maps raw type text, including aliases.

CalendarDeadline:
  - Built from an opportunity with a deadline; rejects one without.

SocialAccount / SocialStats:
  - Unified follower / post counts across platform-specific fields.
  - display_username and formatted_followers.
"""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from formative_match.models.dashboard import ActivityItem, CalendarDeadline, DashboardStats
from formative_match.models.social import SocialAccount, SocialStats, format_count
from formative_match.models.user import User, UserProfile
from formative_match.taxonomy.marketplace_taxonomy import (
    ActivityType,
    SocialPlatform,
    UserType,
)


# ── User ──────────────────────────────────────────────────────────────────────

class TestUser:
    def test_profile_snapshot(self):
        user = User.model_validate({
            "id": 3,
            "email": "a@example.com",
            "userType": "influencer",
            "profileData": {"bio": "travel vlogger", "calendlyUrl": "https://cal.example/a"},
            "createdAt": "2024-06-01T00:00:00Z",
        })
        snapshot = user.profile_snapshot()
        assert snapshot == UserProfile(user_type="influencer", bio="travel vlogger")
        assert user.profile_data.calendly_url == "https://cal.example/a"
        assert user.created_at == datetime(2024, 6, 1, tzinfo=timezone.utc)

    def test_snapshot_without_profile_data(self):
        snapshot = User.model_validate({"id": 3}).profile_snapshot()
        assert snapshot.bio is None
        assert snapshot.user_type is None

    def test_user_type_category(self):
        assert UserProfile(user_type="BRAND").user_type_category == UserType.BRAND
        assert UserProfile().user_type_category is None


# ── Dashboard models ──────────────────────────────────────────────────────────

class TestDashboardStats:
    def test_wire_format(self):
        stats = DashboardStats.model_validate(
            {"applications": 4, "earnings": 1250.5, "profileViews": 88, "campaigns": 2}
        )
        assert stats.profile_views == 88
        assert stats.earnings == pytest.approx(1250.5)

    def test_nulls_and_missing_become_zero(self):
        stats = DashboardStats.model_validate({"applications": None, "earnings": None})
        assert stats.applications == 0
        assert stats.earnings == 0.0
        assert stats.campaigns == 0

    def test_empty(self):
        assert DashboardStats.empty() == DashboardStats(
            applications=0, earnings=0.0, profile_views=0, campaigns=0
        )


class TestActivityItem:
    def test_activity_type(self):
        item = ActivityItem.model_validate(
            {"id": 1, "type": "message", "title": "New message", "relatedId": 9}
        )
        assert item.activity_type == ActivityType.NEW_MESSAGE
        assert item.related_id == 9
        assert item.message == ""

    def test_unknown_type_is_general(self):
        item = ActivityItem.model_validate({"id": 1, "type": "badge", "title": "t"})
        assert item.activity_type == ActivityType.GENERAL


class TestCalendarDeadline:
    def test_from_opportunity(self, make_opportunity):
        opp = make_opportunity(
            id=4, title="Reel", createdByName="Brand X", deadline="2025-03-10T00:00:00Z"
        )
        entry = CalendarDeadline.from_opportunity(opp)
        assert entry.opportunity_id == 4
        assert entry.company_name == "Brand X"
        assert entry.deadline == opp.deadline

    def test_requires_deadline(self, make_opportunity):
        with pytest.raises(ValueError):
            CalendarDeadline.from_opportunity(make_opportunity(id=4))


# ── Social ────────────────────────────────────────────────────────────────────

class TestSocialStats:
    def test_followers_preferred(self):
        assert SocialStats(followers=10, subscribers=99).total_followers == 10

    def test_subscribers_fallback(self):
        assert SocialStats(subscribers=99).total_followers == 99

    def test_no_counts(self):
        stats = SocialStats()
        assert stats.total_followers == 0
        assert stats.total_posts == 0

    def test_posts_fallback_order(self):
        assert SocialStats(tweets=5, videos=7).total_posts == 5
        assert SocialStats(videos=7).total_posts == 7


class TestSocialAccount:
    def test_wire_format(self):
        account = SocialAccount.model_validate({
            "platform": "youtube",
            "username": "chef_ana",
            "stats": {"subscribers": 1_240_000, "videos": 310, "engagementRate": 4.2},
            "lastSyncedAt": "2025-02-01T10:00:00Z",
        })
        assert account.platform_type == SocialPlatform.YOUTUBE
        assert account.display_username == "@chef_ana"
        assert account.total_followers == 1_240_000
        assert account.formatted_followers == "1.2M"
        assert account.total_posts == 310
        assert account.stats.engagement_rate == pytest.approx(4.2)

    def test_without_username_or_stats(self):
        account = SocialAccount(platform="bluesky")
        assert account.display_username == "Bluesky"
        assert account.total_followers == 0
        assert account.total_posts == 0

    @pytest.mark.parametrize("num,expected", [
        (0, "0"), (999, "999"), (1_000, "1.0K"), (3_460, "3.5K"), (2_000_000, "2.0M"),
    ])
    def test_format_count(self, num, expected):
        assert format_count(num) == expected
