"""
Tests for formative_match/taxonomy/marketplace_taxonomy.py.

What we test
------------
  - from_string() is case-insensitive for every enum; whitespace is kept.
  - UserType / OpportunityType: None -> None; blank, padded or unknown -> OTHER.
  - ActivityType: blank or unknown -> GENERAL; short aliases resolve.
  - SocialPlatform: unknown -> OTHER; display names.
  - Creator-side and brand-side opportunity type sets are disjoint.
"""

from __future__ import annotations

import pytest

from formative_match.taxonomy.marketplace_taxonomy import (
    BRAND_OPPORTUNITY_TYPES,
    CREATOR_OPPORTUNITY_TYPES,
    ActivityType,
    OpportunityType,
    SocialPlatform,
    UserType,
)


class TestUserType:
    def test_known_value(self):
        assert UserType.from_string("Influencer") == UserType.INFLUENCER

    def test_absent(self):
        assert UserType.from_string(None) is None

    @pytest.mark.parametrize("raw", ["", "   ", " influencer "])
    def test_blank_or_padded_is_other(self, raw):
        assert UserType.from_string(raw) == UserType.OTHER

    def test_unknown(self):
        assert UserType.from_string("agency") == UserType.OTHER

    def test_str_value(self):
        assert str(UserType.FREELANCER) == "freelancer"


class TestOpportunityType:
    def test_known_value(self):
        assert OpportunityType.from_string("UGC") == OpportunityType.UGC

    def test_absent(self):
        assert OpportunityType.from_string(None) is None

    @pytest.mark.parametrize("raw", ["", " ugc"])
    def test_blank_or_padded_is_other(self, raw):
        assert OpportunityType.from_string(raw) == OpportunityType.OTHER

    def test_unknown(self):
        assert OpportunityType.from_string("giveaway") == OpportunityType.OTHER

    def test_type_sets_disjoint(self):
        assert not (CREATOR_OPPORTUNITY_TYPES & BRAND_OPPORTUNITY_TYPES)
        assert OpportunityType.OTHER not in CREATOR_OPPORTUNITY_TYPES | BRAND_OPPORTUNITY_TYPES


class TestActivityType:
    def test_known_value(self):
        assert ActivityType.from_string("payment_received") == ActivityType.PAYMENT_RECEIVED

    @pytest.mark.parametrize("alias,expected", [
        ("message", ActivityType.NEW_MESSAGE),
        ("Payment", ActivityType.PAYMENT_RECEIVED),
        ("invitation", ActivityType.TEAM_INVITATION),
        ("opportunity", ActivityType.OPPORTUNITY_POSTED),
    ])
    def test_aliases(self, alias, expected):
        assert ActivityType.from_string(alias) == expected

    @pytest.mark.parametrize("raw", [None, "", "something_new"])
    def test_fallback_general(self, raw):
        assert ActivityType.from_string(raw) == ActivityType.GENERAL


class TestSocialPlatform:
    def test_known_value(self):
        assert SocialPlatform.from_string("TikTok") == SocialPlatform.TIKTOK

    def test_unknown(self):
        assert SocialPlatform.from_string("myspace") == SocialPlatform.OTHER

    def test_every_member_has_display_name(self):
        for platform in SocialPlatform:
            assert platform.display_name

    def test_twitter_display_name(self):
        assert SocialPlatform.TWITTER.display_name == "Twitter/X"

