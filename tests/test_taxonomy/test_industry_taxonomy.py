"""
Tests for formative_match/taxonomy/industry_taxonomy.py.

What we test
------------
  - extract_industries() is case-insensitive, substring-based, and keeps
    vocabulary order with no duplicates.
  - None / empty / keyword-free bios give an empty tuple.
  - is_direct_match() works in both directions.
  - is_related_match() only fires for keys of RELATED_INDUSTRIES.
"""

from __future__ import annotations

from formative_match.taxonomy.industry_taxonomy import (
    INDUSTRY_KEYWORDS,
    RELATED_INDUSTRIES,
    extract_industries,
    is_direct_match,
    is_related_match,
)


class TestVocabulary:
    def test_keywords_are_lowercase_and_unique(self):
        assert all(kw == kw.lower() for kw in INDUSTRY_KEYWORDS)
        assert len(set(INDUSTRY_KEYWORDS)) == len(INDUSTRY_KEYWORDS)

    def test_related_keys_are_keywords(self):
        assert set(RELATED_INDUSTRIES) <= set(INDUSTRY_KEYWORDS)


class TestExtractIndustries:
    def test_none(self):
        assert extract_industries(None) == ()

    def test_empty(self):
        assert extract_industries("") == ()

    def test_no_keywords(self):
        assert extract_industries("hello world") == ()

    def test_case_insensitive(self):
        assert extract_industries("FASHION Blogger") == ("fashion",)

    def test_vocabulary_order_not_bio_order(self):
        assert extract_industries("gaming, music and beauty") == ("beauty", "gaming", "music")

    def test_substring_inside_word(self):
        # "photography" contains no other keyword; "artist" contains "art"
        assert extract_industries("photography artist") == ("art", "photography")

    def test_repeated_keyword_listed_once(self):
        assert extract_industries("food food food") == ("food",)


class TestMatching:
    def test_direct_both_directions(self):
        assert is_direct_match("fashion", "Fashion Week")
        assert is_direct_match("technology", "TECH")

    def test_direct_no_match(self):
        assert not is_direct_match("fashion", "Gaming")

    def test_related_match(self):
        assert is_related_match("travel", "Boutique Hospitality")

    def test_related_is_not_symmetric(self):
        # "gaming" has no related entry even though technology relates to it
        assert is_related_match("technology", "Gaming")
        assert not is_related_match("gaming", "Technology")

    def test_related_unknown_keyword(self):
        assert not is_related_match("parenting", "Fashion")
