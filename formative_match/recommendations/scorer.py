"""
Recommendation scoring: rates how well one opportunity fits one user.

Score formula (sum of three capped components, range 0–100)
------------------------------------------------------------
    total = clamp(user_type_score + industry_score + budget_score, 0, 100)

Component explanations
----------------------
user_type_score (10–30):
    Role fit between the account type and the opportunity type.
      - either side absent               → 15
      - influencer × creator-side type    → 30, else 10
      - brand × brand-side type           → 30, else 10
      - freelancer                        → 25 (works across types)
      - unrecognised account type         → 15

industry_score (10–40):
    Niche fit between the user's bio keywords and the opportunity industry.
      - opportunity industry absent       → 20
      - direct (substring either way)     → 40
      - related via RELATED_INDUSTRIES    → 25
      - no match                          → 10

budget_score (15–30):
    Prefers clearly stated, mid-range budgets.
      - both bounds present, average in [500, 5000] → 30
      - both bounds present, average > 5000         → 20
      - both bounds present, average < 500          → 15
      - budget missing or partial                   → 15
    A negative or non-finite bound counts as missing.

Every function here is pure and total: absent inputs fall through to the
documented default rather than raising.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional, Sequence

from formative_match.taxonomy.industry_taxonomy import is_direct_match, is_related_match
from formative_match.taxonomy.marketplace_taxonomy import (
    BRAND_OPPORTUNITY_TYPES,
    CREATOR_OPPORTUNITY_TYPES,
    OpportunityType,
    UserType,
)

MAX_SCORE = 100.0

# ── User-type tiers ───────────────────────────────────────────────────────────
TYPE_FULL_MATCH = 30.0
TYPE_FREELANCER = 25.0
TYPE_DEFAULT = 15.0
TYPE_MISMATCH = 10.0

# ── Industry tiers ────────────────────────────────────────────────────────────
INDUSTRY_DIRECT = 40.0
INDUSTRY_RELATED = 25.0
INDUSTRY_UNSPECIFIED = 20.0
INDUSTRY_NONE = 10.0

# ── Budget tiers ──────────────────────────────────────────────────────────────
BUDGET_MID_RANGE = 30.0
BUDGET_HIGH = 20.0
BUDGET_DEFAULT = 15.0
BUDGET_MID_RANGE_LOW = 500.0
BUDGET_MID_RANGE_HIGH = 5000.0


@dataclass(frozen=True)
class ScoreComponents:
    """All components of a recommendation score.

    Attributes:
        user_type_score: 10–30, account role vs. opportunity type.
        industry_score:  10–40, bio niches vs. opportunity industry.
        budget_score:    15–30, budget clarity and range.
    """

    user_type_score: float
    industry_score:  float
    budget_score:    float

    @property
    def total(self) -> float:
        """Sum of components, clamped to [0, 100]."""
        return _clamp(
            self.user_type_score + self.industry_score + self.budget_score,
            0.0,
            MAX_SCORE,
        )


def score_user_type(
    user_type: Optional[UserType],
    opportunity_type: Optional[OpportunityType],
) -> float:
    """Score account role against opportunity type (max 30)."""
    if user_type is None or opportunity_type is None:
        return TYPE_DEFAULT

    if user_type == UserType.INFLUENCER:
        return TYPE_FULL_MATCH if opportunity_type in CREATOR_OPPORTUNITY_TYPES else TYPE_MISMATCH
    if user_type == UserType.BRAND:
        return TYPE_FULL_MATCH if opportunity_type in BRAND_OPPORTUNITY_TYPES else TYPE_MISMATCH
    if user_type == UserType.FREELANCER:
        return TYPE_FREELANCER
    return TYPE_DEFAULT


def score_industry(
    user_industries: Sequence[str],
    opportunity_industry: Optional[str],
) -> float:
    """Score the user's niche keywords against the opportunity industry (max 40).

    Direct matches are checked across all keywords before any related match,
    so a direct hit always wins regardless of keyword order.  Only ``None``
    takes the unspecified default; an empty string is still matched.
    """
    if opportunity_industry is None:
        return INDUSTRY_UNSPECIFIED

    if any(is_direct_match(kw, opportunity_industry) for kw in user_industries):
        return INDUSTRY_DIRECT
    if any(is_related_match(kw, opportunity_industry) for kw in user_industries):
        return INDUSTRY_RELATED
    return INDUSTRY_NONE


def score_budget(budget_min: Optional[float], budget_max: Optional[float]) -> float:
    """Score budget clarity and range (max 30)."""
    low = _usable_amount(budget_min)
    high = _usable_amount(budget_max)
    if low is None or high is None:
        return BUDGET_DEFAULT

    average = (low + high) / 2
    if BUDGET_MID_RANGE_LOW <= average <= BUDGET_MID_RANGE_HIGH:
        return BUDGET_MID_RANGE
    if average > BUDGET_MID_RANGE_HIGH:
        return BUDGET_HIGH
    return BUDGET_DEFAULT


def compute_score(
    user_type:            Optional[UserType],
    user_industries:      Sequence[str],
    opportunity_type:     Optional[OpportunityType],
    opportunity_industry: Optional[str],
    budget_min:           Optional[float],
    budget_max:           Optional[float],
) -> ScoreComponents:
    """Compute all recommendation score components for one opportunity.

    Args:
        user_type:            Account role, or ``None`` when unknown.
        user_industries:      Niche keywords extracted from the user's bio.
        opportunity_type:     Opportunity category, or ``None`` when absent.
        opportunity_industry: Raw opportunity industry text, or ``None``.
        budget_min:           Lower budget bound, or ``None``.
        budget_max:           Upper budget bound, or ``None``.

    Returns:
        ScoreComponents with all fields populated.
    """
    return ScoreComponents(
        user_type_score=score_user_type(user_type, opportunity_type),
        industry_score=score_industry(user_industries, opportunity_industry),
        budget_score=score_budget(budget_min, budget_max),
    )


def build_reasoning(components: ScoreComponents) -> str:
    """Assemble a human-readable reasoning string from score components.

    Returns a semicolon-separated list such as:
        "Strong role fit; Direct niche match; Mid-range budget"
    """
    reasons: list[str] = []

    if components.user_type_score >= TYPE_FULL_MATCH:
        reasons.append("Strong role fit")
    elif components.user_type_score >= TYPE_FREELANCER:
        reasons.append("Open to freelancers")
    elif components.user_type_score <= TYPE_MISMATCH:
        reasons.append("Different collaboration type")

    if components.industry_score >= INDUSTRY_DIRECT:
        reasons.append("Direct niche match")
    elif components.industry_score >= INDUSTRY_RELATED:
        reasons.append("Related niche")
    elif components.industry_score <= INDUSTRY_NONE:
        reasons.append("Outside your niches")

    if components.budget_score >= BUDGET_MID_RANGE:
        reasons.append("Mid-range budget")
    elif components.budget_score >= BUDGET_HIGH:
        reasons.append("High budget")

    return "; ".join(reasons) or "General fit"


# ── Helpers ───────────────────────────────────────────────────────────────────

def _usable_amount(value: Optional[float]) -> Optional[float]:
    if value is None or not math.isfinite(value) or value < 0:
        return None
    return float(value)


def _clamp(value: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, value))
