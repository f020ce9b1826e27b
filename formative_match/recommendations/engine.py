"""
Recommendation engine: ranks opportunities for one user.

Usage flow
----------
1. engine = RecommendationEngine(profile)
   -> derives the user's niche keywords from the bio once.

2. engine.score(opportunity)
   -> float in [0, 100]

3. engine.recommend(opportunities, limit=6)
   -> list[ScoredOpportunity], best first, at most ``limit`` long.

The engine holds no mutable state after construction, performs no I/O and
never raises for a well-formed ``Opportunity``; it is safe to share across
concurrent callers.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Optional

from formative_match.models.opportunity import Opportunity
from formative_match.models.user import UserProfile
from formative_match.recommendations.scorer import (
    ScoreComponents,
    build_reasoning,
    compute_score,
)
from formative_match.taxonomy.industry_taxonomy import extract_industries
from formative_match.taxonomy.marketplace_taxonomy import UserType

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 6


@dataclass(frozen=True)
class ScoredOpportunity:
    """An opportunity paired with its recommendation score.

    Attributes:
        opportunity: The source Opportunity (same object, not a copy).
        score:       Clamped total score in [0, 100].
        components:  Per-factor breakdown.
    """

    opportunity: Opportunity
    score:       float
    components:  ScoreComponents

    @property
    def reasoning(self) -> str:
        return build_reasoning(self.components)


class RecommendationEngine:
    """Scores and ranks opportunities against a user profile snapshot.

    Attributes:
        user_type:  Closed role category, or ``None`` when the profile has none.
        industries: Niche keywords found in the bio, in vocabulary order.
    """

    def __init__(self, profile: UserProfile) -> None:
        self.user_type: Optional[UserType] = profile.user_type_category
        self.industries: tuple[str, ...] = extract_industries(profile.bio)

    def score_components(self, opportunity: Opportunity) -> ScoreComponents:
        return compute_score(
            user_type=self.user_type,
            user_industries=self.industries,
            opportunity_type=opportunity.type_category,
            opportunity_industry=opportunity.industry,
            budget_min=opportunity.budget_min,
            budget_max=opportunity.budget_max,
        )

    def score(self, opportunity: Opportunity) -> float:
        """Return the relevance score of ``opportunity`` in [0, 100]."""
        return self.score_components(opportunity).total

    def recommend(
        self,
        opportunities: Iterable[Opportunity],
        limit: int = DEFAULT_LIMIT,
    ) -> list[ScoredOpportunity]:
        """Score every opportunity and return the best ``limit`` of them.

        Sorting is stable: opportunities with equal scores keep their input
        order.

        Args:
            opportunities: Candidates, in the order the backend returned them.
            limit:         Maximum number of results; ``<= 0`` gives ``[]``.

        Returns:
            ScoredOpportunity list sorted by score descending.
        """
        scored = []
        for opportunity in opportunities:
            components = self.score_components(opportunity)
            scored.append(
                ScoredOpportunity(
                    opportunity=opportunity,
                    score=components.total,
                    components=components,
                )
            )

        ranked = sorted(scored, key=lambda s: s.score, reverse=True)
        result = ranked[: max(limit, 0)]
        logger.debug(
            "Ranked %d opportunities for user_type=%s industries=%s; returning %d",
            len(scored), self.user_type, ",".join(self.industries) or "-", len(result),
        )
        return result
