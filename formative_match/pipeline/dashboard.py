"""
Dashboard loading workflow: fetch everything the home screen needs, then
rank opportunities for the current user.

Load flow
---------
1. Fetch profile (unless supplied), opportunities, stats, activity and
   linked social accounts concurrently on one ``MarketplaceClient``.
2. A failed fetch never aborts the load: each has its own fallback
   (stats → zeros, lists → empty, profile → empty snapshot) and the failure
   is logged and recorded in ``DashboardSnapshot.errors``.
3. Once every fetch has completed, build a ``RecommendationEngine`` from the
   profile and rank the opportunity list (carousel, default 6).
4. Apply the dashboard's own list policies:
     recent_opportunities → first N as returned by the backend (default 3)
     upcoming_deadlines   → future deadlines, soonest first (default 5)
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Awaitable, Optional, TypeVar

from formative_match.api.client import MarketplaceAPIError, MarketplaceClient
from formative_match.config import RecommendationsConfig
from formative_match.models.dashboard import ActivityItem, CalendarDeadline, DashboardStats
from formative_match.models.opportunity import Opportunity
from formative_match.models.social import SocialAccount
from formative_match.models.user import UserProfile
from formative_match.recommendations.engine import RecommendationEngine, ScoredOpportunity
from formative_match.utils.time_utils import ensure_utc, utcnow

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class DashboardSnapshot:
    """Everything the dashboard renders after one load.

    Attributes:
        profile:              Snapshot used for ranking.
        stats:                Headline counters (zeros if unavailable).
        activity:             Activity feed rows.
        social_accounts:      Linked social accounts.
        opportunities:        Full fetched opportunity list, backend order.
        recommendations:      Ranked carousel entries.
        recent_opportunities: First few opportunities, backend order.
        upcoming_deadlines:   Future deadlines, soonest first.
        errors:               One message per failed fetch.
        loaded_at:            UTC time the load finished.
    """

    profile:              UserProfile
    stats:                DashboardStats
    activity:             list[ActivityItem] = field(default_factory=list)
    social_accounts:      list[SocialAccount] = field(default_factory=list)
    opportunities:        list[Opportunity] = field(default_factory=list)
    recommendations:      list[ScoredOpportunity] = field(default_factory=list)
    recent_opportunities: list[Opportunity] = field(default_factory=list)
    upcoming_deadlines:   list[CalendarDeadline] = field(default_factory=list)
    errors:               list[str] = field(default_factory=list)
    loaded_at:            Optional[datetime] = None

    @property
    def is_partial(self) -> bool:
        """True when at least one fetch fell back to its placeholder."""
        return bool(self.errors)


class DashboardLoader:
    """Loads a ``DashboardSnapshot`` through an injected ``MarketplaceClient``."""

    def __init__(
        self,
        client: MarketplaceClient,
        config: Optional[RecommendationsConfig] = None,
    ) -> None:
        self.client = client
        self.config = config or RecommendationsConfig()

    async def load(
        self,
        profile: Optional[UserProfile] = None,
        now: Optional[datetime] = None,
    ) -> DashboardSnapshot:
        """Fetch dashboard data concurrently and rank opportunities.

        Args:
            profile: Cached profile snapshot; fetched from the API when ``None``.
            now:     Reference time for deadline filtering (default: now, UTC).

        Returns:
            DashboardSnapshot; never raises for backend failures.
        """
        errors: list[str] = []

        profile_source = (
            self._profile_from_api(errors) if profile is None else _ready(profile)
        )
        resolved_profile, opportunities, stats, activity, accounts = await asyncio.gather(
            profile_source,
            self._guarded("opportunities", self.client.fetch_opportunities(), [], errors),
            self._guarded("stats", self.client.fetch_stats(), DashboardStats.empty(), errors),
            self._guarded("activity", self.client.fetch_activity(), [], errors),
            self._guarded("social accounts", self.client.fetch_social_accounts(), [], errors),
        )

        engine = RecommendationEngine(resolved_profile)
        recommendations = engine.recommend(opportunities, self.config.carousel_limit)

        now = ensure_utc(now or utcnow())
        snapshot = DashboardSnapshot(
            profile=resolved_profile,
            stats=stats,
            activity=activity,
            social_accounts=accounts,
            opportunities=opportunities,
            recommendations=recommendations,
            recent_opportunities=opportunities[: self.config.recent_limit],
            upcoming_deadlines=upcoming_deadlines(
                opportunities, now, self.config.deadline_limit
            ),
            errors=errors,
            loaded_at=utcnow(),
        )
        logger.info(
            "Dashboard loaded: opportunities=%d recommended=%d deadlines=%d errors=%d",
            len(opportunities), len(recommendations),
            len(snapshot.upcoming_deadlines), len(errors),
        )
        return snapshot

    async def _profile_from_api(self, errors: list[str]) -> UserProfile:
        user = await self._guarded("profile", self.client.fetch_profile(), None, errors)
        return user.profile_snapshot() if user is not None else UserProfile()

    @staticmethod
    async def _guarded(
        label: str,
        call: Awaitable[T],
        fallback: T,
        errors: list[str],
    ) -> T:
        try:
            return await call
        except MarketplaceAPIError as exc:
            logger.warning("Dashboard %s fetch failed: %s", label, exc)
            errors.append(f"{label}: {exc}")
            return fallback


def upcoming_deadlines(
    opportunities: list[Opportunity],
    now: datetime,
    limit: int,
) -> list[CalendarDeadline]:
    """Return the ``limit`` soonest deadlines that have not yet passed.

    Opportunities without a deadline are skipped.  Equal deadlines keep
    backend order.
    """
    pending = [
        opp for opp in opportunities
        if opp.deadline is not None and opp.deadline >= now
    ]
    pending.sort(key=lambda opp: opp.deadline)
    return [CalendarDeadline.from_opportunity(opp) for opp in pending[: max(limit, 0)]]


async def _ready(value: T) -> T:
    return value
