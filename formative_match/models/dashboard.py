"""
Dashboard data models: headline stats, activity feed, and calendar deadlines.

``DashboardStats`` mirrors ``GET /user/stats``; the backend omits or nulls
counters it has no data for, so every counter defaults to zero.

``ActivityItem`` mirrors one row of ``GET /user/activity``.

``CalendarDeadline`` is built client-side from opportunities that carry a
deadline; it is what the "Upcoming" strip renders.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, field_validator

from formative_match.models.base import ApiModel, coerce_timestamp
from formative_match.models.opportunity import Opportunity
from formative_match.taxonomy.marketplace_taxonomy import ActivityType


class DashboardStats(ApiModel):
    """Headline counters for the dashboard stat cards."""

    applications: int = 0
    earnings: float = 0.0
    profile_views: int = 0
    campaigns: int = 0

    @field_validator("applications", "earnings", "profile_views", "campaigns", mode="before")
    @classmethod
    def null_to_zero(cls, v: Any) -> Any:
        return 0 if v is None else v

    @classmethod
    def empty(cls) -> "DashboardStats":
        """Placeholder shown when the stats endpoint is unavailable."""
        return cls()


class ActivityItem(ApiModel):
    """One entry in the dashboard activity feed."""

    id: int
    type: str
    title: str
    message: str = ""
    related_id: Optional[int] = None
    created_at: Optional[datetime] = None

    @field_validator("created_at", mode="before")
    @classmethod
    def parse_created_at(cls, v: Any) -> Optional[datetime]:
        return coerce_timestamp(v)

    @property
    def activity_type(self) -> ActivityType:
        return ActivityType.from_string(self.type)


class CalendarDeadline(BaseModel):
    """An upcoming opportunity deadline for the calendar strip."""

    model_config = ConfigDict(frozen=True)

    opportunity_id: int
    title: str
    company_name: str
    deadline: datetime

    @classmethod
    def from_opportunity(cls, opportunity: Opportunity) -> "CalendarDeadline":
        if opportunity.deadline is None:
            raise ValueError(f"Opportunity {opportunity.id} has no deadline.")
        return cls(
            opportunity_id=opportunity.id,
            title=opportunity.title,
            company_name=opportunity.company_name,
            deadline=opportunity.deadline,
        )
