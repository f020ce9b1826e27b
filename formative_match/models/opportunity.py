"""
Opportunity model: a posted collaboration listing.

Returned by ``GET /opportunities`` as ``{"opportunities": [...]}``.  Only
``id`` and ``title`` are required; every category, budget and date field is
optional because brands fill in listings incrementally.

The recommendation engine reads ``opportunity_type``, ``industry``,
``budget_min`` and ``budget_max``.  Everything else is display data.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

from pydantic import Field, field_validator

from formative_match.models.base import ApiModel, coerce_timestamp
from formative_match.taxonomy.marketplace_taxonomy import OpportunityType


class Opportunity(ApiModel):
    """A collaboration listing posted by a brand.

    Attributes:
        id: Backend primary key.
        title: Listing headline.
        description: Free-text body.
        opportunity_type: Raw category text (wire ``type``), e.g. ``"influencer"``.
        industry: Raw industry text, e.g. ``"Fashion Retail"``.
        budget_range: Display budget text, e.g. ``"$500-$2000"``.
        budget_min: Lower budget bound in USD, if stated.
        budget_max: Upper budget bound in USD, if stated.
        deadline: Application deadline (UTC).
        location: Free-text location.
        is_remote: Whether the work can be done remotely.
        created_by: User id of the posting brand.
        created_by_name: Display name of the posting brand.
        status: Listing status text, e.g. ``"active"``.
        requirements: Bullet-point requirements.
        platforms: Social platforms the brand wants content on.
    """

    id: int
    title: str
    description: str = ""
    opportunity_type: Optional[str] = Field(default=None, alias="type")
    industry: Optional[str] = None
    budget_range: Optional[str] = None
    budget_min: Optional[float] = None
    budget_max: Optional[float] = None
    deadline: Optional[datetime] = None
    location: Optional[str] = None
    is_remote: Optional[bool] = None
    created_by: Optional[int] = None
    created_by_name: Optional[str] = None
    status: Optional[str] = None
    requirements: Optional[list[str]] = None
    platforms: Optional[list[str]] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_validator("deadline", "created_at", "updated_at", mode="before")
    @classmethod
    def parse_timestamps(cls, v: Any) -> Optional[datetime]:
        return coerce_timestamp(v)

    @field_validator("description", mode="before")
    @classmethod
    def none_description_to_empty(cls, v: Any) -> Any:
        return "" if v is None else v

    @property
    def type_category(self) -> Optional[OpportunityType]:
        """Closed category for ``opportunity_type``; ``None`` when absent."""
        return OpportunityType.from_string(self.opportunity_type)

    @property
    def company_name(self) -> str:
        return self.created_by_name or "Unknown"

    @property
    def budget_label(self) -> str:
        """Budget text for cards: explicit range, else built from bounds."""
        if self.budget_range:
            return self.budget_range
        if self.budget_min is not None and self.budget_max is not None:
            return f"${self.budget_min:,.0f}-${self.budget_max:,.0f}"
        if self.budget_min is not None:
            return f"From ${self.budget_min:,.0f}"
        if self.budget_max is not None:
            return f"Up to ${self.budget_max:,.0f}"
        return "Budget TBD"
