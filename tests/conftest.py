"""
Shared pytest fixtures for the formative-match test suite.

Provides:
  - ``make_opportunity``: factory for ``Opportunity`` records built from
    wire-format (camelCase) keyword arguments.
  - Sample profile and opportunity fixtures reused across test modules.
  - ``fixed_now``: a fixed UTC reference time for deadline tests.
  - An autouse guard that restores root logger handlers after tests that
    call ``configure_logging`` (directly or through the CLI).
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Callable

import pytest

from formative_match.models.opportunity import Opportunity
from formative_match.models.user import UserProfile


# ── Logging isolation ─────────────────────────────────────────────────────────

@pytest.fixture(autouse=True)
def _restore_root_logger():
    root = logging.getLogger()
    saved_level, saved_handlers = root.level, list(root.handlers)
    yield
    for handler in root.handlers:
        if handler not in saved_handlers:
            handler.close()
    root.handlers = saved_handlers
    root.setLevel(saved_level)


# ── Factories ─────────────────────────────────────────────────────────────────

@pytest.fixture
def make_opportunity() -> Callable[..., Opportunity]:
    """Return a factory: ``make_opportunity(id=1, type="influencer", ...)``."""

    def _make(id: int = 1, title: str | None = None, **wire: Any) -> Opportunity:
        payload = {"id": id, "title": title or f"Opportunity {id}", **wire}
        return Opportunity.model_validate(payload)

    return _make


# ── Sample domain objects ─────────────────────────────────────────────────────

@pytest.fixture
def fashion_influencer() -> UserProfile:
    """Influencer whose bio yields the single niche ``fashion``."""
    return UserProfile(user_type="influencer", bio="fashion blogger")


@pytest.fixture
def fashion_campaign(make_opportunity) -> Opportunity:
    """Creator-side fashion listing with a mid-range budget."""
    return make_opportunity(
        id=1,
        title="Spring Lookbook",
        type="influencer",
        industry="Fashion",
        budgetMin=1000,
        budgetMax=2000,
        createdByName="Acme Apparel",
    )


@pytest.fixture
def tech_partnership(make_opportunity) -> Opportunity:
    """Brand-side technology listing with no budget."""
    return make_opportunity(
        id=2,
        title="Gadget Launch",
        type="partnership",
        industry="Technology",
        budgetMin=None,
        budgetMax=None,
    )


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2025, 3, 1, 12, 0, 0, tzinfo=timezone.utc)
