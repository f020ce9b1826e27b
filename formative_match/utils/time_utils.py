"""
Time and date helpers for opportunity deadlines.

Key concepts:
  - Backend timestamps are ISO-8601 strings, usually UTC with a ``Z``
    suffix and optional fractional seconds (``2025-01-15T00:00:00.000Z``).
  - Deadline labels are the short countdown strings shown on opportunity
    cards: ``Ended``, ``Today``, ``1 day``, ``N days``, ``Nw left``.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional


def utcnow() -> datetime:
    """Return the current UTC datetime with timezone info.

    Prefer this over ``datetime.utcnow()`` (which returns naive datetimes).
    """
    return datetime.now(tz=timezone.utc)


def parse_iso8601(value: Optional[str]) -> Optional[datetime]:
    """Parse an ISO-8601 timestamp into an aware UTC datetime.

    Naive timestamps are assumed to be UTC.

    Args:
        value: Timestamp string, or ``None``.

    Returns:
        Aware ``datetime`` in UTC, or ``None`` if ``value`` is empty or
        cannot be parsed.
    """
    if not value or not value.strip():
        return None
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    return ensure_utc(parsed)


def ensure_utc(value: datetime) -> datetime:
    """Attach UTC to naive datetimes; convert aware ones to UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def days_until(deadline: datetime, now: Optional[datetime] = None) -> int:
    """Return whole days from ``now`` to ``deadline``, truncated toward zero.

    Positive: deadline is in the future.
    Zero: less than 24 hours either side.
    Negative: deadline passed at least a full day ago.
    """
    now = ensure_utc(now or utcnow())
    seconds = (ensure_utc(deadline) - now).total_seconds()
    return int(seconds / 86400)


def format_deadline_label(
    deadline: Optional[datetime],
    now: Optional[datetime] = None,
) -> str:
    """Return the countdown label for an opportunity card.

    Args:
        deadline: Deadline timestamp, or ``None``.
        now:      Reference time (defaults to ``utcnow()``).

    Returns:
        ``""`` when there is no deadline, ``"Ended"`` once it has passed,
        otherwise ``"Today"``, ``"1 day"``, ``"N days"`` (under a week) or
        ``"Nw left"``.
    """
    if deadline is None:
        return ""
    now = ensure_utc(now or utcnow())
    if ensure_utc(deadline) < now:
        return "Ended"
    days = days_until(deadline, now)
    if days == 0:
        return "Today"
    if days == 1:
        return "1 day"
    if days < 7:
        return f"{days} days"
    return f"{days // 7}w left"
