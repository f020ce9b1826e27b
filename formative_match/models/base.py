"""
Shared base for models that mirror the marketplace backend's JSON.

The backend speaks camelCase (``budgetMin``, ``createdByName``); Python code
uses snake_case attributes.  ``ApiModel`` wires the alias generator once so
every DTO accepts either spelling and dumps camelCase with
``model_dump(by_alias=True)``.

All API models are frozen: records fetched from the backend are read-only
inputs to scoring and display code.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from formative_match.utils.time_utils import ensure_utc, parse_iso8601


class ApiModel(BaseModel):
    """Frozen pydantic model with camelCase wire aliases."""

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        alias_generator=to_camel,
        extra="ignore",
    )


def coerce_timestamp(value: Any) -> Optional[datetime]:
    """``mode="before"`` helper for optional timestamp fields.

    Blank or unparseable strings become ``None`` (the client shows no date
    rather than rejecting the whole record); datetimes are normalised to UTC.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return ensure_utc(value)
    if isinstance(value, str):
        return parse_iso8601(value)
    return value
