"""
Marketplace backend client: async ``httpx`` wrapper for the endpoints the
dashboard depends on.

Endpoints (all ``GET``, relative to ``base_url``):
  /user/profile          → User
  /opportunities         → {"opportunities": [Opportunity, ...]}
  /user/stats            → DashboardStats
  /user/activity         → {"activities": [ActivityItem, ...]}
  /user/social-accounts  → {"accounts": [SocialAccount, ...]}

The client is constructed explicitly and passed to whoever needs it; there
is no module-level shared instance.  Tests inject an ``httpx.AsyncClient``
backed by ``httpx.MockTransport``.

Usage::

    async with MarketplaceClient(config.api.base_url, token=config.api.token) as client:
        opportunities = await client.fetch_opportunities()
"""

from __future__ import annotations

import logging
from typing import Any, Optional

import httpx
from pydantic import ValidationError

from formative_match.models.dashboard import ActivityItem, DashboardStats
from formative_match.models.opportunity import Opportunity
from formative_match.models.social import SocialAccount
from formative_match.models.user import User

logger = logging.getLogger(__name__)


# ── Errors ────────────────────────────────────────────────────────────────────

class MarketplaceAPIError(Exception):
    """A backend request failed.

    Attributes:
        endpoint:    Relative endpoint path, e.g. ``"/opportunities"``.
        status_code: HTTP status, or ``None`` for transport failures.
    """

    def __init__(
        self,
        endpoint: str,
        message: str,
        status_code: Optional[int] = None,
    ) -> None:
        self.endpoint = endpoint
        self.status_code = status_code
        prefix = f"HTTP {status_code}" if status_code is not None else "Request failed"
        super().__init__(f"{prefix} for {endpoint}: {message}")


class MarketplaceDecodeError(MarketplaceAPIError):
    """The backend answered 2xx but the body was not the expected JSON shape."""


# ── Client ────────────────────────────────────────────────────────────────────

class MarketplaceClient:
    """Async client for the marketplace backend.

    Args:
        base_url:        API root, e.g. ``"https://api.example.com/api"``.
        token:           Bearer token for authenticated endpoints.
        timeout_seconds: Per-request timeout.
        http_client:     Pre-built ``httpx.AsyncClient``.  When given, the
                         caller owns it and ``aclose()`` leaves it open.
    """

    def __init__(
        self,
        base_url: str,
        token: Optional[str] = None,
        timeout_seconds: float = 30.0,
        http_client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.timeout_seconds = timeout_seconds
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(timeout=timeout_seconds)

    async def __aenter__(self) -> "MarketplaceClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    # ── Endpoints ─────────────────────────────────────────────────────────────

    async def fetch_profile(self) -> User:
        endpoint = "/user/profile"
        data = await self._get_json(endpoint)
        if isinstance(data, dict) and isinstance(data.get("user"), dict):
            data = data["user"]
        return self._parse(endpoint, User, data)

    async def fetch_opportunities(self) -> list[Opportunity]:
        endpoint = "/opportunities"
        items = self._unwrap_list(endpoint, await self._get_json(endpoint), "opportunities")
        return [self._parse(endpoint, Opportunity, item) for item in items]

    async def fetch_stats(self) -> DashboardStats:
        endpoint = "/user/stats"
        return self._parse(endpoint, DashboardStats, await self._get_json(endpoint))

    async def fetch_activity(self) -> list[ActivityItem]:
        endpoint = "/user/activity"
        items = self._unwrap_list(endpoint, await self._get_json(endpoint), "activities")
        return [self._parse(endpoint, ActivityItem, item) for item in items]

    async def fetch_social_accounts(self) -> list[SocialAccount]:
        endpoint = "/user/social-accounts"
        items = self._unwrap_list(endpoint, await self._get_json(endpoint), "accounts")
        return [self._parse(endpoint, SocialAccount, item) for item in items]

    # ── Transport ─────────────────────────────────────────────────────────────

    def _headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    async def _get_json(self, endpoint: str) -> Any:
        """GET ``endpoint`` and return the decoded JSON body.

        Raises:
            MarketplaceAPIError:    Transport failure, unusable URL or non-2xx status.
            MarketplaceDecodeError: Body is not valid JSON.
        """
        url = f"{self.base_url}{endpoint}"
        try:
            resp = await self._client.get(
                url, headers=self._headers(), timeout=self.timeout_seconds
            )
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise MarketplaceAPIError(endpoint, str(exc)) from exc

        if resp.is_error:
            raise MarketplaceAPIError(
                endpoint, _error_message(resp), status_code=resp.status_code
            )

        try:
            data = resp.json()
        except ValueError as exc:
            raise MarketplaceDecodeError(
                endpoint, f"invalid JSON body: {exc}", status_code=resp.status_code
            ) from exc
        logger.debug("GET %s -> %d", endpoint, resp.status_code)
        return data

    # ── Decoding ──────────────────────────────────────────────────────────────

    @staticmethod
    def _unwrap_list(endpoint: str, data: Any, key: str) -> list[Any]:
        """Accept either a bare JSON array or ``{key: [...]}``."""
        if isinstance(data, list):
            return data
        if isinstance(data, dict) and isinstance(data.get(key), list):
            return data[key]
        raise MarketplaceDecodeError(endpoint, f"expected a list under '{key}'")

    @staticmethod
    def _parse(endpoint: str, model: type, data: Any) -> Any:
        try:
            return model.model_validate(data)
        except ValidationError as exc:
            raise MarketplaceDecodeError(
                endpoint, f"{model.__name__} validation failed: {exc.error_count()} error(s)"
            ) from exc


def _error_message(resp: httpx.Response) -> str:
    """Best-effort error text: the backend's ``message``/``error`` field, else the reason."""
    try:
        body = resp.json()
    except ValueError:
        return resp.reason_phrase or "error"
    if isinstance(body, dict):
        for key in ("message", "error"):
            if isinstance(body.get(key), str):
                return body[key]
    return resp.reason_phrase or "error"
