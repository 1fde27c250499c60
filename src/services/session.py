"""
Shared plumbing for the domain adapters.

A ``DashboardSession`` bundles the collaborators every adapter needs: the
identity accessor, the transport, the result cache, the endpoint map and a
clock. Adapters describe themselves as a ``DomainQuery`` (which endpoint,
which action, how to turn rows into entities) and let the session run them.
"""

import logging
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from core.auth import UserAccessor, require_user_email
from core.cache import ResultCache, cache_key
from core.config import API_BASES
from core.errors import ErrorCodes, ShapeMismatch
from core.result import Result
from core.transport import Transport
from models.entities import RawRow

logger = logging.getLogger(__name__)

RowTransform = Callable[[list[RawRow], str, datetime], Any]


def cell_text(value) -> str:
    """Trimmed text of a loosely-typed cell; blank for None."""
    return "" if value is None else str(value).strip()


@dataclass(frozen=True)
class DomainQuery:
    """
    One cached, user-scoped read.

    ``domain`` names both the endpoint (key into the endpoint map) and the
    cache namespace. With ``method="POST"`` the action and user email travel
    as a form body instead of the query string.
    """

    domain: str
    action: str
    transform: RowTransform
    method: str = "GET"


class DashboardSession:
    """Per-process context shared by all adapters."""

    def __init__(
        self,
        user: UserAccessor,
        transport: Transport | None = None,
        cache: ResultCache | None = None,
        endpoints: Mapping[str, str] | None = None,
        now: Callable[[], datetime] = datetime.now,
    ):
        self.user = user
        self.transport = transport or Transport()
        self.cache = cache or ResultCache()
        self.endpoints = dict(API_BASES if endpoints is None else endpoints)
        self.now = now

    def current_email(self) -> str:
        """Normalized email of the signed-in user; raises AuthRequiredError."""
        return require_user_email(self.user)

    def endpoint(self, domain: str) -> str:
        try:
            return self.endpoints[domain]
        except KeyError:
            raise ValueError(f"No endpoint configured for '{domain}'")

    async def call(
        self,
        domain: str,
        *,
        method: str = "GET",
        params: Mapping[str, str] | None = None,
        form: Mapping[str, str] | None = None,
    ) -> Result:
        """Uncached transport call against a domain endpoint."""
        return await self.transport.send(
            self.endpoint(domain), method=method, params=params, data=form
        )

    async def cached(
        self, domain: str, email: str, compute: Callable[[], Awaitable[Result]]
    ) -> Result:
        return await self.cache.get_or_compute(cache_key(domain, email), compute)

    def invalidate(self, domain: str, email: str) -> None:
        self.cache.invalidate(cache_key(domain, email))

    async def run_query(self, query: DomainQuery) -> Result:
        """Resolve identity, then fetch, validate and transform through the cache."""
        email = self.current_email()
        return await self.cached(query.domain, email, lambda: self._execute(query, email))

    async def _execute(self, query: DomainQuery, email: str) -> Result:
        fields = {"action": query.action, "user_email": email}
        if query.method == "POST":
            res = await self.call(query.domain, method="POST", form=fields)
        else:
            res = await self.call(query.domain, method=query.method, params=fields)

        if not res.ok:
            return res

        rows = res.data if res.data is not None else []
        if not isinstance(rows, list) or not all(isinstance(r, dict) for r in rows):
            logger.warning(f"{query.domain}/{query.action}: expected a list of rows")
            return Result.failure(ErrorCodes.INVALID_RESPONSE)

        try:
            data = query.transform(rows, email, self.now())
        except ShapeMismatch as e:
            logger.warning(f"{query.domain}/{query.action}: {e}")
            return Result.failure(ErrorCodes.SHAPE_MISMATCH)

        return Result.success(data)
