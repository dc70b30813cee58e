"""HTTP client dedicated to querying the remote Kamin search service."""

from __future__ import annotations

import math
import time
from dataclasses import dataclass
from typing import TYPE_CHECKING, List, Protocol

import httpx
from loguru import logger

from kamin_search.services.metrics import metrics
from kamin_search.utils.errors import UpstreamError

if TYPE_CHECKING:
    from loguru import Logger


class SearchClientProtocol(Protocol):
    """Protocol describing the subset of client behaviour used by the controllers."""

    async def search(self, query: str) -> List["SearchResult"]:
        """Execute the search and return results in rank order."""


@dataclass(frozen=True, slots=True)
class SearchResult:
    """A single ranked hit.

    ``where`` is both the link target and the identity of the result.
    """

    where: str
    score: float


class SearchClient:
    """Asynchronous wrapper around ``GET <base>/api/search``.

    The remote service answers with a JSON array of ``{"where", "score"}``
    objects whose order is the ranking.  The client never raises: transport
    failures, non-2xx statuses and malformed payloads are reported to the
    diagnostic sink and degrade into an empty list, so callers render "no
    results" for both a failed call and a query without matches.  There are
    no retries, no timeout and no caching.
    """

    def __init__(
        self,
        base_url: str,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
        diagnostics: "Logger | None" = None,
    ) -> None:
        if not base_url:
            raise ValueError("base_url must be provided for SearchClient")
        self._base_url = base_url.rstrip("/")
        self._transport = transport
        self._log = diagnostics if diagnostics is not None else logger

    @property
    def endpoint(self) -> str:
        return f"{self._base_url}/api/search"

    async def search(self, query: str) -> List[SearchResult]:
        """Fetch ranked results for ``query``; ``[]`` on any failure."""
        started = time.perf_counter()
        try:
            results = await self._fetch(query)
        except UpstreamError as exc:
            metrics.record_search("error", time.perf_counter() - started)
            self._log.bind(query=query, **exc.details).warning(
                "search.failed: {message}", message=exc.message
            )
            return []
        metrics.record_search("ok" if results else "empty", time.perf_counter() - started)
        return results

    async def _fetch(self, query: str) -> List[SearchResult]:
        try:
            async with httpx.AsyncClient(timeout=None, transport=self._transport) as http_client:
                response = await http_client.get(self.endpoint, params={"query": query})
        except httpx.HTTPError as exc:
            raise UpstreamError(f"Failed to query search service: {exc}") from exc
        if response.status_code >= 400:
            raise UpstreamError(
                f"Search service responded with {response.status_code}",
                details={"status_code": response.status_code},
            )
        try:
            payload = response.json()
        except ValueError as exc:
            raise UpstreamError("Search service returned invalid JSON") from exc
        if not isinstance(payload, list):
            raise UpstreamError(
                "Search service returned an unexpected payload",
                details={"payload_type": type(payload).__name__},
            )
        return [result for result in map(_normalise, payload) if result is not None]


def _normalise(item: object) -> SearchResult | None:
    """Convert one payload entry into a :class:`SearchResult` (``None`` to skip)."""
    if not isinstance(item, dict):
        return None
    where = item.get("where")
    if not isinstance(where, str) or not where:
        return None
    score_raw = item.get("score", 0.0)
    try:
        score = float(score_raw) if score_raw is not None else 0.0
    except (TypeError, ValueError, OverflowError):
        score = 0.0
    if math.isnan(score):
        score = 0.0
    return SearchResult(where=where, score=min(max(score, 0.0), 1.0))


__all__ = ["SearchClient", "SearchClientProtocol", "SearchResult"]
