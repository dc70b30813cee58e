"""State controller behind the paginated search results view.

The controller owns the query, the loaded result list, the fetch lifecycle
and the current page, and keeps the page mirrored in the address bar.  It is
driven in three steps by its host::

    controller = ResultsPageController(client, on_effect=sink)
    if controller.mount(address):
        await controller.load()
    view = controller.render()

Pagination afterwards is purely local: :meth:`ResultsPageController.set_page`
slices the already loaded results and never triggers another fetch.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, Sequence

from loguru import logger

from kamin_search.controllers.address import (
    FIRST_PAGE,
    LANDING_PATH,
    read_page,
    read_query,
    with_page,
)
from kamin_search.controllers.effects import EffectSink, Navigate, ScrollToTop, UpdateAddress
from kamin_search.services.metrics import metrics
from kamin_search.services.search import SearchClientProtocol, SearchResult
from kamin_search.utils.formatting import format_score, format_url

PAGE_SIZE = 10
# A results list shorter than one page would clamp to page 0; the first page is
# used instead so that ``page_number >= 1`` always holds.
EMPTY_RESULTS_PAGE = FIRST_PAGE


class LoadPhase(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    LOADED = "loaded"
    ERROR = "error"


@dataclass(frozen=True)
class ResultItem:
    """A result prepared for display."""

    title: str
    where: str
    score: float
    score_label: str


@dataclass(frozen=True)
class ResultsView:
    query: str
    page: int
    page_size: int
    total_pages: int
    total_results: int
    loading: bool
    items: List[ResultItem]

    @property
    def empty(self) -> bool:
        return not self.loading and not self.items


def clamp_page(page: int, total: int, page_size: int = PAGE_SIZE) -> int:
    """Return ``page`` or, when its slice would start past ``total``, the last full page."""
    if (page - 1) * page_size < total:
        return page
    return max(total // page_size, EMPTY_RESULTS_PAGE)


def page_slice(results: Sequence[SearchResult], page: int, page_size: int = PAGE_SIZE) -> List[SearchResult]:
    return list(results[(page - 1) * page_size : page * page_size])


def total_pages(total: int, page_size: int = PAGE_SIZE) -> int:
    """Page count shown by the pagination control.

    Floors instead of rounding up, so a partially filled last page is reachable
    through the address but not offered by the control (23 results → 2).
    """
    return total // page_size


class ResultsPageController:
    """Keep query, results, loading state, page and address consistent."""

    page_size = PAGE_SIZE

    def __init__(self, client: SearchClientProtocol, *, on_effect: EffectSink) -> None:
        self._client = client
        self._emit = on_effect
        self._address: str | None = None
        self._query: str | None = None
        self._page = FIRST_PAGE
        self._results: List[SearchResult] = []
        self._phase = LoadPhase.IDLE
        self._generation = 0
        self._disposed = False

    @property
    def query(self) -> str | None:
        return self._query

    @property
    def page(self) -> int:
        return self._page

    @property
    def address(self) -> str | None:
        return self._address

    @property
    def phase(self) -> LoadPhase:
        return self._phase

    @property
    def loading(self) -> bool:
        return self._phase is LoadPhase.LOADING

    @property
    def errored(self) -> bool:
        return self._phase is LoadPhase.ERROR

    @property
    def mounted(self) -> bool:
        return self._query is not None and not self._disposed

    @property
    def results(self) -> List[SearchResult]:
        return list(self._results)

    @property
    def total_pages(self) -> int:
        return total_pages(len(self._results), self.page_size)

    def mount(self, address: str) -> bool:
        """Read ``q`` and ``page`` from ``address``.

        Without a query the view cannot be shown: a navigation back to the
        landing view is emitted and ``False`` returned.  A query different
        from the current one resets the view and starts a new fetch
        generation, which makes any response still in flight stale.
        """
        query = read_query(address)
        if query is None:
            logger.bind(address=address).info("results.missing_query")
            self._emit(Navigate(LANDING_PATH))
            return False
        self._address = address
        self._page = read_page(address)
        if query != self._query:
            self._query = query
            self._generation += 1
            self._results = []
            self._phase = LoadPhase.IDLE
        return True

    async def load(self) -> None:
        """Fetch results for the current query and clamp the page against them."""
        if not self.mounted:
            return
        query = self._query
        assert query is not None
        generation = self._generation
        self._phase = LoadPhase.LOADING
        try:
            results = await self._client.search(query)
        except Exception:
            if not self._is_current(query, generation):
                logger.bind(query=query).opt(exception=True).debug("results.stale_failure")
                return
            logger.bind(query=query).exception("results.search_failed")
            self._results = []
            self._phase = LoadPhase.ERROR
        else:
            if not self._is_current(query, generation):
                logger.bind(query=query, current=self._query).debug("results.stale_response")
                return
            self._results = list(results)
            self._phase = LoadPhase.LOADED
        self.clamp()

    def clamp(self) -> int:
        """Bring the page back inside the loaded results and mirror it in the address.

        Only a settled fetch (loaded or failed) is clamped against: before
        :meth:`load` and while it is in flight the known results belong to no
        query yet, and the requested page is kept as is.
        """
        if self._phase not in (LoadPhase.LOADED, LoadPhase.ERROR) or not self.mounted:
            return self._page
        clamped = clamp_page(self._page, len(self._results), self.page_size)
        if clamped != self._page:
            logger.bind(query=self._query, requested=self._page, page=clamped).info(
                "results.page_clamped"
            )
            metrics.record_page_clamp()
            self._page = clamped
            self._write_address(replace=True)
        return self._page

    def set_page(self, page: int) -> None:
        """Show ``page`` of the loaded results without fetching again."""
        if page < FIRST_PAGE:
            raise ValueError("page must be a positive integer")
        if not self.mounted:
            return
        self._page = page
        self._write_address(replace=False)
        self._emit(ScrollToTop())

    def render(self) -> ResultsView:
        """Return the visible slice; no items are shown while loading."""
        self.clamp()
        items: List[ResultItem] = []
        if not self.loading:
            items = [
                ResultItem(
                    title=format_url(result.where),
                    where=result.where,
                    score=result.score,
                    score_label=format_score(result.score),
                )
                for result in page_slice(self._results, self._page, self.page_size)
            ]
        return ResultsView(
            query=self._query or "",
            page=self._page,
            page_size=self.page_size,
            total_pages=self.total_pages,
            total_results=len(self._results),
            loading=self.loading,
            items=items,
        )

    def dispose(self) -> None:
        """Stop applying search responses; the view is going away."""
        self._disposed = True

    def _is_current(self, query: str, generation: int) -> bool:
        return not self._disposed and generation == self._generation and query == self._query

    def _write_address(self, *, replace: bool) -> None:
        assert self._address is not None
        self._address = with_page(self._address, self._page)
        self._emit(UpdateAddress(self._address, replace=replace))


__all__ = [
    "EMPTY_RESULTS_PAGE",
    "PAGE_SIZE",
    "LoadPhase",
    "ResultItem",
    "ResultsPageController",
    "ResultsView",
    "clamp_page",
    "page_slice",
    "total_pages",
]
