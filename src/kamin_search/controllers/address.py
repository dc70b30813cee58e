"""Reading and writing the address-bar representation of a search view."""

from __future__ import annotations

from starlette.datastructures import URL, QueryParams

LANDING_PATH = "/"
RESULTS_PATH = "/search"
QUERY_PARAM = "q"
PAGE_PARAM = "page"
FIRST_PAGE = 1


def read_query(address: str) -> str | None:
    """Return the ``q`` parameter of ``address`` or ``None`` when missing or blank."""
    value = QueryParams(URL(address).query).get(QUERY_PARAM)
    if value is None or not value.strip():
        return None
    return value


def read_page(address: str) -> int:
    """Return the ``page`` parameter as a positive integer, defaulting to 1."""
    raw = QueryParams(URL(address).query).get(PAGE_PARAM)
    if raw is None:
        return FIRST_PAGE
    raw = raw.strip()
    if not (raw.isascii() and raw.isdigit()):
        return FIRST_PAGE
    page = int(raw)
    return page if page >= FIRST_PAGE else FIRST_PAGE


def with_page(address: str, page: int) -> str:
    """Return ``address`` with its ``page`` parameter set to ``page``.

    The first page is canonical without the parameter so shared links to it
    stay identical to the plain search address.
    """
    url = URL(address)
    if page == FIRST_PAGE:
        url = url.remove_query_params(PAGE_PARAM)
    else:
        url = url.include_query_params(**{PAGE_PARAM: page})
    return str(url)


def results_address(query: str) -> str:
    """Return the results view address for ``query``."""
    return str(URL(RESULTS_PATH).include_query_params(**{QUERY_PARAM: query}))


__all__ = [
    "FIRST_PAGE",
    "LANDING_PATH",
    "PAGE_PARAM",
    "QUERY_PARAM",
    "RESULTS_PATH",
    "read_page",
    "read_query",
    "results_address",
    "with_page",
]
