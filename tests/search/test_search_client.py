"""Unit tests covering the remote search HTTP client."""

from __future__ import annotations

import json
from typing import List

import httpx
import pytest
from loguru import logger

from kamin_search.services.metrics import metrics
from kamin_search.services.search import SearchClient, SearchResult


def _client(handler) -> SearchClient:
    return SearchClient("http://search.test:8080/", transport=httpx.MockTransport(handler))


@pytest.mark.anyio
async def test_search_returns_results_in_rank_order() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.method == "GET"
        assert request.url.host == "search.test"
        assert request.url.port == 8080
        assert request.url.path == "/api/search"
        assert request.url.params["query"] == "rust & c++"
        return httpx.Response(
            200,
            json=[
                {"where": "https://docs.test/b.html", "score": 0.9},
                {"where": "https://docs.test/a.html", "score": 0.95},
                {"where": "https://docs.test/c.html", "score": 0.1},
            ],
        )

    results = await _client(handler).search("rust & c++")

    assert [result.where for result in results] == [
        "https://docs.test/b.html",
        "https://docs.test/a.html",
        "https://docs.test/c.html",
    ]
    assert results[1] == SearchResult(where="https://docs.test/a.html", score=0.95)


@pytest.mark.anyio
async def test_search_normalises_malformed_entries() -> None:
    def handler(_: httpx.Request) -> httpx.Response:
        return httpx.Response(
            200,
            json=[
                {"where": "https://docs.test/a.html", "score": None},
                {"score": 0.5},
                "not-an-object",
                {"where": "https://docs.test/b.html", "score": "high"},
                {"where": "https://docs.test/c.html", "score": 3},
            ],
        )

    results = await _client(handler).search("docs")

    assert [(result.where, result.score) for result in results] == [
        ("https://docs.test/a.html", 0.0),
        ("https://docs.test/b.html", 0.0),
        ("https://docs.test/c.html", 1.0),
    ]


@pytest.mark.anyio
async def test_search_treats_overflowing_score_as_zero() -> None:
    huge = int("9" * 400)

    def handler(_: httpx.Request) -> httpx.Response:
        return httpx.Response(
            200,
            content=json.dumps([{"where": "https://docs.test/One.html", "score": huge}]).encode(),
            headers={"content-type": "application/json"},
        )

    results = await _client(handler).search("docs")

    assert results == [SearchResult(where="https://docs.test/One.html", score=0.0)]


@pytest.mark.anyio
async def test_server_error_degrades_to_empty_list_and_logs() -> None:
    events: List[str] = []
    sink_id = logger.add(events.append, serialize=True, level="WARNING")
    metrics.reset()

    def handler(_: httpx.Request) -> httpx.Response:
        return httpx.Response(503, text="maintenance")

    try:
        results = await _client(handler).search("docs")
    finally:
        logger.remove(sink_id)

    assert results == []
    record = json.loads(events[-1])["record"]
    assert record["message"].startswith("search.failed")
    assert record["extra"]["status_code"] == 503
    assert record["extra"]["query"] == "docs"
    assert 'search_requests_total{outcome="error"} 1.0' in metrics.render().decode()


@pytest.mark.anyio
async def test_transport_error_degrades_to_empty_list() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    assert await _client(handler).search("docs") == []


@pytest.mark.anyio
@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(200, text="<html>oops</html>"),
        httpx.Response(200, json={"results": []}),
    ],
)
async def test_unexpected_payload_degrades_to_empty_list(response: httpx.Response) -> None:
    assert await _client(lambda _: response).search("docs") == []


@pytest.mark.anyio
async def test_injected_diagnostics_sink_receives_failures() -> None:
    events: List[str] = []
    diagnostics = logger.bind(component="search")
    sink_id = logger.add(events.append, serialize=True, level="WARNING")

    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadError("reset", request=request)

    client = SearchClient(
        "http://search.test", transport=httpx.MockTransport(handler), diagnostics=diagnostics
    )
    try:
        assert await client.search("docs") == []
    finally:
        logger.remove(sink_id)

    assert json.loads(events[-1])["record"]["extra"]["component"] == "search"


@pytest.mark.anyio
async def test_empty_result_counted_separately() -> None:
    metrics.reset()
    await _client(lambda _: httpx.Response(200, json=[])).search("nothing")
    assert 'search_requests_total{outcome="empty"} 1.0' in metrics.render().decode()


def test_base_url_is_required() -> None:
    with pytest.raises(ValueError):
        SearchClient("")
