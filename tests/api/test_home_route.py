"""Integration tests for the landing view search box endpoints."""

from __future__ import annotations

from conftest import StubSearchClient


def test_blank_submission_returns_notification(client) -> None:
    response = client.post("/api/v1/home/submit", json={"text": "   "})

    assert response.status_code == 200
    payload = response.json()
    assert payload["accepted"] is False
    assert payload["effects"] == []
    notification = payload["notification"]
    assert notification["visible"] is True
    assert notification["phase"] == "entering"
    assert notification["message"] == "Please enter a search term."
    assert notification["auto_hide_after"] == 5.0
    assert notification["anchor"] == "bottom-right"


def test_submission_navigates_to_results(client) -> None:
    payload = client.post("/api/v1/home/submit", json={"text": "hello world"}).json()

    assert payload["accepted"] is True
    assert payload["effects"] == [
        {"type": "navigate", "target": "/search?q=hello+world", "external": False}
    ]
    assert payload["notification"]["visible"] is False


def test_submission_of_displayed_query_is_ignored(client) -> None:
    payload = client.post(
        "/api/v1/home/submit", json={"text": "hello", "current_query": "hello"}
    ).json()

    assert payload["accepted"] is True
    assert payload["effects"] == []


def test_feeling_lucky_returns_top_result(client, stub_client) -> None:
    payload = client.post("/api/v1/home/lucky", json={"text": "guide"}).json()

    top = stub_client.results[0].where
    assert payload["target"] == top
    assert payload["effects"] == [{"type": "navigate", "target": top, "external": True}]


def test_feeling_lucky_without_results(client, test_app) -> None:
    test_app.state.search_client = StubSearchClient([])

    payload = client.post("/api/v1/home/lucky", json={"text": "guide"}).json()

    assert payload == {"target": None, "effects": []}


def test_submit_rejects_invalid_body(client) -> None:
    response = client.post("/api/v1/home/submit", json={"text": 42})

    assert response.status_code == 422
    assert response.json()["error"]["code"] == "validation_error"
