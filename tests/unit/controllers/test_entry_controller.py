"""Tests for the landing view search box controller."""

from __future__ import annotations

import httpx
import pytest

from conftest import StubSearchClient, make_results
from kamin_search.controllers.address import read_query
from kamin_search.controllers.effects import EffectRecorder, Navigate
from kamin_search.controllers.entry import EMPTY_QUERY_MESSAGE, SearchEntryController
from kamin_search.controllers.notification import NotificationController, TransitionPhase
from kamin_search.services.search import SearchClient


def _entry(client, scheduler, current_query: str | None = None):
    recorder = EffectRecorder()
    notifications = NotificationController(scheduler=scheduler)
    controller = SearchEntryController(
        client, notifications, on_effect=recorder, current_query=current_query
    )
    return controller, notifications, recorder


@pytest.mark.parametrize("text", ["", "   ", "\t\n"])
def test_blank_submission_raises_notification(text: str, scheduler) -> None:
    controller, notifications, recorder = _entry(StubSearchClient(), scheduler)

    assert controller.submit(text) is False

    assert recorder.effects == []
    assert notifications.visible
    assert notifications.phase is TransitionPhase.ENTERING
    assert notifications.message == EMPTY_QUERY_MESSAGE


def test_submission_navigates_to_results(scheduler) -> None:
    controller, notifications, recorder = _entry(StubSearchClient(), scheduler)

    assert controller.submit("rust & c++") is True

    (navigation,) = recorder.navigations()
    assert navigation.target.startswith("/search?")
    assert not navigation.external
    assert read_query(navigation.target) == "rust & c++"
    assert not notifications.visible


def test_resubmitting_displayed_query_does_not_navigate(scheduler) -> None:
    controller, _, recorder = _entry(StubSearchClient(), scheduler, current_query="hello")

    assert controller.submit("hello") is True
    assert recorder.effects == []

    controller.submit("hello there")
    assert recorder.effects == [Navigate("/search?q=hello+there")]


@pytest.mark.anyio
async def test_feeling_lucky_opens_top_result(scheduler) -> None:
    results = make_results(4)
    client = StubSearchClient(results)
    controller, _, recorder = _entry(client, scheduler)

    target = await controller.feeling_lucky("guide")

    assert target == results[0].where
    assert recorder.effects == [Navigate(results[0].where, external=True)]
    assert client.calls == ["guide"]


@pytest.mark.anyio
async def test_feeling_lucky_without_results_is_silent(scheduler) -> None:
    controller, notifications, recorder = _entry(StubSearchClient([]), scheduler)

    assert await controller.feeling_lucky("nothing") is None
    assert recorder.effects == []
    assert not notifications.visible


@pytest.mark.anyio
async def test_feeling_lucky_ignores_blank_text(scheduler) -> None:
    client = StubSearchClient(make_results(2))
    controller, _, recorder = _entry(client, scheduler)

    assert await controller.feeling_lucky("  ") is None
    assert client.calls == []
    assert recorder.effects == []


@pytest.mark.anyio
async def test_feeling_lucky_treats_backend_failure_as_no_match(scheduler) -> None:
    def handler(_: httpx.Request) -> httpx.Response:
        return httpx.Response(503, text="maintenance")

    client = SearchClient("http://search.test", transport=httpx.MockTransport(handler))
    controller, notifications, recorder = _entry(client, scheduler)

    assert await controller.feeling_lucky("guide") is None
    assert recorder.effects == []
    assert not notifications.visible
