"""Test fixtures for kamin_search."""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Callable, List

import pytest
from fastapi.testclient import TestClient

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
sys.path.insert(0, str(SRC))

os.environ.setdefault("API_HOST", "http://search.test")
os.environ.setdefault("LOG_LEVEL", "DEBUG")

from kamin_search.app import create_app  # noqa: E402
from kamin_search.config import Settings  # noqa: E402
from kamin_search.services.metrics import metrics  # noqa: E402
from kamin_search.services.search import SearchResult  # noqa: E402


def make_results(count: int) -> List[SearchResult]:
    """Return ``count`` ranked results with strictly decreasing scores."""
    return [
        SearchResult(where=f"https://docs.test/guide/Chapter{index}.html", score=1 - index / 100)
        for index in range(count)
    ]


class StubSearchClient:
    """Deterministic search client recording the queries it receives."""

    def __init__(self, results: List[SearchResult] | None = None) -> None:
        self.results = list(results or [])
        self.calls: list[str] = []

    async def search(self, query: str) -> List[SearchResult]:
        self.calls.append(query)
        return list(self.results)


class ManualTimer:
    def __init__(self, when: float, callback: Callable[[], None]) -> None:
        self.when = when
        self.callback = callback
        self.cancelled = False
        self.fired = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler:
    """Timer source driven by :meth:`advance` instead of wall-clock time."""

    def __init__(self) -> None:
        self.now = 0.0
        self.timers: list[ManualTimer] = []

    def call_later(self, delay: float, callback: Callable[[], None]) -> ManualTimer:
        timer = ManualTimer(self.now + delay, callback)
        self.timers.append(timer)
        return timer

    @property
    def pending(self) -> list[ManualTimer]:
        return [timer for timer in self.timers if not (timer.cancelled or timer.fired)]

    def advance(self, seconds: float) -> None:
        """Move the clock forward, firing due timers in chronological order."""
        target = self.now + seconds
        while True:
            due = [timer for timer in self.pending if timer.when <= target]
            if not due:
                break
            timer = min(due, key=lambda item: item.when)
            self.now = timer.when
            timer.fired = True
            timer.callback()
        self.now = target


@pytest.fixture()
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture()
def scheduler() -> ManualScheduler:
    return ManualScheduler()


@pytest.fixture()
def stub_client() -> StubSearchClient:
    return StubSearchClient(make_results(23))


@pytest.fixture()
def test_settings() -> Settings:
    return Settings(api_host="http://search.test", api_port=8080, _env_file=None)  # type: ignore[call-arg]


@pytest.fixture()
def test_app(test_settings: Settings, stub_client: StubSearchClient):
    metrics.reset()
    return create_app(test_settings, search_client=stub_client)


@pytest.fixture()
def client(test_app):
    with TestClient(test_app) as client:
        yield client
