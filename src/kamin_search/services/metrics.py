"""Prometheus metrics helpers used by the search presentation layer."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Final

from prometheus_client import (
    CONTENT_TYPE_LATEST,
    CollectorRegistry,
    Counter,
    Histogram,
    generate_latest,
)


@dataclass
class MetricsRegistry:
    """Container owning all Prometheus collectors exposed by the API.

    * ``search_requests_total`` counts remote searches by outcome (``ok``,
      ``empty``, ``error``).  Errors are invisible to users because the client
      degrades them into an empty list, so this counter is the only place
      where they can be told apart from genuine zero-match queries.
    * ``search_latency_seconds`` records the round trip to the search service.
    * ``page_clamps_total`` counts results views whose requested page had to be
      corrected after loading.
    * ``notifications_shown_total`` counts transient notifications by view.
    """

    registry: CollectorRegistry = field(init=False)
    search_requests: Counter = field(init=False)
    search_latency: Histogram = field(init=False)
    page_clamps: Counter = field(init=False)
    notifications_shown: Counter = field(init=False)

    def __post_init__(self) -> None:
        self._initialise()

    def _initialise(self) -> None:
        """Instantiate collectors on a fresh registry."""
        # A private registry keeps tests isolated from the process-wide default.
        self.registry = CollectorRegistry()
        self.search_requests = Counter(
            "search_requests_total",
            "Number of remote search calls grouped by outcome.",
            ("outcome",),
            registry=self.registry,
        )
        self.search_latency = Histogram(
            "search_latency_seconds",
            "Observed round trip duration of remote search calls in seconds.",
            registry=self.registry,
            buckets=(0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, float("inf")),
        )
        self.page_clamps = Counter(
            "page_clamps_total",
            "Number of results views whose page number was clamped after loading.",
            registry=self.registry,
        )
        self.notifications_shown = Counter(
            "notifications_shown_total",
            "Number of transient notifications raised grouped by view.",
            ("view",),
            registry=self.registry,
        )

    def reset(self) -> None:
        """Reset all collectors to an empty state (useful for deterministic tests)."""
        self._initialise()

    def record_search(self, outcome: str, seconds: float) -> None:
        """Count a finished search and observe its latency (clamped to >= 0)."""
        self.search_requests.labels(outcome=outcome or "unknown").inc()
        self.search_latency.observe(max(0.0, float(seconds)))

    def record_page_clamp(self) -> None:
        self.page_clamps.inc()

    def record_notification(self, view: str) -> None:
        self.notifications_shown.labels(view=view).inc()

    def render(self) -> bytes:
        """Return the latest metrics snapshot in Prometheus exposition format."""
        return generate_latest(self.registry)

    @property
    def content_type(self) -> str:
        """Expose the canonical content type for the Prometheus text format."""
        return CONTENT_TYPE_LATEST


# Singleton used across the application. Tests may call ``metrics.reset()`` to
# ensure a blank slate prior to exercising behaviours.
metrics: Final[MetricsRegistry] = MetricsRegistry()


__all__ = ["metrics", "MetricsRegistry"]
