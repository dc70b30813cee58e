"""View controllers of the search front-end."""

from .effects import Effect, EffectRecorder, EffectSink, Navigate, ScrollToTop, UpdateAddress
from .entry import SearchEntryController
from .notification import NotificationController, TransitionPhase
from .results import ResultsPageController, ResultsView

__all__ = [
    "Effect",
    "EffectRecorder",
    "EffectSink",
    "Navigate",
    "NotificationController",
    "ResultsPageController",
    "ResultsView",
    "ScrollToTop",
    "SearchEntryController",
    "TransitionPhase",
    "UpdateAddress",
]
