"""Transient notification with animated entry/exit and timed auto-dismissal."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Protocol

from loguru import logger

from kamin_search.services.metrics import metrics

DEFAULT_AUTO_HIDE_SECONDS = 5.0
DEFAULT_TRANSITION_SECONDS = 0.4
ANCHOR = "bottom-right"


class TimerHandle(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    """Source of one-shot timers (``asyncio.AbstractEventLoop`` satisfies it)."""

    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle: ...


class LoopScheduler:
    """Schedule timers on the asyncio loop running when they are armed."""

    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle:
        return asyncio.get_running_loop().call_later(delay, callback)


class TransitionPhase(str, Enum):
    ENTERING = "entering"
    ENTERED = "entered"
    EXITING = "exiting"
    EXITED = "exited"


@dataclass(frozen=True)
class NotificationState:
    visible: bool
    phase: TransitionPhase
    message: str
    auto_hide_after: float
    anchor: str = ANCHOR


class NotificationController:
    """Drive a single notification through ``exited → entering → entered → exiting``.

    Three timers may be pending at any time: the enter transition, the exit
    transition and the auto-hide countdown.  Every state change cancels the
    timers it supersedes, so a callback can only ever fire against the phase
    that armed it, and :meth:`close` leaves nothing scheduled.
    """

    def __init__(
        self,
        *,
        view: str = "home",
        scheduler: Scheduler | None = None,
        auto_hide_after: float = DEFAULT_AUTO_HIDE_SECONDS,
        transition_duration: float = DEFAULT_TRANSITION_SECONDS,
    ) -> None:
        self._view = view
        self._scheduler: Scheduler = scheduler or LoopScheduler()
        self._default_auto_hide = auto_hide_after
        self._transition = transition_duration
        self._phase = TransitionPhase.EXITED
        self._message = ""
        self._auto_hide_after = auto_hide_after
        self._transition_timer: TimerHandle | None = None
        self._auto_hide_timer: TimerHandle | None = None

    @property
    def phase(self) -> TransitionPhase:
        return self._phase

    @property
    def visible(self) -> bool:
        return self._phase is not TransitionPhase.EXITED

    @property
    def message(self) -> str:
        return self._message

    @property
    def pending_timers(self) -> int:
        """Number of timers currently armed."""
        return sum(timer is not None for timer in (self._transition_timer, self._auto_hide_timer))

    def snapshot(self) -> NotificationState:
        return NotificationState(
            visible=self.visible,
            phase=self._phase,
            message=self._message,
            auto_hide_after=self._auto_hide_after,
        )

    def show(self, message: str, auto_hide_after: float | None = None) -> None:
        """Display ``message``, restarting the auto-hide countdown.

        Showing while already visible replaces the message in place.  Showing
        while the exit transition runs turns the notification around and
        enters it again.
        """
        self._message = message
        self._auto_hide_after = (
            self._default_auto_hide if auto_hide_after is None else auto_hide_after
        )
        if self._phase in (TransitionPhase.EXITED, TransitionPhase.EXITING):
            self._cancel_transition()
            self._phase = TransitionPhase.ENTERING
            self._transition_timer = self._scheduler.call_later(self._transition, self._entered)
        self._cancel_auto_hide()
        self._auto_hide_timer = self._scheduler.call_later(self._auto_hide_after, self._auto_hide)
        metrics.record_notification(self._view)
        logger.bind(view=self._view, phase=self._phase.value).debug("notification.shown")

    def dismiss(self) -> None:
        """Start the exit transition; no-op when already leaving or hidden."""
        if self._phase in (TransitionPhase.EXITED, TransitionPhase.EXITING):
            return
        self._cancel_auto_hide()
        self._cancel_transition()
        self._phase = TransitionPhase.EXITING
        self._transition_timer = self._scheduler.call_later(self._transition, self._exited)

    def close(self) -> None:
        """Tear down: cancel every timer and hide immediately."""
        self._cancel_auto_hide()
        self._cancel_transition()
        self._phase = TransitionPhase.EXITED

    def _entered(self) -> None:
        self._transition_timer = None
        if self._phase is TransitionPhase.ENTERING:
            self._phase = TransitionPhase.ENTERED

    def _exited(self) -> None:
        self._transition_timer = None
        if self._phase is TransitionPhase.EXITING:
            self._phase = TransitionPhase.EXITED

    def _auto_hide(self) -> None:
        self._auto_hide_timer = None
        self.dismiss()

    def _cancel_transition(self) -> None:
        if self._transition_timer is not None:
            self._transition_timer.cancel()
            self._transition_timer = None

    def _cancel_auto_hide(self) -> None:
        if self._auto_hide_timer is not None:
            self._auto_hide_timer.cancel()
            self._auto_hide_timer = None


__all__ = [
    "ANCHOR",
    "LoopScheduler",
    "NotificationController",
    "NotificationState",
    "Scheduler",
    "TimerHandle",
    "TransitionPhase",
]
