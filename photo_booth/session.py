"""Timed multi-shot photobooth session.

States::

    idle --start--> countdown(timer) --tick--> countdown(n-1) ... countdown(0)
    countdown(0) --tick--> capturing --> countdown(timer) | complete
    any --cancel--> cancelled        any --reset--> idle

The ``countdown(1) -> countdown(0)`` tick is the operator's final cue; the
shot happens on the following tick.
"""
from __future__ import annotations

import threading
from dataclasses import dataclass, field
from functools import partial
from typing import Callable, List

from transitions.extensions import LockedMachine

from configs.config import (
    MAX_TARGET_COUNT,
    MAX_TIMER_SECONDS,
    MIN_TARGET_COUNT,
    MIN_TIMER_SECONDS,
    TICK_INTERVAL_SEC,
    logger,
)
from photo_booth.capture import CaptureSource, SingleShotCapture
from photo_booth.errors import InvalidInput, PhotoBoothError, SessionAlreadyActive, SourceUnavailable
from photo_booth.models import AdjustmentParams, CapturedImage, FilterEffect
from photo_booth.strip import CompositeStrip, StripComposer
from photo_booth.timer import Scheduler, ThreadingScheduler, Ticket

STATES = [
    {"name": "idle", "on_enter": "_enter_idle"},
    {"name": "countdown", "on_enter": "_enter_countdown"},
    {"name": "capturing", "on_enter": "_enter_capturing"},
    {"name": "complete", "on_enter": "_enter_complete"},
    {"name": "cancelled", "on_enter": "_enter_cancelled"},
]

TRANSITIONS = [
    {"trigger": "begin", "source": ["idle", "complete", "cancelled"], "dest": "countdown"},
    # internal: stays in countdown without re-entering it
    {"trigger": "tick", "source": "countdown", "dest": None,
     "conditions": "has_seconds_left", "after": "_count_down"},
    {"trigger": "tick", "source": "countdown", "dest": "capturing"},
    {"trigger": "shot_taken", "source": "capturing", "dest": "countdown", "unless": "is_full"},
    {"trigger": "shot_taken", "source": "capturing", "dest": "complete"},
    {"trigger": "fail", "source": ["countdown", "capturing"], "dest": "cancelled"},
    {"trigger": "abort", "source": "*", "dest": "cancelled"},
    {"trigger": "clear", "source": "*", "dest": "idle"},
]

ACTIVE_STATES = ("countdown", "capturing")


@dataclass(slots=True)
class SessionRecord:
    target_count: int = 0
    timer_seconds: int = 0
    images: List[CapturedImage] = field(default_factory=list)
    current_index: int = 0
    countdown_remaining: int = 0
    error: PhotoBoothError | None = None


@dataclass(slots=True)
class BoothListeners:
    on_countdown: Callable[[int], None] | None = None
    on_capture: Callable[[CapturedImage], None] | None = None
    on_complete: Callable[[List[CapturedImage]], None] | None = None
    on_cancelled: Callable[[PhotoBoothError | None], None] | None = None


def _validate_range(name: str, value: int, low: int, high: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidInput(f"{name} must be an integer, got {value!r}")
    if not low <= value <= high:
        raise InvalidInput(f"{name} must be within {low}..{high}, got {value}")
    return value


class Photobooth:
    """Runs timed capture rounds against one source and owns the session record."""

    def __init__(
        self,
        source: CaptureSource,
        capture: SingleShotCapture | None = None,
        *,
        scheduler: Scheduler | None = None,
        composer: StripComposer | None = None,
        listeners: BoothListeners | None = None,
        tick_interval: float = TICK_INTERVAL_SEC,
    ) -> None:
        self.source = source
        self.capture = capture or SingleShotCapture()
        self.scheduler = scheduler or ThreadingScheduler()
        self.composer = composer or StripComposer()
        self.listeners = listeners or BoothListeners()
        self.tick_interval = tick_interval

        self.record = SessionRecord()
        self.params = AdjustmentParams()
        self.filter_effect: FilterEffect | str | None = None
        self._ticket: Ticket | None = None
        self._tick_token = 0

        # timer-thread ticks and caller triggers share one reentrant lock
        self._lock = threading.RLock()
        self.machine = LockedMachine(
            machine_context=[self._lock],
            model=self,
            states=STATES,
            transitions=TRANSITIONS,
            initial="idle",
            auto_transitions=False,
            ignore_invalid_triggers=True,
        )

    # -------------------- public API --------------------

    @property
    def is_active(self) -> bool:
        return self.state in ACTIVE_STATES

    @property
    def images(self) -> List[CapturedImage]:
        return list(self.record.images)

    def start(
        self,
        target_count: int,
        timer_seconds: int,
        params: AdjustmentParams | None = None,
        filter_effect: FilterEffect | str | None = None,
    ) -> None:
        with self._lock:
            if self.is_active:
                raise SessionAlreadyActive(f"Photobooth session already running ({self.state})")
            _validate_range("target_count", target_count, MIN_TARGET_COUNT, MAX_TARGET_COUNT)
            _validate_range("timer_seconds", timer_seconds, MIN_TIMER_SECONDS, MAX_TIMER_SECONDS)

            self.params = params or AdjustmentParams()
            self.filter_effect = filter_effect
            self.record = SessionRecord(target_count=target_count, timer_seconds=timer_seconds)
            logger.info("Photobooth started: %d shots, %ds timer", target_count, timer_seconds)
            self.begin()

    def cancel(self) -> None:
        """Stop the session and discard its images."""
        self.abort()

    def reset(self) -> None:
        """Discard everything and return to idle."""
        self.clear()

    def shutter(
        self,
        params: AdjustmentParams | None = None,
        filter_effect: FilterEffect | str | None = None,
    ) -> CapturedImage:
        """Manual single shot, refused unless the booth is idle."""
        with self._lock:
            if self.state != "idle":
                raise SessionAlreadyActive(f"Manual capture refused while booth is {self.state}")
            return self.capture.capture(self.source, params, filter_effect)

    def strip(self) -> CompositeStrip:
        """Compose the current session's images; there must have been a ``start()``."""
        if not self.record.target_count:
            raise InvalidInput("No photobooth session to compose, start one first")
        return self.composer.compose(self.record.images, self.record.target_count)

    # -------------------- conditions --------------------

    def has_seconds_left(self) -> bool:
        return self.record.countdown_remaining > 0

    def is_full(self) -> bool:
        return len(self.record.images) >= self.record.target_count

    # -------------------- scheduling --------------------

    def _schedule_tick(self) -> None:
        self._revoke_tick()
        self._ticket = self.scheduler.schedule(
            self.tick_interval, partial(self._on_tick_due, self._tick_token)
        )

    def _revoke_tick(self) -> None:
        # a callback already past its ticket check still carries the old token
        self._tick_token += 1
        if self._ticket is not None:
            self._ticket.cancel()
            self._ticket = None

    def _on_tick_due(self, token: int) -> None:
        with self._lock:
            if token != self._tick_token or self._ticket is None:
                return
            self._ticket = None
            if self.state == "countdown":
                self.tick()

    def _notify_countdown(self) -> None:
        if self.listeners.on_countdown:
            self.listeners.on_countdown(self.record.countdown_remaining)

    # -------------------- state entry actions --------------------

    def _enter_countdown(self) -> None:
        self.record.countdown_remaining = self.record.timer_seconds
        logger.debug(
            "Countdown for shot %d/%d", self.record.current_index + 1, self.record.target_count
        )
        self._notify_countdown()
        self._schedule_tick()

    def _count_down(self) -> None:
        self.record.countdown_remaining -= 1
        self._notify_countdown()
        self._schedule_tick()

    def _enter_capturing(self) -> None:
        self.record.countdown_remaining = 0
        try:
            shot = self.capture.capture(self.source, self.params, self.filter_effect)
        except Exception as exc:
            # nothing may escape to the timer thread or the machine stays in capturing
            if isinstance(exc, PhotoBoothError):
                error = exc
            else:
                error = SourceUnavailable(f"Capture failed: {exc}")
                error.__cause__ = exc
            self.record.error = error
            logger.error(
                "Photobooth capture %d/%d failed, cancelling session: %s",
                self.record.current_index + 1,
                self.record.target_count,
                error,
                exc_info=error is not exc,
            )
            self.fail()
            return

        self.record.images.append(shot)
        self.record.current_index += 1
        if self.listeners.on_capture:
            self.listeners.on_capture(shot)
        self.shot_taken()

    def _enter_complete(self) -> None:
        self._revoke_tick()
        logger.info("Photobooth complete: %d shots", len(self.record.images))
        if self.listeners.on_complete:
            self.listeners.on_complete(list(self.record.images))

    def _enter_cancelled(self) -> None:
        self._revoke_tick()
        discarded = len(self.record.images)
        self.record.images.clear()
        self.record.current_index = 0
        self.record.countdown_remaining = 0
        if self.record.error is None:
            logger.info("Photobooth cancelled, %d shots discarded", discarded)
        if self.listeners.on_cancelled:
            self.listeners.on_cancelled(self.record.error)

    def _enter_idle(self) -> None:
        self._revoke_tick()
        self.record = SessionRecord()


__all__ = ["Photobooth", "SessionRecord", "BoothListeners", "STATES", "TRANSITIONS"]
