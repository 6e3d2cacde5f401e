"""Cancellable tick scheduling for the photobooth countdown."""
from __future__ import annotations

import heapq
import itertools
import threading
from typing import Callable, List, Protocol, Tuple


class Ticket:
    """Handle to one scheduled callback; ``cancel()`` revokes it."""

    def __init__(self, callback: Callable[[], None]) -> None:
        self._callback = callback
        self._active = True

    @property
    def active(self) -> bool:
        return self._active

    def cancel(self) -> None:
        self._active = False

    def fire(self) -> None:
        if not self._active:
            return
        self._active = False
        self._callback()


class Scheduler(Protocol):
    def schedule(self, delay: float, callback: Callable[[], None]) -> Ticket:
        ...


class _TimerTicket(Ticket):
    def __init__(self, callback: Callable[[], None], timer: threading.Timer | None = None) -> None:
        super().__init__(callback)
        self.timer = timer

    def cancel(self) -> None:
        super().cancel()
        if self.timer is not None:
            self.timer.cancel()


class ThreadingScheduler:
    """Wall-clock scheduler backed by ``threading.Timer``."""

    def schedule(self, delay: float, callback: Callable[[], None]) -> Ticket:
        ticket = _TimerTicket(callback)
        timer = threading.Timer(max(0.0, delay), ticket.fire)
        timer.daemon = True
        ticket.timer = timer
        timer.start()
        return ticket


class ManualScheduler:
    """Virtual clock; nothing fires until ``advance()`` is called."""

    def __init__(self) -> None:
        self.now = 0.0
        self._queue: List[Tuple[float, int, Ticket]] = []
        self._seq = itertools.count()

    def schedule(self, delay: float, callback: Callable[[], None]) -> Ticket:
        ticket = Ticket(callback)
        heapq.heappush(self._queue, (self.now + max(0.0, delay), next(self._seq), ticket))
        return ticket

    @property
    def pending(self) -> List[Ticket]:
        return [ticket for _, _, ticket in sorted(self._queue) if ticket.active]

    def advance(self, seconds: float) -> int:
        """Move the clock forward, firing due tickets in order. Returns the number fired."""
        target = self.now + seconds
        fired = 0
        while self._queue and self._queue[0][0] <= target:
            due, _, ticket = heapq.heappop(self._queue)
            self.now = due
            if ticket.active:
                ticket.fire()
                fired += 1
        self.now = target
        return fired

    def run_until_idle(self, limit: int = 10_000) -> int:
        """Fire everything, including tickets scheduled by callbacks."""
        fired = 0
        while self.pending and fired < limit:
            due = self._queue[0][0]
            fired += self.advance(max(0.0, due - self.now))
        return fired


__all__ = ["Ticket", "Scheduler", "ThreadingScheduler", "ManualScheduler"]
