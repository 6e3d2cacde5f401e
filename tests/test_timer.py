"""Tests for tick scheduling."""

import threading

from photo_booth.timer import ManualScheduler, ThreadingScheduler


def test_manual_scheduler_fires_in_due_order() -> None:
    scheduler = ManualScheduler()
    fired = []
    scheduler.schedule(2.0, lambda: fired.append("late"))
    scheduler.schedule(1.0, lambda: fired.append("early"))

    assert scheduler.advance(1.0) == 1
    assert fired == ["early"]
    assert scheduler.advance(5.0) == 1
    assert fired == ["early", "late"]
    assert scheduler.now == 6.0


def test_cancelled_ticket_never_fires() -> None:
    scheduler = ManualScheduler()
    fired = []
    ticket = scheduler.schedule(1.0, lambda: fired.append(1))

    ticket.cancel()

    assert not ticket.active
    assert scheduler.pending == []
    assert scheduler.advance(3.0) == 0
    assert fired == []


def test_callbacks_can_reschedule() -> None:
    scheduler = ManualScheduler()
    fired = []

    def again():
        fired.append(scheduler.now)
        if len(fired) < 3:
            scheduler.schedule(1.0, again)

    scheduler.schedule(1.0, again)

    assert scheduler.run_until_idle() == 3
    assert fired == [1.0, 2.0, 3.0]


def test_threading_scheduler_runs_and_cancels() -> None:
    scheduler = ThreadingScheduler()
    done = threading.Event()
    skipped = []

    scheduler.schedule(0.01, done.set)
    revoked = scheduler.schedule(0.01, lambda: skipped.append(1))
    revoked.cancel()

    assert done.wait(2.0)
    assert skipped == []
