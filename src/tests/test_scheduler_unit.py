from __future__ import annotations

import itertools
import threading

from src.controller.scheduler import PendingSaveTimer, TkScheduler


class _FakeRoot:
    """Records after() calls instead of running a Tk event loop"""

    def __init__(self) -> None:
        self.scheduled: dict = {}
        self._ids = itertools.count(1)

    def after(self, delay_ms, callback):
        handle = f"after#{next(self._ids)}"
        self.scheduled[handle] = (delay_ms, callback)
        return handle

    def after_cancel(self, handle) -> None:
        self.scheduled.pop(handle, None)

    def fire_all(self) -> None:
        for handle, (_, callback) in list(self.scheduled.items()):
            del self.scheduled[handle]
            callback()


def test_posted_callbacks_run_on_next_drain() -> None:
    root = _FakeRoot()
    scheduler = TkScheduler(root, poll_interval_ms=50)
    calls: list = []

    scheduler.post(lambda: calls.append("a"))
    scheduler.post(lambda: calls.append("b"))
    assert calls == []

    root.fire_all()
    assert calls == ["a", "b"]
    # Drain re-arms itself
    assert [delay for delay, _ in root.scheduled.values()] == [50]


def test_failing_callback_does_not_stop_the_queue() -> None:
    root = _FakeRoot()
    scheduler = TkScheduler(root)
    calls: list = []

    def boom():
        raise RuntimeError("boom")

    scheduler.post(boom)
    scheduler.post(lambda: calls.append("after"))
    root.fire_all()

    assert calls == ["after"]


def test_stop_ends_polling() -> None:
    root = _FakeRoot()
    scheduler = TkScheduler(root)

    scheduler.stop()
    root.fire_all()

    assert root.scheduled == {}


def test_post_from_worker_thread() -> None:
    root = _FakeRoot()
    scheduler = TkScheduler(root)
    calls: list = []

    thread = scheduler.spawn(lambda: scheduler.post(lambda: calls.append(threading.current_thread().name)), "worker")
    thread.join(timeout=5)
    assert thread.daemon

    root.fire_all()
    assert calls == [threading.current_thread().name]


def test_pending_save_timer_keeps_one_slot() -> None:
    root = _FakeRoot()
    scheduler = TkScheduler(root)
    scheduler.stop()
    root.fire_all()
    timer = PendingSaveTimer(scheduler)
    calls: list = []

    timer.reschedule(500, lambda: calls.append(1))
    timer.reschedule(500, lambda: calls.append(2))
    assert timer.pending
    assert len(root.scheduled) == 1

    root.fire_all()
    assert calls == [2]
    assert not timer.pending

    timer.reschedule(500, lambda: calls.append(3))
    timer.cancel()
    assert root.scheduled == {}
