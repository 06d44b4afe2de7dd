#!/usr/bin/env python3
"""
Campus AutoLogin - UI Scheduling

Network calls can take several seconds, so they run on worker threads while
the Tk event loop keeps the window responsive. Tk widgets must only be touched
from the thread running mainloop, so workers hand results back through a queue
that the UI thread drains every few milliseconds.
"""

import queue
import threading
from typing import Any, Callable, Optional

from src.config.settings import UI_POLL_INTERVAL_MS
from src.utils.log_setup import get_logger

logger = get_logger("controller.scheduler")


class TkScheduler:
    """Timers, UI-thread hand-off and worker threads for a Tk root window

    Interface shared with the test fake:
    - call_later(delay_ms, callback) -> handle
    - cancel(handle)
    - post(callback): run on the UI thread as soon as possible (thread safe)
    - spawn(job, name): run job on a background worker
    """

    def __init__(self, root, poll_interval_ms: int = UI_POLL_INTERVAL_MS):
        self.root = root
        self.poll_interval_ms = poll_interval_ms
        self._queue: "queue.Queue[Callable[[], Any]]" = queue.Queue()
        self._running = True
        self.root.after(self.poll_interval_ms, self._drain)

    def call_later(self, delay_ms: int, callback: Callable[[], Any]):
        return self.root.after(delay_ms, callback)

    def cancel(self, handle):
        self.root.after_cancel(handle)

    def post(self, callback: Callable[[], Any]):
        self._queue.put(callback)

    def spawn(self, job: Callable[[], Any], name: Optional[str] = None):
        # daemon=True so a hung portal request never keeps the app alive on quit
        thread = threading.Thread(target=job, name=name, daemon=True)
        thread.start()
        return thread

    def stop(self):
        self._running = False

    def _drain(self):
        while True:
            try:
                callback = self._queue.get_nowait()
            except queue.Empty:
                break
            try:
                callback()
            except Exception:
                logger.exception("UI callback failed")

        if self._running:
            self.root.after(self.poll_interval_ms, self._drain)


class PendingSaveTimer:
    """Single-slot timer: scheduling a new run cancels the previous one"""

    def __init__(self, scheduler):
        self._scheduler = scheduler
        self._handle = None

    @property
    def pending(self) -> bool:
        return self._handle is not None

    def reschedule(self, delay_ms: int, callback: Callable[[], Any]):
        self.cancel()

        def fire():
            self._handle = None
            callback()

        self._handle = self._scheduler.call_later(delay_ms, fire)

    def cancel(self):
        if self._handle is not None:
            self._scheduler.cancel(self._handle)
            self._handle = None
