from __future__ import annotations

import itertools
import os
import tempfile

import pytest


# Never touch the user's real settings file or log directory during pytest.
os.environ.setdefault(
    "CAMPUS_AUTOLOGIN_CONFIG_DIR",
    tempfile.mkdtemp(prefix="campus-autologin-test-config-"),
)

from src.config.translations import LANG_ENGLISH, translator  # noqa: E402
from src.controller.notifications import NotificationCenter  # noqa: E402
from src.models import SettingsRecord  # noqa: E402
from src.utils.storage import PersistenceError  # noqa: E402


class FakeScheduler:
    """Scheduler with a manual clock.

    Timers only fire from advance(). Posted callbacks run inline. Spawned jobs
    run inline unless defer_spawn is set, in which case run_spawned() runs them.
    """

    def __init__(self) -> None:
        self.now = 0
        self.defer_spawn = False
        self.spawned: list = []
        self.spawn_names: list = []
        self._timers: dict = {}
        self._handles = itertools.count(1)

    def call_later(self, delay_ms, callback):
        handle = next(self._handles)
        self._timers[handle] = (self.now + delay_ms, handle, callback)
        return handle

    def cancel(self, handle) -> None:
        self._timers.pop(handle, None)

    def post(self, callback) -> None:
        callback()

    def spawn(self, job, name=None) -> None:
        self.spawn_names.append(name)
        if self.defer_spawn:
            self.spawned.append(job)
        else:
            job()

    def run_spawned(self) -> None:
        while self.spawned:
            self.spawned.pop(0)()

    @property
    def pending_timers(self) -> int:
        return len(self._timers)

    def advance(self, ms: int) -> None:
        target = self.now + ms
        while True:
            due = [entry for entry in self._timers.values() if entry[0] <= target]
            if not due:
                break
            when, handle, callback = min(due)
            del self._timers[handle]
            self.now = when
            callback()
        self.now = target


class FakeView:
    """Stands in for the window: fields are a SettingsRecord edited in place"""

    def __init__(self) -> None:
        self.record = SettingsRecord()
        self.applied: list = []
        self.login_urls: list = []
        self.busy_changes: list = []

    def set_field(self, field_id: str, value: str) -> None:
        setattr(self.record, field_id, value)

    def read_settings(self) -> SettingsRecord:
        return SettingsRecord(**self.record.to_dict())

    def apply_settings(self, record: SettingsRecord) -> None:
        self.applied.append(record)
        self.record = SettingsRecord(**record.to_dict())

    def set_login_url(self, url: str) -> None:
        self.login_urls.append(url)
        self.record.webindex = url

    def set_detect_busy(self, busy: bool) -> None:
        self.busy_changes.append(busy)


class FakeStore:
    """In-memory settings store"""

    def __init__(self) -> None:
        self.record = None
        self.saved: list = []
        self.load_error = None
        self.save_error = None
        self.load_calls = 0

    def save_settings(self, record: SettingsRecord) -> None:
        if self.save_error is not None:
            raise self.save_error
        self.saved.append(record)
        self.record = record

    def load_settings(self) -> SettingsRecord:
        self.load_calls += 1
        if self.load_error is not None:
            raise self.load_error
        if self.record is None:
            raise PersistenceError("Settings file not found")
        return self.record


class RecordingRenderer:
    def __init__(self) -> None:
        self.mounted: list = []
        self.unmounted: list = []

    def mount(self, notice) -> None:
        self.mounted.append(notice)

    def unmount(self, notice) -> None:
        self.unmounted.append(notice)


@pytest.fixture(autouse=True)
def _english_messages():
    previous = translator.get_language()
    translator.set_language(LANG_ENGLISH)
    yield
    translator.set_language(previous)


@pytest.fixture
def scheduler() -> FakeScheduler:
    return FakeScheduler()


@pytest.fixture
def view() -> FakeView:
    return FakeView()


@pytest.fixture
def store() -> FakeStore:
    return FakeStore()


@pytest.fixture
def renderer() -> RecordingRenderer:
    return RecordingRenderer()


@pytest.fixture
def notifier(scheduler: FakeScheduler, renderer: RecordingRenderer) -> NotificationCenter:
    return NotificationCenter(scheduler, renderer)
