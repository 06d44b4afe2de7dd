from __future__ import annotations

from unittest.mock import MagicMock

from src.config.settings import SAVE_DEBOUNCE_MS
from src.controller import AppController
from src.models import SettingsRecord


def _controller(view, store, notifier, scheduler):
    backend = MagicMock()
    autostart = MagicMock()
    controller = AppController(view, backend, store, autostart, notifier, scheduler)
    return controller, backend, autostart


def test_startup_with_autostart_logs_in_once(view, store, notifier, scheduler) -> None:
    store.record = SettingsRecord("http://portal", "123", "pw", "CT", "true")
    controller, backend, _ = _controller(view, store, notifier, scheduler)

    controller.start()

    assert view.record.webindex == "http://portal"
    backend.perform_login.assert_called_once_with()
    assert [n.text for n in notifier.active] == ["Automatic login triggered"]


def test_user_events_reach_their_handlers(view, store, notifier, scheduler) -> None:
    controller, backend, autostart = _controller(view, store, notifier, scheduler)
    backend.test_connectivity.return_value = "OK"
    backend.detect_login_page.return_value = "http://10.0.0.1/login"

    view.set_field("countindex", "42")
    controller.on_field_activity("countindex")
    scheduler.advance(SAVE_DEBOUNCE_MS)
    assert store.saved[-1].countindex == "42"

    controller.on_autostart_toggled(True)
    autostart.enable.assert_called_once_with()

    controller.on_test_clicked()
    backend.test_connectivity.assert_called_once_with()

    controller.on_login_requested()
    backend.perform_login.assert_called_once_with()

    controller.on_detect_clicked()
    assert view.login_urls == ["http://10.0.0.1/login"]
