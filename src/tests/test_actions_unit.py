from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from src.config.settings import RESULT_DETAIL_TTL_MS, STATUS_DETAIL_TTL_MS, TOAST_TTL_MS
from src.controller.actions import NetworkActionCoordinator
from src.controller.field_sync import FieldSync
from src.controller.notifications import DETAIL, TOAST
from src.models import NetworkStatus
from src.network import AuthError, DetectionError, NetworkError


LOGIN_URL = "http://192.168.1.1/login"


@pytest.fixture
def backend() -> MagicMock:
    return MagicMock()


@pytest.fixture
def coordinator(backend, view, store, notifier, scheduler) -> NetworkActionCoordinator:
    field_sync = FieldSync(view, store, scheduler)
    return NetworkActionCoordinator(backend, view, field_sync, notifier, scheduler)


def _texts(renderer, kind=None) -> list:
    return [n.text for n in renderer.mounted if kind is None or n.kind == kind]


def test_connection_test_shows_toast_and_result_panel(coordinator, backend, renderer, notifier, scheduler) -> None:
    backend.test_connectivity.return_value = "OK: 200"

    coordinator.test_connection()

    assert _texts(renderer, TOAST) == ["Connection test complete"]
    details = [n for n in renderer.mounted if n.kind == DETAIL]
    assert len(details) == 1
    assert details[0].content.body == "OK: 200"
    assert details[0].ttl_ms == RESULT_DETAIL_TTL_MS

    scheduler.advance(max(RESULT_DETAIL_TTL_MS, TOAST_TTL_MS))
    assert notifier.active == []


def test_connection_test_failure_reports_error_once(coordinator, backend, renderer) -> None:
    backend.test_connectivity.side_effect = NetworkError("Login page timed out: http://portal")

    coordinator.test_connection()

    matching = [text for text in _texts(renderer) if "Login page timed out" in text]
    assert matching == ["Connection test failed: Login page timed out: http://portal"]
    assert _texts(renderer, DETAIL) == []


def test_login_success_and_failure_toasts(coordinator, backend, renderer) -> None:
    coordinator.login()
    backend.perform_login.side_effect = AuthError("Portal rejected the login: 密码错误")
    coordinator.login()

    assert _texts(renderer) == [
        "Logging in...",
        "Login failed: Portal rejected the login: 密码错误",
    ]


def test_autostart_login_uses_its_own_messages(coordinator, backend, renderer) -> None:
    coordinator.autostart_login()
    backend.perform_login.side_effect = NetworkError("Login page URL is not configured")
    coordinator.autostart_login()

    assert _texts(renderer) == [
        "Automatic login triggered",
        "Automatic login failed: Login page URL is not configured",
    ]


def test_detect_stores_url_immediately_and_shows_status(coordinator, backend, view, store, renderer) -> None:
    backend.detect_login_page.return_value = LOGIN_URL
    backend.get_network_status.return_value = NetworkStatus(
        connected=False,
        connectivity_result="Network requires authentication",
        needs_authentication=True,
        login_url=LOGIN_URL,
    )

    coordinator.auto_detect_login_page()

    assert view.login_urls == [LOGIN_URL]
    # Saved without waiting for the debounce
    assert store.saved[-1].webindex == LOGIN_URL

    toasts = _texts(renderer, TOAST)
    assert toasts[0] == "Detecting the campus login page, please wait..."
    assert f"Login page detected: {LOGIN_URL}" in toasts

    status_panels = [n for n in renderer.mounted if n.kind == DETAIL]
    assert len(status_panels) == 1
    assert status_panels[0].ttl_ms == STATUS_DETAIL_TTL_MS
    assert status_panels[0].content.raw["login_url"] == LOGIN_URL

    assert view.busy_changes == [True, False]


def test_detect_keeps_button_busy_until_worker_finishes(coordinator, backend, view, scheduler) -> None:
    scheduler.defer_spawn = True
    backend.detect_login_page.return_value = LOGIN_URL
    backend.get_network_status.return_value = NetworkStatus(connected=True, connectivity_result="ok")

    coordinator.auto_detect_login_page()
    assert view.busy_changes == [True]

    scheduler.run_spawned()
    assert view.busy_changes[-1] is False


def test_detect_failure_releases_button_and_keeps_url(coordinator, backend, view, store, renderer) -> None:
    view.set_field("webindex", "http://old")
    backend.detect_login_page.side_effect = DetectionError("No login page found, last error: None")

    coordinator.auto_detect_login_page()

    assert view.login_urls == []
    assert view.record.webindex == "http://old"
    assert store.saved == []
    backend.get_network_status.assert_not_called()
    assert _texts(renderer, TOAST).count("Detection failed: No login page found, last error: None") == 1
    assert sum("No login page found" in text for text in _texts(renderer)) == 1
    assert view.busy_changes == [True, False]


def test_status_failure_after_detection_still_saves_url(coordinator, backend, view, store, renderer) -> None:
    backend.detect_login_page.return_value = LOGIN_URL
    backend.get_network_status.side_effect = NetworkError("Timed out loading http://www.baidu.com")

    coordinator.auto_detect_login_page()

    assert store.saved[-1].webindex == LOGIN_URL
    assert _texts(renderer, DETAIL) == []
    assert _texts(renderer, TOAST).count("Detection failed: Timed out loading http://www.baidu.com") == 1
    assert sum("Timed out loading" in text for text in _texts(renderer)) == 1
    assert view.busy_changes == [True, False]


def test_overlapping_actions_both_run(coordinator, backend, scheduler, renderer) -> None:
    scheduler.defer_spawn = True
    backend.test_connectivity.return_value = "OK"

    coordinator.login()
    coordinator.login()
    coordinator.test_connection()
    scheduler.run_spawned()

    assert backend.perform_login.call_count == 2
    assert backend.test_connectivity.call_count == 1
    assert _texts(renderer, TOAST).count("Logging in...") == 2
