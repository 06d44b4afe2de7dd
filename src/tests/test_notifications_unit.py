from __future__ import annotations

import json

from src.config.settings import TOAST_TTL_MS
from src.controller.notifications import (
    DETAIL,
    TOAST,
    TONE_ERROR,
    TONE_INFO,
    TONE_OK,
    TONE_WARN,
    DetailContent,
    describe_network_status,
    result_detail,
    status_detail,
)
from src.models import NetworkStatus


def test_toast_expires_after_ttl(notifier, renderer, scheduler) -> None:
    notice = notifier.show_toast("hello")

    assert notice.kind == TOAST
    assert renderer.mounted == [notice]

    scheduler.advance(TOAST_TTL_MS - 1)
    assert notifier.active == [notice]

    scheduler.advance(1)
    assert notifier.active == []
    assert renderer.unmounted == [notice]


def test_notices_expire_independently(notifier, scheduler) -> None:
    first = notifier.show_toast("one")
    scheduler.advance(2000)
    second = notifier.show_toast("two")
    detail = notifier.show_detail(DetailContent(title="t"), ttl_ms=10000)

    scheduler.advance(3000)
    assert first not in notifier.active
    assert second in notifier.active

    scheduler.advance(2000)
    assert notifier.active == [detail]

    scheduler.advance(5000)
    assert notifier.active == []


def test_dismiss_is_idempotent_and_cancels_timer(notifier, renderer, scheduler) -> None:
    notice = notifier.show_detail(result_detail("OK: 200"), ttl_ms=5000)

    notifier.dismiss(notice)
    notifier.dismiss(notice)

    assert renderer.unmounted == [notice]
    assert scheduler.pending_timers == 0

    scheduler.advance(10000)
    assert renderer.unmounted == [notice]


def test_outside_click_only_closes_dismissable_panels(notifier) -> None:
    result = notifier.show_detail(result_detail("OK"), ttl_ms=5000)
    status = notifier.show_detail(
        status_detail(NetworkStatus(connected=True, connectivity_result="online")),
        ttl_ms=10000,
    )

    notifier.outside_click(result)
    notifier.outside_click(status)

    assert notifier.active == [result]


def test_result_detail_shows_text_verbatim() -> None:
    content = result_detail("Connection test result:\n- Page load: OK (200)")

    assert content.title == "Connection test result"
    assert content.body == "Connection test result:\n- Page load: OK (200)"
    assert content.raw is None
    assert content.raw_text == ""


def test_connected_status_has_single_ok_line() -> None:
    status = NetworkStatus(connected=True, connectivity_result="Network connected")

    assert describe_network_status(status) == [(TONE_OK, "Network connected")]


def test_status_with_login_page_mentions_url() -> None:
    status = NetworkStatus(
        connected=False,
        connectivity_result="Network requires authentication",
        needs_authentication=True,
        login_url="http://10.0.0.1/login",
    )

    lines = describe_network_status(status)

    assert lines[0] == (TONE_WARN, "Network requires authentication")
    assert lines[1] == (TONE_INFO, "Login page detected: http://10.0.0.1/login")


def test_status_with_detection_error() -> None:
    status = NetworkStatus(
        connected=False,
        connectivity_result="Network state unknown",
        detection_error="No login page found",
    )

    lines = describe_network_status(status)

    assert lines[-1] == (TONE_ERROR, "Detection error: No login page found")


def test_status_detail_carries_raw_json(notifier) -> None:
    status = NetworkStatus(connected=False, connectivity_result="offline", detection_error="boom")
    notice = notifier.show_detail(status_detail(status), ttl_ms=10000)

    assert notice.kind == DETAIL
    assert notice.text == "Network status"
    assert json.loads(notice.content.raw_text) == status.to_dict()
    assert notice.dismiss_on_outside_click
