#!/usr/bin/env python3
"""
Campus AutoLogin - Notification Surface

Short-lived messages for the user: toasts (one line, gone after 5 seconds)
and detail panels (title, body, optional raw data, close button). Each notice
owns its own dismiss timer; any number can be on screen at once.

NotificationCenter only keeps track of notices and timers. Drawing is left to
a renderer with mount(notice) / unmount(notice), so the controller never
touches widgets.
"""

import itertools
import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from src.config.settings import TOAST_TTL_MS
from src.config.translations import t
from src.models import NetworkStatus

TOAST = "toast"
DETAIL = "detail"

# Tones used to colour status lines
TONE_OK = "ok"
TONE_WARN = "warn"
TONE_INFO = "info"
TONE_ERROR = "error"


@dataclass
class DetailContent:
    """What a detail panel shows"""

    title: str
    body: str = ""
    lines: List[Tuple[str, str]] = field(default_factory=list)
    raw: Optional[Dict[str, Any]] = None
    dismiss_on_outside_click: bool = False

    @property
    def raw_text(self) -> str:
        if self.raw is None:
            return ""
        return json.dumps(self.raw, ensure_ascii=False, indent=2)


@dataclass
class Notice:
    kind: str
    text: str
    ttl_ms: int
    content: Optional[DetailContent] = None
    id: int = 0
    timer: Any = None

    @property
    def dismiss_on_outside_click(self) -> bool:
        return bool(self.content and self.content.dismiss_on_outside_click)


def describe_network_status(status: NetworkStatus) -> List[Tuple[str, str]]:
    """Narrative lines for a status: connected, login page found, or detection error"""
    if status.connected:
        return [(TONE_OK, status.connectivity_result)]

    lines = [(TONE_WARN, status.connectivity_result)]
    if status.needs_authentication and status.login_url:
        lines.append((TONE_INFO, t("status_login_page", url=status.login_url)))
    elif status.detection_error:
        lines.append((TONE_ERROR, t("status_detection_error", error=status.detection_error)))
    return lines


def result_detail(result: str) -> DetailContent:
    return DetailContent(title=t("test_result_title"), body=result)


def status_detail(status: NetworkStatus) -> DetailContent:
    return DetailContent(
        title=t("status_title"),
        lines=describe_network_status(status),
        raw=status.to_dict(),
        dismiss_on_outside_click=True,
    )


class NotificationCenter:
    """Show and auto-dismiss notices; must be used from the UI thread"""

    def __init__(self, scheduler, renderer=None):
        self.scheduler = scheduler
        self.renderer = renderer
        self._ids = itertools.count(1)
        self._active: Dict[int, Notice] = {}

    @property
    def active(self) -> List[Notice]:
        return list(self._active.values())

    def show_toast(self, text: str) -> Notice:
        return self._show(Notice(kind=TOAST, text=text, ttl_ms=TOAST_TTL_MS))

    def show_detail(self, content: DetailContent, ttl_ms: int) -> Notice:
        return self._show(Notice(kind=DETAIL, text=content.title, ttl_ms=ttl_ms, content=content))

    def dismiss(self, notice: Notice):
        """Remove a notice; safe to call more than once"""
        if self._active.pop(notice.id, None) is None:
            return
        if notice.timer is not None:
            self.scheduler.cancel(notice.timer)
            notice.timer = None
        if self.renderer is not None:
            self.renderer.unmount(notice)

    def outside_click(self, notice: Notice):
        """A click landed outside this notice's panel"""
        if notice.dismiss_on_outside_click:
            self.dismiss(notice)

    def _show(self, notice: Notice) -> Notice:
        notice.id = next(self._ids)
        self._active[notice.id] = notice
        if self.renderer is not None:
            self.renderer.mount(notice)

        def expire():
            notice.timer = None
            self.dismiss(notice)

        notice.timer = self.scheduler.call_later(notice.ttl_ms, expire)
        return notice
