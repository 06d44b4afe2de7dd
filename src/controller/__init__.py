#!/usr/bin/env python3
"""
Campus AutoLogin - Controller Package

Glue between the window and the backend: debounced saving of the login
settings, the startup load, network actions and notifications.

The window is passed in as a view with four methods:
- read_settings() -> SettingsRecord
- apply_settings(record)
- set_login_url(url)
- set_detect_busy(busy)
"""

import logging
from typing import Optional

from src.controller.scheduler import TkScheduler, PendingSaveTimer
from src.controller.field_sync import FieldSync
from src.controller.settings_loader import SettingsLoader
from src.controller.actions import NetworkActionCoordinator
from src.controller.autostart_bridge import AutostartToggleBridge
from src.controller.notifications import (
    NotificationCenter,
    Notice,
    DetailContent,
    describe_network_status,
    result_detail,
    status_detail,
)
from src.utils.log_setup import get_logger

__version__ = "1.0.0"
__description__ = "Settings sync and network action controller for Campus AutoLogin"

__all__ = [
    "TkScheduler",
    "PendingSaveTimer",
    "FieldSync",
    "SettingsLoader",
    "NetworkActionCoordinator",
    "AutostartToggleBridge",
    "NotificationCenter",
    "Notice",
    "DetailContent",
    "describe_network_status",
    "result_detail",
    "status_detail",
]


class AppController:
    """
    Wires the controller parts together

    Every on_* method is meant to be called from the UI thread.
    """

    def __init__(
        self,
        view,
        backend,
        store,
        autostart,
        notifier: NotificationCenter,
        scheduler,
        logger: Optional[logging.Logger] = None,
    ):
        self.logger = logger or get_logger("controller")
        self.notifier = notifier
        self.field_sync = FieldSync(view, store, scheduler, logger=self.logger)
        self.actions = NetworkActionCoordinator(
            backend, view, self.field_sync, notifier, scheduler, logger=self.logger
        )
        self.loader = SettingsLoader(store, view, self.actions, scheduler, logger=self.logger)
        self.autostart_bridge = AutostartToggleBridge(
            autostart, self.field_sync, scheduler, logger=self.logger
        )

    def start(self):
        self.loader.load_settings()

    def on_field_activity(self, field_id: str):
        self.field_sync.on_field_activity(field_id)

    def on_autostart_toggled(self, checked: bool):
        self.autostart_bridge.on_toggle(checked)

    def on_test_clicked(self):
        self.actions.test_connection()

    def on_login_requested(self):
        self.actions.login()

    def on_detect_clicked(self):
        self.actions.auto_detect_login_page()


__all__.append("AppController")
