#!/usr/bin/env python3
"""
Campus AutoLogin - Settings Loader

Startup step that fills the window from the saved settings and, when
autostart is on, fires the automatic login.
"""

import logging
from typing import Optional

from src.models import SettingsRecord
from src.utils.log_setup import get_logger


class SettingsLoader:
    """Load saved settings into the window once at startup"""

    def __init__(
        self,
        store,
        view,
        actions,
        scheduler,
        logger: Optional[logging.Logger] = None,
    ):
        self.store = store
        self.view = view
        self.actions = actions
        self.scheduler = scheduler
        self.logger = logger or get_logger("controller.settings_loader")
        self._started = False

    def load_settings(self):
        """Read the store on a worker; a failed read leaves the fields at their defaults"""
        if self._started:
            self.logger.warning("Settings already loaded, ignoring repeated load")
            return
        self._started = True

        def worker():
            try:
                record = self.store.load_settings()
            except Exception as e:
                self.logger.error("Error reading settings: %s", e)
                return
            self.scheduler.post(lambda: self._apply(record))

        self.scheduler.spawn(worker, "settings-load")

    def _apply(self, record: SettingsRecord):
        self.view.apply_settings(record)
        self.logger.info("Loaded saved settings")

        if record.autostart_enabled:
            self.actions.autostart_login()
