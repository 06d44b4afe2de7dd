#!/usr/bin/env python3
"""
Campus AutoLogin - Autostart Toggle Bridge

Keeps the OS start-at-login entry in step with the autostart switch.
"""

import logging
from typing import Optional

from src.config.settings import FIELD_AUTOSTART
from src.utils.log_setup import get_logger


class AutostartToggleBridge:
    """Mirror the autostart switch to the OS and to the saved settings"""

    def __init__(
        self,
        autostart,
        field_sync,
        scheduler,
        logger: Optional[logging.Logger] = None,
    ):
        self.autostart = autostart
        self.field_sync = field_sync
        self.scheduler = scheduler
        self.logger = logger or get_logger("controller.autostart")

    def on_toggle(self, checked: bool):
        """Called from the UI thread after the switch changed

        The switch is not flipped back when the OS call fails, so it can
        disagree with the real autostart state until the next toggle.
        """
        self.field_sync.on_field_activity(FIELD_AUTOSTART)

        def worker():
            try:
                if checked:
                    self.autostart.enable()
                else:
                    self.autostart.disable()
                self.logger.info("Autostart %s", "enabled" if checked else "disabled")
            except Exception as e:
                self.logger.error(
                    "Failed to %s autostart: %s", "enable" if checked else "disable", e
                )

        self.scheduler.spawn(worker, "autostart-toggle")
