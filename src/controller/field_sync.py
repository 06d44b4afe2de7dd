#!/usr/bin/env python3
"""
Campus AutoLogin - Debounced Field Sync

Saves the login settings shortly after the user stops typing. Every edit
pushes the save back by SAVE_DEBOUNCE_MS; when it finally fires it reads all
five fields as they are *now*, so a burst of edits becomes one write.
"""

import logging
from typing import Optional

from src.config.settings import SAVE_DEBOUNCE_MS
from src.controller.scheduler import PendingSaveTimer
from src.models import FIELD_IDS
from src.utils.log_setup import get_logger


class FieldSync:
    """Coalesce field edits into whole-record saves"""

    def __init__(
        self,
        view,
        store,
        scheduler,
        logger: Optional[logging.Logger] = None,
        quiet_period_ms: int = SAVE_DEBOUNCE_MS,
    ):
        self.view = view
        self.store = store
        self.scheduler = scheduler
        self.logger = logger or get_logger("controller.field_sync")
        self.quiet_period_ms = quiet_period_ms
        self.timer = PendingSaveTimer(scheduler)

    def on_field_activity(self, field_id: str):
        """Called from the UI thread for every edit of a settings field"""
        if field_id not in FIELD_IDS:
            raise ValueError(f"Unknown settings field: {field_id}")
        self.timer.reschedule(self.quiet_period_ms, self.commit_now)

    def commit_now(self):
        """Save the current field values right away, skipping the quiet period"""
        self.timer.cancel()
        record = self.view.read_settings()

        def save():
            try:
                self.store.save_settings(record)
                self.logger.debug("Settings saved")
            except Exception as e:
                # Edits stay in the window; the next commit will try again
                self.logger.error("Failed to save settings: %s", e)

        self.scheduler.spawn(save, "settings-save")
