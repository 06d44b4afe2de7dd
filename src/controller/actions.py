#!/usr/bin/env python3
"""
Campus AutoLogin - Network Action Coordinator

The four network actions the window can start: connection test, login,
login page detection, and the login fired at startup when autostart is on.

Each action runs its backend call on a worker thread and reports back through
toasts and detail panels. Failures end in exactly one toast carrying the
error text; nothing escapes the action and nothing is retried. Actions are
independent: starting one while another is still running is allowed.
"""

import logging
from typing import Callable, Optional

from src.config.settings import RESULT_DETAIL_TTL_MS, STATUS_DETAIL_TTL_MS
from src.config.translations import t
from src.controller.notifications import result_detail, status_detail
from src.utils.log_setup import get_logger


class NetworkActionCoordinator:
    """Runs network actions off the UI thread and presents their outcome"""

    def __init__(
        self,
        backend,
        view,
        field_sync,
        notifier,
        scheduler,
        logger: Optional[logging.Logger] = None,
    ):
        self.backend = backend
        self.view = view
        self.field_sync = field_sync
        self.notifier = notifier
        self.scheduler = scheduler
        self.logger = logger or get_logger("controller.actions")

    def _ui(self, callback: Callable[[], None]):
        self.scheduler.post(callback)

    def _toast(self, message: str):
        self._ui(lambda: self.notifier.show_toast(message))

    def _run_action(
        self,
        name: str,
        job: Callable[[], None],
        failure_key: str,
        cleanup: Optional[Callable[[], None]] = None,
    ):
        """Run job on a worker; failures become a single toast, cleanup always runs"""

        def worker():
            try:
                self.logger.info("Starting %s...", name)
                job()
            except Exception as e:
                self.logger.error("%s failed: %s", name, e)
                self._toast(f"{t(failure_key)}: {e}")
            finally:
                if cleanup is not None:
                    self._ui(cleanup)

        self.scheduler.spawn(worker, name)

    def test_connection(self):
        """Check the saved login page and show the raw result"""

        def job():
            result = self.backend.test_connectivity()
            self.logger.info("Connection test result:\n%s", result)

            def present():
                self.notifier.show_toast(t("test_complete"))
                self.notifier.show_detail(result_detail(result), RESULT_DETAIL_TTL_MS)

            self._ui(present)

        self._run_action("connection test", job, "test_failed")

    def login(self):
        """Log in with the saved settings"""

        def job():
            self.backend.perform_login()
            self._toast(t("login_started"))

        self._run_action("login", job, "login_failed")

    def autostart_login(self):
        """Login fired once at startup when autostart is enabled"""

        def job():
            self.backend.perform_login()
            self._toast(t("autostart_login_started"))

        self._run_action("automatic login", job, "autostart_login_failed")

    def auto_detect_login_page(self):
        """Find the login page, store its URL, then show the network status

        Call from the UI thread. The detect button stays busy until the status
        query has finished, whichever way it ends.
        """
        self.view.set_detect_busy(True)
        self.notifier.show_toast(t("detecting"))

        def job():
            login_url = self.backend.detect_login_page()

            def apply_url():
                self.view.set_login_url(login_url)
                self.field_sync.commit_now()
                self.notifier.show_toast(t("detect_success", url=login_url))

            self._ui(apply_url)

            status = self.backend.get_network_status()
            self._ui(lambda: self.notifier.show_detail(status_detail(status), STATUS_DETAIL_TTL_MS))

        self._run_action(
            "login page detection",
            job,
            "detect_failed",
            cleanup=lambda: self.view.set_detect_busy(False),
        )
