#!/usr/bin/env python3
"""
Campus AutoLogin - Network Package

Captive portal detection, connectivity checks and portal login.
"""

from typing import Callable

from src.models import NetworkStatus, SettingsRecord
from src.network.detector import (
    NetworkDetector,
    NetworkError,
    DetectionError,
    create_session,
    find_page_redirect,
    is_login_page,
)
from src.network.portal_login import (
    PortalLoginClient,
    LoginFormParser,
    AuthError,
)

__version__ = "1.0.0"
__description__ = "Network access for Campus AutoLogin"

__all__ = [
    "NetworkDetector",
    "NetworkError",
    "DetectionError",
    "create_session",
    "find_page_redirect",
    "is_login_page",
    "PortalLoginClient",
    "LoginFormParser",
    "AuthError",
]


class NetworkBackend:
    """
    Unified network interface used by the window

    Test and login read the saved settings, the same file the window writes,
    so they always act on what the user last committed.
    """

    def __init__(
        self,
        store,
        detector_factory: Callable[[], NetworkDetector] = NetworkDetector,
        login_client_factory: Callable[[], PortalLoginClient] = PortalLoginClient,
    ):
        self.store = store
        self.detector_factory = detector_factory
        self.login_client_factory = login_client_factory

    def _saved_settings(self) -> SettingsRecord:
        return self.store.load_settings()

    def test_connectivity(self) -> str:
        record = self._saved_settings()
        if not record.webindex:
            raise NetworkError("Login page URL is not configured")
        with self.login_client_factory() as client:
            return client.test_connection(record.webindex)

    def perform_login(self) -> None:
        record = self._saved_settings()
        with self.login_client_factory() as client:
            client.login(record)

    def detect_login_page(self) -> str:
        with self.detector_factory() as detector:
            return detector.detect_login_page()

    def get_network_status(self) -> NetworkStatus:
        with self.detector_factory() as detector:
            return detector.get_network_status()


__all__.append("NetworkBackend")
