#!/usr/bin/env python3
"""
Campus AutoLogin - Utilities Package

Utility modules for system information, settings storage, autostart and logging.
"""

from src.utils.system_utils import (
    SystemInfo,
    PathManager,
    system_info,
    path_manager,
    get_os_type,
)

from src.utils.storage import SettingsStore, PersistenceError

from src.utils.autostart import (
    AutostartManager,
    SystemIntegrationError,
    autostart_manager,
)

from src.utils.log_setup import UILogHandler, get_logger, setup_logging

__version__ = "1.0.0"
__description__ = "System utilities for Campus AutoLogin"

# Expose main utility classes and functions
__all__ = [
    "SystemInfo",
    "PathManager",
    "system_info",
    "path_manager",
    "get_os_type",
    "SettingsStore",
    "PersistenceError",
    "AutostartManager",
    "SystemIntegrationError",
    "autostart_manager",
    "UILogHandler",
    "get_logger",
    "setup_logging",
]
