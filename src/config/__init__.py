#!/usr/bin/env python3
"""
Campus AutoLogin - Configuration Package

Configuration management for the application.
"""

from src.config.settings import *
from src.config.translations import translator, t, LANG_ENGLISH, LANG_CHINESE

__version__ = "1.0.0"
__description__ = "Configuration management for Campus AutoLogin"

# Expose main configuration items for easy access
__all__ = [
    "APP_NAME",
    "VERSION",
    "SETTINGS_FILE",
    "OPERATORS",
    "SAVE_DEBOUNCE_MS",
    "TOAST_TTL_MS",
    "RESULT_DETAIL_TTL_MS",
    "STATUS_DETAIL_TTL_MS",
    "UI_THEME",
    "DEBUG_MODE",
    "translator",
    "t",
    "LANG_ENGLISH",
    "LANG_CHINESE",
]
