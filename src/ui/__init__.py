#!/usr/bin/env python3
"""
Campus AutoLogin - UI Package

Dark mode CustomTkinter window for the login settings and network actions.
"""

from src.ui.main_window import (
    CampusAutoLoginApp,
    SettingsFrame,
    ActionButtonsFrame,
    LogFrame,
    TkNoticeRenderer,
    main,
)

__version__ = "1.0.0"
__description__ = "Dark mode user interface for Campus AutoLogin"

__all__ = [
    # Main application
    "CampusAutoLoginApp",
    "main",
    # UI Components
    "SettingsFrame",
    "ActionButtonsFrame",
    "LogFrame",
    "TkNoticeRenderer",
]


def create_app() -> CampusAutoLoginApp:
    """
    Create and return the main application instance

    Returns:
        CampusAutoLoginApp: Main application window
    """
    return CampusAutoLoginApp()


__all__.append("create_app")
