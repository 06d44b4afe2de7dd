#!/usr/bin/env python3
"""
Campus AutoLogin - Source Package

Main source package for the campus network auto-login application.
"""

__version__ = "1.0.0"
__author__ = "Campus AutoLogin contributors"
__description__ = "Campus AutoLogin - keeps you logged in to the campus network"

# Package metadata
__all__ = ["__version__", "__author__", "__description__"]
