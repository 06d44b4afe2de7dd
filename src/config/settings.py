#!/usr/bin/env python3
"""
Campus AutoLogin - Configuration Settings

All the configuration constants and settings for the app.
Timings, portal detection heuristics, file names, and platform-specific configs.
"""

import os

# Application Information
APP_NAME = "Campus AutoLogin"
VERSION = "1.0.0"

# Persisted settings
SETTINGS_FILE = "data.json"
CONFIG_DIR_ENV = "CAMPUS_AUTOLOGIN_CONFIG_DIR"

# Field identifiers double as the keys of the persisted record
FIELD_WEB = "webindex"
FIELD_COUNT = "countindex"
FIELD_PASSWORD = "passwordindex"
FIELD_OPERATOR = "operatorindex"
FIELD_AUTOSTART = "autostartindex"

# Operator keys map to the portal's service list (#_service_0 .. #_service_3)
OPERATORS = {
    "a": "Campus",
    "b": "China Mobile",
    "c": "China Unicom",
    "d": "China Telecom",
}
OPERATOR_SERVICE_INDEX = {"a": 0, "b": 1, "c": 2, "d": 3}

# Controller timings (milliseconds)
SAVE_DEBOUNCE_MS = 500
TOAST_TTL_MS = 5000
RESULT_DETAIL_TTL_MS = 5000
STATUS_DETAIL_TTL_MS = 10000
UI_POLL_INTERVAL_MS = 50

# Network Timeouts (seconds)
CONNECTION_TIMEOUT = 10
DETECTION_TIMEOUT = 30
LOGIN_TIMEOUT = 15

# Connectivity check: reaching this site untouched means we are online
CONNECTIVITY_CHECK_URL = "http://www.baidu.com"
CONNECTIVITY_CHECK_MARKERS = ["baidu.com", "百度"]

# Entry points tried in order when hunting for the captive portal
DETECTION_PROBE_URLS = [
    "http://www.baidu.com",
    "http://www.google.com",
    "http://www.yzu.edu.cn",
    "http://10.10.10.10",
    "http://1.1.1.1",
    "http://captive.apple.com",
    "http://connectivitycheck.gstatic.com",
]

LOGIN_URL_KEYWORDS = [
    "login",
    "auth",
    "portal",
    "认证",
    "登录",
    "connect",
    "wifilogin",
    "web-auth",
    "captive-portal",
]

GATEWAY_PREFIXES = ["10.", "192.168."] + [f"172.{n}." for n in range(16, 32)]

# Portal login form heuristics
USERNAME_FIELD_NAMES = ["username", "username_tip", "user", "account", "userid"]
USERNAME_HINTS = ["用户", "账号", "学号", "username", "account", "user"]
PASSWORD_FIELD_NAMES = ["password", "pwd", "pwd_tip", "pass"]
OPERATOR_FIELD_NAMES = ["operator", "service", "selectDisname"]
LOGIN_FAILURE_MARKERS = [
    "密码错误",
    "用户名或密码",
    "认证失败",
    "登录失败",
    "invalid password",
    "authentication failed",
    "login failed",
]

USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)

# UI Configuration
UI_THEME = "dark"
UI_COLOR_THEME = "blue"
UI_WINDOW_SIZE = "480x640"
UI_RESIZABLE = True
MIN_WINDOW_WIDTH = 440
MIN_WINDOW_HEIGHT = 600

# Language Configuration
DEFAULT_LANGUAGE = "en"  # "en" for English, "zh" for Chinese
AVAILABLE_LANGUAGES = ["en", "zh"]

# Logging Configuration
LOGGER_NAME = "campus_autologin"
LOG_FILE = "campus-autologin.log"
LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"
LOG_LEVEL = "INFO"
MAX_LOG_SIZE_MB = 5
LOG_BACKUP_COUNT = 3

# Platform-Specific Settings
AUTOSTART_ENTRY_NAME = "CampusAutoLogin"

WINDOWS_SETTINGS = {
    "run_key": r"Software\Microsoft\Windows\CurrentVersion\Run",
}

LINUX_SETTINGS = {
    "autostart_dir": "~/.config/autostart",
    "desktop_file": "campus-autologin.desktop",
}

MACOS_SETTINGS = {
    "launch_agents_dir": "~/Library/LaunchAgents",
    "plist_label": "org.campus-autologin.agent",
}

# Development/Debug Settings
DEBUG_MODE = os.getenv("CAMPUS_AUTOLOGIN_DEBUG", "false").lower() == "true"
