#!/usr/bin/env python3
"""
Campus AutoLogin - Translation System

Bilingual support for English and Chinese.
"""

from src.config.settings import DEFAULT_LANGUAGE, AVAILABLE_LANGUAGES

# Language codes
LANG_ENGLISH = "en"
LANG_CHINESE = "zh"

# Translation dictionary
TRANSLATIONS = {
    # Window labels
    "app_title": {
        "en": "Campus AutoLogin",
        "zh": "校园网自动登录",
    },
    "language": {
        "en": "中文",
        "zh": "English",
    },
    "settings_title": {
        "en": "Login settings",
        "zh": "登录设置",
    },
    "login_url": {
        "en": "Login page URL:",
        "zh": "登录页面地址:",
    },
    "account": {
        "en": "Account:",
        "zh": "账号:",
    },
    "password": {
        "en": "Password:",
        "zh": "密码:",
    },
    "operator": {
        "en": "Operator:",
        "zh": "运营商:",
    },
    "autostart": {
        "en": "Start with system and log in",
        "zh": "开机自启并自动登录",
    },
    "show": {
        "en": "Show",
        "zh": "显示",
    },
    "hide": {
        "en": "Hide",
        "zh": "隐藏",
    },
    "detect": {
        "en": "Auto detect",
        "zh": "自动检测",
    },
    "detecting_label": {
        "en": "Detecting...",
        "zh": "检测中...",
    },
    "test_login": {
        "en": "Test connection",
        "zh": "测试连接",
    },
    "quit": {
        "en": "Quit",
        "zh": "退出",
    },
    "activity_log": {
        "en": "Activity log",
        "zh": "运行日志",
    },
    "close": {
        "en": "Close",
        "zh": "关闭",
    },
    "raw_data": {
        "en": "Raw data",
        "zh": "详细数据",
    },
    "detect_tooltip": {
        "en": "Find the campus login page automatically, no URL needed",
        "zh": "自动检测校园网登录页面，无需手动输入URL",
    },
    "test_tooltip": {
        "en": "Left click: test connection | Right click: log in now",
        "zh": "左键：测试网络连接 | 右键：执行自动登录",
    },

    # Action results
    "test_complete": {
        "en": "Connection test complete",
        "zh": "连接测试完成",
    },
    "test_failed": {
        "en": "Connection test failed",
        "zh": "连接测试失败",
    },
    "test_result_title": {
        "en": "Connection test result",
        "zh": "连接测试结果",
    },
    "login_started": {
        "en": "Logging in...",
        "zh": "正在登录...",
    },
    "login_failed": {
        "en": "Login failed",
        "zh": "登录失败",
    },
    "autostart_login_started": {
        "en": "Automatic login triggered",
        "zh": "自动登录已触发",
    },
    "autostart_login_failed": {
        "en": "Automatic login failed",
        "zh": "自动登录失败",
    },
    "detecting": {
        "en": "Detecting the campus login page, please wait...",
        "zh": "正在检测校园网登录页面，请稍候...",
    },
    "detect_success": {
        "en": "Login page detected: {url}",
        "zh": "成功检测到登录页面: {url}",
    },
    "detect_failed": {
        "en": "Detection failed",
        "zh": "检测失败",
    },

    # Network status detail
    "status_title": {
        "en": "Network status",
        "zh": "网络状态信息",
    },
    "status_login_page": {
        "en": "Login page detected: {url}",
        "zh": "检测到登录页面: {url}",
    },
    "status_detection_error": {
        "en": "Detection error: {error}",
        "zh": "检测错误: {error}",
    },
    "status_no_detail": {
        "en": "No further details",
        "zh": "没有更多信息",
    },

    # Help
    "help_title": {
        "en": "Help & Shortcuts",
        "zh": "帮助与快捷键",
    },
    "help_text": {
        "en": (
            "{app} v{version}\n\n"
            "Keyboard Shortcuts:\n"
            "• Ctrl+T - Test connection\n"
            "• Ctrl+L - Log in now\n"
            "• Ctrl+D - Detect login page\n"
            "• F1 - Show this help\n"
            "• Ctrl+Q - Quit application\n\n"
            "Settings are saved automatically while you type."
        ),
        "zh": (
            "{app} v{version}\n\n"
            "快捷键:\n"
            "• Ctrl+T - 测试连接\n"
            "• Ctrl+L - 立即登录\n"
            "• Ctrl+D - 检测登录页面\n"
            "• F1 - 显示帮助\n"
            "• Ctrl+Q - 退出程序\n\n"
            "输入的设置会自动保存。"
        ),
    },
}


class TranslationManager:
    """Manages translations for the application"""

    def __init__(self, language: str = DEFAULT_LANGUAGE):
        self.language = language

    def set_language(self, language: str):
        """Set the current language"""
        if language in AVAILABLE_LANGUAGES:
            self.language = language
        else:
            self.language = DEFAULT_LANGUAGE

    def get(self, key: str, **kwargs) -> str:
        """Get translated string for the current language"""
        if key not in TRANSLATIONS:
            return key

        translation = TRANSLATIONS[key].get(
            self.language, TRANSLATIONS[key].get(LANG_ENGLISH, key)
        )

        if kwargs:
            try:
                translation = translation.format(**kwargs)
            except (KeyError, ValueError):
                pass

        return translation

    def get_language(self) -> str:
        """Get current language code"""
        return self.language

    def toggle(self) -> str:
        """Switch between English and Chinese, returning the new code"""
        self.set_language(LANG_CHINESE if self.language == LANG_ENGLISH else LANG_ENGLISH)
        return self.language


# Global translation manager instance
translator = TranslationManager()


# Convenience function
def t(key: str, **kwargs) -> str:
    """Shorthand for translator.get()"""
    return translator.get(key, **kwargs)
