#!/usr/bin/env python3
"""
Campus AutoLogin - OS Autostart Integration

Registers the application to start when the user logs in.

- Windows: a value under HKCU\\Software\\Microsoft\\Windows\\CurrentVersion\\Run
- Linux: an XDG autostart .desktop entry
- macOS: a LaunchAgent plist
"""

import plistlib
import subprocess
from pathlib import Path
from typing import List, Optional

from src.config.settings import (
    APP_NAME,
    AUTOSTART_ENTRY_NAME,
    WINDOWS_SETTINGS,
    LINUX_SETTINGS,
    MACOS_SETTINGS,
)
from src.utils.system_utils import PathManager, get_os_type


class SystemIntegrationError(Exception):
    """OS-level autostart registration failed"""

    pass


class AutostartManager:
    """Enable, disable and query start-at-login for the current user"""

    def __init__(self, command: Optional[List[str]] = None, os_type: Optional[str] = None):
        self.command = command or PathManager.get_launch_command()
        self.os_type = os_type or get_os_type()

    # --- public API ---
    def enable(self) -> None:
        try:
            if self.os_type == "Windows":
                self._enable_windows()
            elif self.os_type == "Darwin":
                self._enable_macos()
            else:
                self._enable_linux()
        except SystemIntegrationError:
            raise
        except Exception as e:
            raise SystemIntegrationError(f"Failed to enable autostart: {e}") from e

    def disable(self) -> None:
        try:
            if self.os_type == "Windows":
                self._disable_windows()
            elif self.os_type == "Darwin":
                self._disable_macos()
            else:
                self._disable_linux()
        except SystemIntegrationError:
            raise
        except Exception as e:
            raise SystemIntegrationError(f"Failed to disable autostart: {e}") from e

    def is_enabled(self) -> bool:
        try:
            if self.os_type == "Windows":
                return self._windows_value() is not None
            elif self.os_type == "Darwin":
                return self.launch_agent_path().exists()
            return self.desktop_entry_path().exists()
        except Exception:
            return False

    # --- Windows ---
    def _command_line(self) -> str:
        return subprocess.list2cmdline(self.command)

    def _enable_windows(self) -> None:
        import winreg

        key = winreg.OpenKey(
            winreg.HKEY_CURRENT_USER, WINDOWS_SETTINGS["run_key"], 0, winreg.KEY_SET_VALUE
        )
        try:
            winreg.SetValueEx(key, AUTOSTART_ENTRY_NAME, 0, winreg.REG_SZ, self._command_line())
        finally:
            winreg.CloseKey(key)

    def _disable_windows(self) -> None:
        import winreg

        key = winreg.OpenKey(
            winreg.HKEY_CURRENT_USER, WINDOWS_SETTINGS["run_key"], 0, winreg.KEY_SET_VALUE
        )
        try:
            winreg.DeleteValue(key, AUTOSTART_ENTRY_NAME)
        except FileNotFoundError:
            pass  # already disabled
        finally:
            winreg.CloseKey(key)

    def _windows_value(self) -> Optional[str]:
        import winreg

        key = winreg.OpenKey(winreg.HKEY_CURRENT_USER, WINDOWS_SETTINGS["run_key"])
        try:
            value, _ = winreg.QueryValueEx(key, AUTOSTART_ENTRY_NAME)
            return value
        except FileNotFoundError:
            return None
        finally:
            winreg.CloseKey(key)

    # --- Linux ---
    def desktop_entry_path(self) -> Path:
        return (
            Path(LINUX_SETTINGS["autostart_dir"]).expanduser()
            / LINUX_SETTINGS["desktop_file"]
        )

    def _enable_linux(self) -> None:
        desktop_path = self.desktop_entry_path()
        desktop_path.parent.mkdir(parents=True, exist_ok=True)

        desktop_contents = (
            "[Desktop Entry]\n"
            "Type=Application\n"
            f"Name={APP_NAME}\n"
            "Comment=Log in to the campus network at startup\n"
            f"Exec={self._command_line()}\n"
            "Terminal=false\n"
            "X-GNOME-Autostart-enabled=true\n"
        )
        desktop_path.write_text(desktop_contents, encoding="utf-8")

    def _disable_linux(self) -> None:
        self.desktop_entry_path().unlink(missing_ok=True)

    # --- macOS ---
    def launch_agent_path(self) -> Path:
        return (
            Path(MACOS_SETTINGS["launch_agents_dir"]).expanduser()
            / f"{MACOS_SETTINGS['plist_label']}.plist"
        )

    def _enable_macos(self) -> None:
        plist_path = self.launch_agent_path()
        plist_path.parent.mkdir(parents=True, exist_ok=True)
        payload = {
            "Label": MACOS_SETTINGS["plist_label"],
            "ProgramArguments": list(self.command),
            "RunAtLoad": True,
        }
        with open(plist_path, "wb") as f:
            plistlib.dump(payload, f)

    def _disable_macos(self) -> None:
        self.launch_agent_path().unlink(missing_ok=True)


# Global autostart manager instance
autostart_manager = AutostartManager()
