#!/usr/bin/env python3
"""
Campus AutoLogin - System Utilities

System utilities for detecting the OS, listing network interfaces, and locating app directories.
"""

import os
import sys
import platform
import socket
from pathlib import Path
from typing import Dict, List, Optional

import psutil

from src.config.settings import CONFIG_DIR_ENV


class SystemInfo:
    """System information and utilities"""

    def __init__(self):
        self.os_type = platform.system()
        self.os_release = platform.release()
        self.architecture = platform.architecture()[0]
        self.machine = platform.machine()
        self._distro_info = None

    def is_windows(self) -> bool:
        return self.os_type == "Windows"

    def is_linux(self) -> bool:
        return self.os_type == "Linux"

    def is_macos(self) -> bool:
        return self.os_type == "Darwin"

    def is_supported(self) -> bool:
        return self.is_windows() or self.is_linux() or self.is_macos()

    def get_linux_distro(self) -> Optional[Dict[str, str]]:
        """Get Linux distribution information"""
        if not self.is_linux() or self._distro_info:
            return self._distro_info

        distro_info = {}
        try:
            with open("/etc/os-release", "r") as f:
                for line in f:
                    if "=" in line:
                        key, value = line.strip().split("=", 1)
                        distro_info[key] = value.strip('"')
        except OSError:
            pass

        self._distro_info = {
            "id": distro_info.get("ID", "unknown").lower(),
            "name": distro_info.get("NAME", "Unknown Linux"),
            "pretty_name": distro_info.get("PRETTY_NAME", "Unknown Linux"),
        }
        return self._distro_info

    def get_network_interfaces(self) -> List[Dict[str, object]]:
        """List network interfaces that are up, with their IPv4 addresses"""
        interfaces = []
        try:
            stats = psutil.net_if_stats()
            addresses = psutil.net_if_addrs()
        except (OSError, psutil.Error):
            return interfaces

        for name, stat in sorted(stats.items()):
            if not stat.isup:
                continue
            ipv4 = [
                addr.address
                for addr in addresses.get(name, [])
                if addr.family == socket.AF_INET
            ]
            interfaces.append(
                {"name": name, "addresses": ipv4, "speed_mbps": stat.speed}
            )
        return interfaces

    def get_system_summary(self) -> str:
        """Get human-readable system summary"""
        if self.is_windows():
            return f"Windows {self.os_release} ({self.architecture})"
        elif self.is_linux():
            distro = self.get_linux_distro()
            return distro["pretty_name"] if distro else f"Linux ({self.architecture})"
        else:
            return f"{self.os_type} {self.os_release} ({self.architecture})"


class PathManager:
    """Path and file system utilities"""

    @staticmethod
    def get_config_dir() -> Path:
        """Get user configuration directory"""
        override = os.environ.get(CONFIG_DIR_ENV)
        if override:
            return Path(override)
        if platform.system() == "Windows":
            return Path(os.environ.get("APPDATA", "")) / "CampusAutoLogin"
        elif platform.system() == "Darwin":
            return Path.home() / "Library" / "Application Support" / "CampusAutoLogin"
        else:
            return Path.home() / ".config" / "campus-autologin"

    @staticmethod
    def get_logs_dir() -> Path:
        return PathManager.get_config_dir() / "logs"

    @staticmethod
    def get_launch_command() -> List[str]:
        """Command line that starts this application"""
        if getattr(sys, "frozen", False):
            return [sys.executable]
        entry = Path(__file__).resolve().parent.parent.parent / "main.py"
        return [sys.executable, str(entry)]

    @staticmethod
    def ensure_directory(path: Path) -> bool:
        """Ensure directory exists, create if needed"""
        try:
            path.mkdir(parents=True, exist_ok=True)
            return True
        except OSError:
            return False


# Global system info instance
system_info = SystemInfo()
path_manager = PathManager()


# Convenience functions
def get_os_type() -> str:
    return system_info.os_type
