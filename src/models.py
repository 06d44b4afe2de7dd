#!/usr/bin/env python3
"""
Campus AutoLogin - Data Models

Shared records passed between the UI, the controller, and the backend:
the persisted login settings and the result of a network status query.
"""

from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional

from src.config.settings import (
    FIELD_WEB,
    FIELD_COUNT,
    FIELD_PASSWORD,
    FIELD_OPERATOR,
    FIELD_AUTOSTART,
)

# Exactly the keys written to storage, in form order
FIELD_IDS = (FIELD_WEB, FIELD_COUNT, FIELD_PASSWORD, FIELD_OPERATOR, FIELD_AUTOSTART)


@dataclass
class SettingsRecord:
    """Login settings as edited in the window and stored on disk

    Every value is a string, including the autostart flag ("true"/"false").
    """

    webindex: str = ""
    countindex: str = ""
    passwordindex: str = ""
    operatorindex: str = ""
    autostartindex: str = "false"

    @property
    def autostart_enabled(self) -> bool:
        return self.autostartindex == "true"

    def to_dict(self) -> Dict[str, str]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SettingsRecord":
        """Build a record from stored data, filling absent or null keys with defaults"""
        defaults = cls()
        values = {}
        for key in FIELD_IDS:
            value = data.get(key)
            values[key] = getattr(defaults, key) if value is None else str(value)
        return cls(**values)


@dataclass
class NetworkStatus:
    """Outcome of a connectivity check plus login page detection"""

    connected: bool
    connectivity_result: str
    needs_authentication: bool = False
    login_url: Optional[str] = None
    detection_error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "connected": self.connected,
            "connectivity_result": self.connectivity_result,
            "needs_authentication": self.needs_authentication,
        }
        if self.login_url is not None:
            data["login_url"] = self.login_url
        if self.detection_error is not None:
            data["detection_error"] = self.detection_error
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "NetworkStatus":
        return cls(
            connected=bool(data.get("connected", False)),
            connectivity_result=str(data.get("connectivity_result", "")),
            needs_authentication=bool(data.get("needs_authentication", False)),
            login_url=data.get("login_url"),
            detection_error=data.get("detection_error"),
        )
