#!/usr/bin/env python3
"""
Campus AutoLogin - Portal Login

Fills in and submits the campus login form.

Portals differ a lot in field names ("username" vs "username_tip" vs "account"),
so we parse the form with BeautifulSoup and guess which inputs hold the account,
the password and the operator choice. Hidden fields are carried over untouched.
"""

from typing import Any, Dict, List, Optional
from urllib.parse import urljoin, urlparse

import requests
from bs4 import BeautifulSoup

from src.config.settings import (
    LOGIN_TIMEOUT,
    OPERATOR_SERVICE_INDEX,
    USERNAME_FIELD_NAMES,
    USERNAME_HINTS,
    PASSWORD_FIELD_NAMES,
    OPERATOR_FIELD_NAMES,
    LOGIN_FAILURE_MARKERS,
)
from src.models import SettingsRecord
from src.network.detector import NetworkError, create_session
from src.utils.log_setup import get_logger

logger = get_logger("network.login")


class AuthError(Exception):
    """The portal rejected the login or the settings cannot be used to log in"""

    pass


class LoginFormParser:
    """Parse a portal page to find the login form and its fields"""

    @staticmethod
    def parse_login_form(html_content: str, base_url: str) -> Optional[Dict[str, Any]]:
        """
        Find the form holding a password input

        Returns dict with action URL, method, all named fields, and the names
        of the username/password/operator fields. None if no login form exists.
        """
        soup = BeautifulSoup(html_content or "", "html.parser")

        password_input = soup.find("input", attrs={"type": lambda v: v and v.lower() == "password"})
        if password_input is None:
            password_input = soup.find("input", attrs={"name": PASSWORD_FIELD_NAMES})
        if password_input is None:
            return None

        form = password_input.find_parent("form") or soup

        fields: Dict[str, Dict[str, Any]] = {}
        for elem in form.find_all(["input", "select", "textarea"]):
            name = elem.get("name", "")
            if not name:
                continue
            fields[name] = {
                "tag": elem.name,
                "type": (elem.get("type") or "text").lower(),
                "value": elem.get("value", ""),
                "id": elem.get("id", ""),
                "placeholder": elem.get("placeholder", ""),
            }

        action = form.get("action", "") if form is not soup else ""
        method = (form.get("method", "post") if form is not soup else "post").lower()

        return {
            "action_url": urljoin(base_url, action) if action else base_url,
            "method": method,
            "fields": fields,
            "username_field": LoginFormParser.guess_username_field(fields),
            "password_field": password_input.get("name"),
            "operator": LoginFormParser.find_operator_control(form),
        }

    @staticmethod
    def guess_username_field(fields: Dict[str, Dict[str, Any]]) -> Optional[str]:
        """Pick the account input: known names first, then hints, then the first text box"""
        text_fields = {
            name: info
            for name, info in fields.items()
            if info["tag"] == "input" and info["type"] in ("text", "email", "tel", "number")
        }

        for candidate in USERNAME_FIELD_NAMES:
            for name in text_fields:
                if name.lower() == candidate:
                    return name

        for name, info in text_fields.items():
            haystack = f"{name} {info['id']} {info['placeholder']}".lower()
            if any(hint.lower() in haystack for hint in USERNAME_HINTS):
                return name

        return next(iter(text_fields), None)

    @staticmethod
    def find_operator_control(form) -> Optional[Dict[str, Any]]:
        """Locate the operator choice: a <select> or a group of #_service_N radios

        Returns {"name": field name, "values": [option values in page order]}.
        Placeholder options (empty value or disabled) are left out.
        """
        for select in form.find_all("select"):
            key = f"{select.get('name', '')} {select.get('id', '')}"
            if any(hint.lower() in key.lower() for hint in OPERATOR_FIELD_NAMES):
                values = []
                for opt in select.find_all("option"):
                    if opt.has_attr("disabled"):
                        continue
                    value = opt.get("value", opt.get_text(strip=True))
                    if value:
                        values.append(value)
                return {"name": select.get("name") or select.get("id"), "values": values}

        services: List[Any] = []
        for elem in form.find_all("input"):
            if (elem.get("id") or "").startswith("_service_"):
                services.append(elem)
        if services:
            services.sort(key=lambda e: e.get("id"))
            return {
                "name": services[0].get("name") or "service",
                "values": [e.get("value", "") for e in services],
            }

        return None


class PortalLoginClient:
    """Log in to the campus portal with plain HTTP requests"""

    def __init__(self, session: Optional[requests.Session] = None, timeout: float = LOGIN_TIMEOUT):
        self.session = session or create_session()
        self.timeout = timeout

    def close(self):
        self.session.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def _get(self, url: str) -> requests.Response:
        try:
            response = self.session.get(url, timeout=self.timeout)
        except requests.exceptions.Timeout as e:
            raise NetworkError(f"Login page timed out: {url}") from e
        except requests.exceptions.RequestException as e:
            raise NetworkError(f"Cannot open login page {url}: {e}") from e

        if response.status_code >= 400:
            raise NetworkError(f"Login page returned status {response.status_code}")
        return response

    def test_connection(self, url: str) -> str:
        """Load the login page and report whether the login form is usable"""
        logger.info("Running connection test against %s", url)
        response = self._get(url)
        form = LoginFormParser.parse_login_form(response.text, response.url or url)

        username_found = bool(form and form["username_field"])
        password_found = bool(form and form["password_field"])

        def found(flag: bool) -> str:
            return "found" if flag else "not found"

        result = (
            "Connection test result:\n"
            f"- Page load: OK ({response.status_code})\n"
            f"- Username field: {found(username_found)}\n"
            f"- Password field: {found(password_found)}"
        )
        logger.info(result)
        return result

    def build_payload(self, form: Dict[str, Any], record: SettingsRecord) -> Dict[str, str]:
        """Form data for submission: hidden fields plus account, password and operator"""
        payload: Dict[str, str] = {}
        for name, info in form["fields"].items():
            if info["type"] in ("hidden", "submit") and info["value"]:
                payload[name] = info["value"]

        if not form["username_field"]:
            raise AuthError("Cannot find the username field on the login page")
        if not form["password_field"]:
            raise AuthError("Cannot find the password field on the login page")
        payload[form["username_field"]] = record.countindex
        payload[form["password_field"]] = record.passwordindex

        operator = form.get("operator")
        if operator and record.operatorindex and record.operatorindex in operator["values"]:
            # The portal uses our operator keys as its own values
            payload[operator["name"]] = record.operatorindex
        elif operator:
            index = OPERATOR_SERVICE_INDEX.get(record.operatorindex)
            if index is None:
                raise AuthError(f"Invalid operator selection: {record.operatorindex!r}")
            if index >= len(operator["values"]):
                raise AuthError(f"Operator {record.operatorindex!r} is not offered by this portal")
            payload[operator["name"]] = operator["values"][index]

        return payload

    def login(self, record: SettingsRecord) -> None:
        """Submit the login form

        Raises NetworkError when the portal cannot be reached and AuthError when it
        rejects the credentials.
        """
        if not record.webindex:
            raise NetworkError("Login page URL is not configured")

        logger.info("Starting automatic login")
        page = self._get(record.webindex)
        base_url = page.url or record.webindex

        form = LoginFormParser.parse_login_form(page.text, base_url)
        if form is None:
            raise AuthError("No login form found on the login page")

        payload = self.build_payload(form, record)

        headers = {"Referer": base_url}
        parsed = urlparse(form["action_url"])
        if parsed.scheme and parsed.netloc:
            headers["Origin"] = f"{parsed.scheme}://{parsed.netloc}"

        try:
            if form["method"] == "get":
                response = self.session.get(
                    form["action_url"], params=payload, headers=headers, timeout=self.timeout
                )
            else:
                response = self.session.post(
                    form["action_url"], data=payload, headers=headers, timeout=self.timeout
                )
        except requests.exceptions.RequestException as e:
            raise NetworkError(f"Login request failed: {e}") from e

        self._check_response(response)
        logger.info("Automatic login submitted")

    @staticmethod
    def _check_response(response: requests.Response):
        if response.status_code >= 400:
            raise NetworkError(f"Portal returned status {response.status_code}")

        content = response.text or ""
        lowered = content.lower()
        for marker in LOGIN_FAILURE_MARKERS:
            if marker.lower() in lowered:
                raise AuthError(f"Portal rejected the login: {marker}")
