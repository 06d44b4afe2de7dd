#!/usr/bin/env python3
"""
Campus AutoLogin - Captive Portal Detector

Finds the campus network login page and reports whether we are online.

Campus gateways hijack plain HTTP requests and bounce them to the login page,
sometimes with a real redirect, sometimes with a meta refresh or a bit of
JavaScript. We follow all three and then decide whether the final URL looks
like a login page.
"""

import re
from typing import Optional, Tuple
from urllib.parse import urljoin, urlparse

import requests
from bs4 import BeautifulSoup

from src.config.settings import (
    DETECTION_TIMEOUT,
    CONNECTION_TIMEOUT,
    CONNECTIVITY_CHECK_URL,
    CONNECTIVITY_CHECK_MARKERS,
    DETECTION_PROBE_URLS,
    LOGIN_URL_KEYWORDS,
    GATEWAY_PREFIXES,
    USER_AGENT,
)
from src.models import NetworkStatus
from src.utils.log_setup import get_logger

logger = get_logger("network.detector")

# location.href = '...', location.replace("..."), window.location = '...'
SCRIPT_REDIRECT_PATTERN = re.compile(
    r"location(?:\.href)?\s*(?:=|\.replace\(|\.assign\()\s*['\"]([^'\"]+)['\"]",
    re.IGNORECASE,
)

MAX_PAGE_HOPS = 3


class NetworkError(Exception):
    """Network could not be reached or answered unexpectedly"""

    pass


class DetectionError(NetworkError):
    """No login page could be found"""

    pass


def create_session() -> requests.Session:
    """Session that ignores system proxies, like a browser started with no-proxy-server"""
    session = requests.Session()
    session.trust_env = False
    session.headers.update(
        {
            "User-Agent": USER_AGENT,
            "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
        }
    )
    return session


def find_page_redirect(html_content: str, base_url: str) -> Optional[str]:
    """Return the target of a meta refresh or script redirect, if the page has one"""
    if not html_content:
        return None

    soup = BeautifulSoup(html_content, "html.parser")

    meta = soup.find(
        "meta", attrs={"http-equiv": lambda v: v and v.lower() == "refresh"}
    )
    if meta and meta.get("content"):
        match = re.search(r"url\s*=\s*['\"]?([^'\";]+)", meta["content"], re.IGNORECASE)
        if match:
            return urljoin(base_url, match.group(1).strip())

    for script in soup.find_all("script"):
        match = SCRIPT_REDIRECT_PATTERN.search(script.get_text() or "")
        if match:
            return urljoin(base_url, match.group(1).strip())

    return None


def is_login_page(url: str) -> bool:
    """Guess whether a URL belongs to a campus login portal"""
    try:
        parsed = urlparse(url)
    except ValueError:
        return False

    url_lower = url.lower()
    if any(keyword in url_lower for keyword in LOGIN_URL_KEYWORDS):
        return True

    host = parsed.hostname or ""
    return any(host.startswith(prefix) for prefix in GATEWAY_PREFIXES)


class NetworkDetector:
    """Probe well-known sites to find the campus login page"""

    def __init__(
        self,
        timeout: float = DETECTION_TIMEOUT,
        session: Optional[requests.Session] = None,
    ):
        self.timeout = timeout
        self.session = session or create_session()

    def close(self):
        self.session.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def resolve_final_url(self, initial_url: str, timeout: Optional[float] = None) -> Tuple[str, str]:
        """Follow HTTP, meta refresh and script redirects

        Returns (final_url, page_html).
        """
        url = initial_url
        html_content = ""
        for _ in range(MAX_PAGE_HOPS):
            try:
                response = self.session.get(
                    url, timeout=timeout or self.timeout, allow_redirects=True
                )
            except requests.exceptions.Timeout as e:
                raise NetworkError(f"Timed out loading {url}") from e
            except requests.exceptions.RequestException as e:
                raise NetworkError(f"Cannot reach {url}: {e}") from e

            url = response.url or url
            html_content = response.text or ""
            target = find_page_redirect(html_content, url)
            if not target or target == url:
                break
            url = target

        logger.debug("Initial URL %s -> final URL %s", initial_url, url)
        return url, html_content

    def detect_login_page(self) -> str:
        """Return the URL of the campus login page

        Raises DetectionError when none of the probe URLs lands on a login page.
        """
        logger.info("Detecting campus login page...")
        last_error: Optional[Exception] = None

        for probe_url in DETECTION_PROBE_URLS:
            logger.debug("Trying %s", probe_url)
            try:
                final_url, _ = self.resolve_final_url(probe_url)
            except NetworkError as e:
                last_error = e
                continue

            if is_login_page(final_url):
                logger.info("Found login page: %s", final_url)
                return final_url

        raise DetectionError(f"No login page found, last error: {last_error}")

    def test_network_connectivity(self) -> Tuple[bool, str]:
        """Check whether the open internet is reachable

        Returns (connected, human readable message).
        """
        logger.info("Testing network connectivity...")
        final_url, html_content = self.resolve_final_url(
            CONNECTIVITY_CHECK_URL, timeout=CONNECTION_TIMEOUT
        )

        title = ""
        if html_content:
            soup = BeautifulSoup(html_content, "html.parser")
            if soup.title and soup.title.string:
                title = soup.title.string.strip()

        if any(marker in final_url or marker in title for marker in CONNECTIVITY_CHECK_MARKERS):
            return True, "Network connected, the internet is reachable"
        if is_login_page(final_url):
            return False, f"Network requires authentication, redirected to login page: {final_url}"
        return False, f"Network state unknown, final URL: {final_url}"

    def get_network_status(self) -> NetworkStatus:
        """Connectivity plus, when offline, an attempt to locate the login page"""
        connected, message = self.test_network_connectivity()
        status = NetworkStatus(connected=connected, connectivity_result=message)

        if not connected:
            try:
                status.login_url = self.detect_login_page()
                status.needs_authentication = True
            except DetectionError as e:
                status.detection_error = str(e)

        return status
