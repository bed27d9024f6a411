# src/modbundle/bundle/fetcher.py
"""
Downloads source archives.

Only "give me the bytes behind this URL" lives here. http(s) URLs go through
requests; file:// URLs and bare paths are read from disk.
"""

import logging
import threading
from pathlib import Path
from typing import List, Optional
from urllib.parse import unquote, urlparse

import requests

from modbundle.core.exceptions import FetchError

logger = logging.getLogger(__name__)


class HttpFetcher:
    def __init__(self, timeout: Optional[float] = 60.0, user_agent: Optional[str] = None,
                 session: Optional[requests.Session] = None):
        """
        :param timeout: Seconds to wait for connect and for each read; None waits forever.
        :param user_agent: Optional User-Agent header.
        :param session: Optional pre-configured requests session, shared by every thread.
            Without one, each thread that fetches gets its own session.
        """
        self.timeout = timeout
        self.user_agent = user_agent
        self._shared_session = session
        self._local = threading.local()
        self._sessions: List[requests.Session] = []
        self._lock = threading.Lock()
        if session is not None and user_agent:
            session.headers["User-Agent"] = user_agent

    @property
    def session(self) -> requests.Session:
        """The session used by the calling thread."""
        if self._shared_session is not None:
            return self._shared_session
        session = getattr(self._local, "session", None)
        if session is None:
            session = requests.Session()
            if self.user_agent:
                session.headers["User-Agent"] = self.user_agent
            self._local.session = session
            with self._lock:
                self._sessions.append(session)
        return session

    def fetch(self, url: str, source: Optional[str] = None) -> bytes:
        """
        Return the body of `url`.

        :param source: Name of the kit/add-on being fetched, for error reporting.
        :raises FetchError: on non-success status, timeout, connection failure or missing file.
        """
        parsed = urlparse(url)
        if parsed.scheme in ("http", "https"):
            return self._fetch_http(url, source)
        if parsed.scheme == "file":
            return self._read_file(Path(unquote(parsed.path)), url, source)
        if parsed.scheme == "" or len(parsed.scheme) == 1:
            # bare path, including Windows drive letters
            return self._read_file(Path(url), url, source)
        raise FetchError(url, reason=f"unsupported URL scheme '{parsed.scheme}'", source=source)

    def _fetch_http(self, url: str, source: Optional[str]) -> bytes:
        logger.info(f"Fetching {url}")
        try:
            response = self.session.get(url, timeout=self.timeout)
        except requests.Timeout as e:
            raise FetchError(url, reason=f"timed out after {self.timeout}s", source=source) from e
        except requests.RequestException as e:
            raise FetchError(url, reason=str(e), source=source) from e

        if not response.ok:
            raise FetchError(url, status_code=response.status_code, reason=response.reason or "",
                             source=source)

        data = response.content
        logger.debug(f"Fetched {len(data)} bytes from {url}")
        return data

    def _read_file(self, path: Path, url: str, source: Optional[str]) -> bytes:
        logger.info(f"Reading {path}")
        try:
            return path.read_bytes()
        except OSError as e:
            raise FetchError(url, reason=e.strerror or str(e), source=source) from e

    def close(self):
        if self._shared_session is not None:
            self._shared_session.close()
        with self._lock:
            sessions, self._sessions = self._sessions, []
        for session in sessions:
            session.close()
