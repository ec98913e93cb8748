"""
HTTP document fetcher shared by the pipeline's fetch stages.
"""

from __future__ import annotations

import threading
from typing import Protocol

import requests
from bs4 import BeautifulSoup

from breeders.config import DEFAULT_TIMEOUT_SECONDS, DEFAULT_USER_AGENT

DOCUMENT_CONTENT_TYPES = ("text/html", "application/xhtml+xml", "text/xml", "application/xml")


class FetchError(RuntimeError):
    """
    Raised when a URL cannot be turned into a parsed document.
    """


class DocumentSource(Protocol):
    def fetch(self, url: str) -> BeautifulSoup:
        ...


class DocumentFetcher:
    """
    Fetches one URL and parses the body with BeautifulSoup.

    Failures are never retried; callers log and skip the URL.

    Each calling thread gets its own requests.Session, since Session makes no
    thread-safety guarantee. An injected ``session`` is used as-is by every
    thread and stays owned by the caller.
    """

    def __init__(
        self,
        *,
        session: requests.Session | None = None,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
        user_agent: str = DEFAULT_USER_AGENT,
    ) -> None:
        self._shared_session = session
        self._local = threading.local()
        self._owned_sessions: list[requests.Session] = []
        self._lock = threading.Lock()
        self._timeout_seconds = timeout_seconds
        self.request_headers = {"User-Agent": user_agent}

    def fetch(self, url: str) -> BeautifulSoup:
        try:
            response = self._session().get(
                url,
                headers=self.request_headers,
                timeout=self._timeout_seconds,
                allow_redirects=True,
            )
            response.raise_for_status()
        except requests.RequestException as exc:
            raise FetchError(f"could not get page {url}: {exc}") from exc

        content_type = response.headers.get("Content-Type", "")
        media_type = content_type.split(";", 1)[0].strip().lower()
        if media_type and media_type not in DOCUMENT_CONTENT_TYPES:
            raise FetchError(f"could not get page {url}: non-document response {media_type}")

        return BeautifulSoup(response.text, "html.parser")

    def close(self) -> None:
        with self._lock:
            sessions = list(self._owned_sessions)
            self._owned_sessions.clear()
        for session in sessions:
            session.close()

    def _session(self) -> requests.Session:
        if self._shared_session is not None:
            return self._shared_session
        session = getattr(self._local, "session", None)
        if session is None:
            session = requests.Session()
            self._local.session = session
            with self._lock:
                self._owned_sessions.append(session)
        return session
