"""
Synthetic pages and a fake fetcher for pipeline tests.
"""

from __future__ import annotations

import json
import threading
from collections.abc import Iterable, Mapping

import pytest
from bs4 import BeautifulSoup

from breeders.scraping.fetcher import FetchError

BASE_URL = "http://marketplace.test"


class FakeFetcher:
    """
    Serves synthetic HTML by URL; unknown URLs and ``failing`` URLs raise FetchError.
    """

    def __init__(
        self,
        pages: Mapping[str, str],
        *,
        failing: Iterable[str] = (),
        default_html: str | None = None,
    ) -> None:
        self._pages = dict(pages)
        self._failing = set(failing)
        self._default_html = default_html
        self._lock = threading.Lock()
        self.calls: list[str] = []

    def fetch(self, url: str) -> BeautifulSoup:
        with self._lock:
            self.calls.append(url)
        if url in self._failing:
            raise FetchError(f"could not get page {url}: connection refused")
        html = self._pages.get(url, self._default_html)
        if html is None:
            raise FetchError(f"could not get page {url}: 404 Client Error")
        return BeautifulSoup(html, "html.parser")


def search_page_html(paths: Iterable[str]) -> str:
    cards = "".join(
        f'<div class="litter-card"><a href="{path}"><img src="x.jpg"></a></div>'
        for path in paths
    )
    return f"<html><body>{cards}</body></html>"


def detail_page_html(labels: Mapping[str, str]) -> str:
    paragraphs = "".join(
        f"<p><strong>{key}:</strong> {value}</p>" for key, value in labels.items()
    )
    return (
        "<html><body>"
        f'<div class="storefront__info">{paragraphs}</div>'
        "</body></html>"
    )


def logged_events(caplog: pytest.LogCaptureFixture) -> list[dict]:
    events: list[dict] = []
    for record in caplog.records:
        try:
            events.append(json.loads(record.getMessage()))
        except ValueError:
            continue
    return events
