"""
Page number source and search URL builder.
"""

from __future__ import annotations

import itertools
import logging
import threading
from collections.abc import Iterator
from urllib.parse import urlencode

from breeders.config import BASE_URL, SEARCH_ENDPOINT
from breeders.scraping.channels import Channel
from breeders.scraping.logging_utils import log_event


def page_numbers(start: int = 0) -> Iterator[int]:
    """
    Yield start, start + 1, ... forever.
    """

    return itertools.count(start)


def build_search_url(page_number: int, page_size: int, *, base_url: str = BASE_URL) -> str:
    query = urlencode({"page": page_number, "per_page": page_size})
    return f"{base_url.rstrip('/')}{SEARCH_ENDPOINT}?{query}"


class SearchUrlProducer:
    """
    Single producer thread feeding search-result URLs into a channel.

    The page sequence is unbounded unless ``max_pages`` is set, so in practice
    the producer stops when the pipeline is cancelled.
    """

    name = "search-urls"

    def __init__(
        self,
        *,
        sink: Channel[str],
        page_size: int,
        base_url: str = BASE_URL,
        start: int = 0,
        max_pages: int | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self.sink = sink
        self.page_size = page_size
        self.base_url = base_url
        self.start_page = start
        self.max_pages = max_pages
        self.logger = logger if logger is not None else logging.getLogger(__name__)
        self.produced = 0
        self._thread: threading.Thread | None = None

    def start(self) -> threading.Thread:
        if self._thread is not None:
            raise RuntimeError("search url producer already started")
        self._thread = threading.Thread(target=self.run, name=self.name, daemon=True)
        self._thread.start()
        return self._thread

    def join(self, timeout: float | None = None) -> None:
        if self._thread is not None:
            self._thread.join(timeout)

    def run(self) -> None:
        pages = page_numbers(self.start_page)
        if self.max_pages is not None:
            pages = itertools.islice(pages, self.max_pages)
        try:
            for page_number in pages:
                url = build_search_url(page_number, self.page_size, base_url=self.base_url)
                if not self.sink.put(url):
                    return
                self.produced += 1
            log_event(
                self.logger,
                logging.INFO,
                "search_pages_exhausted",
                pages=self.produced,
            )
        finally:
            self.sink.close()
