"""
Listing discovery stage: search-result pages to listing paths.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator

from breeders.scraping.channels import Channel
from breeders.scraping.fetcher import DocumentSource, FetchError
from breeders.scraping.logging_utils import log_event
from breeders.scraping.parsing import BreederPageParser
from breeders.scraping.types import StageStats
from breeders.scraping.workers import WorkerPool


class ListingDiscoveryPool(WorkerPool[str, str]):
    """
    Fetches search-result pages and emits the listing paths found on them.
    """

    name = "listing-discovery"

    def __init__(
        self,
        *,
        fetcher: DocumentSource,
        source: Channel[str],
        sink: Channel[str],
        workers: int,
        logger: logging.Logger | None = None,
    ) -> None:
        super().__init__(source=source, sink=sink, workers=workers, logger=logger)
        self.fetcher = fetcher

    def process(self, item: str, stats: StageStats) -> Iterator[str]:
        stats.processed += 1
        try:
            soup = self.fetcher.fetch(item)
        except FetchError as exc:
            stats.failed += 1
            log_event(
                self.logger,
                logging.WARNING,
                "search_page_fetch_failed",
                page_url=item,
                error=str(exc),
            )
            return

        paths = BreederPageParser.extract_listing_paths(soup)
        log_event(
            self.logger,
            logging.INFO,
            "search_page_downloaded",
            page_url=item,
            listings=len(paths),
        )
        yield from paths
