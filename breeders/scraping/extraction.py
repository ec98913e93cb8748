"""
Breeder extraction stage: listing paths to breeder records.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator

from breeders.config import BASE_URL
from breeders.scraping.channels import Channel
from breeders.scraping.fetcher import DocumentSource, FetchError
from breeders.scraping.logging_utils import log_event
from breeders.scraping.parsing import BreederPageParser
from breeders.scraping.types import BreederRecord, StageStats
from breeders.scraping.workers import WorkerPool


def resolve_listing_url(path: str, *, base_url: str = BASE_URL) -> str:
    if path.startswith(("http://", "https://")):
        return path
    return f"{base_url.rstrip('/')}{path}"


class BreederExtractionPool(WorkerPool[str, BreederRecord]):
    """
    Fetches listing detail pages and emits one record per fetched page.
    """

    name = "breeder-extraction"

    def __init__(
        self,
        *,
        fetcher: DocumentSource,
        source: Channel[str],
        sink: Channel[BreederRecord],
        workers: int,
        base_url: str = BASE_URL,
        logger: logging.Logger | None = None,
    ) -> None:
        super().__init__(source=source, sink=sink, workers=workers, logger=logger)
        self.fetcher = fetcher
        self.base_url = base_url

    def process(self, item: str, stats: StageStats) -> Iterator[BreederRecord]:
        stats.processed += 1
        page_url = resolve_listing_url(item, base_url=self.base_url)
        try:
            soup = self.fetcher.fetch(page_url)
        except FetchError as exc:
            stats.failed += 1
            log_event(
                self.logger,
                logging.WARNING,
                "detail_page_fetch_failed",
                page_url=page_url,
                error=str(exc),
            )
            return

        record, unhandled = BreederPageParser.parse_breeder_record(
            soup,
            logger=self.logger,
            page_url=page_url,
        )
        stats.discarded += len(unhandled)
        log_event(self.logger, logging.INFO, "detail_page_processed", page_url=page_url)
        yield record
