"""
Breeder scraping engine.
"""

from __future__ import annotations

import logging
from typing import TextIO

from breeders.config import BreederScrapeSettings
from breeders.scraping.channels import CancellationToken, Channel
from breeders.scraping.extraction import BreederExtractionPool
from breeders.scraping.fetcher import DocumentSource
from breeders.scraping.listings import ListingDiscoveryPool
from breeders.scraping.logging_utils import log_event
from breeders.scraping.pages import SearchUrlProducer
from breeders.scraping.sink import CsvSink
from breeders.scraping.types import BreederRecord, ScrapeRunSummary


class BreederScrapingEngine:
    """
    Wires page generation, both fetch pools and the CSV sink into one run.

    When the sink returns, for any reason, the shared cancellation token is
    triggered so blocked producers and consumers exit, and every thread is
    joined before ``run`` returns.
    """

    def __init__(
        self,
        *,
        settings: BreederScrapeSettings,
        fetcher: DocumentSource,
        logger: logging.Logger | None = None,
    ) -> None:
        self._settings = settings
        self._fetcher = fetcher
        self._logger = logger if logger is not None else logging.getLogger(__name__)

    def run(self, *, output: TextIO) -> ScrapeRunSummary:
        settings = self._settings
        token = CancellationToken()
        search_urls: Channel[str] = Channel(
            token=token,
            capacity=settings.channel_capacity,
            name="search_urls",
        )
        listing_paths: Channel[str] = Channel(
            token=token,
            capacity=settings.channel_capacity,
            name="listing_paths",
        )
        records: Channel[BreederRecord] = Channel(
            token=token,
            capacity=settings.channel_capacity,
            name="records",
        )

        producer = SearchUrlProducer(
            sink=search_urls,
            page_size=settings.page_size,
            base_url=settings.base_url,
            max_pages=settings.max_pages,
            logger=self._logger,
        )
        discovery = ListingDiscoveryPool(
            fetcher=self._fetcher,
            source=search_urls,
            sink=listing_paths,
            workers=settings.workers,
            logger=self._logger,
        )
        extraction = BreederExtractionPool(
            fetcher=self._fetcher,
            source=listing_paths,
            sink=records,
            workers=settings.workers,
            base_url=settings.base_url,
            logger=self._logger,
        )
        sink = CsvSink(stream=output, limit=settings.limit, logger=self._logger)

        log_event(
            self._logger,
            logging.INFO,
            "scrape_started",
            workers=settings.workers,
            limit=settings.limit,
            page_size=settings.page_size,
            max_pages=settings.max_pages,
        )

        producer.start()
        discovery.start()
        extraction.start()
        try:
            sink.consume(records)
        finally:
            token.cancel()
            producer.join()
            discovery.join()
            extraction.join()

        status = "limit_reached" if sink.limit_reached else "exhausted"

        summary = ScrapeRunSummary(
            records_written=sink.written,
            limit=settings.limit,
            status=status,
            search_pages=discovery.stats(),
            detail_pages=extraction.stats(),
        )
        log_event(
            self._logger,
            logging.INFO,
            "scrape_completed",
            status=summary.status,
            records_written=summary.records_written,
            search_pages_fetched=summary.search_pages.processed - summary.search_pages.failed,
            search_pages_failed=summary.search_pages.failed,
            listings_discovered=summary.search_pages.emitted,
            detail_pages_fetched=summary.detail_pages.processed - summary.detail_pages.failed,
            detail_pages_failed=summary.detail_pages.failed,
            labels_discarded=summary.detail_pages.discarded,
        )
        return summary
