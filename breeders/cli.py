"""
Run breeder scraping from CLI.

Rows are streamed to stdout as CSV; every diagnostic goes to the log file.
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence
from typing import TextIO

from breeders.config import (
    BASE_URL,
    DEFAULT_LIMIT,
    DEFAULT_LOG_PATH,
    DEFAULT_PAGE_SIZE,
    DEFAULT_TIMEOUT_SECONDS,
    DEFAULT_WORKER_COUNT,
    ConfigurationError,
    build_settings,
)
from breeders.scraping.engine import BreederScrapingEngine
from breeders.scraping.fetcher import DocumentFetcher, DocumentSource
from breeders.scraping.logging_utils import LogSetupError, configure_file_logger, log_event
from breeders.scraping.sink import OutputWriteError


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="get-breeder-data",
        description="Scrape breeder details from marketplace listings into CSV on stdout.",
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=DEFAULT_WORKER_COUNT,
        help="Number of threads to use to process jobs.",
    )
    parser.add_argument(
        "--limit",
        type=int,
        default=DEFAULT_LIMIT,
        help="Amount of breeder records to fetch.",
    )
    parser.add_argument(
        "--page-size",
        dest="page_size",
        type=int,
        default=DEFAULT_PAGE_SIZE,
        help="Listings requested per search-result page.",
    )
    parser.add_argument(
        "--max-pages",
        dest="max_pages",
        type=int,
        default=None,
        help="Optional cap on search-result pages to walk.",
    )
    parser.add_argument(
        "--log-file",
        dest="log_file",
        default=DEFAULT_LOG_PATH,
        help="File that diagnostics are appended to.",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=DEFAULT_TIMEOUT_SECONDS,
        help="Per-request timeout in seconds.",
    )
    return parser


def main(
    argv: Sequence[str] | None = None,
    *,
    fetcher: DocumentSource | None = None,
    output: TextIO | None = None,
) -> int:
    args = build_parser().parse_args(argv)

    try:
        settings = build_settings(
            base_url=BASE_URL,
            workers=args.workers,
            limit=args.limit,
            page_size=args.page_size,
            max_pages=args.max_pages,
            timeout_seconds=args.timeout,
            log_path=args.log_file,
        )
        logger = configure_file_logger(settings.log_path)
    except (ConfigurationError, LogSetupError) as exc:
        print(f"get-breeder-data: error: {exc}", file=sys.stderr)
        return 2

    owned_fetcher: DocumentFetcher | None = None
    if fetcher is None:
        owned_fetcher = DocumentFetcher(
            timeout_seconds=settings.timeout_seconds,
            user_agent=settings.user_agent,
        )
        fetcher = owned_fetcher

    engine = BreederScrapingEngine(settings=settings, fetcher=fetcher, logger=logger)
    try:
        engine.run(output=output if output is not None else sys.stdout)
    except OutputWriteError as exc:
        log_event(logger, logging.ERROR, "output_write_failed", error=str(exc))
        print(f"get-breeder-data: error: {exc}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        log_event(logger, logging.WARNING, "scrape_interrupted")
        return 130
    finally:
        if owned_fetcher is not None:
            owned_fetcher.close()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
