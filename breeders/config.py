"""
breeders/config.py

Runtime settings for the breeder scraping pipeline.
"""

from __future__ import annotations

from dataclasses import dataclass
from urllib.parse import urlparse

BASE_URL = "http://marketplace.akc.org"
SEARCH_ENDPOINT = "/puppies"

DEFAULT_WORKER_COUNT = 4
DEFAULT_LIMIT = 1000
DEFAULT_PAGE_SIZE = 40
DEFAULT_CHANNEL_CAPACITY = 16
DEFAULT_LOG_PATH = "log.txt"
DEFAULT_TIMEOUT_SECONDS = 15.0
DEFAULT_USER_AGENT = "BreederScraper/0.1"


class ConfigurationError(ValueError):
    """
    Raised when static configuration cannot produce a valid run.
    """


@dataclass(frozen=True)
class BreederScrapeSettings:
    """
    Runtime settings for one scrape run.
    """

    base_url: str = BASE_URL
    workers: int = DEFAULT_WORKER_COUNT
    limit: int = DEFAULT_LIMIT
    page_size: int = DEFAULT_PAGE_SIZE
    max_pages: int | None = None
    channel_capacity: int = DEFAULT_CHANNEL_CAPACITY
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    user_agent: str = DEFAULT_USER_AGENT
    log_path: str = DEFAULT_LOG_PATH


def validate_base_url(raw: str) -> str:
    """
    Return the base URL without a trailing slash.

    Raises ConfigurationError when the value has no http(s) scheme or no host,
    since no request built from it could succeed.
    """

    candidate = (raw or "").strip()
    parsed = urlparse(candidate)
    if parsed.scheme not in {"http", "https"} or not parsed.netloc:
        raise ConfigurationError(f"unable to parse base url {raw!r}")
    return candidate.rstrip("/")


def build_settings(
    *,
    base_url: str = BASE_URL,
    workers: int = DEFAULT_WORKER_COUNT,
    limit: int = DEFAULT_LIMIT,
    page_size: int = DEFAULT_PAGE_SIZE,
    max_pages: int | None = None,
    channel_capacity: int = DEFAULT_CHANNEL_CAPACITY,
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
    user_agent: str = DEFAULT_USER_AGENT,
    log_path: str = DEFAULT_LOG_PATH,
) -> BreederScrapeSettings:
    """
    Validate raw values and return frozen run settings.
    """

    if workers < 1:
        raise ConfigurationError(f"workers must be >= 1, got {workers}")
    if limit < 0:
        raise ConfigurationError(f"limit must be >= 0, got {limit}")
    if page_size < 1:
        raise ConfigurationError(f"page_size must be >= 1, got {page_size}")
    if max_pages is not None and max_pages < 0:
        raise ConfigurationError(f"max_pages must be >= 0, got {max_pages}")
    if channel_capacity < 1:
        raise ConfigurationError(f"channel_capacity must be >= 1, got {channel_capacity}")
    if timeout_seconds <= 0:
        raise ConfigurationError(f"timeout_seconds must be > 0, got {timeout_seconds}")
    if not log_path.strip():
        raise ConfigurationError("log_path must not be empty")

    return BreederScrapeSettings(
        base_url=validate_base_url(base_url),
        workers=workers,
        limit=limit,
        page_size=page_size,
        max_pages=max_pages,
        channel_capacity=channel_capacity,
        timeout_seconds=timeout_seconds,
        user_agent=user_agent.strip() or DEFAULT_USER_AGENT,
        log_path=log_path,
    )
