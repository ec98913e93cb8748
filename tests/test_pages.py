from __future__ import annotations

import itertools
import unittest
from urllib.parse import parse_qs, urlparse

from breeders.config import (
    BASE_URL,
    ConfigurationError,
    build_settings,
    validate_base_url,
)
from breeders.scraping.channels import CancellationToken, Channel
from breeders.scraping.pages import SearchUrlProducer, build_search_url, page_numbers


class TestPageNumbers(unittest.TestCase):
    def test_starts_at_zero_and_increments_by_one(self) -> None:
        self.assertEqual(list(itertools.islice(page_numbers(), 5)), [0, 1, 2, 3, 4])

    def test_restarts_from_start_on_each_call(self) -> None:
        first = page_numbers(3)
        next(first)
        next(first)
        self.assertEqual(next(page_numbers(3)), 3)

    def test_is_unbounded(self) -> None:
        numbers = page_numbers()
        self.assertEqual(next(itertools.islice(numbers, 10_000, None)), 10_000)


class TestBuildSearchUrl(unittest.TestCase):
    def test_query_contains_page_and_page_size(self) -> None:
        parsed = urlparse(build_search_url(5, 40))

        self.assertEqual(parse_qs(parsed.query), {"page": ["5"], "per_page": ["40"]})
        self.assertEqual(parsed.path, "/puppies")
        self.assertEqual(f"{parsed.scheme}://{parsed.netloc}", BASE_URL)

    def test_is_pure(self) -> None:
        self.assertEqual(build_search_url(2, 10), build_search_url(2, 10))

    def test_trailing_slash_on_base_url_is_ignored(self) -> None:
        self.assertEqual(
            build_search_url(0, 40, base_url="http://example.test/"),
            "http://example.test/puppies?page=0&per_page=40",
        )


class TestSearchUrlProducer(unittest.TestCase):
    def test_max_pages_closes_channel_after_last_url(self) -> None:
        token = CancellationToken()
        channel: Channel[str] = Channel(token=token, capacity=16)
        producer = SearchUrlProducer(
            sink=channel,
            page_size=40,
            base_url="http://example.test",
            max_pages=3,
        )

        producer.run()

        urls = list(channel)
        self.assertEqual(len(urls), 3)
        self.assertTrue(urls[0].endswith("page=0&per_page=40"))
        self.assertTrue(urls[2].endswith("page=2&per_page=40"))
        self.assertTrue(channel.closed)

    def test_stops_when_cancelled(self) -> None:
        token = CancellationToken()
        channel: Channel[str] = Channel(token=token, capacity=2)
        producer = SearchUrlProducer(sink=channel, page_size=40)

        thread = producer.start()
        token.cancel()
        thread.join(timeout=5)

        self.assertFalse(thread.is_alive())
        self.assertTrue(channel.closed)
        self.assertLessEqual(producer.produced, 2)


class TestSettings(unittest.TestCase):
    def test_defaults(self) -> None:
        settings = build_settings()

        self.assertEqual(settings.workers, 4)
        self.assertEqual(settings.limit, 1000)
        self.assertEqual(settings.page_size, 40)
        self.assertEqual(settings.channel_capacity, 16)
        self.assertIsNone(settings.max_pages)
        self.assertEqual(settings.user_agent, "BreederScraper/0.1")

    def test_malformed_base_url_is_a_configuration_error(self) -> None:
        for raw in ("", "marketplace.akc.org", "ftp://marketplace.akc.org", "http://"):
            with self.subTest(raw=raw):
                with self.assertRaises(ConfigurationError):
                    validate_base_url(raw)

    def test_base_url_trailing_slash_is_stripped(self) -> None:
        self.assertEqual(validate_base_url("https://example.test/"), "https://example.test")

    def test_rejects_out_of_range_values(self) -> None:
        cases = [
            {"workers": 0},
            {"limit": -1},
            {"page_size": 0},
            {"max_pages": -1},
            {"channel_capacity": 0},
            {"timeout_seconds": 0.0},
            {"log_path": "  "},
        ]
        for kwargs in cases:
            with self.subTest(**kwargs):
                with self.assertRaises(ConfigurationError):
                    build_settings(**kwargs)


if __name__ == "__main__":
    unittest.main()
