"""
BeautifulSoup-based parsing layer for marketplace pages.
"""

from __future__ import annotations

import logging

from bs4 import BeautifulSoup, Tag

from breeders.scraping.logging_utils import log_event
from breeders.scraping.types import BreederRecord

LISTING_CARD_SELECTOR = ".litter-card"
INFO_BLOCK_SELECTOR = ".storefront__info"
LABEL_SELECTOR = "p > strong"

# Case-sensitive: labels are matched exactly as rendered.
LABEL_FIELDS: dict[str, str] = {
    "Breed(s)": "breed",
    "Kennel Name": "kennel_name",
    "Breeder Name": "contact_name",
    "Breeding for": "experience",
    "Breeder's Location": "location",
    "Contact By Phone": "phone",
    "Website": "website",
}


class BreederPageParser:
    """
    Deterministic parser utilities for search-result and detail pages.
    """

    @classmethod
    def extract_listing_paths(cls, soup: BeautifulSoup) -> list[str]:
        """
        Return the href of the first anchor in every listing card.

        Cards without an anchor, or whose anchor has no usable href, are skipped.
        """

        paths: list[str] = []
        for card in soup.select(LISTING_CARD_SELECTOR):
            anchor = card.find("a")
            if not isinstance(anchor, Tag):
                continue
            href = anchor.get("href")
            if isinstance(href, str) and href.strip():
                paths.append(href.strip())
        return paths

    @classmethod
    def parse_breeder_record(
        cls,
        soup: BeautifulSoup,
        *,
        logger: logging.Logger,
        page_url: str | None = None,
    ) -> tuple[BreederRecord, list[str]]:
        """
        Build one record from the info block's bold label/value pairs.

        Returns the record and the labels that were not recognised. A page with
        no recognised labels still yields an all-empty record.
        """

        values: dict[str, str] = {}
        unhandled: list[str] = []
        # Each label node matches once, even inside nested info blocks.
        for label in soup.select(f"{INFO_BLOCK_SELECTOR} {LABEL_SELECTOR}"):
            key, value = cls._split_label(label)
            field_name = LABEL_FIELDS.get(key)
            if field_name is None:
                unhandled.append(key)
                log_event(
                    logger,
                    logging.WARNING,
                    "label_not_handled",
                    label=key,
                    page_url=page_url,
                )
                continue
            values[field_name] = value
        return BreederRecord(**values), unhandled

    @staticmethod
    def _split_label(label: Tag) -> tuple[str, str]:
        raw_key = label.get_text()
        parent = label.parent
        parent_text = parent.get_text() if parent is not None else raw_key
        value = parent_text.removeprefix(raw_key)

        key = raw_key.strip()
        if key.endswith(":"):
            key = key[:-1].rstrip()
        return key, value.strip()
