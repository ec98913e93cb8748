"""
HTML parsing layer exports.
"""

from breeders.scraping.parsing.html_parsers import BreederPageParser, LABEL_FIELDS

__all__ = ["BreederPageParser", "LABEL_FIELDS"]
