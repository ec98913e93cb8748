"""
Breeder marketplace scraper.
"""

__version__ = "0.1.0"
