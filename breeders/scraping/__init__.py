"""
Concurrent scraping pipeline for marketplace breeder listings.
"""
