"""
Crawler modules
---------------

Responsible for extracting data from web sources (the country-by-continent
membership page) as plain Python structures.
"""

from .continent_membership_crawler import (  # noqa: F401
    CONTINENTS_SELECTOR,
    CONTINENTS_URL,
    crawl_continent_membership,
    extract_text_tokens,
    fetch_continents_html,
)

__all__ = [
    "CONTINENTS_URL",
    "CONTINENTS_SELECTOR",
    "crawl_continent_membership",
    "extract_text_tokens",
    "fetch_continents_html",
]
