"""
Continent membership crawler.

Responsibilities:

- Download the HTML of a "countries of the world by continent" page
  (default: WorldAtlas, configurable through CONTINENTS_URL).
- Flatten the page into an ordered list of text tokens (continent headers
  and country names, in document order) using a CSS selector
  (default: "h2, li", configurable through CONTINENTS_SELECTOR).
- Return the token list as-is; spelling fixes are the job of
  `transformations.country_names`, continent lookup the job of
  `transformations.continents`.

The page is fetched once per run. A failed request aborts the run.
"""

from __future__ import annotations

import os
import re
from typing import List

import requests
from bs4 import BeautifulSoup

from env_loader import load_dotenv_if_present
from transformations.continents import marker_continent

# Load .env if present (CONTINENTS_URL, CONTINENTS_SELECTOR).
load_dotenv_if_present()

CONTINENTS_URL = os.getenv("CONTINENTS_URL", "https://www.worldatlas.com/cntycont.htm")
CONTINENTS_SELECTOR = os.getenv("CONTINENTS_SELECTOR", "h2, li")

USER_AGENT = "rural-income-report/1.0 (+https://www.example.com/)"


def fetch_continents_html(
    url: str = CONTINENTS_URL,
    *,
    timeout: int = 30,
) -> str:
    """
    Download the raw HTML of the membership page.

    Uses an explicit User-Agent to reduce the chance of 403s.
    """
    headers = {"User-Agent": USER_AGENT}
    response = requests.get(url, headers=headers, timeout=timeout)
    response.raise_for_status()
    return response.text


def _clean_token_text(text: str) -> str:
    """
    Clean a text node:

    - Remove footnote markers like "[a]", "[1]", etc.
    - Normalize whitespace (including non-breaking spaces).
    """
    cleaned = re.sub(r"\[[^\]]*\]", "", text)
    cleaned = re.sub(r"\s+", " ", cleaned)
    return cleaned.strip()


def extract_text_tokens(page_html: str, selector: str = CONTINENTS_SELECTOR) -> List[str]:
    """
    Flatten the elements matched by `selector` into text tokens, in
    document order. Empty tokens are skipped.
    """
    soup = BeautifulSoup(page_html, "html.parser")
    tokens: List[str] = []
    for element in soup.select(selector):
        text = _clean_token_text(element.get_text(" ", strip=True))
        if text:
            tokens.append(text)
    return tokens


def crawl_continent_membership(
    url: str = CONTINENTS_URL,
    *,
    selector: str = CONTINENTS_SELECTOR,
    timeout: int = 30,
) -> List[str]:
    """
    Fetch the membership page and return its flattened token list.

    Raises RuntimeError when the page yields no continent header at all,
    which means the selector no longer matches the page layout.
    """
    page_html = fetch_continents_html(url=url, timeout=timeout)
    tokens = extract_text_tokens(page_html, selector=selector)

    if not any(marker_continent(token) is not None for token in tokens):
        raise RuntimeError(
            f"No continent headers found in {url} with selector {selector!r} "
            f"({len(tokens)} tokens extracted).",
        )

    return tokens


if __name__ == "__main__":
    # CLI helper for local runs:
    #   PYTHONPATH=src python -m crawler.continent_membership_crawler
    import argparse
    import json

    parser = argparse.ArgumentParser(
        description="Scrape the country-by-continent membership list.",
    )
    parser.add_argument(
        "--url",
        type=str,
        default=CONTINENTS_URL,
        help="URL of the membership page (default: CONTINENTS_URL).",
    )
    parser.add_argument(
        "--selector",
        type=str,
        default=CONTINENTS_SELECTOR,
        help="CSS selector of the text nodes to keep (default: CONTINENTS_SELECTOR).",
    )
    parser.add_argument(
        "--timeout",
        type=int,
        default=30,
        help="HTTP timeout in seconds (default: 30).",
    )

    args = parser.parse_args()
    output = crawl_continent_membership(args.url, selector=args.selector, timeout=args.timeout)
    print(json.dumps(output, ensure_ascii=False, indent=2))


__all__ = [
    "CONTINENTS_URL",
    "CONTINENTS_SELECTOR",
    "fetch_continents_html",
    "extract_text_tokens",
    "crawl_continent_membership",
]
