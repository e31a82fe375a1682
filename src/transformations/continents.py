"""
Continent resolution
--------------------

Maps a country name to its continent using the scraped membership list.

The membership list is an ordered list of text tokens mixing continent
headers ("AFRICA (54)", "N. AMERICA", ...) and country names. Every country
token belongs to the nearest continent header that precedes it:

    ["AFRICA", "Chad", "EUROPE", "France"]
        Chad   -> Africa
        France -> Europe

Countries that are not on the list (dependent territories, aggregates such
as "World" or "Euro area") resolve to "Other" and are later dropped from
the analysis.
"""

from __future__ import annotations

from collections import Counter
from typing import List, Optional, Sequence

import pandas as pd

OTHER_CONTINENT = "Other"

# Header substring -> continent label. Matching is case-sensitive: headers
# are uppercase on the page, so "South Africa" is never taken for a header.
CONTINENT_MARKERS = {
    "AFRICA": "Africa",
    "ASIA": "Asia",
    "EUROPE": "Europe",
    "N. AMERICA": "North America",
    "OCEANIA": "Oceania",
    "S. AMERICA": "South America",
}

CONTINENT_LABELS = list(CONTINENT_MARKERS.values()) + [OTHER_CONTINENT]


class MembershipListError(ValueError):
    """The membership list violates its layout (country token without a header)."""


def marker_continent(token: str) -> Optional[str]:
    """Return the continent label when `token` is a continent header, else None."""
    for marker, label in CONTINENT_MARKERS.items():
        if marker in token:
            return label
    return None


def resolve_continent(country: str, membership: Sequence[str]) -> str:
    """
    Resolve the continent of `country` against the membership list.

    - Absent from the list: "Other".
    - Present: the first occurrence is used and the list is scanned
      backwards to the nearest continent header.
    - Present but with no header before it: MembershipListError.
    """
    try:
        position = membership.index(country)
    except ValueError:
        return OTHER_CONTINENT

    for idx in range(position - 1, -1, -1):
        label = marker_continent(membership[idx])
        if label is not None:
            return label

    raise MembershipListError(
        f"Country {country!r} (position {position}) has no continent header before it "
        "in the membership list.",
    )


def find_duplicate_countries(membership: Sequence[str]) -> List[str]:
    """Country tokens that appear more than once, in first-seen order."""
    counts = Counter(token for token in membership if marker_continent(token) is None)
    return [token for token, count in counts.items() if count > 1]


def assign_continents(
    df: pd.DataFrame,
    membership: Sequence[str],
    *,
    country_column: str = "country",
) -> pd.DataFrame:
    """
    Return a copy of `df` with a `continent` column resolved row by row.
    """
    tokens = list(membership)
    out = df.copy()
    out["continent"] = (
        out[country_column]
        .map(lambda name: resolve_continent(name, tokens) if isinstance(name, str) else OTHER_CONTINENT)
        .astype("string")
    )
    return out


__all__ = [
    "OTHER_CONTINENT",
    "CONTINENT_MARKERS",
    "CONTINENT_LABELS",
    "MembershipListError",
    "marker_continent",
    "resolve_continent",
    "find_duplicate_countries",
    "assign_continents",
]
