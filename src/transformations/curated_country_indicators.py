"""
Curated analysis table: country indicators joined with continents.

Combines the two inputs of the report:

- the indicators table (`country_indicators.load_country_indicators`);
- the scraped continent membership tokens
  (`crawler.crawl_continent_membership`);

into the read-only table consumed by the statistical procedures:

    country, <indicators>, continent, rural, log_<indicator>...

Steps, in order:

1. rewrite scraped names to the indicators spelling (country_names);
2. resolve each row's continent (continents);
3. derive the rural flag (features);
4. drop incomplete rows and "Other" rows (features);
5. add the log-transformed columns (features).

Filtering runs before the log transform so rows that are excluded anyway
(territories, aggregates) cannot trip the non-positive guard.
"""

from __future__ import annotations

from typing import Iterable, Optional, Sequence

import pandas as pd

from .continents import assign_continents, find_duplicate_countries
from .country_names import NameRewriteRule, apply_name_rewrites, load_name_rewrite_rules
from .features import LOG_COLUMNS, add_rural_flag, filter_analysis_rows, log_transform


def build_analysis_table(
    indicators: pd.DataFrame,
    membership_tokens: Sequence[str],
    rules: Optional[Iterable[NameRewriteRule]] = None,
    *,
    log_columns: Sequence[str] = LOG_COLUMNS,
) -> pd.DataFrame:
    """
    Build the final analysis table. `rules=None` uses the bundled rewrite
    rules; pass an empty list to skip normalization.
    """
    if rules is None:
        rules = load_name_rewrite_rules()

    membership = apply_name_rewrites(membership_tokens, rules)

    duplicates = find_duplicate_countries(membership)
    if duplicates:
        print(
            f"[curated] Duplicate countries in membership list, first occurrence wins: {duplicates}",
        )

    df = assign_continents(indicators, membership)
    df = add_rural_flag(df)
    df = filter_analysis_rows(df)
    df["rural"] = df["rural"].astype(bool)
    df = log_transform(df, log_columns)
    return df


__all__ = ["build_analysis_table"]
