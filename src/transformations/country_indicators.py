"""
Country indicators loader.

Reads the per-country indicators table (CSV) and brings it to the schema
used by the rest of the report:

    country                 - string (PK)
    gni_per_capita          - float, GNI per capita (Atlas method, US$)
    imports_pct_gdp         - float, imports of goods and services (% of GDP)
    exports_pct_gdp         - float, exports of goods and services (% of GDP)
    fertility_rate_start    - float, fertility rate at the first time point
    fertility_rate_end      - float, fertility rate at the second time point
    infant_mortality_rate   - float, per 1,000 live births
    rural_pop_pct           - float, rural population (% of total)

Both the snake_case names above and World Bank DataBank style headers
("Country Name", "Rural population (% of total population) [SP.RUR.TOTL.ZS]")
are accepted. Fertility headers carry their year
("Fertility rate, total (births per woman) [SP.DYN.TFRT.IN] 1997"); the
earliest and latest years map to the start and end columns. Any other
layout can be mapped with explicit renames (`load_column_renames`).
DataBank ".." placeholders become missing values.
"""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Dict, List, Mapping, Optional, Set

import pandas as pd

from env_loader import load_dotenv_if_present

load_dotenv_if_present()

INDICATORS_CSV = Path(os.getenv("INDICATORS_CSV", "data/country_indicators.csv"))

NUMERIC_COLUMNS = [
    "gni_per_capita",
    "imports_pct_gdp",
    "exports_pct_gdp",
    "fertility_rate_start",
    "fertility_rate_end",
    "infant_mortality_rate",
    "rural_pop_pct",
]

INDICATOR_COLUMNS = ["country"] + NUMERIC_COLUMNS

# Canonical column -> accepted headers (compared case-insensitively).
# World Bank series codes are matched against the "[CODE]" suffix of
# DataBank headers.
COLUMN_ALIASES: Dict[str, List[str]] = {
    "country": ["country", "country name", "country_name"],
    "gni_per_capita": [
        "gni",
        "gni per capita",
        "gni per capita, atlas method (current us$)",
        "NY.GNP.PCAP.CD",
    ],
    "imports_pct_gdp": [
        "imports",
        "imports of goods and services (% of gdp)",
        "NE.IMP.GNFS.ZS",
    ],
    "exports_pct_gdp": [
        "exports",
        "exports of goods and services (% of gdp)",
        "NE.EXP.GNFS.ZS",
    ],
    "fertility_rate_start": ["fertility_start", "fertility rate start"],
    "fertility_rate_end": ["fertility_end", "fertility rate end"],
    "infant_mortality_rate": [
        "infant_mortality",
        "mortality rate, infant (per 1,000 live births)",
        "SP.DYN.IMRT.IN",
    ],
    "rural_pop_pct": [
        "rural_population_pct",
        "rural population (% of total population)",
        "SP.RUR.TOTL.ZS",
    ],
}

# Fertility is observed at two time points, so its headers carry a year:
# "Fertility rate, total (births per woman) [SP.DYN.TFRT.IN] 1997" or
# "... [YR1997]". The earliest year becomes fertility_rate_start, the
# latest fertility_rate_end.
FERTILITY_SERIES_ALIASES = [
    "fertility",
    "fertility_rate",
    "fertility rate, total (births per woman)",
    "SP.DYN.TFRT.IN",
]

COLUMN_RENAMES_REQUIRED_COLUMNS = {"source", "target"}

_SERIES_CODE_SUFFIX = re.compile(r"^(?P<label>.*?)\s*\[(?P<code>[A-Z0-9.]+)\]\s*$")
_YEAR_SUFFIX = re.compile(r"^(?P<series>.*?)\s*(?:\[YR(?P<yr>\d{4})\]|(?P<year>\d{4}))\s*$")


def _header_candidates(header: str) -> Set[str]:
    text = str(header).strip()
    candidates = {text.lower()}
    match = _SERIES_CODE_SUFFIX.match(text)
    if match:
        candidates.add(match.group("label").strip().lower())
        candidates.add(match.group("code").lower())
    return candidates


def _canonical_column(header: str) -> Optional[str]:
    """Map a raw header to its canonical column name, or None if unknown."""
    candidates = _header_candidates(header)
    for canonical, aliases in COLUMN_ALIASES.items():
        if canonical in candidates:
            return canonical
        if candidates & {alias.lower() for alias in aliases}:
            return canonical
    return None


def _fertility_year(header: str) -> Optional[int]:
    """Year of a year-qualified fertility header, or None."""
    match = _YEAR_SUFFIX.match(str(header).strip())
    if not match or not match.group("series"):
        return None
    aliases = {alias.lower() for alias in FERTILITY_SERIES_ALIASES}
    if not _header_candidates(match.group("series")) & aliases:
        return None
    return int(match.group("yr") or match.group("year"))


def _fertility_renames(years: Mapping[str, int], taken: Set[str]) -> Dict[str, str]:
    if len(set(years.values())) < 2:
        return {}
    ordered = sorted(years, key=years.__getitem__)
    renames: Dict[str, str] = {}
    for header, canonical in ((ordered[0], "fertility_rate_start"), (ordered[-1], "fertility_rate_end")):
        if canonical not in taken:
            renames[header] = canonical
    return renames


def normalize_indicator_columns(
    df: pd.DataFrame,
    column_renames: Optional[Mapping[str, str]] = None,
) -> pd.DataFrame:
    """
    Rename known headers to the canonical schema. Explicit `column_renames`
    take precedence over the built-in aliases. Unknown columns are kept.
    """
    renames: Dict[str, str] = {}
    fertility_years: Dict[str, int] = {}
    for header in df.columns:
        if column_renames and header in column_renames:
            renames[header] = column_renames[header]
            continue
        canonical = _canonical_column(header)
        if canonical is not None:
            if canonical not in renames.values():
                renames[header] = canonical
            continue
        year = _fertility_year(header)
        if year is not None:
            fertility_years[header] = year

    renames.update(_fertility_renames(fertility_years, taken=set(renames.values())))
    return df.rename(columns=renames)


def load_column_renames(path: Path | str) -> Dict[str, str]:
    """
    Load explicit header renames from a CSV with `source` and `target`
    columns (raw header -> canonical name).
    """
    renames_df = pd.read_csv(path, dtype=str, keep_default_na=False)

    missing = COLUMN_RENAMES_REQUIRED_COLUMNS - set(renames_df.columns)
    if missing:
        raise ValueError(
            f"Column renames file {path} is missing required columns: {sorted(missing)}",
        )
    return {
        source: target
        for source, target in zip(renames_df["source"], renames_df["target"])
        if source != ""
    }


def build_country_indicators_dataframe(
    raw_df: pd.DataFrame,
    column_renames: Optional[Mapping[str, str]] = None,
) -> pd.DataFrame:
    """
    Bring a raw indicators frame to the canonical schema:

    - rename headers;
    - strip country names, drop rows without one;
    - coerce numeric columns (invalid values -> NaN);
    - keep the first row per country.
    """
    df = normalize_indicator_columns(raw_df, column_renames=column_renames)
    if "country" not in df.columns:
        raise ValueError(
            "Indicators table has no country column "
            f"(columns found: {list(raw_df.columns)}).",
        )

    df = df.copy()
    df["country"] = df["country"].astype("string").str.strip()
    df = df[df["country"].notna() & (df["country"] != "")].copy()

    for col in NUMERIC_COLUMNS:
        if col in df.columns:
            df[col] = pd.to_numeric(df[col], errors="coerce")

    df = df.drop_duplicates(subset=["country"], keep="first")
    return df.reset_index(drop=True)


def load_country_indicators(
    path: Path | str = INDICATORS_CSV,
    *,
    column_renames: Optional[Mapping[str, str]] = None,
) -> pd.DataFrame:
    """
    Load the indicators CSV. A missing file raises FileNotFoundError.
    """
    raw_df = pd.read_csv(path)
    return build_country_indicators_dataframe(raw_df, column_renames=column_renames)


__all__ = [
    "INDICATORS_CSV",
    "NUMERIC_COLUMNS",
    "INDICATOR_COLUMNS",
    "COLUMN_ALIASES",
    "FERTILITY_SERIES_ALIASES",
    "load_column_renames",
    "normalize_indicator_columns",
    "build_country_indicators_dataframe",
    "load_country_indicators",
]
