"""
Derived features and row filtering for the analysis table.

- rural:            True when rural_pop_pct > 50 (strictly)
- log_<column>:     natural log of gni_per_capita, imports_pct_gdp,
                    exports_pct_gdp and infant_mortality_rate
- row filtering:    rows with a missing selected value or with continent
                    "Other" are excluded (not imputed)
"""

from __future__ import annotations

from typing import Iterable, List, Sequence

import numpy as np
import pandas as pd

from .continents import OTHER_CONTINENT
from .country_indicators import INDICATOR_COLUMNS

RURAL_THRESHOLD_PCT = 50.0

LOG_COLUMNS = [
    "gni_per_capita",
    "imports_pct_gdp",
    "exports_pct_gdp",
    "infant_mortality_rate",
]

SELECTED_COLUMNS = INDICATOR_COLUMNS + ["continent"]


class NonPositiveValueError(ValueError):
    """A log transform received a zero or negative value."""


def log_column_name(column: str) -> str:
    return f"log_{column}"


def add_rural_flag(
    df: pd.DataFrame,
    *,
    column: str = "rural_pop_pct",
    threshold: float = RURAL_THRESHOLD_PCT,
) -> pd.DataFrame:
    """
    Return a copy with a boolean `rural` column (nullable: missing
    percentages give a missing flag).
    """
    out = df.copy()
    values = pd.to_numeric(out[column], errors="coerce")
    out["rural"] = (values > threshold).astype("boolean").mask(values.isna())
    return out


def log_transform(
    df: pd.DataFrame,
    columns: Sequence[str] = LOG_COLUMNS,
    *,
    country_column: str = "country",
) -> pd.DataFrame:
    """
    Return a copy with a `log_<column>` column per input column.

    Missing values stay missing. Zero or negative values raise
    NonPositiveValueError listing the offending countries.
    """
    out = df.copy()
    for column in columns:
        values = pd.to_numeric(out[column], errors="coerce").astype(float)
        non_positive = values <= 0
        if non_positive.any():
            if country_column in out.columns:
                offenders = out.loc[non_positive, country_column].astype(str).tolist()
            else:
                offenders = [str(i) for i in out.index[non_positive]]
            raise NonPositiveValueError(
                f"Cannot log-transform {column!r}: non-positive values for {offenders}",
            )
        out[log_column_name(column)] = np.log(values)
    return out


def filter_analysis_rows(
    df: pd.DataFrame,
    columns: Iterable[str] = SELECTED_COLUMNS,
) -> pd.DataFrame:
    """
    Keep only complete rows (no missing selected value) that belong to one
    of the six continents.
    """
    selected: List[str] = list(columns)
    missing = [c for c in selected if c not in df.columns]
    if missing:
        raise ValueError(f"Analysis table is missing selected columns: {missing}")

    out = df.dropna(subset=selected)
    if "continent" in out.columns:
        out = out[out["continent"] != OTHER_CONTINENT]
    return out.reset_index(drop=True)


__all__ = [
    "RURAL_THRESHOLD_PCT",
    "LOG_COLUMNS",
    "SELECTED_COLUMNS",
    "NonPositiveValueError",
    "log_column_name",
    "add_rural_flag",
    "log_transform",
    "filter_analysis_rows",
]
