"""
Hypothesis tests for the rural vs urban income question.

- rural_income_ttest:            Welch one-sided t-test, urban > rural
- bootstrap_mean_difference:     percentile bootstrap lower bound for
                                 mean(urban) - mean(rural)
- pearson_correlation:           Pearson r with p-value and CI
- permutation_correlation_test:  two-sided permutation p-value for r

The random procedures take an explicit seed; the same inputs and seed give
the same outputs.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Tuple

import numpy as np
import pandas as pd
from scipy import stats

DEFAULT_ITERATIONS = 10_000


@dataclass(frozen=True)
class TTestSummary:
    value_column: str
    statistic: float
    pvalue: float
    df: float
    mean_difference: float
    confidence_level: float
    ci_lower: float
    ci_upper: float
    n_urban: int
    n_rural: int


@dataclass(frozen=True)
class BootstrapSummary:
    value_column: str
    observed_difference: float
    ci_lower: float
    ci_upper: float
    percentile: float
    n_iterations: int
    seed: int
    differences: np.ndarray = field(repr=False, compare=False)


@dataclass(frozen=True)
class CorrelationSummary:
    x: str
    y: str
    r: float
    pvalue: float
    confidence_level: float
    ci_lower: float
    ci_upper: float
    n: int


@dataclass(frozen=True)
class PermutationSummary:
    x: str
    y: str
    observed_r: float
    pvalue: float
    n_iterations: int
    seed: int
    permuted_r: np.ndarray = field(repr=False, compare=False)


def split_by_flag(
    df: pd.DataFrame,
    value: str,
    group: str = "rural",
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Split `value` into (urban, rural) arrays by the boolean `group` column.
    Each group needs at least two observations.
    """
    flags = df[group].astype(bool)
    values = pd.to_numeric(df[value], errors="coerce").astype(float)
    urban = values[~flags].dropna().to_numpy()
    rural = values[flags].dropna().to_numpy()
    if urban.size < 2 or rural.size < 2:
        raise ValueError(
            f"Need at least two observations per group, got urban={urban.size}, rural={rural.size}",
        )
    return urban, rural


def _paired_columns(df: pd.DataFrame, x: str, y: str) -> Tuple[np.ndarray, np.ndarray]:
    pair = df[[x, y]].apply(pd.to_numeric, errors="coerce").dropna()
    if len(pair) < 3:
        raise ValueError(f"Need at least three complete ({x}, {y}) pairs, got {len(pair)}")
    return pair[x].to_numpy(dtype=float), pair[y].to_numpy(dtype=float)


def rural_income_ttest(
    df: pd.DataFrame,
    *,
    value: str = "log_gni_per_capita",
    group: str = "rural",
    confidence_level: float = 0.95,
) -> TTestSummary:
    """
    One-sided Welch t-test of H1: mean(urban) > mean(rural).

    The confidence interval is one-sided: (lower bound, +inf).
    """
    urban, rural = split_by_flag(df, value, group)
    result = stats.ttest_ind(urban, rural, equal_var=False, alternative="greater")
    ci = result.confidence_interval(confidence_level=confidence_level)
    return TTestSummary(
        value_column=value,
        statistic=float(result.statistic),
        pvalue=float(result.pvalue),
        df=float(result.df),
        mean_difference=float(urban.mean() - rural.mean()),
        confidence_level=confidence_level,
        ci_lower=float(ci.low),
        ci_upper=float(ci.high),
        n_urban=int(urban.size),
        n_rural=int(rural.size),
    )


def bootstrap_mean_difference(
    df: pd.DataFrame,
    *,
    value: str = "log_gni_per_capita",
    group: str = "rural",
    n_iterations: int = DEFAULT_ITERATIONS,
    seed: int = 0,
    percentile: float = 5.0,
) -> BootstrapSummary:
    """
    Percentile bootstrap for mean(urban) - mean(rural).

    Each iteration resamples both groups with replacement at their own
    size. The lower bound is the `percentile`-th percentile of the
    bootstrap differences; the upper bound is open (+inf).
    """
    urban, rural = split_by_flag(df, value, group)
    rng = np.random.default_rng(seed)

    differences = np.empty(n_iterations, dtype=float)
    for i in range(n_iterations):
        urban_sample = rng.choice(urban, size=urban.size, replace=True)
        rural_sample = rng.choice(rural, size=rural.size, replace=True)
        differences[i] = urban_sample.mean() - rural_sample.mean()

    return BootstrapSummary(
        value_column=value,
        observed_difference=float(urban.mean() - rural.mean()),
        ci_lower=float(np.percentile(differences, percentile)),
        ci_upper=float("inf"),
        percentile=percentile,
        n_iterations=n_iterations,
        seed=seed,
        differences=differences,
    )


def pearson_correlation(
    df: pd.DataFrame,
    x: str,
    y: str,
    *,
    confidence_level: float = 0.95,
) -> CorrelationSummary:
    """Pearson correlation test between two columns (complete pairs only)."""
    xs, ys = _paired_columns(df, x, y)
    result = stats.pearsonr(xs, ys)
    ci = result.confidence_interval(confidence_level=confidence_level)
    return CorrelationSummary(
        x=x,
        y=y,
        r=float(result.statistic),
        pvalue=float(result.pvalue),
        confidence_level=confidence_level,
        ci_lower=float(ci.low),
        ci_upper=float(ci.high),
        n=int(xs.size),
    )


def permutation_correlation_test(
    df: pd.DataFrame,
    x: str,
    y: str,
    *,
    n_iterations: int = DEFAULT_ITERATIONS,
    seed: int = 0,
) -> PermutationSummary:
    """
    Two-sided permutation test for Pearson r.

    Each iteration shuffles `y` (breaking the pairing with `x`) and
    recomputes r. The p-value is the share of permuted |r| that are at
    least as large as the observed |r|.
    """
    xs, ys = _paired_columns(df, x, y)
    rng = np.random.default_rng(seed)
    observed = float(np.corrcoef(xs, ys)[0, 1])

    permuted = np.empty(n_iterations, dtype=float)
    for i in range(n_iterations):
        permuted[i] = np.corrcoef(xs, rng.permutation(ys))[0, 1]

    pvalue = float(np.mean(np.abs(permuted) >= abs(observed)))
    return PermutationSummary(
        x=x,
        y=y,
        observed_r=observed,
        pvalue=pvalue,
        n_iterations=n_iterations,
        seed=seed,
        permuted_r=permuted,
    )


__all__ = [
    "DEFAULT_ITERATIONS",
    "TTestSummary",
    "BootstrapSummary",
    "CorrelationSummary",
    "PermutationSummary",
    "split_by_flag",
    "rural_income_ttest",
    "bootstrap_mean_difference",
    "pearson_correlation",
    "permutation_correlation_test",
]
