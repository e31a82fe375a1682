"""
Printable text for the statistical summaries of the report.
"""

from __future__ import annotations

from typing import List

from .income_regression import EliminationResult
from .rural_income_tests import (
    BootstrapSummary,
    CorrelationSummary,
    PermutationSummary,
    TTestSummary,
)


def format_ttest(summary: TTestSummary) -> str:
    return "\n".join(
        [
            f"Welch two-sample t-test on {summary.value_column} (H1: urban > rural)",
            f"  n urban = {summary.n_urban}, n rural = {summary.n_rural}",
            f"  t = {summary.statistic:.4f}, df = {summary.df:.2f}, p-value = {summary.pvalue:.4g}",
            f"  mean difference = {summary.mean_difference:.4f}",
            f"  {summary.confidence_level:.0%} one-sided CI: "
            f"[{summary.ci_lower:.4f}, {summary.ci_upper}]",
        ]
    )


def format_bootstrap(summary: BootstrapSummary) -> str:
    return "\n".join(
        [
            f"Bootstrap of mean({summary.value_column}) urban - rural "
            f"({summary.n_iterations} resamples, seed={summary.seed})",
            f"  observed difference = {summary.observed_difference:.4f}",
            f"  {100 - summary.percentile:g}% one-sided CI: "
            f"[{summary.ci_lower:.4f}, {summary.ci_upper}]",
        ]
    )


def format_correlation(summary: CorrelationSummary) -> str:
    return "\n".join(
        [
            f"Pearson correlation {summary.x} ~ {summary.y} (n={summary.n})",
            f"  r = {summary.r:.4f}, p-value = {summary.pvalue:.4g}",
            f"  {summary.confidence_level:.0%} CI: [{summary.ci_lower:.4f}, {summary.ci_upper:.4f}]",
        ]
    )


def format_permutation(summary: PermutationSummary) -> str:
    return "\n".join(
        [
            f"Permutation test {summary.x} ~ {summary.y} "
            f"({summary.n_iterations} permutations, seed={summary.seed})",
            f"  observed r = {summary.observed_r:.4f}, two-sided p-value = {summary.pvalue:.4f}",
        ]
    )


def format_elimination(result: EliminationResult) -> str:
    lines: List[str] = ["Backward elimination"]
    if result.eliminated:
        for step, (predictor, pvalue) in enumerate(result.eliminated, start=1):
            lines.append(f"  step {step}: dropped {predictor} (p = {pvalue:.4f})")
    else:
        lines.append("  no predictor dropped")
    lines.append(f"  final model: {result.formula}")
    lines.append(str(result.results.summary()))
    return "\n".join(lines)


__all__ = [
    "format_ttest",
    "format_bootstrap",
    "format_correlation",
    "format_permutation",
    "format_elimination",
]
