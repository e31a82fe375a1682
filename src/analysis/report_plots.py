"""
Figures for the rural vs urban income report.

- income_by_rural_boxplot.png:   log GNI per capita by rural flag
- income_qq.png:                 normal Q-Q plot per group
- correlation_scatter.png:       scatter of the correlated pair + LS line
- bootstrap_histogram.png:       bootstrap differences with the lower bound
- permutation_histogram.png:     permuted r with the observed r

Each function writes a PNG under `output_dir` and returns its path.
"""

from __future__ import annotations

from pathlib import Path

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd
from scipy import stats

from .rural_income_tests import BootstrapSummary, PermutationSummary, split_by_flag

ANALYSIS_OUTPUT_DIR = Path("report")

BOXPLOT_PNG_NAME = "income_by_rural_boxplot.png"
QQ_PNG_NAME = "income_qq.png"
SCATTER_PNG_NAME = "correlation_scatter.png"
BOOTSTRAP_PNG_NAME = "bootstrap_histogram.png"
PERMUTATION_PNG_NAME = "permutation_histogram.png"


def _save(output_dir: Path | str, name: str) -> Path:
    output_root = Path(output_dir)
    output_root.mkdir(parents=True, exist_ok=True)
    output_path = output_root / name
    plt.tight_layout()
    plt.savefig(output_path, dpi=150)
    plt.close()
    return output_path


def plot_income_by_rural_boxplot(
    df: pd.DataFrame,
    *,
    value: str = "log_gni_per_capita",
    group: str = "rural",
    output_dir: Path | str = ANALYSIS_OUTPUT_DIR,
) -> Path:
    urban, rural = split_by_flag(df, value, group)

    plt.figure(figsize=(7, 6))
    plt.boxplot([urban, rural])
    plt.xticks([1, 2], [f"Urban (n={urban.size})", f"Rural (n={rural.size})"])
    plt.ylabel(value)
    plt.title("Log GNI per capita by rural majority")
    plt.grid(True, axis="y", linestyle="--", alpha=0.3)
    return _save(output_dir, BOXPLOT_PNG_NAME)


def plot_income_qq(
    df: pd.DataFrame,
    *,
    value: str = "log_gni_per_capita",
    group: str = "rural",
    output_dir: Path | str = ANALYSIS_OUTPUT_DIR,
) -> Path:
    urban, rural = split_by_flag(df, value, group)

    fig, axes = plt.subplots(1, 2, figsize=(11, 5))
    for ax, values, label in zip(axes, (urban, rural), ("Urban", "Rural")):
        stats.probplot(values, dist="norm", plot=ax)
        ax.set_title(f"Normal Q-Q: {label}")
    return _save(output_dir, QQ_PNG_NAME)


def plot_correlation_scatter(
    df: pd.DataFrame,
    x: str,
    y: str,
    *,
    output_dir: Path | str = ANALYSIS_OUTPUT_DIR,
) -> Path:
    pair = df[[x, y]].dropna()
    xs = pair[x].to_numpy(dtype=float)
    ys = pair[y].to_numpy(dtype=float)

    plt.figure(figsize=(8, 6))
    plt.scatter(xs, ys, alpha=0.8, edgecolors="none")
    if len(xs) >= 2:
        slope, intercept = np.polyfit(xs, ys, 1)
        x_line = np.linspace(xs.min(), xs.max(), 200)
        r = np.corrcoef(xs, ys)[0, 1]
        plt.plot(
            x_line,
            slope * x_line + intercept,
            color="crimson",
            linewidth=2,
            label=f"Linear fit (r={r:.2f})",
        )
        plt.legend(frameon=False)
    plt.xlabel(x)
    plt.ylabel(y)
    plt.title(f"{y} vs {x}")
    plt.grid(True, linestyle="--", alpha=0.3)
    return _save(output_dir, SCATTER_PNG_NAME)


def plot_bootstrap_histogram(
    summary: BootstrapSummary,
    *,
    output_dir: Path | str = ANALYSIS_OUTPUT_DIR,
) -> Path:
    plt.figure(figsize=(8, 5))
    plt.hist(summary.differences, bins=50, color="steelblue", alpha=0.8)
    plt.axvline(
        summary.ci_lower,
        color="crimson",
        linestyle="--",
        label=f"{summary.percentile:g}th percentile = {summary.ci_lower:.3f}",
    )
    plt.axvline(0, color="black", linewidth=1)
    plt.xlabel("Bootstrap mean difference (urban - rural)")
    plt.ylabel("Count")
    plt.title(f"Bootstrap distribution ({summary.n_iterations} resamples)")
    plt.legend(frameon=False)
    return _save(output_dir, BOOTSTRAP_PNG_NAME)


def plot_permutation_histogram(
    summary: PermutationSummary,
    *,
    output_dir: Path | str = ANALYSIS_OUTPUT_DIR,
) -> Path:
    plt.figure(figsize=(8, 5))
    plt.hist(summary.permuted_r, bins=50, color="gray", alpha=0.8)
    for sign in (-1, 1):
        plt.axvline(
            sign * abs(summary.observed_r),
            color="crimson",
            linestyle="--",
        )
    plt.xlabel("Permuted Pearson r")
    plt.ylabel("Count")
    plt.title(f"Permutation distribution (observed r={summary.observed_r:.3f}, p={summary.pvalue:.4f})")
    return _save(output_dir, PERMUTATION_PNG_NAME)


__all__ = [
    "ANALYSIS_OUTPUT_DIR",
    "BOXPLOT_PNG_NAME",
    "QQ_PNG_NAME",
    "SCATTER_PNG_NAME",
    "BOOTSTRAP_PNG_NAME",
    "PERMUTATION_PNG_NAME",
    "plot_income_by_rural_boxplot",
    "plot_income_qq",
    "plot_correlation_scatter",
    "plot_bootstrap_histogram",
    "plot_permutation_histogram",
]
