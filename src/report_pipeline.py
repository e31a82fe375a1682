"""
Entrypoint for the rural vs urban income report.

Runs, in order:

1. Load the country indicators table (CSV)
2. Scrape the country-by-continent membership list
3. Build the analysis table (name rewrites, continents, rural flag,
   filtering, log transforms)
4. One-sided t-test of log GNI per capita, urban vs rural (+ box/Q-Q plots)
5. Bootstrap lower bound for the mean difference (+ histogram)
6. Pearson correlation test (+ scatter plot)
7. Permutation test for the same correlation (+ histogram)
8. OLS regression with backward elimination

Intended usage (local):

    PYTHONPATH=src python -m report_pipeline --indicators-csv data/country_indicators.csv

Settings default to environment variables (optionally from a .env file):
INDICATORS_CSV, CONTINENTS_URL, CONTINENTS_SELECTOR, REPORT_OUTPUT_DIR,
RANDOM_SEED, RESAMPLING_ITERATIONS, SIGNIFICANCE_LEVEL.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Dict, List, Mapping, Optional, Sequence

from analysis import (
    backward_eliminate,
    bootstrap_mean_difference,
    format_bootstrap,
    format_correlation,
    format_elimination,
    format_permutation,
    format_ttest,
    pearson_correlation,
    permutation_correlation_test,
    plot_bootstrap_histogram,
    plot_correlation_scatter,
    plot_income_by_rural_boxplot,
    plot_income_qq,
    plot_permutation_histogram,
    rural_income_ttest,
)
from crawler import CONTINENTS_SELECTOR, CONTINENTS_URL, crawl_continent_membership
from env_loader import env_float, env_int, load_dotenv_if_present
from transformations import (
    DEFAULT_NAME_REWRITE_RULES_CSV,
    INDICATORS_CSV,
    build_analysis_table,
    load_column_renames,
    load_country_indicators,
    load_name_rewrite_rules,
)

load_dotenv_if_present()

REPORT_OUTPUT_DIR = Path(os.getenv("REPORT_OUTPUT_DIR", "report"))
RANDOM_SEED = env_int("RANDOM_SEED", 2024)
RESAMPLING_ITERATIONS = env_int("RESAMPLING_ITERATIONS", 10_000)
SIGNIFICANCE_LEVEL = env_float("SIGNIFICANCE_LEVEL", 0.05)

CORRELATION_X = "log_imports_pct_gdp"
CORRELATION_Y = "log_exports_pct_gdp"


def run_report_pipeline(
    *,
    indicators_path: Path | str = INDICATORS_CSV,
    column_renames: Optional[Mapping[str, str]] = None,
    continents_url: str = CONTINENTS_URL,
    continents_selector: str = CONTINENTS_SELECTOR,
    membership_tokens: Optional[Sequence[str]] = None,
    rules_path: Path | str = DEFAULT_NAME_REWRITE_RULES_CSV,
    output_dir: Path | str = REPORT_OUTPUT_DIR,
    seed: int = RANDOM_SEED,
    n_iterations: int = RESAMPLING_ITERATIONS,
    alpha: float = SIGNIFICANCE_LEVEL,
    correlation_x: str = CORRELATION_X,
    correlation_y: str = CORRELATION_Y,
) -> Dict[str, List[Path]]:
    """
    Run the full report end-to-end.

    Parameters
    ----------
    column_renames:
        Explicit raw header -> canonical column renames for indicators
        files whose headers the built-in aliases do not cover.
    membership_tokens:
        Already scraped membership tokens. When omitted the page at
        `continents_url` is fetched.

    Returns
    -------
    artefacts:
        Dictionary mapping step names to lists of generated figure Paths.
    """
    artefacts: Dict[str, List[Path]] = {}
    output_dir = Path(output_dir)

    # 1. Indicators table
    print("[1/8] Loading country indicators...")
    indicators = load_country_indicators(indicators_path, column_renames=column_renames)
    print(f"      {len(indicators)} rows from {indicators_path}")

    # 2. Continent membership list
    if membership_tokens is None:
        print(f"[2/8] Scraping continent membership from {continents_url}...")
        membership_tokens = crawl_continent_membership(continents_url, selector=continents_selector)
    else:
        print("[2/8] Using provided continent membership tokens...")
    print(f"      {len(membership_tokens)} tokens")

    # 3. Analysis table
    print("[3/8] Building analysis table...")
    rules = load_name_rewrite_rules(rules_path)
    table = build_analysis_table(indicators, membership_tokens, rules)
    print(
        f"      {len(table)} countries kept "
        f"({int(table['rural'].sum())} rural, {int((~table['rural']).sum())} urban)",
    )

    # 4. t-test
    print("[4/8] Welch t-test, urban vs rural log GNI per capita...")
    print(format_ttest(rural_income_ttest(table)))
    artefacts["ttest"] = [
        plot_income_by_rural_boxplot(table, output_dir=output_dir),
        plot_income_qq(table, output_dir=output_dir),
    ]

    # 5. Bootstrap
    print("[5/8] Bootstrap confidence bound...")
    bootstrap = bootstrap_mean_difference(table, n_iterations=n_iterations, seed=seed)
    print(format_bootstrap(bootstrap))
    artefacts["bootstrap"] = [plot_bootstrap_histogram(bootstrap, output_dir=output_dir)]

    # 6. Pearson correlation
    print(f"[6/8] Pearson correlation {correlation_x} ~ {correlation_y}...")
    print(format_correlation(pearson_correlation(table, correlation_x, correlation_y)))
    artefacts["correlation"] = [
        plot_correlation_scatter(table, correlation_x, correlation_y, output_dir=output_dir),
    ]

    # 7. Permutation test
    print("[7/8] Permutation test...")
    permutation = permutation_correlation_test(
        table,
        correlation_x,
        correlation_y,
        n_iterations=n_iterations,
        seed=seed,
    )
    print(format_permutation(permutation))
    artefacts["permutation"] = [plot_permutation_histogram(permutation, output_dir=output_dir)]

    # 8. Regression
    print("[8/8] OLS regression with backward elimination...")
    print(format_elimination(backward_eliminate(table, alpha=alpha)))

    print("\nReport completed successfully.")
    return artefacts


def build_arg_parser():
    import argparse

    parser = argparse.ArgumentParser(
        description="Run the rural vs urban income report end-to-end.",
    )
    parser.add_argument(
        "--indicators-csv",
        type=str,
        default=str(INDICATORS_CSV),
        help="Path to the country indicators CSV (default: INDICATORS_CSV).",
    )
    parser.add_argument(
        "--column-renames",
        type=str,
        default=None,
        help="CSV of explicit indicator header renames (source,target).",
    )
    parser.add_argument(
        "--continents-url",
        type=str,
        default=CONTINENTS_URL,
        help="URL of the country-by-continent page (default: CONTINENTS_URL).",
    )
    parser.add_argument(
        "--continents-selector",
        type=str,
        default=CONTINENTS_SELECTOR,
        help="CSS selector of the membership text nodes (default: CONTINENTS_SELECTOR).",
    )
    parser.add_argument(
        "--rules-csv",
        type=str,
        default=str(DEFAULT_NAME_REWRITE_RULES_CSV),
        help="CSV of ordered name rewrite rules (pattern,replacement).",
    )
    parser.add_argument(
        "--output-dir",
        type=str,
        default=str(REPORT_OUTPUT_DIR),
        help="Directory where figures are written (default: report).",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=RANDOM_SEED,
        help="Random seed for the bootstrap and permutation test.",
    )
    parser.add_argument(
        "--iterations",
        type=int,
        default=RESAMPLING_ITERATIONS,
        help="Resampling iterations (default: 10000).",
    )
    parser.add_argument(
        "--alpha",
        type=float,
        default=SIGNIFICANCE_LEVEL,
        help="Significance level for backward elimination (default: 0.05).",
    )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> Dict[str, List[Path]]:
    args = build_arg_parser().parse_args(argv)
    column_renames = load_column_renames(args.column_renames) if args.column_renames else None
    return run_report_pipeline(
        indicators_path=Path(args.indicators_csv),
        column_renames=column_renames,
        continents_url=args.continents_url,
        continents_selector=args.continents_selector,
        rules_path=Path(args.rules_csv),
        output_dir=Path(args.output_dir),
        seed=args.seed,
        n_iterations=args.iterations,
        alpha=args.alpha,
    )


if __name__ == "__main__":
    main()


__all__ = ["run_report_pipeline", "build_arg_parser", "main"]
