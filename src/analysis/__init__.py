"""
Analysis layer
--------------

Statistical procedures and report outputs built on the curated analysis
table:

- t-test, bootstrap, Pearson correlation, permutation test
- OLS regression with backward elimination
- figures (box plot, Q-Q, scatter, histograms) and printable summaries
"""

from .income_regression import (  # noqa: F401
    DEFAULT_ALPHA,
    DEFAULT_CATEGORICAL,
    DEFAULT_CONTINUOUS,
    DEFAULT_RESPONSE,
    EliminationResult,
    backward_eliminate,
    build_formula,
    fit_income_model,
    predictor_pvalues,
)
from .report_plots import (  # noqa: F401
    ANALYSIS_OUTPUT_DIR,
    plot_bootstrap_histogram,
    plot_correlation_scatter,
    plot_income_by_rural_boxplot,
    plot_income_qq,
    plot_permutation_histogram,
)
from .report_summary import (  # noqa: F401
    format_bootstrap,
    format_correlation,
    format_elimination,
    format_permutation,
    format_ttest,
)
from .rural_income_tests import (  # noqa: F401
    DEFAULT_ITERATIONS,
    BootstrapSummary,
    CorrelationSummary,
    PermutationSummary,
    TTestSummary,
    bootstrap_mean_difference,
    pearson_correlation,
    permutation_correlation_test,
    rural_income_ttest,
)

__all__ = [
    "ANALYSIS_OUTPUT_DIR",
    "DEFAULT_ALPHA",
    "DEFAULT_CATEGORICAL",
    "DEFAULT_CONTINUOUS",
    "DEFAULT_ITERATIONS",
    "DEFAULT_RESPONSE",
    "BootstrapSummary",
    "CorrelationSummary",
    "EliminationResult",
    "PermutationSummary",
    "TTestSummary",
    "backward_eliminate",
    "bootstrap_mean_difference",
    "build_formula",
    "fit_income_model",
    "format_bootstrap",
    "format_correlation",
    "format_elimination",
    "format_permutation",
    "format_ttest",
    "pearson_correlation",
    "permutation_correlation_test",
    "plot_bootstrap_histogram",
    "plot_correlation_scatter",
    "plot_income_by_rural_boxplot",
    "plot_income_qq",
    "plot_permutation_histogram",
    "predictor_pvalues",
    "rural_income_ttest",
]
