"""
OLS model of log GNI per capita and its backward elimination.

Categorical predictors (continent, rural flag) enter the formula as
`C(name)`, so statsmodels expands them into indicator columns with the
first level as reference. During backward elimination each predictor is
judged by the smallest p-value among its coefficients: a categorical
predictor is kept as a whole when any of its levels is significant.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Dict, List, Sequence, Tuple

import pandas as pd
import statsmodels.formula.api as smf

DEFAULT_RESPONSE = "log_gni_per_capita"
DEFAULT_CONTINUOUS = [
    "log_imports_pct_gdp",
    "log_exports_pct_gdp",
    "fertility_rate_start",
    "fertility_rate_end",
    "log_infant_mortality_rate",
]
DEFAULT_CATEGORICAL = ["continent", "rural"]
DEFAULT_ALPHA = 0.05


@dataclass
class EliminationResult:
    results: object
    formula: str
    kept_continuous: List[str]
    kept_categorical: List[str]
    eliminated: List[Tuple[str, float]] = field(default_factory=list)

    @property
    def kept(self) -> List[str]:
        return self.kept_continuous + self.kept_categorical


def _term(predictor: str, categorical: bool) -> str:
    return f"C({predictor})" if categorical else predictor


def build_formula(
    response: str,
    continuous: Sequence[str],
    categorical: Sequence[str],
) -> str:
    terms = [_term(p, False) for p in continuous] + [_term(p, True) for p in categorical]
    return f"{response} ~ {' + '.join(terms) if terms else '1'}"


def _model_frame(
    df: pd.DataFrame,
    response: str,
    continuous: Sequence[str],
    categorical: Sequence[str],
) -> pd.DataFrame:
    columns = [response, *continuous, *categorical]
    data = df[columns].copy()
    for col in [response, *continuous]:
        data[col] = pd.to_numeric(data[col], errors="coerce").astype(float)
    # Plain str levels; nullable string/boolean dtypes are not handled
    # consistently by the formula engine.
    for col in categorical:
        data[col] = data[col].astype(str)
    return data.dropna()


def fit_income_model(
    df: pd.DataFrame,
    *,
    response: str = DEFAULT_RESPONSE,
    continuous: Sequence[str] = DEFAULT_CONTINUOUS,
    categorical: Sequence[str] = DEFAULT_CATEGORICAL,
):
    """Fit the OLS model and return the statsmodels results object."""
    formula = build_formula(response, continuous, categorical)
    data = _model_frame(df, response, continuous, categorical)
    return smf.ols(formula, data=data).fit()


def predictor_pvalues(
    results,
    continuous: Sequence[str],
    categorical: Sequence[str],
) -> Dict[str, float]:
    """
    Smallest coefficient p-value per predictor. A predictor without any
    coefficient (e.g. a single-level categorical) or with an undefined
    p-value gets 1.0.
    """
    pvalues = results.pvalues
    out: Dict[str, float] = {}
    for predictor, is_categorical in [(p, False) for p in continuous] + [(p, True) for p in categorical]:
        term = _term(predictor, is_categorical)
        names = [n for n in pvalues.index if n == term or n.startswith(term + "[")]
        value = float(pvalues[names].min()) if names else 1.0
        out[predictor] = 1.0 if math.isnan(value) else value
    return out


def backward_eliminate(
    df: pd.DataFrame,
    *,
    response: str = DEFAULT_RESPONSE,
    continuous: Sequence[str] = DEFAULT_CONTINUOUS,
    categorical: Sequence[str] = DEFAULT_CATEGORICAL,
    alpha: float = DEFAULT_ALPHA,
) -> EliminationResult:
    """
    Drop the least significant predictor while its p-value is >= alpha,
    so every remaining one has p < alpha (or none is left). Returns the
    final fit and the ordered list of eliminated (predictor, p-value) pairs.
    """
    kept_continuous = list(continuous)
    kept_categorical = list(categorical)
    eliminated: List[Tuple[str, float]] = []

    while True:
        results = fit_income_model(
            df,
            response=response,
            continuous=kept_continuous,
            categorical=kept_categorical,
        )
        pvalues = predictor_pvalues(results, kept_continuous, kept_categorical)
        if not pvalues:
            break

        worst, worst_p = max(pvalues.items(), key=lambda item: item[1])
        if worst_p < alpha:
            break

        eliminated.append((worst, worst_p))
        if worst in kept_continuous:
            kept_continuous.remove(worst)
        else:
            kept_categorical.remove(worst)

    return EliminationResult(
        results=results,
        formula=build_formula(response, kept_continuous, kept_categorical),
        kept_continuous=kept_continuous,
        kept_categorical=kept_categorical,
        eliminated=eliminated,
    )


__all__ = [
    "DEFAULT_RESPONSE",
    "DEFAULT_CONTINUOUS",
    "DEFAULT_CATEGORICAL",
    "DEFAULT_ALPHA",
    "EliminationResult",
    "build_formula",
    "fit_income_model",
    "predictor_pvalues",
    "backward_eliminate",
]
