"""
Country name normalization
--------------------------

The scraped membership page and the indicators table spell some countries
differently ("Cape Verde" vs "Cabo Verde", "Russia" vs "Russian
Federation"). Before resolving continents, every scraped token is passed
through an ordered list of regex rewrite rules so that it matches the
indicators table spelling.

Rules live in `name_rewrite_rules.csv` next to this module:

    pattern,replacement
    ^Cape Verde$,Cabo Verde
    ...

Row order is application order. Each rule is applied to the full token list
before the next one, so later rules see the output of earlier ones. Rules
are applied blindly: keeping patterns anchored and case-sensitive so they
never touch the uppercase continent headers is the job of the rule data.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Sequence

import pandas as pd

DEFAULT_NAME_REWRITE_RULES_CSV = Path(__file__).with_name("name_rewrite_rules.csv")


@dataclass(frozen=True)
class NameRewriteRule:
    """One (pattern, replacement) pair, `pattern` being a regular expression."""

    pattern: str
    replacement: str

    def apply(self, token: str) -> str:
        return re.sub(self.pattern, self.replacement, token)


def load_name_rewrite_rules(
    path: Path | str = DEFAULT_NAME_REWRITE_RULES_CSV,
) -> List[NameRewriteRule]:
    """
    Load the ordered rewrite rules from a CSV with `pattern` and
    `replacement` columns.
    """
    rules_df = pd.read_csv(path, dtype=str, keep_default_na=False)

    missing = {"pattern", "replacement"} - set(rules_df.columns)
    if missing:
        raise ValueError(
            f"Rewrite rules file {path} is missing required columns: {sorted(missing)}",
        )
    if rules_df.empty:
        return []

    rules: List[NameRewriteRule] = []
    for pattern, replacement in zip(rules_df["pattern"], rules_df["replacement"]):
        if pattern == "":
            continue
        re.compile(pattern)
        rules.append(NameRewriteRule(pattern=pattern, replacement=replacement))
    return rules


def apply_name_rewrites(
    tokens: Sequence[str],
    rules: Iterable[NameRewriteRule],
) -> List[str]:
    """
    Apply every rule to every token, rule by rule. Tokens are never dropped
    or reordered; a new list is returned.
    """
    rewritten = list(tokens)
    for rule in rules:
        rewritten = [rule.apply(token) for token in rewritten]
    return rewritten


__all__ = [
    "DEFAULT_NAME_REWRITE_RULES_CSV",
    "NameRewriteRule",
    "load_name_rewrite_rules",
    "apply_name_rewrites",
]
