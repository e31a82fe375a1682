"""
Transformations layer
----------------------

Modules responsible for turning the raw inputs (indicators CSV and scraped
membership tokens) into the typed, filtered analysis table.
"""

from .continents import (  # noqa: F401
    CONTINENT_LABELS,
    CONTINENT_MARKERS,
    OTHER_CONTINENT,
    MembershipListError,
    assign_continents,
    find_duplicate_countries,
    marker_continent,
    resolve_continent,
)
from .country_indicators import (  # noqa: F401
    INDICATORS_CSV,
    INDICATOR_COLUMNS,
    NUMERIC_COLUMNS,
    build_country_indicators_dataframe,
    load_column_renames,
    load_country_indicators,
)
from .country_names import (  # noqa: F401
    DEFAULT_NAME_REWRITE_RULES_CSV,
    NameRewriteRule,
    apply_name_rewrites,
    load_name_rewrite_rules,
)
from .features import (  # noqa: F401
    LOG_COLUMNS,
    RURAL_THRESHOLD_PCT,
    SELECTED_COLUMNS,
    NonPositiveValueError,
    add_rural_flag,
    filter_analysis_rows,
    log_column_name,
    log_transform,
)
from .curated_country_indicators import build_analysis_table  # noqa: F401

__all__ = [
    "CONTINENT_LABELS",
    "CONTINENT_MARKERS",
    "OTHER_CONTINENT",
    "MembershipListError",
    "assign_continents",
    "find_duplicate_countries",
    "marker_continent",
    "resolve_continent",
    "INDICATORS_CSV",
    "INDICATOR_COLUMNS",
    "NUMERIC_COLUMNS",
    "build_country_indicators_dataframe",
    "load_column_renames",
    "load_country_indicators",
    "DEFAULT_NAME_REWRITE_RULES_CSV",
    "NameRewriteRule",
    "apply_name_rewrites",
    "load_name_rewrite_rules",
    "LOG_COLUMNS",
    "RURAL_THRESHOLD_PCT",
    "SELECTED_COLUMNS",
    "NonPositiveValueError",
    "add_rural_flag",
    "filter_analysis_rows",
    "log_column_name",
    "log_transform",
    "build_analysis_table",
]
