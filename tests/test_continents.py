import pandas as pd
import pytest

from transformations.continents import (
    CONTINENT_MARKERS,
    OTHER_CONTINENT,
    MembershipListError,
    assign_continents,
    find_duplicate_countries,
    marker_continent,
    resolve_continent,
)

MEMBERSHIP = [
    "AFRICA (54)",
    "Chad",
    "South Africa",
    "ASIA (44)",
    "Japan",
    "EUROPE (47)",
    "France",
    "N. AMERICA (23)",
    "Canada",
    "OCEANIA (14)",
    "Fiji",
    "S. AMERICA (12)",
    "Chile",
]


def test_nearest_preceding_marker_wins():
    tokens = ["AFRICA", "Chad", "EUROPE", "France"]
    assert resolve_continent("Chad", tokens) == "Africa"
    assert resolve_continent("France", tokens) == "Europe"


@pytest.mark.parametrize(
    "country, expected",
    [
        ("Chad", "Africa"),
        ("South Africa", "Africa"),
        ("Japan", "Asia"),
        ("France", "Europe"),
        ("Canada", "North America"),
        ("Fiji", "Oceania"),
        ("Chile", "South America"),
    ],
)
def test_present_countries_resolve_to_a_continent(country, expected):
    label = resolve_continent(country, MEMBERSHIP)
    assert label == expected
    assert label != OTHER_CONTINENT


@pytest.mark.parametrize("country", ["Puerto Rico", "World", "chad", ""])
def test_absent_countries_resolve_to_other(country):
    assert resolve_continent(country, MEMBERSHIP) == OTHER_CONTINENT


def test_resolution_is_deterministic():
    results = {resolve_continent("Fiji", MEMBERSHIP) for _ in range(10)}
    assert results == {"Oceania"}


def test_country_without_marker_raises():
    with pytest.raises(MembershipListError):
        resolve_continent("Chad", ["Chad", "AFRICA", "Niger"])


def test_duplicates_use_first_occurrence():
    tokens = ["AFRICA", "Georgia", "EUROPE", "Georgia"]
    assert resolve_continent("Georgia", tokens) == "Africa"
    assert find_duplicate_countries(tokens) == ["Georgia"]


def test_no_duplicates_reported_for_clean_list():
    assert find_duplicate_countries(MEMBERSHIP) == []


def test_marker_matching_is_case_sensitive():
    assert marker_continent("AFRICA (54)") == "Africa"
    assert marker_continent("S. AMERICA") == "South America"
    assert marker_continent("N. AMERICA") == "North America"
    assert marker_continent("South Africa") is None
    assert marker_continent("Central African Republic") is None


def test_every_marker_maps_to_its_label():
    for marker, label in CONTINENT_MARKERS.items():
        assert marker_continent(marker) == label


def test_assign_continents_adds_column_without_mutating_input():
    df = pd.DataFrame({"country": ["Chad", "Aruba", "Chile", None]})
    out = assign_continents(df, MEMBERSHIP)

    assert "continent" not in df.columns
    assert out["continent"].tolist() == ["Africa", "Other", "South America", "Other"]


class _UncopiableTokens(list):
    def __iter__(self):
        raise AssertionError("membership list was copied")


def test_resolution_indexes_the_given_list_without_copying():
    tokens = _UncopiableTokens(MEMBERSHIP)
    assert resolve_continent("Chile", tokens) == "South America"
    assert resolve_continent("Atlantis", tokens) == OTHER_CONTINENT
