"""Tests für die Diagnose-Zählungen."""

import pandas as pd

from catalog_pipeline.transform.aggregate import (
    count_by_value,
    counts_by_year_added,
    counts_by_year_and_kind,
)


def test_count_by_value_counts_distinct_ids_descending():
    rel = pd.DataFrame({
        "id": ["a", "b", "c", "a", "c"],
        "genre": ["Dramas", "Dramas", "Dramas", "Comedies", "Comedies"],
    })

    counts = count_by_value(rel, "genre")

    assert counts["genre"].tolist() == ["Dramas", "Comedies"]
    assert counts["count"].tolist() == [3, 2]
    assert counts["share_pct"].tolist() == [100.0, 66.67]


def test_count_by_value_ties_keep_first_appearance():
    rel = pd.DataFrame({"id": ["a", "b", "c"], "country": ["Spain", "India", "Japan"]})

    counts = count_by_value(rel, "country")

    assert counts["country"].tolist() == ["Spain", "India", "Japan"]


def test_count_by_value_empty_relation():
    counts = count_by_value(pd.DataFrame({"id": [], "cast": []}), "cast")

    assert counts.empty
    assert list(counts.columns) == ["cast", "count", "share_pct"]


def test_counts_by_year_and_kind_pivots_kinds_to_columns():
    df = pd.DataFrame({
        "id": ["a", "b", "c", "d"],
        "kind": ["Movie", "TV Show", "Movie", "Movie"],
        "release_year": pd.array([2020, 2020, 2021, None], dtype="Int64"),
    })

    table = counts_by_year_and_kind(df)

    assert list(table.columns) == ["release_year", "Movie", "TV Show"]
    assert table["release_year"].tolist() == [2020, 2021]
    assert table["Movie"].tolist() == [1, 1]
    assert table["TV Show"].tolist() == [1, 0]


def test_counts_by_year_added_accepts_iso_strings():
    """Test the exported-file case where date_added is ISO text."""
    df = pd.DataFrame({
        "id": ["a", "b", "c"],
        "kind": ["Movie", "TV Show", "TV Show"],
        "date_added": ["2019-01-01", "2021-09-24", pd.NA],
    })

    table = counts_by_year_added(df)

    assert table["year_added"].tolist() == [2019, 2021]
    assert table["TV Show"].tolist() == [0, 1]


def test_counts_by_year_added_accepts_datetimes():
    df = pd.DataFrame({
        "id": ["a"],
        "kind": ["Movie"],
        "date_added": pd.to_datetime(["2020-05-01"]),
    })

    table = counts_by_year_added(df)

    assert table.to_dict("records") == [{"year_added": 2020, "Movie": 1}]
