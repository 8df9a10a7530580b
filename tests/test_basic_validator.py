"""Tests für die Prüfung der reparierten Primärtabelle."""

import logging

import pandas as pd

from catalog_pipeline.utils.basic_validator import validate_dataframe


def _titles(**overrides):
    data = {
        "id": ["s1", "s2"],
        "kind": ["Movie", "TV Show"],
        "release_year": pd.array([2020, 2021], dtype="Int64"),
        "rating": ["PG-13", "TV-MA"],
        "duration_seasons": pd.array([pd.NA, 2], dtype="Int64"),
        "duration_minutes": pd.array([90, pd.NA], dtype="Int64"),
    }
    data.update(overrides)
    return pd.DataFrame(data)


def test_clean_table_passes():
    ok, errors = validate_dataframe(_titles())

    assert ok
    assert errors == []


def test_empty_table_is_reported():
    ok, errors = validate_dataframe(_titles().head(0))

    assert not ok
    assert any("leer" in e for e in errors)


def test_missing_required_columns_are_reported():
    ok, errors = validate_dataframe(_titles().drop(columns=["kind"]), required_cols=["title"])

    assert not ok
    assert any("kind" in e and "title" in e for e in errors)


def test_duplicate_ids_are_reported():
    ok, errors = validate_dataframe(_titles(id=["s1", "s1"]))

    assert not ok
    assert any("doppelter id" in e for e in errors)


def test_duration_in_wrong_unit_is_reported():
    df = _titles(duration_seasons=pd.array([1, 2], dtype="Int64"))

    ok, errors = validate_dataframe(df)

    assert not ok
    assert any("falschen Einheit" in e for e in errors)


def test_duration_token_left_in_rating_is_reported():
    ok, errors = validate_dataframe(_titles(rating=["84 min", "TV-MA"]))

    assert not ok
    assert any("rating" in e for e in errors)


def test_year_out_of_range_is_reported_but_na_is_not():
    ok, errors = validate_dataframe(_titles(release_year=pd.array([1700, pd.NA], dtype="Int64")))

    assert not ok
    assert len([e for e in errors if "Jahr" in e]) == 1


def test_findings_are_logged_and_saved(tmp_path, caplog):
    df = _titles(duration_minutes=pd.array([pd.NA, pd.NA], dtype="Int64"))
    report = tmp_path / "reports" / "Titles-DF_report.txt"
    invalid = tmp_path / "reports" / "Titles-DF_invalid_rows.csv"

    with caplog.at_level(logging.WARNING):
        ok, errors = validate_dataframe(
            df,
            df_name="Titles-DF",
            error_report_path=str(report),
            save_invalid_rows=True,
            invalid_rows_output_path=str(invalid),
        )

    assert not ok
    assert "ohne ableitbare Laufzeit" in caplog.text
    assert report.read_text(encoding="utf-8") == "\n".join(errors)
    assert pd.read_csv(invalid)["id"].tolist() == ["s1"]
