import logging

import pandas as pd

DATE_ADDED_FORMAT = "%B %d, %Y"
# exakt "Zahl + Leerzeichen + min", bewusst nichts Breiteres
MISPLACED_RATING_PATTERN = r"\d+ min"

PRIMARY_COLUMNS: list[str] = [
    "id", "kind", "title", "date_added", "release_year", "rating",
    "duration", "duration_seasons", "duration_minutes",
]


def parse_date_added(series: pd.Series) -> pd.Series:
    """'September 25, 2021' → Timestamp; leer/unlesbar → NaT (kein Fehler)."""
    text = series.astype("string").str.strip()
    return pd.to_datetime(text, format=DATE_ADDED_FORMAT, errors="coerce")


def _leading_int(series: pd.Series) -> pd.Series:
    # Token bis zum ersten Leerzeichen, nur reine Ziffern zählen
    token = series.astype("string").str.strip().str.extract(r"^(\d+)(?: |$)", expand=False)
    return pd.to_numeric(token, errors="coerce").astype("Int64")


def repair_misplaced_ratings(df: pd.DataFrame) -> pd.DataFrame:
    """
    Punktkorrektur für Zeilen, in denen die Laufzeit ("84 min") in der
    rating-Spalte gelandet ist: Text wird unverändert nach duration kopiert,
    rating wird NA.
    """
    df = df.copy()
    rating = df["rating"].astype("string")
    mask = rating.str.fullmatch(MISPLACED_RATING_PATTERN).fillna(False).astype(bool)
    if mask.any():
        logging.info(
            f"{int(mask.sum())} Zeilen mit Laufzeit in 'rating' korrigiert: "
            f"{df.loc[mask, 'id'].tolist()}"
        )
        df.loc[mask, "duration"] = df.loc[mask, "rating"]
        df.loc[mask, "rating"] = pd.NA
    return df


def split_duration_units(
    df: pd.DataFrame,
    movie_label: str = "Movie",
    series_label: str = "TV Show",
) -> pd.DataFrame:
    """duration → duration_seasons (nur Serien) bzw. duration_minutes (nur Filme)."""
    df = df.copy()
    amount = _leading_int(df["duration"])
    kind = df["kind"].astype("string").str.strip()
    is_series = (kind == series_label).fillna(False).astype(bool)
    is_movie = (kind == movie_label).fillna(False).astype(bool)
    df["duration_seasons"] = amount.where(is_series, pd.NA).astype("Int64")
    df["duration_minutes"] = amount.where(is_movie, pd.NA).astype("Int64")
    return df


def repair_columns(
    df: pd.DataFrame,
    movie_label: str = "Movie",
    series_label: str = "TV Show",
) -> pd.DataFrame:
    """
    Wendet die drei Reparaturen auf die Primärtabelle an und liefert sie in
    Export-Spaltenreihenfolge zurück. Die rating-Korrektur muss vor dem
    Laufzeit-Split laufen, damit korrigierte Zeilen mitgezählt werden.
    """
    df = df.copy()

    # a) date_added → Datum
    had_date = df["date_added"].notna()
    df["date_added"] = parse_date_added(df["date_added"])
    n_bad_dates = int((had_date & df["date_added"].isna()).sum())

    # b) Laufzeit aus rating zurückholen
    df = repair_misplaced_ratings(df)

    # c) Einheiten-Split
    df = split_duration_units(df, movie_label=movie_label, series_label=series_label)
    known_kind = df["kind"].astype("string").str.strip().isin([movie_label, series_label])
    n_bad_durations = int(
        (known_kind & df["duration_seasons"].isna() & df["duration_minutes"].isna()).sum()
    )

    if n_bad_dates:
        logging.warning(f"{n_bad_dates} Werte in 'date_added' nicht lesbar → NA.")
    if n_bad_durations:
        logging.warning(f"{n_bad_durations} Zeilen ohne lesbare Laufzeit → NA.")
    unknown_kind = int((~known_kind).sum())
    if unknown_kind:
        logging.warning(f"{unknown_kind} Zeilen mit unbekanntem 'kind' – keine Laufzeit abgeleitet.")

    return df[PRIMARY_COLUMNS].reset_index(drop=True)
