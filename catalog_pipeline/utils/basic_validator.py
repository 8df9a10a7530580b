import logging
from typing import List
from datetime import datetime
import pandas as pd
from pathlib import Path

CURRENT_YEAR: int = datetime.now().year
YEAR_MIN: int = 1888
YEAR_MAX: int = CURRENT_YEAR + 1
REQUIRED_BASE_COLS: List[str] = ["id", "kind"]
DURATION_TOKEN_PATTERN = r"\d+ min"


def validate_dataframe(
    df: pd.DataFrame,
    *,
    required_cols: List[str] | None = None,
    allow_empty: bool = False,
    df_name: str | None = None,
    log_level: int = logging.WARNING,
    movie_label: str = "Movie",
    series_label: str = "TV Show",
    error_report_path: str | None = None,
    save_invalid_rows: bool = False,
    invalid_rows_output_path: str = "invalid_rows_found.csv",
) -> tuple[bool, List[str]]:
    """
    Prüft die reparierte Primärtabelle. Befunde werden geloggt und optional
    als Report/CSV gespeichert, brechen aber nichts ab.
    Rückgabe: (ok, Fehlerliste)
    """
    name = df_name or "DataFrame"
    errors: List[str] = []
    invalid_rows_parts: List[pd.DataFrame] = []

    # 0) Leerer DataFrame
    if df.empty and not allow_empty:
        errors.append(f"{name} ist leer.")

    # 1) Pflichtspalten prüfen
    req_cols = set(REQUIRED_BASE_COLS + (required_cols or []))
    missing = req_cols.difference(df.columns)
    if missing:
        errors.append(f"{name}: fehlende Spalten: {', '.join(sorted(missing))}")

    # 2) Jahr-Spalte (NA ist erlaubt, nur Ausreißer zählen)
    if "release_year" in df.columns:
        years = pd.to_numeric(df["release_year"], errors="coerce")
        invalid_year_mask = years.notna() & ~years.between(YEAR_MIN, YEAR_MAX)
        if invalid_year_mask.any():
            n_bad = int(invalid_year_mask.sum())
            errors.append(
                f"{name}: {n_bad} Zeilen mit ungültigem Jahr (<{YEAR_MIN} oder >{YEAR_MAX}) in 'release_year'."
            )
            if save_invalid_rows:
                invalid_rows_parts.append(df[invalid_year_mask])

    # 3) id eindeutig
    if "id" in df.columns:
        dupes = df.duplicated(subset=["id"], keep=False)
        if dupes.any():
            errors.append(f"{name}: {int(dupes.sum())} Zeilen mit doppelter id.")
            if save_invalid_rows:
                invalid_rows_parts.append(df[dupes])

    # 4) Laufzeit: genau eine der beiden Spalten, passend zu kind
    duration_cols = {"kind", "duration_seasons", "duration_minutes"}
    if duration_cols.issubset(df.columns):
        kind = df["kind"].astype("string").str.strip()
        has_seasons = df["duration_seasons"].notna()
        has_minutes = df["duration_minutes"].notna()
        wrong_mask = (
            (has_seasons & has_minutes)
            | ((kind == movie_label).fillna(False) & has_seasons)
            | ((kind == series_label).fillna(False) & has_minutes)
        )
        if wrong_mask.any():
            errors.append(
                f"{name}: {int(wrong_mask.sum())} Zeilen mit Laufzeit in der falschen Einheit.")
            if save_invalid_rows:
                invalid_rows_parts.append(df[wrong_mask])
        neither_mask = ~has_seasons & ~has_minutes
        if neither_mask.any():
            errors.append(
                f"{name}: {int(neither_mask.sum())} Zeilen ohne ableitbare Laufzeit.")
            if save_invalid_rows:
                invalid_rows_parts.append(df[neither_mask])

    # 5) Keine Laufzeit mehr in rating
    if "rating" in df.columns:
        token_mask = (
            df["rating"].astype("string").str.fullmatch(DURATION_TOKEN_PATTERN)
            .fillna(False).astype(bool)
        )
        if token_mask.any():
            errors.append(
                f"{name}: {int(token_mask.sum())} Werte in 'rating' sehen wie eine Laufzeit aus.")
            if save_invalid_rows:
                invalid_rows_parts.append(df[token_mask])

    for msg in errors:
        logging.log(log_level, msg)

    # --- Fehlerhafte Zeilen speichern ---
    if save_invalid_rows:
        try:
            if invalid_rows_parts:
                invalid_df = pd.concat(invalid_rows_parts)
                invalid_df = invalid_df[~invalid_df.index.duplicated(keep="first")]
            else:
                # Leere CSV mit Spaltenkopf erstellen
                invalid_df = df.head(0).copy()
            out_path = Path(invalid_rows_output_path)
            out_path.parent.mkdir(parents=True, exist_ok=True)
            invalid_df.to_csv(out_path, index=False, lineterminator="\n", date_format="%Y-%m-%d")
            logging.info(
                f"{name}: Fehlerhafte Zeilen gespeichert unter {out_path} (Anzahl: {len(invalid_df)})"
            )
        except OSError as e:
            logging.error(
                f"{name}: Fehler beim Speichern fehlerhafter Zeilen: {e}")

    # --- Fehlerreport speichern ---
    if error_report_path and errors:
        try:
            rep_path = Path(error_report_path)
            rep_path.parent.mkdir(parents=True, exist_ok=True)
            rep_path.write_text("\n".join(errors), encoding="utf-8")
            logging.info(f"{name}: Fehlerreport gespeichert unter {rep_path}")
        except OSError as e:
            logging.error(
                f"{name}: Fehler beim Speichern des Fehlerreports: {e}")

    return len(errors) == 0, errors
