import logging
from typing import Iterable

import pandas as pd

MULTIVALUE_COLUMNS: tuple[str, ...] = ("director", "cast", "country", "genre")
SEPARATOR = ", "


def split_multivalue(
    df: pd.DataFrame,
    column: str,
    *,
    id_col: str = "id",
    strip_trailing_separator: bool = False,
) -> pd.DataFrame:
    """
    Zerlegt eine kommagetrennte Mehrfachwert-Spalte in eine Relation (id, Wert):
      • Split am Literal ", "
      • eine Zeile pro Teilstring, Reihenfolge des ersten Auftretens
      • leere Teilstrings und fehlende Quellwerte fallen weg
      • doppelte (id, Wert)-Paare werden entfernt
    Mit strip_trailing_separator wird zusätzlich ein hängendes Komma
    ("India,") entfernt, bevor leere Strings gefiltert werden.
    """
    rel = df[[id_col, column]].dropna(subset=[column])
    rel = rel.assign(**{column: rel[column].str.split(SEPARATOR, regex=False)})
    rel = rel.explode(column, ignore_index=True)

    values = rel[column]
    if strip_trailing_separator:
        values = values.str.strip().str.rstrip(",").str.strip()
    rel[column] = values

    rel = rel[rel[column].notna() & (rel[column] != "")]
    rel = rel.drop_duplicates(subset=[id_col, column], keep="first")
    return rel.reset_index(drop=True)


def split_all(
    df: pd.DataFrame,
    columns: Iterable[str] = MULTIVALUE_COLUMNS,
    *,
    id_col: str = "id",
) -> dict[str, pd.DataFrame]:
    relations: dict[str, pd.DataFrame] = {}
    for column in columns:
        rel = split_multivalue(
            df,
            column,
            id_col=id_col,
            # nur country trägt das Trailing-Komma-Artefakt
            strip_trailing_separator=(column == "country"),
        )
        n_items = rel[id_col].nunique()
        logging.info(
            f"Relation '{column}': {len(rel)} Zeilen für {n_items} Titel "
            f"({len(df) - n_items} Titel ohne Wert)."
        )
        relations[column] = rel
    return relations
