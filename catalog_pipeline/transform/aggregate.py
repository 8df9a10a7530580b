"""
Deskriptive Zählungen über Primärtabelle und Relationen.

Reine Diagnose: die Ergebnisse werden geloggt bzw. von der explorativen
Analyse gespeichert, aber von keiner anderen Pipeline-Stufe gelesen.
"""
import numpy as np
import pandas as pd


def count_by_value(relation: pd.DataFrame, column: str, id_col: str = "id") -> pd.DataFrame:
    """Anzahl unterschiedlicher Titel pro Wert, absteigend (Gleichstand: erstes Auftreten)."""
    if relation.empty:
        return pd.DataFrame({column: pd.Series(dtype=object), "count": pd.Series(dtype="int64"),
                             "share_pct": pd.Series(dtype="float64")})

    counts = relation.groupby(column, sort=False)[id_col].nunique()
    counts = counts.sort_values(ascending=False, kind="stable")
    n_items = relation[id_col].nunique()
    result = counts.rename("count").reset_index()
    result["share_pct"] = np.round(100.0 * result["count"] / n_items, 2)
    return result


def _pivot_by_kind(keys: pd.Series, kind: pd.Series, index_name: str) -> pd.DataFrame:
    frame = pd.DataFrame({index_name: keys, "kind": kind}).dropna()
    if frame.empty:
        return pd.DataFrame(columns=[index_name])
    table = (
        frame.groupby([index_name, "kind"]).size()
        .unstack("kind", fill_value=0)
        .sort_index()
    )
    table.columns.name = None
    return table.astype("int64").reset_index()


def counts_by_year_and_kind(df: pd.DataFrame, year_col: str = "release_year") -> pd.DataFrame:
    """Titel pro Jahr, eine Zählspalte je kind (fehlende Kombination → 0)."""
    years = pd.to_numeric(df[year_col], errors="coerce").astype("Int64")
    return _pivot_by_kind(years, df["kind"], year_col)


def counts_by_year_added(df: pd.DataFrame, date_col: str = "date_added") -> pd.DataFrame:
    """Wie counts_by_year_and_kind, aber nach dem Jahr aus date_added."""
    dates = df[date_col]
    if not pd.api.types.is_datetime64_any_dtype(dates):
        # exportierte CSV liefert ISO-Strings
        dates = pd.to_datetime(dates, format="%Y-%m-%d", errors="coerce")
    years = dates.dt.year.astype("Int64")
    return _pivot_by_kind(years, df["kind"], "year_added")
