# catalog_pipeline/adapters/netflix_adapter.py
import logging
from pathlib import Path
from typing import List
import pandas as pd
from catalog_pipeline.adapters.base_adapter import BaseAdapter
from catalog_pipeline.utils.errors import SchemaMismatch, SourceUnavailable

EXPECTED_COLUMNS: List[str] = [
    "id", "kind", "title", "director", "cast", "country", "date_added",
    "release_year", "rating", "duration", "genre", "description",
]

# Header des Netflix-Exports → kanonische Spaltennamen
DEFAULT_COLUMN_ALIASES: dict[str, str] = {
    "show_id": "id",
    "type": "kind",
    "listed_in": "genre",
}


class NetflixAdapter(BaseAdapter):
    """Netflix-Katalog-Adapter (Loader) mit Schema-Prüfung.

    • Alle Spalten werden als Text gelesen, nur leere Felder werden zu NA
    • Header-Aliase (show_id, type, listed_in) werden vor der Prüfung umbenannt
    • release_year   Int64 (nicht numerisch → NA, Zeile bleibt erhalten)
    • id             eindeutig, erste Zeile pro id gewinnt
    """

    # ------------------------------------------------------------ #
    # 1) Extract                                                   #
    # ------------------------------------------------------------ #
    def extract(self) -> pd.DataFrame:  # type: ignore[override]
        src_path = Path(self.config["file_path"])
        if not src_path.is_file():
            raise SourceUnavailable(f"Quelldatei nicht gefunden: {src_path}")

        try:
            df = pd.read_csv(
                src_path,
                dtype=str,
                keep_default_na=False,
                na_values=[""],
                encoding=self.config.get("encoding", "utf-8"),
            )
        except pd.errors.EmptyDataError as e:
            raise SchemaMismatch(EXPECTED_COLUMNS, str(src_path)) from e
        except (OSError, UnicodeDecodeError, pd.errors.ParserError) as e:
            raise SourceUnavailable(f"Quelldatei nicht lesbar: {src_path} ({e})") from e

        aliases = self.config.get("column_aliases", DEFAULT_COLUMN_ALIASES) or {}
        # Alias nur anwenden, wenn die kanonische Spalte nicht schon existiert
        rename_map = {
            src: dst for src, dst in aliases.items()
            if src in df.columns and dst not in df.columns
        }
        df = df.rename(columns=rename_map)

        missing = [c for c in EXPECTED_COLUMNS if c not in df.columns]
        if missing:
            raise SchemaMismatch(missing, str(src_path))

        logging.info(f"NetflixAdapter: {len(df)} Zeilen aus {src_path} geladen.")
        return df

    # ------------------------------------------------------------ #
    # 2) Transform                                                 #
    # ------------------------------------------------------------ #
    def transform(self, df: pd.DataFrame) -> pd.DataFrame:  # type: ignore[override]
        df = df.copy()

        # ---------- release_year → Int64 ---------------------------
        year = df["release_year"].str.strip()
        year = year.where(year.str.fullmatch(r"\d+", na=False))
        df["release_year"] = pd.to_numeric(year, errors="coerce").astype("Int64")

        # ---------- Zeilen ohne id sind nicht verknüpfbar ----------
        invalid_rows: List[dict] = []
        no_id_mask = df["id"].isna() | (df["id"].str.strip() == "")
        for _, row in df[no_id_mask].iterrows():
            invalid_rows.append({**row.to_dict(), "reason": "missing id"})
        df = df[~no_id_mask]

        # ---------- Duplicate-Check (id) ---------------------------
        duplicate_rows: List[dict] = []
        dupes_mask = df.duplicated(subset=["id"], keep="first")
        for _, row in df[dupes_mask].iterrows():
            duplicate_rows.append({**row.to_dict(), "reason": "duplicate id"})
        df = df[~dupes_mask]

        if invalid_rows or duplicate_rows:
            logging.warning(
                f"NetflixAdapter: {len(invalid_rows)} Zeilen ohne id und "
                f"{len(duplicate_rows)} doppelte ids entfernt."
            )
        self._log_aux_files("NetflixAdapter", invalid_rows, duplicate_rows)

        return df[EXPECTED_COLUMNS].reset_index(drop=True)
