import logging
from pathlib import Path
import pandas as pd

class CsvLoader:
    """Schreibt ein DataFrame byte-stabil als CSV (gleicher Input → gleiche Datei)."""

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def load(self, df: pd.DataFrame, columns: list[str] | None = None) -> Path:
        out = df[columns] if columns is not None else df
        self.path.parent.mkdir(parents=True, exist_ok=True)
        out.to_csv(
            self.path,
            index=False,
            encoding="utf-8",
            na_rep="",
            lineterminator="\n",
            date_format="%Y-%m-%d",
        )
        logging.info(f"✅ {len(out)} Zeilen gespeichert unter: {self.path}")
        return self.path
