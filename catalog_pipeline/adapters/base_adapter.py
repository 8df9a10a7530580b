from abc import ABC, abstractmethod
import logging
import pandas as pd
from catalog_pipeline.utils.save_aux_csv import save_aux_csv

class BaseAdapter(ABC):
    def __init__(self, source_config: dict):
        self.config = source_config

    @abstractmethod
    def extract(self) -> pd.DataFrame:
        """Lädt Rohdaten als DataFrame"""
        pass

    @abstractmethod
    def transform(self, data: pd.DataFrame) -> pd.DataFrame:
        """Bereinigt und formatiert die Quelldaten zu einem DataFrame"""
        pass

    def _log_aux_files(
        self,
        adapter_name: str,
        invalid_rows: list[dict],
        duplicate_rows: list[dict],
    ) -> None:
        if not self.config.get("save_aux", True):
            return
        aux_dir = self.config.get("aux_dir")
        if invalid_rows:
            path = save_aux_csv("invalid", adapter_name, pd.DataFrame(invalid_rows), aux_dir)
            logging.info(f"{adapter_name}: {len(invalid_rows)} ungültige Zeilen gespeichert unter {path}")
        if duplicate_rows:
            path = save_aux_csv("duplicates", adapter_name, pd.DataFrame(duplicate_rows), aux_dir)
            logging.info(f"{adapter_name}: {len(duplicate_rows)} Duplikate gespeichert unter {path}")
