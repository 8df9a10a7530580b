import argparse
import logging
import sys
from pathlib import Path

import pandas as pd
import yaml

# Adapter-Importe
from catalog_pipeline.adapters.netflix_adapter import NetflixAdapter

# Transformations-Importe
from catalog_pipeline.transform.split_multivalue import MULTIVALUE_COLUMNS, split_all
from catalog_pipeline.transform.repair import PRIMARY_COLUMNS, repair_columns
from catalog_pipeline.transform.aggregate import (
    count_by_value,
    counts_by_year_added,
    counts_by_year_and_kind,
)

# Loader-Importe
from catalog_pipeline.loaders.csv_loader import CsvLoader
from catalog_pipeline.utils.basic_validator import validate_dataframe
from catalog_pipeline.utils.errors import SchemaMismatch, SourceUnavailable

DEFAULT_CONFIG_PATH: Path = Path(__file__).resolve().parent / "config.yaml"

DEFAULT_OUTPUT_FILENAMES: dict[str, str] = {
    "titles": "titles.csv",
    "director": "directors.csv",
    "cast": "cast.csv",
    "country": "countries.csv",
    "genre": "genres.csv",
}


def load_config(config_path: str | Path) -> dict:
    """
    Liest die YAML-Konfiguration.

    Raises:
        FileNotFoundError: Wenn die Konfigurationsdatei nicht gefunden wird.
        yaml.YAMLError: Wenn die Konfigurationsdatei nicht gültig ist.
    """
    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(
            f"Konfigurationsdatei nicht gefunden: {config_path}")

    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        logging.error(
            f"Fehler beim Parsen der Konfigurationsdatei {config_path}: {e}")
        raise

    if config is None:  # yaml.safe_load liefert None bei leerer Datei
        logging.warning(
            f"Konfigurationsdatei {config_path} ist leer oder enthält keine gültige YAML-Struktur."
        )
        return {}
    return config


def output_paths(config: dict, output_dir: Path) -> dict[str, Path]:
    """Feste Zielpfade der fünf Exportdateien."""
    filenames = {**DEFAULT_OUTPUT_FILENAMES,
                 **(config.get("output", {}).get("filenames") or {})}
    return {name: output_dir / filenames[name] for name in DEFAULT_OUTPUT_FILENAMES}


class CatalogPipeline:
    """
    Bereinigt einen Streaming-Katalog und exportiert Primärtabelle plus
    vier normalisierte Relationen (director, cast, country, genre).

    Ablauf: Laden → Mehrfachwerte splitten → Spalten reparieren →
    (Diagnose-Zählungen) → Export. Jede Stufe liest nur Ergebnisse
    vorheriger Stufen.
    """

    def __init__(self,
                 config_path: str | Path = DEFAULT_CONFIG_PATH,
                 input_path: str | Path | None = None,
                 output_dir: str | Path | None = None,
                 log_level: str | None = None):
        """
        Args:
            config_path: Pfad zur YAML-Konfiguration. Relative Pfade darin
                         werden relativ zu deren Verzeichnis aufgelöst.
            input_path: Überschreibt source.file_path.
            output_dir: Überschreibt output.dir.
            log_level: Überschreibt logging.level.
        """
        self.config_path: Path = Path(config_path).resolve()
        self.config: dict = load_config(self.config_path)

        level_name = (log_level or self.config.get('logging', {}).get('level', 'INFO')).upper()
        level_value = getattr(logging, level_name, logging.INFO)
        logging.basicConfig(
            level=level_value,
            format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S')
        logging.getLogger().setLevel(level_value)
        self.logger = logging.getLogger(__name__)

        source_cfg: dict = self.config.get("source", {})
        output_cfg: dict = self.config.get("output", {})

        # Overrides (CLI) gelten relativ zum Arbeitsverzeichnis, Config-Pfade relativ zur Config
        self.input_path: Path = (
            Path(input_path).resolve() if input_path
            else self._resolve_path(source_cfg.get("file_path", "data/raw/netflix_titles.csv")))
        self.output_dir: Path = (
            Path(output_dir).resolve() if output_dir
            else self._resolve_path(output_cfg.get("dir", "data/processed")))
        self.validation_reports_dir: Path = self._resolve_path(
            output_cfg.get("validation_reports_dir", "data/validation_reports"))

        kind_labels: dict = source_cfg.get("kind_labels", {})
        self.movie_label: str = kind_labels.get("movie", "Movie")
        self.series_label: str = kind_labels.get("series", "TV Show")

    def _resolve_path(self, path_value: str | Path) -> Path:
        """
        Konvertiert einen Pfadwert in ein absolutes Path-Objekt.
        Relative Pfade werden relativ zum Verzeichnis der Config aufgelöst.

        Raises:
            ValueError: Wenn der path_value weder ein String noch ein Path-Objekt ist.
        """
        if isinstance(path_value, Path):
            path_obj = path_value
        elif isinstance(path_value, str):
            path_obj = Path(path_value)
        else:
            self.logger.error(
                f"Ungültiger Pfadwert in Config: {path_value} (Typ: {type(path_value)})"
            )
            raise ValueError(
                f"Pfadwert muss ein String oder Path-Objekt sein: {path_value}")

        if path_obj.is_absolute():
            return path_obj
        return (self.config_path.parent / path_obj).resolve()

    def _extract(self) -> pd.DataFrame:
        source_cfg = self.config.get("source", {})
        output_cfg = self.config.get("output", {})
        adapter_config = {
            **source_cfg,
            "file_path": self.input_path,
            "save_aux": output_cfg.get("save_aux", True),
            "aux_dir": self._resolve_path(output_cfg.get("aux_dir", "data/intermediate")),
        }
        adapter = NetflixAdapter(adapter_config)
        raw_df = adapter.extract()
        df = adapter.transform(raw_df)
        self.logger.info(f"Loader: {len(df)} eindeutige Titel aus {len(raw_df)} Zeilen.")
        return df

    def _repair_and_validate(self, df: pd.DataFrame) -> pd.DataFrame:
        primary = repair_columns(
            df, movie_label=self.movie_label, series_label=self.series_label)

        ok, errs = validate_dataframe(
            primary,
            df_name="Titles-DF",
            required_cols=PRIMARY_COLUMNS,
            movie_label=self.movie_label,
            series_label=self.series_label,
            error_report_path=str(self.validation_reports_dir / "Titles-DF_report.txt"),
            save_invalid_rows=True,
            invalid_rows_output_path=str(self.validation_reports_dir / "Titles-DF_invalid_rows.csv"),
        )
        if not ok:
            self.logger.warning(f"Validation-Probleme im Titles-DF: {errs}")
        return primary

    def _run_diagnostics(self,
                         primary: pd.DataFrame,
                         relations: dict[str, pd.DataFrame]) -> None:
        """Loggt Zählungen pro Relation und Jahr. Wird nicht gespeichert."""
        processing_cfg = self.config.get("processing", {})
        if not processing_cfg.get("run_diagnostics", True):
            self.logger.info("Diagnose-Zählungen deaktiviert (processing.run_diagnostics=false).")
            return
        top_n = int(processing_cfg.get("diagnostics_top_n", 10))

        for column, rel in relations.items():
            counts = count_by_value(rel, column)
            self.logger.info(f"Top {top_n} '{column}':\n{counts.head(top_n).to_string(index=False)}")

        by_release = counts_by_year_and_kind(primary)
        self.logger.info(f"Titel pro release_year (letzte {top_n}):\n"
                         f"{by_release.tail(top_n).to_string(index=False)}")
        by_added = counts_by_year_added(primary)
        self.logger.info(f"Titel pro Jahr der Aufnahme:\n{by_added.to_string(index=False)}")

    def _export(self,
                primary: pd.DataFrame,
                relations: dict[str, pd.DataFrame]) -> dict[str, Path]:
        targets = output_paths(self.config, self.output_dir)
        tables: dict[str, tuple[pd.DataFrame, list[str]]] = {
            "titles": (primary, PRIMARY_COLUMNS),
            **{col: (rel, ["id", col]) for col, rel in relations.items()},
        }

        saved: dict[str, Path] = {}
        for name, (table, columns) in tables.items():
            path = targets[name]
            try:
                saved[name] = CsvLoader(path).load(table, columns=columns)
            except OSError as e:
                # Einzeldateien sind unabhängig; ein Fehler macht den Lauf ungültig
                self.logger.error(f"Fehler beim Speichern von '{name}' nach {path}: {e}",
                                  exc_info=True)
                raise
        return saved

    def run(self) -> dict[str, Path]:
        """
        Führt die gesamte Pipeline aus.

        Returns:
            Zuordnung Tabellenname → geschriebene CSV-Datei.

        Raises:
            SourceUnavailable: Quelldatei fehlt oder ist nicht lesbar.
            SchemaMismatch: Erwartete Spalten fehlen.
        """
        self.logger.info(f"Starte Katalog-Pipeline für {self.input_path}...")

        df = self._extract()
        relations = split_all(df, MULTIVALUE_COLUMNS)
        primary = self._repair_and_validate(df)
        self._run_diagnostics(primary, relations)
        saved = self._export(primary, relations)

        self.logger.info(
            f"Pipeline abgeschlossen. {len(saved)} Dateien in {self.output_dir} gespeichert.")
        return saved


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Bereinigt einen Streaming-Katalog und exportiert normalisierte Tabellen.")
    parser.add_argument("--config", default=str(DEFAULT_CONFIG_PATH),
                        help="Pfad zur YAML-Konfiguration")
    parser.add_argument("--input", help="Quelldatei (überschreibt source.file_path)")
    parser.add_argument("--output-dir", help="Zielverzeichnis (überschreibt output.dir)")
    parser.add_argument("--log-level", help="z.B. DEBUG, INFO, WARNING")
    args = parser.parse_args(argv)

    try:
        pipeline = CatalogPipeline(
            config_path=args.config,
            input_path=args.input,
            output_dir=args.output_dir,
            log_level=args.log_level,
        )
        pipeline.run()
    except (SourceUnavailable, SchemaMismatch) as e:
        logging.error(f"Pipeline abgebrochen: {e}")
        return 1
    except (FileNotFoundError, yaml.YAMLError) as e:
        logging.error(f"Konfiguration nicht nutzbar: {e}")
        return 1
    except OSError as e:
        logging.error(f"Export fehlgeschlagen, Ausgabedateien sind ungültig: {e}")
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
