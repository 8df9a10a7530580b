import argparse
import logging
import sys
from pathlib import Path
import pandas as pd
import seaborn as sns
import matplotlib.pyplot as plt

from catalog_pipeline.main_pipeline import DEFAULT_CONFIG_PATH, load_config, output_paths
from catalog_pipeline.transform.aggregate import (
    count_by_value,
    counts_by_year_added,
    counts_by_year_and_kind,
)

# --- Globale Stil-Einstellung für Plots ---
plt.style.use('seaborn-v0_8-whitegrid')


def run_top_values_plot(counts: pd.DataFrame, column: str, output_dir: Path, top_n: int = 15) -> Path | None:
    output_dir.mkdir(parents=True, exist_ok=True)
    if counts.empty:
        logging.info(f"Keine Werte für '{column}' – überspringe Plot.")
        return None

    top = counts.head(top_n)
    fig, ax = plt.subplots(figsize=(9, max(4, 0.4 * len(top))))
    sns.barplot(data=top, x="count", y=column, ax=ax, color="#b20710")
    ax.set_title(f"Top {len(top)} – {column}")
    ax.set_xlabel("Anzahl Titel")
    ax.set_ylabel("")
    plt.tight_layout()
    file_path = output_dir / f"top_{column}.png"
    plt.savefig(file_path)
    plt.close(fig)
    logging.info(f"Plot 'top_{column}.png' gespeichert in '{file_path}'.")
    return file_path


def run_year_plot(table: pd.DataFrame, year_col: str, output_dir: Path, filename: str, title: str) -> Path | None:
    output_dir.mkdir(parents=True, exist_ok=True)
    kind_cols = [c for c in table.columns if c != year_col]
    if table.empty or not kind_cols:
        logging.info(f"Keine Daten für '{filename}' – überspringe Plot.")
        return None

    long_df = table.melt(id_vars=year_col, value_vars=kind_cols, var_name="kind", value_name="count")
    long_df[year_col] = long_df[year_col].astype(int)
    fig, ax = plt.subplots(figsize=(11, 5))
    sns.lineplot(data=long_df, x=year_col, y="count", hue="kind", marker="o", ax=ax)
    ax.set_title(title)
    ax.set_xlabel("Jahr")
    ax.set_ylabel("Anzahl Titel")
    plt.tight_layout()
    file_path = output_dir / filename
    plt.savefig(file_path)
    plt.close(fig)
    logging.info(f"Plot '{filename}' gespeichert in '{file_path}'.")
    return file_path


class CatalogAnalyzer:
    """Liest die exportierten Tabellen und erzeugt Zählungen + Plots zur Sichtprüfung."""

    def __init__(self, config_path: str | Path = DEFAULT_CONFIG_PATH):
        self.config_path = Path(config_path).resolve()
        self.cfg = load_config(self.config_path)

        log_level_str = self.cfg.get('logging', {}).get('level', 'INFO').upper()
        logging.basicConfig(level=getattr(logging, log_level_str, logging.INFO),
                            format='%(asctime)s - %(levelname)s - %(message)s')

        self.analysis_cfg = self.cfg.get('analysis', {})
        output_dir = self._resolve_path(self.cfg.get('output', {}).get('dir', 'data/processed'))
        self.input_paths = output_paths(self.cfg, output_dir)
        self.output_dir = self._resolve_path(self.analysis_cfg.get('output_dir', 'data/analysis'))

    def _resolve_path(self, path_str: str | Path) -> Path:
        """ Löst einen Pfad relativ zum Konfigurationsdatei-Verzeichnis auf, wenn er relativ ist. """
        path_obj = Path(path_str)
        if path_obj.is_absolute():
            return path_obj
        return (self.config_path.parent / path_obj).resolve()

    def load_data(self) -> dict[str, pd.DataFrame]:
        tables: dict[str, pd.DataFrame] = {}
        for name, path in self.input_paths.items():
            try:
                tables[name] = pd.read_csv(path, dtype=str, keep_default_na=False, na_values=[""])
                logging.info(f"'{name}' geladen von: {path} ({len(tables[name])} Zeilen)")
            except FileNotFoundError:
                logging.warning(f"'{name}' NICHT gefunden: {path}")
        return tables

    def run_analyses(self) -> dict[str, Path]:
        logging.info("Starte explorative Katalog-Analyse...")
        tables = self.load_data()
        if "titles" not in tables:
            logging.critical("Kritisch: Titel-Tabelle fehlt. Wurde die Pipeline ausgeführt?")
            return {}

        self.output_dir.mkdir(parents=True, exist_ok=True)
        top_n = int(self.analysis_cfg.get("top_n", 15))
        written: dict[str, Path] = {}

        # --- 1. Zählungen je Relation ---
        for column in ("director", "cast", "country", "genre"):
            rel = tables.get(column)
            if rel is None:
                continue
            counts = count_by_value(rel, column)
            stats_path = self.output_dir / f"counts_{column}.csv"
            counts.to_csv(stats_path, index=False, lineterminator="\n")
            written[f"counts_{column}"] = stats_path
            logging.info(f"Top {top_n} '{column}':\n{counts.head(top_n).to_string(index=False)}")
            plot_path = run_top_values_plot(counts, column, self.output_dir, top_n)
            if plot_path:
                written[f"plot_{column}"] = plot_path

        # --- 2. Zählungen je Jahr und kind ---
        titles = tables["titles"]
        yearly = {
            "release_year": (counts_by_year_and_kind(titles), "release_year",
                             "Titel nach Erscheinungsjahr"),
            "year_added": (counts_by_year_added(titles), "year_added",
                           "Titel nach Jahr der Aufnahme in den Katalog"),
        }
        for name, (table, year_col, title) in yearly.items():
            stats_path = self.output_dir / f"counts_by_{name}.csv"
            table.to_csv(stats_path, index=False, lineterminator="\n")
            written[f"counts_by_{name}"] = stats_path
            plot_path = run_year_plot(table, year_col, self.output_dir, f"counts_by_{name}.png", title)
            if plot_path:
                written[f"plot_by_{name}"] = plot_path

        logging.info(f"Explorative Analyse abgeschlossen. Ergebnisse in '{self.output_dir}'.")
        return written


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Zählungen und Plots über die exportierten Katalog-Tabellen.")
    parser.add_argument("--config", default=str(DEFAULT_CONFIG_PATH), help="Pfad zur YAML-Konfiguration")
    args = parser.parse_args(argv)

    try:
        analyzer = CatalogAnalyzer(config_path=args.config)
    except FileNotFoundError as e:
        logging.error(str(e))
        return 1
    return 0 if analyzer.run_analyses() else 1


if __name__ == '__main__':
    sys.exit(main())
