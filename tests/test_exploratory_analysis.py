"""Tests für die explorative Analyse über die exportierten Dateien."""

import pandas as pd

from catalog_pipeline.main_pipeline import CatalogPipeline
from catalog_pipeline.run_exploratory_analysis import CatalogAnalyzer, main


def test_analysis_writes_counts_and_plots(pipeline_config, tmp_path):
    CatalogPipeline(config_path=pipeline_config).run()

    written = CatalogAnalyzer(config_path=pipeline_config).run_analyses()

    analysis_dir = tmp_path.resolve() / "analysis"
    for name in ("counts_director", "counts_cast", "counts_country", "counts_genre",
                 "counts_by_release_year", "counts_by_year_added"):
        assert written[name] == analysis_dir / f"{name}.csv"
        assert written[name].exists()
    assert (analysis_dir / "top_genre.png").exists()
    assert (analysis_dir / "counts_by_release_year.png").exists()

    countries = pd.read_csv(written["counts_country"])
    assert countries.iloc[0].to_dict()["country"] == "United States"
    assert countries.iloc[0]["count"] == 3

    by_year = pd.read_csv(written["counts_by_release_year"])
    assert list(by_year.columns) == ["release_year", "Movie", "TV Show"]
    assert by_year.loc[by_year["release_year"] == 2021, "TV Show"].item() == 2


def test_analysis_without_exported_files_returns_nothing(pipeline_config):
    assert CatalogAnalyzer(config_path=pipeline_config).run_analyses() == {}


def test_main_exit_codes(pipeline_config):
    assert main(["--config", str(pipeline_config)]) == 1

    CatalogPipeline(config_path=pipeline_config).run()
    assert main(["--config", str(pipeline_config)]) == 0
