"""Gemeinsame Fixtures: kleiner Netflix-Auszug mit allen bekannten Defekten."""

import matplotlib

matplotlib.use("Agg")

import pandas as pd
import pytest
import yaml


NETFLIX_HEADER = (
    "show_id,type,title,director,cast,country,date_added,release_year,"
    "rating,duration,listed_in,description\n"
)

NETFLIX_ROWS = (
    's1,Movie,Dick Johnson Is Dead,Kirsten Johnson,,United States,"September 25, 2021",2020,PG-13,90 min,Documentaries,"As her father nears the end of his life, a filmmaker stages his death."\n'
    's2,TV Show,Blood & Water,,"Ama Qamata, Khosi Ngema, Gail Mabalane",South Africa,"September 24, 2021",2021,TV-MA,2 Seasons,"International TV Shows, TV Dramas, TV Mysteries",After crossing paths at a party.\n'
    's3,TV Show,Kota Factory,,"Mayur More, Jitendra Kumar",India,"September 24, 2021",2021,TV-MA,3 Seasons,"International TV Shows, Romantic TV Shows, TV Comedies",In a city of coaching centers.\n'
    's4,Movie,Louis C.K. 2017,Louis C.K.,Louis C.K.,United States,"April 4, 2017",2017,74 min,,Movies,Louis C.K. muses on religion.\n'
    's5,Movie,Sankofa,"Haile Gerima, Jane Doe, John Roe","Kofi Ghanaba, Oyafunmike Ogunlano","United States, Ghana, Burkina Faso",'
    '" September 24, 2021",1993,TV-MA,125 min,"Dramas, Independent Movies, International Movies",On a photo shoot in Ghana.\n'
    's6,Movie,Country Artifact,,,"India,",,2019,TV-14,84 min,Dramas,Trailing comma in country.\n'
    's7,Movie,NA,,,", France, Algeria",not a date,2018,,Unknown,Dramas,Broken date and duration.\n'
)


@pytest.fixture
def netflix_csv(tmp_path):
    """Quelldatei im Original-Header des Netflix-Exports."""
    path = tmp_path / "raw" / "netflix_titles.csv"
    path.parent.mkdir(parents=True)
    path.write_text(NETFLIX_HEADER + NETFLIX_ROWS, encoding="utf-8")
    return path


@pytest.fixture
def pipeline_config(tmp_path, netflix_csv):
    """Config-Datei, deren relative Pfade alle unter tmp_path landen."""
    cfg = {
        "logging": {"level": "INFO"},
        "source": {
            "file_path": "raw/netflix_titles.csv",
            "column_aliases": {"show_id": "id", "type": "kind", "listed_in": "genre"},
            "kind_labels": {"movie": "Movie", "series": "TV Show"},
        },
        "output": {
            "dir": "processed",
            "save_aux": True,
            "aux_dir": "intermediate",
            "validation_reports_dir": "validation_reports",
        },
        "processing": {"run_diagnostics": True, "diagnostics_top_n": 5},
        "analysis": {"output_dir": "analysis", "top_n": 5},
    }
    path = tmp_path / "config.yaml"
    path.write_text(yaml.safe_dump(cfg), encoding="utf-8")
    return path


def make_catalog(rows):
    """Baut eine Katalogtabelle mit kanonischen Spalten; fehlende Felder → NA."""
    columns = [
        "id", "kind", "title", "director", "cast", "country", "date_added",
        "release_year", "rating", "duration", "genre", "description",
    ]
    return pd.DataFrame([{c: row.get(c, pd.NA) for c in columns} for row in rows], columns=columns)
