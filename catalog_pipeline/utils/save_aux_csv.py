from pathlib import Path
import pandas as pd
import yaml

# Pfad zur zentralen Pipeline-Config ermitteln (eine Ebene über utils)
CONFIG_PATH = Path(__file__).resolve().parent.parent / "config.yaml"

try:
    _cfg = yaml.safe_load(CONFIG_PATH.read_text(encoding="utf-8")) or {}
except FileNotFoundError:
    _cfg = {}

# Basisverzeichnis aus Config oder Fallback
_AUX_BASE_DIR = _cfg.get("output", {}).get("aux_dir", "data/intermediate")


def _get_target_dir(kind: str, base_dir: str | Path | None = None) -> Path:
    """Liefert das Zielverzeichnis für eine CSV-Art (invalid/duplicates)."""
    base = Path(base_dir) if base_dir is not None else CONFIG_PATH.parent / _AUX_BASE_DIR
    return base / kind


def save_aux_csv(
    kind: str,
    adapter_name: str,
    df: pd.DataFrame,
    base_dir: str | Path | None = None,
) -> Path:
    """Speichert DataFrame unter <base_dir>/<kind>/<adapter_name>_<kind>.csv."""
    target_dir = _get_target_dir(kind, base_dir)
    target_dir.mkdir(parents=True, exist_ok=True)
    out_path = target_dir / f"{adapter_name}_{kind}.csv"
    df.to_csv(out_path, index=False, lineterminator="\n")
    return out_path
