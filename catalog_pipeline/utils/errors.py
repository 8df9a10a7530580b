class SourceUnavailable(FileNotFoundError):
    """Quelldatei fehlt oder ist nicht lesbar – Pipeline bricht vor jeder Verarbeitung ab."""


class SchemaMismatch(ValueError):
    """Erwartete Spalten fehlen im Header der Quelldatei."""

    def __init__(self, missing: list[str], source: str | None = None):
        self.missing = list(missing)
        self.source = source
        where = f" in {source}" if source else ""
        super().__init__(f"Fehlende Spalten{where}: {', '.join(self.missing)}")
