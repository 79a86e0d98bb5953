"""Interface graphique fuzzyrename (PySide6)."""
