"""Modèle pour la table source / similarité / meilleur choix / nom de sortie."""

from __future__ import annotations

from PySide6.QtCore import QAbstractTableModel, QModelIndex, Qt
from PySide6.QtGui import QColor

from fuzzyrename.matching.schema import SourceRecord
from fuzzyrename.rename import resolve_name
from fuzzyrename_gui.state import AppState

COL_SCORE = 1
NB_COLUMNS = 4


class MatchesModel(QAbstractTableModel):
    """Une ligne par source de l'index."""

    def __init__(self, state: AppState, parent: QAbstractTableModel | None = None) -> None:
        super().__init__(parent)
        self._state = state

    def refresh(self) -> None:
        """À appeler après toute modification de l'index ou des paramètres."""
        self.beginResetModel()
        self.endResetModel()

    def record_at(self, row: int) -> SourceRecord | None:
        sources = self._state.index.sources
        if 0 <= row < len(sources):
            return sources[row]
        return None

    def _below_threshold(self, record: SourceRecord) -> bool:
        score = record.current_score()
        return score is not None and score < self._state.settings.threshold

    def _row_values(self, record: SourceRecord) -> tuple[str, str, str, str]:
        score = record.current_score()
        sim = "N/A" if score is None else f"{100 * score:2.0f}%"
        choice = self._state.index.choice_at(record.current_choice())
        if choice is None or self._below_threshold(record):
            return record.file.name, sim, "", ""
        settings = self._state.settings
        renamed = resolve_name(record.file.name, choice.name, settings.keep_extension, self._state.side)
        return record.file.name, sim, choice.name, renamed

    def rowCount(self, parent: QModelIndex = QModelIndex()) -> int:
        if parent.isValid():
            return 0
        return len(self._state.index.sources)

    def columnCount(self, parent: QModelIndex = QModelIndex()) -> int:
        if parent.isValid():
            return 0
        return NB_COLUMNS

    def data(self, index: QModelIndex, role: int = Qt.ItemDataRole.DisplayRole) -> str | QColor | None:
        if not index.isValid():
            return None
        record = self.record_at(index.row())
        if record is None or not 0 <= index.column() < NB_COLUMNS:
            return None

        if role == Qt.ItemDataRole.ForegroundRole and index.column() == COL_SCORE:
            if self._below_threshold(record):
                return QColor(200, 60, 60)
            return None
        if role == Qt.ItemDataRole.ToolTipRole and index.column() == COL_SCORE:
            if record.override.is_set:
                return "Choix manuel"
            return None
        if role != Qt.ItemDataRole.DisplayRole:
            return None
        return self._row_values(record)[index.column()]

    def headerData(
        self, section: int, orientation: Qt.Orientation, role: int = Qt.ItemDataRole.DisplayRole
    ) -> str | None:
        if role != Qt.ItemDataRole.DisplayRole:
            return None
        if orientation == Qt.Orientation.Horizontal:
            headers = [
                "Source",
                "Similarité",
                "Meilleur choix",
                f"Fichier renommé ({'Sources' if self._state.settings.side == 'sources' else 'Choix'})",
            ]
            if section < len(headers):
                return headers[section]
            return None
        return str(section + 1)
