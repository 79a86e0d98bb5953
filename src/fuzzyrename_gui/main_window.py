"""Fenêtre principale : menus, table des correspondances et opérations."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from PySide6.QtCore import Qt
from PySide6.QtGui import QAction, QActionGroup, QCloseEvent
from PySide6.QtWidgets import (
    QAbstractItemView,
    QFileDialog,
    QHeaderView,
    QInputDialog,
    QMainWindow,
    QMenu,
    QMessageBox,
    QTableView,
)

from fuzzyrename.config import ConfigError, ConfigFileError, FuzzyRenameError, Settings
from fuzzyrename.io_fs import ScanResult, copy_plan, count_outcomes, entries_from_paths, list_folder, rename_plan
from fuzzyrename.matching.scorers import SearchAlgorithm
from fuzzyrename.normalize import strip_extension
from fuzzyrename.rename import Side
from fuzzyrename_gui.models import MatchesModel
from fuzzyrename_gui.state import SETTINGS_FILE, AppState
from fuzzyrename_gui.theme import THEME_DARK, THEME_LIGHT, apply_theme

logger = logging.getLogger(__name__)


def _load_settings() -> Settings:
    if not SETTINGS_FILE.exists():
        return Settings()
    try:
        return Settings.load(SETTINGS_FILE)
    except (ConfigError, ConfigFileError) as e:
        logger.warning("Paramètres ignorés (%s): %s", SETTINGS_FILE, e)
        return Settings()


class MainWindow(QMainWindow):
    """Fenêtre principale : une table, quatre menus."""

    def __init__(self) -> None:
        super().__init__()
        self._state = AppState.from_settings(_load_settings())
        self._model = MatchesModel(self._state, self)
        self._setup_ui()
        self._setup_menus()
        apply_theme(self._state.settings.theme)

    def _setup_ui(self) -> None:
        self.setWindowTitle("fuzzyrename")
        self.setMinimumSize(800, 500)
        self.resize(1100, 700)

        self._table = QTableView()
        self._table.setModel(self._model)
        self._table.setSelectionBehavior(QAbstractItemView.SelectionBehavior.SelectRows)
        self._table.setEditTriggers(QAbstractItemView.EditTrigger.NoEditTriggers)
        self._table.horizontalHeader().setSectionResizeMode(QHeaderView.ResizeMode.Stretch)
        self._table.horizontalHeader().setSectionResizeMode(1, QHeaderView.ResizeMode.ResizeToContents)
        self._table.setContextMenuPolicy(Qt.ContextMenuPolicy.CustomContextMenu)
        self._table.customContextMenuRequested.connect(self._on_context_menu)
        self.setCentralWidget(self._table)

    def _setup_menus(self) -> None:
        bar = self.menuBar()
        settings = self._state.settings

        # Sources
        m_src = bar.addMenu("Sources")
        m_src.addAction("Importer un dossier...", lambda: self._import_folder(is_source=True))
        m_src.addAction("Importer des fichiers...", lambda: self._import_files(is_source=True))
        m_src.addSeparator()
        m_src.addAction("Trier par nom", self._sort_sources)
        m_src.addAction("Vider les sources...", self._clear_sources)

        # Choix
        m_ch = bar.addMenu("Choix")
        m_ch.addAction("Importer un dossier...", lambda: self._import_folder(is_source=False))
        m_ch.addAction("Importer des fichiers...", lambda: self._import_files(is_source=False))
        m_ch.addSeparator()
        m_ch.addAction("Vider les choix...", self._clear_choices)

        # Sortie
        m_out = bar.addMenu("Sortie")
        act_keep = m_out.addAction("Garder les extensions")
        act_keep.setCheckable(True)
        act_keep.setChecked(settings.keep_extension)
        act_keep.toggled.connect(self._on_keep_extension)

        side_group = QActionGroup(self)
        for side, label in ((Side.SOURCES, "Renommer les sources"), (Side.CHOICES, "Renommer les choix")):
            act = QAction(label, side_group, checkable=True)
            act.setChecked(settings.side == side.value)
            act.triggered.connect(lambda _=False, s=side: self._on_side(s))
            m_out.addAction(act)

        m_out.addSeparator()
        m_out.addAction("Copier les résultats vers un dossier...", self._copy_results)
        self._act_unmatched = m_out.addAction("Inclure les sources sans correspondance")
        self._act_unmatched.setCheckable(True)
        self._act_unmatched.setChecked(settings.include_unmatched)
        self._act_unmatched.toggled.connect(self._on_include_unmatched)
        self._act_rename = m_out.addAction("Renommer directement les fichiers...", self._rename_in_place)
        self._update_side_actions()

        # Options
        m_opt = bar.addMenu("Options")
        m_opt.addAction("Seuil de similarité...", self._edit_threshold)
        m_opt.addSeparator()
        algo_group = QActionGroup(self)
        for algorithm in SearchAlgorithm:
            act = QAction(algorithm.label, algo_group, checkable=True)
            act.setChecked(settings.algorithm == algorithm.value)
            act.triggered.connect(lambda _=False, a=algorithm: self._on_algorithm(a))
            m_opt.addAction(act)
        m_opt.addSeparator()
        theme_group = QActionGroup(self)
        for mode, label in ((THEME_LIGHT, "Thème clair"), (THEME_DARK, "Thème sombre")):
            act = QAction(label, theme_group, checkable=True)
            act.setChecked(settings.theme == mode)
            act.triggered.connect(lambda _=False, m=mode: self._on_theme(m))
            m_opt.addAction(act)

    # Import

    def _report_skipped(self, result: ScanResult) -> None:
        if result.skipped:
            self.statusBar().showMessage(f"{len(result.skipped)} entrée(s) ignorée(s) (nom illisible)", 5000)

    def _add_entries(self, result: ScanResult, *, is_source: bool) -> None:
        if is_source:
            self._state.index.add_sources(result.entries)
        else:
            self._state.index.add_choices(result.entries)
        self._report_skipped(result)
        self._model.refresh()

    def _import_folder(self, *, is_source: bool) -> None:
        settings = self._state.settings
        start = settings.sources_path if is_source else settings.choices_path
        title = "Dossier des fichiers sources" if is_source else "Dossier des fichiers de référence"
        folder = QFileDialog.getExistingDirectory(self, title, start)
        if not folder:
            return
        if is_source:
            settings.sources_path = folder
        else:
            settings.choices_path = folder
        try:
            result = list_folder(folder)
        except FuzzyRenameError as e:
            QMessageBox.critical(self, "Erreur", str(e))
            return
        self._add_entries(result, is_source=is_source)

    def _import_files(self, *, is_source: bool) -> None:
        settings = self._state.settings
        start = settings.sources_path if is_source else settings.choices_path
        title = "Fichiers sources" if is_source else "Fichiers de référence"
        paths, _ = QFileDialog.getOpenFileNames(self, title, start)
        if not paths:
            return
        parent = str(Path(paths[0]).parent)
        if is_source:
            settings.sources_path = parent
        else:
            settings.choices_path = parent
        self._add_entries(entries_from_paths(paths), is_source=is_source)

    def _confirm(self, question: str) -> bool:
        answer = QMessageBox.question(self, "Confirmation", question)
        return answer == QMessageBox.StandardButton.Yes

    def _sort_sources(self) -> None:
        self._state.index.sort_sources()
        self._model.refresh()

    def _clear_sources(self) -> None:
        if self._confirm("Vider toutes les sources ?"):
            self._state.index.clear_sources()
            self._model.refresh()

    def _clear_choices(self) -> None:
        if self._confirm("Vider tous les choix ?"):
            self._state.index.clear_choices()
            self._model.refresh()

    # Options

    def _on_keep_extension(self, checked: bool) -> None:
        self._state.settings.keep_extension = checked
        self._model.refresh()

    def _on_side(self, side: Side) -> None:
        self._state.settings.side = side.value
        self._update_side_actions()
        self._model.refresh()

    def _update_side_actions(self) -> None:
        sources = self._state.side == Side.SOURCES
        self._act_unmatched.setEnabled(sources)
        self._act_rename.setEnabled(sources)

    def _on_include_unmatched(self, checked: bool) -> None:
        self._state.settings.include_unmatched = checked

    def _edit_threshold(self) -> None:
        value, ok = QInputDialog.getDouble(
            self, "Seuil", "Similarité minimum (0-1):", self._state.settings.threshold, 0.0, 1.0, 2
        )
        if ok:
            self._state.settings.threshold = value
            self._model.refresh()

    def _on_algorithm(self, algorithm: SearchAlgorithm) -> None:
        self._state.set_algorithm(algorithm)
        self._model.refresh()

    def _on_theme(self, mode: str) -> None:
        self._state.settings.theme = mode
        apply_theme(mode)

    # Choix manuels

    def _on_context_menu(self, pos: Any) -> None:
        row = self._table.indexAt(pos).row()
        record = self._model.record_at(row)
        if record is None:
            return
        index = self._state.index
        menu = QMenu(self)
        if record.override.is_set:
            menu.addAction("Restaurer le choix automatique", lambda: self._reset_override(row))
        menu.addAction("Retirer la source", lambda: self._remove_source(row))
        menu.addSeparator()
        for c in record.candidates:
            choice = index.choice_at(c.choice_index)
            if choice is None:
                continue
            label = f"[{100 * c.score:2.2f}%] {strip_extension(choice.name)}"
            menu.addAction(label, lambda ci=c.choice_index: self._set_override(row, ci))
        menu.addAction("[Pas de correspondance]", lambda: self._set_override(row, None))
        menu.exec(self._table.viewport().mapToGlobal(pos))

    def _set_override(self, row: int, choice_index: int | None) -> None:
        self._state.index.set_override(row, choice_index)
        self._model.refresh()

    def _reset_override(self, row: int) -> None:
        self._state.index.reset_override(row)
        self._model.refresh()

    def _remove_source(self, row: int) -> None:
        self._state.index.remove_source(row)
        self._model.refresh()

    # Opérations

    def _show_outcomes(self, outcomes: list) -> None:
        counts = count_outcomes(outcomes)
        msg = (
            f"Créés: {counts['created']}, écrasés: {counts['overwritten']}, "
            f"inchangés: {counts['unchanged']}, échecs: {counts['failed']}"
        )
        failures = [o for o in outcomes if o.error]
        if failures:
            details = "\n".join(f"{o.item.origin.name} -> {o.destination.name}: {o.error}" for o in failures[:10])
            QMessageBox.warning(self, "Opération terminée avec erreurs", f"{msg}\n\n{details}")
        else:
            self.statusBar().showMessage(msg, 8000)

    def _copy_results(self) -> None:
        settings = self._state.settings
        folder = QFileDialog.getExistingDirectory(self, "Dossier de copie des fichiers renommés", settings.renames_path)
        if not folder:
            return
        settings.renames_path = folder
        try:
            outcomes = copy_plan(self._state.plan(), folder)
        except FuzzyRenameError as e:
            QMessageBox.critical(self, "Erreur", str(e))
            return
        self._show_outcomes(outcomes)

    def _rename_in_place(self) -> None:
        if self._state.side != Side.SOURCES:
            return
        if not self._confirm("Renommer directement les fichiers sources ?"):
            return
        outcomes = rename_plan(self._state.plan(include_unmatched=False))
        self._state.apply_renames(outcomes)
        self._model.refresh()
        self._show_outcomes(outcomes)

    def closeEvent(self, event: QCloseEvent) -> None:
        try:
            self._state.settings.save(SETTINGS_FILE)
        except ConfigFileError as e:
            logger.warning("%s", e)
        super().closeEvent(event)
