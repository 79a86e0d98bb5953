"""État de l'application GUI."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from fuzzyrename.config import Settings
from fuzzyrename.io_fs import OpOutcome, OpStatus
from fuzzyrename.matching.index import MatchIndex
from fuzzyrename.matching.schema import FileEntry
from fuzzyrename.matching.scorers import SearchAlgorithm
from fuzzyrename.plan import PlanItem, build_plan
from fuzzyrename.rename import Side

SETTINGS_FILE = Path.home() / ".fuzzyrename.json"


@dataclass
class AppState:
    """État central : paramètres persistés et index de matching."""

    settings: Settings = field(default_factory=Settings)
    index: MatchIndex = field(default_factory=MatchIndex)

    @classmethod
    def from_settings(cls, settings: Settings) -> AppState:
        index = MatchIndex(
            SearchAlgorithm.from_name(settings.algorithm),
            top_k=settings.top_k,
            normalize=settings.normalize,
        )
        return cls(settings=settings, index=index)

    @property
    def side(self) -> Side:
        return Side.from_name(self.settings.side)

    def set_algorithm(self, algorithm: SearchAlgorithm) -> None:
        self.settings.algorithm = algorithm.value
        self.index.set_algorithm(algorithm)

    def plan(self, *, include_unmatched: bool | None = None) -> list[PlanItem]:
        """Plan courant ; include_unmatched par défaut selon les paramètres."""
        if include_unmatched is None:
            include_unmatched = self.settings.include_unmatched
        return build_plan(
            self.index,
            self.settings.threshold,
            include_unmatched,
            self.side,
            self.settings.keep_extension,
        )

    def apply_renames(self, outcomes: list[OpOutcome]) -> int:
        """
        Reporte dans l'index les renommages effectués (CREATED / OVERWRITTEN).

        Returns:
            Nombre de sources mises à jour.
        """
        updated = 0
        for outcome in outcomes:
            if outcome.status not in (OpStatus.CREATED, OpStatus.OVERWRITTEN):
                continue
            dst = outcome.destination
            self.index.replace_source(outcome.item.source_index, FileEntry(dst.name, dst))
            updated += 1
        return updated
