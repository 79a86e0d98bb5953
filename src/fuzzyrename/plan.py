"""Construction du plan de copie/renommage à partir de l'index de matching."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from fuzzyrename.matching.index import MatchIndex
from fuzzyrename.matching.schema import SourceRecord
from fuzzyrename.rename import Side, resolve_name


@dataclass(frozen=True)
class PlanItem:
    """Une opération du plan : fichier d'origine et nom de destination."""

    origin: Path
    destination_name: str
    source_index: int
    matched: bool
    score: float | None = None  # None = choix manuel

    def __repr__(self) -> str:
        return f"PlanItem({self.origin.name} -> {self.destination_name})"


def is_accepted(index: MatchIndex, record: SourceRecord, threshold: float) -> bool:
    """Vrai si la source a un choix courant valide et, hors choix manuel, un score >= threshold."""
    if index.choice_at(record.current_choice()) is None:
        return False
    score = record.current_score()
    return score is None or score >= threshold


def build_plan(
    index: MatchIndex,
    threshold: float,
    include_unmatched: bool,
    side: Side,
    keep_extension: bool = False,
) -> list[PlanItem]:
    """
    Parcourt les sources dans l'ordre et produit le plan.

    Une source est retenue si elle a un choix courant et que son score
    automatique atteint le seuil ; un choix manuel est toujours retenu.
    Un index de choix périmé compte comme une absence de correspondance.

    Args:
        index: Index de matching.
        threshold: Score minimum (0-1) d'un choix automatique.
        include_unmatched: Inclure les sources sans correspondance, sous leur
            propre nom (uniquement quand side == SOURCES).
        side: Côté dont les fichiers sont copiés/renommés.
        keep_extension: Voir resolve_name.

    Returns:
        Liste de PlanItem. Les noms de destination en double ne sont pas dédupliqués.
    """
    plan: list[PlanItem] = []
    for i, record in enumerate(index.sources):
        score = record.current_score()
        if is_accepted(index, record, threshold):
            choice = index.choice_at(record.current_choice())
            origin = choice.path if side == Side.CHOICES else record.file.path
            name = resolve_name(record.file.name, choice.name, keep_extension, side)
            plan.append(PlanItem(origin, name, i, matched=True, score=score))
        elif include_unmatched and side == Side.SOURCES:
            plan.append(PlanItem(record.file.path, record.file.name, i, matched=False, score=score))
    return plan
