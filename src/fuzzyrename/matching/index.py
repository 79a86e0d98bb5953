"""Index de matching : sources, choix et top-k des meilleurs candidats."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Sequence

from fuzzyrename.config import DEFAULT_TOP_K, FuzzyRenameError
from fuzzyrename.matching.schema import Candidate, FileEntry, SourceRecord
from fuzzyrename.matching.scorers import SearchAlgorithm, base_name, compare

logger = logging.getLogger(__name__)

_SENTINEL = -1.0


class MatchIndexError(FuzzyRenameError, IndexError):
    """Index de source hors limites."""


def select_top_k(
    name: str,
    choice_names: Sequence[str],
    score_fn: Callable[[str, str], float],
    k: int = DEFAULT_TOP_K,
) -> list[Candidate]:
    """
    Sélectionne les k choix les plus proches de name.

    Tampon fixe de k emplacements, balayé pour chaque choix (O(N·k)) :
    le nouveau score remplace le plus petit score strictement inférieur.
    À score égal, le choix inséré en premier est conservé ; parmi plusieurs
    minima, c'est le choix le plus récent qui est évincé.

    Args:
        name: Nom de base de la source.
        choice_names: Noms de base des choix, dans l'ordre de la collection.
        score_fn: Fonction de similarité (0-1).
        k: Taille du tampon.

    Returns:
        Candidats triés par score décroissant, puis par index de choix.
    """
    slots: list[tuple[int, float]] = [(-1, _SENTINEL)] * k

    for index, choice_name in enumerate(choice_names):
        score = score_fn(name, choice_name)
        replace: int | None = None
        for i, (slot_index, slot_score) in enumerate(slots):
            if slot_score >= score:
                continue
            if replace is None:
                replace = i
                continue
            lowest_index, lowest = slots[replace]
            if slot_score < lowest or (slot_score == lowest and slot_index > lowest_index):
                replace = i
        if replace is not None:
            slots[replace] = (index, score)

    kept = [(i, s) for i, s in slots if s != _SENTINEL]
    kept.sort(key=lambda slot: (-slot[1], slot[0]))
    return [Candidate(choice_index=i, score=s) for i, s in kept]


class MatchIndex:
    """
    Moteur de matching entre sources et choix.

    Chaque source garde ses top_k candidats parmi les choix. Les candidats
    de toutes les sources sont recalculés dès que la collection de choix ou
    l'algorithme change ; ajouter une source ne calcule que celle-ci.
    """

    def __init__(
        self,
        algorithm: SearchAlgorithm = SearchAlgorithm.JARO,
        *,
        top_k: int = DEFAULT_TOP_K,
        normalize: bool = False,
    ) -> None:
        if top_k < 1:
            raise ValueError(f"top_k doit être >= 1 (got {top_k})")
        self._algorithm = algorithm
        self.top_k = top_k
        self.normalize = normalize
        self._sources: list[SourceRecord] = []
        self._choices: list[FileEntry] = []

    @property
    def algorithm(self) -> SearchAlgorithm:
        return self._algorithm

    @property
    def sources(self) -> list[SourceRecord]:
        return self._sources

    @property
    def choices(self) -> list[FileEntry]:
        return self._choices

    def __len__(self) -> int:
        return len(self._sources)

    def choice_at(self, index: int | None) -> FileEntry | None:
        """Choix à l'index donné, ou None si l'index est absent ou périmé."""
        if index is None or not 0 <= index < len(self._choices):
            return None
        return self._choices[index]

    def _score_fn(self) -> Callable[[str, str], float]:
        algorithm = self._algorithm

        def score(a: str, b: str) -> float:
            return compare(algorithm, a, b)

        return score

    def _choice_names(self) -> list[str]:
        return [base_name(c.name, normalize=self.normalize) for c in self._choices]

    def _update_record(
        self,
        record: SourceRecord,
        choice_names: Sequence[str],
        score_fn: Callable[[str, str], float],
    ) -> None:
        name = base_name(record.file.name, normalize=self.normalize)
        record.candidates = select_top_k(name, choice_names, score_fn, self.top_k)

    def update_all(self) -> None:
        """Recalcule les candidats de toutes les sources sur un même état des choix."""
        choice_names = self._choice_names()
        score_fn = self._score_fn()
        for record in self._sources:
            self._update_record(record, choice_names, score_fn)
        logger.debug(
            "Recalcul: %d sources x %d choix (%s)",
            len(self._sources),
            len(self._choices),
            self._algorithm.value,
        )

    # Sources

    def add_source(self, entry: FileEntry | None) -> bool:
        """
        Ajoute une source et calcule ses candidats.

        Returns:
            False si l'entrée est inexploitable (pas de nom) et n'a pas été ajoutée.
        """
        if entry is None or not entry.name:
            logger.warning("Source ignorée (nom illisible): %r", entry)
            return False
        record = SourceRecord(file=entry)
        self._update_record(record, self._choice_names(), self._score_fn())
        self._sources.append(record)
        return True

    def add_sources(self, entries: Iterable[FileEntry | None]) -> int:
        """Ajoute plusieurs sources. Retourne le nombre effectivement ajouté."""
        choice_names = self._choice_names()
        score_fn = self._score_fn()
        added = 0
        for entry in entries:
            if entry is None or not entry.name:
                logger.warning("Source ignorée (nom illisible): %r", entry)
                continue
            record = SourceRecord(file=entry)
            self._update_record(record, choice_names, score_fn)
            self._sources.append(record)
            added += 1
        return added

    def remove_source(self, index: int) -> SourceRecord:
        """Retire une source ; les autres sources ne sont pas recalculées."""
        self._check_source_index(index)
        return self._sources.pop(index)

    def replace_source(self, index: int, entry: FileEntry) -> None:
        """
        Remplace le fichier d'une source (après renommage) et recalcule ses candidats.

        Le choix manuel éventuel est conservé.
        """
        self._check_source_index(index)
        record = self._sources[index]
        record.file = entry
        self._update_record(record, self._choice_names(), self._score_fn())

    def clear_sources(self) -> None:
        self._sources.clear()

    def sort_sources(self) -> None:
        """Trie les sources par nom (les candidats et choix manuels suivent leur source)."""
        self._sources.sort(key=lambda r: r.file.name)

    # Choix

    def add_choice(self, entry: FileEntry | None) -> bool:
        """Ajoute un choix puis recalcule toutes les sources."""
        return self.add_choices([entry]) == 1

    def add_choices(self, entries: Iterable[FileEntry | None]) -> int:
        """
        Ajoute plusieurs choix avec un seul recalcul final.

        Returns:
            Nombre de choix ajoutés (les entrées sans nom sont ignorées).
        """
        added = 0
        for entry in entries:
            if entry is None or not entry.name:
                logger.warning("Choix ignoré (nom illisible): %r", entry)
                continue
            self._choices.append(entry)
            added += 1
        if added:
            self.update_all()
        return added

    def clear_choices(self) -> None:
        """Vide les choix ; les candidats de toutes les sources deviennent vides."""
        self._choices.clear()
        self.update_all()

    # Algorithme et choix manuels

    def set_algorithm(self, algorithm: SearchAlgorithm) -> None:
        """Change la métrique et recalcule toutes les sources."""
        self._algorithm = algorithm
        self.update_all()

    def set_override(self, source_index: int, choice_index: int | None) -> None:
        """Impose le choix choice_index (ou aucune correspondance si None) pour une source."""
        self._check_source_index(source_index)
        self._sources[source_index].set_choice(choice_index)

    def reset_override(self, source_index: int) -> None:
        """Revient au choix automatique pour une source."""
        self._check_source_index(source_index)
        self._sources[source_index].reset_choice()

    def _check_source_index(self, index: int) -> None:
        if not 0 <= index < len(self._sources):
            raise MatchIndexError(f"Index de source hors limites: {index} (sources: {len(self._sources)})")
