"""Schémas et types pour le matching."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path


@dataclass(frozen=True)
class FileEntry:
    """Un fichier source ou choix : nom affiché et chemin."""

    name: str
    path: Path

    @classmethod
    def from_path(cls, path: str | Path) -> FileEntry | None:
        """
        Construit une entrée depuis un chemin.

        Returns:
            None si aucun nom exploitable (chemin racine, nom non UTF-8).
        """
        path = Path(path)
        name = path.name
        if not name:
            return None
        try:
            name.encode("utf-8")
        except UnicodeEncodeError:
            # os.fsdecode laisse des surrogates pour les octets non décodables
            return None
        return cls(name=name, path=path)


@dataclass(frozen=True)
class Candidate:
    """Un choix retenu dans le top-k d'une source."""

    choice_index: int
    score: float

    def __repr__(self) -> str:
        return f"Candidate(choice={self.choice_index}, score={self.score:.3f})"


class OverrideKind(str, Enum):
    UNSET = "unset"
    CHOICE = "choice"
    NONE = "none"


@dataclass(frozen=True)
class Override:
    """
    Décision manuelle de l'utilisateur sur une source.

    UNSET : le meilleur candidat automatique est utilisé.
    CHOICE : le choix d'index choice_index est imposé.
    NONE : pas de correspondance, les candidats sont ignorés.
    """

    kind: OverrideKind = OverrideKind.UNSET
    choice_index: int | None = None

    @classmethod
    def unset(cls) -> Override:
        return cls(OverrideKind.UNSET)

    @classmethod
    def choice(cls, index: int) -> Override:
        return cls(OverrideKind.CHOICE, index)

    @classmethod
    def none(cls) -> Override:
        return cls(OverrideKind.NONE)

    @property
    def is_set(self) -> bool:
        return self.kind != OverrideKind.UNSET


@dataclass
class SourceRecord:
    """Une source et ses meilleurs candidats parmi les choix."""

    file: FileEntry
    candidates: list[Candidate] = field(default_factory=list)
    override: Override = field(default_factory=Override.unset)

    def set_choice(self, index: int | None) -> None:
        """Impose un choix (index) ou l'absence de correspondance (None)."""
        self.override = Override.none() if index is None else Override.choice(index)

    def reset_choice(self) -> None:
        """Revient au choix automatique."""
        self.override = Override.unset()

    def current_choice(self) -> int | None:
        """Index du choix retenu, manuel ou automatique."""
        if self.override.kind == OverrideKind.CHOICE:
            return self.override.choice_index
        if self.override.kind == OverrideKind.NONE:
            return None
        return self.candidates[0].choice_index if self.candidates else None

    def current_score(self) -> float | None:
        """
        Score du meilleur candidat automatique.

        None dès qu'un choix manuel est posé, même si ce choix figure parmi les candidats.
        """
        if self.override.is_set:
            return None
        return self.candidates[0].score if self.candidates else 0.0
