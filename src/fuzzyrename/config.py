"""Paramètres de l'application et chargement du fichier settings JSON."""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any

VALID_SIDES = frozenset({"sources", "choices"})
VALID_ALGORITHMS = frozenset({"jaro", "jaro_winkler", "levenshtein", "damerau_levenshtein"})
VALID_THEMES = frozenset({"light", "dark"})

DEFAULT_TOP_K = 10


class FuzzyRenameError(Exception):
    """Exception de base pour fuzzyrename."""


class ConfigError(FuzzyRenameError, ValueError):
    """Erreur de validation des paramètres."""


class ConfigFileError(FuzzyRenameError):
    """Erreur de chargement du fichier de paramètres (fichier absent, JSON invalide)."""


@dataclass
class Settings:
    """Paramètres persistés entre deux sessions."""

    # Derniers dossiers utilisés
    sources_path: str = ""
    choices_path: str = ""
    renames_path: str = ""

    keep_extension: bool = False
    side: str = "choices"  # sources, choices : côté copié/renommé
    include_unmatched: bool = True
    theme: str = "light"

    threshold: float = 0.7
    algorithm: str = "jaro"
    normalize: bool = False
    top_k: int = DEFAULT_TOP_K

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> Settings:
        side = d.get("side", "choices")
        algorithm = d.get("algorithm", "jaro")
        theme = d.get("theme", "light")
        try:
            threshold = float(d.get("threshold", 0.7))
            top_k = int(d.get("top_k", DEFAULT_TOP_K))
        except (TypeError, ValueError) as e:
            raise ConfigError(f"valeur numérique invalide: {e}") from e

        if side not in VALID_SIDES:
            raise ConfigError(f"side invalide: {side!r}. Valides: {sorted(VALID_SIDES)}")
        if algorithm not in VALID_ALGORITHMS:
            raise ConfigError(f"algorithm invalide: {algorithm!r}. Valides: {sorted(VALID_ALGORITHMS)}")
        if theme not in VALID_THEMES:
            raise ConfigError(f"theme invalide: {theme!r}. Valides: {sorted(VALID_THEMES)}")
        if not 0 <= threshold <= 1:
            raise ConfigError(f"threshold doit être entre 0 et 1 (got {threshold})")
        if top_k < 1:
            raise ConfigError(f"top_k doit être >= 1 (got {top_k})")

        return cls(
            sources_path=d.get("sources_path", ""),
            choices_path=d.get("choices_path", ""),
            renames_path=d.get("renames_path", ""),
            keep_extension=bool(d.get("keep_extension", False)),
            side=side,
            include_unmatched=bool(d.get("include_unmatched", True)),
            theme=theme,
            threshold=threshold,
            algorithm=algorithm,
            normalize=bool(d.get("normalize", False)),
            top_k=top_k,
        )

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def load(cls, path: str | Path) -> Settings:
        """
        Charge les paramètres depuis un fichier JSON.

        Raises:
            ConfigFileError: Si le fichier est absent ou le JSON invalide.
            ConfigError: Si les paramètres sont invalides.
        """
        path = Path(path).resolve()
        if not path.exists():
            raise ConfigFileError(f"Fichier de paramètres introuvable: {path}")

        try:
            with open(path, encoding="utf-8") as f:
                d = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigFileError(f"JSON invalide dans {path}: {e}") from e
        except OSError as e:
            raise ConfigFileError(f"Impossible de lire {path}: {e}") from e

        if not isinstance(d, dict):
            raise ConfigFileError(f"Fichier de paramètres invalide: {path} doit contenir un objet JSON")

        settings = cls.from_dict(d)
        settings.resolve_paths(path.parent)
        return settings

    def save(self, path: str | Path) -> None:
        """Écrit les paramètres dans un fichier JSON."""
        path = Path(path)
        try:
            with open(path, "w", encoding="utf-8") as f:
                json.dump(self.to_dict(), f, indent=2, ensure_ascii=False)
        except OSError as e:
            raise ConfigFileError(f"Impossible d'écrire {path}: {e}") from e

    def resolve_paths(self, base_dir: Path) -> None:
        """
        Résout les dossiers relatifs par rapport au répertoire de base (ex. dossier du fichier settings).

        Modifie sources_path, choices_path et renames_path en place.
        """
        base = Path(base_dir)
        if self.sources_path and not Path(self.sources_path).is_absolute():
            self.sources_path = str((base / self.sources_path).resolve())
        if self.choices_path and not Path(self.choices_path).is_absolute():
            self.choices_path = str((base / self.choices_path).resolve())
        if self.renames_path and not Path(self.renames_path).is_absolute():
            self.renames_path = str((base / self.renames_path).resolve())
