"""Calcul du nom de fichier de sortie à partir d'une paire source/choix."""

from __future__ import annotations

from enum import Enum

from fuzzyrename.config import ConfigError
from fuzzyrename.normalize import extension_of, strip_extension


class Side(str, Enum):
    """Côté dont les fichiers sont copiés/renommés (et qui fournit l'extension)."""

    SOURCES = "sources"
    CHOICES = "choices"

    @classmethod
    def from_name(cls, name: str) -> Side:
        try:
            return cls(name)
        except ValueError:
            raise ConfigError(f"side invalide: {name!r}. Valides: {sorted(s.value for s in cls)}") from None


def resolve_name(
    source_name: str,
    choice_name: str,
    keep_extension: bool,
    original: Side,
) -> str:
    """
    Construit le nom de sortie d'une paire source/choix.

    Le côté original fournit l'extension, l'autre côté (référence) fournit le corps.
    Renommer les choix : choix "A_game.zip" + source "A.png" → "A.zip".
    Renommer les sources : source "B.png" + choix "B_game.zip" → "B_game.png".

    Args:
        source_name: Nom du fichier source.
        choice_name: Nom du fichier choix.
        keep_extension: Garder l'extension de la référence dans le corps
            ("B_game.zip.png").
        original: Côté dont le fichier est copié/renommé.

    Returns:
        "{corps}.{extension}". Le point est toujours inséré : une extension
        vide donne un nom terminé par '.' (ex. "b.").
    """
    if original == Side.SOURCES:
        original_name, reference = source_name, choice_name
    else:
        original_name, reference = choice_name, source_name

    extension = extension_of(original_name)
    body = reference if keep_extension else strip_extension(reference)
    return f"{body}.{extension}"
