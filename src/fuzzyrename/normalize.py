"""Découpage nom/extension et normalisation de texte."""

from __future__ import annotations

import re
import unicodedata


def strip_extension(name: str) -> str:
    """
    Retire l'extension (tout ce qui suit le dernier '.') d'un nom de fichier.

    Un nom sans '.' est retourné tel quel.

    Examples:
        >>> strip_extension("photo.tar.gz")
        'photo.tar'
        >>> strip_extension("README")
        'README'
    """
    dot = name.rfind(".")
    if dot < 0:
        return name
    return name[:dot]


def extension_of(name: str) -> str:
    """Extension après le dernier '.', ou chaîne vide si le nom n'en a pas."""
    _, sep, ext = name.rpartition(".")
    return ext if sep else ""


def norm_text(
    s: str | None,
    *,
    lower: bool = True,
    strip: bool = True,
) -> str:
    """
    Normalise un texte : NFKC, espaces multiples → espace simple, lower, strip.

    Args:
        s: Texte à normaliser.
        lower: Mettre en minuscules.
        strip: Supprimer espaces en début/fin.

    Returns:
        Chaîne normalisée.
    """
    if s is None:
        return ""
    text = unicodedata.normalize("NFKC", str(s))
    text = re.sub(r"\s+", " ", text)
    if strip:
        text = text.strip()
    if lower:
        text = text.lower()
    return text
