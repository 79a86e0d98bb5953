"""Calcul des scores de similarité entre noms de fichiers."""

from __future__ import annotations

from enum import Enum

from rapidfuzz.distance import DamerauLevenshtein, Jaro, JaroWinkler, Levenshtein

from fuzzyrename.config import ConfigError
from fuzzyrename.normalize import norm_text, strip_extension


class SearchAlgorithm(str, Enum):
    """Métriques de similarité disponibles (score entre 0 et 1)."""

    JARO = "jaro"
    JARO_WINKLER = "jaro_winkler"
    LEVENSHTEIN = "levenshtein"
    DAMERAU_LEVENSHTEIN = "damerau_levenshtein"

    @property
    def label(self) -> str:
        return _LABELS[self]

    @classmethod
    def from_name(cls, name: str) -> SearchAlgorithm:
        """Retrouve l'algorithme depuis son nom de configuration."""
        try:
            return cls(name)
        except ValueError:
            valid = sorted(a.value for a in cls)
            raise ConfigError(f"algorithm invalide: {name!r}. Valides: {valid}") from None


_LABELS: dict[SearchAlgorithm, str] = {
    SearchAlgorithm.JARO: "Jaro",
    SearchAlgorithm.JARO_WINKLER: "Jaro Winkler",
    SearchAlgorithm.LEVENSHTEIN: "Levenshtein",
    SearchAlgorithm.DAMERAU_LEVENSHTEIN: "Damerau Levenshtein",
}


def compare(algorithm: SearchAlgorithm, a: str, b: str) -> float:
    """
    Similarité (0-1) entre deux chaînes selon l'algorithme.

    1.0 = identiques, 0.0 = totalement différentes.
    """
    if algorithm == SearchAlgorithm.JARO:
        return float(Jaro.normalized_similarity(a, b))
    if algorithm == SearchAlgorithm.JARO_WINKLER:
        return float(JaroWinkler.normalized_similarity(a, b))
    if algorithm == SearchAlgorithm.LEVENSHTEIN:
        return float(Levenshtein.normalized_similarity(a, b))
    if algorithm == SearchAlgorithm.DAMERAU_LEVENSHTEIN:
        return float(DamerauLevenshtein.normalized_similarity(a, b))
    raise ConfigError(f"algorithm inconnu: {algorithm!r}")


def base_name(name: str, *, normalize: bool = False) -> str:
    """Nom sans extension, éventuellement normalisé, tel qu'il est comparé."""
    base = strip_extension(name)
    return norm_text(base) if normalize else base


def compare_names(
    algorithm: SearchAlgorithm,
    a: str,
    b: str,
    *,
    normalize: bool = False,
) -> float:
    """
    Compare deux noms de fichiers sur leur nom de base (extension retirée des deux côtés).

    Args:
        algorithm: Métrique utilisée.
        a: Premier nom.
        b: Second nom.
        normalize: Normaliser (NFKC, espaces, minuscules) avant comparaison.

    Returns:
        Score entre 0 et 1.
    """
    return compare(
        algorithm,
        base_name(a, normalize=normalize),
        base_name(b, normalize=normalize),
    )
