"""I/O fichiers : lecture des dossiers, copie et renommage selon un plan."""

from __future__ import annotations

import logging
import shutil
from collections import Counter
from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from fuzzyrename.config import FuzzyRenameError
from fuzzyrename.matching.schema import FileEntry
from fuzzyrename.plan import PlanItem

logger = logging.getLogger(__name__)


class FileAccessError(FuzzyRenameError):
    """Erreur d'accès à un dossier (absent, illisible)."""


class OpStatus(str, Enum):
    CREATED = "created"
    OVERWRITTEN = "overwritten"
    UNCHANGED = "unchanged"
    FAILED = "failed"


@dataclass
class ScanResult:
    """Entrées lues et chemins ignorés (nom illisible, fichier inaccessible)."""

    entries: list[FileEntry] = field(default_factory=list)
    skipped: list[Path] = field(default_factory=list)


@dataclass
class OpOutcome:
    """Résultat d'une opération du plan."""

    item: PlanItem
    destination: Path
    status: OpStatus
    error: str = ""


def entries_from_paths(paths: Iterable[str | Path]) -> ScanResult:
    """Convertit une sélection de fichiers en entrées ; les chemins sans nom exploitable sont ignorés."""
    result = ScanResult()
    for p in paths:
        entry = FileEntry.from_path(p)
        if entry is None:
            logger.warning("Entrée ignorée (nom illisible): %s", p)
            result.skipped.append(Path(p))
            continue
        result.entries.append(entry)
    return result


def list_folder(folder: str | Path) -> ScanResult:
    """
    Liste les fichiers (non récursif) d'un dossier, triés par nom.

    Raises:
        FileAccessError: Si le dossier n'existe pas ou ne peut pas être lu.
    """
    folder = Path(folder)
    if not folder.is_dir():
        raise FileAccessError(f"Dossier introuvable: {folder}")
    try:
        children = sorted(folder.iterdir())
    except OSError as e:
        raise FileAccessError(f"Impossible de lire {folder}: {e}") from e

    files: list[Path] = []
    skipped: list[Path] = []
    for child in children:
        try:
            if child.is_file():
                files.append(child)
        except OSError as e:
            logger.warning("Fichier inaccessible ignoré: %s (%s)", child, e)
            skipped.append(child)

    result = entries_from_paths(files)
    result.skipped[:0] = skipped
    return result


def load_entries(paths: Iterable[str | Path]) -> ScanResult:
    """
    Charge des entrées depuis un mélange de dossiers (listés) et de fichiers.

    Raises:
        FileAccessError: Si un chemin n'existe pas.
    """
    result = ScanResult()
    for p in paths:
        if not Path(p).exists():
            raise FileAccessError(f"Fichier ou dossier introuvable: {p}")
        if Path(p).is_dir():
            part = list_folder(p)
        else:
            part = entries_from_paths([p])
        result.entries.extend(part.entries)
        result.skipped.extend(part.skipped)
    return result


def copy_plan(plan: list[PlanItem], folder: str | Path) -> list[OpOutcome]:
    """
    Copie chaque fichier du plan vers folder / destination_name.

    Chaque opération est indépendante : un échec n'interrompt pas la suite.

    Raises:
        FileAccessError: Si le dossier de sortie n'existe pas.
    """
    folder = Path(folder)
    if not folder.is_dir():
        raise FileAccessError(f"Dossier de sortie introuvable: {folder}")

    outcomes: list[OpOutcome] = []
    for item in plan:
        dst = folder / item.destination_name
        existed = dst.exists()
        try:
            shutil.copy2(item.origin, dst)
        except OSError as e:
            logger.warning("Copie échouée %s -> %s: %s", item.origin, dst, e)
            outcomes.append(OpOutcome(item, dst, OpStatus.FAILED, str(e)))
            continue
        outcomes.append(OpOutcome(item, dst, OpStatus.OVERWRITTEN if existed else OpStatus.CREATED))
    return outcomes


def rename_plan(plan: list[PlanItem]) -> list[OpOutcome]:
    """
    Renomme chaque fichier du plan dans son propre dossier.

    Une destination identique à l'origine est signalée UNCHANGED sans toucher au fichier.
    """
    outcomes: list[OpOutcome] = []
    for item in plan:
        dst = item.origin.parent / item.destination_name
        if dst == item.origin:
            outcomes.append(OpOutcome(item, dst, OpStatus.UNCHANGED))
            continue
        existed = dst.exists()
        try:
            item.origin.replace(dst)
        except OSError as e:
            logger.warning("Renommage échoué %s -> %s: %s", item.origin, dst, e)
            outcomes.append(OpOutcome(item, dst, OpStatus.FAILED, str(e)))
            continue
        outcomes.append(OpOutcome(item, dst, OpStatus.OVERWRITTEN if existed else OpStatus.CREATED))
    return outcomes


def count_outcomes(outcomes: list[OpOutcome]) -> dict[str, int]:
    """Décompte des résultats par statut (toutes les clés présentes)."""
    counts = Counter(o.status for o in outcomes)
    return {status.value: counts.get(status, 0) for status in OpStatus}
