"""Génération du rapport et export du plan."""

from __future__ import annotations

from datetime import datetime

import pandas as pd

from fuzzyrename import __version__
from fuzzyrename.config import Settings
from fuzzyrename.io_fs import OpOutcome, count_outcomes
from fuzzyrename.matching.index import MatchIndex
from fuzzyrename.plan import PlanItem, is_accepted

PLAN_COLUMNS = ["source_index", "origin", "destination", "matched", "score"]


def build_plan_df(plan: list[PlanItem]) -> pd.DataFrame:
    """Plan sous forme de DataFrame (une ligne par opération)."""
    rows = [
        {
            "source_index": item.source_index,
            "origin": str(item.origin),
            "destination": item.destination_name,
            "matched": item.matched,
            "score": item.score,
        }
        for item in plan
    ]
    return pd.DataFrame(rows, columns=PLAN_COLUMNS)


def build_mapping_csv(plan: list[PlanItem], output_path: str) -> None:
    """Génère mapping.csv avec source_index, origin, destination, matched, score."""
    build_plan_df(plan).to_csv(output_path, index=False, encoding="utf-8")


def write_report_csv(
    index: MatchIndex,
    settings: Settings,
    plan: list[PlanItem],
    output_path: str,
    outcomes: list[OpOutcome] | None = None,
) -> None:
    """Écrit le rapport (Key, Value) en CSV."""
    build_report_df(index, settings, plan, outcomes).to_csv(output_path, index=False, encoding="utf-8")


def _match_counts(index: MatchIndex, settings: Settings) -> dict[str, int]:
    n_overridden = sum(1 for r in index.sources if r.override.is_set)
    n_accepted = sum(1 for r in index.sources if is_accepted(index, r, settings.threshold))
    return {
        "nb_sources": len(index.sources),
        "nb_choices": len(index.choices),
        "nb_accepted": n_accepted,
        "nb_overridden": n_overridden,
        "nb_unmatched": len(index.sources) - n_accepted,
    }


def build_report_df(
    index: MatchIndex,
    settings: Settings,
    plan: list[PlanItem],
    outcomes: list[OpOutcome] | None = None,
) -> pd.DataFrame:
    """
    Construit le DataFrame du rapport (Key, Value).

    Contient : nb sources, nb choix, nb acceptés, nb choix manuels, nb sans
    correspondance, taille du plan, décompte des opérations, paramètres,
    horodatage, version.
    """
    rows: list[tuple[str, object]] = [("Metric", "Value")]
    rows.extend(_match_counts(index, settings).items())
    rows.append(("nb_plan_items", len(plan)))
    if outcomes is not None:
        rows.extend((f"nb_{status}", n) for status, n in count_outcomes(outcomes).items())
    rows.extend(
        [
            ("", ""),
            ("Parameters", ""),
            ("algorithm", index.algorithm.value),
            ("threshold", settings.threshold),
            ("top_k", index.top_k),
            ("side", settings.side),
            ("keep_extension", settings.keep_extension),
            ("include_unmatched", settings.include_unmatched),
            ("", ""),
            ("timestamp", datetime.now().isoformat()),
            ("version", __version__),
        ]
    )
    return pd.DataFrame(rows, columns=["Key", "Value"])


def print_report_console(
    index: MatchIndex,
    settings: Settings,
    plan: list[PlanItem],
    outcomes: list[OpOutcome] | None = None,
) -> None:
    """Affiche un résumé du rapport en console."""
    counts = _match_counts(index, settings)

    print("\n=== fuzzyrename Report ===")
    print(f"  Sources:          {counts['nb_sources']}")
    print(f"  Choix:            {counts['nb_choices']}")
    print(f"  Acceptés:         {counts['nb_accepted']}")
    print(f"  Choix manuels:    {counts['nb_overridden']}")
    print(f"  Sans match:       {counts['nb_unmatched']}")
    print(f"  Opérations:       {len(plan)}")
    if outcomes is not None:
        done = count_outcomes(outcomes)
        print(f"  Créés:            {done['created']}")
        print(f"  Écrasés:          {done['overwritten']}")
        print(f"  Inchangés:        {done['unchanged']}")
        print(f"  Échecs:           {done['failed']}")
    print(f"  Version:          {__version__}")
    print(f"  Timestamp:        {datetime.now().isoformat()}")
    print("==========================\n")
