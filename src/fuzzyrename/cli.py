"""Interface en ligne de commande fuzzyrename."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Any

from fuzzyrename import __version__
from fuzzyrename.config import FuzzyRenameError, Settings
from fuzzyrename.io_fs import OpOutcome, copy_plan, load_entries, rename_plan
from fuzzyrename.matching.index import MatchIndex
from fuzzyrename.matching.scorers import SearchAlgorithm
from fuzzyrename.normalize import strip_extension
from fuzzyrename.plan import PlanItem, build_plan
from fuzzyrename.rename import Side, resolve_name
from fuzzyrename.report import build_mapping_csv, print_report_console, write_report_csv

logger = logging.getLogger(__name__)


def build_settings(config_path: str | None, overrides: dict[str, Any]) -> Settings:
    """Charge le fichier de paramètres (optionnel) et applique les options de la ligne de commande."""
    settings = Settings.load(config_path) if config_path else Settings()
    d = settings.to_dict()
    d.update({k: v for k, v in overrides.items() if v is not None})
    return Settings.from_dict(d)


def build_index(settings: Settings, sources: list[str], choices: list[str]) -> MatchIndex:
    """Charge sources et choix (dossiers ou fichiers) dans un nouvel index."""
    index = MatchIndex(
        SearchAlgorithm.from_name(settings.algorithm),
        top_k=settings.top_k,
        normalize=settings.normalize,
    )
    src = load_entries(sources)
    ch = load_entries(choices)
    skipped = len(src.skipped) + len(ch.skipped)
    if skipped:
        print(f"Avertissement: {skipped} entrée(s) ignorée(s) (nom illisible ou fichier inaccessible)")
    index.add_choices(ch.entries)
    index.add_sources(src.entries)
    return index


def print_matches(index: MatchIndex, settings: Settings) -> None:
    """Affiche la table source / similarité / meilleur choix / nom de sortie."""
    side = Side.from_name(settings.side)
    print(f"{'#':>4}  {'Source':<32} {'Sim.':>5}  {'Choix':<32} Sortie ({side.value})")
    for i, record in enumerate(index.sources):
        score = record.current_score()
        below = score is not None and score < settings.threshold
        sim = "N/A" if score is None else f"{100 * score:.0f}%"
        choice = index.choice_at(record.current_choice())
        if choice is None or below:
            choice_name, renamed = "", ""
        else:
            choice_name = choice.name
            renamed = resolve_name(record.file.name, choice.name, settings.keep_extension, side)
        print(f"{i:>4}  {record.file.name:<32} {sim:>5}  {choice_name:<32} {renamed}")


def interactive_resolve(index: MatchIndex, threshold: float) -> int:
    """
    Mode interactif : pour chaque source sous le seuil, demande le choix utilisateur.

    Les sources sans aucun candidat ne sont pas proposées.

    Returns:
        Nombre de choix manuels posés.
    """
    decided = 0
    for i, record in enumerate(index.sources):
        score = record.current_score()
        if score is None or score >= threshold or not record.candidates:
            continue
        print("\n" + "=" * 60)
        print(f"Source #{i}: {record.file.name} (score={score:.2f})")
        print("\nCandidats:")
        for n, c in enumerate(record.candidates):
            choice = index.choice_at(c.choice_index)
            label = strip_extension(choice.name) if choice else "?"
            print(f"  [{n + 1}] [{100 * c.score:.2f}%] {label}")
        print("  [0] Pas de correspondance")
        print("  [s] Passer (skip)")

        while True:
            inp = input(f"Choix (1-{len(record.candidates)} / 0 / s): ").strip()
            if inp.lower() == "s":
                break
            if inp == "0":
                index.set_override(i, None)
                decided += 1
                break
            try:
                n = int(inp)
                if 1 <= n <= len(record.candidates):
                    index.set_override(i, record.candidates[n - 1].choice_index)
                    decided += 1
                    break
            except ValueError:
                pass
            print("Choix invalide, réessayez.")
    return decided


def _plan_for(index: MatchIndex, settings: Settings, *, include_unmatched: bool) -> list[PlanItem]:
    return build_plan(
        index,
        settings.threshold,
        include_unmatched,
        Side.from_name(settings.side),
        settings.keep_extension,
    )


def _print_plan(plan: list[PlanItem]) -> None:
    for item in plan:
        print(f"  {item.origin} -> {item.destination_name}")


def _write_outputs(
    index: MatchIndex,
    settings: Settings,
    plan: list[PlanItem],
    *,
    mapping_path: str | None = None,
    report_path: str | None = None,
    outcomes: list[OpOutcome] | None = None,
) -> None:
    if mapping_path:
        build_mapping_csv(plan, mapping_path)
        print(f"Mapping écrit: {mapping_path}")
    if report_path:
        write_report_csv(index, settings, plan, report_path, outcomes)
        print(f"Rapport écrit: {report_path}")



def cmd_match(
    settings: Settings,
    sources: list[str],
    choices: list[str],
    *,
    interactive: bool = False,
    mapping_path: str | None = None,
    report_path: str | None = None,
) -> int:
    """Affiche les correspondances et écrit éventuellement le plan et le rapport en CSV."""
    index = build_index(settings, sources, choices)
    if interactive:
        interactive_resolve(index, settings.threshold)
    print_matches(index, settings)

    plan = _plan_for(index, settings, include_unmatched=settings.include_unmatched)
    _write_outputs(index, settings, plan, mapping_path=mapping_path, report_path=report_path)
    print_report_console(index, settings, plan)
    return 0


def cmd_copy(
    settings: Settings,
    sources: list[str],
    choices: list[str],
    output_dir: str,
    *,
    dry_run: bool = False,
    interactive: bool = False,
    mapping_path: str | None = None,
    report_path: str | None = None,
) -> int:
    """Copie les fichiers du côté choisi vers output_dir sous leur nouveau nom."""
    index = build_index(settings, sources, choices)
    if interactive:
        interactive_resolve(index, settings.threshold)
    plan = _plan_for(index, settings, include_unmatched=settings.include_unmatched)

    if dry_run:
        print(f"Mode dry-run: {len(plan)} copie(s) vers {output_dir}")
        _print_plan(plan)
        _write_outputs(index, settings, plan, mapping_path=mapping_path, report_path=report_path)
        print_report_console(index, settings, plan)
        return 0

    outcomes = copy_plan(plan, output_dir)
    _write_outputs(index, settings, plan, mapping_path=mapping_path, report_path=report_path, outcomes=outcomes)
    print_report_console(index, settings, plan, outcomes)
    return 1 if any(o.error for o in outcomes) else 0


def cmd_rename(
    settings: Settings,
    sources: list[str],
    choices: list[str],
    *,
    dry_run: bool = False,
    interactive: bool = False,
    report_path: str | None = None,
) -> int:
    """Renomme directement les sources (les sources sans correspondance ne sont pas touchées)."""
    if settings.side != Side.SOURCES.value:
        print("Erreur: le renommage direct n'est possible que pour les sources (--side sources).")
        return 1
    index = build_index(settings, sources, choices)
    if interactive:
        interactive_resolve(index, settings.threshold)
    plan = _plan_for(index, settings, include_unmatched=False)

    if dry_run:
        print(f"Mode dry-run: {len(plan)} renommage(s)")
        _print_plan(plan)
        _write_outputs(index, settings, plan, report_path=report_path)
        print_report_console(index, settings, plan)
        return 0

    outcomes = rename_plan(plan)
    _write_outputs(index, settings, plan, report_path=report_path, outcomes=outcomes)
    print_report_console(index, settings, plan, outcomes)
    return 1 if any(o.error for o in outcomes) else 0


def _add_common_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--sources", "-s", nargs="+", required=True, help="Dossiers ou fichiers sources")
    p.add_argument("--choices", "-C", nargs="+", required=True, help="Dossiers ou fichiers de référence")
    p.add_argument("--config", "-c", help="Fichier de paramètres JSON")
    p.add_argument("--algorithm", "-a", choices=[a.value for a in SearchAlgorithm], help="Métrique de similarité")
    p.add_argument("--threshold", "-t", type=float, help="Seuil de similarité (0-1)")
    p.add_argument("--side", choices=[s.value for s in Side], help="Côté copié/renommé")
    p.add_argument("--keep-extension", action="store_true", default=None, help="Garder l'extension de la référence")
    p.add_argument(
        "--include-unmatched",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Inclure les sources sans correspondance (copie des sources)",
    )
    p.add_argument("--normalize", action="store_true", default=None, help="Comparer sans casse ni espaces multiples")
    p.add_argument("--interactive", "-i", action="store_true", help="Choix interactif sous le seuil")
    p.add_argument("--report", "-r", help="Chemin pour le rapport CSV (Key, Value)")


def _overrides(args: argparse.Namespace) -> dict[str, Any]:
    return {
        "algorithm": args.algorithm,
        "threshold": args.threshold,
        "side": args.side,
        "keep_extension": args.keep_extension,
        "include_unmatched": args.include_unmatched,
        "normalize": args.normalize,
    }


def main() -> int:
    parser = argparse.ArgumentParser(
        prog="fuzzyrename",
        description="Renommage de fichiers par correspondance approximative de noms",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--verbose", "-v", action="store_true", help="Journalisation détaillée")

    subparsers = parser.add_subparsers(dest="command", help="Commandes")

    # match
    p_match = subparsers.add_parser("match", help="Afficher les correspondances")
    _add_common_args(p_match)
    p_match.add_argument("--mapping", "-m", help="Chemin pour mapping.csv")

    # copy
    p_copy = subparsers.add_parser("copy", help="Copier les fichiers renommés vers un dossier")
    _add_common_args(p_copy)
    p_copy.add_argument("--output", "-o", required=True, help="Dossier de sortie")
    p_copy.add_argument("--dry-run", action="store_true", help="Afficher le plan sans copier")
    p_copy.add_argument("--mapping", "-m", help="Chemin pour mapping.csv")

    # rename
    p_rename = subparsers.add_parser("rename", help="Renommer directement les sources")
    _add_common_args(p_rename)
    p_rename.add_argument("--dry-run", action="store_true", help="Afficher le plan sans renommer")

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command is None:
        parser.print_help()
        return 0

    try:
        settings = build_settings(args.config, _overrides(args))
        if args.command == "match":
            return cmd_match(
                settings,
                args.sources,
                args.choices,
                interactive=args.interactive,
                mapping_path=args.mapping,
                report_path=args.report,
            )
        if args.command == "copy":
            return cmd_copy(
                settings,
                args.sources,
                args.choices,
                args.output,
                dry_run=args.dry_run,
                interactive=args.interactive,
                mapping_path=args.mapping,
                report_path=args.report,
            )
        if args.command == "rename":
            return cmd_rename(
                settings,
                args.sources,
                args.choices,
                dry_run=args.dry_run,
                interactive=args.interactive,
                report_path=args.report,
            )
    except FuzzyRenameError as e:
        logger.debug("Erreur", exc_info=True)
        print(f"Erreur: {e}")
        return 1

    parser.print_help()
    return 0


if __name__ == "__main__":
    sys.exit(main())
