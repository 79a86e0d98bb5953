"""Test d'intégration du pipeline fuzzyrename (CLI)."""

import sys
from pathlib import Path

import pandas as pd
import pytest

from fuzzyrename.cli import build_settings, cmd_copy, cmd_match, cmd_rename, interactive_resolve
from fuzzyrename.config import Settings
from fuzzyrename.matching.index import MatchIndex
from fuzzyrename.matching.schema import FileEntry


@pytest.fixture
def dirs(tmp_path: Path) -> tuple[Path, Path]:
    """Sources : apple.png, cherry.png ; choix : 'apple (v1).zip', banana.zip."""
    sources = tmp_path / "sources"
    choices = tmp_path / "choices"
    sources.mkdir()
    choices.mkdir()
    (sources / "apple.png").write_text("source apple", encoding="utf-8")
    (sources / "cherry.png").write_text("source cherry", encoding="utf-8")
    (choices / "apple (v1).zip").write_text("choice apple", encoding="utf-8")
    (choices / "banana.zip").write_text("choice banana", encoding="utf-8")
    return sources, choices


def test_match_writes_mapping(dirs: tuple[Path, Path], tmp_path: Path, capsys: pytest.CaptureFixture) -> None:
    sources, choices = dirs
    mapping = tmp_path / "mapping.csv"

    exit_code = cmd_match(Settings(), [str(sources)], [str(choices)], mapping_path=str(mapping))

    assert exit_code == 0
    out = capsys.readouterr().out
    assert "apple.png" in out
    assert "apple (v1).zip" in out
    df = pd.read_csv(mapping)
    assert df["destination"].tolist() == ["apple.zip"]


def test_copy_choices_to_output(dirs: tuple[Path, Path], tmp_path: Path) -> None:
    sources, choices = dirs
    out = tmp_path / "out"
    out.mkdir()

    exit_code = cmd_copy(Settings(), [str(sources)], [str(choices)], str(out))

    assert exit_code == 0
    assert sorted(p.name for p in out.iterdir()) == ["apple.zip"]
    assert (out / "apple.zip").read_text(encoding="utf-8") == "choice apple"


def test_copy_sources_includes_unmatched(dirs: tuple[Path, Path], tmp_path: Path) -> None:
    sources, choices = dirs
    out = tmp_path / "out"
    out.mkdir()

    settings = Settings(side="sources", include_unmatched=True)
    assert cmd_copy(settings, [str(sources)], [str(choices)], str(out)) == 0

    assert sorted(p.name for p in out.iterdir()) == ["apple (v1).png", "cherry.png"]


def test_copy_dry_run_writes_nothing(dirs: tuple[Path, Path], tmp_path: Path) -> None:
    sources, choices = dirs
    out = tmp_path / "out"
    out.mkdir()
    assert cmd_copy(Settings(), [str(sources)], [str(choices)], str(out), dry_run=True) == 0
    assert list(out.iterdir()) == []


def test_rename_sources_in_place(dirs: tuple[Path, Path]) -> None:
    sources, choices = dirs
    settings = Settings(side="sources")

    assert cmd_rename(settings, [str(sources)], [str(choices)]) == 0

    assert sorted(p.name for p in sources.iterdir()) == ["apple (v1).png", "cherry.png"]


def test_rename_refuses_choices_side(dirs: tuple[Path, Path]) -> None:
    sources, choices = dirs
    assert cmd_rename(Settings(side="choices"), [str(sources)], [str(choices)]) == 1
    assert sorted(p.name for p in choices.iterdir()) == ["apple (v1).zip", "banana.zip"]


def test_build_settings_merges_file_and_flags(tmp_path: Path) -> None:
    path = tmp_path / "settings.json"
    Settings(threshold=0.5, algorithm="levenshtein").save(path)

    settings = build_settings(str(path), {"threshold": 0.9, "side": None})

    assert settings.threshold == 0.9
    assert settings.algorithm == "levenshtein"
    assert settings.side == "choices"


def test_interactive_resolve(monkeypatch: pytest.MonkeyPatch) -> None:
    idx = MatchIndex()
    idx.add_choices([FileEntry("zzz.zip", Path("/c/zzz.zip")), FileEntry("yyy.zip", Path("/c/yyy.zip"))])
    idx.add_sources([FileEntry("abc.png", Path("/s/abc.png")), FileEntry("def.png", Path("/s/def.png"))])
    answers = iter(["x", "2", "0"])
    monkeypatch.setattr("builtins.input", lambda _: next(answers))

    decided = interactive_resolve(idx, 0.7)

    assert decided == 2
    assert idx.sources[0].current_choice() == idx.sources[0].candidates[1].choice_index
    assert idx.sources[1].override.is_set
    assert idx.sources[1].current_choice() is None


def test_main_match_command(dirs: tuple[Path, Path], capsys: pytest.CaptureFixture) -> None:
    from fuzzyrename.cli import main

    sources, choices = dirs
    old_argv = sys.argv
    try:
        sys.argv = ["fuzzyrename", "match", "-s", str(sources), "-C", str(choices), "--algorithm", "jaro_winkler"]
        assert main() == 0
    finally:
        sys.argv = old_argv
    assert "fuzzyrename Report" in capsys.readouterr().out


def _report_values(path: Path) -> dict[str, str]:
    df = pd.read_csv(path, dtype=str)
    return dict(zip(df["Key"], df["Value"]))


def test_copy_writes_report(dirs: tuple[Path, Path], tmp_path: Path) -> None:
    sources, choices = dirs
    out = tmp_path / "out"
    out.mkdir()
    report = tmp_path / "report.csv"

    assert cmd_copy(Settings(), [str(sources)], [str(choices)], str(out), report_path=str(report)) == 0

    values = _report_values(report)
    assert values["nb_sources"] == "2"
    assert values["nb_choices"] == "2"
    assert values["nb_accepted"] == "1"
    assert values["nb_unmatched"] == "1"
    assert values["nb_plan_items"] == "1"
    assert values["nb_created"] == "1"
    assert values["nb_failed"] == "0"
    assert values["algorithm"] == "jaro"


def test_main_rename_writes_report(dirs: tuple[Path, Path], tmp_path: Path) -> None:
    from fuzzyrename.cli import main

    sources, choices = dirs
    report = tmp_path / "report.csv"
    old_argv = sys.argv
    try:
        sys.argv = [
            "fuzzyrename",
            "rename",
            "-s",
            str(sources),
            "-C",
            str(choices),
            "--side",
            "sources",
            "--report",
            str(report),
        ]
        assert main() == 0
    finally:
        sys.argv = old_argv

    values = _report_values(report)
    assert values["side"] == "sources"
    assert values["nb_created"] == "1"
    assert sorted(p.name for p in sources.iterdir()) == ["apple (v1).png", "cherry.png"]


def test_match_dry_report_has_no_outcomes(dirs: tuple[Path, Path], tmp_path: Path) -> None:
    sources, choices = dirs
    report = tmp_path / "report.csv"

    assert cmd_match(Settings(), [str(sources)], [str(choices)], report_path=str(report)) == 0

    values = _report_values(report)
    assert values["nb_plan_items"] == "1"
    assert "nb_created" not in values


def test_interactive_resolve_skips_sources_without_candidates(monkeypatch: pytest.MonkeyPatch) -> None:
    idx = MatchIndex()
    idx.add_sources([FileEntry("abc.png", Path("/s/abc.png"))])
    assert idx.sources[0].current_score() == 0.0

    def no_input(_: str) -> str:
        raise AssertionError("aucune question attendue")

    monkeypatch.setattr("builtins.input", no_input)

    assert interactive_resolve(idx, 0.7) == 0
    assert not idx.sources[0].override.is_set
