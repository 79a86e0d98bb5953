"""Tests des types de matching : entrées, choix manuels."""

from pathlib import Path

from fuzzyrename.matching.schema import Candidate, FileEntry, Override, OverrideKind, SourceRecord


def _record(*candidates: tuple[int, float]) -> SourceRecord:
    return SourceRecord(
        file=FileEntry("a.png", Path("/tmp/a.png")),
        candidates=[Candidate(i, s) for i, s in candidates],
    )


def test_file_entry_from_path() -> None:
    entry = FileEntry.from_path("/data/photo.png")
    assert entry is not None
    assert entry.name == "photo.png"
    assert entry.path == Path("/data/photo.png")


def test_file_entry_from_path_without_name() -> None:
    assert FileEntry.from_path("/") is None


def test_file_entry_from_path_undecodable_name() -> None:
    # Octet non UTF-8 décodé par surrogateescape
    assert FileEntry.from_path("/data/bad\udcff.png") is None


def test_current_choice_unset_uses_best_candidate() -> None:
    record = _record((3, 0.9), (1, 0.4))
    assert record.current_choice() == 3
    assert record.current_score() == 0.9


def test_current_choice_unset_without_candidates() -> None:
    record = _record()
    assert record.current_choice() is None
    assert record.current_score() == 0.0


def test_explicit_choice() -> None:
    record = _record((3, 0.9), (1, 0.4))
    record.set_choice(1)
    assert record.override == Override.choice(1)
    assert record.current_choice() == 1
    # Pas de score automatique, même si le choix figure parmi les candidats
    assert record.current_score() is None


def test_explicit_none() -> None:
    record = _record((3, 0.9))
    record.set_choice(None)
    assert record.override.kind == OverrideKind.NONE
    assert record.current_choice() is None
    assert record.current_score() is None


def test_reset_choice() -> None:
    record = _record((3, 0.9))
    record.set_choice(None)
    record.reset_choice()
    assert not record.override.is_set
    assert record.current_choice() == 3
    assert record.current_score() == 0.9
