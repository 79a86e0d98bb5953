"""Tests du module config."""

from pathlib import Path

import pytest

from fuzzyrename.config import ConfigError, Settings


def test_settings_defaults() -> None:
    s = Settings()
    assert s.threshold == 0.7
    assert s.side == "choices"
    assert s.algorithm == "jaro"
    assert s.include_unmatched is True
    assert s.keep_extension is False
    assert s.top_k == 10


def test_settings_from_dict() -> None:
    s = Settings.from_dict({"threshold": 0.5, "side": "sources", "algorithm": "levenshtein", "keep_extension": True})
    assert s.threshold == 0.5
    assert s.side == "sources"
    assert s.algorithm == "levenshtein"
    assert s.keep_extension is True


def test_settings_roundtrip(tmp_path: Path) -> None:
    path = tmp_path / "settings.json"
    Settings(threshold=0.8, theme="dark", renames_path=str(tmp_path)).save(path)
    loaded = Settings.load(path)
    assert loaded.threshold == 0.8
    assert loaded.theme == "dark"
    assert loaded.renames_path == str(tmp_path)


def test_settings_load_resolves_paths(tmp_path: Path) -> None:
    (tmp_path / "in").mkdir()
    path = tmp_path / "settings.json"
    path.write_text('{"sources_path": "in", "choices_path": ""}', encoding="utf-8")

    s = Settings.load(path)
    assert Path(s.sources_path).is_absolute()
    assert Path(s.sources_path).parent == tmp_path.resolve()
    assert s.choices_path == ""


def test_settings_validation_threshold() -> None:
    with pytest.raises(ConfigError, match="threshold doit être entre 0 et 1"):
        Settings.from_dict({"threshold": 1.5})


def test_settings_validation_threshold_not_a_number() -> None:
    with pytest.raises(ConfigError, match="valeur numérique invalide"):
        Settings.from_dict({"threshold": "haut"})


def test_settings_validation_side() -> None:
    with pytest.raises(ConfigError, match="side invalide"):
        Settings.from_dict({"side": "both"})


def test_settings_validation_algorithm() -> None:
    with pytest.raises(ConfigError, match="algorithm invalide"):
        Settings.from_dict({"algorithm": "soundex"})


def test_settings_validation_theme() -> None:
    with pytest.raises(ConfigError, match="theme invalide"):
        Settings.from_dict({"theme": "blue"})


def test_settings_validation_top_k() -> None:
    with pytest.raises(ConfigError, match="top_k doit être >= 1"):
        Settings.from_dict({"top_k": 0})
