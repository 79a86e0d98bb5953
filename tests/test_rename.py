"""Tests du calcul du nom de sortie."""

import pytest

from fuzzyrename.config import ConfigError
from fuzzyrename.rename import Side, resolve_name


def test_rename_choices_takes_choice_extension() -> None:
    assert resolve_name("photo.png", "cover.jpg", False, Side.CHOICES) == "photo.jpg"


def test_rename_sources_takes_source_extension() -> None:
    assert resolve_name("B.png", "B_game.zip", False, Side.SOURCES) == "B_game.png"


def test_keep_extension_keeps_reference_name_whole() -> None:
    assert resolve_name("B.png", "B_game.zip", True, Side.SOURCES) == "B_game.zip.png"
    assert resolve_name("A.png", "A_game.zip", True, Side.CHOICES) == "A.png.zip"


def test_empty_extension_keeps_trailing_dot() -> None:
    assert resolve_name("a", "b.txt", False, Side.SOURCES) == "b."


def test_reference_without_extension() -> None:
    assert resolve_name("notes", "doc.pdf", False, Side.CHOICES) == "notes.pdf"


def test_multi_dot_names() -> None:
    assert resolve_name("backup.tar.gz", "site.v2.zip", False, Side.SOURCES) == "site.v2.gz"


def test_side_from_name() -> None:
    assert Side.from_name("sources") is Side.SOURCES
    with pytest.raises(ConfigError, match="side invalide"):
        Side.from_name("both")
