"""Tests du découpage nom/extension et de la normalisation."""

from fuzzyrename.normalize import extension_of, norm_text, strip_extension


def test_strip_extension_basic() -> None:
    assert strip_extension("photo.png") == "photo"
    assert strip_extension("archive.tar.gz") == "archive.tar"


def test_strip_extension_no_dot() -> None:
    assert strip_extension("README") == "README"


def test_strip_extension_idempotent_without_dot() -> None:
    for name in ["README", "", "Makefile", "a b c"]:
        once = strip_extension(name)
        assert strip_extension(once) == once


def test_strip_extension_dotfile() -> None:
    # Tout ce qui suit le dernier '.' est l'extension
    assert strip_extension(".bashrc") == ""
    assert strip_extension("name.") == "name"


def test_extension_of() -> None:
    assert extension_of("photo.png") == "png"
    assert extension_of("archive.tar.gz") == "gz"
    assert extension_of("README") == ""
    assert extension_of("name.") == ""


def test_norm_text_basic() -> None:
    # Espaces multiples → espace simple, lower, strip
    assert norm_text("  Hello  World  ") == "hello world"
    assert norm_text("  ABC  ", lower=False) == "ABC"


def test_norm_text_nfkc() -> None:
    assert norm_text("ﬁle") == "file"  # ligature -> fi


def test_norm_text_none() -> None:
    assert norm_text(None) == ""
