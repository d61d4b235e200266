"""Tests for the language code table."""

import pytest

from dvdti.analyze.languages import DEFAULT_LANGUAGES, LanguageTable


@pytest.mark.parametrize(
    ("code", "name"),
    [("en", "English"), ("ja", "Japanese"), ("bn", "Bengali, Bangla"), ("zu", "Zulu")],
)
def test_known_codes(code: str, name: str) -> None:
    assert DEFAULT_LANGUAGES.lookup(code) == name


@pytest.mark.parametrize("code", ["", "\x00\x00", "  ", "qq"])
def test_misses_are_unknown(code: str) -> None:
    assert DEFAULT_LANGUAGES.lookup(code) == "Unknown"


def test_lookup_normalizes_case_and_padding() -> None:
    assert DEFAULT_LANGUAGES.lookup("FR") == "French"
    assert DEFAULT_LANGUAGES.lookup("de\x00") == "German"


def test_table_copies_its_source() -> None:
    assert len(DEFAULT_LANGUAGES) > 130
    source = {"en": "English"}
    table = LanguageTable(source)
    source["en"] = "Other"
    assert table.lookup("en") == "English"


@pytest.mark.parametrize("code", ["en", "EN", "en\x00"])
def test_contains_normalizes(code: str) -> None:
    assert code in DEFAULT_LANGUAGES


def test_contains_misses() -> None:
    assert "qq" not in DEFAULT_LANGUAGES
    assert 7 not in DEFAULT_LANGUAGES


def test_custom_table() -> None:
    table = LanguageTable({"EN": "Inglés"})
    assert table.lookup("en") == "Inglés"
    assert table.lookup("fr") == "Unknown"
