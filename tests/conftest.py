"""Shared fixtures for german-preprocess tests."""

from pathlib import Path

import pytest

from german_preprocess import Transliterator, WordListResolver
from german_preprocess.umlauts import AlwaysResolve, SpecialCharacterMachine

WORDS = [
    "Müller",
    "Grüße",
    "Köln",
    "schön",
    "Feuer",
    "Bauer",
    "Masse",
    "Maße",
    "Straße",
    "Übermut",
]


@pytest.fixture
def transliterator() -> Transliterator:
    """Return a fresh transliterator with the default resolver."""
    return Transliterator()


@pytest.fixture
def machine() -> SpecialCharacterMachine:
    """Return a machine that restores every digraph."""
    return SpecialCharacterMachine(AlwaysResolve())


@pytest.fixture
def word_list() -> list[str]:
    return list(WORDS)


@pytest.fixture
def word_list_resolver(word_list) -> WordListResolver:
    return WordListResolver(word_list)


@pytest.fixture
def word_list_file(tmp_path: Path, word_list) -> Path:
    """Write the word list to a file, with a comment and a blank line."""
    path = tmp_path / "words.txt"
    lines = ["# German words", ""] + word_list
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path
