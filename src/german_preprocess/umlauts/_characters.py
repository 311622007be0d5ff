"""
German special characters, word segmentation and casing classification.

Each special character has two surface encodings: the native glyph
(ä, ö, ü, ß and their uppercase forms) and the two-letter ASCII digraph
(ae, oe, ue, ss). Words are maximal runs of letters; combining marks stay
attached to the letter they follow, so a decomposed ``u`` + U+0308 is part
of the same word as its neighbours.
"""

from __future__ import annotations

import re
import unicodedata
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, Optional, Union

__all__ = [
    "SpecialCharacter",
    "Casing",
    "Word",
    "classify_casing",
    "segment",
    "native_at",
    "digraph_at",
]

COMBINING_DIAERESIS = "\u0308"

# Letters with any combining marks that follow them.
_WORD_RE = re.compile("(?:[^\\W\\d_][\u0300-\u036f]*)+")


# =============================================================================
# Special Characters
# =============================================================================


class SpecialCharacter(Enum):
    """A German special character and its surface encodings."""

    AE = ("ä", "Ä", "ae")
    OE = ("ö", "Ö", "oe")
    UE = ("ü", "Ü", "ue")
    SS = ("ß", "ẞ", "ss")

    def __init__(self, lower: str, upper: str, digraph: str) -> None:
        self.lower = lower
        self.upper = upper
        self.digraph = digraph

    def native(self, upper: bool) -> str:
        """Native glyph, uppercase if ``upper``."""
        return self.upper if upper else self.lower

    def encoded(self, first_upper: bool, second_upper: bool) -> str:
        """Digraph with each of its two letters cased individually."""
        first, second = self.digraph
        return (first.upper() if first_upper else first) + (
            second.upper() if second_upper else second
        )


_NATIVE = {}
for _char in SpecialCharacter:
    _NATIVE[_char.lower] = (_char, False)
    _NATIVE[_char.upper] = (_char, True)

_DIGRAPHS = {c.digraph: c for c in SpecialCharacter}

# Base vowels that form an umlaut with a combining diaeresis.
_DIAERESIS_BASES = {
    "a": SpecialCharacter.AE,
    "o": SpecialCharacter.OE,
    "u": SpecialCharacter.UE,
}


def native_at(word: str, idx: int) -> Optional[tuple[SpecialCharacter, bool, int]]:
    """
    Recognize a native glyph starting at ``idx``.

    Returns:
        (character, is_upper, width) or None. ``width`` is 2 for a base
        vowel followed by a combining diaeresis, else 1.
    """
    char = word[idx]
    if char in _NATIVE:
        special, upper = _NATIVE[char]
        return special, upper, 1
    if idx + 1 < len(word) and word[idx + 1] == COMBINING_DIAERESIS:
        special = _DIAERESIS_BASES.get(char.lower())
        if special is not None:
            return special, char.isupper(), 2
    return None


def digraph_at(word: str, idx: int) -> Optional[SpecialCharacter]:
    """Recognize an ASCII digraph (any casing) starting at ``idx``."""
    pair = word[idx : idx + 2]
    if len(pair) < 2 or not pair.isascii():
        return None
    # A combining mark on the second letter makes it part of another glyph.
    if idx + 2 < len(word) and unicodedata.combining(word[idx + 2]):
        return None
    return _DIGRAPHS.get(pair.lower())


# =============================================================================
# Casing
# =============================================================================


class Casing(Enum):
    """Casing class of a word."""

    ALL_LOWER = "all_lower"
    ALL_UPPER = "all_upper"
    CAPITALIZED = "capitalized"
    MIXED = "mixed"


def _is_cased(char: str) -> bool:
    # ß has no single-character uppercase form and counts as caseless.
    return char.isupper() or (char.islower() and char != "ß")


def classify_casing(word: str) -> Casing:
    """
    Assign a casing class to a word.

    Args:
        word: A word (run of letters)

    Returns:
        ALL_LOWER if no cased letter is uppercase, ALL_UPPER if every cased
        letter is, CAPITALIZED if only the first one is, MIXED otherwise.

    Example:
        >>> classify_casing("GROß")
        <Casing.ALL_UPPER: 'all_upper'>
    """
    cased = [c for c in word if _is_cased(c)]
    if all(c.islower() for c in cased):
        return Casing.ALL_LOWER
    if all(c.isupper() for c in cased):
        return Casing.ALL_UPPER
    if cased[0].isupper() and all(c.islower() for c in cased[1:]):
        return Casing.CAPITALIZED
    return Casing.MIXED


# =============================================================================
# Words
# =============================================================================


@dataclass(frozen=True)
class Word:
    """A word within a region: its text, character span and casing."""

    text: str
    start: int
    end: int
    casing: Casing = field(init=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "casing", classify_casing(self.text))


def segment(text: str) -> Iterator[Union[Word, str]]:
    """
    Split text into words and the literal separators between them.

    Concatenating the yielded words' text and separators reproduces
    ``text`` exactly.
    """
    last_end = 0
    for match in _WORD_RE.finditer(text):
        if match.start() > last_end:
            yield text[last_end : match.start()]
        yield Word(match.group(), match.start(), match.end())
        last_end = match.end()
    if last_end < len(text):
        yield text[last_end:]
