"""
Special-character machine.

A single left-to-right pass over one word. In the ``EXPAND`` direction native
glyphs are replaced by their digraphs unconditionally; in the ``RESTORE``
direction every candidate digraph goes through a resolver.

Casing follows the word's casing class:

    >>> from german_preprocess.umlauts import Word
    >>> machine = SpecialCharacterMachine()
    >>> machine.run(Word("Übermut", 0, 7), Direction.EXPAND)[0]
    'Uebermut'
    >>> machine.run(Word("GROß", 0, 4), Direction.EXPAND)[0]
    'GROSS'
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from german_preprocess._errors import AmbiguousDigraph
from german_preprocess.umlauts._characters import (
    Casing,
    SpecialCharacter,
    Word,
    digraph_at,
    native_at,
)
from german_preprocess.umlauts._resolvers import (
    DigraphCandidate,
    HeuristicResolver,
    Resolution,
    Resolver,
)

__all__ = ["Direction", "Substitution", "SpecialCharacterMachine"]

logger = logging.getLogger(__name__)


class Direction(Enum):
    """Which way to transform special characters."""

    EXPAND = "expand"  # native -> digraph
    RESTORE = "restore"  # digraph -> native

    @classmethod
    def parse(cls, value: Union[Direction, str]) -> Direction:
        """Accept a member or its value string."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            raise ValueError(
                f"Unknown direction: {value!r}. Use 'expand' or 'restore'."
            ) from None


@dataclass(frozen=True)
class Substitution:
    """Record of one replacement within a word (character offsets)."""

    start: int
    end: int
    original: str
    replacement: str
    character: SpecialCharacter


def _cased_neighbour(text: str, idx: int, step: int) -> Optional[str]:
    """Nearest letter with case from ``idx`` in direction ``step``."""
    while 0 <= idx < len(text):
        char = text[idx]
        if char.isupper() or (char.islower() and char != "ß"):
            return char
        idx += step
    return None


def _neighbours_upper(text: str, start: int, end: int) -> bool:
    """Whether the letters around ``text[start:end]`` are uppercase."""
    following = _cased_neighbour(text, end, 1)
    if following is not None:
        return following.isupper()
    preceding = _cased_neighbour(text, start - 1, -1)
    return preceding is not None and preceding.isupper()


class SpecialCharacterMachine:
    """
    Recognize and rewrite German special characters within one word.

    Args:
        resolver: Decides whether a digraph encodes a native character
            when restoring. Defaults to ``HeuristicResolver``.
        prefer_native: Fallback when the resolver raises
            ``AmbiguousDigraph``: restore (True) or keep literal (False).
    """

    def __init__(
        self,
        resolver: Optional[Resolver] = None,
        prefer_native: bool = False,
    ) -> None:
        self.resolver = resolver if resolver is not None else HeuristicResolver()
        self.prefer_native = prefer_native

    def run(
        self, word: Word, direction: Direction
    ) -> tuple[str, list[Substitution]]:
        """
        Transform a word.

        Args:
            word: The word, with its casing class
            direction: EXPAND or RESTORE

        Returns:
            (transformed_text, substitutions)
        """
        if direction is Direction.EXPAND:
            return self._expand(word)
        if direction is Direction.RESTORE:
            return self._restore(word)
        raise ValueError(f"Unknown direction: {direction!r}")

    # -------------------------------------------------------------------------
    # native -> digraph
    # -------------------------------------------------------------------------

    def _expand(self, word: Word) -> tuple[str, list[Substitution]]:
        text = word.text
        parts: list[str] = []
        substitutions: list[Substitution] = []
        idx = 0
        while idx < len(text):
            found = native_at(text, idx)
            if found is None:
                parts.append(text[idx])
                idx += 1
                continue

            special, upper, width = found
            replacement = self._encode(special, upper, word, idx, idx + width)
            parts.append(replacement)
            substitutions.append(
                Substitution(idx, idx + width, text[idx : idx + width], replacement, special)
            )
            idx += width

        return "".join(parts), substitutions

    def _encode(
        self, special: SpecialCharacter, upper: bool, word: Word, start: int, end: int
    ) -> str:
        casing = word.casing
        if casing is Casing.ALL_UPPER:
            return special.encoded(True, True)
        if casing is Casing.MIXED and (upper or special is SpecialCharacter.SS):
            rest_upper = _neighbours_upper(word.text, start, end)
            return special.encoded(upper or rest_upper, rest_upper)
        # ALL_LOWER, CAPITALIZED: only the first produced letter keeps the case
        return special.encoded(upper, False)

    # -------------------------------------------------------------------------
    # digraph -> native
    # -------------------------------------------------------------------------

    def _restore(self, word: Word) -> tuple[str, list[Substitution]]:
        text = word.text
        parts: list[str] = []
        substitutions: list[Substitution] = []
        idx = 0
        while idx < len(text):
            special = digraph_at(text, idx)
            if special is None or not self._resolve(DigraphCandidate(text, idx, special)):
                parts.append(text[idx])
                idx += 1
                continue

            replacement = self._decode(special, word, idx)
            parts.append(replacement)
            substitutions.append(
                Substitution(idx, idx + 2, text[idx : idx + 2], replacement, special)
            )
            idx += 2

        return "".join(parts), substitutions

    def _resolve(self, candidate: DigraphCandidate) -> bool:
        try:
            return self.resolver(candidate) is Resolution.NATIVE
        except AmbiguousDigraph as exc:
            logger.debug(
                "%s; falling back to %s",
                exc,
                "native" if self.prefer_native else "literal",
            )
            return self.prefer_native

    def _decode(self, special: SpecialCharacter, word: Word, idx: int) -> str:
        upper = word.text[idx].isupper()
        if special is SpecialCharacter.SS:
            upper = upper and word.casing is Casing.ALL_UPPER
        return special.native(upper)
