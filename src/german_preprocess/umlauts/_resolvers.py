"""
Digraph resolvers.

Restoring ``ae``/``oe``/``ue``/``ss`` to native glyphs is ambiguous: plenty
of German words carry these letter pairs without meaning an umlaut (Feuer,
Bauer, Quelle, Wasser). The machine asks a resolver once per candidate
digraph; a resolver answers ``Resolution.NATIVE`` or ``Resolution.LITERAL``,
or raises ``AmbiguousDigraph`` to let the machine apply its fallback.

Any callable taking a ``DigraphCandidate`` and returning a ``Resolution``
can serve as a resolver.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Callable, Iterable

from german_preprocess._errors import AmbiguousDigraph
from german_preprocess.umlauts._characters import SpecialCharacter, native_at

__all__ = [
    "DigraphCandidate",
    "Resolution",
    "Resolver",
    "AlwaysResolve",
    "NeverResolve",
    "HeuristicResolver",
    "WordListResolver",
]


@dataclass(frozen=True)
class DigraphCandidate:
    """A digraph at ``start`` in ``word`` that may encode ``character``."""

    word: str
    start: int
    character: SpecialCharacter

    @property
    def text(self) -> str:
        return self.word[self.start : self.start + 2]


class Resolution(Enum):
    NATIVE = "native"
    LITERAL = "literal"


Resolver = Callable[[DigraphCandidate], Resolution]


class AlwaysResolve:
    """Treat every digraph as an encoded native character."""

    def __call__(self, candidate: DigraphCandidate) -> Resolution:
        return Resolution.NATIVE

    def __repr__(self) -> str:
        return "AlwaysResolve()"


class NeverResolve:
    """Leave every digraph literal."""

    def __call__(self, candidate: DigraphCandidate) -> Resolution:
        return Resolution.LITERAL

    def __repr__(self) -> str:
        return "NeverResolve()"


# Letters after which ae/oe/ue is part of a diphthong or of "qu".
_BLOCKING_PREDECESSORS = frozenset("aeiouäöüyq")


class HeuristicResolver:
    """
    Rule-based resolver, the default.

    Rules, first match wins:

    1. ``ss`` stays literal: ss and ß differ by the length of the preceding
       vowel, which spelling alone does not reveal.
    2. After a vowel or ``q`` the digraph stays literal: the ``e``/``u`` is
       part of a diphthong (Bauer, Feuer, neue) or of ``qu`` (Quelle).
    3. Everything else is restored.
    """

    def __call__(self, candidate: DigraphCandidate) -> Resolution:
        if candidate.character is SpecialCharacter.SS:
            return Resolution.LITERAL
        if candidate.start > 0:
            prev = candidate.word[candidate.start - 1]
            if prev.lower() in _BLOCKING_PREDECESSORS:
                return Resolution.LITERAL
        return Resolution.NATIVE

    def __repr__(self) -> str:
        return "HeuristicResolver()"


def _expand_with_marks(word: str) -> tuple[str, list[int], frozenset[int]]:
    """
    Lowercase a word and expand its native glyphs into digraphs.

    Returns:
        (expanded, offsets, native_starts): ``offsets[i]`` is the position in
        ``expanded`` of ``word[i]``; ``native_starts`` holds the positions in
        ``expanded`` where a digraph came from a native glyph.
    """
    parts: list[str] = []
    offsets: list[int] = []
    native_starts: set[int] = set()
    pos = 0
    idx = 0
    while idx < len(word):
        found = native_at(word, idx)
        if found is None:
            lower = word[idx].lower()
            offsets.append(pos)
            parts.append(lower)
            pos += len(lower)
            idx += 1
            continue
        special, _, width = found
        offsets.extend([pos] * width)
        native_starts.add(pos)
        parts.append(special.digraph)
        pos += 2
        idx += width
    return "".join(parts), offsets, frozenset(native_starts)


class WordListResolver:
    """
    Lexicon-backed resolver.

    Every known word is indexed by its fully expanded, lowercased form. A
    candidate is looked up by the expanded form of its word; the known
    spellings then tell whether the digraph at that position was a native
    glyph.

    Args:
        words: Known German words in native spelling (Müller, Straße, ...)
        prefer_original: When known spellings disagree (Masse vs Maße), keep
            the digraph literal instead of raising ``AmbiguousDigraph``.

    Example:
        >>> resolver = WordListResolver(["Müller", "Feuer"])
        >>> resolver(DigraphCandidate("Mueller", 1, SpecialCharacter.UE))
        <Resolution.NATIVE: 'native'>
    """

    def __init__(self, words: Iterable[str], prefer_original: bool = False) -> None:
        self.prefer_original = prefer_original
        self._index: dict[str, set[frozenset[int]]] = {}
        for word in words:
            expanded, _, native_starts = _expand_with_marks(word)
            self._index.setdefault(expanded, set()).add(native_starts)

    @classmethod
    def from_file(cls, path: str | Path, prefer_original: bool = False) -> WordListResolver:
        """Load one word per line; blank lines and ``#`` comments are skipped."""
        with open(path, "r", encoding="utf-8") as f:
            words = [
                line.strip()
                for line in f
                if line.strip() and not line.lstrip().startswith("#")
            ]
        return cls(words, prefer_original=prefer_original)

    def __len__(self) -> int:
        return len(self._index)

    def __call__(self, candidate: DigraphCandidate) -> Resolution:
        expanded, offsets, _ = _expand_with_marks(candidate.word)
        spellings = self._index.get(expanded)
        if not spellings:
            raise AmbiguousDigraph(candidate.word, candidate.start, "unknown word")

        position = offsets[candidate.start]
        verdicts = {position in native_starts for native_starts in spellings}
        if len(verdicts) > 1:
            if self.prefer_original:
                return Resolution.LITERAL
            raise AmbiguousDigraph(
                candidate.word, candidate.start, "known with and without native glyph"
            )
        return Resolution.NATIVE if verdicts.pop() else Resolution.LITERAL

    def __repr__(self) -> str:
        return f"WordListResolver({len(self._index)} forms, prefer_original={self.prefer_original})"
