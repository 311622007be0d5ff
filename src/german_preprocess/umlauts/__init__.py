"""
Umlaut and eszett submodule.

Casing classification, the special-character machine and the digraph
resolvers it consults when restoring native glyphs.

Basic usage:
    >>> from german_preprocess.umlauts import classify_casing, Casing
    >>> classify_casing("Müller") is Casing.CAPITALIZED
    True
"""

from german_preprocess.umlauts._characters import (
    Casing,
    SpecialCharacter,
    Word,
    classify_casing,
    digraph_at,
    native_at,
    segment,
)
from german_preprocess.umlauts._machine import (
    Direction,
    SpecialCharacterMachine,
    Substitution,
)
from german_preprocess.umlauts._resolvers import (
    AlwaysResolve,
    DigraphCandidate,
    HeuristicResolver,
    NeverResolve,
    Resolution,
    Resolver,
    WordListResolver,
)

__all__ = [
    "Casing",
    "SpecialCharacter",
    "Word",
    "classify_casing",
    "digraph_at",
    "native_at",
    "segment",
    "Direction",
    "SpecialCharacterMachine",
    "Substitution",
    "AlwaysResolve",
    "DigraphCandidate",
    "HeuristicResolver",
    "NeverResolve",
    "Resolution",
    "Resolver",
    "WordListResolver",
]
