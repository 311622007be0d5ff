"""
Exceptions raised by german-preprocess.

Range errors are fatal to a transform call. ``AmbiguousDigraph`` is raised
by resolvers only and never escapes a transform: the machine falls back to
its configured preference instead.
"""

from __future__ import annotations

__all__ = [
    "GermanPreprocessError",
    "InvalidRange",
    "OverlappingRanges",
    "AmbiguousDigraph",
]


class GermanPreprocessError(Exception):
    """Base class for all package errors."""


class InvalidRange(GermanPreprocessError, ValueError):
    """A range is out of bounds, reversed, or splits a multi-byte character."""

    def __init__(self, start: int, end: int, reason: str) -> None:
        self.start = start
        self.end = end
        self.reason = reason
        super().__init__(f"Invalid range {start}..{end}: {reason}")


class OverlappingRanges(GermanPreprocessError, ValueError):
    """Two caller-supplied ranges overlap."""

    def __init__(self, first: tuple[int, int], second: tuple[int, int]) -> None:
        self.first = first
        self.second = second
        super().__init__(
            f"Ranges {first[0]}..{first[1]} and {second[0]}..{second[1]} overlap"
        )


class AmbiguousDigraph(GermanPreprocessError):
    """A resolver cannot decide whether a digraph encodes a native character."""

    def __init__(self, word: str, start: int, reason: str = "") -> None:
        self.word = word
        self.start = start
        message = f"Ambiguous digraph {word[start:start + 2]!r} in {word!r} at {start}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
