"""
Scope model: partition text into in-scope and out-of-scope regions.

A text is encoded to UTF-8 once; every region is a ``View``, an index range
into that immutable buffer. Regions are tagged with one of two variants:

- ``In``: subject to processing
- ``Out``: view-only, copied to the output byte-for-byte

Read-only scope lists (``ROScopes``) are built from raw byte ranges and can be
inverted. Materializing them yields read-write scope lists (``RWScopes``) whose
``In`` payloads are copy-on-write strings; ``Out`` payloads stay plain views
and offer no way to be changed.

Example:
    >>> scopes = ROScopes.from_raw_ranges("Visit müller.com now", [(6, 17)])
    >>> [scope_text(s) for s in scopes]
    ['Visit ', 'müller.com', ' now']
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import Generic, Iterable, Iterator, TypeVar, Union

from german_preprocess._errors import InvalidRange, OverlappingRanges

__all__ = [
    "View",
    "In",
    "Out",
    "Scope",
    "Ownership",
    "CowText",
    "ROScopes",
    "RWScopes",
    "RawRange",
    "scope_text",
    "find_ranges",
]

logger = logging.getLogger(__name__)

T = TypeVar("T")

# A raw range is either a (start, end) pair or a ``range`` with step 1.
RawRange = Union[tuple[int, int], range]


# =============================================================================
# Views and Variants
# =============================================================================


@dataclass(frozen=True)
class View:
    """Half-open byte range ``[start, end)`` into an immutable UTF-8 buffer."""

    source: bytes
    start: int
    end: int

    @classmethod
    def of(cls, text: str) -> View:
        """View over the whole of ``text``."""
        source = text.encode("utf-8")
        return cls(source, 0, len(source))

    @property
    def text(self) -> str:
        return self.source[self.start : self.end].decode("utf-8")

    def __len__(self) -> int:
        return self.end - self.start

    def __repr__(self) -> str:
        return f"View({self.text!r}, {self.start}..{self.end})"


@dataclass(frozen=True)
class In(Generic[T]):
    """The given part is in scope for processing."""

    payload: T


@dataclass(frozen=True)
class Out:
    """The given part is out of scope: immutable, view-only."""

    view: View


Scope = Union[In[T], Out]


class Ownership(Enum):
    """Who holds the bytes of a copy-on-write payload."""

    BORROWED = "borrowed"
    OWNED = "owned"


class CowText:
    """
    Copy-on-write text.

    Shares the borrowed view until the first write that changes the text,
    then holds an owned string. The source buffer is never written to.
    """

    __slots__ = ("_view", "_owned")

    def __init__(self, view: View) -> None:
        self._view = view
        self._owned: str | None = None

    @property
    def view(self) -> View:
        return self._view

    @property
    def ownership(self) -> Ownership:
        return Ownership.BORROWED if self._owned is None else Ownership.OWNED

    @property
    def text(self) -> str:
        if self._owned is None:
            return self._view.text
        return self._owned

    def set(self, text: str) -> None:
        """Replace the text, switching to an owned buffer if it differs."""
        if self._owned is None and text == self._view.text:
            return
        self._owned = text

    def __len__(self) -> int:
        return len(self.text)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CowText):
            return NotImplemented
        return self.ownership is other.ownership and self.text == other.text

    # Mutable: edited in place after materialization.
    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"CowText({self.text!r}, {self.ownership.value})"


def scope_text(scope: Scope) -> str:
    """
    Get the underlying text of a scope.

    All variants carry text, so this works for read-only and read-write
    scopes alike.
    """
    if isinstance(scope, In):
        return scope.payload.text
    if isinstance(scope, Out):
        return scope.view.text
    raise TypeError(f"Not a scope: {scope!r}")


def _is_empty(scope: Scope) -> bool:
    if isinstance(scope, In):
        return len(scope.payload) == 0
    if isinstance(scope, Out):
        return len(scope.view) == 0
    raise TypeError(f"Not a scope: {scope!r}")


# =============================================================================
# Range Validation
# =============================================================================


def _unpack(raw: RawRange) -> tuple[int, int]:
    if isinstance(raw, range):
        if raw.step != 1:
            raise InvalidRange(raw.start, raw.stop, f"step must be 1, got {raw.step}")
        return raw.start, raw.stop
    start, end = raw
    for bound in (start, end):
        if not isinstance(bound, int) or isinstance(bound, bool):
            raise InvalidRange(
                start, end, f"bound must be an int, got {type(bound).__name__}"
            )
    return start, end


def _is_char_boundary(source: bytes, idx: int) -> bool:
    """Check that ``idx`` does not point at a UTF-8 continuation byte."""
    if idx == len(source):
        return True
    return (source[idx] & 0xC0) != 0x80


def _validate(source: bytes, start: int, end: int) -> None:
    if start < 0 or end < 0:
        raise InvalidRange(start, end, "negative bound")
    if start > end:
        raise InvalidRange(start, end, "start is past end")
    if end > len(source):
        raise InvalidRange(start, end, f"out of bounds for {len(source)} bytes")
    if not _is_char_boundary(source, start):
        raise InvalidRange(start, end, "start is not on a character boundary")
    if not _is_char_boundary(source, end):
        raise InvalidRange(start, end, "end is not on a character boundary")


# =============================================================================
# Scope Lists
# =============================================================================


class _Scopes(Generic[T]):
    """Ordered, gap-free, non-empty scopes covering a source exactly once."""

    def __init__(self, scopes: Iterable[Scope]) -> None:
        self._scopes = list(scopes)

    def __iter__(self) -> Iterator[Scope]:
        return iter(self._scopes)

    def __len__(self) -> int:
        return len(self._scopes)

    def __getitem__(self, idx: int) -> Scope:
        return self._scopes[idx]

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._scopes == other._scopes

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._scopes!r})"

    def render(self) -> str:
        """Concatenate every scope's text in order."""
        return "".join(scope_text(s) for s in self._scopes)


class ROScopes(_Scopes[View]):
    """Read-only scopes: both variants carry a ``View``."""

    @classmethod
    def from_raw_ranges(cls, text: str, ranges: Iterable[RawRange]) -> ROScopes:
        """
        Construct scopes from raw byte ranges.

        All ``ranges`` are taken as ``In`` scope, everything not covered by a
        range is ``Out`` of scope. Ranges may come in any order; ties on the
        start keep caller order.

        Args:
            text: Source text
            ranges: Half-open byte ranges over the UTF-8 encoding of ``text``

        Returns:
            Scopes in source order, with empty scopes dropped

        Raises:
            InvalidRange: A bound is out of bounds or inside a character
            OverlappingRanges: Two non-empty ranges share bytes
        """
        source = text.encode("utf-8")
        pairs = [_unpack(r) for r in ranges]
        for start, end in pairs:
            _validate(source, start, end)

        scopes: list[Scope] = []
        last_end = 0
        previous: tuple[int, int] | None = None
        for start, end in sorted(pairs, key=lambda r: r[0]):
            if start == end:
                continue
            if previous is not None and start < previous[1]:
                raise OverlappingRanges(previous, (start, end))
            scopes.append(Out(View(source, last_end, start)))
            scopes.append(In(View(source, start, end)))
            last_end = end
            previous = (start, end)

        if last_end < len(source):
            scopes.append(Out(View(source, last_end, len(source))))

        scopes = [s for s in scopes if not _is_empty(s)]
        logger.debug("Scopes: %r", scopes)
        return cls(scopes)

    @classmethod
    def whole(cls, text: str) -> ROScopes:
        """A single ``In`` scope spanning all of ``text`` (none if empty)."""
        view = View.of(text)
        return cls([In(view)] if len(view) else [])

    def invert(self) -> ROScopes:
        """What was previously ``In`` is now ``Out``, and vice versa."""
        logger.debug("Inverting scopes: %r", self._scopes)
        scopes: list[Scope] = []
        for scope in self._scopes:
            if isinstance(scope, In):
                scopes.append(Out(scope.payload))
            elif isinstance(scope, Out):
                scopes.append(In(scope.view))
            else:
                raise TypeError(f"Not a scope: {scope!r}")
        logger.debug("Inverted scopes: %r", scopes)
        return ROScopes(scopes)

    def materialize(self) -> RWScopes:
        """Convert to read-write scopes with copy-on-write ``In`` payloads."""
        scopes: list[Scope] = []
        for scope in self._scopes:
            if isinstance(scope, In):
                scopes.append(In(CowText(scope.payload)))
            elif isinstance(scope, Out):
                scopes.append(Out(scope.view))
            else:
                raise TypeError(f"Not a scope: {scope!r}")
        logger.debug("Materialized scopes: %r", scopes)
        return RWScopes(scopes)


class RWScopes(_Scopes[CowText]):
    """Read-write scopes: ``In`` carries a ``CowText``, ``Out`` a ``View``."""

    def in_scope(self) -> Iterator[CowText]:
        """Yield the editable payloads of all ``In`` scopes, in order."""
        for scope in self._scopes:
            if isinstance(scope, In):
                yield scope.payload
            elif not isinstance(scope, Out):
                raise TypeError(f"Not a scope: {scope!r}")


# =============================================================================
# Range Helpers
# =============================================================================


def find_ranges(text: str, pattern: str | re.Pattern, flags: int = 0) -> list[tuple[int, int]]:
    """
    Byte ranges of all non-empty matches of ``pattern`` in ``text``.

    Example:
        >>> find_ranges("Visit müller.com now", r"\\S+\\.com")
        [(6, 17)]
    """
    regex = re.compile(pattern, flags) if isinstance(pattern, str) else pattern
    ranges = []
    char_pos = 0
    byte_pos = 0
    for match in regex.finditer(text):
        if match.start() == match.end():
            continue
        byte_pos += len(text[char_pos : match.start()].encode("utf-8"))
        start = byte_pos
        byte_pos += len(text[match.start() : match.end()].encode("utf-8"))
        char_pos = match.end()
        ranges.append((start, byte_pos))
    return ranges
