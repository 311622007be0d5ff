"""
Transform facade: scopes + casing + special-character machine.

Builds scopes from the caller's byte ranges, walks only the ``In`` regions
word by word, copies ``Out`` regions and separators verbatim and joins the
result in source order.

Example:
    >>> from german_preprocess import transform
    >>> transform("Grüße aus Köln")
    'Gruesse aus Koeln'
    >>> transform("Visit müller.com now", [(6, 17)])
    'Visit müller.com now'
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Optional, Union

from german_preprocess.scoping import CowText, In, ROScopes, RWScopes, RawRange
from german_preprocess.umlauts import (
    Direction,
    Resolver,
    SpecialCharacterMachine,
    Word,
    segment,
)

__all__ = [
    "Change",
    "TransformResult",
    "Transliterator",
    "transform",
    "transform_detailed",
    "expand",
    "restore",
]


# =============================================================================
# Data Classes
# =============================================================================


@dataclass
class Change:
    """Record of a single substitution; ``position`` is a byte offset."""

    position: int
    original: str
    replacement: str
    direction: Direction


@dataclass
class TransformResult:
    """Detailed result from a transform."""

    original: str
    transformed: str
    changes: list[Change] = field(default_factory=list)


# =============================================================================
# Main Transliterator Class
# =============================================================================


class Transliterator:
    """
    Rewrite German special characters outside protected regions.

    Args:
        resolver: Digraph resolver for the RESTORE direction
            (default: ``HeuristicResolver``)
        prefer_native: Fallback when the resolver reports an ambiguous
            digraph

    Example:
        >>> t = Transliterator()
        >>> t.transform("Müller")
        'Mueller'
        >>> t.transform("Mueller", direction="restore")
        'Müller'
    """

    def __init__(
        self,
        resolver: Optional[Resolver] = None,
        prefer_native: bool = False,
    ) -> None:
        self._machine = SpecialCharacterMachine(resolver, prefer_native=prefer_native)

    @property
    def resolver(self) -> Resolver:
        return self._machine.resolver

    def scopes(
        self,
        text: str,
        ranges: Optional[Iterable[RawRange]] = None,
        *,
        exclude: bool = True,
    ) -> RWScopes:
        """
        Build the editable scopes for ``text``.

        Without non-empty ranges the whole text is in scope. Otherwise the
        ranges are protected (``exclude=True``) or are the only processed
        parts (``exclude=False``).
        """
        scopes = ROScopes.from_raw_ranges(text, ranges if ranges is not None else [])
        if not any(isinstance(s, In) for s in scopes):
            return ROScopes.whole(text).materialize()
        if exclude:
            scopes = scopes.invert()
        return scopes.materialize()

    def transform(
        self,
        text: str,
        ranges: Optional[Iterable[RawRange]] = None,
        direction: Union[Direction, str] = Direction.EXPAND,
        *,
        exclude: bool = True,
    ) -> str:
        """
        Transform special characters in ``text``.

        Args:
            text: Input text
            ranges: Half-open byte ranges over the UTF-8 encoding of ``text``
            direction: EXPAND (ä → ae) or RESTORE (ae → ä)
            exclude: Whether ``ranges`` mark protected regions (default) or
                the only regions to process

        Returns:
            The transformed text; protected regions are byte-identical

        Raises:
            InvalidRange: A range is out of bounds or splits a character
            OverlappingRanges: Two ranges overlap
        """
        return self._run(text, ranges, Direction.parse(direction), exclude, None)

    def transform_detailed(
        self,
        text: str,
        ranges: Optional[Iterable[RawRange]] = None,
        direction: Union[Direction, str] = Direction.EXPAND,
        *,
        exclude: bool = True,
    ) -> TransformResult:
        """
        Transform with full details about each substitution.

        Example:
            >>> t = Transliterator()
            >>> result = t.transform_detailed("Köln")
            >>> result.changes[0].position, result.changes[0].replacement
            (1, 'oe')
        """
        changes: list[Change] = []
        transformed = self._run(text, ranges, Direction.parse(direction), exclude, changes)
        return TransformResult(original=text, transformed=transformed, changes=changes)

    def _run(
        self,
        text: str,
        ranges: Optional[Iterable[RawRange]],
        direction: Direction,
        exclude: bool,
        changes: Optional[list[Change]],
    ) -> str:
        scopes = self.scopes(text, ranges, exclude=exclude)
        for payload in scopes.in_scope():
            self._process_region(payload, direction, changes)
        return scopes.render()

    def _process_region(
        self,
        payload: CowText,
        direction: Direction,
        changes: Optional[list[Change]],
    ) -> None:
        region = payload.text
        parts: list[str] = []
        modified = False

        for piece in segment(region):
            if not isinstance(piece, Word):
                parts.append(piece)
                continue

            transformed, substitutions = self._machine.run(piece, direction)
            parts.append(transformed)
            if not substitutions:
                continue
            modified = True
            if changes is not None:
                for sub in substitutions:
                    offset = len(region[: piece.start + sub.start].encode("utf-8"))
                    changes.append(
                        Change(
                            position=payload.view.start + offset,
                            original=sub.original,
                            replacement=sub.replacement,
                            direction=direction,
                        )
                    )

        # Untouched regions stay borrowed.
        if modified:
            payload.set("".join(parts))


# =============================================================================
# Module-level Convenience Functions
# =============================================================================

# Singleton instance for convenience functions
_default_transliterator: Optional[Transliterator] = None


def _get_default() -> Transliterator:
    global _default_transliterator
    if _default_transliterator is None:
        _default_transliterator = Transliterator()
    return _default_transliterator


def transform(
    text: str,
    ranges: Optional[Iterable[RawRange]] = None,
    direction: Union[Direction, str] = Direction.EXPAND,
    *,
    exclude: bool = True,
) -> str:
    """
    Transform special characters using a shared default transliterator.

    See ``Transliterator.transform``.
    """
    return _get_default().transform(text, ranges, direction, exclude=exclude)


def transform_detailed(
    text: str,
    ranges: Optional[Iterable[RawRange]] = None,
    direction: Union[Direction, str] = Direction.EXPAND,
    *,
    exclude: bool = True,
) -> TransformResult:
    """See ``Transliterator.transform_detailed``."""
    return _get_default().transform_detailed(text, ranges, direction, exclude=exclude)


def expand(text: str, ranges: Optional[Iterable[RawRange]] = None) -> str:
    """
    Replace native umlauts and eszett with ASCII digraphs.

    Example:
        >>> expand("Müller")
        'Mueller'
    """
    return transform(text, ranges, Direction.EXPAND)


def restore(text: str, ranges: Optional[Iterable[RawRange]] = None) -> str:
    """
    Replace ASCII digraphs with native umlauts where the default resolver
    accepts them.

    Example:
        >>> restore("Mueller")
        'Müller'
    """
    return transform(text, ranges, Direction.RESTORE)
