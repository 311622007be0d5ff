"""
Scoping submodule.

Splits text into ``In`` (processed) and ``Out`` (untouched) regions from
byte ranges.

Basic usage:
    >>> from german_preprocess.scoping import ROScopes
    >>> scopes = ROScopes.from_raw_ranges("abc def", [(4, 7)])
    >>> scopes.invert().render()
    'abc def'
"""

from german_preprocess.scoping._scope import (
    CowText,
    In,
    Out,
    Ownership,
    ROScopes,
    RWScopes,
    RawRange,
    Scope,
    View,
    find_ranges,
    scope_text,
)

__all__ = [
    "CowText",
    "In",
    "Out",
    "Ownership",
    "ROScopes",
    "RWScopes",
    "RawRange",
    "Scope",
    "View",
    "find_ranges",
    "scope_text",
]
