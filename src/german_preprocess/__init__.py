"""
german-preprocess: German umlaut and eszett transliteration.

Rewrites ä/ö/ü/ß to ae/oe/ue/ss (expand) or back (restore) while leaving
caller-designated byte ranges (URLs, code spans, ...) untouched.

Basic usage:
    >>> from german_preprocess import expand, restore
    >>> expand("Grüße aus Köln")
    'Gruesse aus Koeln'
    >>> restore("Mueller")
    'Müller'

Protected regions:
    >>> from german_preprocess import find_ranges, transform
    >>> text = "Visit müller.com now, Müller"
    >>> transform(text, find_ranges(text, r"\\S+\\.com"))
    'Visit müller.com now, Mueller'

Custom resolvers:
    >>> from german_preprocess import Transliterator, WordListResolver
    >>> t = Transliterator(WordListResolver(["Maße", "Masse"]), prefer_native=False)
    >>> t.transform("Masse", direction="restore")
    'Masse'
"""

from german_preprocess._errors import (
    AmbiguousDigraph,
    GermanPreprocessError,
    InvalidRange,
    OverlappingRanges,
)
from german_preprocess.scoping import ROScopes, RWScopes, find_ranges
from german_preprocess.umlauts import (
    AlwaysResolve,
    Casing,
    Direction,
    HeuristicResolver,
    NeverResolve,
    Resolution,
    SpecialCharacter,
    WordListResolver,
    classify_casing,
)
from german_preprocess._transform import (
    Change,
    TransformResult,
    Transliterator,
    expand,
    restore,
    transform,
    transform_detailed,
)

__version__ = "0.1.0"
__all__ = [
    "transform",
    "transform_detailed",
    "expand",
    "restore",
    "Transliterator",
    "TransformResult",
    "Change",
    "Direction",
    "Casing",
    "SpecialCharacter",
    "classify_casing",
    "Resolution",
    "AlwaysResolve",
    "NeverResolve",
    "HeuristicResolver",
    "WordListResolver",
    "ROScopes",
    "RWScopes",
    "find_ranges",
    "GermanPreprocessError",
    "InvalidRange",
    "OverlappingRanges",
    "AmbiguousDigraph",
]


# Lazy import for spaCy components (only when spacy is installed)
def __getattr__(name: str):
    if name == "GermanTransliteratorComponent":
        try:
            from german_preprocess.spacy import GermanTransliteratorComponent
            return GermanTransliteratorComponent
        except ImportError:
            raise ImportError(
                "spaCy integration requires spacy. "
                "Install with: pip install german-preprocess[spacy]"
            )
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
