"""
spaCy integration for german-preprocess.

Provides a pipeline component that expands or restores German special
characters, leaving URL and e-mail tokens untouched.

Example:
    >>> import spacy
    >>> nlp = spacy.blank("de")
    >>> nlp.add_pipe("german_transliterator")
    >>> doc = nlp("Grüße von müller.com")
    >>> doc._.transliterated
    'Gruesse von müller.com'
"""

from typing import Optional

from spacy.language import Language
from spacy.tokens import Doc, Token

from german_preprocess._transform import Transliterator
from german_preprocess.umlauts import Direction

__all__ = [
    "GermanTransliteratorComponent",
    "create_german_transliterator",
]


@Language.factory(
    "german_transliterator",
    default_config={"direction": "expand", "exclude_urls": True},
    assigns=["doc._.transliterated", "token._.transliterated"],
)
def create_german_transliterator(
    nlp: Language,
    name: str,
    direction: str = "expand",
    exclude_urls: bool = True,
) -> "GermanTransliteratorComponent":
    """Create a German transliterator pipeline component."""
    return GermanTransliteratorComponent(
        nlp, name, direction=direction, exclude_urls=exclude_urls
    )


class GermanTransliteratorComponent:
    """
    spaCy pipeline component for umlaut/eszett transliteration.

    Extensions:
        - Doc._.transliterated: Full transliterated text.
        - Token._.transliterated: Transliterated token text.

    With ``exclude_urls``, tokens that look like URLs or e-mail addresses
    are protected and come out byte-identical.
    """

    def __init__(
        self,
        nlp: Language,
        name: str,
        *,
        direction: str = "expand",
        exclude_urls: bool = True,
    ) -> None:
        self.name = name
        self.direction = Direction.parse(direction)
        self.exclude_urls = exclude_urls
        self._transliterator = Transliterator()

        if not Doc.has_extension("transliterated"):
            Doc.set_extension("transliterated", default=None)
        if not Token.has_extension("transliterated"):
            Token.set_extension("transliterated", default=None)

    def _is_protected(self, token: Token) -> bool:
        return self.exclude_urls and (token.like_url or token.like_email)

    def _protected_ranges(self, doc: Doc) -> list[tuple[int, int]]:
        """Byte ranges of protected tokens."""
        text = doc.text
        ranges = []
        for token in doc:
            if self._is_protected(token):
                start = len(text[: token.idx].encode("utf-8"))
                ranges.append((start, start + len(token.text.encode("utf-8"))))
        return ranges

    def __call__(self, doc: Doc) -> Doc:
        doc._.transliterated = self._transliterator.transform(
            doc.text, self._protected_ranges(doc), self.direction
        )

        for token in doc:
            if self._is_protected(token):
                token._.transliterated = token.text
            else:
                token._.transliterated = self._transliterator.transform(
                    token.text, direction=self.direction
                )

        return doc

    def to_disk(self, path: str, *, exclude: tuple[str, ...] = ()) -> None:
        pass

    def from_disk(
        self, path: str, *, exclude: tuple[str, ...] = ()
    ) -> "GermanTransliteratorComponent":
        return self

    def to_bytes(self, *, exclude: tuple[str, ...] = ()) -> bytes:
        return b""

    def from_bytes(
        self, data: bytes, *, exclude: tuple[str, ...] = ()
    ) -> "GermanTransliteratorComponent":
        return self


def get_transliterator_pipe(nlp: Language) -> Optional[GermanTransliteratorComponent]:
    """Get the German transliterator component from a pipeline."""
    if "german_transliterator" in nlp.pipe_names:
        return nlp.get_pipe("german_transliterator")
    return None
