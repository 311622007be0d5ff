"""Tests for the spaCy pipeline component."""

import pytest
import spacy

import german_preprocess.spacy  # noqa: F401  registers the factory


@pytest.fixture(autouse=True)
def _clean_extensions():
    """Remove custom extensions between tests to avoid conflicts."""
    from spacy.tokens import Doc, Token

    yield

    if Doc.has_extension("transliterated"):
        Doc.remove_extension("transliterated")
    if Token.has_extension("transliterated"):
        Token.remove_extension("transliterated")


class TestGermanTransliterator:
    def test_factory_registered(self):
        nlp = spacy.blank("de")
        nlp.add_pipe("german_transliterator")
        assert "german_transliterator" in nlp.pipe_names

    def test_doc_expansion(self):
        nlp = spacy.blank("de")
        nlp.add_pipe("german_transliterator")
        doc = nlp("Grüße aus Köln")
        assert doc._.transliterated == "Gruesse aus Koeln"

    def test_token_expansion(self):
        nlp = spacy.blank("de")
        nlp.add_pipe("german_transliterator")
        doc = nlp("Grüße aus Köln")
        assert [t._.transliterated for t in doc] == ["Gruesse", "aus", "Koeln"]

    def test_restore(self):
        nlp = spacy.blank("de")
        nlp.add_pipe("german_transliterator", config={"direction": "restore"})
        doc = nlp("Mueller")
        assert doc._.transliterated == "Müller"
        assert doc[0]._.transliterated == "Müller"

    def test_urls_protected(self):
        nlp = spacy.blank("de")
        nlp.add_pipe("german_transliterator")
        doc = nlp("Grüße von müller.com")
        assert doc._.transliterated == "Gruesse von müller.com"
        assert doc[-1]._.transliterated == "müller.com"

    def test_urls_not_protected(self):
        nlp = spacy.blank("de")
        nlp.add_pipe("german_transliterator", config={"exclude_urls": False})
        doc = nlp("Grüße von müller.com")
        assert doc._.transliterated == "Gruesse von mueller.com"

    def test_invalid_direction(self):
        nlp = spacy.blank("de")
        with pytest.raises(ValueError, match="Unknown direction"):
            nlp.add_pipe("german_transliterator", config={"direction": "sideways"})

    def test_get_pipe_helper(self):
        from german_preprocess.spacy import get_transliterator_pipe

        nlp = spacy.blank("de")
        assert get_transliterator_pipe(nlp) is None
        nlp.add_pipe("german_transliterator")
        assert get_transliterator_pipe(nlp) is not None

    def test_serialization_roundtrip(self):
        nlp = spacy.blank("de")
        nlp.add_pipe("german_transliterator")
        pipe = nlp.get_pipe("german_transliterator")
        data = pipe.to_bytes()
        pipe.from_bytes(data)

    def test_lazy_attribute(self):
        import german_preprocess
        from german_preprocess.spacy import GermanTransliteratorComponent

        assert german_preprocess.GermanTransliteratorComponent is GermanTransliteratorComponent
