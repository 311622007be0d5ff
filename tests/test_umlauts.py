"""
Tests for casing classification, word segmentation and the
special-character machine.
"""

import logging

import pytest

from german_preprocess import AmbiguousDigraph
from german_preprocess.umlauts import (
    AlwaysResolve,
    Casing,
    DigraphCandidate,
    Direction,
    NeverResolve,
    Resolution,
    SpecialCharacter,
    SpecialCharacterMachine,
    Word,
    classify_casing,
    digraph_at,
    native_at,
    segment,
)


def _word(text: str) -> Word:
    return Word(text, 0, len(text))


# =============================================================================
# Casing
# =============================================================================


class TestClassifyCasing:
    @pytest.mark.parametrize("word,expected", [
        ("müller", Casing.ALL_LOWER),
        ("MÜLLER", Casing.ALL_UPPER),
        ("Müller", Casing.CAPITALIZED),
        ("McDonald", Casing.MIXED),
        ("mÜller", Casing.MIXED),
        ("GROß", Casing.ALL_UPPER),
        ("Straße", Casing.CAPITALIZED),
        ("ß", Casing.ALL_LOWER),
        ("Ä", Casing.ALL_UPPER),
        ("ä", Casing.ALL_LOWER),
    ])
    def test_classes(self, word, expected):
        assert classify_casing(word) is expected

    def test_combining_marks_are_caseless(self):
        assert classify_casing("Mu\u0308ller") is Casing.CAPITALIZED

    def test_word_carries_casing(self):
        assert _word("GROß").casing is Casing.ALL_UPPER


class TestSegment:
    def test_words_and_separators(self):
        pieces = list(segment("Grüße, Köln!"))
        assert [p.text if isinstance(p, Word) else p for p in pieces] == [
            "Grüße", ", ", "Köln", "!",
        ]

    def test_word_offsets(self):
        words = [p for p in segment("a Köln") if isinstance(p, Word)]
        assert [(w.start, w.end) for w in words] == [(0, 1), (2, 6)]

    def test_combining_mark_stays_in_word(self):
        words = [p for p in segment("Mu\u0308ller sagt") if isinstance(p, Word)]
        assert words[0].text == "Mu\u0308ller"

    def test_digits_separate_words(self):
        words = [p.text for p in segment("ab12cd") if isinstance(p, Word)]
        assert words == ["ab", "cd"]

    @pytest.mark.parametrize("text", [
        "", "   ", "Grüße aus Köln", "x_y 3.14 Straße", "https://müller.com",
    ])
    def test_reconstruction(self, text):
        pieces = segment(text)
        assert "".join(p.text if isinstance(p, Word) else p for p in pieces) == text


# =============================================================================
# Recognizers
# =============================================================================


class TestRecognizers:
    def test_native_precomposed(self):
        assert native_at("Köln", 1) == (SpecialCharacter.OE, False, 1)

    def test_native_uppercase(self):
        assert native_at("Ärger", 0) == (SpecialCharacter.AE, True, 1)

    def test_native_decomposed(self):
        assert native_at("U\u0308bel", 0) == (SpecialCharacter.UE, True, 2)

    def test_native_capital_eszett(self):
        assert native_at("ẞ", 0) == (SpecialCharacter.SS, True, 1)

    def test_not_native(self):
        assert native_at("Koln", 1) is None

    @pytest.mark.parametrize("word,idx,expected", [
        ("Mueller", 1, SpecialCharacter.UE),
        ("MUELLER", 1, SpecialCharacter.UE),
        ("Aerger", 0, SpecialCharacter.AE),
        ("schoen", 3, SpecialCharacter.OE),
        ("Strasse", 4, SpecialCharacter.SS),
        ("Mueller", 0, None),
        ("Mueller", 6, None),
    ])
    def test_digraphs(self, word, idx, expected):
        assert digraph_at(word, idx) is expected

    def test_digraph_before_combining_mark(self):
        # the "e" carries a combining diaeresis, so "ae" is not a digraph
        assert digraph_at("ae\u0308", 0) is None

    @pytest.mark.parametrize("word,idx", [
        ("Poe\u0301sie", 1),  # acute accent on the "e"
        ("ue\u0300", 0),
        ("ss\u0327", 0),
    ])
    def test_digraph_before_any_combining_mark(self, word, idx):
        assert digraph_at(word, idx) is None

    def test_combining_mark_after_digraph_letter_pair(self):
        # the mark sits on the "l", not on the "e" of "ue"
        assert digraph_at("Muel\u0301ler", 1) is SpecialCharacter.UE


# =============================================================================
# Expand
# =============================================================================


class TestExpand:
    @pytest.mark.parametrize("word,expected", [
        ("Müller", "Mueller"),
        ("Übermut", "Uebermut"),
        ("GROß", "GROSS"),
        ("Straße", "Strasse"),
        ("schön", "schoen"),
        ("ÄRGER", "AERGER"),
        ("Ärger", "Aerger"),
        ("Ä", "AE"),
        ("GROẞ", "GROSS"),
        ("Haus", "Haus"),
    ])
    def test_casing_fidelity(self, machine, word, expected):
        assert machine.run(_word(word), Direction.EXPAND)[0] == expected

    def test_mixed_uses_neighbours(self, machine):
        assert machine.run(_word("mÜLLER"), Direction.EXPAND)[0] == "mUELLER"
        assert machine.run(_word("MÜller"), Direction.EXPAND)[0] == "MUeller"

    def test_mixed_last_letter_uses_predecessor(self, machine):
        assert machine.run(_word("aBÄ"), Direction.EXPAND)[0] == "aBAE"

    def test_mixed_eszett(self, machine):
        assert machine.run(_word("maßNAHME"), Direction.EXPAND)[0] == "maSSNAHME"
        assert machine.run(_word("MAßnahme"), Direction.EXPAND)[0] == "MAssnahme"

    def test_decomposed_umlaut(self, machine):
        assert machine.run(_word("Mu\u0308ller"), Direction.EXPAND)[0] == "Mueller"

    def test_substitutions(self, machine):
        _, subs = machine.run(_word("Grüße"), Direction.EXPAND)
        assert [(s.start, s.end, s.original, s.replacement) for s in subs] == [
            (2, 3, "ü", "ue"),
            (3, 4, "ß", "ss"),
        ]
        assert [s.character for s in subs] == [SpecialCharacter.UE, SpecialCharacter.SS]

    def test_expand_ignores_resolver(self):
        machine = SpecialCharacterMachine(NeverResolve())
        assert machine.run(_word("Köln"), Direction.EXPAND)[0] == "Koeln"


# =============================================================================
# Restore
# =============================================================================


class TestRestore:
    @pytest.mark.parametrize("word,expected", [
        ("Mueller", "Müller"),
        ("MUELLER", "MÜLLER"),
        ("Uebermut", "Übermut"),
        ("Strasse", "Straße"),
        ("STRASSE", "STRAẞE"),
        ("Aerger", "Ärger"),
        ("schoen", "schön"),
        ("Haus", "Haus"),
    ])
    def test_always_resolve(self, machine, word, expected):
        assert machine.run(_word(word), Direction.RESTORE)[0] == expected

    def test_mixed_uses_replaced_letters(self, machine):
        assert machine.run(_word("mUEller"), Direction.RESTORE)[0] == "mÜller"
        assert machine.run(_word("MuELLER"), Direction.RESTORE)[0] == "MüLLER"

    def test_eszett_in_mixed_word_stays_lower(self, machine):
        assert machine.run(_word("GROSSe"), Direction.RESTORE)[0] == "GROße"

    def test_consumed_letters_not_rescanned(self, machine):
        # "aeue": ae -> ä, then ue -> ü; the shared boundary is never re-read
        assert machine.run(_word("aeue"), Direction.RESTORE)[0] == "äü"

    def test_never_resolve(self):
        machine = SpecialCharacterMachine(NeverResolve())
        assert machine.run(_word("Mueller"), Direction.RESTORE) == ("Mueller", [])

    def test_resolver_called_once_per_candidate(self):
        seen = []

        def resolver(candidate: DigraphCandidate) -> Resolution:
            seen.append((candidate.word, candidate.start, candidate.character))
            return Resolution.LITERAL

        machine = SpecialCharacterMachine(resolver)
        machine.run(_word("Muesse"), Direction.RESTORE)
        assert seen == [
            ("Muesse", 1, SpecialCharacter.UE),
            ("Muesse", 3, SpecialCharacter.SS),
        ]

    def test_candidate_text(self):
        candidate = DigraphCandidate("Mueller", 1, SpecialCharacter.UE)
        assert candidate.text == "ue"

    def test_substitutions(self, machine):
        _, subs = machine.run(_word("Gruesse"), Direction.RESTORE)
        assert [(s.start, s.end, s.original, s.replacement) for s in subs] == [
            (2, 4, "ue", "ü"),
            (4, 6, "ss", "ß"),
        ]


class TestAmbiguousFallback:
    @staticmethod
    def _ambiguous(candidate: DigraphCandidate) -> Resolution:
        raise AmbiguousDigraph(candidate.word, candidate.start, "test")

    def test_prefer_literal(self):
        machine = SpecialCharacterMachine(self._ambiguous, prefer_native=False)
        assert machine.run(_word("Mueller"), Direction.RESTORE)[0] == "Mueller"

    def test_prefer_native(self):
        machine = SpecialCharacterMachine(self._ambiguous, prefer_native=True)
        assert machine.run(_word("Mueller"), Direction.RESTORE)[0] == "Müller"

    def test_fallback_is_logged(self, caplog):
        machine = SpecialCharacterMachine(self._ambiguous)
        with caplog.at_level(logging.DEBUG, logger="german_preprocess.umlauts._machine"):
            machine.run(_word("Mueller"), Direction.RESTORE)
        assert any("falling back to literal" in r.getMessage() for r in caplog.records)


class TestDirection:
    @pytest.mark.parametrize("value,expected", [
        ("expand", Direction.EXPAND),
        ("RESTORE", Direction.RESTORE),
        (Direction.RESTORE, Direction.RESTORE),
    ])
    def test_parse(self, value, expected):
        assert Direction.parse(value) is expected

    def test_parse_unknown(self):
        with pytest.raises(ValueError, match="Unknown direction"):
            Direction.parse("sideways")

    def test_default_resolver_is_heuristic(self):
        from german_preprocess.umlauts import HeuristicResolver

        assert isinstance(SpecialCharacterMachine().resolver, HeuristicResolver)

    def test_always_resolve_repr(self):
        assert repr(AlwaysResolve()) == "AlwaysResolve()"
