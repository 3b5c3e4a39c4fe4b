"""Tests for normalization, tokenization and lookup tables."""

import pytest

from dictation_scorer.assessment.lexicon import (
    COMMON_MISSPELLINGS,
    CONTRACTIONS,
    expand_contraction,
    is_known_misspelling,
)
from dictation_scorer.assessment.text import (
    canonical_text,
    extract_punctuation,
    normalize_text,
    tokenize,
)
from dictation_scorer.models.scoring import ScoringConfig

DEFAULT = ScoringConfig()
STRICT = ScoringConfig(strict_punctuation=True)
CASED = ScoringConfig(case_sensitive=True)


class TestNormalizeText:
    def test_empty(self):
        assert normalize_text("", DEFAULT) == ""

    def test_whitespace_only(self):
        assert normalize_text("   \t\n ", DEFAULT) == ""

    def test_lowercases_and_strips_punctuation(self):
        assert normalize_text("  Hello, World!  ", DEFAULT) == "hello world"

    def test_punctuation_becomes_space(self):
        assert normalize_text("well-known (really)", DEFAULT) == "well known really"
        assert normalize_text("I'm", DEFAULT) == "i m"

    def test_collapses_whitespace(self):
        assert normalize_text("a   b\t\tc", DEFAULT) == "a b c"

    def test_case_sensitive_keeps_case(self):
        assert normalize_text("Hello World", CASED) == "Hello World"

    def test_strict_punctuation_keeps_marks(self):
        assert normalize_text("Hello,  world!", STRICT) == "hello, world!"

    def test_only_punctuation(self):
        assert normalize_text("...!?", DEFAULT) == ""


class TestTokenize:
    def test_empty(self):
        assert tokenize("") == []

    def test_split(self):
        assert tokenize("the quick fox") == ["the", "quick", "fox"]


class TestExtractPunctuation:
    def test_marks_in_order(self):
        assert extract_punctuation('Hi, "Bob" - ok?') == [",", '"', '"', "-", "?"]

    def test_none(self):
        assert extract_punctuation("no marks here") == []


class TestCanonicalText:
    def test_expands_contraction_before_stripping(self):
        assert canonical_text("I'm fine.", DEFAULT) == "i am fine"

    def test_keeps_capital_when_case_sensitive(self):
        assert canonical_text("Don't go", CASED) == "Do not go"

    def test_unknown_apostrophe_word_untouched(self):
        assert canonical_text("the dog's bone", DEFAULT) == "the dog s bone"


class TestLexicon:
    def test_expand_known(self):
        assert expand_contraction("don't") == "do not"
        assert expand_contraction("DON'T") == "do not"

    def test_expand_unknown_keeps_case(self):
        assert expand_contraction("Hello") == "Hello"

    def test_tables_are_read_only(self):
        with pytest.raises(TypeError):
            CONTRACTIONS["y'all"] = "you all"  # type: ignore[index]
        assert "y'all" not in CONTRACTIONS
        assert COMMON_MISSPELLINGS["recieve"] == "receive"

    def test_known_misspelling(self):
        assert is_known_misspelling("recieve", "receive")
        assert is_known_misspelling("Seperate", "separate")
        assert not is_known_misspelling("recieve", "relieve")
        assert not is_known_misspelling("receive", "receive")
