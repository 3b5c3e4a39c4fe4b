"""Answer text normalization and tokenization."""

import re

from dictation_scorer.assessment.lexicon import CONTRACTIONS
from dictation_scorer.models.scoring import ScoringConfig

_PUNCTUATION_RE = re.compile(r"[.,!?;:'\"()\[\]{}\-]")
_WHITESPACE_RE = re.compile(r"\s+")
# Apostrophe contractions such as "don't" or "I'll".
_CONTRACTION_RE = re.compile(r"[A-Za-z]+'[A-Za-z]+")


def normalize_text(text: str, config: ScoringConfig) -> str:
    """Convert a raw answer into its comparable form.

    Args:
        text: Raw answer text.
        config: Active scoring configuration.

    Returns:
        Trimmed text, lower-cased unless case-sensitive, with punctuation
        replaced by spaces unless strict punctuation is on, and whitespace
        runs collapsed.
    """
    processed = text.strip()

    if not config.case_sensitive:
        processed = processed.lower()

    if not config.strict_punctuation:
        processed = _PUNCTUATION_RE.sub(" ", processed)

    return _WHITESPACE_RE.sub(" ", processed).strip()


def tokenize(text: str) -> list[str]:
    """Split normalized text into non-empty word tokens."""
    return [word for word in _WHITESPACE_RE.split(text) if word]


def extract_punctuation(text: str) -> list[str]:
    """Punctuation marks of ``text`` in order of appearance."""
    return _PUNCTUATION_RE.findall(text)


def _expand_match(match: re.Match[str]) -> str:
    word = match.group(0)
    expansion = CONTRACTIONS.get(word.lower())
    if expansion is None:
        return word
    if word[0].isupper():
        return expansion[0].upper() + expansion[1:]
    return expansion


def canonical_text(text: str, config: ScoringConfig) -> str:
    """Normalize ``text`` after expanding contractions in place.

    The apostrophe is still present at this point, so "I'm fine" becomes
    "I am fine" rather than "i m fine".
    """
    return normalize_text(_CONTRACTION_RE.sub(_expand_match, text), config)
