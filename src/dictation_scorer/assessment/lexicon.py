"""Read-only English lookup tables used when comparing words."""

from types import MappingProxyType

# Contracted form -> expansion. Keys are lower case.
CONTRACTIONS: MappingProxyType[str, str] = MappingProxyType({
    "don't": "do not",
    "won't": "will not",
    "can't": "cannot",
    "isn't": "is not",
    "aren't": "are not",
    "wasn't": "was not",
    "weren't": "were not",
    "haven't": "have not",
    "hasn't": "has not",
    "hadn't": "had not",
    "shouldn't": "should not",
    "wouldn't": "would not",
    "couldn't": "could not",
    "mustn't": "must not",
    "needn't": "need not",
    "i'm": "i am",
    "you're": "you are",
    "he's": "he is",
    "she's": "she is",
    "it's": "it is",
    "we're": "we are",
    "they're": "they are",
    "i've": "i have",
    "you've": "you have",
    "we've": "we have",
    "they've": "they have",
    "i'll": "i will",
    "you'll": "you will",
    "he'll": "he will",
    "she'll": "she will",
    "it'll": "it will",
    "we'll": "we will",
    "they'll": "they will",
})

# Frequent learner misspelling -> intended word.
COMMON_MISSPELLINGS: MappingProxyType[str, str] = MappingProxyType({
    "recieve": "receive",
    "seperate": "separate",
    "definately": "definitely",
    "occassion": "occasion",
    "accomodate": "accommodate",
    "occured": "occurred",
    "begining": "beginning",
    "sucessful": "successful",
})


def expand_contraction(word: str) -> str:
    """Return the expansion of a contracted word, or the word unchanged.

    Lookup is case-insensitive; a word that is not a known contraction keeps
    its original case.
    """
    return CONTRACTIONS.get(word.lower(), word)


def is_known_misspelling(user_word: str, correct_word: str) -> bool:
    """True when ``user_word`` is a listed misspelling of ``correct_word``."""
    intended = COMMON_MISSPELLINGS.get(user_word.lower())
    return intended is not None and intended == correct_word.lower()
