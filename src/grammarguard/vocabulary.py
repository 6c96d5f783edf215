"""Static detection vocabulary and character-repetition patterns.

This module holds the read-only data the error detector matches words against.
Everything here is built once at import time and never mutated afterwards, so
it can be shared freely between concurrent callers.

Pattern Organization:
    - MISSPELLINGS: Known misspelled word forms, stored lower case and matched
      case-insensitively against whole whitespace-delimited tokens
    - REPEATED_CHARACTERS: Any character immediately repeated three or more
      times, e.g. ``wooow`` or ``!!!``

Usage:
    >>> from grammarguard.vocabulary import is_known_misspelling, collapse_repeats
    >>> is_known_misspelling("Домй")
    True
    >>> collapse_repeats("вечерррм")
    'вечеррм'

Note:
    Matching is exact: a token with punctuation attached (``домй,``) is not
    found in the vocabulary.
"""

import re
from typing import Dict

# ============================================================================
# MISSPELLING VOCABULARY
# ============================================================================

MISSPELLINGS = frozenset(
    {
        "вечерррм",
        "домй",
        "вдргг",
        "ттень",
        "спросла",
        "бьло",
        "птшла",
        "бысрее",
        "ногг",
        "споткнлась",
        "кррень",
        "кошкаа",
        "засмеялсь",
        "серце",
        "стукло",
        "вдрууг",
        "тмны",
        "старичк",
        "фонарм",
        "бйсь",
        "футбоо",
        "дворц",
        "полетнл",
        "подуумал",
        "назд",
        "выбежла",
        "мячм",
        "вздхнул",
        "угрдел",
        "тепеерь",
        "грязныйыы",
        "кррррч",
        "экрне",
        "птгас",
        "пробрррбррмутал",
        "клавыатуру",
        "млькнул",
        "привт",
        "пркхожу",
        "раздлся",
        "колонк",
        "вырррвал",
        "сдааам",
    }
)

# ============================================================================
# REPETITION PATTERNS
# ============================================================================

# Any character followed by at least two copies of itself
REPEATED_CHARACTERS = re.compile(r"(.)\1{2,}")


def is_known_misspelling(word: str) -> bool:
    """Check a single token against the misspelling vocabulary.

    Args:
        word: A whitespace-delimited token, compared case-insensitively.

    Returns:
        True if the lower-cased token is in MISSPELLINGS.
    """
    return word.lower() in MISSPELLINGS


def has_repeated_characters(word: str) -> bool:
    """Return True if any character in ``word`` repeats three or more times in a row."""
    return REPEATED_CHARACTERS.search(word) is not None


def collapse_repeats(word: str) -> str:
    """Shorten every run of three or more identical characters to exactly two.

    Examples:
        >>> collapse_repeats("wooow")
        'woow'
        >>> collapse_repeats("кррррч")
        'кррч'
    """
    return REPEATED_CHARACTERS.sub(r"\1\1", word)


def get_vocabulary_statistics() -> Dict[str, int]:
    """Summarize the detection data.

    Returns:
        Dict[str, int]: Statistics dictionary containing:
            - 'misspellings': Number of known misspelled forms
            - 'self_repeating': Vocabulary entries that also trip the
              repeated-character check
    """
    return {
        "misspellings": len(MISSPELLINGS),
        "self_repeating": sum(
            1 for word in MISSPELLINGS if has_repeated_characters(word)
        ),
    }
