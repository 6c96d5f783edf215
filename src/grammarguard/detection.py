"""
Rule-based spelling and punctuation error detection.

The detector walks the whitespace-delimited tokens of a text and runs two
independent checks on each:

    1. **Spelling**: the lower-cased token is a known misspelling from
       ``vocabulary.MISSPELLINGS``.
    2. **Punctuation**: the token contains a character repeated three or more
       times in a row; the suggestion collapses each run to two characters.

A token can therefore produce zero, one or two ``TextError`` records, both
anchored at the same span, spelling first.

Offsets:
    ``exact`` spans come from the real start index of each token, so
    ``text[error.start:error.end]`` is the token. ``approximate`` spans
    reproduce the legacy arithmetic (word length plus one per token) and drift
    as soon as the text contains anything other than single spaces.

Usage Examples:
    >>> errors = find_errors("привет вечерррм")
    >>> [(e.kind.value, e.start, e.end) for e in errors]
    [('spelling', 7, 15), ('punctuation', 7, 15)]
    >>> errors[1].suggestions
    ('вечеррм',)

Thread Safety:
    find_errors has no side effects; the vocabulary is immutable.
"""

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterator, List, Optional, Tuple

from .config import SuggestionProvider
from .vocabulary import collapse_repeats, has_repeated_characters, is_known_misspelling

SPELLING_MESSAGE = "Incorrect spelling: possible typo"
REPETITION_MESSAGE = "Possible punctuation error: repeated characters"

_TOKEN = re.compile(r"\S+")
_WHITESPACE = re.compile(r"\s+")


class ErrorKind(str, Enum):
    """Category of a detected problem."""

    SPELLING = "spelling"
    GRAMMAR = "grammar"
    STYLE = "style"
    PUNCTUATION = "punctuation"
    OTHER = "other"


@dataclass(frozen=True)
class TextError:
    """A detected issue covering the half-open span ``[start, end)``.

    Attributes:
        start: Offset of the first character of the span.
        end: Offset one past the last character of the span.
        kind: Error category.
        message: Human-readable description.
        suggestions: Replacement candidates, best first. May be empty.
        context: Optional surrounding text for display.
    """

    start: int
    end: int
    kind: ErrorKind
    message: str
    suggestions: Tuple[str, ...] = field(default_factory=tuple)
    context: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "start": self.start,
            "end": self.end,
            "kind": self.kind.value,
            "message": self.message,
            "suggestions": list(self.suggestions),
        }
        if self.context is not None:
            data["context"] = self.context
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TextError":
        return cls(
            start=int(data["start"]),
            end=int(data["end"]),
            kind=ErrorKind(data["kind"]),
            message=data["message"],
            suggestions=tuple(data.get("suggestions", ())),
            context=data.get("context"),
        )


class EchoSuggestions:
    """Suggestion provider that proposes the word itself.

    No correction dictionary exists for the vocabulary, so spelling errors
    carry the original token as their only suggestion. Applying such a
    correction leaves the text unchanged.
    """

    def suggest(self, word: str) -> List[str]:
        return [word]


DEFAULT_SUGGESTIONS = EchoSuggestions()


def iter_tokens(text: str, offset_mode: str = "exact") -> Iterator[Tuple[str, int]]:
    """Yield ``(token, start)`` pairs for the whitespace-delimited tokens of ``text``.

    Args:
        text: Input text.
        offset_mode: "exact" for true offsets, "approximate" for the legacy
            running position that advances by ``len(token) + 1``.

    Raises:
        ValueError: If offset_mode is not recognised.
    """
    if offset_mode == "exact":
        for match in _TOKEN.finditer(text):
            yield match.group(), match.start()
    elif offset_mode == "approximate":
        position = 0
        for token in _WHITESPACE.split(text):
            # Leading/trailing whitespace produces empty tokens that still advance
            if token:
                yield token, position
            position += len(token) + 1
    else:
        raise ValueError(f"Unknown offset_mode: {offset_mode}")


def check_word(
    word: str,
    start: int,
    suggestions: Optional[SuggestionProvider] = None,
) -> List[TextError]:
    """Run both checks on a single token positioned at ``start``."""
    provider = suggestions or DEFAULT_SUGGESTIONS
    end = start + len(word)
    errors: List[TextError] = []

    if is_known_misspelling(word):
        errors.append(
            TextError(
                start=start,
                end=end,
                kind=ErrorKind.SPELLING,
                message=SPELLING_MESSAGE,
                suggestions=tuple(provider.suggest(word)),
            )
        )

    if has_repeated_characters(word):
        errors.append(
            TextError(
                start=start,
                end=end,
                kind=ErrorKind.PUNCTUATION,
                message=REPETITION_MESSAGE,
                suggestions=(collapse_repeats(word),),
            )
        )

    return errors


def find_errors(
    text: str,
    offset_mode: str = "exact",
    suggestions: Optional[SuggestionProvider] = None,
) -> List[TextError]:
    """Detect spelling and repeated-character errors in ``text``.

    Args:
        text: Input text. Blank text yields no errors.
        offset_mode: "exact" (default) or "approximate"; see module docs.
        suggestions: Provider of spelling candidates, defaults to
            EchoSuggestions.

    Returns:
        Errors in token order; for one token, spelling precedes punctuation.

    Raises:
        ValueError: If offset_mode is not recognised.
    """
    errors: List[TextError] = []
    for word, start in iter_tokens(text, offset_mode):
        errors.extend(check_word(word, start, suggestions))
    return errors
