"""
Applying and rendering corrections.

``apply_corrections`` rewrites a text by substituting the top suggestion of
every error, rightmost span first, so earlier offsets stay valid while later
spans are replaced. ``split_segments`` and ``highlight_errors`` turn a text and
its errors into display pieces for the front-ends.

Overlapping spans:
    The detector reports two errors over the same token when both checks fire.
    ``apply_corrections`` applies both in list order, the second replacing the
    output of the first, whereas ``split_segments`` renders only the first
    error of an overlapping group.
"""

import html
from typing import List, Optional, Sequence, Tuple

from .detection import TextError


def replacement_for(text: str, error: TextError) -> str:
    """Return the preferred replacement for ``error``: its first suggestion or the original span."""
    if error.suggestions:
        return error.suggestions[0]
    return text[error.start : error.end]


def apply_corrections(text: str, errors: Sequence[TextError]) -> str:
    """Substitute each error's top suggestion into ``text``.

    Args:
        text: The text the errors were detected in.
        errors: Errors with spans into ``text``. Not modified.

    Returns:
        The corrected text; ``text`` itself when there are no errors.
    """
    if not errors:
        return text

    result = text
    for error in sorted(errors, key=lambda e: e.start, reverse=True):
        replacement = replacement_for(text, error)
        result = result[: error.start] + replacement + result[error.end :]
    return result


def split_segments(
    text: str, errors: Sequence[TextError]
) -> List[Tuple[str, Optional[TextError]]]:
    """Cut ``text`` into plain and corrected pieces for display.

    Plain pieces are paired with ``None``; each error span is replaced by its
    preferred replacement and paired with the error.

    Returns:
        Ordered list of ``(segment, error)`` tuples covering the whole text.
    """
    segments: List[Tuple[str, Optional[TextError]]] = []
    last_index = 0

    for error in sorted(errors, key=lambda e: e.start):
        if error.start < last_index:
            continue
        if last_index < error.start:
            segments.append((text[last_index : error.start], None))
        segments.append((replacement_for(text, error), error))
        last_index = error.end

    if last_index < len(text):
        segments.append((text[last_index:], None))

    return segments


def highlight_errors(
    text: str, errors: Sequence[TextError], css_class: str = "error"
) -> str:
    """Render the corrected text as HTML with every error span highlighted.

    Text is HTML-escaped; each error becomes a ``<span>`` whose ``title``
    carries the error message.
    """
    parts = []
    for segment, error in split_segments(text, errors):
        escaped = html.escape(segment)
        if error is None:
            parts.append(escaped)
        else:
            parts.append(
                f'<span class="{css_class} {error.kind.value}" '
                f'title="{html.escape(error.message)}">{escaped}</span>'
            )
    return "".join(parts)
