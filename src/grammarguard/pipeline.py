"""
Check pipeline: run the engine on a text and record the result.

    >>> report = check_text("домй бьло кошкаа")
    >>> len(report.errors)
    3
    >>> store = HistoryStore("history.json")
    >>> entry = record_check(report, store, language="ru")
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from .analysis import AnalysisResult, analyze_text, shorten_text
from .config import Config, SuggestionProvider
from .correction import apply_corrections
from .detection import TextError, find_errors
from .history import HistoryEntry, HistoryStore, make_entry
from .settings import Settings

logger = logging.getLogger(__name__)


@dataclass
class CheckReport:
    """Everything the front-ends show for one text.

    ``corrected_text`` equals ``text`` unless corrections were applied.
    """

    text: str
    analysis: AnalysisResult
    errors: List[TextError] = field(default_factory=list)
    corrected_text: str = ""
    summary: str = ""
    corrections_applied: bool = False

    @property
    def has_text(self) -> bool:
        return bool(self.text.strip())


def check_text(
    text: str,
    settings: Optional[Settings] = None,
    config: Optional[Config] = None,
    suggestions: Optional[SuggestionProvider] = None,
    apply: Optional[bool] = None,
) -> CheckReport:
    """Analyze ``text`` and find its errors.

    Args:
        text: Text to check
        settings: User settings, defaults if None
        config: Configuration object, uses defaults if None. Supplies the
            detector offset mode.
        suggestions: Spelling suggestion provider for the detector
        apply: Force corrections on or off; None follows
            ``settings.auto_apply_corrections``

    Returns:
        CheckReport for the text
    """
    settings = settings or Settings()
    config = config or Config()
    if apply is None:
        apply = settings.auto_apply_corrections

    analysis = analyze_text(text)
    errors = find_errors(text, offset_mode=config.offset_mode, suggestions=suggestions)
    corrected = apply_corrections(text, errors) if apply else text

    logger.debug(
        "Checked %d words, %d errors, corrections applied: %s",
        analysis.word_count,
        len(errors),
        apply,
    )

    return CheckReport(
        text=text,
        analysis=analysis,
        errors=errors,
        corrected_text=corrected,
        summary=shorten_text(text),
        corrections_applied=apply,
    )


def record_check(
    report: CheckReport, store: HistoryStore, language: str = "en"
) -> Optional[HistoryEntry]:
    """Add ``report`` to ``store`` unless its text is blank.

    Returns:
        The new entry, or None when nothing was recorded
    """
    if not report.has_text:
        return None

    entry = make_entry(
        original_text=report.text,
        corrected_text=report.corrected_text,
        analysis=report.analysis,
        errors=report.errors,
        language=language,
    )
    store.add(entry)
    return entry
