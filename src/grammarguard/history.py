"""
History of recent checks stored in a JSON file.
"""

import json
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from .analysis import AnalysisResult
from .config import Config
from .detection import TextError
from .logging_utils import log_error

PREVIEW_LENGTH = 100


@dataclass
class HistoryEntry:
    """One recorded check.

    Attributes:
        id: Unique identifier, the creation time in milliseconds as a string.
        original_text: Text as the user entered it.
        corrected_text: Text after corrections, or the original text when
            corrections were not applied.
        analysis: Statistics for original_text.
        errors: Errors found in original_text.
        timestamp: Creation time in epoch milliseconds.
        preview: First 100 characters, with "..." appended when truncated.
        language: UI language at the time of the check.
    """

    id: str
    original_text: str
    corrected_text: str
    analysis: AnalysisResult
    errors: List[TextError] = field(default_factory=list)
    timestamp: int = 0
    preview: str = ""
    language: str = "en"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "original_text": self.original_text,
            "corrected_text": self.corrected_text,
            "analysis": self.analysis.to_dict(),
            "errors": [error.to_dict() for error in self.errors],
            "timestamp": self.timestamp,
            "preview": self.preview,
            "language": self.language,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "HistoryEntry":
        return cls(
            id=str(data["id"]),
            original_text=data["original_text"],
            corrected_text=data.get("corrected_text", data["original_text"]),
            analysis=AnalysisResult.from_dict(data.get("analysis", {})),
            errors=[TextError.from_dict(item) for item in data.get("errors", [])],
            timestamp=int(data.get("timestamp", 0)),
            preview=data.get("preview", ""),
            language=data.get("language", "en"),
        )


def make_preview(text: str) -> str:
    if len(text) > PREVIEW_LENGTH:
        return text[:PREVIEW_LENGTH] + "..."
    return text


def make_entry(
    original_text: str,
    corrected_text: str,
    analysis: AnalysisResult,
    errors: Sequence[TextError],
    language: str = "en",
    timestamp: Optional[int] = None,
) -> HistoryEntry:
    """Build a history entry stamped with the current time."""
    if timestamp is None:
        timestamp = int(time.time() * 1000)
    return HistoryEntry(
        id=str(timestamp),
        original_text=original_text,
        corrected_text=corrected_text,
        analysis=analysis,
        errors=list(errors),
        timestamp=timestamp,
        preview=make_preview(original_text),
        language=language,
    )


class HistoryStore:
    """File-backed list of recent checks, newest first.

    Every mutating call rewrites the whole file. Not safe for concurrent
    writers.
    """

    def __init__(
        self,
        path: Optional[str] = None,
        max_entries: Optional[int] = None,
        config: Optional[Config] = None,
    ):
        """Initialize the store.

        Args:
            path: JSON file location, defaults to ``config.history_file``
            max_entries: Entries kept, defaults to ``config.max_history_entries``
            config: Configuration object, uses defaults if None

        Raises:
            ValueError: If max_entries is less than 1
        """
        self.config = config or Config()
        self.path = Path(path or self.config.history_file)
        self.max_entries = max_entries or self.config.max_history_entries
        if self.max_entries < 1:
            raise ValueError("max_entries must be at least 1")

    def load(self) -> List[HistoryEntry]:
        """Read all entries.

        Returns:
            Entries newest first. Empty if the file is missing, unreadable
            or corrupt; the latter two are logged.
        """
        if not self.path.exists():
            return []

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
            return [HistoryEntry.from_dict(item) for item in data]
        except (OSError, ValueError, KeyError, TypeError) as e:
            log_error(f"Failed to load history from {self.path}", e, self.config)
            return []

    def _save(self, entries: List[HistoryEntry]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "w", encoding="utf-8") as f:
                json.dump(
                    [entry.to_dict() for entry in entries],
                    f,
                    ensure_ascii=False,
                    indent=2,
                )
        except OSError as e:
            log_error(f"Failed to save history to {self.path}", e, self.config)
            raise

    def add(self, entry: HistoryEntry) -> List[HistoryEntry]:
        """Prepend ``entry`` and drop the oldest entries beyond max_entries.

        Returns:
            The updated history
        """
        entries = [entry] + self.load()
        entries = entries[: self.max_entries]
        self._save(entries)
        return entries

    def get(self, entry_id: str) -> Optional[HistoryEntry]:
        for entry in self.load():
            if entry.id == entry_id:
                return entry
        return None

    def delete(self, entry_id: str) -> bool:
        """Remove the entry with ``entry_id``.

        Returns:
            True if an entry was removed
        """
        entries = self.load()
        remaining = [entry for entry in entries if entry.id != entry_id]
        if len(remaining) == len(entries):
            return False
        self._save(remaining)
        return True

    def clear(self) -> None:
        self._save([])
