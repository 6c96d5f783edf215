"""
Configuration management and extension protocols.

This module provides configuration management for GrammarGuard, including
settings for logging, on-disk storage of history and user settings, file
ingestion, and the error detector.

Key Components:
    - SuggestionProvider: Protocol for plugging in correction candidates
    - Config: Main configuration class with all application settings

Offset Modes:
    The error detector reports each problem as a half-open character span.

    1. **exact** (default): spans are taken from the real position of every
       word in the input, so ``text[error.start:error.end]`` is always the word.
    2. **approximate**: the legacy behaviour, where the position advances by
       the word length plus one. Correct only for single-spaced text.

Examples:
    Store data in a project directory and keep more history:
    >>> config = Config(
    ...     history_file="data/history.json",
    ...     settings_file="data/settings.json",
    ...     max_history_entries=25,
    ... )

    Reproduce the legacy span arithmetic:
    >>> config = Config(offset_mode="approximate")
"""

import os
from abc import abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import List, Protocol

# Default directory for log, history and settings files
DATA_HOME = os.getenv(
    "GRAMMARGUARD_HOME", str(Path.home() / ".grammarguard")
)

OFFSET_MODES = {"exact", "approximate"}
LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class SuggestionProvider(Protocol):
    """Protocol for correction backends used by the error detector."""

    @abstractmethod
    def suggest(self, word: str) -> List[str]:
        """Return replacement candidates for a misspelled word.

        Args:
            word: The word as it appears in the text

        Returns:
            Candidates ordered by preference, best first. May be empty.
        """
        pass


@dataclass
class Config:
    """Configuration settings for GrammarGuard.

    Attributes:
        log_file: Path to the error log file.
        max_log_size: Maximum log file size in bytes (default: 10MB).
        log_backup_count: Number of backup log files to keep (default: 3).
        log_level: Logging level name (default: "ERROR").
        history_file: JSON file holding recent checks.
        settings_file: JSON file holding user settings.
        max_history_entries: Number of history entries kept (default: 10).
        max_upload_size: Largest accepted upload in bytes (default: 10MB).
        fix_encoding: Repair mojibake in extracted text with ftfy (default: True).
        offset_mode: "exact" or "approximate" error spans (default: "exact").

    Examples:
        >>> config = Config()
        >>> config.max_history_entries
        10
    """

    # Logging configuration
    log_file: str = os.path.join(DATA_HOME, "grammarguard_error.log")
    max_log_size: int = 10 * 1024 * 1024  # 10MB
    log_backup_count: int = 3
    log_level: str = "ERROR"

    # Storage
    history_file: str = os.path.join(DATA_HOME, "history.json")
    settings_file: str = os.path.join(DATA_HOME, "settings.json")
    max_history_entries: int = 10

    # Ingestion
    max_upload_size: int = 10 * 1024 * 1024  # 10MB
    fix_encoding: bool = True

    # Error detection
    offset_mode: str = "exact"

    def __post_init__(self) -> None:
        """Validate configuration after initialization.

        Raises:
            ValueError: If any configuration values are invalid.
        """
        if self.max_log_size <= 0:
            raise ValueError("max_log_size must be positive")
        if self.log_backup_count < 0:
            raise ValueError("log_backup_count cannot be negative")

        self.log_level = self.log_level.upper()
        if self.log_level not in LOG_LEVELS:
            raise ValueError(
                f"log_level must be one of {sorted(LOG_LEVELS)}, "
                f"got '{self.log_level}'"
            )

        if self.max_history_entries < 1:
            raise ValueError("max_history_entries must be at least 1")
        if self.max_upload_size <= 0:
            raise ValueError("max_upload_size must be positive")

        if self.offset_mode not in OFFSET_MODES:
            raise ValueError(
                f"offset_mode must be one of {sorted(OFFSET_MODES)}, "
                f"got '{self.offset_mode}'"
            )
