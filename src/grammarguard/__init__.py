"""
GrammarGuard: a small writing assistant.

Paste or upload text to get a spelling and punctuation critique, word
statistics and a corrected version, with recent checks kept on disk.
"""

__version__ = "1.0.0"
__author__ = "GrammarGuard Team"

from .analysis import AnalysisResult, WordFrequency, analyze_text, shorten_text
from .config import Config
from .correction import apply_corrections, highlight_errors

# Public API exports
from .detection import ErrorKind, TextError, find_errors
from .pipeline import CheckReport, check_text

__all__ = [
    "analyze_text",
    "find_errors",
    "apply_corrections",
    "highlight_errors",
    "shorten_text",
    "check_text",
    "AnalysisResult",
    "WordFrequency",
    "TextError",
    "ErrorKind",
    "CheckReport",
    "Config",
    "__version__",
]
