"""
User-facing settings persisted as JSON.
"""

import json
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Optional

from .config import Config
from .logging_utils import log_error

THEMES = {"light", "dark"}
LANGUAGES = {"en", "ru"}
MIN_FONT_SIZE = 12
MAX_FONT_SIZE = 20


@dataclass
class Settings:
    """Display and behaviour preferences chosen by the user.

    Attributes:
        theme: "light" or "dark".
        language: UI language, "en" or "ru".
        font_size: Text size in pixels, 12-20.
        auto_apply_corrections: Store the corrected text in history entries.
    """

    theme: str = "light"
    language: str = "en"
    font_size: int = 16
    auto_apply_corrections: bool = False

    def __post_init__(self) -> None:
        """Validate settings after initialization.

        Raises:
            ValueError: If any value is out of range.
        """
        if self.theme not in THEMES:
            raise ValueError(f"theme must be one of {sorted(THEMES)}, got '{self.theme}'")
        if self.language not in LANGUAGES:
            raise ValueError(
                f"language must be one of {sorted(LANGUAGES)}, got '{self.language}'"
            )
        if not MIN_FONT_SIZE <= self.font_size <= MAX_FONT_SIZE:
            raise ValueError(
                f"font_size must be between {MIN_FONT_SIZE} and {MAX_FONT_SIZE}"
            )


def load_settings(path: Optional[str] = None, config: Optional[Config] = None) -> Settings:
    """Load settings from ``path`` (defaults to ``config.settings_file``).

    A missing file gives the defaults. An unreadable or invalid file is logged
    and also gives the defaults. Unknown keys are ignored.
    """
    if config is None:
        config = Config()
    settings_path = Path(path or config.settings_file)

    if not settings_path.exists():
        return Settings()

    try:
        with open(settings_path, "r", encoding="utf-8") as f:
            data = json.load(f)
        known = {f.name for f in fields(Settings)}
        return Settings(**{k: v for k, v in data.items() if k in known})
    except (OSError, ValueError, TypeError, AttributeError) as e:
        log_error(f"Failed to load settings from {settings_path}", e, config)
        return Settings()


def save_settings(
    settings: Settings, path: Optional[str] = None, config: Optional[Config] = None
) -> None:
    """Write ``settings`` to ``path`` (defaults to ``config.settings_file``).

    Raises:
        OSError: If the file cannot be written
    """
    if config is None:
        config = Config()
    settings_path = Path(path or config.settings_file)

    try:
        settings_path.parent.mkdir(parents=True, exist_ok=True)
        with open(settings_path, "w", encoding="utf-8") as f:
            json.dump(asdict(settings), f, ensure_ascii=False, indent=2)
    except OSError as e:
        log_error(f"Failed to save settings to {settings_path}", e, config)
        raise
