"""
Smoke tests for GrammarGuard application functionality.
"""

import json
import tempfile
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
from langchain_core.documents import Document

from grammarguard.app import load_config, main
from grammarguard.config import Config
from grammarguard.detection import ErrorKind
from grammarguard.history import HistoryEntry, HistoryStore, make_entry, make_preview
from grammarguard.i18n import TRANSLATIONS, translate
from grammarguard.ingest import (
    IngestError,
    IngestErrorCode,
    extract_text,
    extract_text_from_bytes,
    get_supported_extensions,
)
from grammarguard.logging_utils import setup_logger
from grammarguard.pipeline import check_text, record_check
from grammarguard.settings import Settings, load_settings, save_settings


@pytest.fixture
def config(tmp_path):
    return Config(
        log_file=str(tmp_path / "logs" / "error.log"),
        history_file=str(tmp_path / "history.json"),
        settings_file=str(tmp_path / "settings.json"),
    )


class TestConfig:
    """Test configuration management."""

    def test_default_config(self):
        """Test default configuration values."""
        config = Config()
        assert config.max_history_entries == 10
        assert config.max_upload_size == 10 * 1024 * 1024
        assert config.offset_mode == "exact"
        assert config.log_level == "ERROR"
        assert config.fix_encoding is True

    def test_config_validation(self):
        """Test configuration validation."""
        config = Config(offset_mode="approximate", log_level="debug")
        assert config.offset_mode == "approximate"
        assert config.log_level == "DEBUG"

        with pytest.raises(ValueError, match="offset_mode must be one of"):
            Config(offset_mode="fuzzy")

        with pytest.raises(ValueError, match="max_history_entries must be at least 1"):
            Config(max_history_entries=0)

        with pytest.raises(ValueError, match="max_upload_size must be positive"):
            Config(max_upload_size=0)

        with pytest.raises(ValueError, match="log_level must be one of"):
            Config(log_level="LOUD")

    def test_load_config_file(self, tmp_path):
        """Test loading overrides from JSON."""
        config_file = tmp_path / "config.json"
        config_file.write_text(json.dumps({"max_history_entries": 3}))

        assert load_config(str(config_file)).max_history_entries == 3

        with pytest.raises(RuntimeError, match="Failed to load config"):
            load_config(str(tmp_path / "missing.json"))


class TestLogging:
    """Test logging utilities."""

    def test_setup_logger(self, config):
        """Test logger setup."""
        logger = setup_logger(config)

        assert logger.name == "grammarguard"
        assert len(logger.handlers) > 0

        # Test that subsequent calls don't add duplicate handlers
        logger2 = setup_logger(config)
        assert logger is logger2
        assert len(logger.handlers) == len(logger2.handlers)


class TestSettings:
    """Test user settings persistence."""

    def test_defaults(self):
        """Test default settings."""
        settings = Settings()
        assert settings.theme == "light"
        assert settings.language == "en"
        assert settings.font_size == 16
        assert settings.auto_apply_corrections is False

    def test_validation(self):
        """Test settings validation."""
        with pytest.raises(ValueError, match="theme"):
            Settings(theme="blue")
        with pytest.raises(ValueError, match="language"):
            Settings(language="de")
        with pytest.raises(ValueError, match="font_size"):
            Settings(font_size=30)

    def test_save_and_load(self, config):
        """Test that saved settings are read back."""
        settings = Settings(theme="dark", language="ru", font_size=18)
        save_settings(settings, config=config)

        assert load_settings(config=config) == settings

    def test_missing_file(self, config):
        """Test that a missing file gives the defaults."""
        assert load_settings(config=config) == Settings()

    def test_corrupt_file(self, config):
        """Test that unreadable settings fall back to defaults."""
        Path(config.settings_file).write_text("{not json")
        assert load_settings(config=config) == Settings()

        Path(config.settings_file).write_text(json.dumps({"theme": "neon"}))
        assert load_settings(config=config) == Settings()

    def test_unknown_keys_are_ignored(self, config):
        """Test settings written by other versions."""
        Path(config.settings_file).write_text(
            json.dumps({"theme": "dark", "showAIChat": True})
        )
        assert load_settings(config=config).theme == "dark"


class TestTranslations:
    """Test interface strings."""

    def test_languages_share_keys(self):
        """Test that every English string has a Russian counterpart."""
        assert set(TRANSLATIONS["en"]) == set(TRANSLATIONS["ru"])

    def test_translate(self):
        """Test lookups and fallbacks."""
        assert translate("ru", "history") == "История"
        assert translate("de", "history") == "History"
        assert translate("en", "missing_key") == "missing_key"


class TestHistory:
    """Test the history store."""

    def make(self, text, timestamp):
        report = check_text(text)
        return make_entry(
            text, report.corrected_text, report.analysis, report.errors, "en", timestamp
        )

    def test_preview(self):
        """Test preview truncation."""
        assert make_preview("short") == "short"
        assert make_preview("x" * 150) == "x" * 100 + "..."

    def test_add_newest_first(self, config):
        """Test that new entries are prepended."""
        store = HistoryStore(config=config)
        store.add(self.make("first", 1))
        store.add(self.make("second", 2))

        entries = store.load()
        assert [entry.original_text for entry in entries] == ["second", "first"]

    def test_truncates_to_max_entries(self, config):
        """Test that the oldest entries are dropped."""
        store = HistoryStore(config=config, max_entries=3)
        for i in range(5):
            store.add(self.make(f"text {i}", i))

        entries = store.load()
        assert len(entries) == 3
        assert entries[0].original_text == "text 4"
        assert entries[-1].original_text == "text 2"

    def test_get_and_delete(self, config):
        """Test lookup and removal by id."""
        store = HistoryStore(config=config)
        store.add(self.make("keep", 1))
        store.add(self.make("drop", 2))

        assert store.get("2").original_text == "drop"
        assert store.delete("2") is True
        assert store.delete("2") is False
        assert store.get("2") is None
        assert [entry.id for entry in store.load()] == ["1"]

    def test_clear(self, config):
        """Test removing all entries."""
        store = HistoryStore(config=config)
        store.add(self.make("text", 1))
        store.clear()

        assert store.load() == []

    def test_entries_survive_storage(self, config):
        """Test that analysis and errors are stored."""
        store = HistoryStore(config=config)
        entry = self.make("привет вечерррм", 7)
        store.add(entry)

        loaded = HistoryStore(config=config).load()[0]
        assert isinstance(loaded, HistoryEntry)
        assert loaded == entry
        assert loaded.errors[1].kind == ErrorKind.PUNCTUATION

    def test_missing_and_corrupt_file(self, config):
        """Test that unreadable history is treated as empty."""
        store = HistoryStore(config=config)
        assert store.load() == []

        Path(config.history_file).write_text("[{broken")
        assert store.load() == []

        # Still writable afterwards
        store.add(self.make("fresh", 1))
        assert len(store.load()) == 1


class TestIngest:
    """Test file ingestion."""

    def test_supported_extensions(self):
        """Test the default loaders."""
        assert {".txt", ".pdf", ".docx"} <= set(get_supported_extensions())

    def test_plain_text(self, config, tmp_path):
        """Test loading a UTF-8 text file."""
        path = tmp_path / "essay.txt"
        path.write_text("домй бьло кошкаа", encoding="utf-8")

        assert extract_text(str(path), config) == "домй бьло кошкаа"

    def test_bytes_upload(self, config):
        """Test extracting text from an in-memory upload."""
        text = extract_text_from_bytes("notes.txt", "hello world".encode("utf-8"), config)
        assert text == "hello world"

    def test_encoding_repair(self, config, tmp_path):
        """Test that mojibake is fixed when enabled."""
        path = tmp_path / "mojibake.txt"
        path.write_text("cafÃ©", encoding="utf-8")

        assert extract_text(str(path), config) == "café"

        raw = Config(log_file=config.log_file, fix_encoding=False)
        assert extract_text(str(path), raw) == "cafÃ©"

    def test_invalid_file_type(self, config, tmp_path):
        """Test rejecting unknown extensions."""
        path = tmp_path / "scan.tiff"
        path.write_bytes(b"\x00")

        with pytest.raises(IngestError) as excinfo:
            extract_text(str(path), config)
        assert excinfo.value.code == IngestErrorCode.INVALID_FILE_TYPE

    def test_legacy_word_format(self, config, tmp_path):
        """Test that .doc files are reported as unsupported."""
        path = tmp_path / "old.doc"
        path.write_bytes(b"\xd0\xcf\x11\xe0")

        with pytest.raises(IngestError) as excinfo:
            extract_text(str(path), config)
        assert excinfo.value.code == IngestErrorCode.UNSUPPORTED_FORMAT

    def test_file_too_large(self, tmp_path):
        """Test the upload size limit."""
        config = Config(log_file=str(tmp_path / "error.log"), max_upload_size=10)
        path = tmp_path / "big.txt"
        path.write_text("x" * 11)

        with pytest.raises(IngestError) as excinfo:
            extract_text(str(path), config)
        assert excinfo.value.code == IngestErrorCode.FILE_TOO_LARGE

    def test_parse_error(self, config, tmp_path):
        """Test that loader failures become PARSE_ERROR."""
        path = tmp_path / "broken.pdf"
        path.write_bytes(b"not a pdf")

        failing_loader = MagicMock()
        failing_loader.return_value.load.side_effect = ValueError("bad xref")

        with patch.dict("grammarguard.ingest._LOADER_REGISTRY", {".pdf": failing_loader}):
            with pytest.raises(IngestError) as excinfo:
                extract_text(str(path), config)

        assert excinfo.value.code == IngestErrorCode.PARSE_ERROR
        assert "bad xref" in str(excinfo.value)

    def test_pdf_pages_are_joined(self, config, tmp_path):
        """Test that page texts are joined with a space."""
        path = tmp_path / "paper.pdf"
        path.write_bytes(b"%PDF-1.4")

        loader = MagicMock()
        loader.return_value.load.return_value = [
            Document(page_content="page one", metadata={"page": 0}),
            Document(page_content="page two", metadata={"page": 1}),
        ]

        with patch.dict("grammarguard.ingest._LOADER_REGISTRY", {".pdf": loader}):
            text = extract_text(str(path), config)

        assert text == "page one page two"
        loader.assert_called_once_with(str(path))


class TestPipeline:
    """Test the check pipeline."""

    def test_check_without_corrections(self):
        """Test that corrected text defaults to the input."""
        report = check_text("so wooow")

        assert report.analysis.word_count == 2
        assert len(report.errors) == 1
        assert report.corrected_text == "so wooow"
        assert report.corrections_applied is False
        assert report.summary == "so"

    def test_auto_apply(self):
        """Test automatic corrections from settings."""
        report = check_text("so wooow", settings=Settings(auto_apply_corrections=True))

        assert report.corrected_text == "so woow"
        assert report.corrections_applied is True

    def test_offset_mode_from_config(self):
        """Test that the configured offset mode is used."""
        text = "a  wooow"
        exact = check_text(text)
        approximate = check_text(text, config=Config(offset_mode="approximate"))

        assert exact.errors[0].start == 3
        assert approximate.errors[0].start == 2

    def test_record_check(self, config):
        """Test recording reports in the history."""
        store = HistoryStore(config=config)

        assert record_check(check_text("   "), store) is None
        assert store.load() == []

        entry = record_check(check_text("домй"), store, language="ru")
        assert entry is not None
        assert entry.language == "ru"
        assert store.load()[0].id == entry.id


class TestCommandLine:
    """Test the command line interface."""

    def write_config(self, config, directory):
        config_file = Path(directory) / "config.json"
        config_file.write_text(
            json.dumps(
                {
                    "log_file": config.log_file,
                    "history_file": config.history_file,
                    "settings_file": config.settings_file,
                }
            )
        )
        return str(config_file)

    def test_check_file(self, config, capsys):
        """Test the plain-text report."""
        with tempfile.TemporaryDirectory() as temp_dir:
            config_file = self.write_config(config, temp_dir)
            essay = Path(temp_dir) / "essay.txt"
            essay.write_text("привет вечерррм", encoding="utf-8")

            exit_code = main(["--config", config_file, "check", str(essay)])

        output = capsys.readouterr().out
        assert exit_code == 0
        assert "Words: 2" in output
        assert "Issues found: 2" in output
        assert "[7:15] spelling" in output

    def test_check_apply_json_and_record(self, config, capsys):
        """Test JSON output with corrections and history recording."""
        with tempfile.TemporaryDirectory() as temp_dir:
            config_file = self.write_config(config, temp_dir)
            essay = Path(temp_dir) / "essay.txt"
            essay.write_text("sooo good", encoding="utf-8")

            exit_code = main(
                ["--config", config_file, "check", str(essay), "--apply", "--json", "--record"]
            )
            payload = json.loads(capsys.readouterr().out)

            assert exit_code == 0
            assert payload["corrected_text"] == "soo good"
            assert payload["errors"][0]["kind"] == "punctuation"

            main(["--config", config_file, "history", "list"])
            assert "sooo good" in capsys.readouterr().out

    def test_unsupported_file(self, config, capsys):
        """Test the exit code for files that cannot be read."""
        with tempfile.TemporaryDirectory() as temp_dir:
            config_file = self.write_config(config, temp_dir)
            image = Path(temp_dir) / "scan.tiff"
            image.write_bytes(b"\x00")

            exit_code = main(["--config", config_file, "check", str(image)])

        assert exit_code == 1
        assert "INVALID_FILE_TYPE" in capsys.readouterr().err

    def test_history_delete_missing(self, config, capsys):
        """Test deleting an unknown history entry."""
        with tempfile.TemporaryDirectory() as temp_dir:
            config_file = self.write_config(config, temp_dir)

            exit_code = main(["--config", config_file, "history", "delete", "42"])

        assert exit_code == 1
        assert "No history entry 42" in capsys.readouterr().err


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
