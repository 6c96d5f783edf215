"""
CLI entrypoint and main application logic.

The web interface lives in streamlit_app.py; run it with
``streamlit run streamlit_app.py``.
"""

import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional

from . import __version__
from .config import OFFSET_MODES, Config
from .history import HistoryStore
from .ingest import IngestError, extract_text
from .logging_utils import log_error, setup_logger
from .pipeline import CheckReport, check_text, record_check
from .settings import load_settings


def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments.

    Returns:
        Parsed arguments namespace
    """
    parser = argparse.ArgumentParser(
        prog="grammarguard",
        description="GrammarGuard - spelling and punctuation checks with text statistics",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s check essay.txt            # Statistics and errors
  %(prog)s check essay.pdf --apply    # Print the corrected text
  cat notes.txt | %(prog)s check -    # Read from stdin
  %(prog)s history list               # Recent checks
        """,
    )

    parser.add_argument(
        "--config", type=str, help="Path to configuration file (JSON format)"
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default=None,
        help="Set logging level (default: from config, ERROR)",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    subparsers = parser.add_subparsers(dest="command", required=True)

    check = subparsers.add_parser("check", help="Check a file or stdin")
    check.add_argument("file", help="Text, PDF or Word file; '-' for stdin")
    check.add_argument(
        "--apply", action="store_true", help="Print the corrected text"
    )
    check.add_argument("--json", action="store_true", help="Emit JSON")
    check.add_argument(
        "--offsets",
        choices=sorted(OFFSET_MODES),
        default=None,
        help="Error span computation (default: from config, exact)",
    )
    check.add_argument(
        "--record", action="store_true", help="Add the check to the history"
    )

    history = subparsers.add_parser("history", help="Manage recent checks")
    history.add_argument("action", choices=["list", "show", "delete", "clear"])
    history.add_argument("entry_id", nargs="?", help="Entry id for show/delete")

    return parser.parse_args(argv)


def load_config(config_path: Optional[str] = None) -> Config:
    """Load configuration from file or use defaults.

    Args:
        config_path: Optional path to configuration file

    Returns:
        Configuration object

    Raises:
        RuntimeError: If config file cannot be loaded
    """
    if config_path:
        try:
            config_file = Path(config_path)
            if not config_file.exists():
                raise FileNotFoundError(f"Config file not found: {config_path}")

            with open(config_file, "r", encoding="utf-8") as f:
                config_data = json.load(f)

            return Config(**config_data)

        except Exception as e:
            raise RuntimeError(f"Failed to load config from {config_path}: {e}")

    return Config()


def format_report(report: CheckReport) -> str:
    """Render a report as plain text for the terminal."""
    analysis = report.analysis
    lines = [
        f"Words: {analysis.word_count}",
        f"Characters: {analysis.character_count}",
        f"Sentences: {analysis.sentence_count}",
        f"Average word length: {analysis.average_word_length}",
        f"Long words: {', '.join(analysis.long_words) or '-'}",
        "Common words: "
        + (
            ", ".join(f"{item.word} ({item.count})" for item in analysis.common_words)
            or "-"
        ),
        f"Issues found: {len(report.errors)}",
    ]
    for error in report.errors:
        span = report.text[error.start : error.end]
        suggestion = error.suggestions[0] if error.suggestions else ""
        lines.append(
            f"  [{error.start}:{error.end}] {error.kind.value}: {span!r} "
            f"-> {suggestion!r} ({error.message})"
        )
    return "\n".join(lines)


def run_check(args: argparse.Namespace, config: Config) -> int:
    if args.file == "-":
        text = sys.stdin.read()
    else:
        try:
            text = extract_text(args.file, config)
        except IngestError as e:
            print(f"{e.code.value}: {e}", file=sys.stderr)
            return 1

    if args.offsets:
        config.offset_mode = args.offsets

    settings = load_settings(config=config)
    # Without --apply, settings.auto_apply_corrections decides what is recorded
    report = check_text(
        text, settings=settings, config=config, apply=True if args.apply else None
    )

    if args.record:
        record_check(report, HistoryStore(config=config), settings.language)

    if args.json:
        payload = {
            "analysis": report.analysis.to_dict(),
            "errors": [error.to_dict() for error in report.errors],
        }
        if args.apply:
            payload["corrected_text"] = report.corrected_text
        print(json.dumps(payload, ensure_ascii=False, indent=2))
    elif args.apply:
        print(report.corrected_text)
    else:
        print(format_report(report))

    return 0


def run_history(args: argparse.Namespace, config: Config) -> int:
    store = HistoryStore(config=config)

    if args.action == "list":
        entries = store.load()
        if not entries:
            print("No history available")
        for entry in entries:
            print(f"{entry.id}  {len(entry.errors):3d} issues  {entry.preview!r}")
        return 0

    if args.action == "clear":
        store.clear()
        return 0

    if not args.entry_id:
        print(f"history {args.action} requires an entry id", file=sys.stderr)
        return 1

    if args.action == "show":
        entry = store.get(args.entry_id)
        if entry is None:
            print(f"No history entry {args.entry_id}", file=sys.stderr)
            return 1
        print(json.dumps(entry.to_dict(), ensure_ascii=False, indent=2))
        return 0

    if not store.delete(args.entry_id):
        print(f"No history entry {args.entry_id}", file=sys.stderr)
        return 1
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main application entry point.

    Returns:
        Exit code (0 for success, 1 for error)
    """
    try:
        args = parse_arguments(argv)

        config = load_config(args.config)
        if args.log_level:
            config.log_level = args.log_level
        logger = setup_logger(config)
        logger.info("GrammarGuard %s command starting", args.command)

        if args.command == "check":
            return run_check(args, config)
        return run_history(args, config)

    except KeyboardInterrupt:
        print("\nInterrupted by user", file=sys.stderr)
        return 1

    except Exception as e:
        print(f"Application error: {str(e)}", file=sys.stderr)

        # Try to log the error if possible
        try:
            log_error("Command failed", e)
        except Exception:
            pass  # Ignore logging errors during shutdown

        return 1


if __name__ == "__main__":
    sys.exit(main())
