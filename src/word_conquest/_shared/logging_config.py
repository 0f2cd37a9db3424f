# Area: Shared
"""
word_conquest._shared.logging_config — Structured logging setup
===============================================================

Configures dual logging: terminal (colored) + file (JSON lines).
Provides a helper for logging engine errors as structured blocks.
Quiet mode suppresses terminal logs while the CLI draws the board.
"""

from __future__ import annotations
import logging
import json
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import TYPE_CHECKING, Union

if TYPE_CHECKING:
    from ..errors import WordConquestError

# Package logger
logger = logging.getLogger("word_conquest")

# Flag to control terminal output while the CLI owns the screen
_quiet_mode_enabled = False


class QuietFilter(logging.Filter):
    """Filter that suppresses terminal logs when quiet mode is enabled."""

    def filter(self, record: logging.LogRecord) -> bool:
        return not _quiet_mode_enabled


class TerminalFormatter(logging.Formatter):
    """Colored formatter for terminal output."""

    COLORS = {
        "DEBUG": "\033[36m",     # Cyan
        "INFO": "\033[32m",      # Green
        "WARNING": "\033[33m",   # Yellow
        "ERROR": "\033[31m",     # Red
        "CRITICAL": "\033[35m",  # Magenta
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        color = self.COLORS.get(record.levelname, self.RESET)
        record = logging.makeLogRecord(record.__dict__)
        record.levelname = f"{color}{record.levelname}{self.RESET}"
        return super().format(record)


class JSONFormatter(logging.Formatter):
    """JSON formatter for file output."""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_data, ensure_ascii=False)


def setup_logging(
    log_file_path: str = "word_conquest.log",
    level: Union[int, str] = logging.INFO,
) -> None:
    """
    Configure logging for the package.

    Parameters
    ----------
    log_file_path : str
        Path to the log file. Empty string disables the file handler.
    level : int or str
        Logging level. Defaults to INFO.
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    pkg_logger = logging.getLogger("word_conquest")
    pkg_logger.setLevel(level)

    # Remove existing handlers
    pkg_logger.handlers.clear()

    terminal_handler = logging.StreamHandler(sys.stderr)
    terminal_handler.setLevel(level)
    terminal_handler.setFormatter(TerminalFormatter(
        fmt="%(asctime)s │ %(levelname)s │ %(name)s │ %(message)s",
        datefmt="%H:%M:%S",
    ))
    terminal_handler.addFilter(QuietFilter())
    pkg_logger.addHandler(terminal_handler)

    if log_file_path:
        try:
            log_path = Path(log_file_path)
            log_path.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(log_path, encoding="utf-8")
            file_handler.setLevel(level)
            file_handler.setFormatter(JSONFormatter())
            pkg_logger.addHandler(file_handler)
        except OSError as e:
            pkg_logger.warning(f"Could not create log file: {e}")

    # Prevent propagation to root logger
    pkg_logger.propagate = False


def log_engine_error(error: "WordConquestError", level: int = logging.WARNING) -> None:
    """
    Log an engine error with its structured block at DEBUG.

    The one-line summary goes out at ``level``; the full block is only
    useful when debugging, so it is kept at DEBUG.
    """
    logger.log(
        level,
        f"Engine error: {error.__class__.__name__}: {error}",
        extra={"error_type": error.__class__.__name__},
    )
    formatter = getattr(error, "format_error_log", None)
    if formatter is not None and logger.isEnabledFor(logging.DEBUG):
        logger.debug(formatter())


def enable_quiet_mode() -> None:
    """Suppress terminal logs (file logging is unchanged)."""
    global _quiet_mode_enabled
    _quiet_mode_enabled = True


def disable_quiet_mode() -> None:
    """Restore terminal logs."""
    global _quiet_mode_enabled
    _quiet_mode_enabled = False


def is_quiet_mode_enabled() -> bool:
    return _quiet_mode_enabled
