# Area: Shared
"""
playground_engine._shared.logging_config — Structured logging setup
===================================================================

All engine modules log under the ``playground_engine`` namespace
(``playground_engine.quiz``, ``playground_engine.session``, ...).
``setup_logging`` attaches two handlers to that namespace:

- terminal: colored one-liners on stderr
- file: one JSON object per line

Session, quiz and error details travel as ``extra=`` fields on the log
record. The JSON file keeps them as top-level keys so a log line for an
engine error carries its ``error_type`` code and its ``context()``.
"""

from __future__ import annotations
import logging
import json
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from ..errors import EngineError

logger = logging.getLogger("playground_engine")

# extra= keys copied into JSON lines
STRUCTURED_FIELDS = ("error_type", "error_class", "context", "session_id", "quiz_id")


class TerminalFormatter(logging.Formatter):
    """Colored formatter for terminal output. Appends ``[ERROR_TYPE]`` when set."""

    COLORS = {
        "DEBUG": "\033[36m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[35m",
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        color = self.COLORS.get(record.levelname, self.RESET)
        # Work on a copy so the file handler still sees the plain level name
        record = logging.makeLogRecord(record.__dict__)
        record.levelname = f"{color}{record.levelname}{self.RESET}"
        line = super().format(record)
        error_type = getattr(record, "error_type", None)
        if error_type:
            line = f"{line} [{error_type}]"
        return line


class JSONFormatter(logging.Formatter):
    """One JSON object per record, including any structured extra fields."""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in STRUCTURED_FIELDS:
            value = getattr(record, key, None)
            if value is not None:
                log_data[key] = value
        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_data, default=str)


def setup_logging(
    log_file_path: Optional[str] = "playground_engine.log",
    level: int = logging.INFO,
) -> logging.Logger:
    """
    Configure the package logger. Calling it again replaces the handlers.

    Parameters
    ----------
    log_file_path : str or None
        JSON-lines log file. ``None`` logs to the terminal only.
    level : int
        Logging level for both handlers.

    Returns
    -------
    logging.Logger
        The ``playground_engine`` logger.
    """
    pkg_logger = logging.getLogger("playground_engine")
    pkg_logger.setLevel(level)
    for handler in pkg_logger.handlers:
        handler.close()
    pkg_logger.handlers.clear()

    terminal_handler = logging.StreamHandler(sys.stderr)
    terminal_handler.setLevel(level)
    terminal_handler.setFormatter(TerminalFormatter(
        fmt="%(asctime)s │ %(levelname)s │ %(name)s │ %(message)s",
        datefmt="%H:%M:%S",
    ))
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

    pkg_logger.propagate = False
    return pkg_logger


def log_engine_error(error: "EngineError") -> None:
    """
    Print an engine error's boxed block to stderr and log it.

    The log record carries the error's ``error_type`` code, its class
    name and its ``context()`` so the JSON log line can be filtered by
    error kind or by the session it concerns.
    """
    print(error.format_error_log(), file=sys.stderr)

    context = error.context()
    extra = {
        "error_type": error.error_type,
        "error_class": error.__class__.__name__,
        "context": context or None,
    }
    for key in ("session_id", "quiz_id"):
        if context.get(key) is not None:
            extra[key] = context[key]
    logger.error(f"Engine error: {error}", extra=extra)
