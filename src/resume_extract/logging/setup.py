"""Logging for extraction runs: JSON lines on disk, plain text on the console.

The file log is the record of a batch: one JSON object per line, carrying the
component, the thread (structured parses run on their own worker thread) and
an ``app`` tag so the lines can be mixed with other services' logs. The
console shows the same events as text for whoever runs ``main.py``.

PDF parsing libraries are chatty about malformed documents, which this
pipeline handles on purpose; their loggers are capped at ERROR.
"""

import logging
import logging.handlers
from pathlib import Path

from pythonjsonlogger.json import JsonFormatter

LOG_FILENAME = "extraction.log"
APP_NAME = "resume-extract"
QUIET_LOGGERS = ("pdfminer", "pdfplumber")


def _json_file_handler(
    path: Path, level: int, max_bytes: int, backup_count: int
) -> logging.Handler:
    handler = logging.handlers.RotatingFileHandler(
        filename=str(path),
        maxBytes=max_bytes,
        backupCount=backup_count,
        encoding="utf-8",
    )
    handler.setLevel(level)
    handler.setFormatter(
        JsonFormatter(
            fmt="%(asctime)s %(name)s %(levelname)s %(threadName)s %(message)s",
            rename_fields={
                "asctime": "timestamp",
                "levelname": "level",
                "name": "component",
                "threadName": "thread",
            },
            static_fields={"app": APP_NAME},
            datefmt="%Y-%m-%dT%H:%M:%S",
        )
    )
    return handler


def _console_handler(level: int) -> logging.Handler:
    handler = logging.StreamHandler()
    handler.setLevel(level)
    handler.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s %(levelname)-8s %(name)s [%(threadName)s] %(message)s",
            datefmt="%H:%M:%S",
        )
    )
    return handler


def setup_logging(
    log_dir: str = "logs",
    log_level_file: int = logging.DEBUG,
    log_level_console: int = logging.INFO,
    max_bytes: int = 10_485_760,  # 10MB
    backup_count: int = 5,
) -> Path:
    """Route all logging to a rotating JSON file and the console.

    Safe to call more than once: handlers already on the root logger are
    replaced, not duplicated.

    Args:
        log_dir: Directory for the log file; created if missing.
        log_level_file: Minimum level written to the JSON file.
        log_level_console: Minimum level shown on the console.
        max_bytes: File size that triggers rotation.
        backup_count: Rotated files kept next to the live one.

    Returns:
        Path of the live JSON log file.
    """
    log_path = Path(log_dir) / LOG_FILENAME
    log_path.parent.mkdir(parents=True, exist_ok=True)

    root_logger = logging.getLogger()
    root_logger.setLevel(min(log_level_file, log_level_console))
    root_logger.handlers.clear()

    root_logger.addHandler(
        _json_file_handler(log_path, log_level_file, max_bytes, backup_count)
    )
    root_logger.addHandler(_console_handler(log_level_console))

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.ERROR)

    return log_path
