"""Logging setup for puzzle sessions.

Puzzle modules log an event name as the message and pass vessel and
session details through ``extra``. The JSON formatter nests those details
under ``fields``; the text formatter appends them as ``key=value`` pairs.
"""

from __future__ import annotations

import json
import logging
import os
import queue
from dataclasses import dataclass
from datetime import UTC, datetime
from logging.handlers import QueueHandler, QueueListener
from pathlib import Path

__all__ = [
    "EventFormatter",
    "JsonFormatter",
    "LoggingConfig",
    "configure_logging",
    "record_fields",
    "setup_logging",
    "shutdown_logging",
]

_FILE_LISTENER: QueueListener | None = None

# Attributes every LogRecord carries; anything else came in through ``extra``.
_RECORD_ATTRS = frozenset(vars(logging.LogRecord("", logging.INFO, "", 0, "", None, None))) | {
    "message",
    "asctime",
}


@dataclass(frozen=True, slots=True)
class LoggingConfig:
    """Where session logs go and how they look."""

    level_name: str = "INFO"
    console_format: str = "text"  # text|json
    file_path: str | None = None
    file_format: str = "json"  # text|json


def record_fields(record: logging.LogRecord) -> dict[str, object]:
    """Return the ``extra`` fields attached to a record, such as vessel ids or counts."""
    return {key: value for key, value in vars(record).items() if key not in _RECORD_ATTRS}


class JsonFormatter(logging.Formatter):
    """One JSON object per record, keyed by event name."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, object] = {
            "ts": datetime.fromtimestamp(record.created, UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "event": record.getMessage(),
        }
        fields = record_fields(record)
        if fields:
            entry["fields"] = fields
        if record.exc_info:
            entry["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=True, default=str)


class EventFormatter(logging.Formatter):
    """Human-readable line with the record's fields appended."""

    def __init__(self) -> None:
        super().__init__("%(asctime)s %(levelname)s %(name)s: %(message)s")

    def formatMessage(self, record: logging.LogRecord) -> str:
        line = super().formatMessage(record)
        pairs = " ".join(f"{key}={value}" for key, value in sorted(record_fields(record).items()))
        return f"{line} {pairs}" if pairs else line


def configure_logging(config: LoggingConfig) -> None:
    """Install the console handler and, when configured, a queued file handler."""
    global _FILE_LISTENER

    shutdown_logging()
    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(logging.getLevelNamesMapping().get(config.level_name.strip().upper(), logging.INFO))

    console = logging.StreamHandler()
    console.setFormatter(_formatter_for(config.console_format))
    root.addHandler(console)
    if not config.file_path:
        return

    # File writes happen on the listener thread; the console stays synchronous.
    path = Path(config.file_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    file_handler = logging.FileHandler(path, mode="a", encoding="utf-8", delay=True)
    file_handler.setFormatter(_formatter_for(config.file_format))
    log_queue: queue.SimpleQueue[logging.LogRecord] = queue.SimpleQueue()
    root.addHandler(QueueHandler(log_queue))
    _FILE_LISTENER = QueueListener(log_queue, file_handler, respect_handler_level=True)
    _FILE_LISTENER.start()


def shutdown_logging() -> None:
    """Flush and close the queued file handler, if any."""
    global _FILE_LISTENER

    if _FILE_LISTENER is None:
        return
    _FILE_LISTENER.stop()
    for handler in _FILE_LISTENER.handlers:
        handler.close()
    _FILE_LISTENER = None


def setup_logging() -> None:
    """Configure logging from ``ANCHORAGE_LOG_LEVEL``, ``LOG_FORMAT`` and ``ANCHORAGE_LOG_FILE``."""
    level_name = os.getenv("ANCHORAGE_LOG_LEVEL", os.getenv("LOG_LEVEL", "INFO")).strip().upper()
    file_path = os.getenv("ANCHORAGE_LOG_FILE", "").strip() or None
    configure_logging(
        LoggingConfig(
            level_name=level_name,
            console_format=os.getenv("LOG_FORMAT", "text").strip().lower(),
            file_path=file_path,
        )
    )
    if file_path:
        logging.getLogger(__name__).info("logging_configured", extra={"log_file": file_path, "log_level": level_name})


def _formatter_for(kind: str) -> logging.Formatter:
    if kind.strip().lower() == "json":
        return JsonFormatter()
    return EventFormatter()
