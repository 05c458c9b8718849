"""Logging pipeline for interaction handlers.

Console output is text or JSON. An optional JSON file sink is fed through a
``QueueHandler`` so callbacks running on the UI thread never block on disk.
Structured ``extra`` fields (``interaction``, ``step``, ``restart``) are kept
in both formats.
"""

from __future__ import annotations

import json
import logging
import queue
from datetime import UTC, datetime
from logging.handlers import QueueHandler, QueueListener
from pathlib import Path

from mapinteract.api.logging import LoggingConfig
from mapinteract.runtime.config import InteractionConfig, load_interaction_config

_QUEUE_LISTENER: QueueListener | None = None

# Attributes every LogRecord carries, plus those formatters add while rendering.
_STANDARD_RECORD_FIELDS = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime"}

_TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def record_fields(record: logging.LogRecord) -> dict[str, object]:
    """Return the structured ``extra`` fields attached to ``record``."""
    return {k: v for k, v in record.__dict__.items() if k not in _STANDARD_RECORD_FIELDS}


class JsonFormatter(logging.Formatter):
    """JSON line formatter with extra-field preservation."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, object] = {
            "ts": datetime.fromtimestamp(record.created, UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        fields = record_fields(record)
        if fields:
            payload["fields"] = fields
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=True, default=repr)


class FieldsFormatter(logging.Formatter):
    """Text formatter appending extra fields as ``key=value`` pairs."""

    def __init__(self) -> None:
        super().__init__(_TEXT_FORMAT)

    def format(self, record: logging.LogRecord) -> str:
        fields = record_fields(record)
        text = super().format(record)
        if not fields:
            return text
        suffix = " ".join(f"{key}={value!r}" for key, value in sorted(fields.items()))
        head, sep, tail = text.partition("\n")
        return f"{head} [{suffix}]{sep}{tail}"


def configure_logging(config: LoggingConfig) -> None:
    """Replace root handlers with console and optional queued file output."""
    global _QUEUE_LISTENER

    shutdown_logging()

    level = getattr(logging, config.level_name.upper(), logging.INFO)
    console_handler = logging.StreamHandler()
    console_handler.setFormatter(_resolve_formatter(config.console_format))
    handlers: list[logging.Handler] = [console_handler]

    if config.file_path:
        file_path = Path(config.file_path)
        file_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(file_path, mode="a", encoding="utf-8", delay=True)
        file_handler.setFormatter(_resolve_formatter(config.file_format))
        handlers.append(file_handler)

    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(level)

    if len(handlers) == 1:
        root.addHandler(handlers[0])
        return

    log_queue: queue.SimpleQueue[logging.LogRecord] = queue.SimpleQueue()
    root.addHandler(QueueHandler(log_queue))
    _QUEUE_LISTENER = QueueListener(log_queue, *handlers, respect_handler_level=True)
    _QUEUE_LISTENER.start()


def shutdown_logging() -> None:
    """Flush and stop the queued file listener if one is running."""
    global _QUEUE_LISTENER

    if _QUEUE_LISTENER is not None:
        _QUEUE_LISTENER.stop()
        _QUEUE_LISTENER = None


def setup_logging(config: InteractionConfig | None = None) -> None:
    """Configure logging from ``config`` (or ``MAPINTERACT_*`` env vars).

    Does nothing when the root logger already has handlers, so host
    applications keep control of their own pipeline.
    """
    root = logging.getLogger()
    if root.handlers:
        return
    resolved = config if config is not None else load_interaction_config()
    configure_logging(resolved.logging_config())


def get_logger(name: str) -> logging.Logger:
    """Return namespaced logger instance."""
    return logging.getLogger(name)


def _resolve_formatter(kind: str) -> logging.Formatter:
    if kind.strip().lower() == "json":
        return JsonFormatter()
    return FieldsFormatter()
