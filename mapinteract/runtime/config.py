"""Interaction configuration sourced from environment."""

from __future__ import annotations

import os
from dataclasses import dataclass

from mapinteract.api.logging import LoggingConfig


def _flag(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _text(name: str) -> str | None:
    raw = os.getenv(name)
    if raw is None:
        return None
    value = raw.strip()
    return value or None


@dataclass(frozen=True, slots=True)
class InteractionConfig:
    """Immutable interaction handler configuration."""

    trace_transitions: bool = False
    log_level: str = "INFO"
    log_format: str = "text"
    log_file: str | None = None

    def logging_config(self) -> LoggingConfig:
        """Project logging-related fields onto a logging pipeline config."""
        return LoggingConfig(
            level_name=self.log_level,
            console_format=self.log_format,
            file_path=self.log_file,
            file_format="json",
        )


def resolve_log_level_name(default: str = "INFO") -> str:
    """Resolve log level with package-prefixed override."""
    value = os.getenv("MAPINTERACT_LOG_LEVEL")
    if value is None:
        value = os.getenv("LOG_LEVEL", default)
    return value.strip().upper()


def load_interaction_config() -> InteractionConfig:
    """Load immutable interaction configuration from env vars."""
    log_format = (_text("MAPINTERACT_LOG_FORMAT") or "text").lower()
    if log_format not in {"text", "json"}:
        log_format = "text"
    return InteractionConfig(
        trace_transitions=_flag("MAPINTERACT_TRACE_TRANSITIONS", False),
        log_level=resolve_log_level_name(),
        log_format=log_format,
        log_file=_text("MAPINTERACT_LOG_FILE"),
    )
