"""Callback failure capture and logging policy."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import Any


def describe_error(exc: BaseException) -> str:
    """Return user-facing message for a captured callback failure."""
    message = str(exc)
    return message if message else type(exc).__name__


def log_callback_failure(
    logger: logging.Logger,
    message: str,
    *,
    level: int = logging.ERROR,
    **fields: object,
) -> None:
    """Emit a callback failure with traceback and structured fields."""
    logger.log(level, message, exc_info=True, extra=fields)


def guarded_call(
    logger: logging.Logger,
    message: str,
    func: Callable[..., Any],
    *args: object,
    fields: dict[str, object] | None = None,
) -> tuple[Any, str | None]:
    """Invoke ``func`` and return ``(result, error)``. Failures are logged, never raised."""
    try:
        return func(*args), None
    except Exception as exc:  # pylint: disable=broad-exception-caught
        log_callback_failure(logger, message, **(fields or {}))
        return None, describe_error(exc)


class StepErrors:
    """Collect failures of independently guarded steps; the last message wins."""

    def __init__(self, logger: logging.Logger, message: str, **fields: object) -> None:
        self._logger = logger
        self._message = message
        self._fields = fields
        self.last: str | None = None
        self.count = 0

    @contextmanager
    def step(self, step_name: str) -> Iterator[None]:
        """Run one step, capturing any exception it raises."""
        try:
            yield
        except Exception as exc:  # pylint: disable=broad-exception-caught
            log_callback_failure(self._logger, self._message, step=step_name, **self._fields)
            self.last = describe_error(exc)
            self.count += 1
