"""Error handling abstractions."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

import logfire


class ErrorHandler(ABC):
    """Interface for reporting errors.

    Implementations should avoid raising further exceptions so a batch upgrade
    can carry on past a bad document.
    """

    @abstractmethod
    def handle(
        self, message: str, exc: Exception | None = None, **context: Any
    ) -> None:
        """Record ``message`` with optional ``exc`` and structured ``context``."""


class LoggingErrorHandler(ErrorHandler):
    """Error handler that logs via ``logfire``."""

    def handle(
        self, message: str, exc: Exception | None = None, **context: Any
    ) -> None:
        """Log an error message with optional exception context.

        Args:
            message: Description of the error to record.
            exc: Exception instance providing additional context.
            **context: Attributes attached to the log record, such as the
                file path or line number of the offending document.
        """
        if exc:
            logfire.error(
                "{message}: {error}",
                message=message,
                error=str(exc),
                error_type=type(exc).__name__,
                **context,
            )
        else:
            logfire.error("{message}", message=message, **context)


__all__ = ["ErrorHandler", "LoggingErrorHandler"]
