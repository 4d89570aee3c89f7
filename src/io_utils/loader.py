# SPDX-License-Identifier: MIT
"""Utilities for loading configuration and standalone documents.

The helpers in this module centralise file-system access for the application
configuration and for single JSON documents passed on the command line.
Errors are reported through an :class:`~utils.ErrorHandler` so callers receive
concise exceptions.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, TypeVar

import logfire
import yaml
from pydantic import TypeAdapter, ValidationError

from models import AppConfig
from utils import ErrorHandler, LoggingErrorHandler

T = TypeVar("T")


def _read_file(path: Path, error_handler: ErrorHandler | None = None) -> str:
    """Return the contents of ``path``.

    Raises:
        FileNotFoundError: If the file does not exist.
        RuntimeError: If the file cannot be read.
    """
    handler = error_handler or LoggingErrorHandler()
    with logfire.span("fs.read_text", attributes={"path": str(path)}):
        try:
            with path.open("r", encoding="utf-8") as file:
                text = file.read().strip()
                logfire.debug("Read text file", path=str(path), bytes=len(text))
                return text
        except FileNotFoundError as exc:
            handler.handle(f"File not found: {path}", exc)
            raise
        except OSError as exc:
            handler.handle(f"Error reading file {path}", exc)
            raise RuntimeError(
                f"An error occurred while reading the file: {exc}"
            ) from exc


def _read_yaml_file(
    path: Path,
    schema: type[T],
    error_handler: ErrorHandler | None = None,
) -> T:
    """Return YAML data loaded from ``path`` validated against ``schema``.

    Args:
        path: File location.
        schema: Pydantic-compatible schema to validate against.
        error_handler: Processor for any errors encountered.
    """
    handler = error_handler or LoggingErrorHandler()
    with logfire.span("fs.read_yaml", attributes={"path": str(path)}):
        try:
            adapter = TypeAdapter(schema)
            # An empty file yields ``None``; treat it as an empty mapping.
            return adapter.validate_python(
                yaml.safe_load(_read_file(path, handler)) or {}
            )
        except FileNotFoundError:
            raise
        except (RuntimeError, ValidationError, yaml.YAMLError, ValueError) as exc:
            handler.handle(f"Error reading YAML file {path}", exc)
            raise RuntimeError(
                f"An error occurred while reading the YAML file: {exc}"
            ) from exc


class _SilentMissing(LoggingErrorHandler):
    """Error handler that stays quiet about missing optional files."""

    def handle(
        self, message: str, exc: Exception | None = None, **context: Any
    ) -> None:
        if isinstance(exc, FileNotFoundError):
            return
        super().handle(message, exc, **context)


def load_app_config(
    base_dir: Path | str = Path("config"),
    filename: Path | str = Path("app.yaml"),
) -> AppConfig:
    """Return application configuration from ``base_dir``.

    A missing file yields the built-in defaults so the tool runs outside a
    checkout. A present but invalid file raises ``RuntimeError``.
    """
    path = Path(base_dir) / Path(filename)
    try:
        return _read_yaml_file(path, AppConfig, _SilentMissing())
    except FileNotFoundError:
        logfire.debug("No application config, using defaults", path=str(path))
        return AppConfig()


def load_json_document(
    path: Path | str, error_handler: ErrorHandler | None = None
) -> dict[str, Any]:
    """Return the JSON object stored in ``path``.

    Raises:
        FileNotFoundError: If the file does not exist.
        RuntimeError: If the file is not a JSON object.
    """
    handler = error_handler or LoggingErrorHandler()
    path = Path(path)
    with logfire.span("fs.read_json", attributes={"path": str(path)}):
        try:
            return TypeAdapter(dict[str, Any]).validate_json(_read_file(path, handler))
        except FileNotFoundError:
            raise
        except (RuntimeError, ValidationError, ValueError) as exc:
            handler.handle(f"Error reading JSON file {path}", exc)
            raise RuntimeError(
                f"An error occurred while reading the JSON file: {exc}"
            ) from exc


__all__ = ["load_app_config", "load_json_document"]
