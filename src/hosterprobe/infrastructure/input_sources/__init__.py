"""Input source implementations, selected by name from configuration."""

from __future__ import annotations

from hosterprobe.domain.exceptions import InputSourceError
from hosterprobe.domain.ports import InputSourcePort
from hosterprobe.infrastructure.config import AppConfig

from .file_source import FileInputSource, parse_document
from .memory_source import StaticInputSource
from .sqlite_source import SqliteInputSource


def create_input_source(config: AppConfig) -> InputSourcePort:
    """Build the configured input source.

    Raises:
        InputSourceError: No input path is configured.
    """
    settings = config.input
    if settings.path is None:
        raise InputSourceError("No input configured: set input.path or pass URLs")
    if settings.source == "sqlite":
        return SqliteInputSource(
            settings.path, settings.query or "", link_field=settings.link_field
        )
    return FileInputSource(settings.path, link_field=settings.link_field)


__all__ = [
    "FileInputSource",
    "SqliteInputSource",
    "StaticInputSource",
    "create_input_source",
    "parse_document",
]
