"""structlog on top of stdlib logging, with three sinks.

- console (stderr): ``console_log_level``, pretty or JSON
- error log file: ERROR and above, JSON lines, size-capped
- run log file: records of the ``hosterprobe.run`` logger, JSON lines, size-capped

All records pass through a queue; the sinks run on a listener thread.
"""

from __future__ import annotations

import atexit
import copy
import logging
import queue
import sys
from datetime import datetime, timezone
from logging.handlers import QueueHandler, QueueListener, RotatingFileHandler
from typing import Any, Optional

import structlog

from hosterprobe.infrastructure.config.schema import AppConfig

log = structlog.get_logger(__name__)

RUN_LOGGER_NAME = "hosterprobe.run"

# Libraries that log every request; never chattier than WARNING.
_NOISY_LOGGERS: tuple[str, ...] = ("httpx", "httpcore")

_LISTENER: Optional[QueueListener] = None


def _stamp_foreign_record_time(
    _: Any, __: Any, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Timestamp stdlib records with their creation time (UTC).

    Formatting happens later on the listener thread, so a TimeStamper in
    the foreign chain would record the wrong moment.
    """
    record = event_dict.get("_record")
    if isinstance(record, logging.LogRecord):
        created = datetime.fromtimestamp(record.created, tz=timezone.utc)
        event_dict["timestamp"] = created.isoformat().replace("+00:00", "Z")
    return event_dict


def _formatter(
    renderer: structlog.typing.Processor,
) -> structlog.stdlib.ProcessorFormatter:
    return structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=[
            structlog.contextvars.merge_contextvars,
            _stamp_foreign_record_time,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
        ],
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )


class _RunLoggerFilter(logging.Filter):
    """Pass records of the run logger and its children only."""

    def filter(self, record: logging.LogRecord) -> bool:
        return record.name == RUN_LOGGER_NAME or record.name.startswith(
            RUN_LOGGER_NAME + "."
        )


class _EventDictQueueHandler(QueueHandler):
    def prepare(self, record: logging.LogRecord) -> logging.LogRecord:
        # The base implementation renders record.msg to a string; the
        # formatter on the listener side needs the event dict.
        return copy.copy(record)


def _rotating_file(config: AppConfig, path: Any) -> RotatingFileHandler:
    return RotatingFileHandler(
        path,
        maxBytes=config.log_max_bytes,
        backupCount=config.log_backup_count,
        encoding="utf-8",
        delay=True,
    )


def build_handlers(config: AppConfig) -> list[logging.Handler]:
    """Console, error-log and run-log handlers, in that order.

    File handlers open lazily, so building them creates no files.
    """
    console_renderer: structlog.typing.Processor
    if config.log_format == "json":
        console_renderer = structlog.processors.JSONRenderer()
    else:
        console_renderer = structlog.dev.ConsoleRenderer()
    json_lines = _formatter(structlog.processors.JSONRenderer())

    console = logging.StreamHandler(stream=sys.stderr)
    console.setFormatter(_formatter(console_renderer))
    console.setLevel(config.console_log_level)

    errors = _rotating_file(config, config.error_log)
    errors.setFormatter(json_lines)
    errors.setLevel(logging.ERROR)

    run = _rotating_file(config, config.run_log)
    run.setFormatter(json_lines)
    run.setLevel(logging.INFO)
    run.addFilter(_RunLoggerFilter())

    return [console, errors, run]


def shutdown_logging() -> None:
    """Drain the queue and stop the listener thread (idempotent)."""
    global _LISTENER
    listener, _LISTENER = _LISTENER, None
    if listener is not None:
        listener.stop()


def _install_queue(config: AppConfig) -> None:
    global _LISTENER

    shutdown_logging()

    records: queue.Queue[logging.LogRecord] = queue.Queue()

    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)
    root.addHandler(_EventDictQueueHandler(records))
    console_level = logging.getLevelName(config.console_log_level)
    # The run log wants INFO even when the console is quieter.
    root.setLevel(min(console_level, logging.INFO))
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(console_level, logging.WARNING))

    _LISTENER = QueueListener(
        records, *build_handlers(config), respect_handler_level=True
    )
    _LISTENER.start()
    atexit.register(shutdown_logging)


def configure_logging(config: AppConfig) -> None:
    """Configure structlog and route every record through the queue."""
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.format_exc_info,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    _install_queue(config)

    log.info(
        "logging_configured",
        log_format=config.log_format,
        console_log_level=config.console_log_level,
        error_log=str(config.error_log),
        run_log=str(config.run_log),
    )
