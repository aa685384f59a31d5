from __future__ import annotations

import argparse
import asyncio
import sys
from collections.abc import Iterable
from pathlib import Path
from typing import Any

import structlog
from pydantic import ValidationError

from hosterprobe.domain.exceptions import InputSourceError
from hosterprobe.infrastructure.config import load_config
from hosterprobe.infrastructure.logging import configure_logging, shutdown_logging
from hosterprobe.interfaces.composition import run_batch

log = structlog.get_logger(__name__)

EXIT_OK = 0
EXIT_INPUT_FAILED = 1
EXIT_CONFIG_ERROR = 2


def _parse_args(argv: Iterable[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="hosterprobe",
        description="Verify whether file-hoster download links are still alive.",
    )

    parser.add_argument(
        "urls",
        nargs="*",
        metavar="URL",
        help="Links to verify (bypasses the configured input source).",
    )

    # Configuration layers
    parser.add_argument(
        "--config",
        default=None,
        help="Config file (YAML; JSON when the name ends in .json).",
    )
    parser.add_argument(
        "--dotenv",
        default=None,
        help=".env file feeding the HOSTERPROBE_* variables.",
    )
    parser.add_argument(
        "--retries",
        default=None,
        type=int,
        help="Max retry attempts per link.",
    )
    parser.add_argument(
        "--delay",
        default=None,
        type=int,
        metavar="MS",
        help="Fixed delay in milliseconds before each link's first attempt.",
    )
    parser.add_argument(
        "--input",
        default=None,
        help="Links file (YAML/JSON/CSV) or SQLite database path.",
    )
    parser.add_argument(
        "--link-field",
        default=None,
        help="Attribute holding the URL in each input record.",
    )
    parser.add_argument(
        "--console-log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Override console log level.",
    )
    parser.add_argument(
        "--log-format",
        default=None,
        choices=["json", "console"],
        help="Override log format.",
    )

    return parser.parse_args(argv)


def _cli_overrides(args: argparse.Namespace) -> dict[str, Any]:
    overrides: dict[str, Any] = {}
    if args.retries is not None:
        overrides["retries"] = args.retries
    if args.delay is not None:
        overrides["delay_ms"] = args.delay
    if args.input:
        overrides["input_path"] = args.input
    if args.link_field:
        overrides["link_field"] = args.link_field
    if args.console_log_level:
        overrides["console_log_level"] = args.console_log_level
    if args.log_format:
        overrides["log_format"] = args.log_format
    return overrides


def start(argv: Iterable[str] | None = None) -> int:
    """
    Process entrypoint.

    Loads config exactly once, configures logging, then runs one batch.
    """
    if argv is None:
        argv = sys.argv[1:]

    args = _parse_args(argv)

    config_path = Path(args.config) if args.config else None
    dotenv_path = Path(args.dotenv) if args.dotenv else None

    try:
        config = load_config(
            config_path=config_path,
            dotenv_path=dotenv_path,
            cli_overrides=_cli_overrides(args),
        )
    except (FileNotFoundError, ValueError, ValidationError) as exc:
        # Logging is not configured yet.
        print(f"hosterprobe: invalid configuration: {exc}", file=sys.stderr)
        return EXIT_CONFIG_ERROR

    configure_logging(config)
    try:
        report = asyncio.run(run_batch(config, urls=args.urls))
    except InputSourceError as exc:
        log.error("input_source_failed", error=str(exc))
        return EXIT_INPUT_FAILED
    finally:
        shutdown_logging()

    return EXIT_INPUT_FAILED if report.aborted else EXIT_OK


if __name__ == "__main__":
    raise SystemExit(start())
