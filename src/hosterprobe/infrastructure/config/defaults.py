"""Hardcoded default configuration values."""

from __future__ import annotations

from typing import Any

DEFAULT_CONFIG: dict[str, Any] = {
    "app_name": "hosterprobe",
    "environment": "dev",
    "retries": 0,
    "delay_ms": None,
    "max_redirects": 10,
    "http": {
        "timeout_seconds": 10.0,
        "pool_size": 5,
        "user_agent": (
            "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_10_1) "
            "AppleWebKit/537.36 (KHTML, like Gecko) "
            "Chrome/41.0.2227.1 Safari/537.36"
        ),
    },
    "logging": {
        "console_level": "ERROR",
        "format": None,  # Derived from environment in schema.py
        "error_log": "error.log",
        "run_log": "unsupported_services.log",
        "max_bytes": 100_000_000,
        "backup_count": 1,
    },
    "proxy": {
        "enabled": False,
        "endpoints": [],
        "file": None,
    },
    "input": {
        "source": "file",
        "path": None,
        "query": None,
        "link_field": "link",
    },
    "result_handler": {
        "name": "console",
        "slack_webhook_url": None,
        "notify_alive": False,
    },
}
