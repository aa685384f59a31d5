"""Layered configuration loading.

Layers, lowest precedence first: built-in defaults, the config file
(YAML, or JSON for ``.json`` paths), ``HOSTERPROBE_*`` environment
variables (a ``.env`` file feeds this layer), CLI overrides.  Every layer
is normalized to the sectioned shape before merging, so flat and
sectioned keys can be mixed freely.
"""

from __future__ import annotations

import json
from copy import deepcopy
from pathlib import Path
from typing import Any, Iterator, Mapping

import structlog
import yaml
from dotenv import load_dotenv

from .defaults import DEFAULT_CONFIG
from .schema import AppConfig, EnvOverrides

log = structlog.get_logger(__name__)

_SECTIONS: frozenset[str] = frozenset(
    {"http", "logging", "proxy", "input", "result_handler"}
)

_TOP_LEVEL: tuple[str, ...] = (
    "app_name",
    "environment",
    "retries",
    "delay_ms",
    "max_redirects",
)

# flat key -> (section, key inside section)
_FLAT_KEYS: dict[str, tuple[str, str]] = {
    "http_timeout_seconds": ("http", "timeout_seconds"),
    "http_pool_size": ("http", "pool_size"),
    "http_user_agent": ("http", "user_agent"),
    "console_log_level": ("logging", "console_level"),
    "log_format": ("logging", "format"),
    "error_log": ("logging", "error_log"),
    "run_log": ("logging", "run_log"),
    "log_max_bytes": ("logging", "max_bytes"),
    "log_backup_count": ("logging", "backup_count"),
    "proxy_enabled": ("proxy", "enabled"),
    "proxy_endpoints": ("proxy", "endpoints"),
    "proxy_file": ("proxy", "file"),
    "input_source": ("input", "source"),
    "input_path": ("input", "path"),
    "input_query": ("input", "query"),
    "link_field": ("input", "link_field"),
    "result_handler": ("result_handler", "name"),
    "slack_webhook_url": ("result_handler", "slack_webhook_url"),
    "notify_alive": ("result_handler", "notify_alive"),
}


def _deep_merge(base: dict[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    """Merge ``override`` into ``base`` in place; nested mappings merge key by key."""
    for key, value in override.items():
        current = base.get(key)
        if isinstance(current, dict) and isinstance(value, Mapping):
            _deep_merge(current, value)
        else:
            base[key] = value
    return base


def _normalize_layer(data: Mapping[str, Any]) -> dict[str, Any]:
    """Bring one layer into the sectioned shape ``AppConfig`` validates.

    Unknown keys are dropped.  ``delay`` (milliseconds) is accepted as an
    alias of ``delay_ms`` for configs written for older releases.
    """
    out: dict[str, Any] = {
        name: dict(block)
        for name, block in data.items()
        if name in _SECTIONS and isinstance(block, Mapping)
    }
    out.update({key: data[key] for key in _TOP_LEVEL if key in data})
    if "delay_ms" not in out and "delay" in data:
        out["delay_ms"] = data["delay"]

    for flat_key, (section, key) in _FLAT_KEYS.items():
        value = data.get(flat_key)
        if flat_key in data and not isinstance(value, Mapping):
            out.setdefault(section, {})[key] = value
    return out


def _read_config_file(path: Path) -> dict[str, Any]:
    if not path.exists():
        raise FileNotFoundError(path)
    text = path.read_text(encoding="utf-8")
    if path.suffix.lower() == ".json":
        parsed = json.loads(text) if text.strip() else None
    else:
        parsed = yaml.safe_load(text)
    if parsed is None:
        return {}
    if not isinstance(parsed, dict):
        raise ValueError(
            f"Config file {path} must hold a mapping, got {type(parsed).__name__}"
        )
    return parsed


def _layers(
    config_path: Path | None,
    cli_overrides: Mapping[str, Any],
) -> Iterator[tuple[str, Mapping[str, Any]]]:
    yield "defaults", deepcopy(DEFAULT_CONFIG)
    if config_path is not None:
        yield "file", _read_config_file(config_path)
    yield "env", EnvOverrides().to_update_dict()
    yield "cli", cli_overrides


def load_config(
    *,
    config_path: Path | None = None,
    dotenv_path: Path | None = None,
    cli_overrides: Mapping[str, Any] | None = None,
) -> AppConfig:
    """Build the validated ``AppConfig`` from all layers.

    Raises:
        FileNotFoundError: ``config_path`` or ``dotenv_path`` does not exist.
        ValueError: the config file is not a mapping (or not valid JSON).
        pydantic.ValidationError: the merged values are invalid.

    Reads files only; nothing is created on disk.
    """
    if dotenv_path is not None:
        if not dotenv_path.exists():
            raise FileNotFoundError(dotenv_path)
        # Variables already set in the process win over the file.
        load_dotenv(dotenv_path, override=False)

    merged: dict[str, Any] = {}
    for name, layer in _layers(config_path, cli_overrides or {}):
        normalized = _normalize_layer(layer)
        log.debug("config_layer_applied", layer=name, keys=sorted(normalized))
        _deep_merge(merged, normalized)

    return AppConfig.model_validate(merged)
