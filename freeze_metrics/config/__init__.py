"""Unified configuration layer for metrics reporting.

Sources are merged in a predictable order (later wins):
    1. Built-in defaults (``MetricsSettings`` field defaults)
    2. Optional config file pointed to by ``METRICS_CONFIG_FILE`` (JSON or YAML)
    3. Environment variables (``METRICS_SIZE_PRECISION``, ``METRICS_LOG_LEVEL``...)
    4. In-code overrides passed to :func:`get_metrics_config`

The config file may hold the settings at the top level or under a ``metrics``
section::

    metrics:
      size_precision: 3
      sort_methods: true

Public API
----------
* get_metrics_config(overrides: dict | None = None) -> MetricsSettings
* reset_config_cache() -> None
"""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import ValidationError

from .env import config_file_path, env_overrides

_FILE_CACHE: Optional[Dict[str, Any]] = None
_FILE_CACHE_PATH: Optional[str] = None


def _invalid(message: str, raw: Optional[Exception] = None):
    from ..base.errors import ErrorCode, MetricsError

    return MetricsError(ErrorCode.CONFIG_INVALID, message, raw=raw)


def _load_external_config() -> Dict[str, Any]:
    global _FILE_CACHE, _FILE_CACHE_PATH
    path = config_file_path()
    if _FILE_CACHE is not None and _FILE_CACHE_PATH == path:
        return _FILE_CACHE
    data: Any = {}
    if path:
        p = Path(path)
        if not p.is_file():
            raise _invalid(f"metrics config file not found: {path}")
        text = p.read_text(encoding="utf-8")
        try:
            data = json.loads(text)
        except ValueError:
            try:
                data = yaml.safe_load(text) or {}
            except yaml.YAMLError as exc:
                raise _invalid(f"metrics config file is neither JSON nor YAML: {path}", exc) from exc
        if not isinstance(data, dict):
            raise _invalid(f"metrics config file must contain a mapping: {path}")
        section = data.get("metrics")
        if isinstance(section, dict):
            data = section
    _FILE_CACHE = data
    _FILE_CACHE_PATH = path
    return data


def reset_config_cache() -> None:
    """Forget the cached config file contents (tests, hot reload)."""
    global _FILE_CACHE, _FILE_CACHE_PATH
    _FILE_CACHE = None
    _FILE_CACHE_PATH = None


def get_metrics_config(overrides: Optional[Dict[str, Any]] = None):
    """Return merged :class:`MetricsSettings`.

    Raises:
        MetricsError: ``CONFIG_INVALID`` when the file is unreadable or any
            merged value fails validation.
    """
    from ..base.dto import MetricsSettings

    cfg: Dict[str, Any] = {}
    cfg |= _load_external_config()
    cfg |= env_overrides()
    if overrides:
        cfg |= {k: v for k, v in overrides.items() if v is not None}
    try:
        return MetricsSettings.model_validate(cfg)
    except ValidationError as exc:
        raise _invalid(f"invalid metrics settings: {exc.error_count()} error(s)", exc) from exc


__all__ = ["get_metrics_config", "reset_config_cache"]
