"""Environment variable mapping for metrics settings.

Each ``MetricsSettings`` field can be overridden by one ``METRICS_*`` variable.
Helpers never raise on unset variables; type coercion and validation are left
to the settings model.
"""
from __future__ import annotations

import os
from typing import Any, Dict, Mapping, Optional

CONFIG_FILE_ENV = "METRICS_CONFIG_FILE"

# settings field -> environment variable
ENV_FIELD_MAP: Dict[str, str] = {
    "size_precision": "METRICS_SIZE_PRECISION",
    "time_precision": "METRICS_TIME_PRECISION",
    "table_title": "METRICS_TABLE_TITLE",
    "table_box": "METRICS_TABLE_BOX",
    "table_width": "METRICS_TABLE_WIDTH",
    "sort_methods": "METRICS_SORT_METHODS",
    "log_level": "METRICS_LOG_LEVEL",
    "json_logs": "METRICS_JSON_LOGS",
}


def env_overrides(environ: Optional[Mapping[str, str]] = None) -> Dict[str, Any]:
    """Return settings fields present in the environment.

    Blank values are ignored so an exported-but-empty variable does not
    clobber file or default values.
    """
    env = os.environ if environ is None else environ
    out: Dict[str, Any] = {}
    for field, var in ENV_FIELD_MAP.items():
        val = env.get(var)
        if val is not None and val.strip():
            out[field] = val.strip()
    return out


def config_file_path(environ: Optional[Mapping[str, str]] = None) -> Optional[str]:
    """Return the configured settings file path, if any."""
    env = os.environ if environ is None else environ
    path = env.get(CONFIG_FILE_ENV)
    return path.strip() if path and path.strip() else None


__all__ = ["CONFIG_FILE_ENV", "ENV_FIELD_MAP", "env_overrides", "config_file_path"]
