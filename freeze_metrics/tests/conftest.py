"""Pytest configuration for the metrics test suite.

Isolates every test from ambient ``METRICS_*`` environment variables and from
the cached config file contents, and restores the shared logger to INFO/JSON.
"""

from __future__ import annotations

from typing import Iterator

import pytest

from freeze_metrics.base.logging import configure_logger
from freeze_metrics.config import reset_config_cache
from freeze_metrics.config.env import CONFIG_FILE_ENV, ENV_FIELD_MAP


@pytest.fixture(autouse=True)
def clean_metrics_env(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Clear metrics env vars and the config cache around each test."""

    for var in (*ENV_FIELD_MAP.values(), CONFIG_FILE_ENV):
        monkeypatch.delenv(var, raising=False)
    reset_config_cache()
    configure_logger(level="INFO", json_mode=True, file_path=None)
    yield
    reset_config_cache()
