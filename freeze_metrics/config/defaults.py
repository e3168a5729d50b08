"""Built-in defaults for metrics reporting and logging."""
from __future__ import annotations

NANOS_PER_SECOND = 1_000_000_000

DEFAULT_SIZE_PRECISION = 2
DEFAULT_TIME_PRECISION = 6
DEFAULT_TABLE_BOX = "SQUARE"
DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_JSON_LOGS = True

__all__ = [
    "NANOS_PER_SECOND",
    "DEFAULT_SIZE_PRECISION",
    "DEFAULT_TIME_PRECISION",
    "DEFAULT_TABLE_BOX",
    "DEFAULT_LOG_LEVEL",
    "DEFAULT_JSON_LOGS",
]
