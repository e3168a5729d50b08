"""Typed settings object for metrics reporting and logging.

External dependencies
---------------------
- Pydantic v2 ``BaseModel`` for validation and ``.model_dump()`` convenience.

Failure modes & side effects
----------------------------
- Pure data container. Pydantic raises ``ValidationError`` for out-of-range or
  mistyped values; ``freeze_metrics.config`` wraps it in ``MetricsError``.
"""
from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from rich import box

from ...config.defaults import (
    DEFAULT_JSON_LOGS,
    DEFAULT_LOG_LEVEL,
    DEFAULT_SIZE_PRECISION,
    DEFAULT_TABLE_BOX,
    DEFAULT_TIME_PRECISION,
)


class MetricsSettings(BaseModel):
    """Rendering and logging preferences for a metrics report.

    Attributes
    ----------
    size_precision:
        Decimal places for magnitude-scaled sizes (``1.25 kB``).
    time_precision:
        Decimal places for durations rendered in seconds.
    table_title:
        Optional caption rendered above the table.
    table_box:
        Name of a ``rich.box`` style (e.g. ``SQUARE``, ``ASCII``).
    table_width:
        Fixed console width when rendering to text; ``None`` lets rich decide.
    sort_methods:
        Sort rows by method name instead of mapping order.
    log_level:
        Level name for the shared ``metrics`` logger.
    json_logs:
        JSON formatted log lines when true, plain text otherwise.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    size_precision: int = Field(default=DEFAULT_SIZE_PRECISION, ge=0, le=9)
    time_precision: int = Field(default=DEFAULT_TIME_PRECISION, ge=0, le=9)
    table_title: Optional[str] = None
    table_box: str = DEFAULT_TABLE_BOX
    table_width: Optional[int] = Field(default=None, ge=40)
    sort_methods: bool = False
    log_level: str = DEFAULT_LOG_LEVEL
    json_logs: bool = DEFAULT_JSON_LOGS

    @field_validator("table_box")
    @classmethod
    def _known_box(cls, value: str) -> str:
        name = value.strip().upper()
        if not isinstance(getattr(box, name, None), box.Box):
            raise ValueError(f"unknown rich box style: {value!r}")
        return name

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        name = value.strip().upper()
        if name not in {"DEBUG", "INFO", "WARN", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"unknown log level: {value!r}")
        return name


__all__ = ["MetricsSettings"]
