"""freeze_metrics package

Per-method call metrics for concurrent collection pipelines.

Worker tasks emit one datapoint per completed remote call (method name,
elapsed nanoseconds, response bytes) through an unbounded channel; a single
aggregator folds them into max/min/avg/total statistics per method, and the
reporter renders the result as a table once the stream ends.

Public API (re-exported):
    - Version: ``__version__``
    - Exceptions: :class:`MetricsError`, :class:`ErrorCode`
    - Channel: :func:`open_channel`, :class:`MetricsSender`, :class:`MetricsReceiver`
    - Aggregation: :func:`run_aggregation`, :func:`aggregate`, :class:`MethodReport`
    - Reporting: :func:`render_report`, :func:`print_report`
    - Orchestration: :class:`MetricsSession`, :func:`collect_reports`
    - Settings: :class:`MetricsSettings`, :func:`get_metrics_config`
"""
from __future__ import annotations

from .base.dto import MetricsSettings
from .base.errors import ErrorCode, MetricsError
from .base.metrics import (
    MethodReport,
    MetricDataPoint,
    MetricsReceiver,
    MetricsSender,
    MetricsSession,
    ReportSet,
    aggregate,
    collect_reports,
    open_channel,
    print_report,
    render_report,
    report_set_to_dict,
    run_aggregation,
)
from .base.logging import configure_logger
from .config import get_metrics_config

__version__ = "0.1.0"


def configure_logging(settings: MetricsSettings | None = None):
    """Apply the level and format from ``settings`` to the shared ``metrics`` logger.

    Settings default to :func:`get_metrics_config` (file, env, defaults).
    """
    settings = settings or get_metrics_config()
    return configure_logger(level=settings.log_level, json_mode=settings.json_logs)


__all__ = [
    "__version__",
    "MetricsError",
    "ErrorCode",
    "MetricDataPoint",
    "open_channel",
    "MetricsSender",
    "MetricsReceiver",
    "MethodReport",
    "ReportSet",
    "aggregate",
    "run_aggregation",
    "render_report",
    "print_report",
    "report_set_to_dict",
    "MetricsSession",
    "collect_reports",
    "MetricsSettings",
    "get_metrics_config",
    "configure_logging",
]
