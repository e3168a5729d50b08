"""Streaming per-method call metrics.

Producers emit one :class:`MetricDataPoint` per completed call through the
metrics channel; :func:`run_aggregation` folds them into a report set that
:func:`print_report` renders as a table.
"""
from __future__ import annotations

from .aggregator import ReportSet, aggregate, finalize, observe, run_aggregation
from .aggregator_parts import MethodAccumulator, MethodReport
from .channel import Measurement, MetricsReceiver, MetricsSender, open_channel, payload_size
from .datapoint import MetricDataPoint, ResponseSize, ResponseTime
from .reporting import (
    HEADERS,
    build_table,
    format_seconds,
    format_size,
    print_report,
    render_report,
    report_set_to_dict,
)
from .session import MetricsSession, collect_reports

__all__ = [
    "MetricDataPoint",
    "ResponseSize",
    "ResponseTime",
    "open_channel",
    "MetricsSender",
    "MetricsReceiver",
    "Measurement",
    "payload_size",
    "MethodAccumulator",
    "MethodReport",
    "ReportSet",
    "observe",
    "finalize",
    "aggregate",
    "run_aggregation",
    "HEADERS",
    "format_size",
    "format_seconds",
    "build_table",
    "render_report",
    "print_report",
    "report_set_to_dict",
    "MetricsSession",
    "collect_reports",
]
