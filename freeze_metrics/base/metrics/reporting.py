"""Render a report set as a table.

Sizes are magnitude-scaled with ``rich.filesize.decimal`` (``1.25 kB``), with
sub-kilobyte values shown in bytes at the same precision (``300.00 B``);
durations are stored in nanoseconds and shown in seconds. Rendering is split
from writing: :func:`render_report` returns text, :func:`print_report` writes
the table to standard output. An empty report set renders the header only.
"""
from __future__ import annotations

import io
from typing import Any, Dict, Iterable, List, Optional, Tuple

from rich import box
from rich.console import Console
from rich.filesize import decimal
from rich.table import Table

from ...config.defaults import NANOS_PER_SECOND
from ..dto import MetricsSettings
from .aggregator import ReportSet
from .aggregator_parts import MethodReport

HEADERS: Tuple[str, ...] = (
    "Method",
    "Max Size",
    "Min Size",
    "Max Time (s)",
    "Min Time (s)",
    "Avg Time (s)",
    "Avg Size",
    "Total Duration (s)",
    "Total Size",
)

_RENDER_WIDTH = 160
_KILO = 1000


def format_size(size: int, precision: int = 2) -> str:
    """Return a human-readable size such as ``1.25 kB`` or ``300.00 B``."""
    if size < _KILO:
        return f"{size:.{precision}f} B"
    return decimal(size, precision=precision)


def format_seconds(nanos: int, precision: int = 6) -> str:
    """Return nanoseconds rendered as seconds with fixed precision."""
    return f"{nanos / NANOS_PER_SECOND:.{precision}f}"


def _rows(report_set: ReportSet, sort_methods: bool) -> Iterable[Tuple[str, MethodReport]]:
    items = report_set.items()
    return sorted(items, key=lambda kv: kv[0]) if sort_methods else items


def format_row(method: str, report: MethodReport, settings: MetricsSettings) -> List[str]:
    """Return the table cells for one method, in ``HEADERS`` order."""
    sp, tp = settings.size_precision, settings.time_precision
    return [
        method,
        format_size(report.max_size, sp),
        format_size(report.min_size, sp),
        format_seconds(report.max_time, tp),
        format_seconds(report.min_time, tp),
        format_seconds(report.avg_time, tp),
        format_size(report.avg_size, sp),
        format_seconds(report.total_duration, tp),
        format_size(report.total_size, sp),
    ]


def build_table(report_set: ReportSet, settings: Optional[MetricsSettings] = None) -> Table:
    """Build a ``rich`` table with one row per method."""
    settings = settings or MetricsSettings()
    table = Table(
        title=settings.table_title,
        box=getattr(box, settings.table_box),
        show_header=True,
        show_lines=True,
    )
    for i, header in enumerate(HEADERS):
        table.add_column(header, justify="left" if i == 0 else "right", no_wrap=True)
    for method, report in _rows(report_set, settings.sort_methods):
        table.add_row(*format_row(method, report, settings))
    return table


def render_report(report_set: ReportSet, settings: Optional[MetricsSettings] = None) -> str:
    """Render the report table to plain text (no ANSI styling)."""
    settings = settings or MetricsSettings()
    buffer = io.StringIO()
    console = Console(
        file=buffer,
        width=settings.table_width or _RENDER_WIDTH,
        color_system=None,
        force_terminal=False,
        highlight=False,
    )
    console.print(build_table(report_set, settings))
    return buffer.getvalue()


def print_report(
    report_set: ReportSet,
    settings: Optional[MetricsSettings] = None,
    console: Optional[Console] = None,
) -> None:
    """Write the report table to standard output (or ``console``)."""
    settings = settings or MetricsSettings()
    if console is None:
        console = Console(width=settings.table_width, highlight=False)
    console.print(build_table(report_set, settings))


def report_set_to_dict(report_set: ReportSet) -> Dict[str, Dict[str, Any]]:
    """Return plain dictionaries suitable for JSON or YAML sinks."""
    return {method: report.to_dict() for method, report in report_set.items()}


__all__ = [
    "HEADERS",
    "format_size",
    "format_seconds",
    "format_row",
    "build_table",
    "render_report",
    "print_report",
    "report_set_to_dict",
]
