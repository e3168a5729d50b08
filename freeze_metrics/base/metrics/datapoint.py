"""Metric datapoint emitted once per completed remote call.

A datapoint is created by a producer right after an operation completes, sent
once through the metrics channel and consumed exactly once by the aggregator.
"""
from __future__ import annotations

from dataclasses import dataclass

from ..errors import ErrorCode, MetricsError

# Response size in bytes.
ResponseSize = int

# Response time in nanoseconds.
ResponseTime = int


def _is_count(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value >= 0


@dataclass(frozen=True)
class MetricDataPoint:
    """One observation of a completed operation.

    Attributes:
        method_name: Stable identifier of the operation kind, e.g. ``get_logs``.
        duration: Elapsed wall-clock time in nanoseconds.
        response_size: Size of the response payload in bytes.
    """

    method_name: str
    duration: ResponseTime
    response_size: ResponseSize

    def __post_init__(self) -> None:
        if not isinstance(self.method_name, str) or not self.method_name:
            raise MetricsError(
                ErrorCode.INVALID_DATAPOINT,
                f"method_name must be a non-empty string, got {self.method_name!r}",
            )
        if not _is_count(self.duration):
            raise MetricsError(
                ErrorCode.INVALID_DATAPOINT,
                f"duration must be a non-negative integer, got {self.duration!r}",
                method_name=self.method_name,
            )
        if not _is_count(self.response_size):
            raise MetricsError(
                ErrorCode.INVALID_DATAPOINT,
                f"response_size must be a non-negative integer, got {self.response_size!r}",
                method_name=self.method_name,
            )


__all__ = ["MetricDataPoint", "ResponseSize", "ResponseTime"]
