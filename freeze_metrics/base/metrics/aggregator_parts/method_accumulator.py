"""Running per-method aggregate state.

An accumulator only exists once its method has been observed: it is seeded
from that first datapoint, so ``count`` is never zero and min/max never hold a
placeholder value.
"""
from __future__ import annotations

from ..datapoint import MetricDataPoint
from .method_report import MethodReport


class MethodAccumulator:
    """Mutable max/min/total/count fold for one method."""

    __slots__ = (
        "max_size",
        "min_size",
        "total_size",
        "max_time",
        "min_time",
        "total_duration",
        "count",
    )

    def __init__(self, first: MetricDataPoint):
        self.max_size = first.response_size
        self.min_size = first.response_size
        self.total_size = first.response_size
        self.max_time = first.duration
        self.min_time = first.duration
        self.total_duration = first.duration
        self.count = 1

    def update(self, datapoint: MetricDataPoint) -> None:
        """Fold one more datapoint into the running aggregates."""
        size = datapoint.response_size
        duration = datapoint.duration
        if size > self.max_size:
            self.max_size = size
        if size < self.min_size:
            self.min_size = size
        self.total_size += size
        if duration > self.max_time:
            self.max_time = duration
        if duration < self.min_time:
            self.min_time = duration
        self.total_duration += duration
        self.count += 1

    def merge(self, other: "MethodAccumulator") -> None:
        """Fold another accumulator for the same method into this one."""
        self.max_size = max(self.max_size, other.max_size)
        self.min_size = min(self.min_size, other.min_size)
        self.total_size += other.total_size
        self.max_time = max(self.max_time, other.max_time)
        self.min_time = min(self.min_time, other.min_time)
        self.total_duration += other.total_duration
        self.count += other.count

    def report(self) -> MethodReport:
        """Freeze the current aggregates into a :class:`MethodReport`."""
        return MethodReport(
            max_size=self.max_size,
            min_size=self.min_size,
            max_time=self.max_time,
            min_time=self.min_time,
            avg_size=self.total_size // self.count,
            avg_time=self.total_duration // self.count,
            total_duration=self.total_duration,
            total_size=self.total_size,
            count=self.count,
        )

    def __repr__(self) -> str:  # pragma: no cover - introspection aid
        return (
            f"MethodAccumulator(count={self.count}, total_size={self.total_size}, "
            f"total_duration={self.total_duration})"
        )


__all__ = ["MethodAccumulator"]
