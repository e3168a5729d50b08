"""Method report dataclass.

Immutable summary of every datapoint observed for one method. Kept separate to
enforce one-class-per-file governance.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict

from ..datapoint import ResponseSize, ResponseTime


@dataclass(frozen=True)
class MethodReport:
    """Aggregated statistics for a single method.

    Attributes:
        max_size: Largest response size (bytes).
        min_size: Smallest response size (bytes).
        max_time: Longest call duration (ns).
        min_time: Shortest call duration (ns).
        avg_size: ``total_size // count``.
        avg_time: ``total_duration // count``.
        total_duration: Sum of all call durations (ns).
        total_size: Sum of all response sizes (bytes).
        count: Number of observed datapoints (always >= 1).
    """

    max_size: ResponseSize
    min_size: ResponseSize
    max_time: ResponseTime
    min_time: ResponseTime
    avg_size: ResponseSize
    avg_time: ResponseTime
    total_duration: ResponseTime
    total_size: ResponseSize
    count: int

    def to_dict(self) -> Dict[str, Any]:
        """Return a dictionary representation suitable for JSON serialization."""
        return asdict(self)


__all__ = ["MethodReport"]
