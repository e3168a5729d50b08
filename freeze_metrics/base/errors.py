"""Error taxonomy facade for the metrics subsystem."""
from __future__ import annotations

from .errors_parts import ErrorCode, MetricsError

__all__ = ["ErrorCode", "MetricsError"]
