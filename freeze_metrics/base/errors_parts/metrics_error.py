"""
Structured metrics error exception type.

Carries a normalized `ErrorCode` so producers can decide whether a failure is a
dropped metric (never fatal) or a wiring mistake.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .error_code import ErrorCode


@dataclass
class MetricsError(Exception):
    """Represents a structured metrics error with a normalized error code.

    Attributes:
        code: Normalized :class:`ErrorCode` classification for the failure.
        message: Human-readable error message suitable for logging.
        method_name: Method whose datapoint was involved, when known.
        raw: Optional original exception for diagnostics.
    """

    code: ErrorCode
    message: str
    method_name: Optional[str] = None
    raw: Optional[Exception] = None

    def __str__(self) -> str:  # pragma: no cover - trivial
        return f"{self.method_name or '-'} {self.code.value}: {self.message}"


__all__ = ["MetricsError"]
