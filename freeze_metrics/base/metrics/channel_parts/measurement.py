"""Timing handle yielded by ``MetricsSender.measure``.

The producer records the response size on it while the surrounding context
manager measures elapsed time with ``time.perf_counter_ns``.
"""
from __future__ import annotations

import json
from typing import Any, Optional


def payload_size(payload: Any) -> int:
    """Return the size in bytes of a response payload.

    Raw ``bytes`` count as-is, strings by their UTF-8 encoding; anything else is
    measured as compact JSON, the same way RPC responses are serialized.
    """
    if isinstance(payload, (bytes, bytearray, memoryview)):
        return len(payload)
    if isinstance(payload, str):
        return len(payload.encode("utf-8"))
    return len(json.dumps(payload, separators=(",", ":"), default=str).encode("utf-8"))


class Measurement:
    """Mutable record of one in-progress measured operation."""

    __slots__ = ("method_name", "response_size", "duration")

    def __init__(self, method_name: str) -> None:
        self.method_name = method_name
        self.response_size = 0
        self.duration: Optional[int] = None

    def record_size(self, size: int) -> None:
        """Set the response size in bytes."""
        self.response_size = size

    def record_payload(self, payload: Any) -> int:
        """Set the response size from a payload object and return it."""
        self.response_size = payload_size(payload)
        return self.response_size

    def __repr__(self) -> str:  # pragma: no cover - introspection aid
        return (
            f"Measurement(method_name={self.method_name!r}, "
            f"response_size={self.response_size}, duration={self.duration})"
        )


__all__ = ["Measurement", "payload_size"]
