"""Producer-side handle of the metrics channel.

Producer contract
-----------------
- ``send`` never blocks and never fails because of backlog (the queue is
  unbounded). It raises ``MetricsError(CHANNEL_CLOSED)`` when the receiver was
  dropped or this handle was already released.
- ``emit`` and ``measure`` are fire-and-forget: a closed channel or an invalid
  datapoint is counted in ``dropped`` and logged, never raised. Metrics loss
  must not fail the collection workload.
- Each concurrent producer should own its own handle (``clone``); the stream
  ends once every handle has been released, either by ``close`` or by the
  handle being garbage-collected.
"""
from __future__ import annotations

import logging
import time
import weakref
from contextlib import contextmanager
from typing import Iterator

from ...errors import ErrorCode, MetricsError
from ...logging import get_logger, log_event
from ..datapoint import MetricDataPoint
from .channel_state import ChannelState
from .measurement import Measurement

_logger = get_logger("metrics.channel")


class MetricsSender:
    """Cloneable, closeable sending handle."""

    __slots__ = ("_state", "_closed", "_finalizer", "dropped", "__weakref__")

    def __init__(self, state: ChannelState) -> None:
        self._state = state
        self._closed = False
        self.dropped = 0
        state.add_sender()
        # runs at most once: on close() or when the handle is collected
        self._finalizer = weakref.finalize(self, state.release_sender)
        self._finalizer.atexit = False

    @property
    def closed(self) -> bool:
        """Whether this handle has been released."""
        return self._closed

    def clone(self) -> "MetricsSender":
        """Return a new handle on the same channel."""
        if self._closed:
            raise MetricsError(ErrorCode.CHANNEL_CLOSED, "cannot clone a released sender")
        return MetricsSender(self._state)

    def send(self, datapoint: MetricDataPoint) -> None:
        """Enqueue a datapoint for the aggregator."""
        if self._closed:
            raise MetricsError(
                ErrorCode.CHANNEL_CLOSED,
                "sender handle was released",
                method_name=datapoint.method_name,
            )
        self._state.push(datapoint)

    def emit(self, method_name: str, duration: int, response_size: int) -> None:
        """Record one completed call; failures are dropped, not raised."""
        try:
            self.send(MetricDataPoint(method_name, duration, response_size))
        except MetricsError as exc:
            self.dropped += 1
            level = logging.DEBUG if exc.code is ErrorCode.CHANNEL_CLOSED else logging.WARNING
            log_event(
                _logger,
                "metrics.datapoint.dropped",
                level=level,
                method=method_name,
                error_code=exc.code.value,
                reason=exc.message,
            )

    @contextmanager
    def measure(self, method_name: str) -> Iterator[Measurement]:
        """Time the enclosed block and emit one datapoint on exit.

        The datapoint is emitted even when the block raises; the exception
        propagates unchanged.
        """
        measurement = Measurement(method_name)
        started = time.perf_counter_ns()
        try:
            yield measurement
        finally:
            measurement.duration = time.perf_counter_ns() - started
            self.emit(method_name, measurement.duration, measurement.response_size)

    def close(self) -> None:
        """Release this handle. Safe to call repeatedly."""
        if self._closed:
            return
        self._closed = True
        self._finalizer()

    def __enter__(self) -> "MetricsSender":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    async def __aenter__(self) -> "MetricsSender":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        self.close()

    def __repr__(self) -> str:  # pragma: no cover - introspection aid
        return f"MetricsSender(closed={self._closed}, dropped={self.dropped})"


__all__ = ["MetricsSender"]
