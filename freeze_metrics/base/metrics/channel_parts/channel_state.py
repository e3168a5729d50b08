"""Shared state behind one metrics channel.

Holds the unbounded queue, the count of open sender handles and the receiver
liveness flag. All bookkeeping happens under a ``threading.RLock`` so sender
handles may live on worker threads as well as on event-loop tasks; the lock is
reentrant because a garbage-collected sender may release itself mid-push.
"""
from __future__ import annotations

import asyncio
from threading import RLock
from typing import Optional, Union

from ...errors import ErrorCode, MetricsError
from ..datapoint import MetricDataPoint


class EndOfStream:
    """Marker queued once after the last sender handle is released."""

    __slots__ = ()

    def __repr__(self) -> str:  # pragma: no cover - introspection aid
        return "END_OF_STREAM"


END_OF_STREAM = EndOfStream()

QueueItem = Union[MetricDataPoint, EndOfStream]


class ChannelState:
    """Queue plus handle accounting shared by senders and the receiver."""

    __slots__ = ("_queue", "_lock", "_open_senders", "_receiver_closed", "_loop")

    def __init__(self) -> None:
        self._queue: asyncio.Queue[QueueItem] = asyncio.Queue()
        self._lock = RLock()
        self._open_senders = 0
        self._receiver_closed = False
        self._loop: Optional[asyncio.AbstractEventLoop] = None

    @property
    def queue(self) -> "asyncio.Queue[QueueItem]":
        return self._queue

    @property
    def open_senders(self) -> int:
        with self._lock:
            return self._open_senders

    @property
    def receiver_closed(self) -> bool:
        with self._lock:
            return self._receiver_closed

    # -------------------------- Handle Accounting -------------------------- #
    def add_sender(self) -> None:
        with self._lock:
            self._open_senders += 1

    def release_sender(self) -> None:
        """Drop one sender handle; queue end-of-stream when it was the last."""
        with self._lock:
            self._open_senders -= 1
            if self._open_senders > 0 or self._receiver_closed:
                return
            try:
                self._deliver(END_OF_STREAM)
            except RuntimeError:
                # receiver's loop already shut down; nobody is left to notify
                self._receiver_closed = True

    def bind_loop(self, loop: asyncio.AbstractEventLoop) -> None:
        """Remember the loop the receiver awaits on for cross-thread sends."""
        with self._lock:
            if self._loop is None:
                self._loop = loop

    def close_receiver(self) -> int:
        """Mark the receiver dropped and discard queued items.

        Returns the number of datapoints discarded.
        """
        with self._lock:
            self._receiver_closed = True
            discarded = 0
            while not self._queue.empty():
                if isinstance(self._queue.get_nowait(), MetricDataPoint):
                    discarded += 1
            return discarded

    # -------------------------- Delivery -------------------------- #
    def push(self, datapoint: MetricDataPoint) -> None:
        """Enqueue a datapoint without blocking.

        Raises:
            MetricsError: ``CHANNEL_CLOSED`` when the receiver is gone.
        """
        with self._lock:
            if self._receiver_closed:
                raise MetricsError(
                    ErrorCode.CHANNEL_CLOSED,
                    "metrics receiver was dropped",
                    method_name=datapoint.method_name,
                )
            try:
                self._deliver(datapoint)
            except RuntimeError as exc:
                self._receiver_closed = True
                raise MetricsError(
                    ErrorCode.CHANNEL_CLOSED,
                    "metrics receiver event loop is closed",
                    method_name=datapoint.method_name,
                    raw=exc,
                ) from exc

    def _deliver(self, item: QueueItem) -> None:
        # caller holds the lock. Once a loop is bound every item, end-of-stream
        # included, goes through its callback queue so FIFO order holds across threads.
        if self._loop is None:
            self._queue.put_nowait(item)
        else:
            self._loop.call_soon_threadsafe(self._queue.put_nowait, item)


__all__ = ["ChannelState", "EndOfStream", "END_OF_STREAM"]
