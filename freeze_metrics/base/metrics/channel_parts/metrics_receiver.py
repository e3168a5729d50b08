"""Consumer-side handle of the metrics channel.

Exactly one receiver exists per channel and only one task may await it at a
time. ``receive`` returns ``None`` once every sender has been released and the
queue is drained.
"""
from __future__ import annotations

import asyncio
from typing import AsyncIterator, Optional

from ...errors import ErrorCode, MetricsError
from ..datapoint import MetricDataPoint
from .channel_state import ChannelState, EndOfStream


class MetricsReceiver:
    """Single-consumer receiving handle (async iterable)."""

    __slots__ = ("_state", "_finished", "_waiting")

    def __init__(self, state: ChannelState) -> None:
        self._state = state
        self._finished = False
        self._waiting = False

    @property
    def finished(self) -> bool:
        """Whether end-of-stream was observed or the receiver was closed."""
        return self._finished

    async def receive(self) -> Optional[MetricDataPoint]:
        """Wait for the next datapoint; ``None`` signals end-of-stream."""
        if self._finished:
            return None
        if self._waiting:
            raise MetricsError(
                ErrorCode.RECEIVER_TAKEN,
                "receive() is already awaited by another task",
            )
        self._state.bind_loop(asyncio.get_running_loop())
        self._waiting = True
        try:
            item = await self._state.queue.get()
        finally:
            self._waiting = False
        if isinstance(item, EndOfStream):
            self._finished = True
            return None
        return item

    def close(self) -> int:
        """Drop the receiver; later sends fail and queued datapoints are discarded.

        Returns the number of datapoints discarded.
        """
        self._finished = True
        return self._state.close_receiver()

    def __aiter__(self) -> AsyncIterator[MetricDataPoint]:
        return self

    async def __anext__(self) -> MetricDataPoint:
        item = await self.receive()
        if item is None:
            raise StopAsyncIteration
        return item


__all__ = ["MetricsReceiver"]
