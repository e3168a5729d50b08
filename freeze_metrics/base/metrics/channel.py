"""Metrics channel: unbounded multi-producer, single-consumer queue.

Worker tasks (or threads) hold :class:`MetricsSender` handles and emit one
datapoint per completed call; the aggregator drains the single
:class:`MetricsReceiver`. The stream ends when the last sender is released.
Ordering is FIFO per sender with no promise across senders.
"""
from __future__ import annotations

from typing import Tuple

from .channel_parts import (
    ChannelState,
    Measurement,
    MetricsReceiver,
    MetricsSender,
    payload_size,
)


def open_channel() -> Tuple[MetricsSender, MetricsReceiver]:
    """Create a channel and return its first sender and its receiver."""
    state = ChannelState()
    return MetricsSender(state), MetricsReceiver(state)


__all__ = [
    "open_channel",
    "MetricsSender",
    "MetricsReceiver",
    "Measurement",
    "payload_size",
]
