"""One-class-per-file parts for the metrics channel."""

from .channel_state import END_OF_STREAM, ChannelState, EndOfStream
from .measurement import Measurement, payload_size
from .metrics_receiver import MetricsReceiver
from .metrics_sender import MetricsSender

__all__ = [
    "ChannelState",
    "EndOfStream",
    "END_OF_STREAM",
    "Measurement",
    "payload_size",
    "MetricsReceiver",
    "MetricsSender",
]
