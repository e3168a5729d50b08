"""
Normalized metrics error codes (taxonomy).

Values are lowercase snake_case and are considered a stable public contract for
logging and analytics.
"""
from __future__ import annotations

from enum import Enum


class ErrorCode(str, Enum):
    """Enumerated normalized error codes for the metrics subsystem."""

    CHANNEL_CLOSED = "channel_closed"
    INVALID_DATAPOINT = "invalid_datapoint"
    CONFIG_INVALID = "config_invalid"
    RECEIVER_TAKEN = "receiver_taken"


__all__ = ["ErrorCode"]
