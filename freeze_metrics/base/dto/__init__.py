"""Typed DTOs for the metrics subsystem (Pydantic models)."""

from .metrics_settings import MetricsSettings

__all__ = ["MetricsSettings"]
