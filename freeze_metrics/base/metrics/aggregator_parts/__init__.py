"""One-class-per-file parts for metrics aggregation."""

from .method_accumulator import MethodAccumulator
from .method_report import MethodReport

__all__ = ["MethodAccumulator", "MethodReport"]
