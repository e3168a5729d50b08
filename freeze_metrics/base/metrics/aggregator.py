"""Metrics aggregation.

Groups datapoints by method name and folds them incrementally into one
:class:`MethodAccumulator` per method, so memory stays bounded by the number of
distinct methods rather than the length of the stream. Integer arithmetic only;
Python integers do not overflow, so totals stay exact over long runs.

The aggregation is a commutative, associative fold: any interleaving of
concurrent producers yields the same report set. Nothing here logs, prints or
performs I/O.
"""
from __future__ import annotations

from types import MappingProxyType
from typing import Dict, Iterable, Mapping

from .aggregator_parts import MethodAccumulator, MethodReport
from .channel_parts import MetricsReceiver
from .datapoint import MetricDataPoint

ReportSet = Mapping[str, MethodReport]


def observe(accumulators: Dict[str, MethodAccumulator], datapoint: MetricDataPoint) -> None:
    """Fold one datapoint into ``accumulators``, creating its entry on first sight."""
    acc = accumulators.get(datapoint.method_name)
    if acc is None:
        accumulators[datapoint.method_name] = MethodAccumulator(datapoint)
    else:
        acc.update(datapoint)


def finalize(accumulators: Mapping[str, MethodAccumulator]) -> ReportSet:
    """Compute averages and return an immutable report set."""
    return MappingProxyType({method: acc.report() for method, acc in accumulators.items()})


def aggregate(datapoints: Iterable[MetricDataPoint]) -> ReportSet:
    """Aggregate an already-materialized sequence of datapoints."""
    accumulators: Dict[str, MethodAccumulator] = {}
    for datapoint in datapoints:
        observe(accumulators, datapoint)
    return finalize(accumulators)


async def run_aggregation(receiver: MetricsReceiver) -> ReportSet:
    """Drain ``receiver`` until end-of-stream and return the report set.

    The only suspension point is the channel receive. Cancelling the awaiting
    task abandons whatever datapoints are still in flight.
    """
    accumulators: Dict[str, MethodAccumulator] = {}
    async for datapoint in receiver:
        observe(accumulators, datapoint)
    return finalize(accumulators)


__all__ = [
    "ReportSet",
    "observe",
    "finalize",
    "aggregate",
    "run_aggregation",
]
