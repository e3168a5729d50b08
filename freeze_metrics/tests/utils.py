"""Shared helpers for metrics tests."""

from __future__ import annotations

import asyncio
from typing import Iterable, List, Optional

from freeze_metrics.base.metrics import (
    MetricDataPoint,
    MetricsReceiver,
    ReportSet,
    open_channel,
    run_aggregation,
)


def dp(method: str, size: int, duration: int) -> MetricDataPoint:
    """Short constructor taking size before duration, like the report columns."""
    return MetricDataPoint(method_name=method, duration=duration, response_size=size)


async def drain(receiver: MetricsReceiver) -> List[MetricDataPoint]:
    return [item async for item in receiver]


def aggregate_via_channel(datapoints: Iterable[MetricDataPoint]) -> ReportSet:
    """Push datapoints through a real channel and aggregate them."""

    async def _main() -> ReportSet:
        tx, rx = open_channel()
        with tx:
            for point in datapoints:
                tx.send(point)
        return await run_aggregation(rx)

    return asyncio.run(_main())


def counts(report_set: ReportSet, method: Optional[str] = None) -> int:
    if method is not None:
        return report_set[method].count
    return sum(r.count for r in report_set.values())
