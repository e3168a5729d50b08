"""Metrics session: channel plus aggregator task for one collection run.

Usage::

    async with MetricsSession() as session:
        async def worker(tx):
            with tx, tx.measure("get_logs") as m:
                m.record_payload(await fetch_logs())

        await asyncio.gather(*(worker(session.sender()) for _ in range(8)))
    print_report(session.reports)

Every handle returned by :meth:`MetricsSession.sender` must be released (use
it as a context manager); the aggregator only finishes once all of them are.
If the session body raises, the aggregator is cancelled and in-flight
datapoints are discarded; the exception propagates unchanged.
"""
from __future__ import annotations

import asyncio
import logging
import uuid
from contextlib import suppress
from typing import Any, Awaitable, Callable, Iterable, Optional

from ..errors import ErrorCode, MetricsError
from ..logging import LogContext, get_logger, log_event
from .aggregator import ReportSet, run_aggregation
from .channel import MetricsReceiver, MetricsSender, open_channel

_logger = get_logger("metrics.session")

Producer = Callable[[MetricsSender], Awaitable[Any]]


class MetricsSession:
    """Async context manager owning the channel and the aggregator task."""

    def __init__(self, *, run_id: Optional[str] = None) -> None:
        self.run_id = run_id or uuid.uuid4().hex[:12]
        self.reports: Optional[ReportSet] = None
        self._sender: Optional[MetricsSender] = None
        self._receiver: Optional[MetricsReceiver] = None
        self._task: Optional["asyncio.Task[ReportSet]"] = None

    @property
    def ctx(self) -> LogContext:
        return LogContext(run_id=self.run_id)

    def sender(self) -> MetricsSender:
        """Return a new sender handle for one producer."""
        if self._sender is None or self._sender.closed:
            raise MetricsError(ErrorCode.CHANNEL_CLOSED, "metrics session is not active")
        return self._sender.clone()

    async def __aenter__(self) -> "MetricsSession":
        self._sender, self._receiver = open_channel()
        self._task = asyncio.create_task(run_aggregation(self._receiver))
        log_event(_logger, "metrics.session.start", self.ctx)
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self._sender is None or self._receiver is None or self._task is None:
            raise MetricsError(ErrorCode.CHANNEL_CLOSED, "metrics session was never entered")
        self._sender.close()
        if exc_type is not None:
            self._task.cancel()
            with suppress(asyncio.CancelledError):
                await self._task
            discarded = self._receiver.close()
            log_event(
                _logger,
                "metrics.session.aborted",
                self.ctx,
                level=logging.WARNING,
                error=exc_type.__name__,
                discarded=discarded,
            )
            return
        self.reports = await self._task
        log_event(
            _logger,
            "metrics.session.finish",
            self.ctx,
            methods=len(self.reports),
            observations=sum(r.count for r in self.reports.values()),
        )


async def collect_reports(producers: Iterable[Producer], *, run_id: Optional[str] = None) -> ReportSet:
    """Run producers concurrently, each with its own sender, and aggregate.

    Each producer is called with a dedicated :class:`MetricsSender` that is
    released when the producer returns or raises.
    """

    async def _run(producer: Producer, tx: MetricsSender) -> Any:
        with tx:
            return await producer(tx)

    async with MetricsSession(run_id=run_id) as session:
        await asyncio.gather(*(_run(p, session.sender()) for p in producers))
    if session.reports is None:
        raise MetricsError(ErrorCode.CHANNEL_CLOSED, "metrics session ended without reports")
    return session.reports


__all__ = ["MetricsSession", "collect_reports", "Producer"]
