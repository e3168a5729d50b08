"""MetricsSession and collect_reports orchestration."""
from __future__ import annotations

import asyncio
import json

import pytest

from freeze_metrics.base.errors import ErrorCode, MetricsError
from freeze_metrics.base.metrics import MetricsSession, collect_reports


def test_collect_reports_runs_producers_concurrently():
    async def fetch_blocks(tx):
        for n in range(10):
            with tx.measure("get_block") as m:
                await asyncio.sleep(0)
                m.record_payload({"number": n})

    async def fetch_logs(tx):
        for _ in range(4):
            tx.emit("get_logs", duration=2_000, response_size=512)
            await asyncio.sleep(0)

    reports = asyncio.run(collect_reports([fetch_blocks, fetch_logs, fetch_logs]))
    assert reports["get_block"].count == 10
    assert reports["get_logs"].count == 8
    assert reports["get_logs"].avg_size == 512
    assert reports["get_logs"].total_duration == 16_000


def test_collect_reports_with_no_producers_is_empty():
    assert dict(asyncio.run(collect_reports([]))) == {}


def test_session_logs_start_and_finish(capsys):
    async def main():
        async with MetricsSession(run_id="run-1") as session:
            with session.sender() as tx:
                tx.emit("eth_call", duration=10, response_size=20)
        return session

    session = asyncio.run(main())
    assert session.reports["eth_call"].total_size == 20
    events = [json.loads(line) for line in capsys.readouterr().err.strip().splitlines()]
    finish = [e for e in events if e.get("event") == "metrics.session.finish"]
    assert finish and finish[0]["run_id"] == "run-1"
    assert finish[0]["methods"] == 1 and finish[0]["observations"] == 1
    assert any(e.get("event") == "metrics.session.start" for e in events)


def test_failing_body_cancels_aggregation_and_propagates():
    async def main():
        session = MetricsSession()
        with pytest.raises(ValueError):
            async with session:
                tx = session.sender()
                tx.emit("m", duration=1, response_size=1)
                raise ValueError("collection failed")
        # the producer still holds an open handle; emitting is now a silent drop
        tx.emit("m", duration=1, response_size=1)
        return session, tx

    session, tx = asyncio.run(main())
    assert session.reports is None
    assert tx.dropped == 1


def test_sender_outside_active_session_is_rejected():
    session = MetricsSession()
    with pytest.raises(MetricsError) as info:
        session.sender()
    assert info.value.code is ErrorCode.CHANNEL_CLOSED


def test_exit_without_enter_raises_metrics_error():
    session = MetricsSession()
    with pytest.raises(MetricsError) as info:
        asyncio.run(session.__aexit__(None, None, None))
    assert info.value.code is ErrorCode.CHANNEL_CLOSED
