"""Aggregation correctness: per-method folds, commutativity and isolation."""
from __future__ import annotations

import asyncio
import itertools
import random

import pytest

from freeze_metrics.base.metrics import (
    MethodAccumulator,
    MethodReport,
    aggregate,
    open_channel,
    run_aggregation,
)
from freeze_metrics.tests.utils import aggregate_via_channel, counts, dp

SECOND = 1_000_000_000


def test_get_logs_example_scenario():
    reports = aggregate_via_channel(
        [
            dp("get_logs", 100, 1 * SECOND),
            dp("get_logs", 300, 3 * SECOND),
            dp("get_logs", 200, 2 * SECOND),
        ]
    )
    assert reports["get_logs"] == MethodReport(
        max_size=300,
        min_size=100,
        max_time=3 * SECOND,
        min_time=1 * SECOND,
        avg_size=200,
        avg_time=2 * SECOND,
        total_duration=6 * SECOND,
        total_size=600,
        count=3,
    )


def test_single_observation_per_method_is_isolated():
    reports = aggregate_via_channel([dp("a", 10, 5), dp("b", 20, 7)])
    assert set(reports) == {"a", "b"}
    a, b = reports["a"], reports["b"]
    assert a.min_size == a.max_size == a.avg_size == a.total_size == 10
    assert a.min_time == a.max_time == a.avg_time == a.total_duration == 5
    assert b.min_size == b.max_size == b.avg_size == b.total_size == 20
    assert b.min_time == b.max_time == b.avg_time == b.total_duration == 7


def test_averages_use_floor_division():
    reports = aggregate([dp("m", 1, 1), dp("m", 2, 2)])
    report = reports["m"]
    assert report.total_size == 3 and report.avg_size == 1
    assert report.total_duration == 3 and report.avg_time == 1
    assert report.min_size <= report.avg_size <= report.max_size
    assert report.min_time <= report.avg_time <= report.max_time


def test_empty_stream_yields_empty_report_set():
    assert dict(aggregate_via_channel([])) == {}
    assert dict(aggregate([])) == {}


def test_report_set_is_read_only():
    reports = aggregate([dp("m", 1, 1)])
    with pytest.raises(TypeError):
        reports["other"] = reports["m"]  # type: ignore[index]


def test_every_permutation_gives_identical_reports():
    points = [dp("a", 5, 50), dp("b", 7, 3), dp("a", 1, 90), dp("a", 9, 10), dp("b", 2, 8)]
    expected = dict(aggregate(points))
    for perm in itertools.permutations(points):
        assert dict(aggregate(perm)) == expected


def test_shuffled_large_stream_matches_reference_values():
    rng = random.Random(1234)
    points = [dp(rng.choice("xyz"), rng.randrange(0, 10_000), rng.randrange(0, 10**12)) for _ in range(2_000)]
    shuffled = points[:]
    rng.shuffle(shuffled)
    assert dict(aggregate(points)) == dict(aggregate_via_channel(shuffled))

    for method, report in aggregate(points).items():
        sizes = [p.response_size for p in points if p.method_name == method]
        times = [p.duration for p in points if p.method_name == method]
        assert report.max_size == max(sizes) and report.min_size == min(sizes)
        assert report.total_size == sum(sizes)
        assert report.avg_size == sum(sizes) // len(sizes)
        assert report.max_time == max(times) and report.min_time == min(times)
        assert report.total_duration == sum(times)
        assert report.avg_time == sum(times) // len(times)
        assert report.count == len(sizes)


def test_other_methods_do_not_influence_a_method():
    alone = aggregate([dp("a", 3, 30), dp("a", 4, 40)])
    mixed = aggregate([dp("b", 10**9, 10**15), dp("a", 3, 30), dp("b", 0, 0), dp("a", 4, 40)])
    assert alone["a"] == mixed["a"]


def test_totals_do_not_overflow_fixed_width_limits():
    huge = 2**64
    reports = aggregate([dp("m", huge, huge), dp("m", huge, huge)])
    assert reports["m"].total_size == 2 * huge
    assert reports["m"].avg_time == huge


def test_accumulator_merge_matches_single_fold():
    left_points = [dp("m", 4, 40), dp("m", 8, 10)]
    right_points = [dp("m", 1, 99), dp("m", 6, 5), dp("m", 2, 7)]
    left = MethodAccumulator(left_points[0])
    for p in left_points[1:]:
        left.update(p)
    right = MethodAccumulator(right_points[0])
    for p in right_points[1:]:
        right.update(p)
    left.merge(right)
    assert left.report() == aggregate(left_points + right_points)["m"]


def test_concurrent_producers_lose_and_duplicate_nothing():
    n_producers, per_producer = 12, 250

    async def producer(tx, index):
        with tx:
            for k in range(per_producer):
                tx.emit(f"method_{index % 3}", duration=k + 1, response_size=index * 1_000 + k)
                if k % 25 == 0:
                    await asyncio.sleep(0)

    async def main():
        tx, rx = open_channel()
        aggregator = asyncio.create_task(run_aggregation(rx))
        with tx:
            producers = [producer(tx.clone(), i) for i in range(n_producers)]
        await asyncio.gather(*producers)
        return await aggregator

    reports = asyncio.run(main())
    assert set(reports) == {"method_0", "method_1", "method_2"}
    assert counts(reports) == n_producers * per_producer
    for method, report in reports.items():
        assert report.count == (n_producers // 3) * per_producer
    expected_total = sum(i * 1_000 + k for i in range(0, n_producers, 3) for k in range(per_producer))
    assert reports["method_0"].total_size == expected_total
