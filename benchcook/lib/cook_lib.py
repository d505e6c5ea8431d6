"""
Cooking of grouped benchmark runs into the report.

cook_day reduces the runs of one (workload, day) to a DayAggregate,
cook_workload renders a workload's days as a multi-line blob and cook builds
the report mapping workload names to blobs.

Copyright 2025 Advanced Micro Devices, Inc.
All rights reserved.
"""

from typing import Dict, Sequence
import logging
import math

from benchcook.lib.store import GroupingStore, Workload
from benchcook.parsers.schemas import DayAggregate, MeasurementRecord

log = logging.getLogger(__name__)


def _truncating_div(total: int, count: int) -> int:
    """Integer division rounding toward zero."""
    quotient = abs(total) // count
    return quotient if total >= 0 else -quotient


def cook_day(runs: Sequence[MeasurementRecord]) -> DayAggregate:
    """
    Average the runs of one day after rejecting throughput outliers.

    The inclusion band is [mean - stddev, mean + stddev] (inclusive) of the
    throughput, with stddev the population standard deviation. All five fields
    are averaged over the runs inside the band. Byte counters use truncating
    integer division.

    The run closest to the mean always lies inside the band, so at least one
    run is kept for any non-empty input. Groups of two runs always keep both.

    Args:
        runs: All runs recorded for one workload on one day

    Returns:
        DayAggregate for the day

    Raises:
        ValueError: If runs is empty or no run falls inside the band
    """
    if not runs:
        raise ValueError("Cannot cook empty list of runs")

    n = len(runs)
    mean = sum(r.ops_sec for r in runs) / n
    sum2 = 0.0
    for r in runs:
        v = r.ops_sec - mean
        sum2 += v * v
    stddev = math.sqrt(sum2 / n)
    lo = mean - stddev
    hi = mean + stddev

    kept = [r for r in runs if lo <= r.ops_sec <= hi]
    count = len(kept)
    if count == 0:
        raise ValueError(
            f"No run within one stddev of the mean throughput "
            f"(runs={n}, mean={mean}, stddev={stddev})"
        )

    return DayAggregate(
        runs=n,
        count=count,
        mean_ops_sec=mean,
        stddev_ops_sec=stddev,
        ops_sec=sum(r.ops_sec for r in kept) / count,
        read_bytes=_truncating_div(sum(r.read_bytes for r in kept), count),
        write_bytes=_truncating_div(sum(r.write_bytes for r in kept), count),
        read_amp=sum(r.read_amp for r in kept) / count,
        write_amp=sum(r.write_amp for r in kept) / count,
    )


def cook_workload(workload: Workload) -> str:
    """
    Render a workload's days as "day,<aggregate>" lines.

    Days are sorted as plain strings, so day identifiers must sort
    lexicographically (e.g. YYYY-MM-DD). Every line, including the last, ends
    with a newline. A day whose runs cannot be cooked is logged and left out.
    """
    lines = []
    for day in sorted(workload.days):
        try:
            aggregate = cook_day(workload.days[day])
        except ValueError as e:
            log.error(f"{workload.name} {day}: {e}")
            continue
        if aggregate.rejected:
            log.debug(f"{workload.name} {day}: rejected {aggregate.rejected} of {aggregate.runs} runs as outliers")
        lines.append(f"{day},{aggregate.render()}\n")
    return "".join(lines)


def cook(store: GroupingStore) -> Dict[str, str]:
    """Build the report: workload name -> cooked blob."""
    report = {}
    for workload in store:
        report[workload.name] = cook_workload(workload)
    log.info(f"Cooked {len(report)} workloads from {store.run_count()} runs")
    return report
