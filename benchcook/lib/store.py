"""
Grouping store for parsed benchmark runs.

Runs are kept per workload name, then per day. Every run is kept; nothing is
deduplicated and insertion order within a day carries no meaning.

Copyright 2025 Advanced Micro Devices, Inc.
All rights reserved.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional

from benchcook.parsers.schemas import MeasurementRecord


@dataclass
class Workload:
    """A named benchmark scenario and its runs, keyed by day."""

    name: str
    days: Dict[str, List[MeasurementRecord]] = field(default_factory=dict)

    def add(self, day: str, record: MeasurementRecord):
        self.days.setdefault(day, []).append(record)

    def run_count(self) -> int:
        return sum(len(runs) for runs in self.days.values())


class GroupingStore:
    """
    Accumulates measurement records keyed by workload name and day.

    Built once per run: populated while log files are loaded, then consumed
    once by the cooking step. Day buckets only exist once a run was recorded
    for them.
    """

    def __init__(self):
        self._workloads: Dict[str, Workload] = {}

    def record(self, day: str, workload_name: str, measurement: MeasurementRecord):
        """
        Append a measurement to workload_name's runs for day.

        Args:
            day: Day identifier derived from the source file path
            workload_name: Benchmark name from the result line
            measurement: Parsed run
        """
        workload = self._workloads.get(workload_name)
        if workload is None:
            workload = Workload(name=workload_name)
            self._workloads[workload_name] = workload
        workload.add(day, measurement)

    def merge(self, other: "GroupingStore"):
        """Append every run held by other, preserving its insertion order."""
        for workload in other:
            for day, runs in workload.days.items():
                for run in runs:
                    self.record(day, workload.name, run)

    def get(self, workload_name: str) -> Optional[Workload]:
        return self._workloads.get(workload_name)

    def workloads(self) -> List[Workload]:
        return list(self._workloads.values())

    def run_count(self) -> int:
        """Total number of runs recorded across all workloads and days."""
        return sum(w.run_count() for w in self._workloads.values())

    def __iter__(self) -> Iterator[Workload]:
        return iter(self._workloads.values())

    def __len__(self) -> int:
        return len(self._workloads)

    def __contains__(self, workload_name) -> bool:
        return workload_name in self._workloads
