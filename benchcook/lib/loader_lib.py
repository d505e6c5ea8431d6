"""
Loading of bzip2-compressed benchmark logs and writing of the cooked report.

Input layout: <data_dir>/<day>/.../<file>. The first path component below
the data directory is the day every run found in that file belongs to.

Copyright 2025 Advanced Micro Devices, Inc.
All rights reserved.
"""

from concurrent.futures import ProcessPoolExecutor
from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional, Tuple
import bz2
import json
import logging
import os
import stat

from benchcook.lib.store import GroupingStore
from benchcook.parsers.benchmark_line import BenchmarkLineParser

log = logging.getLogger(__name__)


@dataclass
class LoadResult:
    """Bookkeeping for one loaded log file."""

    path: str
    day: str
    lines: int = 0
    matched: int = 0
    mismatched: int = 0
    error: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return self.error is None


def day_from_path(data_dir: str, path: str) -> Optional[str]:
    """
    Return the day a file under data_dir belongs to.

    The day is the first path component of path relative to data_dir. Returns
    None when path is data_dir itself or lies outside it.
    """
    rel = os.path.relpath(path, data_dir)
    parts = rel.split(os.sep)
    if rel == os.curdir or parts[0] == os.pardir:
        return None
    return parts[0]


def _is_regular_file(path: str) -> bool:
    try:
        return stat.S_ISREG(os.lstat(path).st_mode)
    except OSError:
        return False


def iter_input_files(data_dir: str) -> Iterator[Tuple[str, str]]:
    """
    Yield (path, day) for every regular file under data_dir.

    Directories and files are visited in sorted order so loading is
    deterministic. Symlinks and special files are skipped.
    """
    for root, dirs, files in os.walk(data_dir):
        dirs.sort()
        for name in sorted(files):
            path = os.path.join(root, name)
            if not _is_regular_file(path):
                log.debug(f"Skipping non-regular file {path}")
                continue
            day = day_from_path(data_dir, path)
            if day is None:
                continue
            yield path, day


def load_file(
    path: str, day: str, store: GroupingStore, parser: Optional[BenchmarkLineParser] = None
) -> LoadResult:
    """
    Parse every benchmark line of one bzip2 log into store under day.

    Lines without the Benchmark marker are skipped silently; marked lines that
    do not parse are logged and skipped. A file that cannot be opened or
    decompressed is logged and recorded in the returned LoadResult. Runs read
    before a mid-stream failure stay in the store.

    Args:
        path: Path to the compressed log file
        day: Day every run in this file belongs to
        store: Store receiving the parsed runs
        parser: Line parser (a default BenchmarkLineParser if omitted)

    Returns:
        LoadResult with line counters and the error, if any
    """
    parser = parser or BenchmarkLineParser()
    result = LoadResult(path=path, day=day)

    try:
        with bz2.open(path, "rt", encoding="utf-8", errors="replace", newline="\n") as f:
            for raw in f:
                result.lines += 1
                parsed = parser.parse(raw)
                if parsed.succeeded:
                    store.record(day, parsed.workload, parsed.record)
                    result.matched += 1
                elif parsed.mismatched:
                    log.warning(f"{parsed.line}: {parsed.error}")
                    result.mismatched += 1
    except (OSError, EOFError) as e:
        log.warning(f"{path}: {e}")
        result.error = str(e)

    log.debug(f"Loaded {path} (day {day}): {result.matched} runs from {result.lines} lines")
    return result


def _load_shard(item: Tuple[str, str]) -> Tuple[GroupingStore, LoadResult]:
    path, day = item
    shard = GroupingStore()
    result = load_file(path, day, shard)
    return shard, result


def load_tree(
    data_dir: str, store: Optional[GroupingStore] = None, jobs: int = 1
) -> Tuple[GroupingStore, List[LoadResult]]:
    """
    Load every log file under data_dir.

    With jobs > 1 files are parsed in worker processes, one store shard per
    file, and the shards are merged in discovery order so the result matches
    a sequential load.

    Args:
        data_dir: Root directory of the day-partitioned logs
        store: Store to populate (a new one if omitted)
        jobs: Number of worker processes

    Returns:
        Tuple of (store, per-file load results)
    """
    store = store if store is not None else GroupingStore()

    if not os.path.isdir(data_dir):
        log.warning(f"Data directory {data_dir} not found")
        return store, []

    items = list(iter_input_files(data_dir))
    log.info(f"Found {len(items)} log files under {data_dir}")

    results = []
    if jobs <= 1 or len(items) <= 1:
        for path, day in items:
            results.append(load_file(path, day, store))
    else:
        with ProcessPoolExecutor(max_workers=jobs) as pool:
            for shard, result in pool.map(_load_shard, items):
                store.merge(shard)
                results.append(result)

    return store, results


def pretty_json(report: Dict[str, str]) -> str:
    """Serialize the report as a tab-indented JSON object with sorted keys."""
    return json.dumps(report, indent="\t", sort_keys=True, ensure_ascii=False)


def write_report(report: Dict[str, str], output: str):
    """
    Write the report to output.

    Raises:
        TypeError, ValueError: If the report cannot be serialized
        OSError: If the output file cannot be written
    """
    data = pretty_json(report)
    with open(output, "w", encoding="utf-8") as f:
        f.write(data)
    log.info(f"Wrote {len(report)} workloads to {output}")
